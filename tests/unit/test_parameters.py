"""
Unit tests for the SIMM parameter tables.

Tests cover:
- Table DataFrames (shape, key columns)
- Provider lookups for each risk class
- Model-wide weights, thresholds and curvature constants
"""

from decimal import Decimal

import polars as pl
import pytest
from scipy.stats import norm

from simm_calc.contracts.errors import ERROR_MISSING_PARAMETER, StructuralError
from simm_calc.contracts.protocols import ParametersProvider
from simm_calc.data.tables import (
    PARAMETER_PROVIDERS,
    Z_SCORE_99,
    Z_SCORE_995,
    correlation_risk,
    curvature_lambda,
    curvature_scale,
    get_commodity_table,
    get_credit_table,
    get_equity_table,
    get_fx_table,
    get_rates_table,
    get_risk_correlation_table,
    provider,
    scaled_days,
    threshold,
    weight_risk,
    weight_volatility,
)
from simm_calc.domain.amount import Amount
from simm_calc.domain.buckets import BucketCreditQualifying, BucketEquity
from simm_calc.domain.currency import EUR, JPY, USD, Currency, CurrencyPair
from simm_calc.domain.enums import Curve, SensitivityCategory, SensitivityRisk
from simm_calc.domain.sensitivity import Sensitivity
from simm_calc.domain.tenor import Tenor


ISIN_A = "ISIN:XS0000000001"
ISIN_B = "ISIN:XS0000000002"


# =============================================================================
# DATAFRAMES
# =============================================================================


class TestTables:
    """Tests for the parameter DataFrames."""

    @pytest.mark.parametrize("factory,rows", [
        (get_commodity_table, 17),
        (get_credit_table, 16),
        (get_equity_table, 13),
        (get_fx_table, 9),
        (get_rates_table, 36),
        (get_risk_correlation_table, 36),
    ])
    def test_row_counts(self, factory, rows):
        df = factory()

        assert isinstance(df, pl.DataFrame)
        assert df.height == rows

    def test_equity_table_places_residual_last(self):
        df = get_equity_table()

        assert df["bucket"][-1] == "Residual"
        assert df["risk_weight_delta"][0] == pytest.approx(24.0)

    def test_risk_correlation_table_is_symmetric(self):
        df = get_risk_correlation_table()

        forward = df.filter((pl.col("risk_1") == "Fx") & (pl.col("risk_2") == "Rates"))["correlation"][0]
        backward = df.filter((pl.col("risk_1") == "Rates") & (pl.col("risk_2") == "Fx"))["correlation"][0]

        assert forward == backward == pytest.approx(0.26)


# =============================================================================
# PROVIDERS
# =============================================================================


class TestProviders:
    """Tests for per-risk-class parameter providers."""

    def test_every_risk_has_a_provider(self):
        for risk in SensitivityRisk:
            assert isinstance(provider(risk), ParametersProvider)

        assert set(PARAMETER_PROVIDERS) == set(SensitivityRisk)

    def test_unknown_risk_raises(self):
        with pytest.raises(StructuralError) as excinfo:
            provider("Crypto")

        assert excinfo.value.code == ERROR_MISSING_PARAMETER

    def test_equity_lookups(self):
        sensitivity = Sensitivity.equity_delta("ACME", BucketEquity.of(1), Amount.of(USD, 1))
        equity = provider(SensitivityRisk.EQUITY)

        assert equity.risk_weight_delta(sensitivity) == Decimal(24)
        assert equity.correlation_sensitivity(sensitivity, sensitivity) == Decimal("0.14")
        assert equity.correlation_bucket(BucketEquity.of(1), BucketEquity.of(2)) == Decimal("0.16")
        assert equity.correlation_bucket(BucketEquity.of(1), BucketEquity.residual()) == Decimal(0)

    def test_credit_issuer_correlation(self):
        bucket = BucketCreditQualifying.of(3)
        amount = Amount.of(USD, 1)
        first = Sensitivity.credit_qualifying_delta(ISIN_A, bucket, Tenor.Y1, False, amount)
        same = Sensitivity.credit_qualifying_delta(ISIN_A, bucket, Tenor.Y5, False, amount)
        other = Sensitivity.credit_qualifying_delta(ISIN_B, bucket, Tenor.Y1, False, amount)
        credit = provider(SensitivityRisk.CREDIT_QUALIFYING)

        assert credit.correlation_sensitivity(first, same) > credit.correlation_sensitivity(first, other)

    def test_credit_correlation_across_buckets_raises(self):
        amount = Amount.of(USD, 1)
        first = Sensitivity.credit_qualifying_delta(ISIN_A, BucketCreditQualifying.of(1), Tenor.Y1, False, amount)
        second = Sensitivity.credit_qualifying_delta(ISIN_A, BucketCreditQualifying.of(2), Tenor.Y1, False, amount)

        with pytest.raises(ValueError):
            provider(SensitivityRisk.CREDIT_QUALIFYING).correlation_sensitivity(first, second)

    def test_rates_curve_difference_scales_tenor_correlation(self):
        amount = Amount.of(USD, 1)
        ois = Sensitivity.interest_rate_delta(USD, Tenor.Y5, Curve.OIS, amount)
        libor = Sensitivity.interest_rate_delta(USD, Tenor.Y5, Curve.LIBOR_3M, amount)
        rates = provider(SensitivityRisk.RATES)

        assert rates.correlation_sensitivity(ois, ois) == Decimal(1)
        assert rates.correlation_sensitivity(ois, libor) == Decimal("0.98")

    def test_rates_subrisk_correlations(self):
        amount = Amount.of(USD, 1)
        ir = Sensitivity.interest_rate_delta(USD, Tenor.Y5, Curve.OIS, amount)
        inflation = Sensitivity.inflation_delta(USD, amount)
        ccb = Sensitivity.cross_currency_basis(USD, amount)
        rates = provider(SensitivityRisk.RATES)

        assert rates.correlation_sensitivity(ir, inflation) == Decimal("0.33")
        assert rates.correlation_sensitivity(ir, ccb) == Decimal("0.19")
        assert rates.correlation_sensitivity(inflation, ccb) == Decimal("0.19")

    def test_rates_weights_follow_volatility(self):
        amount = Amount.of(USD, 1)
        rates = provider(SensitivityRisk.RATES)

        assert rates.risk_weight_delta(Sensitivity.interest_rate_delta(USD, Tenor.Y5, Curve.OIS, amount)) == Decimal(51)
        assert rates.risk_weight_delta(Sensitivity.interest_rate_delta(JPY, Tenor.Y5, Curve.OIS, amount)) == Decimal(20)
        assert rates.risk_weight_delta(Sensitivity.inflation_delta(USD, amount)) == Decimal(48)
        assert rates.risk_weight_delta(Sensitivity.cross_currency_basis(USD, amount)) == Decimal(21)

    def test_fx_thresholds_by_category(self):
        fx = provider(SensitivityRisk.FX)

        assert fx.threshold_delta(USD) == Decimal(9700)
        assert fx.threshold_delta(Currency.parse("ZAR")) == Decimal(2900)
        assert fx.threshold_delta(Currency.parse("ARS")) == Decimal(450)
        assert fx.threshold_vega(CurrencyPair.of(EUR, USD)) == Decimal(2000)

    def test_fx_threshold_rejects_wrong_identifier(self):
        with pytest.raises(ValueError):
            provider(SensitivityRisk.FX).threshold_delta(CurrencyPair.of(EUR, USD))


# =============================================================================
# MODEL PARAMETERS
# =============================================================================


class TestModelParameters:
    """Tests for model-wide weights, thresholds and curvature constants."""

    def test_risk_correlation(self):
        assert correlation_risk(SensitivityRisk.FX, SensitivityRisk.RATES) == Decimal("0.26")
        assert correlation_risk(SensitivityRisk.RATES, SensitivityRisk.FX) == Decimal("0.26")
        assert correlation_risk(SensitivityRisk.EQUITY, SensitivityRisk.EQUITY) == Decimal(1)

    def test_threshold_scaled_to_millions_of_usd(self):
        result = threshold(SensitivityRisk.EQUITY, SensitivityCategory.DELTA, BucketEquity.of(1))

        assert result == Amount.of(USD, Decimal("8400000"))

    def test_threshold_of_curvature_is_zero(self):
        result = threshold(SensitivityRisk.EQUITY, SensitivityCategory.CURVATURE, BucketEquity.of(1))

        assert result.is_zero()

    def test_weight_risk_by_category(self):
        sensitivity = Sensitivity.equity_delta("ACME", BucketEquity.of(1), Amount.of(USD, 1))

        assert weight_risk(SensitivityCategory.DELTA, sensitivity) == Decimal(24)
        assert weight_risk(SensitivityCategory.CURVATURE, sensitivity) == Decimal(1)
        assert weight_risk(SensitivityCategory.BASE_CORRELATION, sensitivity) == Decimal(19)

    def test_weight_volatility_is_one_for_rates_and_credit(self):
        amount = Amount.of(USD, 1)

        assert weight_volatility(Sensitivity.interest_rate_vega(USD, Tenor.Y1, amount)) == Decimal(1)
        assert weight_volatility(
            Sensitivity.credit_qualifying_vega(ISIN_A, BucketCreditQualifying.of(1), Tenor.Y1, amount)
        ) == Decimal(1)

    @pytest.mark.parametrize("days,expected", [
        (Decimal(7), Decimal("0.5")),
        (Decimal(14), Decimal("0.5")),
        (Decimal(28), Decimal("0.25")),
    ])
    def test_scaled_days(self, days, expected):
        assert scaled_days(days) == expected

    def test_scaled_days_rejects_non_positive(self):
        with pytest.raises(ValueError):
            scaled_days(Decimal(0))

    def test_curvature_lambda_at_zero(self):
        assert curvature_lambda(Decimal(0)) == Decimal("5.634896601021215138443858039")

    def test_curvature_lambda_fully_offset(self):
        """theta = -1 leaves lambda = 1."""
        assert curvature_lambda(Decimal(-1)) == Decimal(1)

    def test_z_scores_keep_full_precision(self):
        assert Z_SCORE_99 == Decimal("2.32634787404084110089")
        assert Z_SCORE_995 == Decimal("2.57582930354890076098")

    @pytest.mark.parametrize("z_score,level", [(Z_SCORE_99, 0.99), (Z_SCORE_995, 0.995)])
    def test_z_scores_match_normal_quantiles(self, z_score, level):
        assert float(z_score) == pytest.approx(norm.ppf(level), rel=1e-12)

    def test_curvature_scale(self):
        assert curvature_scale(SensitivityRisk.RATES) == 1 / (Decimal("0.62") * Decimal("0.62"))
        assert curvature_scale(SensitivityRisk.EQUITY) == Decimal(1)
