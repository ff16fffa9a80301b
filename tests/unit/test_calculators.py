"""
Unit tests for the category margin calculators.

Expected values are computed by hand from the parameter tables:
- Equity bucket 1: risk weight 24, intra-bucket correlation 0.14,
  delta threshold 8.4 million
- Equity bucket 2: risk weight 30, correlation with bucket 1 of 0.16
- Equity residual: risk weight 34
- Rates regular-volatility 5y: risk weight 51, cross-currency correlation 0.21
- Base correlation: risk weight 19, pairwise correlation 0.05
"""

from decimal import Decimal

import pytest

from simm_calc.contracts.errors import ERROR_UNDEFINED_VALUE, StructuralError
from simm_calc.domain.amount import Amount
from simm_calc.domain.buckets import BucketEquity
from simm_calc.domain.currency import EUR, USD
from simm_calc.domain.enums import Curve, SensitivityCategory, SensitivityRisk
from simm_calc.domain.sensitivity import Sensitivity
from simm_calc.domain.tenor import Tenor
from simm_calc.engine.calculators import (
    CALCULATORS,
    BaseCorrelationCalculator,
    CurvatureCalculator,
    WeightedCalculator,
    calculate_category,
    threshold_factor,
)

# (Z995^2 - 1) at theta = 0, to 28 significant digits
LAMBDA_0 = Decimal("5.634896601021215138443858039")


def usd(value) -> Amount:
    return Amount.of(USD, value)


def equity_delta(qualifier, bucket, value):
    return Sensitivity.netted_equity(SensitivityCategory.DELTA, qualifier, bucket, usd(value))


def equity_curvature(qualifier, bucket, value):
    return Sensitivity.netted_equity(SensitivityCategory.CURVATURE, qualifier, bucket, usd(value))


# =============================================================================
# THRESHOLD FACTOR
# =============================================================================


class TestThresholdFactor:
    """Tests for the concentration threshold factor."""

    def test_below_threshold_is_one(self, rates):
        factor = threshold_factor(
            USD, rates, SensitivityRisk.EQUITY, SensitivityCategory.DELTA,
            [equity_delta("ACME", BucketEquity.of(1), 1000)],
        )

        assert factor == Decimal(1)

    def test_above_threshold(self, rates):
        """33.6 million against a threshold of 8.4 million gives sqrt(4)."""
        factor = threshold_factor(
            USD, rates, SensitivityRisk.EQUITY, SensitivityCategory.DELTA,
            [equity_delta("ACME", BucketEquity.of(1), 33_600_000)],
        )

        assert factor == Decimal(2)

    def test_uses_absolute_sum(self, rates):
        factor = threshold_factor(
            USD, rates, SensitivityRisk.EQUITY, SensitivityCategory.DELTA,
            [equity_delta("ACME", BucketEquity.of(1), -33_600_000)],
        )

        assert factor == Decimal(2)

    def test_threshold_converted_to_calculation_currency(self, rates):
        """The threshold is scaled by the USD/EUR rate, so the factor is unchanged."""
        amount = rates.convert(usd(33_600_000), EUR)
        sensitivity = Sensitivity.netted_equity(SensitivityCategory.DELTA, "ACME", BucketEquity.of(1), amount)

        factor = threshold_factor(EUR, rates, SensitivityRisk.EQUITY, SensitivityCategory.DELTA, [sensitivity])

        assert factor == pytest.approx(Decimal(2))

    def test_rates_delta_ignores_cross_currency_basis(self, rates):
        ccb = Sensitivity.netted_cross_currency_basis(USD, usd(10_000_000_000))

        factor = threshold_factor(USD, rates, SensitivityRisk.RATES, SensitivityCategory.DELTA, [ccb])

        assert factor == Decimal(1)

    def test_mixed_threshold_identifiers_raise(self, rates):
        with pytest.raises(ValueError):
            threshold_factor(
                USD, rates, SensitivityRisk.EQUITY, SensitivityCategory.DELTA,
                [equity_delta("ACME", BucketEquity.of(1), 1), equity_delta("ACME", BucketEquity.of(2), 1)],
            )


# =============================================================================
# WEIGHTED CALCULATOR
# =============================================================================


class TestWeightedCalculator:
    """Tests for delta and vega aggregation."""

    def test_single_sensitivity(self, rates):
        margin = WeightedCalculator().calculate(
            USD, rates, SensitivityRisk.EQUITY, SensitivityCategory.DELTA,
            [equity_delta("ACME", BucketEquity.of(1), 1000)],
        )

        assert margin.value == usd(24000)
        assert margin.identifier == "Delta"
        assert margin.children[0].children[0].value == usd(24000)

    def test_intra_bucket_correlation(self, rates):
        """24000^2 + 48000^2 + 2 * 24000 * 48000 * 0.14 = 3,202,560,000."""
        margin = WeightedCalculator().calculate(
            USD, rates, SensitivityRisk.EQUITY, SensitivityCategory.DELTA,
            [
                equity_delta("ACME", BucketEquity.of(1), 1000),
                equity_delta("BETA", BucketEquity.of(1), 2000),
            ],
        )

        bucket = margin.children[0]
        assert bucket.value.value == Decimal(3202560000).sqrt()
        assert margin.value.value == pytest.approx(Decimal(3202560000).sqrt())
        assert [w.identifier for w in bucket.children] == ["ACME", "BETA"]

    def test_cross_bucket_correlation(self, rates):
        """24000^2 + 30000^2 + 2 * 24000 * 30000 * 0.16 = 1,706,400,000."""
        margin = WeightedCalculator().calculate(
            USD, rates, SensitivityRisk.EQUITY, SensitivityCategory.DELTA,
            [
                equity_delta("ACME", BucketEquity.of(2), 1000),
                equity_delta("BETA", BucketEquity.of(1), 1000),
            ],
        )

        assert margin.value.value == pytest.approx(Decimal(1706400000).sqrt())
        assert [b.identifier for b in margin.children] == [
            BucketEquity.of(1).description,
            BucketEquity.of(2).description,
        ]

    def test_residual_added_uncorrelated(self, rates):
        margin = WeightedCalculator().calculate(
            USD, rates, SensitivityRisk.EQUITY, SensitivityCategory.DELTA,
            [
                equity_delta("ACME", BucketEquity.residual(), 1000),
                equity_delta("BETA", BucketEquity.of(1), 1000),
            ],
        )

        assert margin.value == usd(58000)
        assert margin.children[-1].identifier == "Residual"

    def test_concentration_scales_weighting(self, rates):
        margin = WeightedCalculator().calculate(
            USD, rates, SensitivityRisk.EQUITY, SensitivityCategory.DELTA,
            [equity_delta("ACME", BucketEquity.of(1), 33_600_000)],
        )

        assert margin.value == usd(33_600_000 * 24 * 2)

    def test_rates_cross_currency(self, rates):
        """Two currencies at 51000 each, correlated at 0.21."""
        sensitivities = [
            Sensitivity.netted_interest_rate(SensitivityCategory.DELTA, USD, Tenor.Y5, "Ois", usd(1000)),
            Sensitivity.netted_interest_rate(SensitivityCategory.DELTA, EUR, Tenor.Y5, "Ois", usd(1000)),
        ]

        margin = WeightedCalculator().calculate(
            USD, rates, SensitivityRisk.RATES, SensitivityCategory.DELTA, sensitivities
        )

        assert margin.value.value == pytest.approx(Decimal(6294420000).sqrt())
        assert [b.identifier for b in margin.children] == ["EUR", "USD"]

    def test_rates_weightings_ordered_by_tenor(self, rates):
        sensitivities = [
            Sensitivity.netted_interest_rate(SensitivityCategory.DELTA, USD, Tenor.Y10, Curve.OIS.label, usd(1)),
            Sensitivity.netted_interest_rate(SensitivityCategory.DELTA, USD, Tenor.M3, Curve.OIS.label, usd(1)),
        ]

        margin = WeightedCalculator().calculate(
            USD, rates, SensitivityRisk.RATES, SensitivityCategory.DELTA, sensitivities
        )

        assert [w.identifier for w in margin.children[0].children] == ["InterestRate, 3m, Ois", "InterestRate, 10y, Ois"]


# =============================================================================
# BASE CORRELATION AND CURVATURE
# =============================================================================


class TestBaseCorrelationCalculator:
    """Tests for the credit base correlation margin."""

    def test_two_qualifiers(self, rates):
        """1900^2 + 3800^2 + 2 * 1900 * 3800 * 0.05 = 18,772,000."""
        sensitivities = [
            Sensitivity.netted_base_correlation("CDX IG", usd(100)),
            Sensitivity.netted_base_correlation("iTraxx", usd(200)),
        ]

        margin = BaseCorrelationCalculator().calculate(
            USD, rates, SensitivityRisk.CREDIT_QUALIFYING, SensitivityCategory.BASE_CORRELATION, sensitivities
        )

        assert margin.value.value == Decimal(18772000).sqrt()
        assert len(margin.children) == 1
        assert margin.children[0].identifier == "Common"


class TestCurvatureCalculator:
    """Tests for the curvature margin."""

    def test_positive_curvature(self, rates):
        margin = CurvatureCalculator().calculate(
            USD, rates, SensitivityRisk.EQUITY, SensitivityCategory.CURVATURE,
            [equity_curvature("ACME", BucketEquity.of(1), 1000)],
        )

        expected = Decimal(1000) + Decimal(1000) * LAMBDA_0
        assert margin.value.value == pytest.approx(expected)

    def test_negative_curvature_floored_at_zero(self, rates):
        margin = CurvatureCalculator().calculate(
            USD, rates, SensitivityRisk.EQUITY, SensitivityCategory.CURVATURE,
            [equity_curvature("ACME", BucketEquity.of(1), -1000)],
        )

        assert margin.value.is_zero()
        assert margin.children[0].value == usd(1000)

    def test_residual_aggregated_separately(self, rates):
        """Each part is cvr + lambda(0) * kappa: 2000 for bucket 1, 1000 for the residual."""
        margin = CurvatureCalculator().calculate(
            USD, rates, SensitivityRisk.EQUITY, SensitivityCategory.CURVATURE,
            [
                equity_curvature("ACME", BucketEquity.residual(), 1000),
                equity_curvature("BETA", BucketEquity.of(1), 2000),
            ],
        )

        expected = (Decimal(2000) + Decimal(2000) * LAMBDA_0) + (Decimal(1000) + Decimal(1000) * LAMBDA_0)
        assert margin.value.value == pytest.approx(expected)
        assert [b.identifier for b in margin.children] == [BucketEquity.of(1).description, "Residual"]

    def test_residual_floored_on_its_own(self, rates):
        """A negative residual floors to zero without offsetting the non-residual part."""
        calculator = CurvatureCalculator()
        non_residual = [equity_curvature("BETA", BucketEquity.of(1), 2000)]

        alone = calculator.calculate(USD, rates, SensitivityRisk.EQUITY, SensitivityCategory.CURVATURE, non_residual)
        combined = calculator.calculate(
            USD, rates, SensitivityRisk.EQUITY, SensitivityCategory.CURVATURE,
            [*non_residual, equity_curvature("ACME", BucketEquity.residual(), -1000)],
        )

        assert combined.value == alone.value
        assert combined.children[-1].value == usd(1000)


class TestDispatch:
    """Tests for calculator dispatch by category."""

    def test_calculators_cover_every_category(self):
        assert set(CALCULATORS) == set(SensitivityCategory)
        assert CALCULATORS[SensitivityCategory.DELTA] is CALCULATORS[SensitivityCategory.VEGA]

    def test_calculate_category(self, rates):
        margin = calculate_category(
            USD, rates, SensitivityRisk.EQUITY, SensitivityCategory.DELTA,
            [equity_delta("ACME", BucketEquity.of(1), 1000)],
        )

        assert margin.category == SensitivityCategory.DELTA

    def test_undefined_category(self, rates):
        with pytest.raises(StructuralError) as excinfo:
            calculate_category(USD, rates, SensitivityRisk.EQUITY, "Gamma", [])

        assert excinfo.value.code == ERROR_UNDEFINED_VALUE
        assert excinfo.value.error.actual_value == "Gamma"
