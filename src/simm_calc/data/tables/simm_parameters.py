"""
SIMM model constants and parameter dispatch.

Every risk class has its own parameter provider (risk weights, bucket and
sensitivity correlations, thresholds); PARAMETER_PROVIDERS maps each
SensitivityRisk to its provider. The functions in this module add the
model-wide parameters on top of the providers: risk and volatility
weights per category, threshold amounts, the inter-risk correlations and
the curvature constants.

Usage:
    from simm_calc.data.tables.simm_parameters import weight_risk, correlation_risk

    weight = weight_risk(SensitivityCategory.DELTA, sensitivity)
    rho = correlation_risk(SensitivityRisk.EQUITY, SensitivityRisk.RATES)
"""

from __future__ import annotations

from decimal import Decimal

import polars as pl

from simm_calc.contracts.errors import ERROR_MISSING_PARAMETER, StructuralError, structural_error
from simm_calc.contracts.protocols import ParametersProvider
from simm_calc.data.tables.simm_commodity import CommodityParameters
from simm_calc.data.tables.simm_credit import CreditNonQualifyingParameters, CreditQualifyingParameters
from simm_calc.data.tables.simm_equity import EquityParameters
from simm_calc.data.tables.simm_fx import FxParameters
from simm_calc.data.tables.simm_rates import RatesParameters
from simm_calc.domain.amount import Amount
from simm_calc.domain.currency import USD
from simm_calc.domain.enums import Product, SensitivityCategory, SensitivityRisk


# =============================================================================
# MODEL CONSTANTS
# =============================================================================

CORRELATION_BASE: Decimal = Decimal("0.05")

CURVATURE_CAP: Decimal = Decimal(1)
CURVATURE_DAYS: Decimal = Decimal(14)
CURVATURE_FACTOR: Decimal = Decimal("0.5")

MILLION: Decimal = Decimal(1_000_000)

RISK_WEIGHT_BASE_CORRELATION: Decimal = Decimal(19)
RISK_WEIGHT_CURVATURE: Decimal = Decimal(1)

VOLATILITY_WEIGHT_DEFAULT: Decimal = Decimal(1)

# One-sided normal quantiles at 99% and 99.5%
Z_SCORE_99: Decimal = Decimal("2.32634787404084110089")
Z_SCORE_995: Decimal = Decimal("2.57582930354890076098")

VOLATILITY_FACTOR: Decimal = (Decimal(365) / CURVATURE_DAYS).sqrt() / Z_SCORE_99

# Historical volatility ratios applied to vega sensitivities
HVRS_VEGA: dict[SensitivityRisk, Decimal] = {
    SensitivityRisk.COMMODITY: Decimal("0.74"),
    SensitivityRisk.EQUITY: Decimal("0.59"),
    SensitivityRisk.FX: Decimal("0.63"),
    SensitivityRisk.RATES: Decimal("0.62"),
}


# =============================================================================
# PROVIDERS
# =============================================================================

PARAMETER_PROVIDERS: dict[SensitivityRisk, ParametersProvider] = {
    SensitivityRisk.COMMODITY: CommodityParameters(),
    SensitivityRisk.CREDIT_QUALIFYING: CreditQualifyingParameters(),
    SensitivityRisk.CREDIT_NON_QUALIFYING: CreditNonQualifyingParameters(),
    SensitivityRisk.EQUITY: EquityParameters(),
    SensitivityRisk.FX: FxParameters(),
    SensitivityRisk.RATES: RatesParameters(),
}


def provider(risk: SensitivityRisk) -> ParametersProvider:
    """
    Parameter provider of a risk class.

    Raises:
        StructuralError: If the risk class has no provider
    """
    try:
        return PARAMETER_PROVIDERS[risk]
    except KeyError:
        raise StructuralError(structural_error(
            ERROR_MISSING_PARAMETER,
            f"No parameters are defined for risk '{risk}'.",
        )) from None


# =============================================================================
# INTER-RISK CORRELATIONS
# =============================================================================

_C = SensitivityRisk.COMMODITY
_CQ = SensitivityRisk.CREDIT_QUALIFYING
_CNQ = SensitivityRisk.CREDIT_NON_QUALIFYING
_EQ = SensitivityRisk.EQUITY
_FX = SensitivityRisk.FX
_IR = SensitivityRisk.RATES

_RISK_CORRELATION_PAIRS: dict[tuple[SensitivityRisk, SensitivityRisk], str] = {
    (_C, _CQ): "0.45", (_C, _CNQ): "0.22", (_C, _EQ): "0.39", (_C, _FX): "0.32", (_C, _IR): "0.30",
    (_CQ, _CNQ): "0.26", (_CQ, _EQ): "0.65", (_CQ, _FX): "0.24", (_CQ, _IR): "0.26",
    (_CNQ, _EQ): "0.17", (_CNQ, _FX): "0.11", (_CNQ, _IR): "0.15",
    (_EQ, _FX): "0.23", (_EQ, _IR): "0.19",
    (_FX, _IR): "0.26",
}

CORRELATIONS_RISK: dict[SensitivityRisk, dict[SensitivityRisk, Decimal]] = {
    r1: {r2: Decimal(1) for r2 in SensitivityRisk} for r1 in SensitivityRisk
}
for (_r1, _r2), _value in _RISK_CORRELATION_PAIRS.items():
    CORRELATIONS_RISK[_r1][_r2] = Decimal(_value)
    CORRELATIONS_RISK[_r2][_r1] = Decimal(_value)


def correlation_risk(risk1: SensitivityRisk, risk2: SensitivityRisk) -> Decimal:
    return CORRELATIONS_RISK[risk1][risk2]


# =============================================================================
# WEIGHTS AND THRESHOLDS
# =============================================================================


def threshold(risk: SensitivityRisk, category: SensitivityCategory, threshold_identifier) -> Amount:
    """
    Concentration threshold of a threshold identifier, in USD.

    Only delta and vega sensitivities have thresholds; any other category
    gets a zero threshold.
    """
    if category == SensitivityCategory.DELTA:
        return Amount.of(USD, provider(risk).threshold_delta(threshold_identifier) * MILLION)

    if category == SensitivityCategory.VEGA:
        return Amount.of(USD, provider(risk).threshold_vega(threshold_identifier) * MILLION)

    return Amount.zero(USD)


def weight_risk(category: SensitivityCategory, sensitivity) -> Decimal:
    """Risk weight applied to a sensitivity of the given category."""
    if category == SensitivityCategory.CURVATURE:
        return RISK_WEIGHT_CURVATURE

    if category == SensitivityCategory.DELTA:
        return provider(sensitivity.risk).risk_weight_delta(sensitivity)

    if category == SensitivityCategory.VEGA:
        return provider(sensitivity.risk).risk_weight_vega(sensitivity)

    return RISK_WEIGHT_BASE_CORRELATION


def weight_volatility(sensitivity) -> Decimal:
    """
    Volatility weight applied to vega and curvature amounts.

    Credit products and the Rates risk class are not volatility weighted.
    """
    if sensitivity.product == Product.CREDIT or sensitivity.risk == SensitivityRisk.RATES:
        return VOLATILITY_WEIGHT_DEFAULT

    hvr = HVRS_VEGA[sensitivity.risk] if sensitivity.category == SensitivityCategory.VEGA else Decimal(1)
    return hvr * VOLATILITY_FACTOR * provider(sensitivity.risk).risk_weight_delta(sensitivity)


# =============================================================================
# CURVATURE
# =============================================================================


def curvature_lambda(theta: Decimal) -> Decimal:
    """Convexity multiplier lambda = (z99.5^2 - 1)(1 + theta) - theta."""
    return (Z_SCORE_995 * Z_SCORE_995 - 1) * (1 + theta) - theta


def scaled_days(days: Decimal) -> Decimal:
    """
    Time scaling of a vega sensitivity into its curvature sensitivity.

    Args:
        days: Tenor length in days, strictly positive

    Returns:
        0.5 * min(1, 14 / days)
    """
    if days <= 0:
        raise ValueError("The number of days must be strictly positive.")

    return CURVATURE_FACTOR * min(CURVATURE_CAP, CURVATURE_DAYS / days)


def curvature_scale(risk: SensitivityRisk) -> Decimal:
    """Scale factor of the curvature margin, 1 / HVR^2 for Rates only."""
    if risk == SensitivityRisk.RATES:
        hvr = HVRS_VEGA[SensitivityRisk.RATES]
        return 1 / (hvr * hvr)

    return Decimal(1)


def _create_risk_correlations_df() -> pl.DataFrame:
    """Create the inter-risk correlation DataFrame (long format)."""
    risks = list(SensitivityRisk)
    return pl.DataFrame({
        "risk_1": [r1.value for r1 in risks for _ in risks],
        "risk_2": [r2.value for _ in risks for r2 in risks],
        "correlation": [float(CORRELATIONS_RISK[r1][r2]) for r1 in risks for r2 in risks],
    }).with_columns([
        pl.col("correlation").cast(pl.Float64),
    ])


def get_risk_correlation_table() -> pl.DataFrame:
    """
    Get the inter-risk correlation table as a DataFrame.

    Returns:
        DataFrame with 36 rows: risk_1, risk_2, correlation
    """
    return _create_risk_correlations_df()
