"""
SIMM interest-rate parameter tables.

Rates sensitivities are bucketed by currency. Three sub-risks share the
bucket: interest rate (by tenor and curve), inflation and cross-currency
basis. Interest-rate delta weights depend on the volatility tier of the
currency; thresholds depend on its volatility tier and liquidity.

Thresholds are in millions of USD.
"""

from __future__ import annotations

from decimal import Decimal

import polars as pl

from simm_calc.data.tables.simm_common import correlation_matrix, decimals
from simm_calc.domain.currency import Currency
from simm_calc.domain.enums import CurrencyLiquidity, CurrencyVolatility, SensitivitySubrisk
from simm_calc.domain.tenor import Tenor


_TENORS = list(Tenor)

RATES_BUCKET_CORRELATION: Decimal = Decimal("0.21")
RATES_CORRELATION_CROSS_CURRENCY_BASIS: Decimal = Decimal("0.19")
RATES_CORRELATION_INFLATION: Decimal = Decimal("0.33")

# Applied on top of the tenor correlation when the curves differ
RATES_CORRELATION_CURVES: Decimal = Decimal("0.98")


# =============================================================================
# TENOR CORRELATIONS
# =============================================================================

_TENOR_CORRELATION_ROWS = (
    "1.00 0.63 0.59 0.47 0.31 0.22 0.18 0.14 0.09 0.06 0.04 0.05",
    "0.63 1.00 0.79 0.67 0.52 0.42 0.37 0.30 0.23 0.18 0.15 0.13",
    "0.59 0.79 1.00 0.84 0.68 0.56 0.50 0.42 0.32 0.26 0.24 0.21",
    "0.47 0.67 0.84 1.00 0.86 0.76 0.69 0.60 0.48 0.42 0.38 0.33",
    "0.31 0.52 0.68 0.86 1.00 0.94 0.89 0.80 0.67 0.60 0.57 0.53",
    "0.22 0.42 0.56 0.76 0.94 1.00 0.98 0.91 0.79 0.73 0.70 0.66",
    "0.18 0.37 0.50 0.69 0.89 0.98 1.00 0.96 0.87 0.81 0.78 0.74",
    "0.14 0.30 0.42 0.60 0.80 0.91 0.96 1.00 0.95 0.91 0.88 0.84",
    "0.09 0.23 0.32 0.48 0.67 0.79 0.87 0.95 1.00 0.98 0.97 0.94",
    "0.06 0.18 0.26 0.42 0.60 0.73 0.81 0.91 0.98 1.00 0.99 0.97",
    "0.04 0.15 0.24 0.38 0.57 0.70 0.78 0.88 0.97 0.99 1.00 0.99",
    "0.05 0.13 0.21 0.33 0.53 0.66 0.74 0.84 0.94 0.97 0.99 1.00",
)

RATES_TENOR_CORRELATIONS: dict[Tenor, dict[Tenor, Decimal]] = correlation_matrix(
    _TENORS, [row.split() for row in _TENOR_CORRELATION_ROWS]
)


# =============================================================================
# RISK WEIGHTS
# =============================================================================

RATES_RISK_WEIGHTS_INTEREST_RATE: dict[CurrencyVolatility, dict[Tenor, Decimal]] = {
    CurrencyVolatility.LOW: decimals(_TENORS, "33 20 10 11 14 20 22 20 20 21 23 27".split()),
    CurrencyVolatility.REGULAR: decimals(_TENORS, "114 115 102 71 61 52 50 51 51 51 54 62".split()),
    CurrencyVolatility.HIGH: decimals(_TENORS, "91 91 95 88 99 101 101 99 108 100 101 101".split()),
}

RATES_RISK_WEIGHT_INFLATION: Decimal = Decimal("48")
RATES_RISK_WEIGHT_CROSS_CURRENCY_BASIS: Decimal = Decimal("21")
RATES_RISK_WEIGHT_VEGA: Decimal = Decimal("0.16")


# =============================================================================
# THRESHOLDS
# =============================================================================

RATES_THRESHOLDS_DELTA: dict[str, Decimal] = {
    "high_volatility": Decimal("12"),
    "low_volatility": Decimal("170"),
    "regular_volatility_high_liquidity": Decimal("210"),
    "regular_volatility": Decimal("27"),
}

RATES_THRESHOLDS_VEGA: dict[str, Decimal] = {
    "high_volatility": Decimal("120"),
    "low_volatility": Decimal("770"),
    "regular_volatility_high_liquidity": Decimal("2200"),
    "regular_volatility": Decimal("190"),
}


def threshold_group(currency: Currency) -> str:
    """
    Threshold row of a currency.

    Volatility tier decides first; regular-volatility currencies are split
    by liquidity.
    """
    if currency.volatility == CurrencyVolatility.HIGH:
        return "high_volatility"
    if currency.volatility == CurrencyVolatility.LOW:
        return "low_volatility"
    if currency.liquidity == CurrencyLiquidity.HIGH:
        return "regular_volatility_high_liquidity"
    return "regular_volatility"


class RatesParameters:
    """Parameter provider of the Rates risk class."""

    def correlation_bucket(self, bucket1, bucket2) -> Decimal:
        return RATES_BUCKET_CORRELATION

    def correlation_sensitivity(self, sensitivity1, sensitivity2) -> Decimal:
        subrisks = (sensitivity1.subrisk, sensitivity2.subrisk)

        if SensitivitySubrisk.CROSS_CURRENCY_BASIS in subrisks:
            return RATES_CORRELATION_CROSS_CURRENCY_BASIS

        if SensitivitySubrisk.INFLATION in subrisks:
            return RATES_CORRELATION_INFLATION

        correlation = RATES_TENOR_CORRELATIONS[sensitivity1.tenor][sensitivity2.tenor]
        if sensitivity1.label2 != sensitivity2.label2:
            correlation *= RATES_CORRELATION_CURVES

        return correlation

    def risk_weight_delta(self, sensitivity) -> Decimal:
        if sensitivity.subrisk == SensitivitySubrisk.INFLATION:
            return RATES_RISK_WEIGHT_INFLATION
        if sensitivity.subrisk == SensitivitySubrisk.INTEREST_RATE:
            return RATES_RISK_WEIGHTS_INTEREST_RATE[sensitivity.currency.volatility][sensitivity.tenor]
        return RATES_RISK_WEIGHT_CROSS_CURRENCY_BASIS

    def risk_weight_vega(self, sensitivity) -> Decimal:
        return RATES_RISK_WEIGHT_VEGA

    def threshold_delta(self, threshold_identifier: Currency) -> Decimal:
        if not isinstance(threshold_identifier, Currency):
            raise ValueError(f"Rates thresholds are keyed by currency, got '{threshold_identifier}'.")
        return RATES_THRESHOLDS_DELTA[threshold_group(threshold_identifier)]

    def threshold_vega(self, threshold_identifier: Currency) -> Decimal:
        if not isinstance(threshold_identifier, Currency):
            raise ValueError(f"Rates thresholds are keyed by currency, got '{threshold_identifier}'.")
        return RATES_THRESHOLDS_VEGA[threshold_group(threshold_identifier)]


def _create_rates_df() -> pl.DataFrame:
    """Create the interest-rate delta risk weight DataFrame (volatility x tenor)."""
    tiers = list(CurrencyVolatility)
    return pl.DataFrame({
        "volatility": [tier.value for tier in tiers for _ in _TENORS],
        "tenor": [tenor.value for _ in tiers for tenor in _TENORS],
        "days": [float(tenor.days) for _ in tiers for tenor in _TENORS],
        "risk_weight_delta": [
            float(RATES_RISK_WEIGHTS_INTEREST_RATE[tier][tenor]) for tier in tiers for tenor in _TENORS
        ],
    }).with_columns([
        pl.col("risk_weight_delta").cast(pl.Float64),
    ])


def get_rates_table() -> pl.DataFrame:
    """
    Get the interest-rate risk weight table as a DataFrame.

    Returns:
        DataFrame with columns volatility, tenor, days, risk_weight_delta
    """
    return _create_rates_df()
