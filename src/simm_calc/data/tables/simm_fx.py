"""
SIMM Fx parameter tables.

Fx sensitivities have no buckets. Delta thresholds are selected by the
category of the risk currency; vega thresholds by the categories of the
two currencies of the pair (the table is symmetric).

Thresholds are in millions of USD.
"""

from __future__ import annotations

from decimal import Decimal

import polars as pl

from simm_calc.domain.currency import Currency, CurrencyPair
from simm_calc.domain.enums import CurrencyCategory


FX_BUCKET_CORRELATION: Decimal = Decimal("1.00")
FX_SENSITIVITY_CORRELATION: Decimal = Decimal("0.50")
FX_RISK_WEIGHT_DELTA: Decimal = Decimal("8.10")
FX_RISK_WEIGHT_VEGA: Decimal = Decimal("0.30")


# =============================================================================
# THRESHOLDS
# =============================================================================

FX_THRESHOLDS_DELTA: dict[CurrencyCategory, Decimal] = {
    CurrencyCategory.FREQUENTLY_TRADED: Decimal("2900"),
    CurrencyCategory.SIGNIFICANTLY_MATERIAL: Decimal("9700"),
    CurrencyCategory.OTHER: Decimal("450"),
}

_FT = CurrencyCategory.FREQUENTLY_TRADED
_SM = CurrencyCategory.SIGNIFICANTLY_MATERIAL
_OT = CurrencyCategory.OTHER

FX_THRESHOLDS_VEGA: dict[CurrencyCategory, dict[CurrencyCategory, Decimal]] = {
    _FT: {_FT: Decimal("410"), _SM: Decimal("1000"), _OT: Decimal("210")},
    _SM: {_FT: Decimal("1000"), _SM: Decimal("2000"), _OT: Decimal("320")},
    _OT: {_FT: Decimal("210"), _SM: Decimal("320"), _OT: Decimal("150")},
}


class FxParameters:
    """Parameter provider of the Fx risk class."""

    def correlation_bucket(self, bucket1, bucket2) -> Decimal:
        return FX_BUCKET_CORRELATION

    def correlation_sensitivity(self, sensitivity1, sensitivity2) -> Decimal:
        return FX_SENSITIVITY_CORRELATION

    def risk_weight_delta(self, sensitivity) -> Decimal:
        return FX_RISK_WEIGHT_DELTA

    def risk_weight_vega(self, sensitivity) -> Decimal:
        return FX_RISK_WEIGHT_VEGA

    def threshold_delta(self, threshold_identifier: Currency) -> Decimal:
        if not isinstance(threshold_identifier, Currency):
            raise ValueError(f"Fx delta thresholds are keyed by currency, got '{threshold_identifier}'.")
        return FX_THRESHOLDS_DELTA[threshold_identifier.category]

    def threshold_vega(self, threshold_identifier: CurrencyPair) -> Decimal:
        if not isinstance(threshold_identifier, CurrencyPair):
            raise ValueError(f"Fx vega thresholds are keyed by currency pair, got '{threshold_identifier}'.")
        base = threshold_identifier.base.category
        counter = threshold_identifier.counter.category
        return FX_THRESHOLDS_VEGA[base][counter]


def _create_fx_thresholds_df() -> pl.DataFrame:
    """Create the Fx vega threshold DataFrame (one row per category pair)."""
    categories = list(CurrencyCategory)
    return pl.DataFrame({
        "category_1": [c1.value for c1 in categories for _ in categories],
        "category_2": [c2.value for _ in categories for c2 in categories],
        "threshold_vega": [float(FX_THRESHOLDS_VEGA[c1][c2]) for c1 in categories for c2 in categories],
        "threshold_delta": [float(FX_THRESHOLDS_DELTA[c1]) for c1 in categories for _ in categories],
    }).with_columns([
        pl.col("threshold_vega").cast(pl.Float64),
    ])


def get_fx_table() -> pl.DataFrame:
    """
    Get the Fx threshold table as a DataFrame.

    Returns:
        DataFrame with columns category_1, category_2, threshold_vega and
        threshold_delta (the delta threshold of category_1)
    """
    return _create_fx_thresholds_df()
