"""
SIMM commodity parameter tables.

Commodity sensitivities are bucketed into 17 commodity groups with no
residual bucket. Correlations between sensitivities of a bucket depend on
the bucket only, not on whether the qualifiers match.

Thresholds are in millions of USD.
"""

from __future__ import annotations

from decimal import Decimal

import polars as pl

from simm_calc.data.tables.simm_common import correlation_matrix, decimals
from simm_calc.domain.buckets import BucketCommodity


_BUCKETS = BucketCommodity.values()


# =============================================================================
# BUCKET CORRELATIONS
# =============================================================================

_BUCKET_CORRELATION_ROWS = (
    "1.00 0.16 0.11 0.19 0.22 0.12 0.22 0.02 0.27 0.08 0.11 0.05 0.04 0.06 0.01 0.00 0.10",
    "0.16 1.00 0.89 0.94 0.93 0.32 0.24 0.19 0.21 0.06 0.39 0.23 0.39 0.29 0.13 0.00 0.66",
    "0.11 0.89 1.00 0.87 0.88 0.17 0.17 0.13 0.12 0.03 0.24 0.04 0.27 0.19 0.08 0.00 0.61",
    "0.19 0.94 0.87 1.00 0.92 0.37 0.27 0.21 0.21 0.03 0.36 0.16 0.27 0.28 0.09 0.00 0.64",
    "0.22 0.93 0.88 0.92 1.00 0.29 0.26 0.19 0.23 0.10 0.40 0.27 0.38 0.30 0.15 0.00 0.64",
    "0.12 0.32 0.17 0.37 0.29 1.00 0.19 0.60 0.18 0.09 0.22 0.09 0.14 0.16 0.10 0.00 0.37",
    "0.22 0.24 0.17 0.27 0.26 0.19 1.00 0.06 0.68 0.16 0.21 0.10 0.24 0.25 -0.01 0.00 0.27",
    "0.02 0.19 0.13 0.21 0.19 0.60 0.06 1.00 0.12 0.01 0.10 0.03 0.02 0.07 0.10 0.00 0.21",
    "0.27 0.21 0.12 0.21 0.23 0.18 0.68 0.12 1.00 0.05 0.16 0.03 0.19 0.16 -0.01 0.00 0.19",
    "0.08 0.06 0.03 0.03 0.10 0.09 0.16 0.01 0.05 1.00 0.08 0.04 0.05 0.11 0.02 0.00 0.00",
    "0.11 0.39 0.24 0.36 0.40 0.22 0.21 0.10 0.16 0.08 1.00 0.34 0.19 0.22 0.15 0.00 0.34",
    "0.05 0.23 0.04 0.16 0.27 0.09 0.10 0.03 0.03 0.04 0.34 1.00 0.14 0.26 0.09 0.00 0.20",
    "0.04 0.39 0.27 0.27 0.38 0.14 0.24 0.02 0.19 0.05 0.19 0.14 1.00 0.30 0.16 0.00 0.40",
    "0.06 0.29 0.19 0.28 0.30 0.16 0.25 0.07 0.16 0.11 0.22 0.26 0.30 1.00 0.09 0.00 0.30",
    "0.01 0.13 0.08 0.09 0.15 0.10 -0.01 0.10 -0.01 0.02 0.15 0.09 0.16 0.09 1.00 0.00 0.16",
    "0.00 0.00 0.00 0.00 0.00 0.00 0.00 0.00 0.00 0.00 0.00 0.00 0.00 0.00 0.00 1.00 0.00",
    "0.10 0.66 0.61 0.64 0.64 0.37 0.27 0.21 0.19 0.00 0.34 0.20 0.40 0.30 0.16 0.00 1.00",
)

COMMODITY_BUCKET_CORRELATIONS: dict[BucketCommodity, dict[BucketCommodity, Decimal]] = correlation_matrix(
    _BUCKETS, [row.split() for row in _BUCKET_CORRELATION_ROWS]
)


# =============================================================================
# PER-BUCKET PARAMETERS
# =============================================================================

COMMODITY_SENSITIVITY_CORRELATIONS: dict[BucketCommodity, Decimal] = decimals(
    _BUCKETS,
    "0.27 0.97 0.92 0.97 0.99 1.00 1.00 0.40 0.73 0.13 0.53 0.64 0.63 0.26 0.26 0.00 0.38".split(),
)

COMMODITY_RISK_WEIGHTS_DELTA: dict[BucketCommodity, Decimal] = decimals(
    _BUCKETS,
    "19 20 17 19 24 22 26 50 27 54 20 20 17 14 10 54 16".split(),
)

COMMODITY_RISK_WEIGHT_VEGA: Decimal = Decimal("0.27")

COMMODITY_THRESHOLDS_DELTA: dict[BucketCommodity, Decimal] = decimals(
    _BUCKETS,
    "700 3600 2700 2700 2700 2600 2600 1900 1900 52 2000 3200 1100 1100 1100 52 5200".split(),
)

COMMODITY_THRESHOLDS_VEGA: dict[BucketCommodity, Decimal] = decimals(
    _BUCKETS,
    "250 1800 320 320 320 2200 2200 780 780 99 420 650 570 570 570 99 330".split(),
)


class CommodityParameters:
    """Parameter provider of the Commodity risk class."""

    def correlation_bucket(self, bucket1, bucket2) -> Decimal:
        return COMMODITY_BUCKET_CORRELATIONS[bucket1][bucket2]

    def correlation_sensitivity(self, sensitivity1, sensitivity2) -> Decimal:
        return COMMODITY_SENSITIVITY_CORRELATIONS[sensitivity1.bucket]

    def risk_weight_delta(self, sensitivity) -> Decimal:
        return COMMODITY_RISK_WEIGHTS_DELTA[sensitivity.bucket]

    def risk_weight_vega(self, sensitivity) -> Decimal:
        return COMMODITY_RISK_WEIGHT_VEGA

    def threshold_delta(self, threshold_identifier) -> Decimal:
        return COMMODITY_THRESHOLDS_DELTA[threshold_identifier]

    def threshold_vega(self, threshold_identifier) -> Decimal:
        return COMMODITY_THRESHOLDS_VEGA[threshold_identifier]


def _create_commodity_df() -> pl.DataFrame:
    """Create the commodity per-bucket parameter DataFrame."""
    return pl.DataFrame({
        "bucket": [bucket.name for bucket in _BUCKETS],
        "description": [bucket.description for bucket in _BUCKETS],
        "correlation_sensitivity": [float(COMMODITY_SENSITIVITY_CORRELATIONS[b]) for b in _BUCKETS],
        "risk_weight_delta": [float(COMMODITY_RISK_WEIGHTS_DELTA[b]) for b in _BUCKETS],
        "risk_weight_vega": [float(COMMODITY_RISK_WEIGHT_VEGA)] * len(_BUCKETS),
        "threshold_delta": [float(COMMODITY_THRESHOLDS_DELTA[b]) for b in _BUCKETS],
        "threshold_vega": [float(COMMODITY_THRESHOLDS_VEGA[b]) for b in _BUCKETS],
    }).with_columns([
        pl.col("correlation_sensitivity").cast(pl.Float64),
        pl.col("risk_weight_delta").cast(pl.Float64),
    ])


def get_commodity_table() -> pl.DataFrame:
    """
    Get the commodity parameter table as a DataFrame.

    Returns:
        DataFrame with one row per bucket: bucket, description,
        correlation_sensitivity, risk_weight_delta, risk_weight_vega,
        threshold_delta, threshold_vega
    """
    return _create_commodity_df()
