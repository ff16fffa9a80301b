"""
SIMM equity parameter tables.

Equity sensitivities are bucketed by market capitalisation, region and
sector (12 buckets plus Residual). Correlations between sensitivities of
a bucket depend on the bucket only; the residual bucket is uncorrelated.

Thresholds are in millions of USD.
"""

from __future__ import annotations

from decimal import Decimal

import polars as pl

from simm_calc.data.tables.simm_common import correlation_matrix, decimals, with_residual
from simm_calc.domain.buckets import BucketEquity


_BUCKETS = BucketEquity.values()


# =============================================================================
# BUCKET CORRELATIONS
# =============================================================================

_BUCKET_CORRELATION_ROWS = (
    "1.00 0.16 0.16 0.17 0.13 0.15 0.15 0.15 0.13 0.11 0.19 0.19",
    "0.16 1.00 0.20 0.20 0.14 0.16 0.16 0.16 0.15 0.13 0.20 0.20",
    "0.16 0.20 1.00 0.22 0.15 0.19 0.22 0.19 0.16 0.15 0.25 0.25",
    "0.17 0.20 0.22 1.00 0.17 0.21 0.21 0.21 0.17 0.15 0.27 0.27",
    "0.13 0.14 0.15 0.17 1.00 0.25 0.23 0.26 0.14 0.17 0.32 0.32",
    "0.15 0.16 0.19 0.21 0.25 1.00 0.30 0.31 0.16 0.21 0.38 0.38",
    "0.15 0.16 0.22 0.21 0.23 0.30 1.00 0.29 0.16 0.21 0.38 0.38",
    "0.15 0.16 0.19 0.21 0.26 0.31 0.29 1.00 0.17 0.21 0.39 0.39",
    "0.13 0.15 0.16 0.17 0.14 0.16 0.16 0.17 1.00 0.13 0.21 0.21",
    "0.11 0.13 0.15 0.15 0.17 0.21 0.21 0.21 0.13 1.00 0.25 0.25",
    "0.19 0.20 0.25 0.27 0.32 0.38 0.38 0.39 0.21 0.25 1.00 0.51",
    "0.19 0.20 0.25 0.27 0.32 0.38 0.38 0.39 0.21 0.25 0.51 1.00",
)

EQUITY_BUCKET_CORRELATIONS: dict[BucketEquity, dict[BucketEquity, Decimal]] = with_residual(
    correlation_matrix(_BUCKETS[:-1], [row.split() for row in _BUCKET_CORRELATION_ROWS]),
    BucketEquity.residual(),
)


# =============================================================================
# PER-BUCKET PARAMETERS
# =============================================================================

EQUITY_SENSITIVITY_CORRELATIONS: dict[BucketEquity, Decimal] = decimals(
    _BUCKETS,
    "0.14 0.20 0.25 0.23 0.23 0.32 0.35 0.32 0.17 0.16 0.51 0.51 0.00".split(),
)

EQUITY_RISK_WEIGHTS_DELTA: dict[BucketEquity, Decimal] = decimals(
    _BUCKETS,
    "24 30 31 25 21 22 27 24 33 34 17 17 34".split(),
)

# Volatility indices carry a higher vega weight
EQUITY_RISK_WEIGHTS_VEGA: dict[BucketEquity, Decimal] = decimals(
    _BUCKETS,
    "0.28 0.28 0.28 0.28 0.28 0.28 0.28 0.28 0.28 0.28 0.28 0.63 0.28".split(),
)

EQUITY_THRESHOLDS_DELTA: dict[BucketEquity, Decimal] = decimals(
    _BUCKETS,
    "8.4 8.4 8.4 8.4 26 26 26 26 1.8 1.9 540 540 1.8".split(),
)

EQUITY_THRESHOLDS_VEGA: dict[BucketEquity, Decimal] = decimals(
    _BUCKETS,
    "220 220 220 220 2300 2300 2300 2300 43 250 8100 8100 43".split(),
)


class EquityParameters:
    """Parameter provider of the Equity risk class."""

    def correlation_bucket(self, bucket1, bucket2) -> Decimal:
        return EQUITY_BUCKET_CORRELATIONS[bucket1][bucket2]

    def correlation_sensitivity(self, sensitivity1, sensitivity2) -> Decimal:
        return EQUITY_SENSITIVITY_CORRELATIONS[sensitivity1.bucket]

    def risk_weight_delta(self, sensitivity) -> Decimal:
        return EQUITY_RISK_WEIGHTS_DELTA[sensitivity.bucket]

    def risk_weight_vega(self, sensitivity) -> Decimal:
        return EQUITY_RISK_WEIGHTS_VEGA[sensitivity.bucket]

    def threshold_delta(self, threshold_identifier) -> Decimal:
        return EQUITY_THRESHOLDS_DELTA[threshold_identifier]

    def threshold_vega(self, threshold_identifier) -> Decimal:
        return EQUITY_THRESHOLDS_VEGA[threshold_identifier]


def _create_equity_df() -> pl.DataFrame:
    """Create the equity per-bucket parameter DataFrame."""
    return pl.DataFrame({
        "bucket": [bucket.name for bucket in _BUCKETS],
        "description": [bucket.description for bucket in _BUCKETS],
        "correlation_sensitivity": [float(EQUITY_SENSITIVITY_CORRELATIONS[b]) for b in _BUCKETS],
        "risk_weight_delta": [float(EQUITY_RISK_WEIGHTS_DELTA[b]) for b in _BUCKETS],
        "risk_weight_vega": [float(EQUITY_RISK_WEIGHTS_VEGA[b]) for b in _BUCKETS],
        "threshold_delta": [float(EQUITY_THRESHOLDS_DELTA[b]) for b in _BUCKETS],
        "threshold_vega": [float(EQUITY_THRESHOLDS_VEGA[b]) for b in _BUCKETS],
    }).with_columns([
        pl.col("correlation_sensitivity").cast(pl.Float64),
        pl.col("risk_weight_delta").cast(pl.Float64),
    ])


def get_equity_table() -> pl.DataFrame:
    """
    Get the equity parameter table as a DataFrame.

    Returns:
        DataFrame with one row per bucket (Residual last)
    """
    return _create_equity_df()
