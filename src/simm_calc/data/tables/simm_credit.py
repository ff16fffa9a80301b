"""
SIMM credit parameter tables.

Covers both credit risk classes:
- Credit qualifying: 12 issuer buckets plus Residual, with a full bucket
  correlation matrix
- Credit non-qualifying: 2 securitization buckets plus Residual, with a
  single cross-bucket correlation

Within a bucket, the correlation between two sensitivities depends on
whether they share the same qualifier and whether the bucket is residual.

Thresholds are in millions of USD.
"""

from __future__ import annotations

from decimal import Decimal

import polars as pl

from simm_calc.data.tables.simm_common import correlation_matrix, decimals, with_residual
from simm_calc.domain.buckets import BucketCreditNonQualifying, BucketCreditQualifying


_QUALIFYING_BUCKETS = BucketCreditQualifying.values()
_NON_QUALIFYING_BUCKETS = BucketCreditNonQualifying.values()


def _issuer_correlation(sensitivity1, sensitivity2, same: Decimal, different: Decimal, residual: Decimal) -> Decimal:
    if sensitivity1.bucket != sensitivity2.bucket:
        raise ValueError("Sensitivity correlations are only defined within a single bucket.")

    if sensitivity1.bucket.is_residual:
        return residual

    return same if sensitivity1.qualifier == sensitivity2.qualifier else different


# =============================================================================
# CREDIT QUALIFYING
# =============================================================================

_QUALIFYING_CORRELATION_ROWS = (
    "1.00 0.38 0.36 0.36 0.39 0.35 0.34 0.32 0.34 0.33 0.34 0.31",
    "0.38 1.00 0.41 0.41 0.43 0.40 0.29 0.38 0.38 0.38 0.38 0.34",
    "0.36 0.41 1.00 0.41 0.42 0.39 0.30 0.34 0.39 0.37 0.38 0.35",
    "0.36 0.41 0.41 1.00 0.43 0.40 0.28 0.33 0.37 0.38 0.38 0.34",
    "0.39 0.43 0.42 0.43 1.00 0.42 0.31 0.35 0.38 0.39 0.41 0.36",
    "0.35 0.40 0.39 0.40 0.42 1.00 0.27 0.32 0.34 0.35 0.36 0.33",
    "0.34 0.29 0.30 0.28 0.31 0.27 1.00 0.24 0.28 0.27 0.27 0.26",
    "0.32 0.38 0.34 0.33 0.35 0.32 0.24 1.00 0.33 0.32 0.32 0.29",
    "0.34 0.38 0.39 0.37 0.38 0.34 0.28 0.33 1.00 0.35 0.35 0.33",
    "0.33 0.38 0.37 0.38 0.39 0.35 0.27 0.32 0.35 1.00 0.36 0.32",
    "0.34 0.38 0.38 0.38 0.41 0.36 0.27 0.32 0.35 0.36 1.00 0.33",
    "0.31 0.34 0.35 0.34 0.36 0.33 0.26 0.29 0.33 0.32 0.33 1.00",
)

CREDIT_QUALIFYING_BUCKET_CORRELATIONS: dict[BucketCreditQualifying, dict[BucketCreditQualifying, Decimal]] = with_residual(
    correlation_matrix(_QUALIFYING_BUCKETS[:-1], [row.split() for row in _QUALIFYING_CORRELATION_ROWS]),
    BucketCreditQualifying.residual(),
)

CREDIT_QUALIFYING_CORRELATION_SAME: Decimal = Decimal("0.96")
CREDIT_QUALIFYING_CORRELATION_DIFFERENT: Decimal = Decimal("0.39")
CREDIT_QUALIFYING_CORRELATION_RESIDUAL: Decimal = Decimal("0.50")

CREDIT_QUALIFYING_RISK_WEIGHTS_DELTA: dict[BucketCreditQualifying, Decimal] = decimals(
    _QUALIFYING_BUCKETS,
    "69 107 72 55 48 41 166 187 177 187 129 136 187".split(),
)

CREDIT_QUALIFYING_RISK_WEIGHT_VEGA: Decimal = Decimal("0.27")

CREDIT_QUALIFYING_THRESHOLDS_DELTA: dict[BucketCreditQualifying, Decimal] = decimals(
    _QUALIFYING_BUCKETS,
    "1.00 0.24 0.24 0.24 0.24 0.24 1.00 0.24 0.24 0.24 0.24 0.24 0.24".split(),
)

CREDIT_QUALIFYING_THRESHOLD_VEGA: Decimal = Decimal("250")


class CreditQualifyingParameters:
    """Parameter provider of the CreditQualifying risk class."""

    def correlation_bucket(self, bucket1, bucket2) -> Decimal:
        return CREDIT_QUALIFYING_BUCKET_CORRELATIONS[bucket1][bucket2]

    def correlation_sensitivity(self, sensitivity1, sensitivity2) -> Decimal:
        return _issuer_correlation(
            sensitivity1,
            sensitivity2,
            CREDIT_QUALIFYING_CORRELATION_SAME,
            CREDIT_QUALIFYING_CORRELATION_DIFFERENT,
            CREDIT_QUALIFYING_CORRELATION_RESIDUAL,
        )

    def risk_weight_delta(self, sensitivity) -> Decimal:
        return CREDIT_QUALIFYING_RISK_WEIGHTS_DELTA[sensitivity.bucket]

    def risk_weight_vega(self, sensitivity) -> Decimal:
        return CREDIT_QUALIFYING_RISK_WEIGHT_VEGA

    def threshold_delta(self, threshold_identifier) -> Decimal:
        return CREDIT_QUALIFYING_THRESHOLDS_DELTA[threshold_identifier]

    def threshold_vega(self, threshold_identifier) -> Decimal:
        return CREDIT_QUALIFYING_THRESHOLD_VEGA


# =============================================================================
# CREDIT NON-QUALIFYING
# =============================================================================

CREDIT_NON_QUALIFYING_BUCKET_CORRELATION: Decimal = Decimal("0.16")

CREDIT_NON_QUALIFYING_CORRELATION_SAME: Decimal = Decimal("0.57")
CREDIT_NON_QUALIFYING_CORRELATION_DIFFERENT: Decimal = Decimal("0.20")
CREDIT_NON_QUALIFYING_CORRELATION_RESIDUAL: Decimal = Decimal("0.50")

CREDIT_NON_QUALIFYING_RISK_WEIGHTS_DELTA: dict[BucketCreditNonQualifying, Decimal] = decimals(
    _NON_QUALIFYING_BUCKETS,
    ["150", "1200", "1200"],
)

CREDIT_NON_QUALIFYING_RISK_WEIGHT_VEGA: Decimal = Decimal("0.27")

CREDIT_NON_QUALIFYING_THRESHOLDS_DELTA: dict[BucketCreditNonQualifying, Decimal] = decimals(
    _NON_QUALIFYING_BUCKETS,
    ["9.5", "0.5", "0.5"],
)

CREDIT_NON_QUALIFYING_THRESHOLD_VEGA: Decimal = Decimal("54")


class CreditNonQualifyingParameters:
    """Parameter provider of the CreditNonQualifying risk class."""

    def correlation_bucket(self, bucket1, bucket2) -> Decimal:
        return CREDIT_NON_QUALIFYING_BUCKET_CORRELATION

    def correlation_sensitivity(self, sensitivity1, sensitivity2) -> Decimal:
        return _issuer_correlation(
            sensitivity1,
            sensitivity2,
            CREDIT_NON_QUALIFYING_CORRELATION_SAME,
            CREDIT_NON_QUALIFYING_CORRELATION_DIFFERENT,
            CREDIT_NON_QUALIFYING_CORRELATION_RESIDUAL,
        )

    def risk_weight_delta(self, sensitivity) -> Decimal:
        return CREDIT_NON_QUALIFYING_RISK_WEIGHTS_DELTA[sensitivity.bucket]

    def risk_weight_vega(self, sensitivity) -> Decimal:
        return CREDIT_NON_QUALIFYING_RISK_WEIGHT_VEGA

    def threshold_delta(self, threshold_identifier) -> Decimal:
        return CREDIT_NON_QUALIFYING_THRESHOLDS_DELTA[threshold_identifier]

    def threshold_vega(self, threshold_identifier) -> Decimal:
        return CREDIT_NON_QUALIFYING_THRESHOLD_VEGA


# =============================================================================
# DATAFRAMES
# =============================================================================


def _create_credit_df() -> pl.DataFrame:
    """Create the credit per-bucket parameter DataFrame for both risk classes."""
    rows = [
        ("CreditQualifying", bucket, CREDIT_QUALIFYING_RISK_WEIGHTS_DELTA[bucket],
         CREDIT_QUALIFYING_RISK_WEIGHT_VEGA, CREDIT_QUALIFYING_THRESHOLDS_DELTA[bucket],
         CREDIT_QUALIFYING_THRESHOLD_VEGA)
        for bucket in _QUALIFYING_BUCKETS
    ] + [
        ("CreditNonQualifying", bucket, CREDIT_NON_QUALIFYING_RISK_WEIGHTS_DELTA[bucket],
         CREDIT_NON_QUALIFYING_RISK_WEIGHT_VEGA, CREDIT_NON_QUALIFYING_THRESHOLDS_DELTA[bucket],
         CREDIT_NON_QUALIFYING_THRESHOLD_VEGA)
        for bucket in _NON_QUALIFYING_BUCKETS
    ]

    return pl.DataFrame({
        "risk": [row[0] for row in rows],
        "bucket": [row[1].name for row in rows],
        "description": [row[1].description for row in rows],
        "risk_weight_delta": [float(row[2]) for row in rows],
        "risk_weight_vega": [float(row[3]) for row in rows],
        "threshold_delta": [float(row[4]) for row in rows],
        "threshold_vega": [float(row[5]) for row in rows],
    }).with_columns([
        pl.col("risk_weight_delta").cast(pl.Float64),
        pl.col("threshold_delta").cast(pl.Float64),
    ])


def get_credit_table() -> pl.DataFrame:
    """
    Get the credit parameter table as a DataFrame.

    Returns:
        DataFrame with one row per (risk, bucket): risk, bucket, description,
        risk_weight_delta, risk_weight_vega, threshold_delta, threshold_vega
    """
    return _create_credit_df()
