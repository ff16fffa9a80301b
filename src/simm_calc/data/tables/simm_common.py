"""
Helpers shared by the SIMM parameter tables.

Tables are written as rows of decimal strings and turned into nested
Decimal mappings keyed by domain values (buckets, tenors, currencies).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Hashable, Sequence, TypeVar

K = TypeVar("K", bound=Hashable)


def decimals(keys: Sequence[K], values: Sequence[str]) -> dict[K, Decimal]:
    """Map each key to the decimal at the same position."""
    if len(keys) != len(values):
        raise ValueError(f"Expected {len(keys)} values, got {len(values)}.")
    return {key: Decimal(value) for key, value in zip(keys, values)}


def correlation_matrix(keys: Sequence[K], rows: Sequence[Sequence[str]]) -> dict[K, dict[K, Decimal]]:
    """
    Build a square correlation matrix.

    Args:
        keys: Row and column keys, in table order
        rows: One row of decimal strings per key

    Returns:
        Nested mapping matrix[row_key][column_key]
    """
    if len(keys) != len(rows):
        raise ValueError(f"Expected {len(keys)} rows, got {len(rows)}.")
    return {key: decimals(keys, row) for key, row in zip(keys, rows)}


def with_residual(
    matrix: dict[K, dict[K, Decimal]],
    residual: K,
) -> dict[K, dict[K, Decimal]]:
    """Extend a matrix with a residual key, uncorrelated with every other key."""
    extended = {key: {**row, residual: Decimal(0)} for key, row in matrix.items()}
    extended[residual] = {key: Decimal(0) for key in matrix}
    extended[residual][residual] = Decimal(1)
    return extended
