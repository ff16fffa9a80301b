"""
Validation functions for the SIMM calculator.

Two kinds of checks live here:
- Frame schema checks run on polars inputs before they are loaded
  (validate_schema, raise_on_schema_errors)
- Record field checks used by the record factories (qualifiers, trade
  references, notional qualifiers)

Key functions:
- validate_schema: Check a frame schema against expected types
- is_valid_qualifier: ISIN checks on credit and equity qualifiers
- is_valid_trade_reference: Portfolio and trade identifier format
"""

from __future__ import annotations

import re
from typing import Iterator

import polars as pl

from simm_calc.contracts.errors import (
    ERROR_MISSING_COLUMN,
    ERROR_TYPE_MISMATCH,
    StructuralError,
    schema_error,
)

ISIN_PATTERN = re.compile(r"^ISIN:[A-Z]{2}[A-Z0-9]{9}[0-9]{1}$")
NOTIONAL_QUALIFIER_PATTERN = re.compile(r"^(?=.*[A-Z])[A-Z0-9]+$", re.IGNORECASE)
TRADE_REFERENCE_PATTERN = re.compile(r"^(?!.*?[-_]{2,}|.*?[-_]$)[A-Z0-9][A-Z0-9-_]*$", re.IGNORECASE)

ISIN_PREFIX = "ISIN:"


# =============================================================================
# FRAME SCHEMAS
# =============================================================================


def validate_schema(
    frame: pl.DataFrame | pl.LazyFrame,
    expected_schema: dict[str, pl.DataType],
    context: str = "",
    strict: bool = False,
) -> list[str]:
    """
    Validate a frame schema against an expected schema.

    Checks that all expected columns exist with compatible types.
    Does NOT materialize a LazyFrame.

    Args:
        frame: DataFrame or LazyFrame to validate
        expected_schema: Dict mapping column names to expected Polars types
        context: Context string for error messages (e.g., "fx_rates")
        strict: If True, also flag extra columns not in expected schema

    Returns:
        List of validation error messages (empty if valid)

    Example:
        >>> errors = validate_schema(rates_df, FX_RATES_SCHEMA, context="fx_rates")
        >>> if errors:
        ...     print("\\n".join(errors))
    """
    actual_schema = frame.collect_schema()
    errors = [message for _, _, message in _column_problems(actual_schema, expected_schema, context)]

    if strict:
        context_prefix = f"[{context}] " if context else ""
        extra_columns = sorted(set(actual_schema.names()) - set(expected_schema.keys()))
        for col_name in extra_columns:
            errors.append(
                f"{context_prefix}Unexpected column: '{col_name}' "
                f"(type: {actual_schema[col_name]})"
            )

    return errors


def _column_problems(
    actual_schema: pl.Schema,
    expected_schema: dict[str, pl.DataType],
    context: str,
) -> Iterator[tuple[str, str, str]]:
    """Yield (error code, column name, message) for each missing or mistyped column."""
    context_prefix = f"[{context}] " if context else ""

    for col_name, expected_type in expected_schema.items():
        if col_name not in actual_schema:
            yield (
                ERROR_MISSING_COLUMN,
                col_name,
                f"{context_prefix}Missing column: '{col_name}' (expected type: {expected_type})",
            )
        else:
            actual_type = actual_schema[col_name]
            if not _types_compatible(actual_type, expected_type):
                yield (
                    ERROR_TYPE_MISMATCH,
                    col_name,
                    f"{context_prefix}Type mismatch for '{col_name}': "
                    f"expected {expected_type}, got {actual_type}",
                )


def _types_compatible(actual: pl.DataType, expected: pl.DataType) -> bool:
    """
    Check if actual type is compatible with expected type.

    Integer widths and float widths are interchangeable, and integers are
    accepted where floats are expected.
    """
    if actual == expected:
        return True

    int_types = {pl.Int8, pl.Int16, pl.Int32, pl.Int64}
    float_types = {pl.Float32, pl.Float64}

    if actual in int_types and expected in int_types:
        return True

    if actual in float_types and expected in float_types:
        return True

    if actual in int_types and expected in float_types:
        return True

    string_types = {pl.Utf8, pl.String}
    if actual in string_types and expected in string_types:
        return True

    return False


def raise_on_schema_errors(
    frame: pl.DataFrame | pl.LazyFrame,
    expected_schema: dict[str, pl.DataType],
    context: str = "",
) -> None:
    """
    Raise StructuralError on the first schema problem of a frame.

    Raises:
        StructuralError: SV001 for a missing column, SV002 for a type mismatch
    """
    for code, col_name, message in _column_problems(frame.collect_schema(), expected_schema, context):
        raise StructuralError(schema_error(code, message, col_name))


# =============================================================================
# RECORD FIELDS
# =============================================================================


def is_valid_qualifier(qualifier: str | None, isin_only: bool) -> bool:
    """
    Check a sensitivity qualifier.

    Args:
        qualifier: Qualifier to check
        isin_only: When True the qualifier must be an ISIN ("ISIN:XS0000000000");
            otherwise any non-blank qualifier is accepted unless it claims
            to be an ISIN without being a valid one

    Returns:
        True if the qualifier is acceptable
    """
    if qualifier is None or not qualifier.strip():
        return False

    if isin_only:
        return ISIN_PATTERN.match(qualifier) is not None

    if qualifier[:len(ISIN_PREFIX)].upper() != ISIN_PREFIX:
        return True

    return ISIN_PATTERN.match(qualifier) is not None


def is_valid_notional_qualifier(qualifier: str | None) -> bool:
    """Alphanumeric qualifier holding at least one letter."""
    if qualifier is None or not qualifier.strip():
        return False

    return NOTIONAL_QUALIFIER_PATTERN.match(qualifier) is not None


def is_valid_trade_reference(reference: str | None) -> bool:
    """Alphanumeric identifier, with single inner dashes or underscores."""
    if reference is None or not reference.strip():
        return False

    return TRADE_REFERENCE_PATTERN.match(reference) is not None
