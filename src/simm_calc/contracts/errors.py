"""
Error handling contracts for the SIMM calculator.

Every failure is synchronous and fatal to the calculation call:
- CalculationError: Immutable error details (code, severity, category, context)
- SimmError and subclasses: Exceptions raised by the engine, each carrying
  the CalculationError that describes it

Exception hierarchy:
    SimmError
    ├── StructuralError          currency mismatch, undefined value, missing parameter
    │   └── RateNotFoundError    no direct rate and no triangulation path
    ├── DataConsistencyError     add-on parameters or trades not matching base records
    └── RegulationPolicyError    several regulations where one was required
"""

from __future__ import annotations

from dataclasses import dataclass

from simm_calc.domain.enums import ErrorCategory, ErrorSeverity


@dataclass(frozen=True)
class CalculationError:
    """
    Immutable representation of a calculation error.

    Attributes:
        code: Unique error code (e.g., "FX001", "DC003")
              Format: {COMPONENT}{NUMBER} where COMPONENT is 2-3 chars
        message: Human-readable description of the issue
        severity: Error severity level
        category: Error category for filtering
        trade_reference: Optional "portfolio/trade" key of the offending trade
        qualifier: Optional qualifier or product the error refers to
        field_name: Optional name of the problematic field
        expected_value: Optional description of expected value/format
        actual_value: Optional actual value that caused the error
    """

    code: str
    message: str
    severity: ErrorSeverity
    category: ErrorCategory
    trade_reference: str | None = None
    qualifier: str | None = None
    field_name: str | None = None
    expected_value: str | None = None
    actual_value: str | None = None

    def __str__(self) -> str:
        """Human-readable error representation."""
        parts = [f"[{self.code}] {self.severity.value.upper()}: {self.message}"]

        if self.trade_reference:
            parts.append(f"Trade: {self.trade_reference}")
        if self.qualifier:
            parts.append(f"Qualifier: {self.qualifier}")

        return " | ".join(parts)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
            "trade_reference": self.trade_reference,
            "qualifier": self.qualifier,
            "field_name": self.field_name,
            "expected_value": self.expected_value,
            "actual_value": self.actual_value,
        }


# =============================================================================
# EXCEPTIONS
# =============================================================================


class SimmError(Exception):
    """Base class of every error raised by the calculation engine."""

    def __init__(self, error: CalculationError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def code(self) -> str:
        return self.error.code


class StructuralError(SimmError):
    """Structural failure: the calculation cannot proceed on this input."""


class RateNotFoundError(StructuralError):
    """A conversion rate is not defined and cannot be triangulated."""


class DataConsistencyError(SimmError):
    """Records are individually valid but inconsistent with each other."""


class RegulationPolicyError(SimmError):
    """The input mixes regulations where a single one is required."""


# =============================================================================
# ERROR CODE CONSTANTS
# =============================================================================

# Structural error codes
ERROR_CURRENCY_MISMATCH = "ST001"
ERROR_UNDEFINED_VALUE = "ST002"
ERROR_MISSING_PARAMETER = "ST003"
ERROR_NEGATIVE_SQUARE_ROOT = "ST004"

# Rate provider error codes
ERROR_RATE_NOT_DEFINED = "FX001"
ERROR_RATE_NOT_TRIANGULATED = "FX002"
ERROR_RATE_ALREADY_DEFINED = "FX003"
ERROR_INVALID_RATE = "FX004"

# Data consistency error codes
ERROR_TRADE_END_DATES = "DC001"
ERROR_TRADE_PRODUCTS = "DC002"
ERROR_TRADE_QUALIFIERS = "DC003"
ERROR_DUPLICATE_MULTIPLIER = "DC004"
ERROR_ORPHAN_MULTIPLIER = "DC005"
ERROR_DUPLICATE_FACTOR = "DC006"
ERROR_ORPHAN_FACTOR = "DC007"
ERROR_ORPHAN_NOTIONAL = "DC008"

# Policy error codes
ERROR_MULTIPLE_REGULATIONS = "RG001"

# Schema validation error codes
ERROR_MISSING_COLUMN = "SV001"
ERROR_TYPE_MISMATCH = "SV002"


# =============================================================================
# ERROR FACTORY FUNCTIONS
# =============================================================================


def currency_mismatch_error(left: str, right: str) -> CalculationError:
    """Create an error for arithmetic between amounts in different currencies."""
    return CalculationError(
        code=ERROR_CURRENCY_MISMATCH,
        message="Arithmetic operations cannot be performed on amounts expressed in different currencies.",
        severity=ErrorSeverity.ERROR,
        category=ErrorCategory.STRUCTURAL,
        expected_value=left,
        actual_value=right,
    )


def undefined_value_error(field_name: str, actual_value: str) -> CalculationError:
    """Create an error for a value outside a closed enumeration."""
    return CalculationError(
        code=ERROR_UNDEFINED_VALUE,
        message=f"Undefined {field_name} specified: '{actual_value}'.",
        severity=ErrorSeverity.ERROR,
        category=ErrorCategory.STRUCTURAL,
        field_name=field_name,
        actual_value=actual_value,
    )


def structural_error(code: str, message: str, qualifier: str | None = None) -> CalculationError:
    """Create a structural error."""
    return CalculationError(
        code=code,
        message=message,
        severity=ErrorSeverity.ERROR,
        category=ErrorCategory.STRUCTURAL,
        qualifier=qualifier,
    )


def rate_error(code: str, message: str, currency_pair: str) -> CalculationError:
    """Create a rate provider error."""
    return CalculationError(
        code=code,
        message=message,
        severity=ErrorSeverity.ERROR,
        category=ErrorCategory.STRUCTURAL,
        field_name="rate",
        qualifier=currency_pair,
    )


def consistency_error(
    code: str,
    message: str,
    trade_reference: str | None = None,
    qualifier: str | None = None,
) -> CalculationError:
    """Create a data consistency error."""
    return CalculationError(
        code=code,
        message=message,
        severity=ErrorSeverity.CRITICAL,
        category=ErrorCategory.DATA_CONSISTENCY,
        trade_reference=trade_reference,
        qualifier=qualifier,
    )


def policy_error(code: str, message: str) -> CalculationError:
    """Create a regulation policy error."""
    return CalculationError(
        code=code,
        message=message,
        severity=ErrorSeverity.ERROR,
        category=ErrorCategory.POLICY,
    )


def schema_error(code: str, message: str, field_name: str) -> CalculationError:
    """Create a schema validation error."""
    return CalculationError(
        code=code,
        message=message,
        severity=ErrorSeverity.CRITICAL,
        category=ErrorCategory.SCHEMA_VALIDATION,
        field_name=field_name,
    )
