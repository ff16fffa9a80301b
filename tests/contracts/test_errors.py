"""Tests for error handling contracts.

Tests the CalculationError dataclass, the exception hierarchy and the
error factory functions.
"""

import pytest

from simm_calc.contracts.errors import (
    ERROR_CURRENCY_MISMATCH,
    ERROR_MULTIPLE_REGULATIONS,
    ERROR_ORPHAN_MULTIPLIER,
    ERROR_RATE_NOT_DEFINED,
    ERROR_TYPE_MISMATCH,
    ERROR_UNDEFINED_VALUE,
    CalculationError,
    DataConsistencyError,
    RateNotFoundError,
    RegulationPolicyError,
    SimmError,
    StructuralError,
    consistency_error,
    currency_mismatch_error,
    policy_error,
    rate_error,
    schema_error,
    undefined_value_error,
)
from simm_calc.domain.enums import ErrorCategory, ErrorSeverity


class TestCalculationError:
    """Tests for CalculationError dataclass."""

    def test_create_basic_error(self):
        """Should create error with required fields."""
        error = CalculationError(
            code="TEST001",
            message="Test error message",
            severity=ErrorSeverity.ERROR,
            category=ErrorCategory.STRUCTURAL,
        )

        assert error.code == "TEST001"
        assert error.message == "Test error message"
        assert error.trade_reference is None
        assert error.qualifier is None

    def test_str_includes_context(self):
        error = CalculationError(
            code="DC001",
            message="Conflicting end dates",
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.DATA_CONSISTENCY,
            trade_reference="P1/T1",
            qualifier="FXOPT",
        )

        assert str(error) == "[DC001] CRITICAL: Conflicting end dates | Trade: P1/T1 | Qualifier: FXOPT"

    def test_str_without_context(self):
        error = policy_error(ERROR_MULTIPLE_REGULATIONS, "Too many regulations")

        assert str(error) == "[RG001] ERROR: Too many regulations"

    def test_to_dict(self):
        error = rate_error(ERROR_RATE_NOT_DEFINED, "Missing rate", "EUR/JPY")

        result = error.to_dict()

        assert result["code"] == "FX001"
        assert result["severity"] == "error"
        assert result["category"] == "structural"
        assert result["qualifier"] == "EUR/JPY"
        assert result["field_name"] == "rate"

    def test_error_is_immutable(self):
        error = policy_error(ERROR_MULTIPLE_REGULATIONS, "Too many regulations")

        with pytest.raises(AttributeError):
            error.code = "XX999"


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_exception_carries_error(self):
        error = consistency_error(ERROR_ORPHAN_MULTIPLIER, "Orphan multiplier", qualifier="Credit")

        exception = DataConsistencyError(error)

        assert exception.error is error
        assert exception.code == ERROR_ORPHAN_MULTIPLIER
        assert str(exception) == "Orphan multiplier"

    @pytest.mark.parametrize(
        "exception_type",
        [StructuralError, RateNotFoundError, DataConsistencyError, RegulationPolicyError],
    )
    def test_every_exception_is_a_simm_error(self, exception_type):
        assert issubclass(exception_type, SimmError)

    def test_missing_rate_is_structural(self):
        with pytest.raises(StructuralError):
            raise RateNotFoundError(rate_error(ERROR_RATE_NOT_DEFINED, "Missing rate", "EUR/JPY"))


class TestFactories:
    """Tests for the error factory functions."""

    def test_currency_mismatch(self):
        error = currency_mismatch_error("USD", "EUR")

        assert error.code == ERROR_CURRENCY_MISMATCH
        assert error.category == ErrorCategory.STRUCTURAL
        assert error.expected_value == "USD"
        assert error.actual_value == "EUR"

    def test_undefined_value(self):
        error = undefined_value_error("tenor", "4y")

        assert error.code == ERROR_UNDEFINED_VALUE
        assert error.message == "Undefined tenor specified: '4y'."

    def test_consistency_errors_are_critical(self):
        error = consistency_error(ERROR_ORPHAN_MULTIPLIER, "Orphan", trade_reference="P1/T1")

        assert error.severity == ErrorSeverity.CRITICAL
        assert error.category == ErrorCategory.DATA_CONSISTENCY
        assert error.trade_reference == "P1/T1"

    def test_policy_error(self):
        assert policy_error(ERROR_MULTIPLE_REGULATIONS, "x").category == ErrorCategory.POLICY

    def test_schema_error(self):
        error = schema_error(ERROR_TYPE_MISMATCH, "Bad type", "rate")

        assert error.category == ErrorCategory.SCHEMA_VALIDATION
        assert error.field_name == "rate"
