"""
Unit tests for the Amount value type.

Tests currency-checked arithmetic, comparison, the square root guard and
rounding behaviour at midpoints.
"""

import operator
from decimal import Decimal

import pytest

from simm_calc.contracts.errors import ERROR_CURRENCY_MISMATCH, ERROR_NEGATIVE_SQUARE_ROOT, StructuralError
from simm_calc.domain.amount import Amount
from simm_calc.domain.currency import EUR, USD


class TestArithmetic:
    """Tests for arithmetic between amounts and scalars."""

    def test_add_same_currency(self):
        result = Amount.of(USD, "10.5") + Amount.of(USD, 2)

        assert result == Amount.of(USD, "12.5")

    def test_add_different_currency_raises(self):
        """Mixing currencies is a structural error."""
        with pytest.raises(StructuralError) as excinfo:
            Amount.of(USD, 1) + Amount.of(EUR, 1)

        assert excinfo.value.code == ERROR_CURRENCY_MISMATCH

    def test_multiply_by_decimal_keeps_currency(self):
        result = Amount.of(EUR, 3) * Decimal("1.5")

        assert result.currency == EUR
        assert result.value == Decimal("4.5")

    def test_negate_and_abs(self):
        amount = Amount.of(USD, -7)

        assert -amount == Amount.of(USD, 7)
        assert abs(amount) == Amount.of(USD, 7)

    def test_sum_of_empty_is_zero_in_currency(self):
        total = Amount.sum([], EUR)

        assert total.is_zero()
        assert total.currency == EUR

    def test_sum_of_amounts(self):
        total = Amount.sum([Amount.of(USD, 1), Amount.of(USD, 2), Amount.of(USD, -4)], USD)

        assert total == Amount.of(USD, -1)

    def test_min_max(self):
        low, high = Amount.of(USD, 1), Amount.of(USD, 5)

        assert low.max(high) == high
        assert high.min(low) == low
        assert Amount.of(USD, -3).max(Decimal(0)) == Amount.zero(USD)

    @pytest.mark.parametrize("function", [operator.add, Amount.min, Amount.max])
    def test_float_operand_rejected(self, function):
        """min and max reject a float the way the arithmetic operators do."""
        with pytest.raises(TypeError):
            function(Amount.of(USD, 1), 0.5)

    def test_min_max_different_currency_raises(self):
        with pytest.raises(StructuralError) as excinfo:
            Amount.of(USD, 1).max(Amount.of(EUR, 2))

        assert excinfo.value.code == ERROR_CURRENCY_MISMATCH


class TestComparison:
    """Tests for ordering of amounts."""

    def test_ordering(self):
        assert Amount.of(USD, 1) < Amount.of(USD, 2)
        assert Amount.of(USD, 2) >= Amount.of(USD, 2)

    def test_compare_different_currency_raises(self):
        with pytest.raises(StructuralError):
            Amount.of(USD, 1) < Amount.of(EUR, 2)


class TestFunctions:
    """Tests for square, square root and rounding."""

    def test_square_and_sqrt(self):
        assert Amount.of(USD, 12).square() == Amount.of(USD, 144)
        assert Amount.of(USD, 144).sqrt() == Amount.of(USD, 12)

    def test_sqrt_of_negative_raises(self):
        with pytest.raises(StructuralError) as excinfo:
            Amount.of(USD, -1).sqrt()

        assert excinfo.value.code == ERROR_NEGATIVE_SQUARE_ROOT

    @pytest.mark.parametrize(
        "value,decimals,expected",
        [
            ("2.5", 0, "3"),
            ("-2.5", 0, "-3"),
            ("1.005", 2, "1.01"),
            ("1.0049", 2, "1.00"),
        ],
    )
    def test_round_half_away_from_zero(self, value, decimals, expected):
        assert Amount.of(USD, value).round(decimals).value == Decimal(expected)

    def test_round_half_even(self):
        assert Amount.of(USD, "2.5").round(0, away_from_zero=False).value == Decimal(2)

    def test_str_formats_with_grouping(self):
        assert str(Amount.of(USD, "1234")) == "USD 1,234.00"
