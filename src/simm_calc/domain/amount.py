"""
Currency-tagged decimal amount.

Amount is the only numeric type flowing through the margin calculation.
Arithmetic between two amounts requires identical currencies and raises
StructuralError (ST001) otherwise; arithmetic with a plain Decimal or int
keeps the amount's currency.

Usage:
    from decimal import Decimal
    from simm_calc.domain.amount import Amount
    from simm_calc.domain.currency import USD

    total = Amount(USD, Decimal("10.5")) + Amount(USD, Decimal("2"))
    rounded = total.round(0)
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal
from typing import Iterable, Union

from simm_calc.contracts.errors import (
    ERROR_NEGATIVE_SQUARE_ROOT,
    StructuralError,
    currency_mismatch_error,
    structural_error,
)
from simm_calc.domain.currency import Currency

Scalar = Union[Decimal, int]


@dataclass(frozen=True, order=False)
class Amount:
    """
    Immutable (currency, value) pair.

    Attributes:
        currency: Currency the value is expressed in
        value: Decimal value
    """

    currency: Currency
    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            object.__setattr__(self, "value", Decimal(self.value))

    # =========================================================================
    # FACTORIES
    # =========================================================================

    @classmethod
    def of(cls, currency: Currency, value: Scalar | str) -> Amount:
        return cls(currency, Decimal(value))

    @classmethod
    def zero(cls, currency: Currency) -> Amount:
        return cls(currency, Decimal(0))

    @classmethod
    def one(cls, currency: Currency) -> Amount:
        return cls(currency, Decimal(1))

    @classmethod
    def sum(cls, amounts: Iterable[Amount], currency: Currency) -> Amount:
        """Sum of the amounts, zero in the given currency when empty."""
        total = cls.zero(currency)
        for amount in amounts:
            total = total + amount
        return total

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def _operand(self, other: Amount | Scalar) -> Decimal:
        if isinstance(other, Amount):
            if other.currency != self.currency:
                raise StructuralError(currency_mismatch_error(self.currency.code, other.currency.code))
            return other.value
        if isinstance(other, (Decimal, int)):
            return Decimal(other)
        return NotImplemented

    def __add__(self, other: Amount | Scalar) -> Amount:
        value = self._operand(other)
        if value is NotImplemented:
            return NotImplemented
        return Amount(self.currency, self.value + value)

    def __radd__(self, other: Scalar) -> Amount:
        return self.__add__(other)

    def __sub__(self, other: Amount | Scalar) -> Amount:
        value = self._operand(other)
        if value is NotImplemented:
            return NotImplemented
        return Amount(self.currency, self.value - value)

    def __rsub__(self, other: Scalar) -> Amount:
        value = self._operand(other)
        if value is NotImplemented:
            return NotImplemented
        return Amount(self.currency, value - self.value)

    def __mul__(self, other: Amount | Scalar) -> Amount:
        value = self._operand(other)
        if value is NotImplemented:
            return NotImplemented
        return Amount(self.currency, self.value * value)

    def __rmul__(self, other: Scalar) -> Amount:
        return self.__mul__(other)

    def __truediv__(self, other: Amount | Scalar) -> Amount:
        value = self._operand(other)
        if value is NotImplemented:
            return NotImplemented
        return Amount(self.currency, self.value / value)

    def __rtruediv__(self, other: Scalar) -> Amount:
        value = self._operand(other)
        if value is NotImplemented:
            return NotImplemented
        return Amount(self.currency, value / self.value)

    def __neg__(self) -> Amount:
        return Amount(self.currency, -self.value)

    def __pos__(self) -> Amount:
        return self

    def __abs__(self) -> Amount:
        return Amount(self.currency, abs(self.value))

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def _compare(self, other: Amount) -> Decimal:
        if not isinstance(other, Amount):
            return NotImplemented
        return self._operand(other)

    def __lt__(self, other: Amount) -> bool:
        value = self._compare(other)
        return NotImplemented if value is NotImplemented else self.value < value

    def __le__(self, other: Amount) -> bool:
        value = self._compare(other)
        return NotImplemented if value is NotImplemented else self.value <= value

    def __gt__(self, other: Amount) -> bool:
        value = self._compare(other)
        return NotImplemented if value is NotImplemented else self.value > value

    def __ge__(self, other: Amount) -> bool:
        value = self._compare(other)
        return NotImplemented if value is NotImplemented else self.value >= value

    # =========================================================================
    # FUNCTIONS
    # =========================================================================

    def is_zero(self) -> bool:
        return self.value == 0

    def _function_operand(self, name: str, other: Amount | Scalar) -> Decimal:
        value = self._operand(other)
        if value is NotImplemented:
            raise TypeError(f"unsupported operand type for {name}: 'Amount' and '{type(other).__name__}'")
        return value

    def min(self, other: Amount | Scalar) -> Amount:
        value = self._function_operand("min", other)
        return Amount(self.currency, min(self.value, value))

    def max(self, other: Amount | Scalar) -> Amount:
        value = self._function_operand("max", other)
        return Amount(self.currency, max(self.value, value))

    def square(self) -> Amount:
        return Amount(self.currency, self.value * self.value)

    def sqrt(self) -> Amount:
        if self.value < 0:
            raise StructuralError(structural_error(
                ERROR_NEGATIVE_SQUARE_ROOT,
                "The square root of a negative amount is not defined.",
            ))
        return Amount(self.currency, self.value.sqrt())

    def round(self, decimals: int = 0, away_from_zero: bool = True) -> Amount:
        """
        Round to a number of decimals.

        Args:
            decimals: Number of decimal places to keep
            away_from_zero: Midpoints round away from zero when True,
                to the nearest even digit otherwise

        Returns:
            Rounded amount in the same currency
        """
        mode = ROUND_HALF_UP if away_from_zero else ROUND_HALF_EVEN
        return Amount(self.currency, self.value.quantize(Decimal(1).scaleb(-decimals), rounding=mode))

    def __str__(self) -> str:
        return f"{self.currency.code} {self.value:,.2f}"
