"""
Configuration contracts for the SIMM calculator.

Provides the immutable configuration of a calculation call:
- CalculationConfig: valuation date and calculation currency

Factory methods .of() and .usd() provide self-documenting configuration.
Model constants (z-scores, HVRs, correlation base) are not configurable;
they live with the parameter tables in simm_calc.data.tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from simm_calc.domain.currency import USD, Currency


@dataclass(frozen=True)
class CalculationConfig:
    """
    Master configuration for margin calculations.

    Attributes:
        valuation_date: As-of date; records whose trade ends before it are dropped
        calculation_currency: Currency every amount is converted to before
            aggregation, and the currency of the resulting margins
    """

    valuation_date: date
    calculation_currency: Currency = USD

    def __post_init__(self) -> None:
        if not isinstance(self.calculation_currency, Currency):
            raise ValueError(f"Invalid calculation currency specified: '{self.calculation_currency}'.")

    @classmethod
    def of(cls, calculation_currency: Currency | str, valuation_date: date | None = None) -> CalculationConfig:
        """
        Create a configuration for any calculation currency.

        Args:
            calculation_currency: Currency or ISO code
            valuation_date: As-of date (defaults to today)

        Returns:
            Configured CalculationConfig
        """
        if isinstance(calculation_currency, str):
            calculation_currency = Currency.parse(calculation_currency)

        return cls(
            valuation_date=valuation_date or date.today(),
            calculation_currency=calculation_currency,
        )

    @classmethod
    def usd(cls, valuation_date: date | None = None) -> CalculationConfig:
        """Create a configuration calculating in USD."""
        return cls.of(USD, valuation_date)
