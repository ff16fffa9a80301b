"""
FX conversion module for the SIMM calculator.

Provides the rate conversion collaborator consumed by the margin engine:
every amount is converted to the calculation currency before any
arithmetic takes place.

Classes:
    FxRatesProvider: Direct rates, their inverses and one-hop triangulation

Usage:
    from simm_calc.engine.fx_converter import FxRatesProvider

    rates = FxRatesProvider()
    rates.add_rate(USD, EUR, Decimal("0.89238894"))
    converted = rates.convert(amount, EUR)

    # or from a polars frame with currency_from, currency_to, rate columns
    rates = FxRatesProvider.from_frame(fx_rates_df)
"""

from __future__ import annotations

import logging
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

import polars as pl

from simm_calc.contracts.errors import (
    ERROR_INVALID_RATE,
    ERROR_RATE_ALREADY_DEFINED,
    ERROR_RATE_NOT_DEFINED,
    ERROR_RATE_NOT_TRIANGULATED,
    RateNotFoundError,
    StructuralError,
    rate_error,
)
from simm_calc.contracts.validation import raise_on_schema_errors
from simm_calc.data.schemas import FX_RATES_SCHEMA
from simm_calc.domain.amount import Amount
from simm_calc.domain.currency import Currency, CurrencyPair

logger = logging.getLogger(__name__)


class FxRatesProvider:
    """
    Exchange rates keyed by currency pair.

    Adding a rate also stores its inverse. A rate missing from the table is
    obtained through triangulation over a common intermediate currency
    (rate(A, C) = rate(A, B) * rate(B, C)); triangulated rates and their
    inverses are cached after the first lookup.
    """

    def __init__(self) -> None:
        self._rates: dict[CurrencyPair, Decimal] = {}
        self._original_pairs: set[CurrencyPair] = set()

    # =========================================================================
    # VIEWS
    # =========================================================================

    @property
    def rates(self) -> Mapping[CurrencyPair, Decimal]:
        """Every known rate: original, inverse and cached triangulated rates."""
        return MappingProxyType(self._rates)

    @property
    def original_rates(self) -> Mapping[CurrencyPair, Decimal]:
        """Rates added explicitly, in insertion order."""
        return MappingProxyType({
            pair: rate for pair, rate in self._rates.items() if pair in self._original_pairs
        })

    @property
    def rates_count(self) -> int:
        return len(self._rates)

    @property
    def original_rates_count(self) -> int:
        return len(self._original_pairs)

    # =========================================================================
    # RATES
    # =========================================================================

    def add_rate(self, base: Currency, counter: Currency, rate: Decimal | int | str, update: bool = True) -> None:
        """
        Add a direct rate and its inverse.

        Args:
            base: Currency converted from
            counter: Currency converted to
            rate: Units of counter per unit of base, strictly positive
            update: When False, an already known pair is an error

        Raises:
            StructuralError: If the rate is not positive or, with update
                disabled, already defined directly or implicitly
        """
        pair = CurrencyPair.of(base, counter)
        rate = Decimal(rate)

        if rate <= 0:
            raise StructuralError(rate_error(ERROR_INVALID_RATE, "Invalid rate specified.", str(pair)))

        if not update and pair in self._rates:
            raise StructuralError(rate_error(
                ERROR_RATE_ALREADY_DEFINED,
                "The specified rate has already been defined, directly or implicitly.",
                str(pair),
            ))

        inverse = pair.invert()
        self._rates[pair] = rate
        self._original_pairs.add(pair)
        self._rates[inverse] = 1 / rate
        self._original_pairs.discard(inverse)

    def get_rate(self, base: Currency, counter: Currency, use_triangulation: bool = True) -> Decimal:
        """
        Rate converting base into counter.

        Raises:
            RateNotFoundError: If the rate is neither defined nor obtainable
                through triangulation
        """
        if base == counter:
            return Decimal(1)

        pair = CurrencyPair.of(base, counter)

        rate = self._rates.get(pair)
        if rate is not None:
            return rate

        if not use_triangulation:
            raise RateNotFoundError(rate_error(
                ERROR_RATE_NOT_DEFINED,
                f"The {pair} rate is not defined.",
                str(pair),
            ))

        rate = self._triangulate(pair)
        if rate is None:
            raise RateNotFoundError(rate_error(
                ERROR_RATE_NOT_TRIANGULATED,
                f"The {pair} rate is not defined and cannot be obtained through triangulation.",
                str(pair),
            ))

        return rate

    def try_get_rate(self, base: Currency, counter: Currency, use_triangulation: bool = True) -> Decimal | None:
        """Rate converting base into counter, None when it cannot be obtained."""
        try:
            return self.get_rate(base, counter, use_triangulation)
        except RateNotFoundError:
            return None

    def _triangulate(self, pair: CurrencyPair) -> Decimal | None:
        for first in list(self._rates):
            if first.base != pair.base:
                continue

            for second in list(self._rates):
                if second.counter != pair.counter or first.counter != second.base:
                    continue

                rate = self._rates[first] * self._rates[second]
                self._rates[pair] = rate
                self._rates[pair.invert()] = 1 / rate
                logger.debug("Triangulated %s through %s: %s", pair, first.counter, rate)
                return rate

        return None

    def convert(self, amount: Amount, currency: Currency, use_triangulation: bool = True) -> Amount:
        """
        Convert an amount into another currency.

        A zero amount converts to zero without a rate lookup.
        """
        if amount.value == 0:
            return Amount.of(currency, amount.value)

        if amount.currency == currency:
            return amount

        return Amount.of(currency, amount.value * self.get_rate(amount.currency, currency, use_triangulation))

    # =========================================================================
    # FRAMES
    # =========================================================================

    @classmethod
    def from_frame(cls, frame: pl.DataFrame | pl.LazyFrame) -> FxRatesProvider:
        """
        Build a provider from a frame of direct rates.

        Args:
            frame: Frame matching FX_RATES_SCHEMA (currency_from,
                currency_to, rate); rows are added in order, later rows
                overriding earlier ones

        Returns:
            Loaded FxRatesProvider

        Raises:
            StructuralError: If the frame does not match the schema
        """
        raise_on_schema_errors(frame, FX_RATES_SCHEMA, context="fx_rates")

        if isinstance(frame, pl.LazyFrame):
            frame = frame.collect()

        provider = cls()
        for row in frame.select(list(FX_RATES_SCHEMA)).iter_rows(named=True):
            provider.add_rate(
                Currency.parse(row["currency_from"]),
                Currency.parse(row["currency_to"]),
                Decimal(str(row["rate"])),
            )

        logger.debug("Loaded %d rates from frame", provider.original_rates_count)
        return provider

    def to_frame(self) -> pl.DataFrame:
        """Export the original rates as a frame matching FX_RATES_SCHEMA."""
        pairs = list(self.original_rates.items())
        return pl.DataFrame(
            {
                "currency_from": [pair.base.code for pair, _ in pairs],
                "currency_to": [pair.counter.code for pair, _ in pairs],
                "rate": [float(rate) for _, rate in pairs],
            },
            schema=FX_RATES_SCHEMA,
        )
