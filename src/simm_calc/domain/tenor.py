"""
Tenors keying interest-rate and vega sensitivities.

A tenor name has the form <count><w|m|y>. Day counts use 7 days per week,
365/12 days per month and 365 days per year. Credit risk classes only
accept the credit tenors (1y, 2y, 3y, 5y, 10y).
"""

from __future__ import annotations

import re
from decimal import Decimal
from enum import Enum

DAYS_PER_WEEK = Decimal(7)
DAYS_PER_YEAR = Decimal(365)
DAYS_PER_MONTH = DAYS_PER_YEAR / Decimal(12)

TENOR_PATTERN = re.compile(r"^([1-9][0-9]?)(w|m|y)$", re.IGNORECASE)

_PERIOD_DESCRIPTIONS = {"W": "Week", "M": "Month", "Y": "Year"}


class Tenor(Enum):
    """Closed set of tenors, in increasing order of maturity."""

    W2 = "2w"
    M1 = "1m"
    M3 = "3m"
    M6 = "6m"
    Y1 = "1y"
    Y2 = "2y"
    Y3 = "3y"
    Y5 = "5y"
    Y10 = "10y"
    Y15 = "15y"
    Y20 = "20y"
    Y30 = "30y"

    @property
    def count(self) -> int:
        return int(TENOR_PATTERN.match(self.value).group(1))

    @property
    def period(self) -> str:
        return TENOR_PATTERN.match(self.value).group(2).upper()

    @property
    def days(self) -> Decimal:
        period = self.period
        if period == "W":
            return DAYS_PER_WEEK * self.count
        if period == "M":
            return DAYS_PER_MONTH * self.count
        return DAYS_PER_YEAR * self.count

    @property
    def description(self) -> str:
        unit = _PERIOD_DESCRIPTIONS[self.period]
        return f"{self.count}-{unit}{'s' if self.count > 1 else ''} Tenor"

    @property
    def is_credit_tenor(self) -> bool:
        return self in CREDIT_TENORS

    @classmethod
    def parse(cls, text: str) -> Tenor:
        """Parse a tenor name such as "3m" or "10Y"."""
        if text:
            match = TENOR_PATTERN.match(text.strip())
            if match:
                name = f"{match.group(1)}{match.group(2).lower()}"
                for tenor in cls:
                    if tenor.value == name:
                        return tenor
        raise ValueError(f"Invalid tenor specified: '{text}'.")


CREDIT_TENORS: frozenset[Tenor] = frozenset({Tenor.Y1, Tenor.Y2, Tenor.Y3, Tenor.Y5, Tenor.Y10})
