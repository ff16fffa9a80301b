"""
Risk buckets partitioning sensitivities within a risk class.

Buckets are named by their number ("1".."n") or "Residual". Residual
buckets never take part in cross-bucket correlation. The Placeholder
stands in for the bucket (and the threshold identifier) of risk classes
that have no real bucketing: base correlation, Fx and cross-currency basis
thresholds.

Rates sensitivities are bucketed by Currency, defined in currency.py.

Usage:
    from simm_calc.domain.buckets import BucketEquity

    bucket = BucketEquity.parse("11")
    residual = BucketEquity.residual()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

RESIDUAL_NAME = "Residual"


# =============================================================================
# BUCKET DESCRIPTIONS
# =============================================================================

COMMODITY_DESCRIPTIONS: tuple[str, ...] = (
    "Coal",
    "Crude Oil",
    "Light Ends",
    "Middle Distillates",
    "Heavy Distillates",
    "North America Natural Gas",
    "European Natural Gas",
    "North American Power",
    "European Power",
    "Freight",
    "Base Metals",
    "Precious Metals",
    "Grains",
    "Softs",
    "Livestock",
    "Other",
    "Indices",
)

CREDIT_NON_QUALIFYING_DESCRIPTIONS: tuple[str, ...] = (
    "Investment Grade RMBS/CMBS",
    "High Yield & Non-rated RMBS/CMBS",
)

_CREDIT_SECTORS = (
    "Sovereigns & Central Banks",
    "Financials",
    "Basic Materials, Energy & Industrials",
    "Consumer Goods",
    "Technology & Telecommunications",
    "Health Care, Utilities & Parastatals",
)

CREDIT_QUALIFYING_DESCRIPTIONS: tuple[str, ...] = (
    tuple(f"Investment Grade - {sector}" for sector in _CREDIT_SECTORS)
    + tuple(f"High Yield & Non-rated - {sector}" for sector in _CREDIT_SECTORS)
)

_EQUITY_SECTORS = (
    "Consumer Goods, Services & Utilities",
    "Industrials & Telecommunications",
    "Agriculture, Basic Materials, Energy & Manufacturing",
    "Financials",
)

EQUITY_DESCRIPTIONS: tuple[str, ...] = (
    tuple(f"Large Cap - Emerging Markets - {sector}" for sector in _EQUITY_SECTORS)
    + tuple(f"Large Cap - Developed Markets - {sector}" for sector in _EQUITY_SECTORS)
    + (
        "Small Cap - Emerging Markets - All Sectors",
        "Small Cap - Developed Markets - All Sectors",
        "Indices, Funds & ETFs",
        "Volatility Indices",
    )
)


# =============================================================================
# NUMBERED BUCKETS
# =============================================================================


@dataclass(frozen=True)
class Bucket:
    """
    Numbered bucket of a risk class, or its residual bucket.

    Subclasses fix the descriptions table and whether a residual bucket
    exists. Buckets of different risk classes never compare equal.

    Attributes:
        number: Bucket number starting at 1, None for the residual bucket
    """

    number: int | None

    DESCRIPTIONS: ClassVar[tuple[str, ...]] = ()
    HAS_RESIDUAL: ClassVar[bool] = True

    def __post_init__(self) -> None:
        if self.number is None:
            if not self.HAS_RESIDUAL:
                raise ValueError(f"{type(self).__name__} has no residual bucket.")
        elif not 1 <= self.number <= len(self.DESCRIPTIONS):
            raise ValueError(f"Invalid {type(self).__name__} number specified: {self.number}.")

    def __str__(self) -> str:
        return self.name

    @property
    def name(self) -> str:
        return RESIDUAL_NAME if self.number is None else str(self.number)

    @property
    def description(self) -> str:
        return RESIDUAL_NAME if self.number is None else self.DESCRIPTIONS[self.number - 1]

    @property
    def is_residual(self) -> bool:
        return self.number is None

    @classmethod
    def of(cls, number: int):
        return cls(number)

    @classmethod
    def residual(cls):
        return cls(None)

    @classmethod
    def values(cls) -> list:
        """Every bucket of the risk class, numbered ones first."""
        buckets = [cls(number) for number in range(1, len(cls.DESCRIPTIONS) + 1)]
        if cls.HAS_RESIDUAL:
            buckets.append(cls(None))
        return buckets

    @classmethod
    def parse(cls, text: str):
        """Parse a bucket name ("1".."n" or "Residual", case-insensitive)."""
        if text is not None:
            name = str(text).strip()
            if cls.HAS_RESIDUAL and name.lower() == RESIDUAL_NAME.lower():
                return cls(None)
            if name.isdigit() and 1 <= int(name) <= len(cls.DESCRIPTIONS):
                return cls(int(name))
        raise ValueError(f"Invalid {cls.__name__} specified: '{text}'.")


@dataclass(frozen=True)
class BucketCommodity(Bucket):
    """Commodity bucket (1 to 17, no residual)."""

    DESCRIPTIONS: ClassVar[tuple[str, ...]] = COMMODITY_DESCRIPTIONS
    HAS_RESIDUAL: ClassVar[bool] = False


@dataclass(frozen=True)
class BucketCreditNonQualifying(Bucket):
    """Credit non-qualifying bucket (1, 2 or Residual)."""

    DESCRIPTIONS: ClassVar[tuple[str, ...]] = CREDIT_NON_QUALIFYING_DESCRIPTIONS


@dataclass(frozen=True)
class BucketCreditQualifying(Bucket):
    """Credit qualifying bucket (1 to 12 or Residual)."""

    DESCRIPTIONS: ClassVar[tuple[str, ...]] = CREDIT_QUALIFYING_DESCRIPTIONS


@dataclass(frozen=True)
class BucketEquity(Bucket):
    """Equity bucket (1 to 12 or Residual)."""

    DESCRIPTIONS: ClassVar[tuple[str, ...]] = EQUITY_DESCRIPTIONS


# =============================================================================
# PLACEHOLDER
# =============================================================================


@dataclass(frozen=True)
class Placeholder:
    """Bucket and threshold identifier of sensitivities without one."""

    name: str = field(default="Unused", init=False)

    def __str__(self) -> str:
        return self.name

    @property
    def description(self) -> str:
        return self.name

    @property
    def is_residual(self) -> bool:
        return False


PLACEHOLDER = Placeholder()
