"""
Input records consumed by the margin engine, other than sensitivities.

Every record carries its regulatory applicability (RegulationsInfo). Value
records (those holding an Amount) also carry the identity and maturity of
the trade they belong to (TradeInfo); parameter records hold a plain
decimal instead.

Records are immutable. Currency conversion and sign flips return new
records through with_amount().

Usage:
    from datetime import date
    from simm_calc.contracts.records import AddOnNotional, RegulationsInfo, TradeInfo

    notional = AddOnNotional.of(
        "FXOPT",
        amount,
        RegulationsInfo.of_collect([Regulation.CFTC]),
        TradeInfo.of("P1", "T1", date(2030, 1, 1)),
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Iterable

from simm_calc.contracts.validation import is_valid_notional_qualifier, is_valid_trade_reference
from simm_calc.domain.amount import Amount
from simm_calc.domain.enums import Product, Regulation, enum_order


# =============================================================================
# METADATA
# =============================================================================


@dataclass(frozen=True)
class RegulationsInfo:
    """
    Regulations a record is collected or posted under.

    Both tuples are kept in Regulation declaration order.
    """

    collect: tuple[Regulation, ...] = ()
    post: tuple[Regulation, ...] = ()

    def __str__(self) -> str:
        collect = ", ".join(sorted(r.value for r in self.collect))
        post = ", ".join(sorted(r.value for r in self.post))
        return f'Regulations Collect="{collect}" Post="{post}"'

    @classmethod
    def of(cls, collect: Iterable[Regulation] = (), post: Iterable[Regulation] = ()) -> RegulationsInfo:
        return cls(_sorted_regulations(collect, "collect"), _sorted_regulations(post, "post"))

    @classmethod
    def of_collect(cls, regulations: Iterable[Regulation] | Regulation) -> RegulationsInfo:
        if isinstance(regulations, Regulation):
            regulations = [regulations]
        return cls.of(collect=regulations)

    @classmethod
    def of_post(cls, regulations: Iterable[Regulation] | Regulation) -> RegulationsInfo:
        if isinstance(regulations, Regulation):
            regulations = [regulations]
        return cls.of(post=regulations)

    @classmethod
    def empty(cls) -> RegulationsInfo:
        return EMPTY_REGULATIONS


def _sorted_regulations(regulations: Iterable[Regulation], side: str) -> tuple[Regulation, ...]:
    regulations = list(regulations)
    if any(not isinstance(r, Regulation) for r in regulations):
        raise ValueError(f"One or more {side} regulations are invalid.")
    return tuple(sorted(regulations, key=enum_order))


EMPTY_REGULATIONS = RegulationsInfo()


@dataclass(frozen=True)
class TradeInfo:
    """
    Identity and maturity of the trade a value belongs to.

    A trade without an end date never expires.
    """

    portfolio_id: str
    trade_id: str
    end_date: date | None = None

    def __str__(self) -> str:
        end_date = self.end_date.isoformat() if self.end_date else ""
        return f'Trade TradeID="{self.trade_id}" PortfolioID="{self.portfolio_id}" EndDate="{end_date}"'

    @property
    def key(self) -> str:
        """Grouping key "portfolio/trade"."""
        return f"{self.portfolio_id}/{self.trade_id}"

    def is_expired(self, valuation_date: date) -> bool:
        return self.end_date is not None and self.end_date < valuation_date

    @classmethod
    def of(cls, portfolio_id: str, trade_id: str, end_date: date) -> TradeInfo:
        if not is_valid_trade_reference(portfolio_id):
            raise ValueError(f"Invalid portfolio identifier specified: '{portfolio_id}'.")

        if not is_valid_trade_reference(trade_id):
            raise ValueError(f"Invalid trade identifier specified: '{trade_id}'.")

        return cls(portfolio_id, trade_id, end_date)


EMPTY_TRADE = TradeInfo("~", "~", None)


# =============================================================================
# RECORD BASES
# =============================================================================


class DataValue:
    """
    Behaviour shared by records holding an amount and a trade.

    Subclasses are frozen dataclasses with amount, regulations and trade fields.
    """

    amount: Amount
    regulations: RegulationsInfo
    trade: TradeInfo

    @property
    def collect_regulations(self) -> tuple[Regulation, ...]:
        return self.regulations.collect

    @property
    def post_regulations(self) -> tuple[Regulation, ...]:
        return self.regulations.post

    @property
    def end_date(self) -> date | None:
        return self.trade.end_date

    @property
    def portfolio_id(self) -> str:
        return self.trade.portfolio_id

    @property
    def trade_id(self) -> str:
        return self.trade.trade_id

    @property
    def trade_key(self) -> str:
        return self.trade.key

    def with_amount(self, amount: Amount):
        """Copy of the record holding a different amount."""
        return replace(self, amount=amount)


class DataParameter:
    """Behaviour shared by parameter records (a decimal plus regulations)."""

    parameter: Decimal
    regulations: RegulationsInfo

    @property
    def collect_regulations(self) -> tuple[Regulation, ...]:
        return self.regulations.collect

    @property
    def post_regulations(self) -> tuple[Regulation, ...]:
        return self.regulations.post


# =============================================================================
# ADD-ON RECORDS
# =============================================================================


@dataclass(frozen=True)
class AddOnFixedAmount(DataValue):
    """Flat amount added to the model margin."""

    amount: Amount
    regulations: RegulationsInfo = EMPTY_REGULATIONS
    trade: TradeInfo = field(default=EMPTY_TRADE, init=False)

    def __str__(self) -> str:
        return f'AddOnFixedAmount Amount="{self.amount}"'

    @classmethod
    def of(cls, amount: Amount, regulations: RegulationsInfo = EMPTY_REGULATIONS) -> AddOnFixedAmount:
        return cls(amount, regulations)


@dataclass(frozen=True)
class AddOnNotional(DataValue):
    """Trade notional, netted to an absolute sum per qualifier."""

    qualifier: str
    amount: Amount
    regulations: RegulationsInfo = EMPTY_REGULATIONS
    trade: TradeInfo = EMPTY_TRADE

    def __str__(self) -> str:
        return f'AddOnNotional Qualifier="{self.qualifier}" Amount="{self.amount}"'

    @classmethod
    def of(
        cls,
        qualifier: str,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> AddOnNotional:
        if not is_valid_notional_qualifier(qualifier):
            raise ValueError(f"Invalid qualifier specified: '{qualifier}'.")

        return cls(qualifier, amount, regulations, trade)


@dataclass(frozen=True)
class AddOnNotionalFactor(DataParameter):
    """Factor applied to the netted notional of a qualifier, in (0, 1]."""

    qualifier: str
    parameter: Decimal
    regulations: RegulationsInfo = EMPTY_REGULATIONS

    @property
    def factor(self) -> Decimal:
        return self.parameter

    def __str__(self) -> str:
        return f'AddOnNotionalFactor Qualifier="{self.qualifier}" Factor="{self.parameter}"'

    @classmethod
    def of(
        cls,
        qualifier: str,
        factor: Decimal,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
    ) -> AddOnNotionalFactor:
        if not is_valid_notional_qualifier(qualifier):
            raise ValueError(f"Invalid qualifier specified: '{qualifier}'.")

        factor = Decimal(factor)
        if factor <= 0 or factor > 1:
            raise ValueError(f"Invalid factor specified: {factor}.")

        return cls(qualifier, factor, regulations)


@dataclass(frozen=True)
class AddOnProductMultiplier(DataParameter):
    """Multiplier applied to the margin of a product, strictly positive."""

    product: Product
    parameter: Decimal
    regulations: RegulationsInfo = EMPTY_REGULATIONS

    @property
    def multiplier(self) -> Decimal:
        return self.parameter

    def __str__(self) -> str:
        return f'AddOnProductMultiplier Product="{self.product.value}" Multiplier="{self.parameter}"'

    @classmethod
    def of(
        cls,
        product: Product,
        multiplier: Decimal,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
    ) -> AddOnProductMultiplier:
        if not isinstance(product, Product):
            raise ValueError(f"Invalid product specified: '{product}'.")

        multiplier = Decimal(multiplier)
        if multiplier <= 0:
            raise ValueError(f"Invalid multiplier specified: {multiplier}.")

        return cls(product, multiplier, regulations)


# =============================================================================
# PRESENT VALUE
# =============================================================================


@dataclass(frozen=True)
class PresentValue(DataValue):
    """Present value of a trade. Its sign flips under the secured role."""

    product: Product
    amount: Amount
    regulations: RegulationsInfo = EMPTY_REGULATIONS
    trade: TradeInfo = EMPTY_TRADE

    def __str__(self) -> str:
        return f'PresentValue Product="{self.product.value}" Amount="{self.amount}"'

    @classmethod
    def of(
        cls,
        product: Product,
        amount: Amount,
        regulations: RegulationsInfo = EMPTY_REGULATIONS,
        trade: TradeInfo = EMPTY_TRADE,
    ) -> PresentValue:
        if not isinstance(product, Product):
            raise ValueError(f"Invalid product specified: '{product}'.")

        return cls(product, amount, regulations, trade)
