"""Tests for the input records.

Tests regulation metadata, trade identity and the add-on and present
value records, including factory validation.
"""

from datetime import date
from decimal import Decimal

import pytest

from simm_calc.contracts.records import (
    EMPTY_REGULATIONS,
    EMPTY_TRADE,
    AddOnFixedAmount,
    AddOnNotional,
    AddOnNotionalFactor,
    AddOnProductMultiplier,
    PresentValue,
    RegulationsInfo,
    TradeInfo,
)
from simm_calc.domain.amount import Amount
from simm_calc.domain.currency import USD
from simm_calc.domain.enums import Product, Regulation


def usd(value) -> Amount:
    return Amount.of(USD, value)


class TestRegulationsInfo:
    """Tests for RegulationsInfo."""

    def test_regulations_kept_in_declaration_order(self):
        info = RegulationsInfo.of(collect=[Regulation.SEC, Regulation.APRA], post=[Regulation.USPR, Regulation.CFTC])

        assert info.collect == (Regulation.APRA, Regulation.SEC)
        assert info.post == (Regulation.CFTC, Regulation.USPR)

    def test_single_regulation_shortcuts(self):
        assert RegulationsInfo.of_collect(Regulation.ESA).collect == (Regulation.ESA,)
        assert RegulationsInfo.of_post(Regulation.ESA).post == (Regulation.ESA,)

    def test_invalid_regulation_rejected(self):
        with pytest.raises(ValueError, match="collect regulations"):
            RegulationsInfo.of(collect=["SEC"])

    def test_empty(self):
        assert RegulationsInfo.empty() is EMPTY_REGULATIONS
        assert EMPTY_REGULATIONS.collect == ()

    def test_str(self):
        info = RegulationsInfo.of(collect=[Regulation.SEC, Regulation.CFTC])

        assert str(info) == 'Regulations Collect="CFTC, SEC" Post=""'


class TestTradeInfo:
    """Tests for TradeInfo."""

    def test_key(self):
        assert TradeInfo.of("P1", "T1", date(2030, 1, 1)).key == "P1/T1"

    def test_expiry(self):
        trade = TradeInfo.of("P1", "T1", date(2026, 10, 16))

        assert not trade.is_expired(date(2026, 10, 16))
        assert trade.is_expired(date(2026, 10, 17))

    def test_empty_trade_never_expires(self):
        assert not EMPTY_TRADE.is_expired(date(2100, 1, 1))

    @pytest.mark.parametrize("portfolio,trade", [("", "T1"), ("P1", "T 1"), ("P1_", "T1")])
    def test_invalid_references(self, portfolio, trade):
        with pytest.raises(ValueError, match="identifier"):
            TradeInfo.of(portfolio, trade, date(2030, 1, 1))

    def test_str(self):
        trade = TradeInfo.of("P1", "T1", date(2030, 1, 2))

        assert str(trade) == 'Trade TradeID="T1" PortfolioID="P1" EndDate="2030-01-02"'


class TestAddOnRecords:
    """Tests for notionals, factors, multipliers and fixed amounts."""

    def test_notional_exposes_trade(self):
        trade = TradeInfo.of("P1", "T1", date(2030, 1, 1))
        notional = AddOnNotional.of("FXOPT", usd(100), RegulationsInfo.of_collect(Regulation.SEC), trade)

        assert notional.trade_key == "P1/T1"
        assert notional.end_date == date(2030, 1, 1)
        assert notional.collect_regulations == (Regulation.SEC,)
        assert notional.post_regulations == ()

    def test_notional_invalid_qualifier(self):
        with pytest.raises(ValueError, match="qualifier"):
            AddOnNotional.of("FX OPT", usd(1))

    @pytest.mark.parametrize("factor", [Decimal(0), Decimal("-0.1"), Decimal("1.01")])
    def test_factor_out_of_range(self, factor):
        with pytest.raises(ValueError, match="factor"):
            AddOnNotionalFactor.of("FXOPT", factor)

    def test_factor_of_one_accepted(self):
        assert AddOnNotionalFactor.of("FXOPT", Decimal(1)).factor == Decimal(1)

    def test_multiplier_must_be_positive(self):
        with pytest.raises(ValueError, match="multiplier"):
            AddOnProductMultiplier.of(Product.CREDIT, Decimal(0))

    def test_multiplier_invalid_product(self):
        with pytest.raises(ValueError, match="product"):
            AddOnProductMultiplier.of("Credit", Decimal(2))

    def test_fixed_amount_has_no_trade(self):
        fixed = AddOnFixedAmount.of(usd(10))

        assert fixed.trade is EMPTY_TRADE

    def test_with_amount_copies(self):
        fixed = AddOnFixedAmount.of(usd(10), RegulationsInfo.of_post(Regulation.MAS))

        copy = fixed.with_amount(usd(-10))

        assert copy.amount == usd(-10)
        assert copy.regulations == fixed.regulations
        assert fixed.amount == usd(10)

    def test_str(self):
        assert str(AddOnProductMultiplier.of(Product.EQUITY, Decimal("1.5"))) == (
            'AddOnProductMultiplier Product="Equity" Multiplier="1.5"'
        )


class TestPresentValue:
    """Tests for PresentValue."""

    def test_invalid_product(self):
        with pytest.raises(ValueError, match="product"):
            PresentValue.of("Equity", usd(1))

    def test_str(self):
        value = PresentValue.of(Product.RATES_FX, usd(1234))

        assert str(value) == f'PresentValue Product="{Product.RATES_FX.value}" Amount="USD 1,234.00"'
