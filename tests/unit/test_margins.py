"""
Unit tests for the margin tree.

Tests cover node validation, child ordering at each level, the total's
flattening and sign convention, and the polars export.
"""

from datetime import date

import pytest

from simm_calc.data.schemas import MARGIN_TREE_SCHEMA
from simm_calc.domain.amount import Amount
from simm_calc.domain.buckets import PLACEHOLDER, BucketEquity
from simm_calc.domain.currency import EUR, USD
from simm_calc.domain.enums import (
    Product,
    Regulation,
    RegulationRole,
    SensitivityCategory,
    SensitivityRisk,
)
from simm_calc.domain.sensitivity import Sensitivity
from simm_calc.engine.margins import (
    Margin,
    MarginAddOn,
    MarginAddOnFixedAmount,
    MarginAddOnNotional,
    MarginAddOnProductMultiplier,
    MarginBucket,
    MarginModel,
    MarginProduct,
    MarginRisk,
    MarginSensitivity,
    MarginTotal,
    MarginWeighting,
)

VALUATION_DATE = date(2026, 10, 16)


def usd(value) -> Amount:
    return Amount.of(USD, value)


def equity_weighting(qualifier: str, bucket: BucketEquity, value) -> MarginWeighting:
    sensitivity = Sensitivity.netted_equity(SensitivityCategory.DELTA, qualifier, bucket, usd(value))
    return MarginWeighting.of(sensitivity, usd(value))


def equity_product(value) -> MarginProduct:
    bucket = MarginBucket.of(BucketEquity.of(1), usd(value), [equity_weighting("ACME", BucketEquity.of(1), value)])
    category = MarginSensitivity.of(SensitivityCategory.DELTA, usd(value), [bucket])
    risk = MarginRisk.of(SensitivityRisk.EQUITY, usd(value), [category])
    return MarginProduct.of(Product.EQUITY, usd(value), [risk])


# =============================================================================
# NODES
# =============================================================================


class TestMarginNode:
    """Tests for the base node."""

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="level"):
            Margin(0, "Total", "Total", usd(0), ())

    def test_blank_identifier(self):
        with pytest.raises(ValueError, match="identifier"):
            Margin(1, "Total", " ", usd(0), ())

    def test_str(self):
        node = Margin(3, "Product", "Equity", usd(1234), ())

        assert str(node) == '3) Product "Equity" Amount="USD 1,234.00" Children="0"'

    def test_empty_children_rejected(self):
        with pytest.raises(ValueError, match="No weighting margins have been provided."):
            MarginBucket.of(BucketEquity.of(1), usd(0), [])


class TestOrdering:
    """Tests for the child ordering of each node type."""

    def test_weightings_by_qualifier(self):
        bucket = MarginBucket.of(
            BucketEquity.of(1),
            usd(3),
            [equity_weighting("ZETA", BucketEquity.of(1), 1), equity_weighting("ACME", BucketEquity.of(1), 2)],
        )

        assert [w.identifier for w in bucket.children] == ["ACME", "ZETA"]
        assert bucket.identifier == BucketEquity.of(1).description

    def test_buckets_residual_last(self):
        residual = MarginBucket.of(
            BucketEquity.residual(), usd(1), [equity_weighting("A", BucketEquity.residual(), 1)]
        )
        numbered = MarginBucket.of(BucketEquity.of(4), usd(1), [equity_weighting("A", BucketEquity.of(4), 1)])

        category = MarginSensitivity.of(SensitivityCategory.DELTA, usd(2), [residual, numbered])

        assert [b.identifier for b in category.children] == [BucketEquity.of(4).description, "Residual"]

    def test_placeholder_bucket_is_common(self):
        sensitivity = Sensitivity.netted_fx(SensitivityCategory.DELTA, EUR, usd(1))
        bucket = MarginBucket.of(PLACEHOLDER, usd(1), [MarginWeighting.of(sensitivity, usd(1))])

        assert bucket.identifier == "Common"
        assert bucket.children[0].identifier == "EUR"

    def test_add_on_components_by_kind(self):
        add_on = MarginAddOn.of(
            usd(6),
            [
                MarginAddOnProductMultiplier.of(Product.CREDIT, usd(1)),
                MarginAddOnNotional.of("SWPTN", usd(2)),
                MarginAddOnNotional.of("FXOPT", usd(2)),
                MarginAddOnFixedAmount.of(usd(1)),
            ],
        )

        assert [c.identifier for c in add_on.children] == [
            "Fixed", "Notional FXOPT", "Notional SWPTN", "Product Credit",
        ]
        assert all(c.level == 4 for c in add_on.children)

    def test_model_places_add_on_after_products(self):
        add_on = MarginAddOn.of(usd(1), [MarginAddOnFixedAmount.of(usd(1))])

        model = MarginModel.of(usd(11), [equity_product(10)], add_on)

        assert [c.name for c in model.children] == ["Product", "Add-on"]
        assert model.identifier == "SIMM"

    def test_model_with_add_on_only(self):
        add_on = MarginAddOn.of(usd(1), [MarginAddOnFixedAmount.of(usd(1))])

        assert MarginModel.of(usd(1), [], add_on).children == (add_on,)

    def test_model_requires_products_or_add_on(self):
        with pytest.raises(ValueError):
            MarginModel.of(usd(0), [])


# =============================================================================
# TOTAL
# =============================================================================


class TestMarginTotal:
    """Tests for the root node."""

    def test_flattens_child_totals(self):
        model = MarginModel.of(usd(10), [equity_product(10)])
        inner = MarginTotal.of(VALUATION_DATE, USD, [model])

        total = MarginTotal.of(VALUATION_DATE, USD, [inner], role=RegulationRole.SECURED, regulation=Regulation.SEC)

        assert total.children == (model,)
        assert total.value == usd(10)
        assert total.regulation == Regulation.SEC
        assert total.calculation_currency == USD

    def test_pledgor_total_is_negative(self):
        model = MarginModel.of(usd(10), [equity_product(10)])

        total = MarginTotal.of(VALUATION_DATE, USD, [model], role=RegulationRole.PLEDGOR)

        assert total.value == usd(-10)

    def test_empty_total_is_zero(self):
        total = MarginTotal.of(VALUATION_DATE, EUR)

        assert total.value == Amount.zero(EUR)
        assert total.children == ()

    def test_regulation_requires_role(self):
        with pytest.raises(ValueError, match="without a regulation role"):
            MarginTotal.of(VALUATION_DATE, USD, regulation=Regulation.CFTC)


class TestExport:
    """Tests for walking and flattening the tree."""

    def test_walk_is_depth_first(self):
        model = MarginModel.of(usd(10), [equity_product(10)])

        levels = [node.level for _, node in model.walk()]

        assert levels == [2, 3, 4, 5, 6, 7]

    def test_to_frame(self):
        total = MarginTotal.of(VALUATION_DATE, USD, [MarginModel.of(usd(10), [equity_product(10)])])

        df = total.to_frame()

        assert df.columns == list(MARGIN_TREE_SCHEMA)
        assert df.height == 7
        assert df["path"][2] == "Total/SIMM/Equity"
        assert df["value"][0] == pytest.approx(10.0)
        assert df["path"][-1].endswith("/ACME")
