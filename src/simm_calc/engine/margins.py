"""
Margin tree produced by the SIMM calculation.

Every node holds an amount, a level, a name, an identifier and an ordered
tuple of children. Nodes are built bottom-up through their of() factories,
which fix the level and name of the node type and sort the children:

    1 Total
    2   Model "SIMM"
    3     Product            3     Add-on
    4       Risk             4       Fixed / Notional <q> / Product <p>
    5         Sensitivity (category)
    6           Bucket
    7             Weighting

The tree is the only output surface of the engine. Report renderers walk
it directly or consume its flattened polars form (Margin.to_frame).

Usage:
    total = engine.compute_margin(RegulationRole.SECURED, values)
    print(total)
    frame = total.to_frame()
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterator, Sequence

import polars as pl

from simm_calc.data.schemas import MARGIN_TREE_SCHEMA
from simm_calc.domain.amount import Amount
from simm_calc.domain.buckets import Placeholder
from simm_calc.domain.currency import Currency
from simm_calc.domain.enums import (
    Product,
    Regulation,
    RegulationRole,
    SensitivityCategory,
    SensitivityRisk,
    enum_order,
)
from simm_calc.domain.sensitivity import BucketKey, Sensitivity


# =============================================================================
# BASE NODE
# =============================================================================


@dataclass(frozen=True)
class Margin:
    """
    Node of the margin tree.

    Attributes:
        level: Depth of the node, 1 for the total
        name: Node type ("Total", "Product", "Bucket", ...)
        identifier: What the node stands for ("RatesFx", "Delta", "USD", ...)
        value: Margin amount in the calculation currency
        children: Child nodes, in report order
    """

    level: int
    name: str
    identifier: str
    value: Amount
    children: tuple[Margin, ...]

    def __post_init__(self) -> None:
        if self.level <= 0:
            raise ValueError("Invalid level specified, it must be a positive integer.")
        if not self.name or not self.name.strip():
            raise ValueError("Invalid name specified.")
        if not self.identifier or not self.identifier.strip():
            raise ValueError("Invalid identifier specified.")

    def __str__(self) -> str:
        return f'{self.level}) {self.name} "{self.identifier}" Amount="{self.value}" Children="{len(self.children)}"'

    def walk(self) -> Iterator[tuple[tuple[str, ...], Margin]]:
        """Depth-first traversal yielding (path of identifiers, node)."""
        stack: list[tuple[tuple[str, ...], Margin]] = [((self.identifier,), self)]
        while stack:
            path, node = stack.pop()
            yield path, node
            for child in reversed(node.children):
                stack.append((path + (child.identifier,), child))

    def to_frame(self) -> pl.DataFrame:
        """
        Flatten the tree depth-first into a DataFrame.

        Returns:
            DataFrame matching MARGIN_TREE_SCHEMA, one row per node
        """
        nodes = list(self.walk())
        return pl.DataFrame(
            {
                "level": [node.level for _, node in nodes],
                "name": [node.name for _, node in nodes],
                "identifier": [node.identifier for _, node in nodes],
                "currency": [node.value.currency.code for _, node in nodes],
                "value": [float(node.value.value) for _, node in nodes],
                "path": ["/".join(path) for path, _ in nodes],
            },
            schema=MARGIN_TREE_SCHEMA,
        )


def _require_children(children: Sequence, kind: str) -> None:
    if len(children) == 0:
        raise ValueError(f"No {kind} margins have been provided.")


# =============================================================================
# WEIGHTING AND BUCKET
# =============================================================================


def _labels(sensitivity: Sensitivity) -> str:
    return "".join(f", {label}" for label in (sensitivity.label1, sensitivity.label2) if label.strip())


def weighting_identifier(sensitivity: Sensitivity) -> str:
    """
    Report identifier of a weighted sensitivity.

    Commodity and equity use the qualifier, credit appends the labels, Fx
    shows the qualifier as a pair where it is one and Rates shows the
    sub-risk followed by the labels.
    """
    if sensitivity.product in (Product.COMMODITY, Product.EQUITY):
        return sensitivity.qualifier

    if sensitivity.product == Product.CREDIT:
        return f"{sensitivity.qualifier}{_labels(sensitivity)}"

    if sensitivity.risk == SensitivityRisk.FX:
        qualifier = sensitivity.qualifier
        if len(qualifier) == 6:
            return f"{qualifier[:3]}/{qualifier[3:]}"
        return qualifier

    return f"{sensitivity.subrisk.value}{_labels(sensitivity)}"


@dataclass(frozen=True)
class MarginWeighting(Margin):
    """Weighted amount of a single netted sensitivity (level 7)."""

    sensitivity: Sensitivity

    @classmethod
    def of(cls, sensitivity: Sensitivity, value: Amount) -> MarginWeighting:
        return cls(7, "Weighting", weighting_identifier(sensitivity), value, (), sensitivity)


def _weighting_sort_key(margin: MarginWeighting):
    sensitivity = margin.sensitivity
    # Rates weightings share a constant first key and are ordered by tenor
    first = "Sensitivity" if sensitivity.risk == SensitivityRisk.RATES else sensitivity.qualifier
    days = sensitivity.tenor.days if sensitivity.tenor is not None else 0
    return (first, days, sensitivity.label2)


def bucket_identifier(bucket: BucketKey) -> str:
    if bucket.is_residual:
        return "Residual"
    if isinstance(bucket, Placeholder):
        return "Common"
    if isinstance(bucket, Currency):
        return bucket.code
    return bucket.description


@dataclass(frozen=True)
class MarginBucket(Margin):
    """Margin of a bucket of a risk class and category (level 6)."""

    bucket: BucketKey

    @classmethod
    def of(cls, bucket: BucketKey, value: Amount, weightings: Sequence[MarginWeighting]) -> MarginBucket:
        _require_children(weightings, "weighting")
        ordered = tuple(sorted(weightings, key=_weighting_sort_key))
        return cls(6, "Bucket", bucket_identifier(bucket), value, ordered, bucket)


def _bucket_sort_key(margin: MarginBucket):
    bucket = margin.bucket
    if bucket.is_residual:
        rank = 1
    elif isinstance(bucket, Placeholder):
        rank = -1
    else:
        rank = 0
    label = bucket.code if isinstance(bucket, Currency) else bucket.description
    return (rank, label)


# =============================================================================
# CATEGORY, RISK, PRODUCT
# =============================================================================


@dataclass(frozen=True)
class MarginSensitivity(Margin):
    """Margin of a sensitivity category within a risk class (level 5)."""

    category: SensitivityCategory

    @classmethod
    def of(cls, category: SensitivityCategory, value: Amount, buckets: Sequence[MarginBucket]) -> MarginSensitivity:
        _require_children(buckets, "bucket")
        ordered = tuple(sorted(buckets, key=_bucket_sort_key))
        return cls(5, "Sensitivity", category.value, value, ordered, category)


@dataclass(frozen=True)
class MarginRisk(Margin):
    """Margin of a risk class within a product (level 4)."""

    risk: SensitivityRisk

    @classmethod
    def of(cls, risk: SensitivityRisk, value: Amount, categories: Sequence[MarginSensitivity]) -> MarginRisk:
        _require_children(categories, "sensitivity")
        ordered = tuple(sorted(categories, key=lambda m: enum_order(m.category)))
        return cls(4, "Risk", risk.value, value, ordered, risk)


@dataclass(frozen=True)
class MarginProduct(Margin):
    """Margin of a product class (level 3)."""

    product: Product

    @classmethod
    def of(cls, product: Product, value: Amount, risks: Sequence[MarginRisk]) -> MarginProduct:
        _require_children(risks, "risk")
        ordered = tuple(sorted(risks, key=lambda m: enum_order(m.risk)))
        return cls(3, "Product", product.value, value, ordered, product)


# =============================================================================
# ADD-ON
# =============================================================================

ADD_ON_NAME = "Add-on"


@dataclass(frozen=True)
class MarginAddOnComponent(Margin):
    """Single add-on contribution (level 4)."""

    # Position of the component kind in the add-on node
    KIND_ORDER = 0


@dataclass(frozen=True)
class MarginAddOnFixedAmount(MarginAddOnComponent):
    KIND_ORDER = 0

    @classmethod
    def of(cls, value: Amount) -> MarginAddOnFixedAmount:
        return cls(4, ADD_ON_NAME, "Fixed", value, ())


@dataclass(frozen=True)
class MarginAddOnNotional(MarginAddOnComponent):
    qualifier: str

    KIND_ORDER = 1

    @classmethod
    def of(cls, qualifier: str, value: Amount) -> MarginAddOnNotional:
        if not qualifier or not qualifier.strip():
            raise ValueError("Invalid qualifier specified.")
        return cls(4, ADD_ON_NAME, f"Notional {qualifier}", value, (), qualifier)


@dataclass(frozen=True)
class MarginAddOnProductMultiplier(MarginAddOnComponent):
    product: Product

    KIND_ORDER = 2

    @classmethod
    def of(cls, product: Product, value: Amount) -> MarginAddOnProductMultiplier:
        return cls(4, ADD_ON_NAME, f"Product {product.value}", value, (), product)


@dataclass(frozen=True)
class MarginAddOn(Margin):
    """Sum of the add-on contributions, sibling of the products (level 3)."""

    @classmethod
    def of(cls, value: Amount, components: Sequence[MarginAddOnComponent]) -> MarginAddOn:
        _require_children(components, "add-on component")
        ordered = tuple(sorted(components, key=lambda m: (m.KIND_ORDER, m.identifier)))
        return cls(3, ADD_ON_NAME, ADD_ON_NAME, value, ordered)


# =============================================================================
# MODEL AND TOTAL
# =============================================================================


@dataclass(frozen=True)
class MarginModel(Margin):
    """Margin of the model method: products followed by the add-on (level 2)."""

    @classmethod
    def of(
        cls,
        value: Amount,
        products: Sequence[MarginProduct],
        add_on: MarginAddOn | None = None,
    ) -> MarginModel:
        if not products and add_on is None:
            raise ValueError("No product or add-on margins have been provided.")

        children: list[Margin] = sorted(products, key=lambda m: enum_order(m.product))
        if add_on is not None:
            children.append(add_on)

        return cls(2, "Model", "SIMM", value, tuple(children))


@dataclass(frozen=True)
class MarginTotal(Margin):
    """
    Root of the margin tree (level 1).

    Attributes:
        role: Side the margin was computed for, None for a processor result
        regulation: Regulation the margin was computed under, if any
        valuation_date: As-of date of the calculation
        calculation_currency: Currency of every amount in the tree
    """

    role: RegulationRole | None
    regulation: Regulation | None
    valuation_date: date
    calculation_currency: Currency

    @classmethod
    def of(
        cls,
        valuation_date: date,
        calculation_currency: Currency,
        children: Sequence[Margin] = (),
        role: RegulationRole | None = None,
        regulation: Regulation | None = None,
    ) -> MarginTotal:
        """
        Build a total from method margins or other totals.

        Totals among the children are replaced by their own children. The
        amount is the sum of the flattened children, negated for the
        pledgor role.

        Raises:
            ValueError: If a regulation is given without a role
        """
        if regulation is not None and role is None:
            raise ValueError("A regulation cannot be specified without a regulation role.")

        flattened: list[Margin] = []
        for child in children:
            if isinstance(child, MarginTotal):
                flattened.extend(child.children)
            else:
                flattened.append(child)

        value = Amount.sum((child.value for child in flattened), calculation_currency)
        if role == RegulationRole.PLEDGOR:
            value = -value

        ordered = tuple(sorted(flattened, key=lambda m: m.identifier.upper()))
        return cls(1, "Total", "Total", value, ordered, role, regulation, valuation_date, calculation_currency)
