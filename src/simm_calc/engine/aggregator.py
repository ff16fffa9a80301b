"""
Aggregation of category margins into product margins and the add-on.

Pipeline position:
    category calculators -> aggregate_products -> calculate_add_on -> MarginModel

Key responsibilities:
- Risk margins as the plain sum of their category margins
- Product margins as the correlated root-sum-square of their risk margins
- Add-on components: product multipliers, notional factors, fixed amounts
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Sequence

from simm_calc.data.tables.simm_parameters import correlation_risk
from simm_calc.domain.amount import Amount
from simm_calc.domain.currency import Currency
from simm_calc.domain.enums import Product, enum_order
from simm_calc.domain.sensitivity import Sensitivity
from simm_calc.engine.calculators import calculate_category
from simm_calc.engine.margins import (
    MarginAddOn,
    MarginAddOnComponent,
    MarginAddOnFixedAmount,
    MarginAddOnNotional,
    MarginAddOnProductMultiplier,
    MarginProduct,
    MarginRisk,
)

if TYPE_CHECKING:
    from simm_calc.contracts.protocols import RatesConverter
    from simm_calc.contracts.records import (
        AddOnFixedAmount,
        AddOnNotional,
        AddOnNotionalFactor,
        AddOnProductMultiplier,
    )

logger = logging.getLogger(__name__)


# =============================================================================
# PRODUCTS
# =============================================================================


def _risk_margins(currency: Currency, rates: RatesConverter, sensitivities: Sequence[Sensitivity]) -> list[MarginRisk]:
    margins: list[MarginRisk] = []

    for risk in sorted({s.risk for s in sensitivities}, key=lambda r: r.value):
        by_risk = [s for s in sensitivities if s.risk == risk]

        categories = []
        for category in sorted({s.category for s in by_risk}, key=lambda c: c.value):
            by_category = [s for s in by_risk if s.category == category]
            categories.append(calculate_category(currency, rates, risk, category, by_category))

        amount = Amount.sum((m.value for m in categories), currency)
        margins.append(MarginRisk.of(risk, amount, categories))

    return margins


def aggregate_products(
    currency: Currency,
    rates: RatesConverter,
    sensitivities: Sequence[Sensitivity],
) -> list[MarginProduct]:
    """
    Compute the margin of every product present among the sensitivities.

    Args:
        currency: Calculation currency
        rates: Converter used for the concentration thresholds
        sensitivities: Netted, weighted sensitivities in the calculation currency

    Returns:
        Product margins in product declaration order
    """
    margins: list[MarginProduct] = []

    for product in sorted({s.product for s in sensitivities}, key=enum_order):
        risks = _risk_margins(currency, rates, [s for s in sensitivities if s.product == product])

        correlated = Amount.zero(currency)
        for r1 in risks:
            for r2 in risks:
                if r1.risk != r2.risk:
                    correlated += r1.value * r2.value * correlation_risk(r1.risk, r2.risk)

        amount = (Amount.sum((r.value.square() for r in risks), currency) + correlated).sqrt()
        margins.append(MarginProduct.of(product, amount, risks))

        logger.debug("Product %s margin: %s (%d risks)", product.value, amount, len(risks))

    return margins


# =============================================================================
# ADD-ON
# =============================================================================


def _product_multiplier_components(
    products: Sequence[MarginProduct],
    multipliers: Sequence[AddOnProductMultiplier],
) -> list[MarginAddOnComponent]:
    by_product: dict[Product, Decimal] = {}
    for multiplier in multipliers:
        by_product.setdefault(multiplier.product, multiplier.multiplier)

    margins = {m.product: m.value for m in products}
    return [
        MarginAddOnProductMultiplier.of(product, margins[product] * multiplier)
        for product, multiplier in by_product.items()
        if product in margins
    ]


def _notional_components(
    currency: Currency,
    notionals: Sequence[AddOnNotional],
    factors: Sequence[AddOnNotionalFactor],
) -> list[MarginAddOnComponent]:
    by_qualifier: dict[str, Decimal] = {}
    for factor in factors:
        by_qualifier.setdefault(factor.qualifier, factor.factor)

    components: list[MarginAddOnComponent] = []
    for qualifier, factor in by_qualifier.items():
        matching = [abs(n.amount) for n in notionals if n.qualifier == qualifier]
        if not matching:
            continue
        components.append(MarginAddOnNotional.of(qualifier, Amount.sum(matching, currency) * factor))

    return components


def calculate_add_on(
    currency: Currency,
    products: Sequence[MarginProduct],
    multipliers: Sequence[AddOnProductMultiplier],
    notionals: Sequence[AddOnNotional],
    factors: Sequence[AddOnNotionalFactor],
    fixed_amounts: Sequence[AddOnFixedAmount],
) -> MarginAddOn | None:
    """
    Compute the add-on margin.

    Components are the product margins scaled by their multipliers, the
    absolute notionals of each qualifier scaled by its factor and the sum
    of the fixed amounts.

    Returns:
        The add-on node, None when no component applies
    """
    components: list[MarginAddOnComponent] = []
    components.extend(_product_multiplier_components(products, multipliers))
    components.extend(_notional_components(currency, notionals, factors))

    if fixed_amounts:
        components.append(MarginAddOnFixedAmount.of(Amount.sum((f.amount for f in fixed_amounts), currency)))

    if not components:
        return None

    amount = Amount.sum((c.value for c in components), currency)
    logger.debug("Add-on margin: %s (%d components)", amount, len(components))
    return MarginAddOn.of(amount, components)
