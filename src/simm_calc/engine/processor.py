"""
Model processor: the SIMM margin calculation method.

Pipeline position:
    MarginEngine (regulation routing, sign convention) -> ModelProcessor
        -> net_sensitivities -> aggregate_products -> calculate_add_on

Key responsibilities:
- Drop expired records and Fx delta on the calculation currency
- Convert every amount to the calculation currency
- Check the consistency of trades, multipliers and notional factors
- Derive curvature sensitivities from vega and apply volatility weights
- Assemble the Model node inside a MarginTotal

Usage:
    processor = ModelProcessor(config, rates)
    total = processor.process(values, parameters)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from simm_calc.contracts.errors import (
    ERROR_DUPLICATE_FACTOR,
    ERROR_DUPLICATE_MULTIPLIER,
    ERROR_ORPHAN_FACTOR,
    ERROR_ORPHAN_MULTIPLIER,
    ERROR_ORPHAN_NOTIONAL,
    ERROR_TRADE_END_DATES,
    ERROR_TRADE_PRODUCTS,
    ERROR_TRADE_QUALIFIERS,
    DataConsistencyError,
    consistency_error,
)
from simm_calc.contracts.records import (
    AddOnFixedAmount,
    AddOnNotional,
    AddOnNotionalFactor,
    AddOnProductMultiplier,
)
from simm_calc.data.tables.simm_parameters import scaled_days, weight_volatility
from simm_calc.domain.amount import Amount
from simm_calc.domain.enums import Product, SensitivityCategory, SensitivityRisk
from simm_calc.domain.sensitivity import Sensitivity
from simm_calc.engine.aggregator import aggregate_products, calculate_add_on
from simm_calc.engine.margins import MarginModel, MarginTotal
from simm_calc.engine.netting import net_sensitivities

if TYPE_CHECKING:
    from simm_calc.contracts.config import CalculationConfig
    from simm_calc.contracts.protocols import RatesConverter

logger = logging.getLogger(__name__)


class ModelProcessor:
    """
    Compute the model margin of a set of records.

    Implements ProcessorProtocol. Present values are accepted and ignored:
    they only matter to the sign convention applied by the engine.

    Usage:
        processor = ModelProcessor(config, rates)
        total = processor.process(values, parameters)
    """

    def __init__(self, config: CalculationConfig, rates: RatesConverter) -> None:
        self.config = config
        self._rates = rates

    @property
    def rates(self) -> RatesConverter:
        return self._rates

    def process(self, values: Sequence, parameters: Sequence) -> MarginTotal:
        """
        Compute the model margin.

        Args:
            values: Sensitivities, notionals, fixed amounts and present values
            parameters: Product multipliers and notional factors

        Returns:
            MarginTotal holding the Model node, or an empty total when no
            live sensitivity or notional remains

        Raises:
            DataConsistencyError: If trades, multipliers or factors are
                mutually inconsistent
            RateNotFoundError: If an amount cannot be converted
        """
        config = self.config
        currency = config.calculation_currency

        sensitivities = [v for v in values if isinstance(v, Sensitivity)]
        notionals = [v for v in values if isinstance(v, AddOnNotional)]
        fixed_amounts = [v for v in values if isinstance(v, AddOnFixedAmount)]
        multipliers = [p for p in parameters if isinstance(p, AddOnProductMultiplier)]
        factors = [p for p in parameters if isinstance(p, AddOnNotionalFactor)]

        sensitivities = [
            s for s in sensitivities
            if not s.trade.is_expired(config.valuation_date) and not self._is_calculation_currency_fx_delta(s)
        ]
        notionals = [n for n in notionals if not n.trade.is_expired(config.valuation_date)]

        logger.info(
            "Model inputs after sanitization: %d sensitivities, %d notionals, %d fixed amounts",
            len(sensitivities),
            len(notionals),
            len(fixed_amounts),
        )

        if not sensitivities and not notionals:
            return MarginTotal.of(config.valuation_date, currency)

        sensitivities = [s.with_amount(self._convert(s.amount)) for s in sensitivities]
        notionals = [n.with_amount(self._convert(n.amount)) for n in notionals]
        fixed_amounts = [f.with_amount(self._convert(f.amount)) for f in fixed_amounts]

        products, qualifiers = check_trades([*sensitivities, *notionals, *fixed_amounts])
        check_multipliers(multipliers, products)
        check_factors(factors, qualifiers)

        sensitivities = add_curvature(sensitivities)
        netted = net_sensitivities(currency, sensitivities)

        product_margins = aggregate_products(currency, self._rates, netted)
        add_on = calculate_add_on(currency, product_margins, multipliers, notionals, factors, fixed_amounts)

        amount = Amount.sum((m.value for m in product_margins), currency)
        if add_on is not None:
            amount = amount + add_on.value

        model = MarginModel.of(amount, product_margins, add_on)
        return MarginTotal.of(config.valuation_date, currency, [model])

    def _convert(self, amount: Amount) -> Amount:
        return self._rates.convert(amount, self.config.calculation_currency)

    def _is_calculation_currency_fx_delta(self, sensitivity: Sensitivity) -> bool:
        return (
            sensitivity.category == SensitivityCategory.DELTA
            and sensitivity.risk == SensitivityRisk.FX
            and sensitivity.threshold_identifier == self.config.calculation_currency
        )


# =============================================================================
# CONSISTENCY CHECKS
# =============================================================================


def check_trades(values: Sequence) -> tuple[set[Product], set[str]]:
    """
    Check that the records of each trade are consistent.

    A trade must have a single end date, its sensitivities a single product
    and its notionals a single qualifier. Records without trade identity
    share the empty trade and are checked together under its key.

    Returns:
        The products of the sensitivities and the qualifiers of the notionals

    Raises:
        DataConsistencyError: On the first inconsistent trade, by trade key
    """
    by_trade: dict[str, list] = {}
    for value in values:
        by_trade.setdefault(value.trade_key, []).append(value)

    products: set[Product] = set()
    qualifiers: set[str] = set()

    for key in sorted(by_trade):
        records = by_trade[key]

        if len({r.end_date for r in records}) != 1:
            raise DataConsistencyError(consistency_error(
                ERROR_TRADE_END_DATES,
                f'The trade "{key}" defines notionals and present values having different end dates.',
                trade_reference=key,
            ))

        trade_products = {r.product for r in records if isinstance(r, Sensitivity)}
        if len(trade_products) > 1:
            raise DataConsistencyError(consistency_error(
                ERROR_TRADE_PRODUCTS,
                f'The trade "{key}" defines sensitivities having different products.',
                trade_reference=key,
            ))
        products |= trade_products

        trade_qualifiers = {r.qualifier for r in records if isinstance(r, AddOnNotional)}
        if len(trade_qualifiers) > 1:
            raise DataConsistencyError(consistency_error(
                ERROR_TRADE_QUALIFIERS,
                f'The trade "{key}" defines notionals having different qualifiers.',
                trade_reference=key,
            ))
        qualifiers |= trade_qualifiers

    return products, qualifiers


def check_multipliers(multipliers: Sequence[AddOnProductMultiplier], products: set[Product]) -> None:
    """
    Check that each product has at most one multiplier, backed by sensitivities.

    Raises:
        DataConsistencyError: On a duplicated or orphan multiplier
    """
    by_product: dict[Product, list[AddOnProductMultiplier]] = {}
    for multiplier in multipliers:
        by_product.setdefault(multiplier.product, []).append(multiplier)

    for product, group in by_product.items():
        if len(group) > 1:
            raise DataConsistencyError(consistency_error(
                ERROR_DUPLICATE_MULTIPLIER,
                f'The dataset defines multiple product multipliers for product "{product.value}".',
            ))
        if product not in products:
            raise DataConsistencyError(consistency_error(
                ERROR_ORPHAN_MULTIPLIER,
                f'The dataset defines a product multiplier for product "{product.value}", '
                "but no sensitivities are associated to it.",
            ))


def check_factors(factors: Sequence[AddOnNotionalFactor], qualifiers: set[str]) -> None:
    """
    Check that notional factors and notional qualifiers match one to one.

    Raises:
        DataConsistencyError: On a duplicated or orphan factor, or on
            notionals whose qualifier has no factor
    """
    by_qualifier: dict[str, list[AddOnNotionalFactor]] = {}
    for factor in factors:
        by_qualifier.setdefault(factor.qualifier, []).append(factor)

    remaining = set(qualifiers)
    for qualifier, group in by_qualifier.items():
        if len(group) > 1:
            raise DataConsistencyError(consistency_error(
                ERROR_DUPLICATE_FACTOR,
                f'The dataset defines multiple notional factors for qualifier "{qualifier}".',
                qualifier=qualifier,
            ))
        if qualifier not in remaining:
            raise DataConsistencyError(consistency_error(
                ERROR_ORPHAN_FACTOR,
                f'The dataset defines a notional factor for qualifier "{qualifier}", '
                "but no notionals are associated to it.",
                qualifier=qualifier,
            ))
        remaining.discard(qualifier)

    if remaining:
        listed = ", ".join(f'"{q}"' for q in sorted(remaining))
        raise DataConsistencyError(consistency_error(
            ERROR_ORPHAN_NOTIONAL,
            f"The dataset defines notionals without a respective notional factor on the following qualifiers: {listed}.",
        ))


# =============================================================================
# CURVATURE
# =============================================================================


def add_curvature(sensitivities: Sequence[Sensitivity]) -> list[Sensitivity]:
    """
    Derive curvature sensitivities from vega and volatility-weight both.

    Returns:
        Non-vega sensitivities, then the weighted vega sensitivities, then
        the weighted curvature sensitivities
    """
    others = [s for s in sensitivities if s.category != SensitivityCategory.VEGA]
    vega = [s for s in sensitivities if s.category == SensitivityCategory.VEGA]

    curvature = [s.to_curvature(s.amount * scaled_days(s.tenor.days)) for s in vega]
    weighted = [s.with_amount(s.amount * weight_volatility(s)) for s in [*vega, *curvature]]

    return [*others, *weighted]
