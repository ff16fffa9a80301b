"""
Netting of sensitivities sharing the same risk key.

Netting collapses the sensitivities of every risk class into one record
per risk key, summing their amounts. The netted records carry no trade
identity or regulations: they only feed the margin aggregation.

Risk keys by family:
    BaseCorrelation       qualifier
    Commodity / Equity    category, qualifier, bucket
    CreditNonQualifying   category, qualifier, bucket, tenor
    CreditQualifying      category, qualifier, bucket, tenor, label2
    CrossCurrencyBasis    bucket (currency)
    Fx                    category, threshold identifier
    Inflation             category, bucket (currency)
    InterestRate          category, bucket (currency), label2, tenor

Usage:
    netted = net_sensitivities(USD, sensitivities)
"""

from __future__ import annotations

import logging
from typing import Callable, Hashable, Iterable, Sequence

from simm_calc.domain.amount import Amount
from simm_calc.domain.currency import Currency
from simm_calc.domain.enums import SensitivityCategory, SensitivityRisk, SensitivitySubrisk
from simm_calc.domain.sensitivity import Sensitivity

logger = logging.getLogger(__name__)


def _group(sensitivities: Iterable[Sensitivity], key: Callable[[Sensitivity], Hashable]) -> dict:
    """Group sensitivities by key, keeping first-seen order."""
    groups: dict = {}
    for sensitivity in sensitivities:
        groups.setdefault(key(sensitivity), []).append(sensitivity)
    return groups


def _sum(group: Sequence[Sensitivity], currency: Currency) -> Amount:
    return Amount.sum((s.amount for s in group), currency)


def _is_base_correlation(s: Sensitivity) -> bool:
    return s.category == SensitivityCategory.BASE_CORRELATION


def _is_rates(s: Sensitivity, subrisk: SensitivitySubrisk) -> bool:
    return s.risk == SensitivityRisk.RATES and s.subrisk == subrisk


# =============================================================================
# NETTING BY FAMILY
# =============================================================================


def _net_base_correlation(sensitivities, currency):
    selected = [s for s in sensitivities if _is_base_correlation(s)]
    return [
        Sensitivity.netted_base_correlation(qualifier, _sum(group, currency))
        for qualifier, group in _group(selected, lambda s: s.qualifier).items()
    ]


def _net_commodity(sensitivities, currency):
    selected = [s for s in sensitivities if s.risk == SensitivityRisk.COMMODITY]
    return [
        Sensitivity.netted_commodity(category, qualifier, bucket, _sum(group, currency))
        for (category, qualifier, bucket), group in _group(
            selected, lambda s: (s.category, s.qualifier, s.bucket)
        ).items()
    ]


def _net_credit_non_qualifying(sensitivities, currency):
    selected = [s for s in sensitivities if s.risk == SensitivityRisk.CREDIT_NON_QUALIFYING]
    return [
        Sensitivity.netted_credit_non_qualifying(category, qualifier, bucket, tenor, _sum(group, currency))
        for (category, qualifier, bucket, tenor), group in _group(
            selected, lambda s: (s.category, s.qualifier, s.bucket, s.tenor)
        ).items()
    ]


def _net_credit_qualifying(sensitivities, currency):
    selected = [
        s for s in sensitivities
        if s.risk == SensitivityRisk.CREDIT_QUALIFYING and not _is_base_correlation(s)
    ]
    return [
        Sensitivity.netted_credit_qualifying(category, qualifier, bucket, tenor, label2, _sum(group, currency))
        for (category, qualifier, bucket, tenor, label2), group in _group(
            selected, lambda s: (s.category, s.qualifier, s.bucket, s.tenor, s.label2)
        ).items()
    ]


def _net_cross_currency_basis(sensitivities, currency):
    selected = [s for s in sensitivities if _is_rates(s, SensitivitySubrisk.CROSS_CURRENCY_BASIS)]
    return [
        Sensitivity.netted_cross_currency_basis(bucket, _sum(group, currency))
        for bucket, group in _group(selected, lambda s: s.bucket).items()
    ]


def _net_equity(sensitivities, currency):
    selected = [s for s in sensitivities if s.risk == SensitivityRisk.EQUITY]
    return [
        Sensitivity.netted_equity(category, qualifier, bucket, _sum(group, currency))
        for (category, qualifier, bucket), group in _group(
            selected, lambda s: (s.category, s.qualifier, s.bucket)
        ).items()
    ]


def _net_fx(sensitivities, currency):
    selected = [s for s in sensitivities if s.risk == SensitivityRisk.FX]
    return [
        Sensitivity.netted_fx(category, threshold_identifier, _sum(group, currency))
        for (category, threshold_identifier), group in _group(
            selected, lambda s: (s.category, s.threshold_identifier)
        ).items()
    ]


def _net_inflation(sensitivities, currency):
    selected = [s for s in sensitivities if _is_rates(s, SensitivitySubrisk.INFLATION)]
    return [
        Sensitivity.netted_inflation(category, bucket, _sum(group, currency))
        for (category, bucket), group in _group(selected, lambda s: (s.category, s.bucket)).items()
    ]


def _net_interest_rate(sensitivities, currency):
    selected = [s for s in sensitivities if _is_rates(s, SensitivitySubrisk.INTEREST_RATE)]
    return [
        Sensitivity.netted_interest_rate(category, bucket, tenor, label2, _sum(group, currency))
        for (category, bucket, label2, tenor), group in _group(
            selected, lambda s: (s.category, s.bucket, s.label2, s.tenor)
        ).items()
    ]


NETTING_STEPS = (
    _net_base_correlation,
    _net_commodity,
    _net_credit_non_qualifying,
    _net_credit_qualifying,
    _net_cross_currency_basis,
    _net_equity,
    _net_fx,
    _net_inflation,
    _net_interest_rate,
)


def net_sensitivities(calculation_currency: Currency, sensitivities: Sequence[Sensitivity]) -> list[Sensitivity]:
    """
    Net sensitivities by risk key.

    Args:
        calculation_currency: Currency of the netted amounts; every input
            amount must already be expressed in it
        sensitivities: Sensitivities of any risk class and category

    Returns:
        Netted sensitivities, family by family in a fixed order, groups in
        first-seen order within each family
    """
    netted: list[Sensitivity] = []
    for step in NETTING_STEPS:
        netted.extend(step(sensitivities, calculation_currency))

    logger.debug("Netted %d sensitivities into %d", len(sensitivities), len(netted))
    return netted
