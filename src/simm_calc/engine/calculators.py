"""
Category margin calculators for the SIMM model.

Each calculator turns the netted sensitivities of one risk class and one
category into a MarginSensitivity node with its buckets and weightings.

Pipeline position:
    net_sensitivities -> category calculators -> product aggregation

Calculators:
- BaseCorrelationCalculator: single placeholder bucket, flat correlation
- CurvatureCalculator: squared correlations, convexity lambda, floor at zero
- WeightedCalculator: delta and vega, with concentration threshold factors

Usage:
    calculator = CALCULATORS[SensitivityCategory.DELTA]
    margin = calculator.calculate(USD, rates, SensitivityRisk.EQUITY, SensitivityCategory.DELTA, netted)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Sequence

from simm_calc.contracts.errors import StructuralError, undefined_value_error
from simm_calc.data.tables.simm_parameters import (
    CORRELATION_BASE,
    curvature_lambda,
    curvature_scale,
    provider,
    threshold,
    weight_risk,
)
from simm_calc.domain.amount import Amount
from simm_calc.domain.buckets import PLACEHOLDER
from simm_calc.domain.currency import Currency
from simm_calc.domain.enums import SensitivityCategory, SensitivityRisk, SensitivitySubrisk
from simm_calc.domain.sensitivity import BucketKey, Sensitivity
from simm_calc.engine.margins import MarginBucket, MarginSensitivity, MarginWeighting

if TYPE_CHECKING:
    from simm_calc.contracts.protocols import RatesConverter


# =============================================================================
# SHARED HELPERS
# =============================================================================


def _sum_squares(margins, currency: Currency) -> Amount:
    return Amount.sum((m.value.square() for m in margins), currency)


def _group_by_bucket(sensitivities: Sequence[Sensitivity]) -> dict[BucketKey, list[Sensitivity]]:
    """Sensitivities by bucket, buckets ordered by name."""
    groups: dict[BucketKey, list[Sensitivity]] = {}
    for sensitivity in sensitivities:
        groups.setdefault(sensitivity.bucket, []).append(sensitivity)
    return dict(sorted(groups.items(), key=lambda item: item[0].name))


def _bounded_sums(buckets: Sequence[MarginBucket], currency: Currency) -> list[Amount]:
    """Sum of the weightings of each bucket, bounded by +/- the bucket margin."""
    bounded = []
    for bucket in buckets:
        total = Amount.sum((w.value for w in bucket.children), currency)
        bounded.append(total.min(bucket.value).max(-bucket.value))
    return bounded


def _concentration(factor1: Decimal, factor2: Decimal) -> Decimal:
    return min(factor1, factor2) / max(factor1, factor2)


def threshold_factor(
    currency: Currency,
    rates: RatesConverter,
    risk: SensitivityRisk,
    category: SensitivityCategory,
    sensitivities: Sequence[Sensitivity],
) -> Decimal:
    """
    Concentration threshold factor of a group of sensitivities.

    The group shares a bucket and a qualifier, hence a threshold identifier.
    Cross-currency basis sensitivities do not contribute to the rates delta
    concentration.

    Returns:
        max(1, sqrt(|sum of amounts| / threshold))
    """
    if risk == SensitivityRisk.RATES and category == SensitivityCategory.DELTA:
        sensitivities = [s for s in sensitivities if s.subrisk != SensitivitySubrisk.CROSS_CURRENCY_BASIS]
        if not sensitivities:
            return Decimal(1)

    total = abs(Amount.sum((s.amount for s in sensitivities), currency))

    identifiers = {s.threshold_identifier for s in sensitivities}
    if len(identifiers) != 1:
        raise ValueError("The sensitivities of a concentration group must share a single threshold identifier.")

    limit = rates.convert(threshold(risk, category, identifiers.pop()), currency)
    return max(Decimal(1), (total / limit).value.sqrt())


# =============================================================================
# CALCULATORS
# =============================================================================


class MarginCalculator(ABC):
    """Margin of the sensitivities of one risk class and one category."""

    @abstractmethod
    def calculate(
        self,
        currency: Currency,
        rates: RatesConverter,
        risk: SensitivityRisk,
        category: SensitivityCategory,
        sensitivities: Sequence[Sensitivity],
    ) -> MarginSensitivity:
        ...


class BaseCorrelationCalculator(MarginCalculator):
    """
    Credit base correlation margin.

    Every sensitivity lands in a single placeholder bucket; weighted amounts
    are correlated pairwise by the flat base correlation.
    """

    def calculate(self, currency, rates, risk, category, sensitivities):
        weightings = [
            MarginWeighting.of(s, s.amount * weight_risk(SensitivityCategory.BASE_CORRELATION, s))
            for s in sensitivities
        ]

        correlated = Amount.zero(currency)
        for i, w1 in enumerate(weightings):
            for j, w2 in enumerate(weightings):
                if i != j:
                    correlated += w1.value * w2.value * CORRELATION_BASE

        amount = (_sum_squares(weightings, currency) + correlated).sqrt()
        bucket = MarginBucket.of(PLACEHOLDER, amount, weightings)

        return MarginSensitivity.of(SensitivityCategory.BASE_CORRELATION, amount, [bucket])


class CurvatureCalculator(MarginCalculator):
    """
    Curvature margin.

    Bucket margins use squared intra-bucket correlations. Non-residual and
    residual buckets are aggregated separately, each floored at zero after
    the convexity adjustment, and the sum is scaled for the risk class.
    """

    def calculate(self, currency, rates, risk, category, sensitivities):
        parameters = provider(risk)
        buckets: list[MarginBucket] = []

        for bucket, members in _group_by_bucket(sensitivities).items():
            weightings = [
                MarginWeighting.of(s, s.amount * weight_risk(SensitivityCategory.CURVATURE, s))
                for s in members
            ]

            correlated = Amount.zero(currency)
            for i, w1 in enumerate(weightings):
                for j, w2 in enumerate(weightings):
                    if i != j:
                        rho = parameters.correlation_sensitivity(w1.sensitivity, w2.sensitivity)
                        correlated += w1.value * w2.value * (rho * rho)

            amount = (_sum_squares(weightings, currency) + correlated).sqrt()
            buckets.append(MarginBucket.of(bucket, amount, weightings))

        non_residual = self._aggregate(currency, risk, [b for b in buckets if not b.bucket.is_residual], False)
        residual = self._aggregate(currency, risk, [b for b in buckets if b.bucket.is_residual], True)
        amount = (non_residual + residual) * curvature_scale(risk)

        return MarginSensitivity.of(SensitivityCategory.CURVATURE, amount, buckets)

    @staticmethod
    def _aggregate(currency: Currency, risk: SensitivityRisk, buckets: list[MarginBucket], residual: bool) -> Amount:
        cross = _sum_squares(buckets, currency)

        if not residual:
            parameters = provider(risk)
            bounded = _bounded_sums(buckets, currency)
            for i, b1 in enumerate(buckets):
                for j, b2 in enumerate(buckets):
                    if i != j:
                        rho = parameters.correlation_bucket(b1.bucket, b2.bucket)
                        cross += bounded[i] * bounded[j] * (rho * rho)

        weightings = [w for b in buckets for w in b.children]
        cvr = Amount.sum((w.value for w in weightings), currency)
        cvr_absolute = Amount.sum((abs(w.value) for w in weightings), currency)

        theta = Decimal(0) if cvr_absolute.is_zero() else min((cvr / cvr_absolute).value, Decimal(0))
        kappa = cross.sqrt()

        return (cvr + kappa * curvature_lambda(theta)).max(Decimal(0))


class WeightedCalculator(MarginCalculator):
    """
    Delta and vega margin.

    Weighted amounts are scaled by the concentration threshold factor of
    their qualifier and correlated within buckets, with the correlation
    damped by the ratio of the factors. Residual buckets are added
    uncorrelated on top of the non-residual aggregation.
    """

    def calculate(self, currency, rates, risk, category, sensitivities):
        parameters = provider(risk)
        buckets: list[MarginBucket] = []
        bucket_factors: dict[BucketKey, dict[str, Decimal]] = {}

        for bucket, members in _group_by_bucket(sensitivities).items():
            by_qualifier: dict[str, list[Sensitivity]] = {}
            for s in members:
                by_qualifier.setdefault(s.qualifier, []).append(s)

            factors = {
                qualifier: threshold_factor(currency, rates, risk, category, group)
                for qualifier, group in by_qualifier.items()
            }
            bucket_factors[bucket] = factors

            weightings = []
            for s in members:
                factor = Decimal(1) if s.subrisk == SensitivitySubrisk.CROSS_CURRENCY_BASIS else factors[s.qualifier]
                weightings.append(MarginWeighting.of(s, s.amount * weight_risk(category, s) * factor))

            correlated = Amount.zero(currency)
            for i, w1 in enumerate(weightings):
                for j, w2 in enumerate(weightings):
                    if i != j:
                        s1, s2 = w1.sensitivity, w2.sensitivity
                        rho = parameters.correlation_sensitivity(s1, s2)
                        concentration = _concentration(factors[s1.qualifier], factors[s2.qualifier])
                        correlated += w1.value * w2.value * (rho * concentration)

            amount = (_sum_squares(weightings, currency) + correlated).sqrt()
            buckets.append(MarginBucket.of(bucket, amount, weightings))

        non_residual = [b for b in buckets if not b.bucket.is_residual]
        residual = [b for b in buckets if b.bucket.is_residual]

        # Rates delta buckets hold a single qualifier, the bucket currency
        damped = risk == SensitivityRisk.RATES and category == SensitivityCategory.DELTA

        bounded = _bounded_sums(non_residual, currency)
        cross = Amount.zero(currency)
        for i, b1 in enumerate(non_residual):
            for j, b2 in enumerate(non_residual):
                if i != j:
                    rho = parameters.correlation_bucket(b1.bucket, b2.bucket)
                    if damped:
                        f1 = _single_factor(bucket_factors[b1.bucket])
                        f2 = _single_factor(bucket_factors[b2.bucket])
                        rho = rho * _concentration(f1, f2)
                    cross += bounded[i] * bounded[j] * rho

        amount = (_sum_squares(non_residual, currency) + cross).sqrt() + _sum_squares(residual, currency).sqrt()
        return MarginSensitivity.of(category, amount, buckets)


def _single_factor(factors: dict[str, Decimal]) -> Decimal:
    if len(factors) != 1:
        raise ValueError("A rates delta bucket must define a single concentration factor.")
    return next(iter(factors.values()))


_WEIGHTED = WeightedCalculator()

CALCULATORS: dict[SensitivityCategory, MarginCalculator] = {
    SensitivityCategory.BASE_CORRELATION: BaseCorrelationCalculator(),
    SensitivityCategory.CURVATURE: CurvatureCalculator(),
    SensitivityCategory.DELTA: _WEIGHTED,
    SensitivityCategory.VEGA: _WEIGHTED,
}


def calculate_category(
    currency: Currency,
    rates: RatesConverter,
    risk: SensitivityRisk,
    category: SensitivityCategory,
    sensitivities: Sequence[Sensitivity],
) -> MarginSensitivity:
    """
    Dispatch the sensitivities of a risk class and category to their calculator.

    Raises:
        StructuralError: If the category has no calculator
    """
    calculator = CALCULATORS.get(category)
    if calculator is None:
        raise StructuralError(undefined_value_error("sensitivity category", str(category)))
    return calculator.calculate(currency, rates, risk, category, sensitivities)
