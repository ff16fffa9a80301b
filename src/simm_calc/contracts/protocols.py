"""
Protocol definitions for SIMM calculator components.

Defines interfaces using Python's Protocol (PEP 544) for structural
typing. Components implementing these protocols can be:
- Easily mocked for unit testing
- Swapped for different implementations

Three seams are defined:
    ParametersProvider: risk weights, correlations and thresholds of one
        risk class
    RatesConverter: currency conversion collaborator consumed by the engine
    ProcessorProtocol: a margin calculation method (the model method)
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from simm_calc.contracts.config import CalculationConfig
    from simm_calc.contracts.records import (
        AddOnFixedAmount,
        AddOnNotional,
        AddOnNotionalFactor,
        AddOnProductMultiplier,
        PresentValue,
    )
    from simm_calc.domain.amount import Amount
    from simm_calc.domain.currency import Currency
    from simm_calc.domain.sensitivity import BucketKey, Sensitivity, ThresholdIdentifier
    from simm_calc.engine.margins import MarginTotal


@runtime_checkable
class ParametersProvider(Protocol):
    """
    Parameter tables of a single risk class.

    Thresholds are expressed in millions of USD; callers scale and convert
    them to the calculation currency.
    """

    def correlation_bucket(self, bucket1: BucketKey, bucket2: BucketKey) -> Decimal:
        """Correlation between two buckets of the risk class."""
        ...

    def correlation_sensitivity(self, sensitivity1: Sensitivity, sensitivity2: Sensitivity) -> Decimal:
        """Correlation between two sensitivities of the same bucket."""
        ...

    def risk_weight_delta(self, sensitivity: Sensitivity) -> Decimal:
        ...

    def risk_weight_vega(self, sensitivity: Sensitivity) -> Decimal:
        ...

    def threshold_delta(self, threshold_identifier: ThresholdIdentifier) -> Decimal:
        ...

    def threshold_vega(self, threshold_identifier: ThresholdIdentifier) -> Decimal:
        ...


@runtime_checkable
class RatesConverter(Protocol):
    """
    Currency conversion collaborator.

    Implementations must support direct pairs and one-hop triangulation.
    """

    def convert(self, amount: Amount, currency: Currency) -> Amount:
        """
        Convert an amount into another currency.

        Raises:
            RateNotFoundError: If no direct or triangulated rate exists
        """
        ...


@runtime_checkable
class ProcessorProtocol(Protocol):
    """
    Protocol for margin calculation methods.

    A processor is built from the calculation configuration and the rates
    converter. It receives records already filtered to one regulation and
    sign-adjusted for the role, and returns the total margin tree.
    """

    config: CalculationConfig

    def process(
        self,
        values: Sequence[Sensitivity | AddOnNotional | AddOnFixedAmount | PresentValue],
        parameters: Sequence[AddOnNotionalFactor | AddOnProductMultiplier],
    ) -> MarginTotal:
        """
        Compute the margin of a set of records.

        Raises:
            DataConsistencyError: If the records are mutually inconsistent
            RateNotFoundError: If an amount cannot be converted
        """
        ...
