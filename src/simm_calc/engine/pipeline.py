"""
Margin engine: regulation routing and sign convention around the processors.

Pipeline position:
    Entry point: records -> MarginEngine -> ModelProcessor -> MarginTotal

Key responsibilities:
- Select the regulations of each record for the requested role (post
  regulations for the pledgor, collect regulations for the secured party)
- Flip the sign of sensitivities for the pledgor and of present values for
  the secured party
- Run every processor and combine their totals
- Compute margins per regulation and the worst-of across regulations

Usage:
    from simm_calc.engine.pipeline import create_engine

    engine = create_engine(config, rates)
    total = engine.compute_margin(RegulationRole.SECURED, values, parameters)
    by_regulation = engine.compute_margin_by_regulation(RegulationRole.PLEDGOR, values)
    worst = engine.calculate_worst_of(RegulationRole.SECURED, values)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from simm_calc.contracts.errors import (
    ERROR_MULTIPLE_REGULATIONS,
    RegulationPolicyError,
    policy_error,
)
from simm_calc.contracts.records import PresentValue
from simm_calc.domain.amount import Amount
from simm_calc.domain.enums import Regulation, RegulationRole, enum_order
from simm_calc.domain.sensitivity import Sensitivity
from simm_calc.engine.margins import MarginTotal
from simm_calc.engine.processor import ModelProcessor

if TYPE_CHECKING:
    from simm_calc.contracts.config import CalculationConfig
    from simm_calc.contracts.protocols import ProcessorProtocol, RatesConverter

logger = logging.getLogger(__name__)


def _check_role(role: RegulationRole) -> None:
    if not isinstance(role, RegulationRole):
        raise ValueError(f"Invalid regulation role specified: '{role}'.")


def record_regulations(record, role: RegulationRole) -> tuple[Regulation, ...]:
    """Regulations of a record seen from one side of the margin."""
    if role == RegulationRole.PLEDGOR:
        return record.post_regulations
    return record.collect_regulations


class MarginEngine:
    """
    Compute initial margins for a calculation configuration.

    Usage:
        engine = MarginEngine(config, rates)
        total = engine.compute_margin(RegulationRole.SECURED, values)
    """

    def __init__(
        self,
        config: CalculationConfig,
        rates: RatesConverter,
        processors: Sequence[ProcessorProtocol] | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            config: Valuation date and calculation currency
            rates: Converter used to bring every amount to the calculation currency
            processors: Calculation methods; the model processor by default
        """
        self.config = config
        self.rates = rates
        self.processors: list[ProcessorProtocol] = (
            list(processors) if processors is not None else [ModelProcessor(config, rates)]
        )

    # =========================================================================
    # REGULATIONS
    # =========================================================================

    @staticmethod
    def regulations(role: RegulationRole, values: Sequence, parameters: Sequence = ()) -> list[Regulation]:
        """Union of the regulations of every record for the role, in declaration order."""
        _check_role(role)
        found: set[Regulation] = set()
        for record in [*values, *parameters]:
            found.update(record_regulations(record, role))
        return sorted(found, key=enum_order)

    @staticmethod
    def _adjust_sign(role: RegulationRole, values: Sequence) -> list:
        adjusted = []
        for value in values:
            if role == RegulationRole.PLEDGOR and isinstance(value, Sensitivity):
                value = value.with_amount(-value.amount)
            elif role == RegulationRole.SECURED and isinstance(value, PresentValue):
                value = value.with_amount(-value.amount)
            adjusted.append(value)
        return adjusted

    # =========================================================================
    # MARGIN TREES
    # =========================================================================

    def compute_margin(
        self,
        role: RegulationRole,
        values: Sequence,
        parameters: Sequence = (),
    ) -> MarginTotal:
        """
        Compute the margin of records belonging to at most one regulation.

        Args:
            role: Side the margin is computed for
            values: Sensitivities, notionals, fixed amounts and present values
            parameters: Product multipliers and notional factors

        Returns:
            Total margin tree, negative for the pledgor

        Raises:
            RegulationPolicyError: If the records span several regulations
            DataConsistencyError: If the records are mutually inconsistent
        """
        regulations = self.regulations(role, values, parameters)

        if len(regulations) > 1:
            side = "post" if role == RegulationRole.PLEDGOR else "collect"
            raise RegulationPolicyError(policy_error(
                ERROR_MULTIPLE_REGULATIONS,
                "All data entities must either have no regulations defined "
                f"or belong to a single {side} regulation.",
            ))

        regulation = regulations[0] if regulations else None
        return self._compute(role, regulation, values, parameters)

    def _compute(
        self,
        role: RegulationRole,
        regulation: Regulation | None,
        values: Sequence,
        parameters: Sequence,
    ) -> MarginTotal:
        adjusted = self._adjust_sign(role, values)
        totals = [processor.process(adjusted, list(parameters)) for processor in self.processors]

        total = MarginTotal.of(
            self.config.valuation_date,
            self.config.calculation_currency,
            totals,
            role=role,
            regulation=regulation,
        )

        logger.info(
            "Margin %s under %s: %s",
            role.value,
            regulation.value if regulation is not None else "no regulation",
            total.value,
        )
        return total

    def compute_margin_by_regulation(
        self,
        role: RegulationRole,
        values: Sequence,
        parameters: Sequence = (),
    ) -> dict[Regulation, MarginTotal]:
        """
        Compute one margin tree per regulation.

        Each regulation receives the records listing it for the role.

        Returns:
            Margin trees by regulation in declaration order, empty when no
            record defines a regulation
        """
        result: dict[Regulation, MarginTotal] = {}

        for regulation in self.regulations(role, values, parameters):
            selected_values = [v for v in values if regulation in record_regulations(v, role)]
            selected_parameters = [p for p in parameters if regulation in record_regulations(p, role)]
            result[regulation] = self._compute(role, regulation, selected_values, selected_parameters)

        return result

    def compute_worst_of(
        self,
        role: RegulationRole,
        values: Sequence,
        parameters: Sequence = (),
    ) -> MarginTotal:
        """
        Margin tree of the regulation with the largest absolute margin.

        Ties go to the regulation declared first. Without regulations the
        records are computed as a single unregulated set.
        """
        by_regulation = self.compute_margin_by_regulation(role, values, parameters)

        if not by_regulation:
            return self.compute_margin(role, values, parameters)

        worst = None
        for total in by_regulation.values():
            if worst is None or abs(total.value.value) > abs(worst.value.value):
                worst = total
        return worst

    # =========================================================================
    # AMOUNTS
    # =========================================================================

    def calculate(self, role: RegulationRole, values: Sequence, parameters: Sequence = ()) -> Amount:
        return self.compute_margin(role, values, parameters).value

    def calculate_by_regulation(
        self,
        role: RegulationRole,
        values: Sequence,
        parameters: Sequence = (),
    ) -> dict[Regulation, Amount]:
        return {
            regulation: total.value
            for regulation, total in self.compute_margin_by_regulation(role, values, parameters).items()
        }

    def calculate_worst_of(self, role: RegulationRole, values: Sequence, parameters: Sequence = ()) -> Amount:
        return self.compute_worst_of(role, values, parameters).value


def create_engine(config: CalculationConfig, rates: RatesConverter) -> MarginEngine:
    """
    Create a margin engine with the default processors.

    Args:
        config: Valuation date and calculation currency
        rates: Exchange rates provider

    Returns:
        Configured MarginEngine
    """
    return MarginEngine(config, rates)
