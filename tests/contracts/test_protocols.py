"""Tests for protocol definitions.

Tests that stub and concrete implementations satisfy the Protocol
definitions, and that the engine accepts any conforming collaborator.
"""

from datetime import date
from decimal import Decimal

import pytest

from simm_calc.contracts.config import CalculationConfig
from simm_calc.contracts.protocols import ParametersProvider, ProcessorProtocol, RatesConverter
from simm_calc.data.tables.simm_parameters import PARAMETER_PROVIDERS
from simm_calc.domain.amount import Amount
from simm_calc.domain.buckets import BucketEquity
from simm_calc.domain.currency import EUR, USD
from simm_calc.domain.enums import RegulationRole, SensitivityRisk
from simm_calc.domain.sensitivity import Sensitivity
from simm_calc.engine.fx_converter import FxRatesProvider
from simm_calc.engine.pipeline import MarginEngine
from simm_calc.engine.processor import ModelProcessor


class ParityRates:
    """Converter treating every currency at par."""

    def convert(self, amount: Amount, currency) -> Amount:
        return Amount.of(currency, amount.value)


class NotAConverter:
    def translate(self, amount, currency):
        return amount


class TestRatesConverter:
    """Tests for the RatesConverter protocol."""

    def test_fx_rates_provider_conforms(self):
        assert isinstance(FxRatesProvider(), RatesConverter)

    def test_stub_conforms(self):
        assert isinstance(ParityRates(), RatesConverter)

    def test_missing_method_does_not_conform(self):
        assert not isinstance(NotAConverter(), RatesConverter)

    def test_engine_accepts_stub(self):
        config = CalculationConfig.usd(date(2026, 10, 16))
        engine = MarginEngine(config, ParityRates())
        sensitivity = Sensitivity.equity_delta("ACME", BucketEquity.of(1), Amount.of(EUR, 1000))

        result = engine.calculate(RegulationRole.SECURED, [sensitivity])

        assert result == Amount.of(USD, 24000)


class TestParametersProvider:
    """Tests for the ParametersProvider protocol."""

    @pytest.mark.parametrize("risk", list(PARAMETER_PROVIDERS))
    def test_every_provider_conforms(self, risk: SensitivityRisk):
        assert isinstance(PARAMETER_PROVIDERS[risk], ParametersProvider)


class TestProcessorProtocol:
    """Tests for the ProcessorProtocol protocol."""

    def test_model_processor_conforms(self):
        config = CalculationConfig.usd(date(2026, 10, 16))

        assert isinstance(ModelProcessor(config, ParityRates()), ProcessorProtocol)

    def test_object_without_process_does_not_conform(self):
        class Stub:
            config = None

        assert not isinstance(Stub(), ProcessorProtocol)

    def test_model_processor_uses_config_currency(self):
        config = CalculationConfig.of(EUR, date(2026, 10, 16))
        processor = ModelProcessor(config, ParityRates())
        sensitivity = Sensitivity.equity_delta("ACME", BucketEquity.of(1), Amount.of(USD, Decimal(1000)))

        total = processor.process([sensitivity], [])

        assert total.value == Amount.of(EUR, 24000)
