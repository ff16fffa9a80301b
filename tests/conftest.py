"""
Shared fixtures for the SIMM calculator tests.

Provides the exchange rates used across the suite (USD-based direct rates,
every other pair obtained through triangulation), a USD calculation
configuration and an engine wired on both.
"""

from datetime import date
from decimal import Decimal

import pytest

from simm_calc.contracts.config import CalculationConfig
from simm_calc.domain.currency import AUD, CAD, CHF, EUR, GBP, JPY, USD
from simm_calc.engine.fx_converter import FxRatesProvider
from simm_calc.engine.pipeline import MarginEngine, create_engine


VALUATION_DATE = date(2026, 10, 16)


# =============================================================================
# RATES
# =============================================================================


@pytest.fixture
def rates() -> FxRatesProvider:
    """USD-based direct rates."""
    provider = FxRatesProvider()
    provider.add_rate(USD, EUR, Decimal("0.89238894"))
    provider.add_rate(USD, GBP, Decimal("0.776923679"))
    provider.add_rate(USD, JPY, Decimal("109.5921338456"))
    provider.add_rate(USD, CAD, Decimal("1.3436510634"))
    provider.add_rate(USD, CHF, Decimal("1.009007713"))
    provider.add_rate(USD, AUD, Decimal("1.4432844156"))
    return provider


# =============================================================================
# CONFIGURATION AND ENGINE
# =============================================================================


@pytest.fixture
def valuation_date() -> date:
    return VALUATION_DATE


@pytest.fixture
def usd_config(valuation_date: date) -> CalculationConfig:
    """USD calculation as of the test valuation date."""
    return CalculationConfig.usd(valuation_date=valuation_date)


@pytest.fixture
def engine(usd_config: CalculationConfig, rates: FxRatesProvider) -> MarginEngine:
    return create_engine(usd_config, rates)
