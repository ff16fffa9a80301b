"""
SIMM Initial Margin Calculator.

Computes the regulatory initial margin of a portfolio of derivative risk
records by aggregating netted sensitivities through the correlation-weighted
SIMM formula tree, plus any calibration add-ons.

Basic usage:
    >>> from datetime import date
    >>> from simm_calc.contracts.config import CalculationConfig
    >>> from simm_calc.domain.enums import RegulationRole
    >>> from simm_calc.engine.fx_converter import FxRatesProvider
    >>> from simm_calc.engine.pipeline import create_engine
    >>>
    >>> config = CalculationConfig.usd(valuation_date=date(2026, 10, 16))
    >>> engine = create_engine(config, FxRatesProvider())
    >>> total = engine.compute_margin(RegulationRole.SECURED, sensitivities)
"""

__version__ = "0.1.0"
__author__ = "OpenAfterHours"
__license__ = "Apache-2.0"

__all__ = [
    "__version__",
    "__author__",
    "__license__",
]
