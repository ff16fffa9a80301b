"""
Domain module for the SIMM calculator.

Contains the enumerations, value objects (currencies, amounts, tenors,
buckets) and the sensitivity record used throughout the calculation.
Only the enumerations are re-exported here; value objects are imported
from their own modules.
"""

from simm_calc.domain.enums import (
    Curve,
    CurrencyCategory,
    CurrencyLiquidity,
    CurrencyVolatility,
    ErrorCategory,
    ErrorSeverity,
    Product,
    Regulation,
    RegulationRole,
    SensitivityCategory,
    SensitivityRisk,
    SensitivitySubrisk,
)

__all__ = [
    "Curve",
    "CurrencyCategory",
    "CurrencyLiquidity",
    "CurrencyVolatility",
    "ErrorCategory",
    "ErrorSeverity",
    "Product",
    "Regulation",
    "RegulationRole",
    "SensitivityCategory",
    "SensitivityRisk",
    "SensitivitySubrisk",
]
