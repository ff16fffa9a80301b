"""
Contracts module for the SIMM calculator.

Provides the configuration, error handling, protocols and validation
utilities shared by the calculation components. This module enables:
- Isolated unit testing of each component
- Clear boundaries between parameters, processors and the engine

Submodules:
- config: CalculationConfig
- errors: CalculationError, exception types and error codes
- protocols: Protocol definitions for component interfaces
- records: Input records (add-ons, present values, regulations, trades)
- validation: Schema and field validation utilities

Records are imported from simm_calc.contracts.records directly.
"""

# Configuration contracts
from simm_calc.contracts.config import CalculationConfig

# Error handling contracts
from simm_calc.contracts.errors import (
    ERROR_CURRENCY_MISMATCH,
    ERROR_DUPLICATE_FACTOR,
    ERROR_DUPLICATE_MULTIPLIER,
    ERROR_INVALID_RATE,
    ERROR_MISSING_COLUMN,
    ERROR_MISSING_PARAMETER,
    ERROR_MULTIPLE_REGULATIONS,
    ERROR_NEGATIVE_SQUARE_ROOT,
    ERROR_ORPHAN_FACTOR,
    ERROR_ORPHAN_MULTIPLIER,
    ERROR_ORPHAN_NOTIONAL,
    ERROR_RATE_ALREADY_DEFINED,
    ERROR_RATE_NOT_DEFINED,
    ERROR_RATE_NOT_TRIANGULATED,
    ERROR_TRADE_END_DATES,
    ERROR_TRADE_PRODUCTS,
    ERROR_TRADE_QUALIFIERS,
    ERROR_TYPE_MISMATCH,
    ERROR_UNDEFINED_VALUE,
    CalculationError,
    DataConsistencyError,
    RateNotFoundError,
    RegulationPolicyError,
    SimmError,
    StructuralError,
)

# Protocol definitions
from simm_calc.contracts.protocols import (
    ParametersProvider,
    ProcessorProtocol,
    RatesConverter,
)

# Validation utilities
from simm_calc.contracts.validation import (
    raise_on_schema_errors,
    validate_schema,
)

__all__ = [
    # Config
    "CalculationConfig",
    # Errors
    "CalculationError",
    "DataConsistencyError",
    "RateNotFoundError",
    "RegulationPolicyError",
    "SimmError",
    "StructuralError",
    "ERROR_CURRENCY_MISMATCH",
    "ERROR_DUPLICATE_FACTOR",
    "ERROR_DUPLICATE_MULTIPLIER",
    "ERROR_INVALID_RATE",
    "ERROR_MISSING_COLUMN",
    "ERROR_MISSING_PARAMETER",
    "ERROR_MULTIPLE_REGULATIONS",
    "ERROR_NEGATIVE_SQUARE_ROOT",
    "ERROR_ORPHAN_FACTOR",
    "ERROR_ORPHAN_MULTIPLIER",
    "ERROR_ORPHAN_NOTIONAL",
    "ERROR_RATE_ALREADY_DEFINED",
    "ERROR_RATE_NOT_DEFINED",
    "ERROR_RATE_NOT_TRIANGULATED",
    "ERROR_TRADE_END_DATES",
    "ERROR_TRADE_PRODUCTS",
    "ERROR_TRADE_QUALIFIERS",
    "ERROR_TYPE_MISMATCH",
    "ERROR_UNDEFINED_VALUE",
    # Protocols
    "ParametersProvider",
    "ProcessorProtocol",
    "RatesConverter",
    # Validation
    "raise_on_schema_errors",
    "validate_schema",
]
