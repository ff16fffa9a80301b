"""
SIMM parameter tables for margin calculations.

This module provides the static parameter tables of the SIMM model, one
module per risk class, as Decimal mappings for the calculation and as
Polars DataFrames for inspection and reporting.

Modules:
    simm_common: Matrix and vector builders shared by the tables
    simm_commodity: Commodity risk weights, correlations and thresholds
    simm_credit: Credit qualifying and non-qualifying parameters
    simm_equity: Equity risk weights, correlations and thresholds
    simm_fx: Fx risk weights and currency-category thresholds
    simm_rates: Interest-rate tenor correlations, weights and thresholds
    simm_parameters: Model constants, inter-risk correlations, dispatch
"""

from .simm_commodity import (
    COMMODITY_BUCKET_CORRELATIONS,
    COMMODITY_RISK_WEIGHTS_DELTA,
    CommodityParameters,
    get_commodity_table,
)
from .simm_credit import (
    CREDIT_QUALIFYING_BUCKET_CORRELATIONS,
    CREDIT_QUALIFYING_RISK_WEIGHTS_DELTA,
    CREDIT_NON_QUALIFYING_RISK_WEIGHTS_DELTA,
    CreditNonQualifyingParameters,
    CreditQualifyingParameters,
    get_credit_table,
)
from .simm_equity import (
    EQUITY_BUCKET_CORRELATIONS,
    EQUITY_RISK_WEIGHTS_DELTA,
    EquityParameters,
    get_equity_table,
)
from .simm_fx import (
    FX_THRESHOLDS_DELTA,
    FX_THRESHOLDS_VEGA,
    FxParameters,
    get_fx_table,
)
from .simm_rates import (
    RATES_RISK_WEIGHTS_INTEREST_RATE,
    RATES_TENOR_CORRELATIONS,
    RatesParameters,
    get_rates_table,
)
from .simm_parameters import (
    CORRELATION_BASE,
    CORRELATIONS_RISK,
    HVRS_VEGA,
    PARAMETER_PROVIDERS,
    VOLATILITY_FACTOR,
    Z_SCORE_99,
    Z_SCORE_995,
    correlation_risk,
    curvature_lambda,
    curvature_scale,
    get_risk_correlation_table,
    provider,
    scaled_days,
    threshold,
    weight_risk,
    weight_volatility,
)

__all__ = [
    # Commodity
    "COMMODITY_BUCKET_CORRELATIONS",
    "COMMODITY_RISK_WEIGHTS_DELTA",
    "CommodityParameters",
    "get_commodity_table",
    # Credit
    "CREDIT_QUALIFYING_BUCKET_CORRELATIONS",
    "CREDIT_QUALIFYING_RISK_WEIGHTS_DELTA",
    "CREDIT_NON_QUALIFYING_RISK_WEIGHTS_DELTA",
    "CreditNonQualifyingParameters",
    "CreditQualifyingParameters",
    "get_credit_table",
    # Equity
    "EQUITY_BUCKET_CORRELATIONS",
    "EQUITY_RISK_WEIGHTS_DELTA",
    "EquityParameters",
    "get_equity_table",
    # Fx
    "FX_THRESHOLDS_DELTA",
    "FX_THRESHOLDS_VEGA",
    "FxParameters",
    "get_fx_table",
    # Rates
    "RATES_RISK_WEIGHTS_INTEREST_RATE",
    "RATES_TENOR_CORRELATIONS",
    "RatesParameters",
    "get_rates_table",
    # Model
    "CORRELATION_BASE",
    "CORRELATIONS_RISK",
    "HVRS_VEGA",
    "PARAMETER_PROVIDERS",
    "VOLATILITY_FACTOR",
    "Z_SCORE_99",
    "Z_SCORE_995",
    "correlation_risk",
    "curvature_lambda",
    "curvature_scale",
    "get_risk_correlation_table",
    "provider",
    "scaled_days",
    "threshold",
    "weight_risk",
    "weight_volatility",
]
