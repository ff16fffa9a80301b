"""
SIMM calculation engine components.

This package contains the production implementations of the margin
calculation stages:

    MarginEngine -> ModelProcessor -> netting -> category calculators
        -> product aggregation and add-on -> margin tree

Modules:
    fx_converter: Exchange rates with inverse and triangulated lookups
    margins: Margin tree nodes and their polars flattening
    netting: Netting of sensitivities by risk key
    calculators: Delta/vega, curvature and base correlation margins
    aggregator: Product margins and the add-on
    processor: Model processor (sanitization, consistency checks, curvature)
    pipeline: Engine entry point (regulations, sign convention, worst-of)
"""

from .fx_converter import FxRatesProvider
from .margins import (
    Margin,
    MarginAddOn,
    MarginBucket,
    MarginModel,
    MarginProduct,
    MarginRisk,
    MarginSensitivity,
    MarginTotal,
    MarginWeighting,
)
from .netting import net_sensitivities
from .processor import ModelProcessor
from .pipeline import MarginEngine, create_engine

__all__ = [
    "FxRatesProvider",
    "Margin",
    "MarginAddOn",
    "MarginBucket",
    "MarginModel",
    "MarginProduct",
    "MarginRisk",
    "MarginSensitivity",
    "MarginTotal",
    "MarginWeighting",
    "net_sensitivities",
    "ModelProcessor",
    "MarginEngine",
    "create_engine",
]
