"""
This module contains the schemas of the frames exchanged with the simm_calc collaborators.

Inputs:
- Fx_rates                  # Direct exchange rates loaded by FxRatesProvider.from_frame

Outputs:
- Margin_tree               # Depth-first flattening of a margin tree (Margin.to_frame)

Records themselves (sensitivities, notionals, add-on parameters) are typed
Python objects; parsing them from files is left to the caller.
"""

import polars as pl

FX_RATES_SCHEMA = {
    "currency_from": pl.String,      # ISO code of the base currency
    "currency_to": pl.String,        # ISO code of the counter currency
    "rate": pl.Float64,              # Units of currency_to per unit of currency_from
}

MARGIN_TREE_SCHEMA = {
    "level": pl.Int8,                # 1 (Total) .. 7 (Weighting)
    "name": pl.String,               # Node kind: Total, Model, Product, Risk, ...
    "identifier": pl.String,         # Product, risk, category, bucket or qualifier
    "currency": pl.String,           # ISO code of the margin amount
    "value": pl.Float64,             # Margin amount
    "path": pl.String,               # Identifiers from the root, joined by "/"
}
