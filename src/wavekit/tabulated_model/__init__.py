"""Tabulated functions with derivatives on uniform grids."""

from wavekit.tabulated_model.one_d import (
    TabulatedFunction,
    parse_grid_table,
    tabulated_from_table,
)

__all__ = ["TabulatedFunction", "parse_grid_table", "tabulated_from_table"]
