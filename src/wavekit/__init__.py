"""Provides Daubechies wavelet basis functions and their cascade construction."""

from importlib.metadata import PackageNotFoundError, version

from wavekit.basis import DbWaveletBasis
from wavekit.cascade import ScalingFunctionBuilder, build_wavelet_grid, true_grid_size
from wavekit.config import DbWaveletConfig
from wavekit.filters import daubechies_filter, highpass_filter
from wavekit.interval import IntervalMapping
from wavekit.tabulated_model.one_d import TabulatedFunction, tabulated_from_table

try:
    __version__ = version("wavekit")
except PackageNotFoundError:
    pass

__all__ = [
    "DbWaveletBasis",
    "DbWaveletConfig",
    "IntervalMapping",
    "ScalingFunctionBuilder",
    "TabulatedFunction",
    "build_wavelet_grid",
    "daubechies_filter",
    "highpass_filter",
    "tabulated_from_table",
    "true_grid_size",
]
