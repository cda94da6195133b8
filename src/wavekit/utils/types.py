"""Shared typing aliases for WaveKit."""

from __future__ import annotations

from typing import TypeAlias

import numpy as np
from numpy.typing import NDArray

FloatArray: TypeAlias = NDArray[np.float64]

# (argT, inside_range, values, derivs) as returned by a basis evaluation.
Evaluation: TypeAlias = tuple[float, bool, FloatArray, FloatArray]
