"""Validation utilities for WaveKit."""

from __future__ import annotations

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray

__all__ = [
    "validate_order",
    "validate_grid_size",
    "validate_flag",
    "validate_interval",
    "validate_tabulated_grid",
    "validate_output_buffer",
]


def validate_order(order: int) -> int:
    """Validates the number of vanishing moments of a Daubechies family.

    Args:
        order: Candidate order ``N``.

    Returns:
        The order as a plain ``int``.

    Raises:
        TypeError: If ``order`` is not an integer (booleans are rejected too).
        ValueError: If ``order`` is smaller than 1.
    """
    if isinstance(order, bool) or not isinstance(order, numbers.Integral):
        raise TypeError(f"order must be an integer; got {type(order).__name__}.")
    if order < 1:
        raise ValueError(f"order must be a positive integer; got {order}.")
    return int(order)


def validate_grid_size(grid_size: int) -> int:
    """Validates a requested number of grid bins.

    Raises:
        TypeError: If ``grid_size`` is not an integer.
        ValueError: If ``grid_size`` is zero or negative.
    """
    if isinstance(grid_size, bool) or not isinstance(grid_size, numbers.Integral):
        raise TypeError(f"grid_size must be an integer; got {type(grid_size).__name__}.")
    if grid_size <= 0:
        raise ValueError(f"grid_size must be positive; got {grid_size}.")
    return int(grid_size)


def validate_flag(flag: bool, name: str) -> bool:
    """Validates an on/off option.

    Raises:
        TypeError: If ``flag`` is not a boolean (strings such as ``"False"``
            are rejected rather than read as truthy).
    """
    if not isinstance(flag, (bool, np.bool_)):
        raise TypeError(f"{name} must be a boolean; got {type(flag).__name__}.")
    return bool(flag)


def validate_interval(minimum: float, maximum: float) -> tuple[float, float]:
    """Validates a bounded, non-empty interval ``[minimum, maximum]``.

    Raises:
        ValueError: If a bound is not finite or ``maximum <= minimum``.
    """
    lo = float(minimum)
    hi = float(maximum)
    if not (np.isfinite(lo) and np.isfinite(hi)):
        raise ValueError(f"interval bounds must be finite; got [{lo}, {hi}].")
    if hi <= lo:
        raise ValueError(
            f"interval maximum must be larger than its minimum; got [{lo}, {hi}]."
        )
    return lo, hi


def validate_tabulated_grid(
    x: ArrayLike,
    values: ArrayLike,
    derivs: ArrayLike,
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """Validates and converts a tabulated grid into NumPy arrays.

    Requirements:
      - ``x``, ``values`` and ``derivs`` are 1D and of equal length (at least 2).
      - ``x`` is strictly increasing and uniformly spaced.
      - All entries are finite.

    Args:
        x: Grid positions.
        values: Function values at ``x``.
        derivs: First derivatives at ``x``.

    Returns:
        Tuple of ``(x, values, derivs)`` as float64 arrays.

    Raises:
        ValueError: If the arrays do not meet the required conditions.
    """
    x_arr = np.asarray(x, dtype=np.float64)
    v_arr = np.asarray(values, dtype=np.float64)
    d_arr = np.asarray(derivs, dtype=np.float64)

    if x_arr.ndim != 1 or v_arr.ndim != 1 or d_arr.ndim != 1:
        raise ValueError("x, values and derivs must be 1D.")
    if not (x_arr.shape == v_arr.shape == d_arr.shape):
        raise ValueError("x, values and derivs must have the same length.")
    if x_arr.size < 2:
        raise ValueError("a tabulated grid needs at least two points.")
    if not (np.all(np.isfinite(x_arr)) and np.all(np.isfinite(v_arr))
            and np.all(np.isfinite(d_arr))):
        raise ValueError("tabulated grid contains non-finite entries.")

    steps = np.diff(x_arr)
    if not np.all(steps > 0):
        raise ValueError("x must be strictly increasing.")
    if not np.allclose(steps, steps[0], rtol=1e-9, atol=0.0):
        raise ValueError("x must be uniformly spaced.")

    return x_arr, v_arr, d_arr


def validate_output_buffer(buffer: object, size: int, name: str) -> NDArray[np.float64]:
    """Checks that ``buffer`` is a writable float64 array of shape ``(size,)``.

    Raises:
        ValueError: If the buffer has the wrong type, shape, dtype or is read-only.
    """
    if not isinstance(buffer, np.ndarray):
        raise ValueError(f"{name} must be a numpy array; got {type(buffer).__name__}.")
    if buffer.shape != (size,):
        raise ValueError(f"{name} must have shape ({size},); got {buffer.shape}.")
    if buffer.dtype != np.float64:
        raise ValueError(f"{name} must have dtype float64; got {buffer.dtype}.")
    if not buffer.flags.writeable:
        raise ValueError(f"{name} must be writeable.")
    return buffer
