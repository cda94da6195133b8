"""Interpolation utilities for 1D tabulated functions with derivatives.

Provides an immutable tabulation of a function ``f(x)`` together with its
first derivative on a uniform grid, interpolated by cubic Hermite
polynomials so that value and derivative are evaluated consistently.

Two common entry points are:

* Direct construction with ``(x, values, derivs)`` arrays of shape ``(N,)``.
* :func:`tabulated_from_table` for ``(N, 3)`` tables as written by
  :meth:`TabulatedFunction.dump_to`.
"""


from __future__ import annotations

from typing import IO

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.interpolate import CubicHermiteSpline

from wavekit.utils.validate import validate_tabulated_grid

__all__ = ["TabulatedFunction", "tabulated_from_table", "parse_grid_table"]

_DUMP_HEADER = "position value derivative"


class TabulatedFunction:
    """Uniform-grid tabulation of a function and its first derivative.

    The arrays are frozen at construction; every array handed out is a
    read-only view. Outside ``[x[0], x[-1]]`` the function is taken to be
    zero, which matches compactly supported functions.

    Attributes:
        x: Grid positions, uniformly spaced and strictly increasing.
        values: Function values at ``x``.
        derivs: First derivatives at ``x``.
        spacing: Grid spacing.

    Example:
        >>> import numpy as np
        >>> from wavekit.tabulated_model.one_d import TabulatedFunction
        >>>
        >>> x_tab = np.linspace(0.0, 1.0, 5)
        >>> f = TabulatedFunction(x_tab, x_tab**2, 2.0 * x_tab)
        >>> value, deriv = f.lookup(0.3)
        >>> round(value, 12), round(deriv, 12)
        (0.09, 0.6)
    """
    def __init__(
        self,
        x: ArrayLike,
        values: ArrayLike,
        derivs: ArrayLike,
        *,
        piecewise_constant: bool = False,
    ) -> None:
        """Initializes a tabulated function.

        Args:
            x: Uniformly spaced, strictly increasing positions with shape ``(N,)``.
            values: Function values with shape ``(N,)``.
            derivs: First derivatives with shape ``(N,)``.
            piecewise_constant: Hold the value of the left node across each
                bin (right-continuous steps, derivative zero) instead of
                Hermite interpolation. Used for discontinuous functions.
        """
        x_arr, v_arr, d_arr = (
            arr.copy() for arr in validate_tabulated_grid(x, values, derivs)
        )
        for arr in (x_arr, v_arr, d_arr):
            arr.setflags(write=False)

        self._x = x_arr
        self._values = v_arr
        self._derivs = d_arr
        self._x0 = float(x_arr[0])
        self._x1 = float(x_arr[-1])
        self.spacing = (self._x1 - self._x0) / (x_arr.size - 1)
        self.piecewise_constant = bool(piecewise_constant)
        self._spline = CubicHermiteSpline(x_arr, v_arr, d_arr, extrapolate=False)

    @property
    def x(self) -> NDArray[np.float64]:
        return self._x

    @property
    def values(self) -> NDArray[np.float64]:
        return self._values

    @property
    def derivs(self) -> NDArray[np.float64]:
        return self._derivs

    @property
    def grid_size(self) -> int:
        """Number of grid bins, one less than the number of nodes."""
        return self._x.size - 1

    @property
    def domain(self) -> tuple[float, float]:
        return self._x0, self._x1

    def lookup(self, x: float) -> tuple[float, float]:
        """Interpolates value and derivative at a single point.

        Works on plain floats only so that repeated scalar calls do not
        allocate arrays.

        Args:
            x: Evaluation point.

        Returns:
            Tuple ``(value, derivative)``; ``(0.0, 0.0)`` outside the grid.
        """
        if x < self._x0 or x > self._x1:
            return 0.0, 0.0

        h = self.spacing
        i = int((x - self._x0) / h)
        if self.piecewise_constant:
            return float(self._values[min(i, self._x.size - 1)]), 0.0
        if i >= self._x.size - 1:
            i = self._x.size - 2
        t = (x - self._x0) / h - i

        y0 = float(self._values[i])
        y1 = float(self._values[i + 1])
        m0 = float(self._derivs[i]) * h
        m1 = float(self._derivs[i + 1]) * h

        t2 = t * t
        t3 = t2 * t
        value = ((2.0 * t3 - 3.0 * t2 + 1.0) * y0 + (t3 - 2.0 * t2 + t) * m0
                 + (-2.0 * t3 + 3.0 * t2) * y1 + (t3 - t2) * m1)
        slope = ((6.0 * t2 - 6.0 * t) * (y0 - y1) + (3.0 * t2 - 4.0 * t + 1.0) * m0
                 + (3.0 * t2 - 2.0 * t) * m1)
        return value, slope / h

    def __call__(
        self, x_new: ArrayLike
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Evaluates values and derivatives at the given points.

        Args:
            x_new: Points where the function should be interpolated.

        Returns:
            Tuple ``(values, derivs)``, each with the shape of ``x_new``;
            zero outside the tabulated range.
        """
        x_new_arr = np.asarray(x_new, dtype=np.float64)
        if self.piecewise_constant:
            inside = (x_new_arr >= self._x0) & (x_new_arr <= self._x1)
            offset = np.where(inside, x_new_arr - self._x0, 0.0)
            idx = np.minimum((offset / self.spacing).astype(np.intp), self._x.size - 1)
            values = np.where(inside, self._values[idx], 0.0)
            return values, np.zeros_like(values)
        values = np.nan_to_num(self._spline(x_new_arr), nan=0.0)
        derivs = np.nan_to_num(self._spline(x_new_arr, 1), nan=0.0)
        return values, derivs

    def dump_to(self, sink: str | IO[str], fmt: str = "%.15e") -> None:
        """Writes all grid nodes as ``position value derivative`` rows.

        Args:
            sink: File name or text stream.
            fmt: Number format handed to ``numpy.savetxt``.
        """
        table = np.column_stack((self._x, self._values, self._derivs))
        np.savetxt(sink, table, fmt=fmt, header=_DUMP_HEADER)


def tabulated_from_table(
    table: ArrayLike, *, piecewise_constant: bool = False
) -> TabulatedFunction:
    """Creates a TabulatedFunction from a ``(position, value, derivative)`` table.

    Supported layouts:
        * ``(N, 3)``: columns are position, value and derivative.
        * ``(3, N)``: rows are position, value and derivative.

    Args:
        table: 2D array, e.g. ``numpy.loadtxt`` of a file written by
            :meth:`TabulatedFunction.dump_to`.
        piecewise_constant: Passed on to :class:`TabulatedFunction`.

    Returns:
        A :class:`TabulatedFunction` constructed from the parsed table.
    """
    x, values, derivs = parse_grid_table(table)
    return TabulatedFunction(x, values, derivs, piecewise_constant=piecewise_constant)


def parse_grid_table(
    table: ArrayLike,
) -> tuple[NDArray[np.floating], NDArray[np.floating], NDArray[np.floating]]:
    """Parses a 2D table into ``(x, values, derivs)`` arrays.

    Column-major ``(N, 3)`` tables take precedence, so a ``(3, 3)`` table is
    read column-wise.

    Args:
        table: 2D array with three columns or three rows.

    Returns:
        A tuple ``(x, values, derivs)`` of 1D NumPy arrays.

    Raises:
        ValueError: If the input does not match any of the supported layouts.
    """
    arr = np.asarray(table, dtype=float)
    if arr.ndim != 2:
        raise ValueError("table must be a 2D array.")

    match arr.shape:
        case (n, 3) if n >= 2:
            return arr[:, 0], arr[:, 1], arr[:, 2]
        case (3, n) if n >= 2:
            return arr[0, :], arr[1, :], arr[2, :]
        case _:
            raise ValueError(
                f"Unexpected table shape {arr.shape}; expected (N, 3) or (3, N)."
            )
