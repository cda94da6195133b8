"""Cascade construction of Daubechies scaling and wavelet functions.

The scaling function ``phi`` of order ``N`` has no closed form. It is the
fixed point of the two-scale relation

    phi(x) = sqrt(2) * sum_k h_k phi(2x - k),     k = 0 .. 2N-1,

with compact support ``[0, L]``, ``L = 2N - 1``. The construction follows
the vector cascade algorithm of Strang and Nguyen (Daubechies-Lagarias
method):

1. The values at the integers are the eigenvector of the two-scale matrix
   ``A[i, j] = sqrt(2) h_{2i-j}`` for eigenvalue 1, normalised to a partition
   of unity. The derivatives at the integers are the eigenvector for
   eigenvalue 1/2, normalised through ``sum_j j phi'(j) = -1``.
2. Every refinement level halves the grid spacing by evaluating the
   two-scale relation at the new dyadic points from the previous level.
   The derivative obeys the same relation with an extra factor 2.

Refinement stops as soon as the grid has at least the requested number of
bins, so the true grid size is ``L * 2^n``.

Examples:
=========

>>> from wavekit.cascade import ScalingFunctionBuilder, true_grid_size
>>> true_grid_size(4, 1000)
1792
>>> grid = ScalingFunctionBuilder(4, grid_size=1000).build()
>>> grid.grid_size
1792
"""

from __future__ import annotations

import numpy as np
import scipy.linalg
from numpy.typing import NDArray

from wavekit.filters import daubechies_filter, highpass_filter
from wavekit.logger import wavekit_logger
from wavekit.tabulated_model.one_d import TabulatedFunction
from wavekit.utils.validate import validate_grid_size, validate_order

__all__ = [
    "ScalingFunctionBuilder",
    "build_wavelet_grid",
    "support_length",
    "refinement_depth",
    "true_grid_size",
]

DEFAULT_GRID_SIZE = 1000
_EIGEN_TOL = 1e-6


def support_length(order: int) -> int:
    """Returns the support length ``2N - 1`` of the order-``N`` functions."""
    return 2 * validate_order(order) - 1


def refinement_depth(order: int, grid_size: int) -> int:
    """Returns the smallest ``n`` with ``(2N - 1) * 2^n >= grid_size``."""
    length = support_length(order)
    grid_size = validate_grid_size(grid_size)
    depth = 0
    while length * (1 << depth) < grid_size:
        depth += 1
    return depth


def true_grid_size(order: int, grid_size: int) -> int:
    """Returns the number of bins the cascade actually produces."""
    return support_length(order) * (1 << refinement_depth(order, grid_size))


class ScalingFunctionBuilder:
    """Tabulates a Daubechies scaling function (or its wavelet) and derivative.

    Attributes:
        order: Number of vanishing moments ``N``.
        requested_grid_size: Minimum number of bins asked for.
        wavelet: If True, the wavelet function ``psi`` is tabulated instead of
            the scaling function ``phi``.
        lowpass: Low-pass filter coefficients (length ``2N``, read-only).
        depth: Number of dyadic refinement levels ``n``.
        grid_size: True number of bins ``(2N - 1) * 2^n``.
    """

    def __init__(
        self,
        order: int,
        grid_size: int = DEFAULT_GRID_SIZE,
        *,
        wavelet: bool = False,
    ) -> None:
        """Initialises the builder.

        Args:
            order: Number of vanishing moments ``N >= 1``.
            grid_size: Minimum number of grid bins. The true number is the
                smallest ``(2N - 1) * 2^n`` that is at least this large.
            wavelet: Tabulate the wavelet function instead of the scaling
                function.

        Raises:
            ValueError: If the order admits no valid filter or the grid size
                is not positive.
        """
        self.order = validate_order(order)
        self.requested_grid_size = validate_grid_size(grid_size)
        self.wavelet = bool(wavelet)

        lowpass = daubechies_filter(self.order, phase="max")
        lowpass.setflags(write=False)
        self.lowpass = lowpass

        self.support = support_length(self.order)
        self.depth = refinement_depth(self.order, self.requested_grid_size)
        self.grid_size = self.support * (1 << self.depth)

    def build(self) -> TabulatedFunction:
        """Runs the cascade and returns the immutable tabulation.

        Returns:
            A :class:`TabulatedFunction` with ``grid_size + 1`` nodes spanning
            ``[0, 2N - 1]`` at spacing ``2^-n``.
        """
        values, derivs = self.integer_values()
        for level in range(self.depth):
            values, derivs = self._refine(values, derivs, level)

        if self.wavelet:
            values, derivs = self._apply_highpass(values, derivs)

        x = np.arange(self.grid_size + 1, dtype=np.float64) / (1 << self.depth)
        wavekit_logger.info(
            "Built db%d %s function grid with %d bins (requested %d).",
            self.order,
            "wavelet" if self.wavelet else "scaling",
            self.grid_size,
            self.requested_grid_size,
        )
        # Haar is a step function.
        return TabulatedFunction(x, values, derivs, piecewise_constant=self.order == 1)

    def integer_values(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Returns ``phi`` and ``phi'`` at the integers ``0 .. 2N - 1``."""
        n_points = self.support + 1
        values = np.zeros(n_points)
        derivs = np.zeros(n_points)

        if self.support == 1:
            # Haar: the box on [0, 1), right-continuous at the integers.
            values[0] = 1.0
            return values, derivs

        interior = np.arange(1, self.support)
        rows = 2 * interior[:, np.newaxis] - interior[np.newaxis, :]
        valid = (rows >= 0) & (rows < self.lowpass.size)
        taps = self.lowpass[np.clip(rows, 0, self.lowpass.size - 1)]
        matrix = np.where(valid, np.sqrt(2.0) * taps, 0.0)

        phi = self._eigenvector(matrix, 1.0)
        values[1:-1] = phi / phi.sum()

        dphi = self._eigenvector(matrix, 0.5)
        derivs[1:-1] = -dphi / np.dot(interior, dphi)
        return values, derivs

    def _eigenvector(self, matrix: NDArray[np.float64], eigenvalue: float) -> NDArray[np.float64]:
        """Returns the real eigenvector of ``matrix`` closest to ``eigenvalue``."""
        eigvals, eigvecs = scipy.linalg.eig(matrix)
        idx = int(np.argmin(np.abs(eigvals - eigenvalue)))
        if abs(eigvals[idx] - eigenvalue) > _EIGEN_TOL:
            raise ValueError(
                f"two-scale matrix of order {self.order} has no eigenvalue "
                f"{eigenvalue}; closest is {complex(eigvals[idx]):.6g}."
            )
        return np.real(eigvecs[:, idx])

    def _refine(
        self,
        values: NDArray[np.float64],
        derivs: NDArray[np.float64],
        level: int,
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Refines from spacing ``2^-level`` to ``2^-(level + 1)``."""
        shift = 1 << level
        size = self.support * 2 * shift + 1
        new_values = np.zeros(size)
        new_derivs = np.zeros(size)
        for k, hk in enumerate(self.lowpass):
            start = k * shift
            stop = start + values.size
            new_values[start:stop] += np.sqrt(2.0) * hk * values
            new_derivs[start:stop] += 2.0 * np.sqrt(2.0) * hk * derivs
        return new_values, new_derivs

    def _apply_highpass(
        self,
        values: NDArray[np.float64],
        derivs: NDArray[np.float64],
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Evaluates ``psi(x) = sqrt(2) sum_k g_k phi(2x - k)`` on the final grid."""
        highpass = highpass_filter(self.lowpass)
        bins_per_unit = 1 << self.depth
        m = np.arange(values.size)
        psi = np.zeros(values.size)
        dpsi = np.zeros(values.size)
        for k, gk in enumerate(highpass):
            idx = 2 * m - k * bins_per_unit
            inside = (idx >= 0) & (idx < values.size)
            psi[inside] += np.sqrt(2.0) * gk * values[idx[inside]]
            dpsi[inside] += 2.0 * np.sqrt(2.0) * gk * derivs[idx[inside]]
        return psi, dpsi


def build_wavelet_grid(
    order: int,
    grid_size: int = DEFAULT_GRID_SIZE,
    *,
    wavelet: bool = False,
) -> tuple[TabulatedFunction, int]:
    """Builds the tabulation and reports the true grid size.

    Args:
        order: Number of vanishing moments ``N``.
        grid_size: Requested minimum number of bins.
        wavelet: Tabulate the wavelet function instead of the scaling function.

    Returns:
        Tuple ``(tabulated_function, true_grid_size)``.
    """
    builder = ScalingFunctionBuilder(order, grid_size, wavelet=wavelet)
    grid = builder.build()
    if builder.grid_size != builder.requested_grid_size:
        wavekit_logger.info(
            "Requested grid size %d rounded up to %d.",
            builder.requested_grid_size,
            builder.grid_size,
        )
    return grid, builder.grid_size
