"""Daubechies wavelets as basis functions on a bounded interval.

The basis set of order ``N`` holds ``3N - 1`` functions: a constant plus the
integer translates ``k = -N + 1, ..., 2N - 2`` of one tabulated Daubechies
function (scaling or wavelet function), whose support is ``[0, 2N - 1)``.
The argument interval ``[minimum, maximum]`` is mapped onto the intrinsic
interval ``[0, 3N - 2]``, so each translate has unit integer spacing in
intrinsic coordinates.

Translates with ``k <= -N`` would only reach into the interval with their
small tails and are left out.

Examples:
=========

>>> import numpy as np
>>> from wavekit.basis import DbWaveletBasis
>>> basis = DbWaveletBasis(order=2, minimum=0.0, maximum=1.0, scaling_function=True)
>>> basis.basis_count()
5
>>> arg_t, inside, values, derivs = basis.evaluate(0.5)
>>> inside, float(values[0]), float(derivs[0])
(True, 1.0, 0.0)
"""

from __future__ import annotations

from typing import IO, Any, Mapping

import numpy as np
from numpy.typing import ArrayLike, NDArray

from wavekit.cascade import DEFAULT_GRID_SIZE, build_wavelet_grid
from wavekit.config import DbWaveletConfig
from wavekit.interval import IntervalMapping
from wavekit.logger import wavekit_logger
from wavekit.utils.types import Evaluation
from wavekit.utils.validate import validate_output_buffer

__all__ = ["DbWaveletBasis"]


class DbWaveletBasis:
    """Constant plus integer translates of a tabulated Daubechies function.

    Attributes:
        config: The :class:`DbWaveletConfig` the basis set was built from.
        order: Number of vanishing moments ``N``.
        support: Support length ``2N - 1`` of every translate.
        grid: The immutable tabulated function shared by all translates.
        grid_size: True number of bins of ``grid``.
        interval: Mapping from ``[minimum, maximum]`` to ``[0, 3N - 2]``.
    """

    basis_type = "daubechies_wavelets"
    description = "Daubechies Wavelets (maximum phase type)"
    label_prefix = "k"
    periodic = False
    interval_bounded = True

    def __init__(
        self,
        order: int,
        minimum: float,
        maximum: float,
        grid_size: int = DEFAULT_GRID_SIZE,
        *,
        scaling_function: bool = False,
        dump_wavelet_grid: bool = False,
        label: str = "bf",
    ) -> None:
        """Builds the tabulated function and sets up the basis set.

        Args:
            order: Number of vanishing moments ``N >= 1``.
            minimum: Lower bound of the argument interval.
            maximum: Upper bound of the argument interval.
            grid_size: Minimum number of bins of the tabulated function.
            scaling_function: Use the scaling function instead of the
                wavelet function.
            dump_wavelet_grid: Write the tabulated grid to
                ``<label>.wavelet_grid.data``.
            label: Name of the basis set.
        """
        self.config = DbWaveletConfig(
            order,
            minimum,
            maximum,
            grid_size=grid_size,
            scaling_function=scaling_function,
            dump_wavelet_grid=dump_wavelet_grid,
            label=label,
        )
        self.order = self.config.order
        self.support = 2 * self.order - 1
        self._n_basis = 3 * self.order - 1

        self.grid, self.grid_size = build_wavelet_grid(
            self.order,
            self.config.grid_size,
            wavelet=not self.config.scaling_function,
        )
        self.interval = IntervalMapping(
            self.config.minimum, self.config.maximum, 0.0, float(self._n_basis - 1)
        )
        self._labels = self._setup_labels()

        if self.config.dump_wavelet_grid:
            self.dump_grid()

    @classmethod
    def from_config(cls, config: DbWaveletConfig) -> "DbWaveletBasis":
        """Builds a basis set from an existing configuration."""
        return cls(
            config.order,
            config.minimum,
            config.maximum,
            config.grid_size,
            scaling_function=config.scaling_function,
            dump_wavelet_grid=config.dump_wavelet_grid,
            label=config.label,
        )

    @classmethod
    def from_keywords(cls, keywords: Mapping[str, Any]) -> "DbWaveletBasis":
        """Builds a basis set from keywords such as ``{"ORDER": 4, ...}``."""
        return cls.from_config(DbWaveletConfig.from_keywords(keywords))

    def __repr__(self) -> str:
        return (
            f"DbWaveletBasis(order={self.order}, "
            f"interval=[{self.interval.minimum:g}, {self.interval.maximum:g}], "
            f"grid_size={self.grid_size})"
        )

    def __len__(self) -> int:
        return self._n_basis

    def basis_count(self) -> int:
        """Returns the number of basis functions, ``3N - 1``."""
        return self._n_basis

    @property
    def intrinsic_interval(self) -> tuple[float, float]:
        return self.interval.intrinsic_min, self.interval.intrinsic_max

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels

    def label(self, index: int) -> str:
        """Returns the label of basis function ``index``."""
        return self._labels[index]

    def _setup_labels(self) -> tuple[str, ...]:
        """Labels translates by shift and the argument at intrinsic position ``i - 1``."""
        labels = ["const"]
        for i in range(1, self._n_basis):
            position = self.interval.minimum + (i - 1) / self.interval.derivf
            labels.append(f"{self.label_prefix}{i - self.order}@{position:g}")
        return tuple(labels)

    def reported_keywords(self) -> dict[str, Any]:
        """Returns the keywords with ``GRID_SIZE`` set to the size actually used."""
        keywords = self.config.to_keywords()
        if self.grid_size != self.config.grid_size:
            keywords["GRID_SIZE"] = self.grid_size
        return keywords

    def dump_grid(self, sink: str | IO[str] | None = None) -> None:
        """Writes the tabulated function as ``position value derivative`` rows.

        Args:
            sink: File name or text stream; defaults to
                ``<label>.wavelet_grid.data``.
        """
        if sink is None:
            sink = f"{self.config.label}.wavelet_grid.data"
        self.grid.dump_to(sink)
        wavekit_logger.info(
            "Dumped %d-bin wavelet grid of %s to %s.",
            self.grid_size,
            self.config.label,
            sink if isinstance(sink, str) else getattr(sink, "name", "stream"),
        )

    def evaluate(
        self,
        arg: float,
        values: NDArray[np.float64] | None = None,
        derivs: NDArray[np.float64] | None = None,
    ) -> Evaluation:
        """Evaluates all basis functions and their derivatives at ``arg``.

        Derivatives are taken with respect to ``arg``. If ``arg`` lies outside
        the interval, the values are still computed but all derivatives are
        set to zero.

        Args:
            arg: Argument in the user-visible interval coordinates.
            values: Optional output array of shape ``(3N - 1,)``, reused
                in place.
            derivs: Optional output array of shape ``(3N - 1,)``, reused
                in place.

        Returns:
            Tuple ``(argT, inside_range, values, derivs)`` where ``argT`` is
            ``arg`` mapped (and clamped) onto the intrinsic interval.

        Raises:
            ValueError: If a provided output array is not a writeable float64
                array of shape ``(3N - 1,)``.
        """
        n_basis = self._n_basis
        if values is None:
            values = np.empty(n_basis)
        else:
            validate_output_buffer(values, n_basis, "values")
        if derivs is None:
            derivs = np.empty(n_basis)
        else:
            validate_output_buffer(derivs, n_basis, "derivs")

        arg = float(arg)
        arg_t, inside = self.interval.check_inside(arg)
        scale = self.interval.derivf
        shifted = (arg - self.interval.minimum) * scale

        values[0] = 1.0
        derivs[0] = 0.0
        for i in range(1, n_basis):
            x = shifted - (i - self.order)
            if x < 0.0 or x >= self.support:
                values[i] = 0.0
                derivs[i] = 0.0
            else:
                value, deriv = self.grid.lookup(x)
                values[i] = value
                derivs[i] = deriv * scale

        if not inside:
            derivs[:] = 0.0
        return arg_t, inside, values, derivs

    def evaluate_many(
        self, args: ArrayLike
    ) -> tuple[NDArray[np.float64], NDArray[np.bool_], NDArray[np.float64], NDArray[np.float64]]:
        """Vectorised :meth:`evaluate` over a 1D array of arguments.

        Returns:
            Tuple ``(argT, inside_range, values, derivs)`` with shapes
            ``(n,)``, ``(n,)``, ``(n, 3N - 1)`` and ``(n, 3N - 1)``.
        """
        args = np.asarray(args, dtype=np.float64)
        if args.ndim != 1:
            raise ValueError(f"args must be 1D; got shape {args.shape}.")

        arg_t, inside = self.interval.check_inside_many(args)
        scale = self.interval.derivf
        shifts = np.arange(1, self._n_basis) - self.order
        x = (args[:, np.newaxis] - self.interval.minimum) * scale - shifts[np.newaxis, :]

        values = np.empty((args.size, self._n_basis))
        derivs = np.empty((args.size, self._n_basis))
        values[:, 0] = 1.0
        derivs[:, 0] = 0.0
        translate_values, translate_derivs = self.grid(x)
        off_support = (x < 0.0) | (x >= self.support)
        translate_values[off_support] = 0.0
        translate_derivs[off_support] = 0.0
        values[:, 1:] = translate_values
        derivs[:, 1:] = translate_derivs * scale
        derivs[~inside] = 0.0
        return arg_t, inside, values, derivs
