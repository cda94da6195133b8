"""Affine map between a user interval and a basis set's intrinsic interval."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from wavekit.utils.validate import validate_interval

__all__ = ["IntervalMapping"]


class IntervalMapping:
    """Maps ``[minimum, maximum]`` onto ``[intrinsic_min, intrinsic_max]``.

    Attributes:
        minimum: Lower bound of the user-visible interval.
        maximum: Upper bound of the user-visible interval.
        intrinsic_min: Lower bound of the intrinsic interval.
        intrinsic_max: Upper bound of the intrinsic interval.
        derivf: Scale factor ``d(argT)/d(arg)``, used to rescale derivatives
            computed in intrinsic coordinates.
    """

    def __init__(
        self,
        minimum: float,
        maximum: float,
        intrinsic_min: float,
        intrinsic_max: float,
    ) -> None:
        self.minimum, self.maximum = validate_interval(minimum, maximum)
        self.intrinsic_min, self.intrinsic_max = validate_interval(
            intrinsic_min, intrinsic_max
        )
        self.derivf = (self.intrinsic_max - self.intrinsic_min) / (
            self.maximum - self.minimum
        )

    def __repr__(self) -> str:
        return (
            f"IntervalMapping([{self.minimum:g}, {self.maximum:g}] -> "
            f"[{self.intrinsic_min:g}, {self.intrinsic_max:g}])"
        )

    def translate(self, arg: float) -> float:
        """Maps ``arg`` into intrinsic coordinates without clamping."""
        return (arg - self.minimum) * self.derivf + self.intrinsic_min

    def check_inside(self, arg: float) -> tuple[float, bool]:
        """Maps ``arg`` and flags whether it lies inside the interval.

        Arguments outside the interval are clamped to the nearest intrinsic
        bound.

        Returns:
            Tuple ``(argT, inside_range)``.

        Raises:
            ValueError: If ``arg`` is NaN.
        """
        if math.isnan(arg):
            raise ValueError("arg must not be NaN.")
        if arg < self.minimum:
            return self.intrinsic_min, False
        if arg > self.maximum:
            return self.intrinsic_max, False
        return self.translate(arg), True

    def check_inside_many(
        self, args: ArrayLike
    ) -> tuple[NDArray[np.float64], NDArray[np.bool_]]:
        """Vectorised :meth:`check_inside` over a 1D array of arguments."""
        args = np.asarray(args, dtype=np.float64)
        if np.isnan(args).any():
            raise ValueError("args must not contain NaN.")
        arg_t = (args - self.minimum) * self.derivf + self.intrinsic_min
        inside = (args >= self.minimum) & (args <= self.maximum)
        return np.clip(arg_t, self.intrinsic_min, self.intrinsic_max), inside
