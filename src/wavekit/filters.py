"""Daubechies filter coefficients.

The low-pass filter of order ``N`` (``N`` vanishing moments) has ``2N``
coefficients and is obtained by spectral factorisation of the Daubechies
polynomial, see Ingrid Daubechies, *Ten Lectures on Wavelets*, SIAM, 1992,
chapter 6.

Examples:
=========

The maximum-phase filter of order 2::
>>> import numpy as np
>>> from wavekit.filters import daubechies_filter
>>> h = daubechies_filter(2)
>>> s3 = np.sqrt(3.0)
>>> expected = np.array([1 - s3, 3 - s3, 3 + s3, 1 + s3]) / (4 * np.sqrt(2.0))
>>> bool(np.allclose(h, expected, rtol=0.0, atol=1e-12))
True

The matching high-pass filter::
>>> from wavekit.filters import highpass_filter
>>> g = highpass_filter(h)
>>> bool(np.isclose(g.sum(), 0.0, atol=1e-12))
True
"""

from __future__ import annotations

from math import comb

import numpy as np
from numpy.typing import ArrayLike, NDArray

from wavekit.logger import wavekit_logger
from wavekit.utils.validate import validate_order

__all__ = [
    "daubechies_filter",
    "highpass_filter",
    "check_orthonormal_filter",
]

# Past this order np.roots on the Daubechies polynomial starts to lose digits.
_ACCURATE_ORDER_LIMIT = 20


def daubechies_filter(order: int, phase: str = "max") -> NDArray[np.float64]:
    """Derives the Daubechies low-pass filter of the given order.

    ``P(y) = sum_{k<N} C(N-1+k, k) y^k`` is factorised in ``y``; every root
    gives a reciprocal pair of roots ``z, 1/z`` of ``z^2 - 2(1 - 2y) z + 1``.
    Keeping the root outside the unit circle yields the maximum-phase filter,
    keeping the one inside yields the minimum-phase (classic table) filter.

    Args:
        order: Number of vanishing moments ``N >= 1``.
        phase: ``"max"`` (default) or ``"min"``.

    Returns:
        Array of ``2N`` coefficients with ``sum(h) == sqrt(2)``.

    Raises:
        ValueError: If ``phase`` is unknown or the derived coefficients are
            not an orthonormal filter.
    """
    order = validate_order(order)
    if phase not in ("max", "min"):
        raise ValueError(f"phase must be 'max' or 'min'; got {phase!r}.")

    if order > _ACCURATE_ORDER_LIMIT:
        wavekit_logger.warning(
            "Daubechies filter of order %d requested; spectral factorisation "
            "is only reliable up to order %d.",
            order,
            _ACCURATE_ORDER_LIMIT,
        )

    # np.roots wants the highest power first
    p_coeffs = [comb(order - 1 + k, k) for k in range(order)][::-1]
    y_roots = np.roots(p_coeffs) if order > 1 else np.empty(0)

    z_roots = []
    for y in y_roots:
        b = 1.0 - 2.0 * y
        disc = np.sqrt(complex(b * b - 1.0))
        z1, z2 = b + disc, b - disc
        outer, inner = (z1, z2) if abs(z1) >= abs(z2) else (z2, z1)
        z_roots.append(outer if phase == "max" else inner)

    h = np.real(np.poly(z_roots)) if z_roots else np.ones(1)
    for _ in range(order):
        h = np.convolve(h, [1.0, 1.0])
    h = np.sqrt(2.0) * h / h.sum()

    check_orthonormal_filter(h)
    return h


def highpass_filter(lowpass: ArrayLike) -> NDArray[np.float64]:
    """Builds the quadrature-mirror high-pass filter ``g_k = (-1)^k h_{L-k}``."""
    h = np.asarray(lowpass, dtype=np.float64)
    signs = np.where(np.arange(h.size) % 2 == 0, 1.0, -1.0)
    return signs * h[::-1]


def check_orthonormal_filter(h: ArrayLike, atol: float = 1e-8) -> None:
    """Checks ``sum(h) = sqrt(2)`` and ``sum_k h_k h_{k+2m} = delta_m``.

    Raises:
        ValueError: If the filter has odd length, non-finite entries, or
            violates one of the conditions by more than ``atol``.
    """
    h = np.asarray(h, dtype=np.float64)
    if h.ndim != 1 or h.size < 2 or h.size % 2:
        raise ValueError(f"filter must be 1D with even length; got shape {h.shape}.")
    if not np.all(np.isfinite(h)):
        raise ValueError("filter contains non-finite coefficients.")
    if abs(h.sum() - np.sqrt(2.0)) > atol:
        raise ValueError(
            f"filter coefficients must sum to sqrt(2); got {h.sum():.16g}."
        )
    for m in range(h.size // 2):
        overlap = float(np.dot(h[: h.size - 2 * m], h[2 * m:]))
        target = 1.0 if m == 0 else 0.0
        if abs(overlap - target) > atol:
            raise ValueError(
                f"filter of length {h.size} is not orthonormal: shift {2 * m} "
                f"overlap is {overlap:.3e}, expected {target}."
            )
