"""Unit tests for wavekit.filters."""

from __future__ import annotations

import numpy as np
import pytest

from wavekit.filters import check_orthonormal_filter, daubechies_filter, highpass_filter

# Classic (minimum-phase) order-4 table, Daubechies 1992, Table 6.1.
_DB4_MIN_PHASE = np.array([
    0.2303778133088964,
    0.7148465705529154,
    0.6308807679298587,
    -0.0279837694168599,
    -0.1870348117190931,
    0.0308413818355607,
    0.0328830116668852,
    -0.0105974017850690,
])


def test_haar_filter():
    """Tests that order 1 yields the Haar filter."""
    np.testing.assert_allclose(daubechies_filter(1), [2 ** -0.5, 2 ** -0.5], atol=1e-15)


def test_order_two_closed_form():
    """Tests the order-2 maximum-phase filter against its closed form."""
    s3 = np.sqrt(3.0)
    expected = np.array([1 - s3, 3 - s3, 3 + s3, 1 + s3]) / (4 * np.sqrt(2.0))
    np.testing.assert_allclose(daubechies_filter(2), expected, atol=1e-12)


def test_min_phase_matches_classic_table():
    """Tests that phase='min' reproduces the tabulated order-4 coefficients."""
    np.testing.assert_allclose(daubechies_filter(4, phase="min"), _DB4_MIN_PHASE, atol=1e-10)


def test_max_phase_is_reversed_min_phase():
    """Tests that the maximum-phase filter is the reversed minimum-phase one."""
    for order in (2, 3, 5, 7):
        np.testing.assert_allclose(
            daubechies_filter(order, phase="max"),
            daubechies_filter(order, phase="min")[::-1],
            atol=1e-10,
        )


@pytest.mark.parametrize("order", [1, 2, 3, 4, 6, 8, 10])
def test_filter_length_and_orthonormality(order):
    """Tests that the filter has 2N coefficients and passes the orthonormality check."""
    h = daubechies_filter(order)
    assert h.shape == (2 * order,)
    check_orthonormal_filter(h)


@pytest.mark.parametrize("order", [2, 3, 4, 5])
def test_highpass_has_vanishing_moments(order):
    """Tests that the high-pass filter annihilates polynomials of degree < N."""
    g = highpass_filter(daubechies_filter(order))
    k = np.arange(g.size, dtype=float)
    for p in range(order):
        assert abs(np.dot(g, k**p)) < 1e-8 * max(1.0, float(np.sum(np.abs(g) * k**p)))


def test_highpass_is_orthogonal_to_lowpass():
    """Tests that even shifts of h and g are orthogonal."""
    h = daubechies_filter(3)
    g = highpass_filter(h)
    for m in range(3):
        assert abs(np.dot(h[: h.size - 2 * m], g[2 * m:])) < 1e-12
        assert abs(np.dot(g[: g.size - 2 * m], h[2 * m:])) < 1e-12


def test_filter_is_deterministic():
    """Tests that two derivations are bit-identical."""
    assert np.array_equal(daubechies_filter(6), daubechies_filter(6))


@pytest.mark.parametrize("order", [0, -3])
def test_non_positive_order_raises(order):
    """Tests that orders below 1 are rejected."""
    with pytest.raises(ValueError, match="positive"):
        daubechies_filter(order)


def test_non_integer_order_raises():
    """Tests that a float order is rejected."""
    with pytest.raises(TypeError):
        daubechies_filter(2.5)


def test_unknown_phase_raises():
    """Tests that an unknown phase name is rejected."""
    with pytest.raises(ValueError, match="phase"):
        daubechies_filter(2, phase="linear")


def test_check_orthonormal_filter_rejects_perturbed_filter():
    """Tests that a perturbed filter fails the orthonormality check."""
    h = daubechies_filter(3).copy()
    h[1] += 1e-3
    h[2] -= 1e-3
    with pytest.raises(ValueError, match="orthonormal"):
        check_orthonormal_filter(h)


def test_check_orthonormal_filter_rejects_odd_length():
    """Tests that odd-length filters are rejected."""
    with pytest.raises(ValueError, match="even length"):
        check_orthonormal_filter([0.5, 0.5, 0.5])
