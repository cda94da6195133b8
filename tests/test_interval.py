"""Unit tests for wavekit.interval.IntervalMapping."""

import numpy as np
import pytest

from wavekit.interval import IntervalMapping


def test_derivf_and_translate():
    """Tests the scale factor and the affine map of the bounds."""
    mapping = IntervalMapping(-2.0, 2.0, 0.0, 7.0)
    assert mapping.derivf == pytest.approx(7.0 / 4.0)
    assert mapping.translate(-2.0) == pytest.approx(0.0)
    assert mapping.translate(2.0) == pytest.approx(7.0)
    assert mapping.translate(0.0) == pytest.approx(3.5)


def test_check_inside_flags_and_clamps():
    """Tests that arguments outside the interval are flagged and clamped."""
    mapping = IntervalMapping(0.0, 1.0, 0.0, 4.0)
    assert mapping.check_inside(0.25) == (pytest.approx(1.0), True)
    assert mapping.check_inside(-0.5) == (0.0, False)
    assert mapping.check_inside(1.5) == (4.0, False)


def test_bounds_are_inside():
    """Tests that both interval bounds count as inside."""
    mapping = IntervalMapping(0.1, 0.7, 0.0, 7.0)
    assert mapping.check_inside(0.1)[1]
    assert mapping.check_inside(0.7)[1]


def test_check_inside_many_matches_scalar():
    """Tests that the vectorised check agrees with the scalar one."""
    mapping = IntervalMapping(-1.0, 3.0, 0.0, 10.0)
    args = np.array([-2.0, -1.0, 0.3, 3.0, 3.5])
    arg_t, inside = mapping.check_inside_many(args)
    for a, t, flag in zip(args, arg_t, inside):
        expected_t, expected_flag = mapping.check_inside(float(a))
        assert t == pytest.approx(expected_t)
        assert flag == expected_flag


@pytest.mark.parametrize("bounds", [(1.0, 1.0), (2.0, 1.0), (0.0, np.inf)])
def test_invalid_interval_raises(bounds):
    """Tests that empty, reversed or infinite intervals are rejected."""
    with pytest.raises(ValueError):
        IntervalMapping(bounds[0], bounds[1], 0.0, 1.0)


def test_nan_argument_raises():
    """Tests that NaN has no position in the interval and is rejected."""
    mapping = IntervalMapping(0.0, 1.0, 0.0, 4.0)
    with pytest.raises(ValueError, match="NaN"):
        mapping.check_inside(float("nan"))
    with pytest.raises(ValueError, match="NaN"):
        mapping.check_inside_many(np.array([0.5, np.nan]))
