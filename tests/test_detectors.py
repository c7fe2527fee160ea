"""Tests for the numerical feature scanners."""

from __future__ import annotations

import math
from importlib import import_module

import numpy as np
import pytest

detectors = import_module("funcgraph.detectors")
as_real_function = import_module("funcgraph.function_input").as_real_function


def test_sign_change_brackets_strict_and_exact_zero() -> None:
    """An exact zero on the grid is bracketed once."""
    values = np.array([-2.0, -1.0, 0.0, 1.0, 2.0])
    assert detectors.sign_change_brackets(values).tolist() == [1]
    assert detectors.sign_change_brackets(np.array([1.0, -1.0])).tolist() == [0]


def test_sign_change_brackets_zero_at_grid_start_and_nan() -> None:
    """A zero with no claimable left neighbour brackets to the right; nan pairs are skipped."""
    assert detectors.sign_change_brackets(np.array([0.0, 1.0, 2.0])).tolist() == [0]
    assert detectors.sign_change_brackets(np.array([np.nan, 0.0, 1.0])).tolist() == [1]
    assert detectors.sign_change_brackets(np.array([-1.0, np.nan, 1.0])).tolist() == []


def test_roots_of_parabola() -> None:
    """x^2 - 4 has exactly the roots -2 and 2."""
    fn = as_real_function("x**2 - 4")
    roots = detectors.find_roots(fn, (-5.0, 5.0), 200)
    assert roots == pytest.approx([-2.0, 2.0], abs=1e-6)


def test_root_on_grid_is_reported_once() -> None:
    """A root that is a grid point is not duplicated."""
    roots = detectors.find_roots(as_real_function(lambda x: x), (-1.0, 1.0), 10)
    assert len(roots) == 1
    assert roots[0] == pytest.approx(0.0, abs=1e-9)


def test_no_roots_for_reciprocal() -> None:
    """1/x changes sign across its pole but has no root."""
    assert detectors.find_roots(as_real_function(lambda x: 1 / x), (-5.0, 5.0), 200) == []


def test_extrema_of_cubic() -> None:
    """x^3 - 3x has a maximum at -1 and a minimum at 1."""
    fn = as_real_function(lambda x: x**3 - 3 * x)
    extrema = detectors.find_extrema(fn, (-3.0, 3.0), 200)
    assert [e.is_maximum for e in extrema] == [True, False]
    assert extrema[0].x == pytest.approx(-1.0, abs=1e-3)
    assert extrema[0].y == pytest.approx(2.0, abs=1e-3)
    assert extrema[1].x == pytest.approx(1.0, abs=1e-3)
    assert extrema[1].y == pytest.approx(-2.0, abs=1e-3)


def test_single_minimum_of_parabola() -> None:
    """x^2 - 4 has one minimum at (0, -4) and no maximum."""
    extrema = detectors.find_extrema(as_real_function("x**2 - 4"), (-5.0, 5.0), 200)
    assert len(extrema) == 1
    assert not extrema[0].is_maximum
    assert extrema[0].x == pytest.approx(0.0, abs=1e-3)
    assert extrema[0].y == pytest.approx(-4.0, abs=1e-6)


def test_inflection_of_cubic_and_none_for_parabola() -> None:
    """Inflections are reported at the curvature sign change only."""
    cubic = detectors.find_inflection_points(as_real_function(lambda x: x**3 - 3 * x), (-3.0, 3.0), 200)
    assert len(cubic) == 1
    assert cubic[0] == pytest.approx(0.0, abs=1e-2)
    assert detectors.find_inflection_points(as_real_function("x**2 - 4"), (-5.0, 5.0), 200) == []


def test_straight_line_has_no_inflection() -> None:
    """Rounding noise in f'' of a line is not an inflection."""
    fn = as_real_function(lambda x: 2 * x + 1)
    assert detectors.find_inflection_points(fn, (-10.0, 10.0), 200) == []


def test_scaling_a_function_keeps_its_inflection_points() -> None:
    """c*f has the same inflection points as f, however small c is."""
    domain = (-3.0, 3.0)
    unscaled = detectors.find_inflection_points(as_real_function(lambda x: x**3 - 3 * x), domain, 200)
    scaled = detectors.find_inflection_points(
        as_real_function(lambda x: 1e-4 * (x**3 - 3 * x)), domain, 200
    )
    assert len(scaled) == 1
    assert scaled == pytest.approx(unscaled)


def test_small_amplitude_sine_reports_every_inflection() -> None:
    """1e-3*sin(x) changes curvature at every multiple of pi in (-10, 10)."""
    fn = as_real_function("1e-3*sin(x)")
    points = detectors.find_inflection_points(fn, (-10.0, 10.0), 200)
    expected = [k * math.pi for k in range(-3, 4)]
    assert len(points) == len(expected)
    for found, want in zip(points, expected):
        assert found == pytest.approx(want, abs=0.05)


def test_reciprocal_has_one_vertical_asymptote() -> None:
    """1/x breaks once near 0 and is classified as an asymptote."""
    fn = as_real_function(lambda x: 1 / x)
    breaks = detectors.find_breaks(fn, (-5.0, 5.0), (-25.0, 25.0), 200)
    assert len(breaks) == 1
    assert breaks[0].is_asymptote
    assert breaks[0].x == pytest.approx(0.0, abs=0.05)


def test_step_function_is_a_discontinuity() -> None:
    """A jump larger than half the range height is a discontinuity."""
    fn = as_real_function(lambda x: 1.0 if x >= 0.3 else -1.0)
    breaks = detectors.find_breaks(fn, (-1.0, 1.0), (-1.5, 1.5), 50)
    assert [b.is_asymptote for b in breaks] == [False]
    assert breaks[0].x == pytest.approx(0.3, abs=0.02)


def test_small_jump_is_not_a_discontinuity() -> None:
    """Jumps below the threshold are ignored."""
    fn = as_real_function(lambda x: 0.1 if x >= 0.3 else 0.0)
    assert detectors.find_breaks(fn, (-1.0, 1.0), (-1.0, 1.0), 50) == []


def test_detectors_never_raise_on_nowhere_defined_functions() -> None:
    """All-nan input yields no features."""
    fn = as_real_function(lambda x: math.nan)
    domain = (-1.0, 1.0)
    assert detectors.find_roots(fn, domain, 20) == []
    assert detectors.find_extrema(fn, domain, 20) == []
    assert detectors.find_inflection_points(fn, domain, 20) == []
    assert detectors.find_breaks(fn, domain, (-1.0, 1.0), 20) == []
