"""Tests for axes, grid lines and shaded-region paths."""

from __future__ import annotations

import re
from importlib import import_module

import pytest

axes = import_module("funcgraph.axes")
shading = import_module("funcgraph.shading")
CoordinateMapper = import_module("funcgraph.coordinates").CoordinateMapper
ShadedRegion = import_module("funcgraph.graph_config").ShadedRegion
as_real_function = import_module("funcgraph.function_input").as_real_function

_POINT = re.compile(r"[ML] (-?\d+\.\d\d) (-?\d+\.\d\d)")


def _path_points(path: str):
    return [(float(x), float(y)) for x, y in _POINT.findall(path)]


@pytest.fixture
def mapper():
    return CoordinateMapper((-5.0, 5.0), (-2.0, 8.0), 500.0, 500.0)


def test_axes_cross_at_origin_without_origin_ticks(mapper) -> None:
    """Both axes pass through 0 and skip the origin tick."""
    x_axis, y_axis = axes.compute_axes(mapper, (1.0, 2.0))
    assert x_axis.direction == "horizontal" and y_axis.direction == "vertical"
    assert x_axis.start == (0.0, 400.0) and x_axis.end == (500.0, 400.0)
    assert y_axis.start == (250.0, 500.0) and y_axis.end == (250.0, 0.0)
    assert [t.value for t in x_axis.ticks] == [-5.0, -4.0, -3.0, -2.0, -1.0, 1.0, 2.0, 3.0, 4.0, 5.0]
    assert [t.label for t in y_axis.ticks] == ["-2.0", "2.0", "4.0", "6.0", "8.0"]
    assert x_axis.ticks[0].position == (0.0, 400.0)


def test_axes_clamp_into_view_when_zero_is_outside() -> None:
    """An axis whose zero is off-canvas sticks to the nearest edge."""
    mapper = CoordinateMapper((1.0, 3.0), (2.0, 4.0), 200.0, 200.0)
    x_axis, y_axis = axes.compute_axes(mapper, (0.5, 0.5))
    assert x_axis.value == 2.0
    assert x_axis.start.y == 200.0
    assert y_axis.value == 1.0
    assert y_axis.start.x == 0.0


def test_grid_lines_include_origin(mapper) -> None:
    """Grid lines sit at every multiple of the spacing."""
    lines = axes.grid_lines(mapper, (2.5, 5.0))
    assert lines.xs == (0.0, 125.0, 250.0, 375.0, 500.0)
    assert lines.ys == pytest.approx((400.0, 150.0))


def test_region_between_two_curves_is_closed() -> None:
    """Top forward, bottom backward, then Z; 2n vertices for n samples."""
    mapper = CoordinateMapper((-1.5, 1.5), (-1.0, 5.0), 300.0, 300.0)
    functions = [as_real_function("4 - x**2"), as_real_function("x**2")]
    region = ShadedRegion(top_function=0, bottom_function=1)
    path = shading.shaded_region_path(region, functions, mapper, 200)
    assert path.startswith("M ")
    assert path.endswith(" Z")
    points = _path_points(path)
    assert len(points) == 2 * 200
    assert points[0][0] == pytest.approx(0.0)
    assert points[-1][0] == pytest.approx(0.0)
    assert points[199][0] == pytest.approx(300.0)


def test_region_defaults_to_range_top_and_axis(mapper) -> None:
    """Unset bounds are the top of the range and the x-axis."""
    top, bottom = shading.region_boundaries(ShadedRegion(), [], mapper, 50)
    assert len(top) == shading.MIN_REGION_SAMPLES
    assert {p.y for p in top} == {0.0}
    assert {p.y for p in bottom} == {400.0}


def test_region_respects_its_own_domain_and_clips(mapper) -> None:
    """A region domain narrows the shading; values outside the range are clamped."""
    fn = as_real_function(lambda x: 100.0)
    xs, top, bottom = shading.region_values(
        ShadedRegion(top_function=0, domain=(0.0, 1.0)), [fn], mapper, 100
    )
    assert xs[0] == 0.0 and xs[-1] == 1.0
    assert top.max() == 8.0
    assert set(bottom.tolist()) == {0.0}


def test_region_with_undefined_bound_has_empty_path(mapper) -> None:
    """No finite sample pair means no path."""
    fn = as_real_function(lambda x: float("nan"))
    assert shading.shaded_region_path(ShadedRegion(top_function=0), [fn], mapper, 100) == ""
