"""Axis lines, ticks and grid lines for a function graph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple

from .coordinates import CoordinateMapper, PixelPoint
from .grid_spacing import ZERO_LABEL_TOLERANCE, format_tick_label, tick_values

AxisDirection = Literal["horizontal", "vertical"]


@dataclass(frozen=True)
class Tick:
    """One labelled tick on an axis."""

    value: float
    position: PixelPoint
    label: str


@dataclass(frozen=True)
class GraphAxis:
    """A drawn axis.

    Parameters
    ----------
    direction : {"horizontal", "vertical"}
        ``"horizontal"`` is the x-axis.
    value : float
        Coordinate of the perpendicular axis where this axis is drawn
        (``y`` for the x-axis), i.e. 0 clamped into the visible interval.
    start, end : PixelPoint
        Canvas-relative endpoints.
    label : str
        Axis name (``"x"`` or ``"y"``).
    ticks : tuple[Tick, ...]
        Ticks in ascending value order; the origin is never ticked.
    """

    direction: AxisDirection
    value: float
    start: PixelPoint
    end: PixelPoint
    label: str
    ticks: Tuple[Tick, ...]


@dataclass(frozen=True)
class GridLines:
    """Pixel positions of the vertical (``xs``) and horizontal (``ys``) grid lines."""

    xs: Tuple[float, ...]
    ys: Tuple[float, ...]


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(value, hi))


def compute_axes(
    mapper: CoordinateMapper, grid_spacing: Tuple[float, float]
) -> Tuple[GraphAxis, GraphAxis]:
    """Return ``(x_axis, y_axis)`` for the mapper's domain and range."""
    (x_min, x_max), (y_min, y_max) = mapper.domain, mapper.range
    dx, dy = grid_spacing

    x_axis_y = _clamp(0.0, y_min, y_max)
    x_ticks = tuple(
        Tick(value=x, position=mapper.math_to_pixel(x, x_axis_y), label=format_tick_label(x))
        for x in tick_values(x_min, x_max, dx)
        if abs(x) >= ZERO_LABEL_TOLERANCE
    )
    x_axis = GraphAxis(
        direction="horizontal",
        value=x_axis_y,
        start=mapper.math_to_pixel(x_min, x_axis_y),
        end=mapper.math_to_pixel(x_max, x_axis_y),
        label="x",
        ticks=x_ticks,
    )

    y_axis_x = _clamp(0.0, x_min, x_max)
    y_ticks = tuple(
        Tick(value=y, position=mapper.math_to_pixel(y_axis_x, y), label=format_tick_label(y))
        for y in tick_values(y_min, y_max, dy)
        if abs(y) >= ZERO_LABEL_TOLERANCE
    )
    y_axis = GraphAxis(
        direction="vertical",
        value=y_axis_x,
        start=mapper.math_to_pixel(y_axis_x, y_min),
        end=mapper.math_to_pixel(y_axis_x, y_max),
        label="y",
        ticks=y_ticks,
    )
    return x_axis, y_axis


def grid_lines(mapper: CoordinateMapper, grid_spacing: Tuple[float, float]) -> GridLines:
    """Return grid line pixel positions at every multiple of the spacing (origin included)."""
    (x_min, x_max), (y_min, y_max) = mapper.domain, mapper.range
    dx, dy = grid_spacing
    xs = tuple(mapper.math_to_pixel(x, y_min).x for x in tick_values(x_min, x_max, dx))
    ys = tuple(mapper.math_to_pixel(x_min, y).y for y in tick_values(y_min, y_max, dy))
    return GridLines(xs=xs, ys=ys)


__all__ = ["AxisDirection", "GraphAxis", "GridLines", "Tick", "compute_axes", "grid_lines"]
