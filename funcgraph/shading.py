"""Closed fill paths for regions bounded by two curves.

A region is bounded above by a function (or the top of the visible range) and
below by a function (or the x-axis when it is visible, else the bottom of the
range). Both bounds are sampled on the same x-grid, clamped into the range,
and joined into one closed path: forward along the top, backward along the
bottom, then ``Z``.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .coordinates import CoordinateMapper, PixelPoint
from .graph_config import ShadedRegion
from .sampling import evaluate, format_coordinate

MIN_REGION_SAMPLES = 100

RealCallable = Callable[[float], float]


def region_sample_count(samples: int) -> int:
    """Return the number of x positions sampled for a shaded region."""
    return max(MIN_REGION_SAMPLES, samples)


def _bound(
    index: Optional[int], functions: Sequence[RealCallable], default: float, xs: np.ndarray
) -> np.ndarray:
    if index is None:
        return np.full(xs.shape, default, dtype=float)
    return evaluate(functions[index], xs)


def region_values(
    region: ShadedRegion,
    functions: Sequence[RealCallable],
    mapper: CoordinateMapper,
    samples: int,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return ``(xs, top, bottom)`` in math units where both bounds are finite.

    Parameters
    ----------
    region : ShadedRegion
        Region description (function indices are assumed valid).
    functions : sequence of callables
        The graph's functions, indexed by ``region.top_function`` and
        ``region.bottom_function``.
    mapper : CoordinateMapper
        Supplies the range used for defaults and clamping.
    samples : int
        Graph sample count; at least :data:`MIN_REGION_SAMPLES` positions are used.
    """
    y_min, y_max = mapper.range
    x_lo, x_hi = region.domain or mapper.domain
    xs = np.linspace(x_lo, x_hi, region_sample_count(samples))

    axis_y = 0.0 if y_min <= 0 <= y_max else y_min
    top = _bound(region.top_function, functions, y_max, xs)
    bottom = _bound(region.bottom_function, functions, axis_y, xs)

    keep = np.isfinite(top) & np.isfinite(bottom)
    top = np.clip(top[keep], y_min, y_max)
    bottom = np.clip(bottom[keep], y_min, y_max)
    return xs[keep], top, bottom


def region_boundaries(
    region: ShadedRegion,
    functions: Sequence[RealCallable],
    mapper: CoordinateMapper,
    samples: int,
) -> Tuple[List[PixelPoint], List[PixelPoint]]:
    """Return ``(top, bottom)`` pixel points, see :func:`region_values`."""
    kept_xs, top, bottom = region_values(region, functions, mapper, samples)
    top_points = [mapper.math_to_pixel(float(x), float(y)) for x, y in zip(kept_xs, top)]
    bottom_points = [mapper.math_to_pixel(float(x), float(y)) for x, y in zip(kept_xs, bottom)]
    return top_points, bottom_points


def shaded_region_path(
    region: ShadedRegion,
    functions: Sequence[RealCallable],
    mapper: CoordinateMapper,
    samples: int,
) -> str:
    """Return the closed SVG path of ``region``, or ``""`` when nothing is finite.

    Examples
    --------
    >>> from funcgraph.coordinates import CoordinateMapper
    >>> from funcgraph.graph_config import ShadedRegion
    >>> mapper = CoordinateMapper((0.0, 1.0), (0.0, 1.0), 100.0, 100.0)
    >>> path = shaded_region_path(ShadedRegion(), [], mapper, 200)
    >>> path.startswith("M 0.00 0.00") and path.endswith("Z")
    True
    """
    top, bottom = region_boundaries(region, functions, mapper, samples)
    if not top or not bottom:
        return ""

    commands = [f"M {format_coordinate(top[0].x)} {format_coordinate(top[0].y)}"]
    commands.extend(f"L {format_coordinate(p.x)} {format_coordinate(p.y)}" for p in top[1:])
    commands.extend(
        f"L {format_coordinate(p.x)} {format_coordinate(p.y)}" for p in reversed(bottom)
    )
    commands.append("Z")
    return " ".join(commands)


__all__ = [
    "MIN_REGION_SAMPLES",
    "region_boundaries",
    "region_sample_count",
    "region_values",
    "shaded_region_path",
]
