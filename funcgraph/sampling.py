"""Curve sampling and SVG path assembly.

Purpose
-------
Turns one function into renderable path data. The sampler walks the domain at
a fixed step and emits a pixel point for every finite, in-range value; any
other sample emits :data:`PATH_BREAK` so the path starts a new subpath there.
This is how asymptotes, holes and out-of-range excursions break the curve
without special handling in the renderer.

Architecture notes
------------------
Everything here is a pure function of its inputs. The grid is computed from
the fractions ``i / samples`` for ``i = 0..samples`` (both endpoints included)
rather than by accumulating a step, so the last sample never drifts past or
short of ``x_max``.

Examples
--------
>>> from funcgraph.coordinates import CoordinateMapper
>>> from funcgraph.sampling import sample_function, points_to_path
>>> mapper = CoordinateMapper((0.0, 1.0), (0.0, 1.0), 100.0, 100.0)
>>> points_to_path(sample_function(lambda x: x, mapper, 2))
'M 0.00 100.00 L 50.00 50.00 L 100.00 0.00'
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .coordinates import CoordinateMapper, PixelPoint

PATH_BREAK = None

PathPoint = Optional[PixelPoint]


def sample_grid(domain: Tuple[float, float], samples: int) -> np.ndarray:
    """Return ``samples + 1`` evenly spaced x-values covering ``domain``.

    Positions are ``x_min + width * (i / samples)`` so a symmetric domain puts
    an exact ``0.0`` at the midpoint whenever ``samples`` is even.
    """
    x_min, x_max = domain
    fractions = np.arange(samples + 1, dtype=float) / samples
    xs = x_min + (x_max - x_min) * fractions
    xs[-1] = x_max
    return xs


def evaluate(fn: Callable[[float], float], xs: Iterable[float]) -> np.ndarray:
    """Evaluate ``fn`` at each x and return a float array."""
    evaluate_many = getattr(fn, "evaluate", None)
    xs = np.asarray(list(xs) if not isinstance(xs, np.ndarray) else xs, dtype=float)
    if callable(evaluate_many):
        return evaluate_many(xs)
    return np.fromiter((float(fn(float(x))) for x in xs), dtype=float, count=len(xs))


def sample_values(
    fn: Callable[[float], float], domain: Tuple[float, float], samples: int
) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(xs, ys)`` on the sampling grid; undefined values are ``nan``."""
    xs = sample_grid(domain, samples)
    return xs, evaluate(fn, xs)


def sample_function(
    fn: Callable[[float], float], mapper: CoordinateMapper, samples: int
) -> List[PathPoint]:
    """Sample ``fn`` over the mapper's domain into pixel points and path breaks.

    Parameters
    ----------
    fn : callable
        Scalar function returning ``nan``/``inf`` where undefined.
    mapper : CoordinateMapper
        Supplies domain, range and the pixel transform.
    samples : int
        Number of sampling steps.

    Returns
    -------
    list[PixelPoint or None]
        Pixel points in x order. ``None`` (:data:`PATH_BREAK`) marks a sample
        that was undefined or outside the range; leading breaks are dropped.
    """
    xs, ys = sample_values(fn, mapper.domain, samples)
    y_min, y_max = mapper.range
    with np.errstate(invalid="ignore"):
        visible = np.isfinite(ys) & (ys >= y_min) & (ys <= y_max)
    px, py = mapper.map_arrays(xs, ys)
    points: List[PathPoint] = []
    for keep, x, y in zip(visible, px, py):
        if keep:
            points.append(PixelPoint(float(x), float(y)))
        elif points:
            points.append(PATH_BREAK)
    return points


def format_coordinate(value: float) -> str:
    """Format one pixel coordinate with two decimals (never ``-0.00`` for zero)."""
    return f"{value + 0.0:.2f}"


def points_to_path(points: Sequence[PathPoint]) -> str:
    """Return an SVG path string with a new ``M`` after every break."""
    commands: List[str] = []
    in_path = False
    for point in points:
        if point is PATH_BREAK:
            in_path = False
            continue
        command = "L" if in_path else "M"
        commands.append(f"{command} {format_coordinate(point.x)} {format_coordinate(point.y)}")
        in_path = True
    return " ".join(commands)


def derive_range(
    functions: Iterable[Callable[[float], float]],
    domain: Tuple[float, float],
    samples: int,
    padding: float = 0.1,
) -> Tuple[float, float]:
    """Return the y-interval spanned by the sampled values plus ``padding``.

    A constant curve gets a ±1 window around its value, and a set of curves
    with no finite sample falls back to ``(-1, 1)`` so the mapper never
    divides by a zero-height range.
    """
    y_min = np.inf
    y_max = -np.inf
    for fn in functions:
        _, ys = sample_values(fn, domain, samples)
        finite = ys[np.isfinite(ys)]
        if finite.size:
            y_min = min(y_min, float(finite.min()))
            y_max = max(y_max, float(finite.max()))

    if not np.isfinite(y_min) or not np.isfinite(y_max):
        return (-1.0, 1.0)
    if y_max - y_min <= 0:
        return (y_min - 1.0, y_max + 1.0)
    pad = (y_max - y_min) * padding
    return (y_min - pad, y_max + pad)


__all__ = [
    "PATH_BREAK",
    "PathPoint",
    "derive_range",
    "evaluate",
    "format_coordinate",
    "points_to_path",
    "sample_function",
    "sample_grid",
    "sample_values",
]
