"""Numerical scanners for roots, extrema, inflection points and breaks.

Purpose
-------
Four independent detectors locate the features that
:mod:`funcgraph.remarkable_points` turns into remarkable points. None of them
differentiates symbolically; all of them work from samples and central
differences (:mod:`funcgraph.derivatives`).

Concepts and structure
----------------------
Every detector runs a coarse scan over ``2 * samples`` steps of the domain:

- :func:`find_roots` brackets sign changes of ``f`` and refines each bracket
  with Newton-Raphson seeded at the bracket midpoint.
- :func:`find_extrema` brackets sign changes of ``f'`` and refines with a
  Newton step on ``f'`` using ``f''``; the sign of ``f''`` classifies it.
- :func:`find_inflection_points` brackets sign changes of ``f''`` and reports
  the bracket midpoint without refinement.
- :func:`find_breaks` compares consecutive samples: exactly one undefined side
  is a vertical asymptote, a jump larger than half the range height is a
  discontinuity.

Important gotchas
-----------------
- Numerical failure never raises. A candidate whose refinement hits a zero
  derivative, leaves the domain, produces ``nan``, or runs out of iterations
  is silently dropped.
- A sample that is exactly zero brackets with its left neighbour only, so a
  zero that lands on the scan grid is reported once, not twice.
- The 50%-of-range jump test is a heuristic. Steep continuous functions can be
  reported as discontinuities, and small jumps are missed.
- Closely spaced features inside one scan interval can be merged or missed;
  raising ``samples`` narrows the interval.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, List, NamedTuple, Optional, Tuple

import numpy as np

from .derivatives import (
    derivative,
    derivative_samples,
    second_derivative,
    second_derivative_samples,
    second_difference_noise,
)
from .sampling import evaluate, sample_grid

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

TOLERANCE = 1e-6
DERIVATIVE_FLOOR = 1e-10
MAX_NEWTON_ITERATIONS = 20
DISCONTINUITY_JUMP_FRACTION = 0.5

RealCallable = Callable[[float], float]
Interval = Tuple[float, float]


class Extremum(NamedTuple):
    """A refined critical point classified by the second-derivative test."""

    x: float
    y: float
    is_maximum: bool


class CurveBreak(NamedTuple):
    """A vertical asymptote (``is_asymptote``) or a jump discontinuity."""

    x: float
    is_asymptote: bool


def scan_grid(domain: Interval, samples: int) -> np.ndarray:
    """Return the detection grid: ``2 * samples`` steps across ``domain``."""
    return sample_grid(domain, 2 * samples)


def sign_change_brackets(values: np.ndarray) -> np.ndarray:
    """Return indices ``i`` such that ``values[i]`` and ``values[i + 1]`` change sign.

    Pairs with a non-finite member are skipped. An exact zero is attributed to
    the interval that ends at it, or to the interval that starts at it when
    the left neighbour cannot claim it (grid start, undefined, or also zero).
    """
    values = np.asarray(values, dtype=float)
    if values.size < 2:
        return np.empty(0, dtype=int)
    left = values[:-1]
    right = values[1:]
    finite = np.isfinite(left) & np.isfinite(right)
    with np.errstate(invalid="ignore"):
        s_left = np.sign(left)
        s_right = np.sign(right)
    strict = finite & (s_left * s_right < 0)
    ends_at_zero = finite & (s_right == 0) & (s_left != 0)
    claimed_before = np.concatenate(([False], ends_at_zero[:-1]))
    starts_at_zero = finite & (s_left == 0) & (s_right != 0) & ~claimed_before
    return np.flatnonzero(strict | ends_at_zero | starts_at_zero)


def _is_new(x: float, found: List[float], tolerance: float) -> bool:
    return not any(abs(x - other) < tolerance for other in found)


def _in_domain(x: float, domain: Interval) -> bool:
    return domain[0] <= x <= domain[1]


def _newton_root(fn: RealCallable, x0: float) -> Optional[float]:
    x = x0
    for _ in range(MAX_NEWTON_ITERATIONS):
        fx = fn(x)
        if not math.isfinite(fx):
            return None
        if abs(fx) < TOLERANCE:
            break
        slope = derivative(fn, x)
        if not math.isfinite(slope) or abs(slope) < DERIVATIVE_FLOOR:
            break
        x = x - fx / slope
        if not math.isfinite(x):
            return None
    return x


def find_roots(fn: RealCallable, domain: Interval, samples: int) -> List[float]:
    """Return the roots of ``fn`` inside ``domain`` in ascending order.

    Parameters
    ----------
    fn : callable
        Scalar function (``nan`` where undefined).
    domain : tuple[float, float]
        Search interval.
    samples : int
        Base sampling resolution; the scan uses ``2 * samples`` steps.

    Returns
    -------
    list[float]
        Roots with ``|f(x)| < 1e-6``, no two closer than ``1e-6``.
    """
    xs = scan_grid(domain, samples)
    ys = evaluate(fn, xs)
    brackets = sign_change_brackets(ys)

    roots: List[float] = []
    for i in brackets:
        root = _newton_root(fn, (xs[i] + xs[i + 1]) / 2)
        if root is None or not _in_domain(root, domain):
            continue
        if abs(fn(root)) >= TOLERANCE:
            continue
        if _is_new(root, roots, TOLERANCE):
            roots.append(root)

    logger.debug("roots: %d bracket(s), %d accepted", len(brackets), len(roots))
    return sorted(roots)


def _newton_critical_point(fn: RealCallable, x0: float) -> Optional[float]:
    x = x0
    for _ in range(MAX_NEWTON_ITERATIONS):
        slope = derivative(fn, x)
        if not math.isfinite(slope):
            return None
        if abs(slope) < TOLERANCE:
            break
        curvature = second_derivative(fn, x)
        if not math.isfinite(curvature) or abs(curvature) < DERIVATIVE_FLOOR:
            break
        x = x - slope / curvature
        if not math.isfinite(x):
            return None
    return x


def find_extrema(fn: RealCallable, domain: Interval, samples: int) -> List[Extremum]:
    """Return local extrema of ``fn`` inside ``domain`` sorted by x.

    A bracket is promoted only when the refined point has ``|f'| < 1e-6``, a
    conclusive second derivative (``|f''| > 1e-6``) and a finite value.
    Negative ``f''`` is a maximum, positive a minimum.
    """
    xs = scan_grid(domain, samples)
    slopes = derivative_samples(fn, xs)
    brackets = sign_change_brackets(slopes)

    extrema: List[Extremum] = []
    seen: List[float] = []
    for i in brackets:
        x = _newton_critical_point(fn, (xs[i] + xs[i + 1]) / 2)
        if x is None or not _in_domain(x, domain):
            continue
        if abs(derivative(fn, x)) >= TOLERANCE:
            continue
        curvature = second_derivative(fn, x)
        if not math.isfinite(curvature) or abs(curvature) <= TOLERANCE:
            continue
        y = fn(x)
        if not math.isfinite(y):
            continue
        if not _is_new(x, seen, TOLERANCE):
            continue
        seen.append(x)
        extrema.append(Extremum(x=x, y=y, is_maximum=curvature < 0))

    logger.debug("extrema: %d bracket(s), %d accepted", len(brackets), len(extrema))
    return sorted(extrema, key=lambda e: e.x)


def find_inflection_points(fn: RealCallable, domain: Interval, samples: int) -> List[float]:
    """Return approximate inflection points of ``fn`` sorted by x.

    Each inflection x is the midpoint of a scan interval across which ``f''``
    changes sign, so its accuracy is half a scan step. Sign changes where both
    second differences are within rounding noise (straight lines) are ignored.
    """
    xs = scan_grid(domain, samples)
    ys = evaluate(fn, xs)
    curvature = second_derivative_samples(fn, xs, values=ys)
    slopes = derivative_samples(fn, xs)
    brackets = sign_change_brackets(curvature)

    with np.errstate(invalid="ignore"):
        significant = np.abs(curvature) > second_difference_noise(xs, ys, slopes)

    points: List[float] = []
    for i in brackets:
        if not (significant[i] or significant[i + 1]):
            continue
        x = float((xs[i] + xs[i + 1]) / 2)
        if not _in_domain(x, domain) or not math.isfinite(fn(x)):
            continue
        if _is_new(x, points, TOLERANCE):
            points.append(x)

    logger.debug("inflections: %d bracket(s), %d accepted", len(brackets), len(points))
    return sorted(points)


def find_breaks(
    fn: RealCallable, domain: Interval, y_range: Interval, samples: int
) -> List[CurveBreak]:
    """Return vertical asymptotes and jump discontinuities sorted by x.

    Parameters
    ----------
    fn : callable
        Scalar function (``nan``/``inf`` where undefined).
    domain : tuple[float, float]
        Search interval.
    y_range : tuple[float, float]
        Visible y-interval; a jump larger than half its height counts as a
        discontinuity.
    samples : int
        Base sampling resolution; the scan uses ``2 * samples`` steps.

    Returns
    -------
    list[CurveBreak]
        Breaks at scan-interval midpoints, none within two scan steps of
        another.
    """
    xs = scan_grid(domain, samples)
    ys = evaluate(fn, xs)
    step = (domain[1] - domain[0]) / (2 * samples)
    threshold = (y_range[1] - y_range[0]) * DISCONTINUITY_JUMP_FRACTION

    finite = np.isfinite(ys)
    one_sided = finite[:-1] != finite[1:]
    with np.errstate(invalid="ignore"):
        jumps = finite[:-1] & finite[1:] & (np.abs(np.diff(ys)) > threshold)

    breaks: List[CurveBreak] = []
    for i in np.flatnonzero(one_sided | jumps):
        x = float((xs[i] + xs[i + 1]) / 2)
        if not _is_new(x, [b.x for b in breaks], 2 * step):
            continue
        breaks.append(CurveBreak(x=x, is_asymptote=bool(one_sided[i])))

    logger.debug(
        "breaks: %d asymptote(s), %d discontinuit(ies)",
        sum(b.is_asymptote for b in breaks),
        sum(not b.is_asymptote for b in breaks),
    )
    return breaks


__all__ = [
    "CurveBreak",
    "DERIVATIVE_FLOOR",
    "DISCONTINUITY_JUMP_FRACTION",
    "Extremum",
    "MAX_NEWTON_ITERATIONS",
    "TOLERANCE",
    "find_breaks",
    "find_extrema",
    "find_inflection_points",
    "find_roots",
    "scan_grid",
    "sign_change_brackets",
]
