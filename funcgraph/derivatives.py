"""Central finite-difference derivatives shared by the detectors."""

from __future__ import annotations

from typing import Callable

import numpy as np

from .sampling import evaluate

DERIVATIVE_STEP = 1e-5

_EPS = float(np.finfo(float).eps)


def derivative(fn: Callable[[float], float], x: float, h: float = DERIVATIVE_STEP) -> float:
    """Central-difference approximation of ``f'(x)``."""
    with np.errstate(all="ignore"):
        return (fn(x + h) - fn(x - h)) / (2 * h)


def second_derivative(
    fn: Callable[[float], float], x: float, h: float = DERIVATIVE_STEP
) -> float:
    """Central second-difference approximation of ``f''(x)``."""
    with np.errstate(all="ignore"):
        return (fn(x + h) - 2 * fn(x) + fn(x - h)) / (h * h)


def derivative_samples(
    fn: Callable[[float], float], xs: np.ndarray, h: float = DERIVATIVE_STEP
) -> np.ndarray:
    """Vectorized :func:`derivative` over ``xs`` (``nan`` where undefined)."""
    with np.errstate(all="ignore"):
        return (evaluate(fn, xs + h) - evaluate(fn, xs - h)) / (2 * h)


def second_derivative_samples(
    fn: Callable[[float], float],
    xs: np.ndarray,
    h: float = DERIVATIVE_STEP,
    values: np.ndarray | None = None,
) -> np.ndarray:
    """Vectorized :func:`second_derivative` over ``xs``.

    ``values`` may carry precomputed ``f(xs)`` to save one evaluation pass.
    """
    center = evaluate(fn, xs) if values is None else values
    with np.errstate(all="ignore"):
        return (evaluate(fn, xs + h) - 2 * center + evaluate(fn, xs - h)) / (h * h)


def second_difference_noise(
    xs: np.ndarray,
    values: np.ndarray,
    slopes: np.ndarray,
    h: float = DERIVATIVE_STEP,
) -> np.ndarray:
    """Magnitude below which a second difference is indistinguishable from rounding.

    Two error sources are bounded, both amplified by ``1 / h**2``:

    - each function value carries a relative rounding error of about one
      ulp of ``|f|`` (taken at the larger of the three stencil values),
    - rounding ``x +/- h`` to the nearest float shifts the stencil by up to
      one ulp of ``x``, which moves ``f`` by ``|f'|`` times that.

    The bound keeps a 4x margin and is proportional to ``f``: scaling a
    function by a constant scales its noise floor by the same factor.
    """
    with np.errstate(all="ignore"):
        magnitude = np.abs(np.nan_to_num(values, nan=0.0))
        slope = np.abs(np.nan_to_num(slopes, nan=0.0))
        value_error = _EPS * (magnitude + slope * h)
        position_error = slope * np.spacing(np.abs(xs) + h)
        return 16.0 * (value_error + position_error) / (h * h)


__all__ = [
    "DERIVATIVE_STEP",
    "derivative",
    "derivative_samples",
    "second_derivative",
    "second_derivative_samples",
    "second_difference_noise",
]
