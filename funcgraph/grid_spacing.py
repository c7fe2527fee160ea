"""Human-friendly tick spacing, tick positions, and tick label formatting.

Purpose
-------
Picks grid/tick spacing for each axis from the "nice" multipliers
``1, 2, 2.5, 5`` scaled by a power of ten, under the constraint that labels
stay at least ``min_label_density`` pixels apart.

Examples
--------
>>> from funcgraph.grid_spacing import optimal_spacing, format_tick_label
>>> optimal_spacing(600, 10, 50)
1.0
>>> optimal_spacing(400, 20, 50)
2.5
>>> format_tick_label(1500)
'1.5e+3'
"""

from __future__ import annotations

import logging
import math
from typing import List, Tuple

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

NICE_NUMBERS: Tuple[float, ...] = (1.0, 2.0, 2.5, 5.0)
MIN_DENSITY_RATIO = 0.8
ZERO_LABEL_TOLERANCE = 1e-10

# Relative slack so that an exact power of ten is not pushed to the next
# multiplier by rounding in ``rough / magnitude``.
_NICE_SLACK = 1e-9


def optimal_spacing(
    pixel_extent: float, math_extent: float, min_label_density: float = 50.0
) -> float:
    """Return a nice tick spacing for one axis.

    Parameters
    ----------
    pixel_extent : float
        Axis length in pixels.
    math_extent : float
        Axis length in math units.
    min_label_density : float
        Minimum pixels between consecutive labels.

    Returns
    -------
    float
        ``nice * 10**k`` with ``nice`` in :data:`NICE_NUMBERS`. When not even
        one label fits, the whole extent is returned.
    """
    if not math.isfinite(math_extent) or math_extent <= 0:
        return 1.0
    max_labels = math.floor(pixel_extent / min_label_density)
    if max_labels <= 0:
        return math_extent

    rough = math_extent / max_labels
    magnitude = 10.0 ** math.floor(math.log10(rough))
    if magnitude == 0:
        return rough
    normalized = rough / magnitude

    nice = NICE_NUMBERS[-1]
    for candidate in NICE_NUMBERS:
        if candidate >= normalized * (1 - _NICE_SLACK):
            nice = candidate
            break
    spacing = nice * magnitude

    if (pixel_extent / math_extent) * spacing < min_label_density * MIN_DENSITY_RATIO:
        next_index = NICE_NUMBERS.index(nice) + 1
        if next_index < len(NICE_NUMBERS):
            spacing = NICE_NUMBERS[next_index] * magnitude
        else:
            spacing = NICE_NUMBERS[0] * magnitude * 10
    return spacing


def optimal_grid_spacing(
    width: float,
    height: float,
    domain: Tuple[float, float],
    y_range: Tuple[float, float],
    min_label_density: float = 50.0,
) -> Tuple[float, float]:
    """Return ``(dx, dy)`` for a ``width`` x ``height`` canvas."""
    dx = optimal_spacing(width, domain[1] - domain[0], min_label_density)
    dy = optimal_spacing(height, y_range[1] - y_range[0], min_label_density)
    logger.debug("grid spacing dx=%s dy=%s (density=%s)", dx, dy, min_label_density)
    return dx, dy


def tick_values(lo: float, hi: float, spacing: float) -> List[float]:
    """Return the multiples of ``spacing`` inside ``[lo, hi]`` in ascending order.

    Values are computed as ``k * spacing`` instead of by repeated addition so
    long axes do not accumulate drift.
    """
    if spacing <= 0 or not math.isfinite(spacing):
        return []
    slack = 1e-9
    k_start = math.ceil(lo / spacing - slack)
    k_end = math.floor(hi / spacing + slack)
    return [k * spacing for k in range(k_start, k_end + 1)]


def format_tick_label(n: float) -> str:
    """Format an axis value for display.

    - values within ``1e-10`` of zero render as ``"0"``,
    - ``|n| >= 1000`` or ``|n| < 0.01`` use one-decimal scientific notation
      (``"1.5e+3"``, ``"5.0e-3"``),
    - otherwise fixed point with 2 decimals below 1, 1 decimal below 10, and
      none above.
    """
    magnitude = abs(n)
    if magnitude < ZERO_LABEL_TOLERANCE:
        return "0"
    if magnitude >= 1000 or magnitude < 0.01:
        mantissa, exponent = f"{n:.1e}".split("e")
        exp = int(exponent)
        return f"{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp)}"
    if magnitude < 1:
        return f"{n:.2f}"
    if magnitude < 10:
        return f"{n:.1f}"
    return f"{n:.0f}"


__all__ = [
    "MIN_DENSITY_RATIO",
    "NICE_NUMBERS",
    "format_tick_label",
    "optimal_grid_spacing",
    "optimal_spacing",
    "tick_values",
]
