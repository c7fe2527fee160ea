"""Mapping between the mathematical plane and the pixel canvas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Tuple

import numpy as np


class PixelPoint(NamedTuple):
    """Canvas pixel coordinates (y grows downwards)."""

    x: float
    y: float


@dataclass(frozen=True)
class CoordinateMapper:
    """Map math coordinates in ``domain`` x ``range`` onto a ``width`` x ``height`` canvas.

    Parameters
    ----------
    domain : tuple[float, float]
        Visible x-interval, ``domain[0] < domain[1]``.
    range : tuple[float, float]
        Visible y-interval, ``range[0] < range[1]``.
    width, height : float
        Canvas size in pixels.

    Notes
    -----
    The y axis is flipped: ``range[1]`` maps to pixel row 0.
    """

    domain: Tuple[float, float]
    range: Tuple[float, float]
    width: float
    height: float

    def math_to_pixel(self, x: float, y: float) -> PixelPoint:
        """Return the canvas pixel position of the math point ``(x, y)``."""
        x_min, x_max = self.domain
        y_min, y_max = self.range
        px = (x - x_min) / (x_max - x_min) * self.width
        py = self.height - (y - y_min) / (y_max - y_min) * self.height
        return PixelPoint(px, py)

    def map_arrays(self, xs: np.ndarray, ys: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Vectorized :meth:`math_to_pixel`; ``nan`` entries stay ``nan``."""
        x_min, x_max = self.domain
        y_min, y_max = self.range
        xs = np.asarray(xs, dtype=float)
        ys = np.asarray(ys, dtype=float)
        px = (xs - x_min) / (x_max - x_min) * self.width
        py = self.height - (ys - y_min) / (y_max - y_min) * self.height
        return px, py

    def contains_y(self, y: float) -> bool:
        """Return True when ``y`` is finite and inside the visible range."""
        return bool(np.isfinite(y)) and self.range[0] <= y <= self.range[1]

    @staticmethod
    def to_absolute(point: PixelPoint, origin: Tuple[float, float]) -> PixelPoint:
        """Offset a canvas-relative point by the absolute canvas origin."""
        return PixelPoint(origin[0] + point.x, origin[1] + point.y)


__all__ = ["CoordinateMapper", "PixelPoint"]
