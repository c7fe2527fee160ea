"""Remarkable points: detection results annotated for display and querying.

Purpose
-------
Runs the four detectors of :mod:`funcgraph.detectors` for one function, adds
the y-intercept, and turns every hit into a :class:`RemarkablePoint` with a
human-readable description and (where the point is visible) a pixel position.

Concepts and structure
----------------------
- ``PointType`` enumerates the kinds of points.
- ``RemarkablePoint`` is one immutable result.
- ``compute_remarkable_points`` is the per-function aggregation.
- ``RemarkablePointIndex`` maps function index to its points. It is filled
  once when a graph is constructed and only read afterwards.

Examples
--------
>>> from funcgraph.coordinates import CoordinateMapper
>>> from funcgraph.remarkable_points import PointType, compute_remarkable_points
>>> mapper = CoordinateMapper((-5.0, 5.0), (-5.0, 25.0), 600.0, 400.0)
>>> points = compute_remarkable_points(lambda x: x * x - 4, 0, mapper, 200)
>>> sorted(round(p.x, 3) for p in points if p.type is PointType.ROOT)
[-2.0, 2.0]
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .coordinates import CoordinateMapper, PixelPoint
from .detectors import find_breaks, find_extrema, find_inflection_points, find_roots
from .grid_spacing import format_tick_label

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class PointType(str, Enum):
    """Kind of remarkable point; values are the identifiers used in SVG ids."""

    ROOT = "root"
    Y_INTERCEPT = "y-intercept"
    LOCAL_MAXIMUM = "local-maximum"
    LOCAL_MINIMUM = "local-minimum"
    INFLECTION_POINT = "inflection-point"
    VERTICAL_ASYMPTOTE = "vertical-asymptote"
    DISCONTINUITY = "discontinuity"


PointTypeLike = Union[PointType, str]


def coerce_point_type(value: PointTypeLike) -> PointType:
    """Return ``value`` as a :class:`PointType` (accepts the string values)."""
    if isinstance(value, PointType):
        return value
    try:
        return PointType(value)
    except ValueError:
        valid = ", ".join(t.value for t in PointType)
        raise ValueError(f"unknown remarkable point type {value!r}; expected one of: {valid}") from None


@dataclass(frozen=True)
class RemarkablePoint:
    """One detected point.

    Parameters
    ----------
    type : PointType
        Kind of point.
    x : float
        Math x-coordinate.
    y : float or None
        Math y-coordinate; ``None`` for asymptotes and discontinuities.
    description : str
        Human-readable summary, e.g. ``"Root at x = 2.0"``.
    pixel : PixelPoint or None
        Canvas-relative position; present only when ``y`` is finite and
        inside the visible range.
    function_index : int
        Index of the function the point belongs to.
    """

    type: PointType
    x: float
    y: Optional[float]
    description: str
    pixel: Optional[PixelPoint]
    function_index: int


def _point(
    kind: PointType,
    x: float,
    y: Optional[float],
    description: str,
    mapper: CoordinateMapper,
    function_index: int,
) -> RemarkablePoint:
    pixel = None
    if y is not None and mapper.contains_y(y):
        pixel = mapper.math_to_pixel(x, y)
    return RemarkablePoint(
        type=kind,
        x=x,
        y=y,
        description=description,
        pixel=pixel,
        function_index=function_index,
    )


def compute_remarkable_points(
    fn: Callable[[float], float],
    function_index: int,
    mapper: CoordinateMapper,
    samples: int,
) -> Tuple[RemarkablePoint, ...]:
    """Return every remarkable point of ``fn`` over the mapper's domain.

    Order: roots, y-intercept, extrema, inflection points, then asymptotes
    and discontinuities; within each group points are sorted by x.
    """
    domain, y_range = mapper.domain, mapper.range
    fmt = format_tick_label
    points: List[RemarkablePoint] = []

    for x in find_roots(fn, domain, samples):
        points.append(
            _point(PointType.ROOT, x, 0.0, f"Root at x = {fmt(x)}", mapper, function_index)
        )

    if domain[0] <= 0 <= domain[1]:
        y0 = fn(0.0)
        if math.isfinite(y0) and y_range[0] <= y0 <= y_range[1]:
            points.append(
                _point(
                    PointType.Y_INTERCEPT,
                    0.0,
                    y0,
                    f"Y-intercept at (0, {fmt(y0)})",
                    mapper,
                    function_index,
                )
            )

    for ext in find_extrema(fn, domain, samples):
        kind = PointType.LOCAL_MAXIMUM if ext.is_maximum else PointType.LOCAL_MINIMUM
        name = "Local maximum" if ext.is_maximum else "Local minimum"
        points.append(
            _point(
                kind,
                ext.x,
                ext.y,
                f"{name} at ({fmt(ext.x)}, {fmt(ext.y)})",
                mapper,
                function_index,
            )
        )

    for x in find_inflection_points(fn, domain, samples):
        y = fn(x)
        points.append(
            _point(
                PointType.INFLECTION_POINT,
                x,
                y,
                f"Inflection point at ({fmt(x)}, {fmt(y)})",
                mapper,
                function_index,
            )
        )

    for brk in find_breaks(fn, domain, y_range, samples):
        if brk.is_asymptote:
            kind, name = PointType.VERTICAL_ASYMPTOTE, "Vertical asymptote"
        else:
            kind, name = PointType.DISCONTINUITY, "Discontinuity"
        points.append(_point(kind, brk.x, None, f"{name} at x = {fmt(brk.x)}", mapper, function_index))

    return tuple(points)


class RemarkablePointIndex(Mapping[int, Tuple[RemarkablePoint, ...]]):
    """Read-only mapping from function index to its remarkable points.

    Parameters
    ----------
    entries : iterable of (int, tuple[RemarkablePoint, ...])
        Per-function results, usually from :meth:`build`.
    """

    __slots__ = ("_points",)

    def __init__(self, entries: Iterable[Tuple[int, Tuple[RemarkablePoint, ...]]] = ()) -> None:
        self._points: Dict[int, Tuple[RemarkablePoint, ...]] = {
            int(idx): tuple(points) for idx, points in entries
        }

    @classmethod
    def build(
        cls,
        functions: Iterable[Callable[[float], float]],
        mapper: CoordinateMapper,
        samples: int,
    ) -> "RemarkablePointIndex":
        """Run detection for every function (in index order) and return the index."""
        entries = []
        for idx, fn in enumerate(functions):
            points = compute_remarkable_points(fn, idx, mapper, samples)
            logger.debug("function %d: %d remarkable point(s)", idx, len(points))
            entries.append((idx, points))
        return cls(entries)

    def __getitem__(self, function_index: int) -> Tuple[RemarkablePoint, ...]:
        return self._points[function_index]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._points))

    def __len__(self) -> int:
        return len(self._points)

    def points(
        self,
        type: Optional[PointTypeLike] = None,
        function_index: Optional[int] = None,
    ) -> Tuple[RemarkablePoint, ...]:
        """Return cached points, optionally filtered by type and/or function.

        Parameters
        ----------
        type : PointType or str, optional
            Keep only points of this kind.
        function_index : int, optional
            Keep only points of this function. An unknown index yields ``()``.

        Returns
        -------
        tuple[RemarkablePoint, ...]
            Points in function-index order, then detection order.
        """
        if function_index is not None:
            selected: Iterable[RemarkablePoint] = self._points.get(function_index, ())
        else:
            selected = (p for idx in self for p in self._points[idx])
        if type is None:
            return tuple(selected)
        kind = coerce_point_type(type)
        return tuple(p for p in selected if p.type is kind)

    def __repr__(self) -> str:
        counts = ", ".join(f"{idx}: {len(self._points[idx])}" for idx in self)
        return f"RemarkablePointIndex({{{counts}}})"


__all__ = [
    "PointType",
    "PointTypeLike",
    "RemarkablePoint",
    "RemarkablePointIndex",
    "coerce_point_type",
    "compute_remarkable_points",
]
