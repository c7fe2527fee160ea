"""Function graph engine: curves, axes, grid, remarkable points and shading.

Purpose
-------
This module provides :class:`FunctionGraph`, the immutable object that ties
the numerical pieces of :mod:`funcgraph` together. Given functions, a domain,
an optional range and a canvas size it computes everything a renderer needs.

Concepts and structure
----------------------
At construction, in this order:

1. the configuration is validated and resolved (:mod:`funcgraph.graph_config`),
2. the range is derived from sampled values when not supplied,
3. grid spacing is chosen (:mod:`funcgraph.grid_spacing`) unless supplied,
4. axes and ticks are computed (:mod:`funcgraph.axes`) when axes are shown,
5. remarkable points are detected for every function
   (:mod:`funcgraph.remarkable_points`) unless detection is disabled.

Curve paths, grid lines and shaded-region paths are recomputed on every call;
they are pure functions of the (immutable) graph state.

Architecture notes
------------------
``FunctionGraph`` only orchestrates. Per-concern logic lives in the
collaborator modules so each can be tested without a graph. Rendering is
delegated to :mod:`funcgraph.svg_render` and :mod:`funcgraph.plotly_export`.

Important gotchas
-----------------
- The graph never raises for numerical trouble. Undefined values break
  curves and hide points; failed refinements simply produce no point.
- Malformed configuration raises at construction (``ValueError``,
  ``IndexError``, ``TypeError``).
- Pixel coordinates are canvas-relative; add :attr:`FunctionGraph.origin`
  (or use the ``*_absolute_*`` helpers) to place them on a larger drawing.

Examples
--------
>>> from funcgraph import FunctionGraph, PointType
>>> graph = FunctionGraph(lambda x: x * x - 4, width=600, height=400, domain=(-5, 5))
>>> [round(p.x, 3) for p in graph.get_remarkable_points(PointType.ROOT)]
[-2.0, 2.0]

Logging
-------
This module uses Python's standard :mod:`logging` library and is silent by
default. Enable it with::

    import logging
    logging.getLogger("funcgraph").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

from .axes import GraphAxis, GridLines, compute_axes, grid_lines
from .coordinates import CoordinateMapper, PixelPoint
from .graph_config import (
    GraphConfig,
    PlottedFunction,
    RangeLike,
    ShadedRegion,
    StyleLike,
    resolve_config,
)
from .grid_spacing import optimal_grid_spacing
from .remarkable_points import (
    PointTypeLike,
    RemarkablePoint,
    RemarkablePointIndex,
)
from .sampling import PathPoint, derive_range, points_to_path, sample_function
from .shading import shaded_region_path

# Module logger
# - Uses a NullHandler so importing this module never configures global logging.
# - Callers can enable logs via standard logging configuration.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

# Upper bound on ticks per axis; smaller explicit spacings are rejected.
MAX_TICKS_PER_AXIS = 10_000


class FunctionGraph:
    """
    An immutable plot of one or more real functions on a pixel canvas.

    Parameters
    ----------
    functions : function spec or sequence of function specs
        Callables, SymPy expressions, strings, mappings with ``fn`` and
        styling keys, or :class:`PlottedFunction` records.
    width, height : float
        Canvas size in pixels.
    domain : (float, float), optional
        Visible x-interval. Default ``(-10, 10)``.
    range : (float, float), optional
        Visible y-interval. Derived from sampled values (+10% padding) when
        omitted.
    samples : int, optional
        Sampling resolution (>= 2), default 200. Detection scans use twice as
        many steps.
    grid_spacing : (float, float), optional
        Tick/grid spacing; chosen automatically when omitted.
    min_label_density : float, optional
        Minimum pixels between labels for automatic spacing. Default 50.
    show_grid, show_axes, show_labels : bool, optional
        Rendering toggles, default on.
    title : str, optional
        Title drawn above the canvas.
    detect_remarkable_points : bool, optional
        Run feature detection at construction (default True).
    show_remarkable_points : bool, optional
        Render detected points (default False).
    remarkable_point_style, axis_style, grid_style, style : mapping, optional
        SVG style overrides.
    shaded_regions : sequence of ShadedRegion or mappings, optional
        Regions to fill between curves.
    debug : bool, optional
        Draw the canvas outline when rendering.
    origin : (float, float), optional
        Absolute pixel position of the canvas' top-left corner, supplied by
        the layout that places the graph.

    Examples
    --------
    >>> import sympy as sp  # doctest: +SKIP
    >>> x = sp.Symbol("x")  # doctest: +SKIP
    >>> graph = FunctionGraph([x**3 - 3*x, {"fn": "x**2", "color": "red"}],
    ...                       width=600, height=400, domain=(-3, 3))  # doctest: +SKIP
    >>> svg = graph.render()  # doctest: +SKIP
    """

    def __init__(
        self,
        functions: Any,
        *,
        width: float,
        height: float,
        domain: Optional[RangeLike] = None,
        range: Optional[RangeLike] = None,
        samples: Optional[int] = None,
        grid_spacing: Optional[RangeLike] = None,
        min_label_density: Optional[float] = None,
        show_grid: bool = True,
        show_axes: bool = True,
        show_labels: bool = True,
        title: Optional[str] = None,
        detect_remarkable_points: bool = True,
        show_remarkable_points: bool = False,
        remarkable_point_style: Optional[StyleLike] = None,
        axis_style: Optional[StyleLike] = None,
        grid_style: Optional[StyleLike] = None,
        style: Optional[StyleLike] = None,
        shaded_regions: Sequence[Any] = (),
        debug: bool = False,
        origin: RangeLike = (0.0, 0.0),
    ) -> None:
        config = resolve_config(
            functions,
            width=width,
            height=height,
            domain=domain,
            range=range,
            samples=samples,
            grid_spacing=grid_spacing,
            min_label_density=min_label_density,
            show_grid=show_grid,
            show_axes=show_axes,
            show_labels=show_labels,
            title=title,
            detect_remarkable_points=detect_remarkable_points,
            show_remarkable_points=show_remarkable_points,
            remarkable_point_style=remarkable_point_style,
            axis_style=axis_style,
            grid_style=grid_style,
            style=style,
            shaded_regions=shaded_regions,
            debug=debug,
            origin=origin,
        )
        self._setup(config)

    @classmethod
    def from_config(cls, config: GraphConfig) -> "FunctionGraph":
        """Build a graph from an already resolved :class:`GraphConfig`."""
        graph = cls.__new__(cls)
        graph._setup(config)
        return graph

    def _setup(self, config: GraphConfig) -> None:
        self._config = config
        y_range = config.range or derive_range(config.functions, config.domain, config.samples)
        self._mapper = CoordinateMapper(
            domain=config.domain, range=y_range, width=config.width, height=config.height
        )

        spacing = config.grid_spacing or optimal_grid_spacing(
            config.width, config.height, config.domain, y_range, config.min_label_density
        )
        if config.grid_spacing is not None:
            for extent, step, axis in (
                (config.domain[1] - config.domain[0], spacing[0], "x"),
                (y_range[1] - y_range[0], spacing[1], "y"),
            ):
                if extent / step > MAX_TICKS_PER_AXIS:
                    raise ValueError(
                        f"grid spacing {step} is too small for the {axis} extent {extent} "
                        f"(more than {MAX_TICKS_PER_AXIS} ticks)"
                    )
        self._grid_spacing: Tuple[float, float] = (float(spacing[0]), float(spacing[1]))

        self._axes: Optional[Tuple[GraphAxis, GraphAxis]] = None
        if config.show_axes:
            self._axes = compute_axes(self._mapper, self._grid_spacing)

        if config.detect_remarkable_points:
            self._remarkable = RemarkablePointIndex.build(
                config.functions, self._mapper, config.samples
            )
        else:
            self._remarkable = RemarkablePointIndex()

        logger.debug(
            "FunctionGraph functions=%d domain=%s range=%s spacing=%s points=%d",
            len(config.functions),
            config.domain,
            y_range,
            self._grid_spacing,
            sum(len(points) for points in self._remarkable.values()),
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def config(self) -> GraphConfig:
        """Return the resolved configuration."""
        return self._config

    @property
    def functions(self) -> Tuple[PlottedFunction, ...]:
        return self._config.functions

    @property
    def shaded_regions(self) -> Tuple[ShadedRegion, ...]:
        return self._config.shaded_regions

    @property
    def domain(self) -> Tuple[float, float]:
        return self._mapper.domain

    @property
    def range(self) -> Tuple[float, float]:
        """Return the visible y-interval (given or derived)."""
        return self._mapper.range

    @property
    def samples(self) -> int:
        return self._config.samples

    @property
    def width(self) -> float:
        return self._config.width

    @property
    def height(self) -> float:
        return self._config.height

    @property
    def origin(self) -> Tuple[float, float]:
        return self._config.origin

    @property
    def mapper(self) -> CoordinateMapper:
        return self._mapper

    @property
    def grid_spacing(self) -> Tuple[float, float]:
        """Return ``(dx, dy)`` tick/grid spacing."""
        return self._grid_spacing

    @property
    def x_axis(self) -> Optional[GraphAxis]:
        """Return the horizontal axis, or ``None`` when axes are hidden."""
        return None if self._axes is None else self._axes[0]

    @property
    def y_axis(self) -> Optional[GraphAxis]:
        """Return the vertical axis, or ``None`` when axes are hidden."""
        return None if self._axes is None else self._axes[1]

    # ------------------------------------------------------------------
    # Coordinates
    # ------------------------------------------------------------------

    def math_to_pixel(self, x: float, y: float) -> PixelPoint:
        """Return canvas-relative pixels for the math point ``(x, y)``."""
        return self._mapper.math_to_pixel(x, y)

    def math_to_absolute_position(self, x: float, y: float) -> PixelPoint:
        """Return absolute pixels (canvas origin applied) for the math point ``(x, y)``.

        Useful for marking arbitrary points such as curve intersections.
        """
        return CoordinateMapper.to_absolute(self._mapper.math_to_pixel(x, y), self.origin)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def sample_points(self, index: int) -> List[PathPoint]:
        """Return pixel samples (with ``None`` path breaks) for function ``index``."""
        return sample_function(self.functions[index], self._mapper, self.samples)

    def function_path(self, index: int) -> str:
        """Return the SVG path string of function ``index`` (``""`` if never visible)."""
        return points_to_path(self.sample_points(index))

    def function_paths(self) -> Tuple[str, ...]:
        """Return one SVG path string per function, in index order."""
        return tuple(self.function_path(idx) for idx in range(len(self.functions)))

    def grid_lines(self) -> GridLines:
        """Return grid line pixel positions for the current spacing."""
        return grid_lines(self._mapper, self._grid_spacing)

    def shaded_region_path(self, region: ShadedRegion) -> str:
        """Return the closed fill path of ``region`` (``""`` when nothing is finite)."""
        return shaded_region_path(region, self.functions, self._mapper, self.samples)

    def shaded_region_paths(self) -> Tuple[str, ...]:
        """Return one fill path per configured shaded region."""
        return tuple(self.shaded_region_path(region) for region in self.shaded_regions)

    # ------------------------------------------------------------------
    # Remarkable points
    # ------------------------------------------------------------------

    @property
    def remarkable_points(self) -> RemarkablePointIndex:
        """Return the per-function remarkable point index (empty when detection is off)."""
        return self._remarkable

    def get_remarkable_points(
        self,
        type: Optional[PointTypeLike] = None,
        function_index: Optional[int] = None,
    ) -> Tuple[RemarkablePoint, ...]:
        """Return detected points, optionally filtered by type and/or function index.

        Parameters
        ----------
        type : PointType or str, optional
            E.g. ``PointType.ROOT`` or ``"local-maximum"``.
        function_index : int, optional
            Restrict to one function.

        Returns
        -------
        tuple[RemarkablePoint, ...]

        Examples
        --------
        >>> graph = FunctionGraph(lambda x: x**3 - 3 * x, width=600, height=400,
        ...                       domain=(-3, 3))  # doctest: +SKIP
        >>> graph.get_remarkable_points("local-maximum")[0].x  # doctest: +SKIP
        -1.0000000000000002
        """
        return self._remarkable.points(type, function_index)

    def get_remarkable_point(self, type: PointTypeLike, index: int = 0) -> Optional[PixelPoint]:
        """Return the absolute position of the ``index``-th point of ``type``.

        Returns ``None`` when there is no such point or it has no pixel
        position (off-range or an asymptote).
        """
        points = self.get_remarkable_points(type)
        if not 0 <= index < len(points):
            return None
        pixel = points[index].pixel
        if pixel is None:
            return None
        return CoordinateMapper.to_absolute(pixel, self.origin)

    def remarkable_point_markers(self) -> Tuple[Tuple[str, PixelPoint], ...]:
        """Return ``(identifier, pixel)`` for every point that has a pixel position.

        Identifiers are ``"func-graph-remarkable-{type}-{ordinal}"`` where the
        ordinal counts drawable points across all functions.
        """
        markers = []
        for point in self._remarkable.points():
            if point.pixel is None:
                continue
            identifier = f"func-graph-remarkable-{point.type.value}-{len(markers)}"
            markers.append((identifier, point.pixel))
        return tuple(markers)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Return the graph as an SVG ``<g>`` element string."""
        from .svg_render import render_svg

        return render_svg(self)

    def to_plotly_figure(self) -> Any:
        """Return a :class:`plotly.graph_objects.Figure` of this graph."""
        from .plotly_export import to_plotly_figure

        return to_plotly_figure(self)

    def __repr__(self) -> str:
        return (
            f"FunctionGraph(functions={len(self.functions)}, domain={self.domain}, "
            f"range={self.range}, size={self.width:g}x{self.height:g})"
        )


__all__ = ["FunctionGraph", "MAX_TICKS_PER_AXIS"]
