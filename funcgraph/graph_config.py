"""Configuration records for :class:`funcgraph.function_graph.FunctionGraph`.

Purpose
-------
All engine inputs are collected in explicit, immutable records. Every optional
field has a documented default that is resolved exactly once, in
:func:`resolve_config`, before any numerical work happens.

Concepts and structure
----------------------
- ``PlottedFunction``: one curve (normalized callable, index, styling).
- ``ShadedRegion``: a fill between two curves (or the range ceiling/axis).
- ``GraphConfig``: the whole configuration surface with defaults.

Important gotchas
-----------------
- Malformed numeric configuration fails fast with ``ValueError``
  (``domain[0] >= domain[1]``, ``samples < 2``, non-positive sizes). The
  checks run again in ``GraphConfig.__post_init__``, so hand-built records
  are validated too.
- ``range=None`` means "derive from sampled values"; the derivation itself
  lives in :func:`funcgraph.sampling.derive_range`.
- Numeric fields accept anything :func:`funcgraph.input_convert.InputConvert`
  accepts, including SymPy strings such as ``"2*pi"``.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional, Sequence, Tuple, Union

import sympy as sp

from .function_input import RealFunction, as_real_function
from .input_convert import InputConvert

NumberLike = Union[int, float]
NumberLikeOrStr = Union[int, float, str]
RangeLike = Tuple[NumberLikeOrStr, NumberLikeOrStr]
StyleLike = Mapping[str, Any]

DEFAULT_DOMAIN: Tuple[float, float] = (-10.0, 10.0)
DEFAULT_SAMPLES = 200
DEFAULT_MIN_LABEL_DENSITY = 50.0

DEFAULT_FUNCTION_COLOR = "#3498db"
DEFAULT_REMARKABLE_POINT_STYLE: StyleLike = MappingProxyType(
    {"fill": "blue", "stroke": "#c0392b", "stroke_width": "2px"}
)
DEFAULT_AXIS_STYLE: StyleLike = MappingProxyType({"stroke": "#2c3e50", "stroke_width": "2px"})
DEFAULT_GRID_STYLE: StyleLike = MappingProxyType({"stroke": "#ecf0f1", "stroke_width": "1px"})
DEFAULT_SHADED_REGION_STYLE: StyleLike = MappingProxyType(
    {"fill": "#e0e0e0", "fill_opacity": 0.3, "stroke": "none"}
)

_EMPTY_STYLE: StyleLike = MappingProxyType({})


def _freeze_style(style: Optional[StyleLike]) -> StyleLike:
    if style is None:
        return _EMPTY_STYLE
    if not isinstance(style, Mapping):
        raise TypeError(f"style must be a mapping, got {type(style).__name__}")
    return MappingProxyType(dict(style))


@dataclass(frozen=True)
class PlottedFunction:
    """One function to plot.

    Parameters
    ----------
    fn : RealFunction
        Normalized scalar callable (undefined values are ``nan``).
    index : int
        Position in the graph's function list.
    color : str or None
        Stroke color shorthand; overrides the default but not ``style``.
    style : mapping
        Extra SVG style fields for the curve (e.g. ``{"stroke_dasharray": "5,5"}``).
    show_points : bool
        Whether to draw a small marker at every rendered sample.
    label : str
        Legend/trace label.
    """

    fn: RealFunction
    index: int
    color: Optional[str] = None
    style: StyleLike = field(default_factory=lambda: _EMPTY_STYLE)
    show_points: bool = False
    label: str = ""

    def __call__(self, x: float) -> float:
        return self.fn(x)

    @property
    def stroke(self) -> str:
        """Return the effective stroke color of the curve."""
        explicit = self.style.get("stroke")
        if explicit is not None:
            return str(explicit)
        return self.color or DEFAULT_FUNCTION_COLOR


@dataclass(frozen=True)
class ShadedRegion:
    """Region between two curves.

    Parameters
    ----------
    top_function : int or None
        Index of the upper bounding function; ``None`` uses the top of the range.
    bottom_function : int or None
        Index of the lower bounding function; ``None`` uses ``y = 0`` when the
        x-axis is visible, otherwise the bottom of the range.
    domain : tuple[float, float] or None
        x-interval to shade; ``None`` uses the graph domain.
    style : mapping
        SVG fill style overrides.
    """

    top_function: Optional[int] = None
    bottom_function: Optional[int] = None
    domain: Optional[Tuple[float, float]] = None
    style: StyleLike = field(default_factory=lambda: _EMPTY_STYLE)


@dataclass(frozen=True)
class GraphConfig:
    """Resolved configuration of one function graph.

    Every field except ``functions``, ``width`` and ``height`` has a default;
    see :func:`resolve_config` for the accepted input forms.
    """

    functions: Tuple[PlottedFunction, ...]
    width: float
    height: float
    domain: Tuple[float, float] = DEFAULT_DOMAIN
    range: Optional[Tuple[float, float]] = None
    samples: int = DEFAULT_SAMPLES
    grid_spacing: Optional[Tuple[float, float]] = None
    min_label_density: float = DEFAULT_MIN_LABEL_DENSITY
    show_grid: bool = True
    show_axes: bool = True
    show_labels: bool = True
    title: Optional[str] = None
    detect_remarkable_points: bool = True
    show_remarkable_points: bool = False
    remarkable_point_style: StyleLike = field(default_factory=lambda: DEFAULT_REMARKABLE_POINT_STYLE)
    axis_style: StyleLike = field(default_factory=lambda: DEFAULT_AXIS_STYLE)
    grid_style: StyleLike = field(default_factory=lambda: DEFAULT_GRID_STYLE)
    style: StyleLike = field(default_factory=lambda: _EMPTY_STYLE)
    shaded_regions: Tuple[ShadedRegion, ...] = ()
    debug: bool = False
    origin: Tuple[float, float] = (0.0, 0.0)

    def __post_init__(self) -> None:
        # Hand-built records get the same checks as resolve_config output.
        if not self.functions:
            raise ValueError("at least one function is required")
        _positive(self.width, name="width")
        _positive(self.height, name="height")
        _interval(self.domain, name="domain")
        if self.range is not None:
            _interval(self.range, name="range")
        if InputConvert(self.samples, int, truncate=False) < 2:
            raise ValueError(f"samples must be >= 2, got {self.samples!r}")
        if self.grid_spacing is not None:
            dx, dy = self.grid_spacing
            _positive(dx, name="grid_spacing[0]")
            _positive(dy, name="grid_spacing[1]")
        _positive(self.min_label_density, name="min_label_density")
        for region in self.shaded_regions:
            _check_region_indices(region, len(self.functions))

    def __repr__(self) -> str:
        return (
            f"GraphConfig(functions={len(self.functions)}, size={self.width}x{self.height}, "
            f"domain={self.domain}, range={self.range}, samples={self.samples})"
        )


def _finite(value: Any, *, name: str) -> float:
    out = float(InputConvert(value, float))
    if not math.isfinite(out):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return out


def _interval(value: Any, *, name: str) -> Tuple[float, float]:
    try:
        raw_min, raw_max = value
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a (min, max) pair, got {value!r}") from exc
    lo = _finite(raw_min, name=f"{name}[0]")
    hi = _finite(raw_max, name=f"{name}[1]")
    if lo >= hi:
        raise ValueError(f"{name}[0] must be < {name}[1], got ({lo}, {hi})")
    return lo, hi


def _positive(value: Any, *, name: str) -> float:
    out = _finite(value, name=name)
    if out <= 0:
        raise ValueError(f"{name} must be > 0, got {value!r}")
    return out


def plotted_function(spec: Any, index: int) -> PlottedFunction:
    """Normalize one function spec into a :class:`PlottedFunction`.

    Accepted forms: ``PlottedFunction`` (re-indexed), a mapping with ``fn``
    plus optional ``color``/``style``/``show_points``/``label`` keys, or any
    function form accepted by :func:`funcgraph.function_input.as_real_function`.
    """
    if isinstance(spec, PlottedFunction):
        if spec.index == index:
            return spec
        return PlottedFunction(
            fn=spec.fn,
            index=index,
            color=spec.color,
            style=spec.style,
            show_points=spec.show_points,
            label=spec.label,
        )

    if isinstance(spec, Mapping):
        unknown = set(spec) - {"fn", "color", "style", "show_points", "label"}
        if unknown:
            raise TypeError(f"unknown function option(s): {', '.join(sorted(unknown))}")
        if "fn" not in spec:
            raise TypeError("function mappings require an 'fn' entry")
        label = str(spec.get("label") or "")
        return PlottedFunction(
            fn=as_real_function(spec["fn"], name=label),
            index=index,
            color=spec.get("color"),
            style=_freeze_style(spec.get("style")),
            show_points=bool(spec.get("show_points", False)),
            label=label,
        )

    return PlottedFunction(fn=as_real_function(spec), index=index)


def _normalize_functions(functions: Any) -> Tuple[PlottedFunction, ...]:
    if isinstance(functions, (PlottedFunction, Mapping, str, sp.Basic)) or callable(functions):
        items: Sequence[Any] = [functions]
    else:
        try:
            items = list(functions)
        except TypeError as exc:
            raise TypeError(
                f"functions must be a function spec or a sequence of them, got {type(functions).__name__}"
            ) from exc
    return tuple(plotted_function(spec, idx) for idx, spec in enumerate(items))


def _check_region_indices(
    region: ShadedRegion, function_count: int
) -> Tuple[Optional[int], Optional[int]]:
    """Return the region's (top, bottom) indices as ints, bounds-checked."""
    resolved = []
    for attr in ("top_function", "bottom_function"):
        idx = getattr(region, attr)
        if idx is not None:
            idx = int(InputConvert(idx, int, truncate=False))
            if not 0 <= idx < function_count:
                raise IndexError(
                    f"shaded region {attr}={idx} is out of bounds for {function_count} function(s)"
                )
        resolved.append(idx)
    return resolved[0], resolved[1]


def _normalize_region(region: Any, function_count: int) -> ShadedRegion:
    if isinstance(region, Mapping):
        unknown = set(region) - {"top_function", "bottom_function", "domain", "style"}
        if unknown:
            raise TypeError(f"unknown shaded region option(s): {', '.join(sorted(unknown))}")
        region = ShadedRegion(
            top_function=region.get("top_function"),
            bottom_function=region.get("bottom_function"),
            domain=region.get("domain"),
            style=region.get("style"),
        )
    elif not isinstance(region, ShadedRegion):
        raise TypeError(f"shaded regions must be ShadedRegion or mappings, got {type(region).__name__}")

    top, bottom = _check_region_indices(region, function_count)
    domain = region.domain
    return ShadedRegion(
        top_function=top,
        bottom_function=bottom,
        domain=None if domain is None else _interval(domain, name="shaded region domain"),
        style=_freeze_style(region.style),
    )


def resolve_config(
    functions: Any,
    *,
    width: NumberLikeOrStr,
    height: NumberLikeOrStr,
    domain: Optional[RangeLike] = None,
    range: Optional[RangeLike] = None,
    samples: Optional[Union[int, str]] = None,
    grid_spacing: Optional[RangeLike] = None,
    min_label_density: Optional[NumberLikeOrStr] = None,
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
) -> GraphConfig:
    """Validate raw keyword inputs and return a :class:`GraphConfig`.

    Parameters
    ----------
    functions : function spec or sequence of function specs
        Curves to plot, see :func:`plotted_function`.
    width, height : number
        Canvas size in pixels (> 0).
    domain : (min, max), optional
        Visible x-interval. Default ``(-10, 10)``.
    range : (min, max), optional
        Visible y-interval. ``None`` derives it from the sampled values.
    samples : int, optional
        Sampling resolution (>= 2). Default 200; detectors scan at twice this.
    grid_spacing : (dx, dy), optional
        Tick/grid spacing. ``None`` picks "nice" spacing automatically.
    min_label_density : number, optional
        Minimum pixels between labels for automatic spacing. Default 50.
    show_grid, show_axes, show_labels : bool
        Rendering toggles (default on).
    title : str, optional
        Title text drawn above the canvas.
    detect_remarkable_points : bool
        Run feature detection at construction (default on).
    show_remarkable_points : bool
        Draw detected points (default off).
    remarkable_point_style, axis_style, grid_style, style : mapping, optional
        Style overrides; ``None`` keeps the defaults.
    shaded_regions : sequence
        ``ShadedRegion`` records or equivalent mappings.
    debug : bool
        Draw the canvas outline.
    origin : (x, y)
        Absolute pixel origin supplied by the layout collaborator.

    Returns
    -------
    GraphConfig

    Raises
    ------
    ValueError
        For malformed numeric configuration.
    IndexError
        For shaded-region function indices outside the function list.
    TypeError
        For unsupported function or region specs.
    """
    plotted = _normalize_functions(functions)
    if not plotted:
        raise ValueError("at least one function is required")

    resolved_domain = DEFAULT_DOMAIN if domain is None else _interval(domain, name="domain")
    resolved_range = None if range is None else _interval(range, name="range")

    if samples is None:
        resolved_samples = DEFAULT_SAMPLES
    else:
        resolved_samples = int(InputConvert(samples, int, truncate=False))
        if resolved_samples < 2:
            raise ValueError(f"samples must be >= 2, got {samples!r}")

    resolved_spacing: Optional[Tuple[float, float]] = None
    if grid_spacing is not None:
        dx, dy = grid_spacing
        resolved_spacing = (
            _positive(dx, name="grid_spacing[0]"),
            _positive(dy, name="grid_spacing[1]"),
        )

    density = (
        DEFAULT_MIN_LABEL_DENSITY
        if min_label_density is None
        else _positive(min_label_density, name="min_label_density")
    )

    regions = tuple(_normalize_region(region, len(plotted)) for region in shaded_regions)

    ox, oy = origin
    return GraphConfig(
        functions=plotted,
        width=_positive(width, name="width"),
        height=_positive(height, name="height"),
        domain=resolved_domain,
        range=resolved_range,
        samples=resolved_samples,
        grid_spacing=resolved_spacing,
        min_label_density=density,
        show_grid=bool(show_grid),
        show_axes=bool(show_axes),
        show_labels=bool(show_labels),
        title=title,
        detect_remarkable_points=bool(detect_remarkable_points),
        show_remarkable_points=bool(show_remarkable_points),
        remarkable_point_style=(
            DEFAULT_REMARKABLE_POINT_STYLE
            if remarkable_point_style is None
            else _freeze_style(remarkable_point_style)
        ),
        axis_style=DEFAULT_AXIS_STYLE if axis_style is None else _freeze_style(axis_style),
        grid_style=DEFAULT_GRID_STYLE if grid_style is None else _freeze_style(grid_style),
        style=_freeze_style(style),
        shaded_regions=regions,
        debug=bool(debug),
        origin=(_finite(ox, name="origin[0]"), _finite(oy, name="origin[1]")),
    )


__all__ = [
    "DEFAULT_AXIS_STYLE",
    "DEFAULT_DOMAIN",
    "DEFAULT_FUNCTION_COLOR",
    "DEFAULT_GRID_STYLE",
    "DEFAULT_MIN_LABEL_DENSITY",
    "DEFAULT_REMARKABLE_POINT_STYLE",
    "DEFAULT_SAMPLES",
    "DEFAULT_SHADED_REGION_STYLE",
    "GraphConfig",
    "PlottedFunction",
    "ShadedRegion",
    "plotted_function",
    "resolve_config",
]
