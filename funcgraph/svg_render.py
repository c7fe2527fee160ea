"""SVG markup for a :class:`funcgraph.function_graph.FunctionGraph`.

The output is a single ``<g>`` element translated to the graph's absolute
origin, so it can be pasted into a larger SVG document. Layers are emitted
back to front: debug outline, title, grid, shaded regions, axes, curves,
remarkable points.

Elements are built with :mod:`svgwrite` and serialized with ``tostring()``;
path ``d`` strings come from :func:`funcgraph.sampling.points_to_path` and
:func:`funcgraph.shading.shaded_region_path` unchanged.
"""

from __future__ import annotations

import re
from html import escape
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Tuple

import svgwrite
from svgwrite.base import BaseElement
from svgwrite.container import Group

from .graph_config import DEFAULT_FUNCTION_COLOR, DEFAULT_SHADED_REGION_STYLE
from .sampling import format_coordinate, points_to_path

if TYPE_CHECKING:
    from .function_graph import FunctionGraph

TICK_HALF_LENGTH = 5.0
POINT_RADIUS = 2
REMARKABLE_POINT_RADIUS = 4

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def _attribute_name(key: str) -> str:
    return _CAMEL_BOUNDARY.sub(r"-\1", key).replace("_", "-").lower()


def svg_attributes(style: Mapping[str, Any]) -> Dict[str, str]:
    """Return ``style`` keyed by SVG attribute name, without ``None`` values."""
    return {_attribute_name(key): str(value) for key, value in style.items() if value is not None}


def style_to_svg_attributes(style: Mapping[str, Any]) -> str:
    """Return ``style`` as SVG attributes (``stroke_width`` -> ``stroke-width``).

    Keys may be snake_case, camelCase or already kebab-case. ``None`` values
    are skipped.

    Examples
    --------
    >>> style_to_svg_attributes({"stroke": "#000", "strokeWidth": "2px", "fill_opacity": 0.3})
    'stroke="#000" stroke-width="2px" fill-opacity="0.3"'
    """
    return " ".join(f'{name}="{escape(value)}"' for name, value in svg_attributes(style).items())


def _styled(element: BaseElement, style: Mapping[str, Any]) -> BaseElement:
    # Style keys are user supplied and already kebab-cased; set them verbatim.
    for name, value in svg_attributes(style).items():
        element[name] = value
    return element


def _fmt(value: float) -> str:
    return format_coordinate(value)


def _point(x: float, y: float) -> Tuple[str, str]:
    return _fmt(x), _fmt(y)


def _grid(dwg: svgwrite.Drawing, graph: "FunctionGraph") -> Group:
    style = graph.config.grid_style
    lines = graph.grid_lines()
    group = dwg.g(class_="grid")
    for x in lines.xs:
        group.add(_styled(dwg.line(start=_point(x, 0.0), end=_point(x, graph.height)), style))
    for y in lines.ys:
        group.add(_styled(dwg.line(start=_point(0.0, y), end=_point(graph.width, y)), style))
    return group


def _shaded_regions(dwg: svgwrite.Drawing, graph: "FunctionGraph") -> Group:
    group = dwg.g(class_="shaded-regions")
    for idx, (region, path) in enumerate(zip(graph.shaded_regions, graph.shaded_region_paths())):
        if not path:
            continue
        style = {**DEFAULT_SHADED_REGION_STYLE, **region.style}
        group.add(_styled(dwg.path(d=path, class_=f"shaded-region-{idx}"), style))
    return group


def _tick_label(dwg: svgwrite.Drawing, text: str, x: float, y: float, anchor: str) -> BaseElement:
    return dwg.text(text, insert=_point(x, y), text_anchor=anchor, font_size="12")


def _axes(dwg: svgwrite.Drawing, graph: "FunctionGraph") -> Optional[Group]:
    x_axis, y_axis = graph.x_axis, graph.y_axis
    if x_axis is None or y_axis is None:
        return None
    style = graph.config.axis_style
    labels = graph.config.show_labels
    group = dwg.g(class_="axes")

    group.add(_styled(dwg.line(start=_point(*x_axis.start), end=_point(*x_axis.end)), style))
    if labels:
        for tick in x_axis.ticks:
            px, py = tick.position
            group.add(
                _styled(
                    dwg.line(
                        start=_point(px, py - TICK_HALF_LENGTH),
                        end=_point(px, py + TICK_HALF_LENGTH),
                    ),
                    style,
                )
            )
            group.add(_tick_label(dwg, tick.label, px, py + 20, "middle"))

    group.add(_styled(dwg.line(start=_point(*y_axis.start), end=_point(*y_axis.end)), style))
    if labels:
        for tick in y_axis.ticks:
            px, py = tick.position
            group.add(
                _styled(
                    dwg.line(
                        start=_point(px - TICK_HALF_LENGTH, py),
                        end=_point(px + TICK_HALF_LENGTH, py),
                    ),
                    style,
                )
            )
            group.add(_tick_label(dwg, tick.label, px - 10, py + 4, "end"))
    return group


def _functions(dwg: svgwrite.Drawing, graph: "FunctionGraph") -> Group:
    group = dwg.g(class_="functions")
    for func in graph.functions:
        points = graph.sample_points(func.index)
        path = points_to_path(points)
        if not path:
            continue
        color = func.color or DEFAULT_FUNCTION_COLOR
        style = {"stroke": color, "stroke_width": "2px", "fill": "none", **func.style}
        group.add(_styled(dwg.path(d=path), style))
        if func.show_points:
            for p in points:
                if p is not None:
                    group.add(dwg.circle(center=_point(p.x, p.y), r=POINT_RADIUS, fill=color))
    return group


def _remarkable_points(dwg: svgwrite.Drawing, graph: "FunctionGraph") -> Group:
    style = graph.config.remarkable_point_style
    group = dwg.g(class_="remarkable-points")
    for ident, p in graph.remarkable_point_markers():
        marker = dwg.circle(center=_point(p.x, p.y), r=REMARKABLE_POINT_RADIUS, id=ident)
        group.add(_styled(marker, style))
    return group


def render_group(graph: "FunctionGraph", origin: Optional[Tuple[float, float]] = None) -> Group:
    """Return the graph as an :mod:`svgwrite` group element.

    Use this to embed the graph in an existing ``svgwrite.Drawing``;
    :func:`render_svg` serializes the same group to text.
    """
    # debug=False: user style keys are not restricted to the SVG profile
    dwg = svgwrite.Drawing(debug=False)
    ox, oy = graph.origin if origin is None else origin
    config = graph.config
    group = dwg.g(transform=f"translate({_fmt(ox)}, {_fmt(oy)})")

    if config.debug:
        group.add(
            dwg.rect(
                insert=(0, 0),
                size=(f"{graph.width:g}", f"{graph.height:g}"),
                fill="none",
                stroke="#ff0000",
                stroke_width="2",
                stroke_dasharray="5,5",
            )
        )
    if config.title:
        group.add(
            dwg.text(
                config.title,
                insert=(_fmt(graph.width / 2), "-10"),
                text_anchor="middle",
                font_size="16",
                font_weight="bold",
            )
        )
    if config.show_grid:
        group.add(_grid(dwg, graph))
    if graph.shaded_regions:
        group.add(_shaded_regions(dwg, graph))
    axes = _axes(dwg, graph)
    if axes is not None:
        group.add(axes)
    group.add(_functions(dwg, graph))
    if config.detect_remarkable_points and config.show_remarkable_points:
        group.add(_remarkable_points(dwg, graph))
    return group


def render_svg(graph: "FunctionGraph", origin: Optional[Tuple[float, float]] = None) -> str:
    """Return the SVG group for ``graph``.

    Parameters
    ----------
    graph : FunctionGraph
        Graph to draw.
    origin : (float, float), optional
        Absolute canvas position; defaults to ``graph.origin``.

    Returns
    -------
    str
        ``<g transform="translate(x, y)"> ... </g>`` followed by a newline.
    """
    return render_group(graph, origin).tostring() + "\n"


__all__ = ["render_group", "render_svg", "style_to_svg_attributes", "svg_attributes"]
