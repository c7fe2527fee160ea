"""Plotly rendering of a :class:`funcgraph.function_graph.FunctionGraph`.

Builds a static :class:`plotly.graph_objects.Figure` in math coordinates:

- one ``lines`` trace per function, with ``nan`` wherever the SVG path would
  break (undefined or out-of-range samples) so Plotly splits the line too,
- one ``markers`` trace per remarkable point type with drawable points,
- one filled ``toself`` trace per non-empty shaded region.

Axes use the graph's domain and range, with ``dtick`` taken from the grid
spacing so the Plotly grid matches the SVG grid.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List

import numpy as np
import plotly.graph_objects as go

from .graph_config import DEFAULT_FUNCTION_COLOR, DEFAULT_SHADED_REGION_STYLE
from .remarkable_points import PointType
from .sampling import sample_values
from .shading import region_values

if TYPE_CHECKING:
    from .function_graph import FunctionGraph

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def _layout(graph: "FunctionGraph") -> Dict[str, Any]:
    dx, dy = graph.grid_spacing
    axis = dict(
        zeroline=graph.config.show_axes,
        zerolinewidth=1.5,
        zerolinecolor="#334155",
        showgrid=graph.config.show_grid,
        showticklabels=graph.config.show_labels,
    )
    return dict(
        template="plotly_white",
        width=graph.width,
        height=graph.height,
        showlegend=True,
        title=graph.config.title,
        xaxis=dict(axis, range=list(graph.domain), dtick=dx),
        yaxis=dict(axis, range=list(graph.range), dtick=dy),
    )


def _function_traces(graph: "FunctionGraph") -> List[go.Scatter]:
    y_min, y_max = graph.range
    traces = []
    for func in graph.functions:
        xs, ys = sample_values(func, graph.domain, graph.samples)
        visible = np.isfinite(ys) & (ys >= y_min) & (ys <= y_max)
        ys = np.where(visible, ys, np.nan)
        traces.append(
            go.Scatter(
                x=xs,
                y=ys,
                mode="lines",
                name=func.label or f"f{func.index}",
                line=dict(color=func.stroke, width=2),
                connectgaps=False,
            )
        )
        if func.show_points:
            traces.append(
                go.Scatter(
                    x=xs[visible],
                    y=ys[visible],
                    mode="markers",
                    name=f"{func.label or f'f{func.index}'} samples",
                    marker=dict(color=func.color or DEFAULT_FUNCTION_COLOR, size=4),
                    showlegend=False,
                )
            )
    return traces


def _remarkable_point_traces(graph: "FunctionGraph") -> List[go.Scatter]:
    style = graph.config.remarkable_point_style
    visible: Any = True if graph.config.show_remarkable_points else "legendonly"
    traces = []
    for kind in PointType:
        points = [p for p in graph.get_remarkable_points(kind) if p.pixel is not None]
        if not points:
            continue
        traces.append(
            go.Scatter(
                x=[p.x for p in points],
                y=[p.y for p in points],
                mode="markers",
                name=kind.value,
                visible=visible,
                text=[p.description for p in points],
                hoverinfo="text",
                marker=dict(
                    size=8,
                    color=style.get("fill"),
                    line=dict(color=style.get("stroke"), width=2),
                ),
            )
        )
    return traces


def _shaded_region_traces(graph: "FunctionGraph") -> List[go.Scatter]:
    traces = []
    for idx, region in enumerate(graph.shaded_regions):
        xs, top, bottom = region_values(region, graph.functions, graph.mapper, graph.samples)
        if xs.size == 0:
            continue
        style = {**DEFAULT_SHADED_REGION_STYLE, **region.style}
        traces.append(
            go.Scatter(
                x=np.concatenate([xs, xs[::-1]]),
                y=np.concatenate([top, bottom[::-1]]),
                mode="lines",
                fill="toself",
                fillcolor=style.get("fill"),
                opacity=float(style.get("fill_opacity", 1.0)),
                line=dict(width=0),
                name=f"shaded-region-{idx}",
                showlegend=False,
                hoverinfo="skip",
            )
        )
    return traces


def to_plotly_figure(graph: "FunctionGraph") -> go.Figure:
    """Return a Plotly figure equivalent to ``graph.render()``.

    Shaded regions are added first so curves and points draw on top. Point
    traces are hidden (``"legendonly"``) unless remarkable points are shown.
    """
    traces = (
        _shaded_region_traces(graph)
        + _function_traces(graph)
        + _remarkable_point_traces(graph)
    )
    logger.debug("plotly export: %d trace(s)", len(traces))
    return go.Figure(data=traces, layout=go.Layout(**_layout(graph)))


__all__ = ["to_plotly_figure"]
