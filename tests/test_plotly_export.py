"""Tests for the Plotly figure export."""

from __future__ import annotations

from importlib import import_module

import numpy as np
import plotly.graph_objects as go

FunctionGraph = import_module("funcgraph").FunctionGraph


def test_function_traces_break_at_undefined_samples() -> None:
    """The 1/x trace has nan at x = 0 and spans the domain."""
    fig = FunctionGraph("1/x", width=600, height=400, domain=(-5, 5)).to_plotly_figure()
    assert isinstance(fig, go.Figure)
    line = fig.data[0]
    ys = np.asarray(line.y, dtype=float)
    assert line.mode == "lines"
    assert len(ys) == 201
    assert np.isnan(ys[100])
    assert tuple(fig.layout.xaxis.range) == (-5.0, 5.0)


def test_layout_uses_grid_spacing_and_size() -> None:
    """dtick follows the engine's grid spacing."""
    graph = FunctionGraph(lambda x: x * x - 4, width=600, height=400, domain=(-5, 5))
    fig = graph.to_plotly_figure()
    assert fig.layout.xaxis.dtick == graph.grid_spacing[0]
    assert fig.layout.yaxis.dtick == graph.grid_spacing[1]
    assert tuple(fig.layout.yaxis.range) == graph.range
    assert fig.layout.width == 600


def test_point_traces_per_type_and_visibility() -> None:
    """One marker trace per point type; hidden unless points are shown."""
    graph = FunctionGraph(lambda x: x * x - 4, width=600, height=400, domain=(-5, 5))
    names = {trace.name: trace for trace in graph.to_plotly_figure().data if trace.mode == "markers"}
    assert set(names) == {"root", "y-intercept", "local-minimum"}
    assert len(names["root"].x) == 2
    assert names["root"].visible == "legendonly"

    shown = FunctionGraph(
        lambda x: x * x - 4, width=600, height=400, domain=(-5, 5), show_remarkable_points=True
    ).to_plotly_figure()
    assert all(t.visible is True for t in shown.data if t.mode == "markers")


def test_shaded_region_trace_is_filled_and_first() -> None:
    """Regions are closed ``toself`` polygons drawn beneath the curves."""
    fig = FunctionGraph(
        ["4 - x**2", "x**2"],
        width=600,
        height=400,
        domain=(-1.5, 1.5),
        shaded_regions=[{"top_function": 0, "bottom_function": 1}],
    ).to_plotly_figure()
    region = fig.data[0]
    assert region.fill == "toself"
    assert len(region.x) == 2 * 200
    assert region.fillcolor == "#e0e0e0"
