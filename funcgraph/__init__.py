"""Top-level public API for the ``funcgraph`` package.

This module re-exports the graph engine and its value types so users can
import from a single namespace, for example:

>>> from funcgraph import FunctionGraph, PointType  # doctest: +SKIP

It exposes both the engine and the lower-level building blocks (coordinate
mapping, detectors, grid spacing) for callers that need only one piece.
"""

from .axes import GraphAxis, GridLines, Tick
from .coordinates import CoordinateMapper, PixelPoint
from .detectors import (
    find_breaks,
    find_extrema,
    find_inflection_points,
    find_roots,
)
from .function_graph import FunctionGraph
from .function_input import RealFunction, as_real_function
from .graph_config import GraphConfig, PlottedFunction, ShadedRegion, resolve_config
from .grid_spacing import format_tick_label, optimal_grid_spacing, optimal_spacing
from .input_convert import InputConvert
from .remarkable_points import PointType, RemarkablePoint, RemarkablePointIndex
from .svg_render import render_svg, style_to_svg_attributes

__all__ = [
    "CoordinateMapper",
    "FunctionGraph",
    "GraphAxis",
    "GraphConfig",
    "GridLines",
    "InputConvert",
    "PixelPoint",
    "PlottedFunction",
    "PointType",
    "RealFunction",
    "RemarkablePoint",
    "RemarkablePointIndex",
    "ShadedRegion",
    "Tick",
    "as_real_function",
    "find_breaks",
    "find_extrema",
    "find_inflection_points",
    "find_roots",
    "format_tick_label",
    "optimal_grid_spacing",
    "optimal_spacing",
    "render_svg",
    "resolve_config",
    "style_to_svg_attributes",
]
