"""Tests for SVG output."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from importlib import import_module

import svgwrite

FunctionGraph = import_module("funcgraph").FunctionGraph
svg_render = import_module("funcgraph.svg_render")


def _graph(**kwargs):
    kwargs.setdefault("width", 600)
    kwargs.setdefault("height", 400)
    kwargs.setdefault("domain", (-5, 5))
    functions = kwargs.pop("functions", lambda x: x * x - 4)
    return FunctionGraph(functions, **kwargs)


def _tree(graph) -> ET.Element:
    return ET.fromstring(graph.render())


def _layer(root: ET.Element, name: str):
    return next((g for g in root.findall("g") if g.get("class") == name), None)


def test_style_to_svg_attributes_kebab_cases_and_skips_none() -> None:
    """snake_case and camelCase keys become SVG attribute names."""
    attrs = svg_render.style_to_svg_attributes(
        {"stroke_width": "2px", "fillOpacity": 0.5, "stroke-dasharray": "5,5", "fill": None}
    )
    assert attrs == 'stroke-width="2px" fill-opacity="0.5" stroke-dasharray="5,5"'


def test_render_layers_in_order() -> None:
    """Grid, axes and curves appear back to front inside one translated group."""
    svg = _graph(origin=(12, 34)).render()
    assert svg.startswith('<g transform="translate(12.00, 34.00)">')
    assert svg.endswith("</g>\n")

    root = ET.fromstring(svg)
    assert [g.get("class") for g in root.findall("g")] == ["grid", "axes", "functions"]
    assert "remarkable-points" not in svg

    grid_line = _layer(root, "grid").find("line")
    assert (grid_line.get("stroke"), grid_line.get("stroke-width")) == ("#ecf0f1", "1px")

    axes = _layer(root, "axes")
    axis_line = axes.find("line")
    assert (axis_line.get("stroke"), axis_line.get("stroke-width")) == ("#2c3e50", "2px")
    labels = {(t.text, t.get("text-anchor"), t.get("font-size")) for t in axes.findall("text")}
    assert ("-5.0", "middle", "12") in labels
    assert ("5.0", "end", "12") in labels

    (curve,) = _layer(root, "functions").findall("path")
    assert curve.get("d").startswith("M ")
    assert (curve.get("stroke"), curve.get("stroke-width"), curve.get("fill")) == ("#3498db", "2px", "none")


def test_toggles_hide_layers() -> None:
    """Grid, axes and labels can be switched off."""
    root = _tree(_graph(show_grid=False, show_axes=False))
    assert _layer(root, "grid") is None
    assert _layer(root, "axes") is None
    no_labels = _tree(_graph(show_labels=False))
    assert _layer(no_labels, "axes") is not None
    assert no_labels.find(".//text") is None


def test_title_is_escaped_and_debug_outline_drawn() -> None:
    """Titles are XML text; debug mode outlines the canvas."""
    graph = _graph(title="a < b & c", debug=True)
    assert "a &lt; b &amp; c" in graph.render()

    root = _tree(graph)
    title = root.find("text")
    assert title.text == "a < b & c"
    assert (title.get("x"), title.get("y"), title.get("text-anchor")) == ("300.00", "-10", "middle")

    outline = root.find("rect")
    assert {k: outline.get(k) for k in ("x", "y", "width", "height", "fill", "stroke")} == {
        "x": "0",
        "y": "0",
        "width": "600",
        "height": "400",
        "fill": "none",
        "stroke": "#ff0000",
    }


def test_remarkable_points_are_drawn_only_when_shown() -> None:
    """Circles carry the stable marker ids."""
    graph = _graph(show_remarkable_points=True, remarkable_point_style={"fill": "red"})
    circles = _layer(_tree(graph), "remarkable-points").findall("circle")
    assert [c.get("id") for c in circles] == [ident for ident, _ in graph.remarkable_point_markers()]
    assert circles
    assert all(c.get("r") == "4" and c.get("fill") == "red" for c in circles)

    hidden = _tree(_graph(show_remarkable_points=True, detect_remarkable_points=False))
    assert hidden.find(".//circle") is None


def test_sample_points_and_custom_function_style() -> None:
    """``show_points`` draws r=2 dots; style entries override defaults."""
    graph = _graph(
        functions={"fn": lambda x: x, "color": "green", "show_points": True, "style": {"stroke_dasharray": "4,2"}},
        samples=10,
    )
    layer = _layer(_tree(graph), "functions")
    dots = layer.findall("circle")
    assert len(dots) == 11
    assert all(d.get("r") == "2" and d.get("fill") == "green" for d in dots)

    (curve,) = layer.findall("path")
    assert curve.get("stroke") == "green"
    assert curve.get("stroke-dasharray") == "4,2"
    assert curve.get("d") == graph.function_path(0)


def test_shaded_regions_are_rendered_with_default_fill() -> None:
    """Each region is a path classed by its index."""
    graph = _graph(
        functions=["4 - x**2", "x**2"],
        domain=(-1.5, 1.5),
        shaded_regions=[{"top_function": 0, "bottom_function": 1}, {"top_function": 0, "style": {"fill": "pink"}}],
    )
    root = _tree(graph)
    layers = [g.get("class") for g in root.findall("g")]
    assert layers.index("shaded-regions") < layers.index("axes")

    first, second = _layer(root, "shaded-regions").findall("path")
    assert first.get("class") == "shaded-region-0"
    assert first.get("d") == graph.shaded_region_paths()[0]
    assert (first.get("fill"), first.get("fill-opacity"), first.get("stroke")) == ("#e0e0e0", "0.3", "none")
    assert second.get("class") == "shaded-region-1"
    assert (second.get("fill"), second.get("fill-opacity")) == ("pink", "0.3")


def test_render_group_embeds_in_a_drawing() -> None:
    """The svgwrite group can be added to a caller's drawing."""
    dwg = svgwrite.Drawing(size=(800, 600), debug=False)
    dwg.add(svg_render.render_group(_graph(), origin=(100, 50)))
    assert 'transform="translate(100.00, 50.00)"' in dwg.tostring()
