"""Tests for nice grid spacing, tick positions and tick labels."""

from __future__ import annotations

import math
from importlib import import_module

import pytest

grid_spacing = import_module("funcgraph.grid_spacing")

try:
    from hypothesis import given
    from hypothesis import strategies as st
except ModuleNotFoundError:  # pragma: no cover - environment-specific fallback
    pytest.skip("hypothesis is required for property-based tests", allow_module_level=True)


@pytest.mark.parametrize(
    ("pixels", "extent", "expected"),
    [
        (600, 10, 1.0),
        (400, 20, 2.5),
        (600, 20, 2.0),
        (500, 100, 10.0),
        (400, 1, 0.2),
    ],
)
def test_optimal_spacing_examples(pixels: float, extent: float, expected: float) -> None:
    """Typical canvases get the expected nice spacing."""
    assert grid_spacing.optimal_spacing(pixels, extent, 50) == pytest.approx(expected)


def test_optimal_spacing_degenerate_inputs() -> None:
    """No room for a label returns the whole extent; a bad extent returns 1."""
    assert grid_spacing.optimal_spacing(30, 7.0, 50) == 7.0
    assert grid_spacing.optimal_spacing(300, 0.0, 50) == 1.0
    assert grid_spacing.optimal_spacing(300, math.inf, 50) == 1.0


def _mantissa(value: float) -> float:
    return value / 10.0 ** math.floor(math.log10(value))


@given(
    pixels=st.floats(min_value=50, max_value=5000),
    extent=st.floats(min_value=1e-6, max_value=1e6),
    density=st.floats(min_value=10, max_value=50),
)
def test_spacing_is_nice_and_keeps_labels_apart(pixels: float, extent: float, density: float) -> None:
    """Labels are never closer than 80% of the requested density."""
    spacing = grid_spacing.optimal_spacing(pixels, extent, density)
    assert spacing > 0
    assert (pixels / extent) * spacing >= density * grid_spacing.MIN_DENSITY_RATIO * (1 - 1e-9)

    mantissa = _mantissa(spacing)
    assert any(
        math.isclose(mantissa, nice, rel_tol=1e-6) or math.isclose(mantissa, 10 * nice, rel_tol=1e-6)
        for nice in grid_spacing.NICE_NUMBERS
    )

    # interval count follows from the density bound
    assert extent / spacing <= pixels / (grid_spacing.MIN_DENSITY_RATIO * density) * (1 + 1e-6)


def test_optimal_grid_spacing_is_per_axis() -> None:
    """Each axis is computed from its own extent."""
    assert grid_spacing.optimal_grid_spacing(600, 400, (-5.0, 5.0), (-6.5, 23.5), 50) == (
        pytest.approx(1.0),
        pytest.approx(5.0),
    )


def test_tick_values_are_exact_multiples() -> None:
    """Ticks are ``k * spacing`` for every multiple inside the interval."""
    assert grid_spacing.tick_values(-10.0, 10.0, 2.5) == [
        -10.0, -7.5, -5.0, -2.5, 0.0, 2.5, 5.0, 7.5, 10.0
    ]
    assert grid_spacing.tick_values(0.05, 0.35, 0.1) == pytest.approx([0.1, 0.2, 0.3])
    assert grid_spacing.tick_values(0.0, 1.0, 0.0) == []


@pytest.mark.parametrize(
    ("value", "label"),
    [
        (0.0, "0"),
        (1e-11, "0"),
        (0.5, "0.50"),
        (-0.25, "-0.25"),
        (2.5, "2.5"),
        (5.0, "5.0"),
        (25.0, "25"),
        (-400.0, "-400"),
        (1500.0, "1.5e+3"),
        (-2500.0, "-2.5e+3"),
        (0.005, "5.0e-3"),
    ],
)
def test_format_tick_label(value: float, label: str) -> None:
    """Labels switch between fixed and scientific notation by magnitude."""
    assert grid_spacing.format_tick_label(value) == label
