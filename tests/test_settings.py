"""Test stroke styles, thickness and render settings.

Tests for mathraster.rendering.settings:
    - Relative thickness averages horizontal and vertical scale
    - Absolute thickness is a raw pixel count in 0..65535
    - Bare numbers are rejected where a Thickness is expected
    - RoundAntiAliased factor must be finite and > 0
    - Settings derive child settings (curve → point, vector → curve, ...)

Run:
    pytest tests/test_settings.py -v
"""

import math

import pytest

from mathraster.geometry.point import Point
from mathraster.rendering.screen import Screen
from mathraster.rendering.settings import (
    AbsoluteThickness,
    CartesianPlaneRenderSettings,
    CurveRenderSettings,
    DashedLineRenderSettings,
    PointRenderSettings,
    PolygonRenderSettings,
    PolygonSidesRenderSettings,
    RelativeThickness,
    RoundAliased,
    RoundAntiAliased,
    Square,
    Thickness,
    VectorRenderSettings,
)
from mathraster.utils.color import css_colours
from mathraster.utils.conversions import ConversionError


@pytest.fixture
def screen():
    """200x100 screen over [0, 20] x [0, 5]: 10 px/unit across, 20 px/unit up."""
    return Screen(200, 100, Point(0.0, 0.0), Point(20.0, 5.0), css_colours.WHITE)


# ============================================================================
# THICKNESS
# ============================================================================

def test_relative_thickness_mean_scale(screen):
    # (0.5 * 10 + 0.5 * 20) / 2 = 7.5 → 8
    assert Thickness.relative(0.5).to_pixels(screen) == 8
    assert Thickness.relative(0.0).to_pixels(screen) == 0


def test_relative_thickness_inverted_bounds():
    screen = Screen(200, 100, Point(20.0, 5.0), Point(0.0, 0.0), css_colours.WHITE)
    assert Thickness.relative(0.5).to_pixels(screen) == 8


def test_relative_thickness_overflow(screen):
    with pytest.raises(ConversionError):
        Thickness.relative(1e6).to_pixels(screen)


def test_absolute_thickness(screen):
    assert Thickness.absolute(3).to_pixels(screen) == 3
    assert isinstance(Thickness.absolute(3), AbsoluteThickness)
    assert isinstance(Thickness.relative(0.1), RelativeThickness)


@pytest.mark.parametrize("bad", [-1, 65536])
def test_absolute_thickness_range(bad):
    with pytest.raises(ValueError):
        Thickness.absolute(bad)


def test_absolute_thickness_needs_int():
    with pytest.raises(TypeError):
        Thickness.absolute(2.5)


@pytest.mark.parametrize("bad", [-0.1, math.inf, math.nan])
def test_relative_thickness_range(bad):
    with pytest.raises(ValueError):
        Thickness.relative(bad)


def test_bare_number_rejected():
    with pytest.raises(TypeError):
        PointRenderSettings(css_colours.BLACK, 0.5)
    with pytest.raises(TypeError):
        CurveRenderSettings(css_colours.BLACK, 3, 100)


def test_thickness_variants_distinct():
    assert Thickness.relative(1.0) != Thickness.absolute(1)


# ============================================================================
# STYLES
# ============================================================================

@pytest.mark.parametrize("bad", [0.0, -1.0, math.inf, math.nan])
def test_antialiased_factor(bad):
    with pytest.raises(ValueError):
        RoundAntiAliased(bad)


def test_style_default_is_square():
    assert PointRenderSettings(css_colours.BLACK, Thickness.absolute(1)).style == Square()


def test_style_type_checked():
    with pytest.raises(TypeError):
        CurveRenderSettings(css_colours.BLACK, Thickness.absolute(1), 10, "round")


def test_colour_type_checked():
    with pytest.raises(TypeError):
        PointRenderSettings((0, 0, 0), Thickness.absolute(1))


def test_samples_checked():
    with pytest.raises(ValueError):
        CurveRenderSettings(css_colours.BLACK, Thickness.absolute(1), -5)
    with pytest.raises(TypeError):
        CurveRenderSettings(css_colours.BLACK, Thickness.absolute(1), 10.0)


# ============================================================================
# DERIVED SETTINGS
# ============================================================================

def test_curve_to_point_settings():
    curve = CurveRenderSettings(css_colours.RED, Thickness.absolute(2), 50, RoundAliased())
    point = curve.point_settings()
    assert point == PointRenderSettings(css_colours.RED, Thickness.absolute(2), RoundAliased())


def test_sides_to_curve_settings():
    sides = PolygonSidesRenderSettings(css_colours.RED, Thickness.absolute(2), 40, RoundAntiAliased(2.0))
    assert sides.curve_settings().samples == 40
    assert sides.curve_settings().style == RoundAntiAliased(2.0)


def test_vector_and_dashed_curve_settings():
    vector = VectorRenderSettings(css_colours.BLUE, Thickness.relative(0.1), 30)
    assert vector.curve_settings() == CurveRenderSettings(css_colours.BLUE, Thickness.relative(0.1), 30)
    dashed = DashedLineRenderSettings(css_colours.BLUE, Thickness.absolute(1), 12)
    assert dashed.curve_settings().samples == 12


def test_cartesian_plane_settings_force_square():
    plane = CartesianPlaneRenderSettings(css_colours.WHITE, Thickness.absolute(1), 100)
    assert plane.vector_settings().style == Square()
    assert plane.vector_settings().samples == 100


def test_polygon_settings_fill_and_sides_optional():
    assert PolygonRenderSettings().fill is None
    assert PolygonRenderSettings().sides is None
