"""Test vector field plots.

Tests for mathraster.plots.vector_field:
    - rectangular_point_array corners, count and ordering
    - draw(): screen size from bounds, zero vectors skipped, colour coding

Run:
    pytest tests/test_vector_field.py -v
"""

import logging

import numpy as np
import pytest

from mathraster.geometry.point import Point
from mathraster.plots import vector_field
from mathraster.utils.color import Color, rainbow


BACKGROUND = Color(47, 54, 64)
AXES = Color(240, 240, 240)


def _style(**overrides):
    params = dict(
        background=BACKGROUND,
        axis_colour=AXES,
        horizontal_resolution=200,
        vector_samples=30,
        axis_samples=60,
    )
    params.update(overrides)
    return vector_field.VectorFieldStyle(**params)


def test_point_array_layout():
    points = vector_field.rectangular_point_array(Point(-1, -2), Point(1, 2), 3, 5)
    assert len(points) == 15
    assert points[0] == Point(-1, -2)
    assert points[-1] == Point(1, 2)
    # x outer, y inner
    assert points[1] == Point(-1, -1)
    assert points[5] == Point(0, -2)


def test_point_array_needs_two_per_axis():
    with pytest.raises(ValueError):
        vector_field.rectangular_point_array(Point(0, 0), Point(1, 1), 1, 5)


def test_draw_screen_geometry():
    points = vector_field.rectangular_point_array(Point(-4, -2), Point(4, 2), 5, 3)
    screen = vector_field.draw(lambda p: Point(1.0, 0.0), points, _style())
    # bounds grown by margin 1: [-5, 5] x [-3, 3] → 200 x 120
    assert screen.resolution == (200, 120)
    assert screen.bottom_left == Point(-5, -3)
    assert screen.top_right == Point(5, 3)
    assert screen.pixel(0, 0) == BACKGROUND


def test_draw_uniform_field_single_colour():
    """Equal magnitudes normalise to 0 → rainbow(0.8) for every arrow."""
    points = vector_field.rectangular_point_array(Point(-4, -2), Point(4, 2), 5, 3)
    screen = vector_field.draw(lambda p: Point(0.0, 2.0), points, _style(anti_aliasing=1000.0))
    colour = rainbow(0.8).as_array()
    assert np.all(screen.pixels == colour, axis=2).any()
    assert not np.all(screen.pixels == rainbow(0.0).as_array(), axis=2).any()


def test_draw_colour_codes_magnitude():
    points = vector_field.rectangular_point_array(Point(1, 1), Point(3, 3), 2, 2)
    screen = vector_field.draw(lambda p: p, points, _style(anti_aliasing=1000.0))
    pixels = screen.pixels
    # Largest magnitude (3, 3) → red, smallest (1, 1) → rainbow(0.8)
    assert np.all(pixels == rainbow(0.0).as_array(), axis=2).any()
    assert np.all(pixels == rainbow(0.8).as_array(), axis=2).any()


def test_zero_vectors_skipped(caplog):
    points = vector_field.rectangular_point_array(Point(-1, -1), Point(1, 1), 3, 3)
    with caplog.at_level(logging.WARNING, logger="mathraster.plots.vector_field"):
        screen = vector_field.draw(lambda p: p, points, _style())
    assert any("Zero field value" in r.getMessage() for r in caplog.records)
    assert screen.resolution[0] == 200


def test_draw_needs_points():
    with pytest.raises(ValueError):
        vector_field.draw(lambda p: p, [], _style())
