"""Test composite shapes.

Tests for mathraster.geometry.shapes:
    - Polygon vertex minimum and closed edge cycle
    - Parity test (inside / outside / shared vertex rays)
    - DashedLine division layout
    - Vector arrowhead geometry and shaft omission
    - CartesianPlane axes and the zero-length axis error

Run:
    pytest tests/test_shapes.py -v
"""

import pytest

from mathraster.geometry.point import Point
from mathraster.geometry.shapes import (
    CartesianPlane,
    DashedLine,
    Polygon,
    Vector,
    get_bounds,
    is_inside_polygon,
)


def _close(a: Point, b: Point, tol: float = 1e-12) -> bool:
    return abs(a.x - b.x) <= tol and abs(a.y - b.y) <= tol


# ============================================================================
# POLYGON
# ============================================================================

def test_polygon_needs_three_vertices():
    with pytest.raises(ValueError):
        Polygon((Point(0, 0), Point(1, 1)))


def test_polygon_edges_close_the_cycle():
    vs = (Point(0, 0), Point(2, 0), Point(1, 1))
    poly = Polygon(vs)
    assert len(poly.edges) == 3
    assert poly.edges[-1].start_point == vs[-1]
    assert poly.edges[-1].end_point == vs[0]
    for edge, nxt in zip(poly.edges, poly.edges[1:]):
        assert edge.end_point == nxt.start_point


def test_polygon_accepts_list():
    poly = Polygon([Point(0, 0), Point(1, 0), Point(0, 1)])
    assert isinstance(poly.vertices, tuple)


def test_get_bounds():
    bl, tr = get_bounds([Point(1, 5), Point(-2, 3), Point(4, -1)])
    assert bl == Point(-2, -1)
    assert tr == Point(4, 5)
    with pytest.raises(ValueError):
        get_bounds([])


@pytest.mark.parametrize("point,expected", [
    (Point(1.0, 1.0), True),
    (Point(3.0, 1.0), False),
    (Point(-0.5, 1.0), False),
    (Point(1.0, 2.5), False),
])
def test_is_inside_square(point, expected):
    square = [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
    assert is_inside_polygon(point, square) is expected


def test_ray_through_vertex_counts_once():
    """The ray y=1 passes through the diamond's left vertex."""
    diamond = [Point(0, 1), Point(1, 0), Point(2, 1), Point(1, 2)]
    assert is_inside_polygon(Point(1.0, 1.0), diamond)
    assert not is_inside_polygon(Point(-1.0, 1.0), diamond)


def test_concave_polygon():
    # U shape opening upward
    u_shape = Polygon((
        Point(0, 0), Point(3, 0), Point(3, 3), Point(2, 3),
        Point(2, 1), Point(1, 1), Point(1, 3), Point(0, 3),
    ))
    assert u_shape.contains(Point(0.5, 2.0))
    assert not u_shape.contains(Point(1.5, 2.0))
    assert u_shape.contains(Point(1.5, 0.5))
    assert u_shape.bounds() == (Point(0, 0), Point(3, 3))


# ============================================================================
# DASHED LINE
# ============================================================================

def test_dashed_line_layout():
    """3 dashes over 5 divisions: kept [0,.2], [.4,.6], [.8,1]."""
    line = DashedLine(Point(0.0, 0.0), Point(10.0, 0.0), 3)
    assert len(line.dashes) == 3
    assert line.dashes[0].start_point == Point(0.0, 0.0)
    assert _close(line.dashes[0].end_point, Point(2.0, 0.0))
    assert _close(line.dashes[1].start_point, Point(4.0, 0.0))
    assert _close(line.dashes[2].end_point, Point(10.0, 0.0))


def test_dashed_line_single_dash_is_whole_segment():
    line = DashedLine(Point(0.0, 0.0), Point(1.0, 1.0), 1)
    assert len(line.dashes) == 1
    assert line.dashes[0].end_point == Point(1.0, 1.0)


def test_dashed_line_needs_a_dash():
    with pytest.raises(ValueError):
        DashedLine(Point(0, 0), Point(1, 1), 0)


# ============================================================================
# VECTOR
# ============================================================================

def test_vector_arrowhead():
    v = Vector(Point(10.0, 0.0), Point(0.0, 0.0), arrow_width=2.0, arrow_height=1.0)
    tip, left, right = v.arrow_head.vertices
    assert _close(tip, Point(10.0, 0.0))
    # Base centre sits arrow_height back from the head
    assert _close(left, Point(9.0, -1.0)) or _close(left, Point(9.0, 1.0))
    assert _close(Point.lerp(left, right, 0.5), Point(9.0, 0.0))
    assert abs((left - right).distance() - 2.0) < 1e-12
    assert _close(v.line.start_point, Point(9.0, 0.0))
    assert v.line.end_point == Point(0.0, 0.0)
    assert v.magnitude == 10.0


def test_vector_shaft_dropped_when_head_too_long():
    v = Vector(Point(1.0, 0.0), Point(0.0, 0.0), arrow_width=0.5, arrow_height=2.0)
    assert v.line is None
    assert len(v.arrow_head.vertices) == 3


def test_vector_zero_length():
    with pytest.raises(ValueError):
        Vector(Point(1.0, 1.0), Point(1.0, 1.0), 0.1, 0.1)


# ============================================================================
# CARTESIAN PLANE
# ============================================================================

def test_cartesian_plane_axes():
    plane = CartesianPlane(Point(-2, -1), Point(3, 4), Point(0, 0), 0.1, 0.1)
    heads = [axis.head for axis in plane.axes]
    assert heads == [Point(0, 4), Point(0, -1), Point(-2, 0), Point(3, 0)]
    assert all(axis.tail == Point(0, 0) for axis in plane.axes)


def test_cartesian_plane_axes_built_once():
    plane = CartesianPlane(Point(-2, -1), Point(3, 4), Point(0, 0), 0.1, 0.1)
    assert plane.axes is plane.axes
    assert isinstance(plane.axes, tuple)
    assert plane == CartesianPlane(Point(-2, -1), Point(3, 4), Point(0, 0), 0.1, 0.1)


def test_cartesian_plane_origin_on_edge():
    with pytest.raises(ValueError):
        CartesianPlane(Point(0, 0), Point(3, 4), Point(0, 0), 0.1, 0.1)
