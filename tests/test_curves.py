"""Test parametric curves and uniform sampling.

Tests for mathraster.geometry.curves:
    - LineSegment / Circle / Ellipse evaluation
    - BezierCurve endpoints are exact, midpoint of a quadratic
    - Bézier control point limits (1..4096)
    - Batched Bézier evaluation matches the Bernstein form
    - sample(): counts 0, 1, n; endpoints exact; negative count rejected
    - with_domain() for partial reveals
    - ParametricCurve rejects non-callables

Run:
    pytest tests/test_curves.py -v
"""

import math
import pickle

import pytest

from mathraster.geometry import curves
from mathraster.geometry.curves import (
    MAX_BEZIER_CONTROL_POINTS,
    BezierCurve,
    Circle,
    Ellipse,
    LineSegment,
    ParametricCurve,
    polyline,
    sample,
)
from mathraster.geometry.point import Point


def _close(a: Point, b: Point, tol: float = 1e-12) -> bool:
    return abs(a.x - b.x) <= tol and abs(a.y - b.y) <= tol


# ============================================================================
# EVALUATION
# ============================================================================

def test_line_segment():
    seg = LineSegment(Point(0.0, 0.0), Point(4.0, 2.0))
    assert seg(0.0) == Point(0.0, 0.0)
    assert seg(0.5) == Point(2.0, 1.0)
    assert seg(1.0) == Point(4.0, 2.0)
    assert seg.start == Point(0.0, 0.0)
    assert seg.end == Point(4.0, 2.0)


def test_circle():
    c = Circle(2.0, Point(1.0, 1.0))
    assert _close(c(0.0), Point(3.0, 1.0))
    assert _close(c(math.pi / 2), Point(1.0, 3.0))
    assert c.domain == (0.0, 2.0 * math.pi)


def test_ellipse():
    e = Ellipse(3.0, 1.0)
    assert _close(e(0.0), Point(3.0, 0.0))
    assert _close(e(math.pi / 2), Point(0.0, 1.0))


def test_bezier_endpoints_exact():
    ps = (Point(0.1, 0.7), Point(1.3, 2.9), Point(3.7, 3.1), Point(-2.2, 0.3))
    curve = BezierCurve(ps)
    assert curve(0.0) == ps[0]
    assert curve(1.0) == ps[-1]
    assert curve.degree == 3


def test_bezier_quadratic_midpoint():
    """B(0.5) = 0.25 p0 + 0.5 p1 + 0.25 p2."""
    curve = BezierCurve((Point(0.0, 0.0), Point(1.0, 2.0), Point(2.0, 0.0)))
    assert _close(curve(0.5), Point(1.0, 1.0))


def test_bezier_single_point():
    curve = BezierCurve((Point(5.0, 5.0),))
    assert curve(0.3) == Point(5.0, 5.0)


def test_bezier_limits():
    with pytest.raises(ValueError):
        BezierCurve(())
    with pytest.raises(ValueError):
        BezierCurve(tuple(Point(i, 0) for i in range(MAX_BEZIER_CONTROL_POINTS + 1)))


@pytest.mark.slow
def test_bezier_high_degree_no_recursion():
    """Degree is bounded by the control point limit, not the call stack."""
    ps = tuple(Point(i, (-1) ** i) for i in range(1100))
    curve = BezierCurve(ps)
    assert curve(0.0) == ps[0]
    assert curve(1.0) == ps[-1]


def test_bezier_batch_matches_bernstein_form():
    ps = (Point(0, 0), Point(1, 3), Point(3, -1), Point(4, 2))
    ts = [i / 10 for i in range(11)]
    points = BezierCurve(ps).evaluate_many(ts)
    for t, point in zip(ts, points):
        weights = ((1 - t) ** 3, 3 * t * (1 - t) ** 2, 3 * t ** 2 * (1 - t), t ** 3)
        expected = Point(
            sum(w * p.x for w, p in zip(weights, ps)),
            sum(w * p.y for w, p in zip(weights, ps)),
        )
        assert _close(point, expected, 1e-9)


def test_bezier_batches_split_parameters(monkeypatch):
    """Parameters spread over several scratch batches keep their order."""
    monkeypatch.setattr(curves, "_BEZIER_BATCH_ELEMENTS", 64)
    ps = tuple(Point(i, 0) for i in range(20))
    curve = BezierCurve(ps)
    ts = [i / 9 for i in range(10)]
    points = curve.evaluate_many(ts)
    assert len(points) == 10
    # Evenly spaced collinear control points trace x = (k - 1) t
    for t, point in zip(ts, points):
        assert _close(point, Point(19 * t, 0.0), 1e-9)
    assert points[3] == curve.evaluate(ts[3])


def test_evaluate_many_default():
    circle = Circle(2.0)
    ts = [0.0, 1.0, 2.0]
    assert circle.evaluate_many(ts) == [circle(t) for t in ts]
    assert circle.evaluate_many([]) == []


def test_parametric_curve():
    curve = ParametricCurve(lambda t: Point(t, t * t), (-1.0, 1.0))
    assert curve.start == Point(-1.0, 1.0)
    assert curve.end == Point(1.0, 1.0)


def test_parametric_curve_needs_callable():
    with pytest.raises(TypeError):
        ParametricCurve(42)


def test_domain_must_be_finite():
    with pytest.raises(ValueError):
        LineSegment(Point(0, 0), Point(1, 1), (0.0, math.inf))


def test_builtin_curves_pickle():
    """Built-in kinds carry data, not closures."""
    curve = BezierCurve((Point(0, 0), Point(1, 1), Point(2, 0)))
    assert pickle.loads(pickle.dumps(curve)) == curve


# ============================================================================
# SAMPLING
# ============================================================================

@pytest.mark.parametrize("n", [2, 3, 10, 901])
def test_sample_endpoints_exact(n):
    curve = BezierCurve((Point(-3.5, -1.5), Point(-2.0, 2.0), Point(0.0, -2.0), Point(3.5, -1.0)))
    points = sample(curve, n)
    assert len(points) == n
    assert points[0] == curve(0.0)
    assert points[-1] == curve(1.0)


def test_sample_evenly_spaced():
    seg = LineSegment(Point(0.0, 0.0), Point(4.0, 0.0))
    assert [p.x for p in sample(seg, 5)] == [0.0, 1.0, 2.0, 3.0, 4.0]


def test_sample_small_counts():
    seg = LineSegment(Point(1.0, 1.0), Point(2.0, 2.0))
    assert sample(seg, 0) == []
    assert sample(seg, 1) == [Point(1.0, 1.0)]


def test_sample_negative():
    with pytest.raises(ValueError):
        sample(LineSegment(Point(0, 0), Point(1, 1)), -1)


def test_method_matches_function():
    c = Circle(1.0)
    assert c.sample(7) == sample(c, 7)


def test_with_domain_partial_reveal():
    curve = LineSegment(Point(0.0, 0.0), Point(10.0, 0.0))
    half = curve.with_domain(0.0, 0.5)
    assert half.end == Point(5.0, 0.0)
    assert curve.domain == (0.0, 1.0)
    assert sample(half, 3)[-1] == Point(5.0, 0.0)


def test_with_domain_reversed():
    curve = LineSegment(Point(0.0, 0.0), Point(10.0, 0.0)).with_domain(1.0, 0.0)
    assert [p.x for p in sample(curve, 3)] == [10.0, 5.0, 0.0]


def test_polyline():
    points = [Point(0, 0), Point(1, 0), Point(1, 1)]
    segments = polyline(points)
    assert len(segments) == 2
    assert segments[0].end == segments[1].start == Point(1, 0)
    assert polyline(points[:1]) == []
