"""Continuous-plane geometry: points, parametric curves, composite shapes.

Depends only on mathraster.utils. Nothing here knows about pixels.
"""

from .curves import (
    MAX_BEZIER_CONTROL_POINTS,
    BezierCurve,
    Circle,
    Curve,
    Ellipse,
    LineSegment,
    ParametricCurve,
    sample,
)
from .point import Point
from .shapes import CartesianPlane, DashedLine, Polygon, Vector, get_bounds, is_inside_polygon

__all__ = [
    'Point',
    'Curve',
    'LineSegment',
    'Ellipse',
    'Circle',
    'BezierCurve',
    'ParametricCurve',
    'MAX_BEZIER_CONTROL_POINTS',
    'sample',
    'Polygon',
    'DashedLine',
    'Vector',
    'CartesianPlane',
    'get_bounds',
    'is_inside_polygon',
]
