"""Point algebra in the continuous plane.

Provides:
    - Point: immutable (x, y) pair with vector arithmetic
    - Point.lerp(): linear interpolation between two points
    - 90° rotations, distance to origin, gradients

Point is a value type: every operation returns a new Point. Coordinates are
stored as Python floats regardless of the numeric type passed in.

Used by:
    - geometry.curves: curve rules return Points
    - geometry.shapes: polygon vertices, vector arrowheads
    - rendering.coordinates: plane ↔ pixel mapping
"""

import math
import numbers
from dataclasses import dataclass
from typing import Iterable, List, Tuple


@dataclass(frozen=True, slots=True)
class Point:
    """A location in the continuous plane."""

    x: float
    y: float

    # numpy scalars on the left of * defer to __rmul__
    __array_ufunc__ = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    @classmethod
    def origin(cls) -> "Point":
        return cls(0.0, 0.0)

    @classmethod
    def many(cls, pairs: Iterable[Tuple[float, float]]) -> List["Point"]:
        """Build a list of Points from (x, y) pairs, preserving order."""
        return [cls(x, y) for x, y in pairs]

    @staticmethod
    def lerp(start: "Point", end: "Point", t: float) -> "Point":
        """``(1 - t) * start + t * end``; t outside [0, 1] extrapolates."""
        t = float(t)
        return (1.0 - t) * start + t * end

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def __mul__(self, other) -> "Point":
        # Point * Point is element-wise, Point * scalar scales both axes
        if isinstance(other, Point):
            return Point(self.x * other.x, self.y * other.y)
        if isinstance(other, numbers.Real):
            return Point(self.x * other, self.y * other)
        return NotImplemented

    def __rmul__(self, other) -> "Point":
        if isinstance(other, numbers.Real):
            return Point(self.x * other, self.y * other)
        return NotImplemented

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def distance(self) -> float:
        """Euclidean distance to the origin."""
        return math.hypot(self.x, self.y)

    def rotate_clockwise(self) -> "Point":
        """(x, y) → (-y, x)."""
        return Point(-self.y, self.x)

    def rotate_counter_clockwise(self) -> "Point":
        """(x, y) → (y, -x)."""
        return Point(self.y, -self.x)

    def negate_x(self) -> "Point":
        return Point(-self.x, self.y)

    def negate_y(self) -> "Point":
        return Point(self.x, -self.y)

    def gradient(self) -> float:
        """Slope of the segment from the origin to this point.

        Vertical segments give ±inf, the origin itself gives nan.
        """
        return _ratio(self.y, self.x)

    def normal_gradient(self) -> float:
        """Slope of the normal to the segment from the origin to this point."""
        return _ratio(-self.x, self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


def _ratio(num: float, den: float) -> float:
    if den != 0.0:
        return num / den
    if num == 0.0:
        return math.nan
    return math.copysign(math.inf, num)
