"""Composite shapes built from curves.

Provides:
    - Polygon: >= 3 vertices plus the closed cycle of edge segments
    - DashedLine: n dashes over 2n - 1 equal divisions of a segment
    - Vector: arrow = optional shaft segment + triangular arrowhead polygon
    - CartesianPlane: four axis Vectors from an origin to the bounds
    - get_bounds(), is_inside_polygon(): helpers for polygon fill

Invalid shapes (too few vertices, zero-length vector, no dashes) are caller
contract violations and raise ValueError at construction, before anything
reaches a Screen.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from mathraster.geometry.curves import LineSegment
from mathraster.geometry.point import Point

logger = logging.getLogger(__name__)


def get_bounds(points: Sequence[Point]) -> Tuple[Point, Point]:
    """Least axis-aligned rectangle containing ``points``.

    Returns
    -------
    Tuple[Point, Point]
        (bottom_left, top_right)
    """
    if not points:
        raise ValueError("Cannot bound an empty point sequence")
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return Point(min(xs), min(ys)), Point(max(xs), max(ys))


def is_inside_polygon(point: Point, vertices: Sequence[Point]) -> bool:
    """Edge-crossing parity test.

    A horizontal ray from ``point`` towards +x toggles the result at every
    edge it crosses. Edges are taken half-open in y so that a ray through a
    shared vertex counts once.
    """
    inside = False
    previous = vertices[-1]
    for current in vertices:
        if (previous.y > point.y) != (current.y > point.y):
            crossing_x = (
                (current.x - previous.x) * (point.y - previous.y) / (current.y - previous.y)
                + previous.x
            )
            if point.x < crossing_x:
                inside = not inside
        previous = current
    return inside


@dataclass(frozen=True)
class Polygon:
    """Closed polygon.

    Attributes
    ----------
    vertices : Tuple[Point, ...]
        Ordered vertices, at least 3
    edges : Tuple[LineSegment, ...]
        ``v[i] → v[i+1]`` for each i, then ``v[-1] → v[0]``
    """

    vertices: Tuple[Point, ...]
    edges: Tuple[LineSegment, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        vertices = tuple(self.vertices)
        if len(vertices) < 3:
            raise ValueError(f"Polygon needs at least 3 vertices, got {len(vertices)}")
        edges = tuple(
            LineSegment(vertices[i], vertices[(i + 1) % len(vertices)])
            for i in range(len(vertices))
        )
        object.__setattr__(self, "vertices", vertices)
        object.__setattr__(self, "edges", edges)

    def bounds(self) -> Tuple[Point, Point]:
        return get_bounds(self.vertices)

    def contains(self, point: Point) -> bool:
        return is_inside_polygon(point, self.vertices)


@dataclass(frozen=True)
class DashedLine:
    """Segment ``start → finish`` split into ``2n - 1`` equal divisions.

    Even-indexed divisions are kept as dashes, odd ones are the gaps, so the
    line starts and ends with a dash.
    """

    start: Point
    finish: Point
    dash_count: int
    dashes: Tuple[LineSegment, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.dash_count < 1:
            raise ValueError(f"Dashed line needs at least 1 dash, got {self.dash_count}")
        divisions = 2 * self.dash_count - 1
        width = 1.0 / divisions
        dashes = tuple(
            LineSegment(
                Point.lerp(self.start, self.finish, i * width),
                Point.lerp(self.start, self.finish, (i + 1) * width),
            )
            for i in range(0, divisions, 2)
        )
        object.__setattr__(self, "dashes", dashes)


@dataclass(frozen=True)
class Vector:
    """Directed arrow from ``tail`` to ``head``.

    With ``d = head - tail`` and ``L = |d|``, the arrowhead base centre sits
    ``arrow_height`` back from the head::

        adjusted_head = lerp(head, tail, h / L)
        tip           = adjusted_head + (h / L) d        (== head)
        base corners  = adjusted_head ± (w / 2L) rot90(d)

    The shaft runs from ``adjusted_head`` to ``tail``. When the arrowhead is
    longer than the whole vector (h / L > 1) the shaft is dropped and only
    the arrowhead is drawn.
    """

    head: Point
    tail: Point
    arrow_width: float
    arrow_height: float
    arrow_head: Polygon = field(init=False, repr=False, compare=False)
    line: Optional[LineSegment] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        direction = self.head - self.tail
        length = direction.distance()
        if length == 0.0:
            raise ValueError(f"Vector has zero length (head == tail == {self.head})")

        width_factor = (self.arrow_width / 2.0) / length
        height_factor = self.arrow_height / length
        adjusted_head = Point.lerp(self.head, self.tail, height_factor)

        arrow_head = Polygon((
            adjusted_head + height_factor * direction,
            adjusted_head + width_factor * direction.rotate_counter_clockwise(),
            adjusted_head + width_factor * direction.rotate_clockwise(),
        ))

        line = None
        if height_factor > 1.0:
            logger.debug(f"Arrowhead longer than vector ({self.arrow_height} > {length:.4g}); shaft omitted")
        else:
            line = LineSegment(adjusted_head, self.tail)

        object.__setattr__(self, "arrow_head", arrow_head)
        object.__setattr__(self, "line", line)

    @property
    def magnitude(self) -> float:
        return (self.head - self.tail).distance()


@dataclass(frozen=True)
class CartesianPlane:
    """Coordinate axes: four Vectors from ``origin`` to the bound edges.

    Axes point up to ``top_right.y``, down to ``bottom_left.y``, left to
    ``bottom_left.x`` and right to ``top_right.x``. An origin lying on a
    bound edge would give a zero-length axis and raises ValueError.
    """

    bottom_left: Point
    top_right: Point
    origin: Point
    arrow_width: float
    arrow_height: float
    axes: Tuple[Vector, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        o = self.origin
        heads = (
            Point(o.x, self.top_right.y),
            Point(o.x, self.bottom_left.y),
            Point(self.bottom_left.x, o.y),
            Point(self.top_right.x, o.y),
        )
        axes = tuple(Vector(head, o, self.arrow_width, self.arrow_height) for head in heads)
        object.__setattr__(self, "axes", axes)
