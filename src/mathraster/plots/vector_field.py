"""Vector field plots.

Provides:
    - rectangular_point_array(): evenly spaced grid of sample points
    - VectorFieldStyle: colours, sizes and sample counts for draw()
    - draw(): render field(p) at every sample point as an arrow

Every arrow is drawn with the same display length so the picture shows
direction; magnitude is encoded by colour through rainbow(), red for the
largest and blue-ish for the smallest:

    m_norm = (m - m_min) / (m_max - m_min)
    colour = rainbow((1 - m_norm) * 0.8)

The screen bounds are the sample points' bounding box grown by ``margin`` on
every side, and the vertical resolution follows from the horizontal one so
the plane is not squeezed. Axes are a CartesianPlane through the origin over
the sample points' bounding box.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Sequence

from mathraster.geometry.point import Point
from mathraster.geometry.shapes import CartesianPlane, Vector, get_bounds
from mathraster.rendering.screen import Screen
from mathraster.rendering.settings import (
    CartesianPlaneRenderSettings,
    RoundAntiAliased,
    Thickness,
    VectorRenderSettings,
)
from mathraster.utils.color import Color, rainbow
from mathraster.utils.conversions import to_u16

logger = logging.getLogger(__name__)

Field = Callable[[Point], Point]


def rectangular_point_array(
    bottom_left: Point,
    top_right: Point,
    x_qty: int,
    y_qty: int,
) -> List[Point]:
    """``x_qty × y_qty`` points spanning the rectangle, corners included.

    Ordered column by column (x outer, y inner).
    """
    if x_qty < 2 or y_qty < 2:
        raise ValueError(f"Point array needs at least 2 points per axis, got {x_qty}x{y_qty}")
    x_unit = (top_right.x - bottom_left.x) / (x_qty - 1)
    y_unit = (top_right.y - bottom_left.y) / (y_qty - 1)
    return [
        Point(bottom_left.x + x_unit * i, bottom_left.y + y_unit * j)
        for i in range(x_qty)
        for j in range(y_qty)
    ]


@dataclass(frozen=True)
class VectorFieldStyle:
    """Appearance of a vector field plot.

    Lengths (margin, arrow sizes, thicknesses, vector_length) are in plane
    units.
    """

    background: Color
    axis_colour: Color
    horizontal_resolution: int = 1920
    margin: float = 1.0
    arrow_width: float = 0.2
    arrow_height: float = 0.2
    vector_length: float = 0.5
    vector_thickness: float = 0.05
    axis_thickness: float = 0.05
    vector_samples: int = 300
    axis_samples: int = 400
    anti_aliasing: float = 2.0


def draw(field: Field, points: Sequence[Point], style: VectorFieldStyle) -> Screen:
    """Plot ``field`` sampled at ``points``.

    Raises
    ------
    ValueError
        If ``points`` is empty, spans zero width, or the origin lies on the
        edge of the points' bounding box (an axis would have zero length)
    """
    if not points:
        raise ValueError("Vector field needs at least one sample point")

    bottom_left, top_right = get_bounds(points)
    margin = Point(style.margin, style.margin)
    low, high = bottom_left - margin, top_right + margin
    if high.x == low.x:
        raise ValueError("Vector field bounds have zero width")
    vertical_resolution = to_u16(int((high.y - low.y) * style.horizontal_resolution / (high.x - low.x)))

    screen = Screen(style.horizontal_resolution, vertical_resolution, low, high, style.background)
    screen.render(
        CartesianPlane(bottom_left, top_right, Point.origin(), style.arrow_width, style.arrow_height),
        CartesianPlaneRenderSettings(
            style.axis_colour,
            Thickness.relative(style.axis_thickness),
            style.axis_samples,
        ),
    )

    arrows = []
    for tail in points:
        value = field(tail)
        magnitude = value.distance()
        if magnitude == 0.0:
            logger.warning(f"Zero field value at {tail}; arrow skipped")
            continue
        head = tail + (style.vector_length / magnitude) * value
        arrows.append((Vector(head, tail, style.arrow_width, style.arrow_height), magnitude))

    if not arrows:
        return screen

    magnitudes = [m for _, m in arrows]
    m_min, m_max = min(magnitudes), max(magnitudes)
    spread = m_max - m_min
    logger.debug(f"Field magnitudes in [{m_min:.4g}, {m_max:.4g}] over {len(arrows)} arrows")

    for arrow, magnitude in arrows:
        m_norm = (magnitude - m_min) / spread if spread > 0 else 0.0
        screen.render(
            arrow,
            VectorRenderSettings(
                rainbow((1.0 - m_norm) * 0.8),
                Thickness.relative(style.vector_thickness),
                style.vector_samples,
                RoundAntiAliased(style.anti_aliasing),
            ),
        )
    return screen
