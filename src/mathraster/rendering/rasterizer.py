"""Rasterize geometry onto a Screen's pixel grid.

Provides:
    - render(item, settings, screen): draw one shape in place
    - render_many(items, settings, screen): draw a sequence, in input order
    - render_point(): the stamp every stroked shape reduces to
    - fill_polygon(): solid fill via per-pixel parity test

Dispatch is on the shape type (functools.singledispatch); each shape kind
accepts exactly one settings type, anything else raises TypeError.

Composition:
    Point          → stamp of radius r around the mapped pixel
    Curve          → sample(curve, n), one stamp per sample
    Polygon        → fill (optional) then sides as curves (optional)
    Vector         → arrowhead as filled polygon, shaft as curve
    DashedLine     → each dash as a curve
    CartesianPlane → four Vectors, Square style

Stamps are vectorised with numpy: one ROI slice of the grid per stamp, with a
(dx² + dy²) distance table computed once per ROI. The pixel set touched is
``[cx - r, cx + r) × [cy - r, cy + r)`` clipped to the screen.

A Point or Curve whose radius or thickness resolves to 0 px draws nothing
and is logged at WARNING.

Later stamps blend over earlier ones (RoundAntiAliased reads the current
pixel), so output is order-dependent and render_many never reorders.
"""

import logging
from functools import singledispatch
from typing import TYPE_CHECKING, Iterable

import numpy as np

from mathraster.geometry.curves import Curve, sample
from mathraster.geometry.point import Point
from mathraster.geometry.shapes import CartesianPlane, DashedLine, Polygon, Vector, get_bounds
from mathraster.rendering.coordinates import to_pixel
from mathraster.rendering.settings import (
    CartesianPlaneRenderSettings,
    CurveRenderSettings,
    DashedLineRenderSettings,
    PointRenderSettings,
    PolygonFillRenderSettings,
    PolygonRenderSettings,
    RoundAliased,
    RoundAntiAliased,
    Square,
    VectorRenderSettings,
)
from mathraster.utils.color import lerp_channels

if TYPE_CHECKING:
    from mathraster.rendering.screen import Screen

logger = logging.getLogger(__name__)


def _expect(settings, expected: type, item) -> None:
    if not isinstance(settings, expected):
        raise TypeError(
            f"{type(item).__name__} needs {expected.__name__}, got {type(settings).__name__}"
        )


@singledispatch
def render(item, settings, screen: "Screen") -> None:
    """Draw ``item`` onto ``screen`` in place.

    Raises
    ------
    TypeError
        If ``item`` is not a renderable shape or ``settings`` has the wrong
        type for it
    ConversionError
        If the item maps outside the integer pixel range
    """
    raise TypeError(f"Cannot render object of type {type(item).__name__}")


def render_many(items: Iterable, settings, screen: "Screen") -> None:
    """Draw every item with the same settings, in input order."""
    for item in items:
        render(item, settings, screen)


# ============================================================================
# POINT
# ============================================================================

@render.register(Point)
def _render_point(item, settings, screen) -> None:
    _expect(settings, PointRenderSettings, item)
    if settings.radius.to_pixels(screen) == 0:
        logger.warning(f"Point radius {settings.radius} resolves to 0 px on {screen!r}; nothing drawn")
        return
    render_point(item, settings, screen)


def render_point(point: Point, settings: PointRenderSettings, screen: "Screen") -> None:
    """Stamp one point.

    Notes
    -----
    Square overwrites the whole square. RoundAliased overwrites where
    ``d² < r²``. RoundAntiAliased(f) sets ``lerp(colour, prior, (d²/r²)**f)``
    where ``d² < r²``: exact colour at the centre, prior colour at the rim.
    """
    radius = settings.radius.to_pixels(screen)
    centre = to_pixel(screen, point)
    width, height = screen.horizontal_resolution, screen.vertical_resolution

    x0, x1 = max(centre.x - radius, 0), min(centre.x + radius, width)
    y0, y1 = max(centre.y - radius, 0), min(centre.y + radius, height)
    if x0 >= x1 or y0 >= y1:
        return

    roi = screen.pixels[x0:x1, y0:y1]
    style = settings.style

    if isinstance(style, Square):
        roi[...] = settings.colour.as_array()
        return

    dx = np.arange(x0, x1, dtype=np.int64) - centre.x
    dy = np.arange(y0, y1, dtype=np.int64) - centre.y
    squared = dx[:, None] ** 2 + dy[None, :] ** 2
    r_squared = radius * radius
    inside = squared < r_squared

    if isinstance(style, RoundAliased):
        roi[inside] = settings.colour.as_array()
    elif isinstance(style, RoundAntiAliased):
        p = (squared[inside] / r_squared) ** style.factor
        roi[inside] = lerp_channels(settings.colour.as_array(), roi[inside], p[:, None])
    else:
        raise TypeError(f"Unknown stroke style {style!r}")


# ============================================================================
# CURVE
# ============================================================================

@render.register(Curve)
def _render_curve(item, settings, screen) -> None:
    _expect(settings, CurveRenderSettings, item)
    if settings.thickness.to_pixels(screen) == 0:
        logger.warning(
            f"Curve thickness {settings.thickness} resolves to 0 px on {screen!r}; {type(item).__name__} skipped"
        )
        return
    point_settings = settings.point_settings()
    for point in sample(item, settings.samples):
        render_point(point, point_settings, screen)


# ============================================================================
# POLYGON
# ============================================================================

@render.register(Polygon)
def _render_polygon(item, settings, screen) -> None:
    _expect(settings, PolygonRenderSettings, item)
    if settings.fill is not None:
        fill_polygon(item, settings.fill, screen)
    if settings.sides is not None:
        render_many(item.edges, settings.sides.curve_settings(), screen)


def _inside_mask(xs: np.ndarray, ys: np.ndarray, vertices) -> np.ndarray:
    """Vectorised is_inside_polygon over a grid of plane coordinates."""
    inside = np.zeros(np.broadcast(xs, ys).shape, dtype=bool)
    previous = vertices[-1]
    for current in vertices:
        straddles = (previous.y > ys) != (current.y > ys)
        if current.y != previous.y:
            crossing_x = (
                (current.x - previous.x) * (ys - previous.y) / (current.y - previous.y)
                + previous.x
            )
            inside ^= straddles & (xs < crossing_x)
        previous = current
    return inside


def fill_polygon(polygon: Polygon, settings: PolygonFillRenderSettings, screen: "Screen") -> None:
    """Solid fill, independent of what is already on the screen.

    Every pixel of the vertices' bounding box (inclusive, clipped to the
    screen) is mapped back to the plane and set when the parity test says it
    lies inside. Unlike Screen.fill this does not depend on existing colours.
    """
    bottom_left, top_right = get_bounds(polygon.vertices)
    low = to_pixel(screen, bottom_left)
    high = to_pixel(screen, top_right)

    # Inverted screen bounds swap the pixel order of the box corners
    x0 = max(min(low.x, high.x), 0)
    x1 = min(max(low.x, high.x), screen.horizontal_resolution - 1)
    y0 = max(min(low.y, high.y), 0)
    y1 = min(max(low.y, high.y), screen.vertical_resolution - 1)
    if x0 > x1 or y0 > y1:
        logger.debug(f"Polygon fill box off-screen ({low} .. {high}); skipped")
        return

    bl, tr = screen.bottom_left, screen.top_right
    tx = np.arange(x0, x1 + 1, dtype=np.float64) / screen.horizontal_resolution
    ty = np.arange(y0, y1 + 1, dtype=np.float64) / screen.vertical_resolution
    plane_x = ((1.0 - tx) * bl.x + tx * tr.x)[:, None]
    plane_y = ((1.0 - ty) * bl.y + ty * tr.y)[None, :]

    mask = _inside_mask(plane_x, plane_y, polygon.vertices)
    screen.pixels[x0:x1 + 1, y0:y1 + 1][mask] = settings.colour.as_array()


# ============================================================================
# COMPOSITES
# ============================================================================

@render.register(Vector)
def _render_vector(item, settings, screen) -> None:
    _expect(settings, VectorRenderSettings, item)
    fill_polygon(item.arrow_head, PolygonFillRenderSettings(settings.colour), screen)
    if item.line is not None:
        render(item.line, settings.curve_settings(), screen)


@render.register(DashedLine)
def _render_dashedline(item, settings, screen) -> None:
    _expect(settings, DashedLineRenderSettings, item)
    render_many(item.dashes, settings.curve_settings(), screen)


@render.register(CartesianPlane)
def _render_cartesianplane(item, settings, screen) -> None:
    _expect(settings, CartesianPlaneRenderSettings, item)
    render_many(item.axes, settings.vector_settings(), screen)
