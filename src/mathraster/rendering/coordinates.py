"""Plane ↔ pixel coordinate mapping.

Pixel (0, 0) is the bottom-left of the grid; x grows rightward, y upward.
The map is affine per axis::

    x_px = round(lerp(0, width,  (p.x - bl.x) / (tr.x - bl.x)))
    y_px = round(lerp(0, height, (p.y - bl.y) / (tr.y - bl.y)))

and to_point() is the inverse map parametrized by ``index / resolution``.
Rounding makes the round trip approximate: to_point(to_pixel(p)) is within
one pixel's plane extent of p.

Rounding is half away from zero. A point that maps outside the i32 range
raises ConversionError (geometry absurdly far from the screen).
"""

from typing import TYPE_CHECKING, NamedTuple

from mathraster.geometry.curves import lerp_scalar
from mathraster.geometry.point import Point
from mathraster.utils.conversions import to_i32

if TYPE_CHECKING:
    from mathraster.rendering.screen import Screen


class PixelCoordinate(NamedTuple):
    """Integer grid index, may lie off-screen."""

    x: int
    y: int


def to_pixel(screen: "Screen", point: Point) -> PixelCoordinate:
    bl, tr = screen.bottom_left, screen.top_right
    horizontal = (point.x - bl.x) / (tr.x - bl.x)
    vertical = (point.y - bl.y) / (tr.y - bl.y)
    return PixelCoordinate(
        to_i32(lerp_scalar(0.0, float(screen.horizontal_resolution), horizontal)),
        to_i32(lerp_scalar(0.0, float(screen.vertical_resolution), vertical)),
    )


def to_point(screen: "Screen", pixel: PixelCoordinate) -> Point:
    bl, tr = screen.bottom_left, screen.top_right
    horizontal = pixel.x / screen.horizontal_resolution
    vertical = pixel.y / screen.vertical_resolution
    return Point(
        lerp_scalar(bl.x, tr.x, horizontal),
        lerp_scalar(bl.y, tr.y, vertical),
    )


def in_bounds(pixel: PixelCoordinate, screen: "Screen") -> bool:
    return (
        0 <= pixel.x < screen.horizontal_resolution
        and 0 <= pixel.y < screen.vertical_resolution
    )


def pixel_extent(screen: "Screen") -> Point:
    """Plane size of one pixel along each axis."""
    return Point(
        (screen.top_right.x - screen.bottom_left.x) / screen.horizontal_resolution,
        (screen.top_right.y - screen.bottom_left.y) / screen.vertical_resolution,
    )
