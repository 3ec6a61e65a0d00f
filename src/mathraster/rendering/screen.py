"""Screen: the pixel canvas and its builder-style API.

A Screen pairs a fixed-size pixel grid with the rectangle of the continuous
plane it shows. The grid is a numpy uint8 array of shape (width, height, 3)
indexed ``pixels[x, y]``, with y growing upward from the bottom-left.

Builder chain (each call mutates in place and returns the same Screen)::

    screen = (
        Screen(800, 600, Point(-4, -3), Point(4, 3), css_colours.WHITE)
        .render(Circle(2.0), CurveRenderSettings(BLACK, Thickness.relative(0.05), 2000))
        .fill(Point(0, 0), css_colours.BABY_BLUE)
    )
    screen.write_to_png("outputs", "circle")

Invariants:
    - Grid shape is fixed at construction and never resized
    - Every write targets in-bounds indices only
    - copy() is deep: frame units never share a grid

Also provides aspect_ratios() to check how much the plane is squeezed and
calculate_line_thickness() for resolution-proportional absolute sizes.
"""

import logging
import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Union

import numpy as np

from mathraster.geometry.point import Point
from mathraster.rendering import encoders
from mathraster.rendering.coordinates import PixelCoordinate, to_point
from mathraster.rendering.flood_fill import flood_fill
from mathraster.rendering.rasterizer import render, render_many
from mathraster.utils.color import Color
from mathraster.utils.conversions import U16_MAX

logger = logging.getLogger(__name__)


def _check_resolution(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if not 1 <= value <= U16_MAX:
        raise ValueError(f"{name} must be in [1, {U16_MAX}], got {value}")
    return int(value)


class Screen:
    """Mutable RGB canvas over a rectangle of the plane.

    Parameters
    ----------
    horizontal_resolution, vertical_resolution : int
        Grid size in pixels, each in [1, 65535]
    bottom_left, top_right : Point
        Plane coordinates of pixel (0, 0) and of the far corner; both spans
        must be non-zero
    background : Color
        Initial colour of every pixel
    """

    def __init__(
        self,
        horizontal_resolution: int,
        vertical_resolution: int,
        bottom_left: Point,
        top_right: Point,
        background: Color,
    ):
        self.horizontal_resolution = _check_resolution("horizontal_resolution", horizontal_resolution)
        self.vertical_resolution = _check_resolution("vertical_resolution", vertical_resolution)
        if not isinstance(bottom_left, Point) or not isinstance(top_right, Point):
            raise TypeError("Screen bounds must be Points")
        if top_right.x == bottom_left.x or top_right.y == bottom_left.y:
            raise ValueError(f"Screen bounds {bottom_left} .. {top_right} span zero width or height")
        if not isinstance(background, Color):
            raise TypeError(f"background must be a Color, got {type(background).__name__}")

        self.bottom_left = bottom_left
        self.top_right = top_right
        self.pixels = np.empty(
            (self.horizontal_resolution, self.vertical_resolution, 3), dtype=np.uint8
        )
        self.pixels[...] = background.as_array()

    def __repr__(self) -> str:
        return (
            f"Screen({self.horizontal_resolution}x{self.vertical_resolution}, "
            f"{self.bottom_left} .. {self.top_right})"
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Screen):
            return NotImplemented
        return (
            self.bottom_left == other.bottom_left
            and self.top_right == other.top_right
            and np.array_equal(self.pixels, other.pixels)
        )

    __hash__ = None

    @property
    def resolution(self):
        return (self.horizontal_resolution, self.vertical_resolution)

    def copy(self) -> "Screen":
        """Independent deep copy (grid included)."""
        clone = Screen.__new__(Screen)
        clone.horizontal_resolution = self.horizontal_resolution
        clone.vertical_resolution = self.vertical_resolution
        clone.bottom_left = self.bottom_left
        clone.top_right = self.top_right
        clone.pixels = self.pixels.copy()
        return clone

    # ------------------------------------------------------------------
    # Builder chain
    # ------------------------------------------------------------------

    def render(self, item, settings) -> "Screen":
        """Rasterize one shape onto this screen."""
        render(item, settings, self)
        return self

    def render_many(self, items: Iterable, settings) -> "Screen":
        """Rasterize several shapes with shared settings, in order."""
        render_many(items, settings, self)
        return self

    def fill(self, seed: Point, colour: Color) -> "Screen":
        """Flood-fill the 4-connected region of uniform colour around ``seed``."""
        flood_fill(self, seed, colour)
        return self

    def fill_where(self, condition: Callable[[Point], bool], colour: Color) -> "Screen":
        """Set every pixel whose plane point satisfies ``condition``.

        Visits the whole grid with one Python call per pixel; prefer polygon
        fill or flood fill when either fits.
        """
        target = colour.as_array()
        for x in range(self.horizontal_resolution):
            for y in range(self.vertical_resolution):
                if condition(to_point(self, PixelCoordinate(x, y))):
                    self.pixels[x, y] = target
        return self

    # ------------------------------------------------------------------
    # Pixel access
    # ------------------------------------------------------------------

    def _check_index(self, x: int, y: int) -> None:
        if not (0 <= x < self.horizontal_resolution and 0 <= y < self.vertical_resolution):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.horizontal_resolution}x{self.vertical_resolution} grid")

    def pixel(self, x: int, y: int) -> Color:
        self._check_index(x, y)
        return Color(*(int(c) for c in self.pixels[x, y]))

    def set_pixel(self, x: int, y: int, colour: Color) -> None:
        self._check_index(x, y)
        self.pixels[x, y] = colour.as_array()

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def write_to_bitmap(self, folder: Union[str, Path], filename: str) -> Path:
        """Write ``folder/filename.bmp``; raises an OutputError on failure."""
        return encoders.write_bitmap(self, folder, filename)

    def write_to_png(self, folder: Union[str, Path], filename: str) -> Path:
        """Write ``folder/filename.png``; raises an OutputError on failure."""
        return encoders.write_png(self, folder, filename)


@dataclass(frozen=True)
class AspectRatios:
    """Width : height of the pixel grid and of the plane rectangle, as 1 : value."""

    resolution: float
    bounds: float

    @property
    def distortion(self) -> float:
        """>1 means the plane is stretched horizontally on the grid."""
        return self.resolution / self.bounds


def aspect_ratios(screen: Screen) -> AspectRatios:
    """Compare grid and plane aspect ratios to see how much shapes get squeezed."""
    resolution = screen.horizontal_resolution / screen.vertical_resolution
    bounds = (
        (screen.top_right.x - screen.bottom_left.x)
        / (screen.top_right.y - screen.bottom_left.y)
    )
    if abs(resolution - bounds) > 1e-3 * abs(bounds):
        logger.debug(f"Aspect mismatch: grid {resolution:.4f} vs plane {bounds:.4f}")
    return AspectRatios(resolution, bounds)


def calculate_line_thickness(
    horizontal_resolution: int,
    vertical_resolution: int,
    proportion: float,
) -> int:
    """Pixel thickness as ``proportion`` of the mean resolution.

    The mean is integer (floor) and the product is truncated, so that an
    absolute thickness scales with the output size.
    """
    mean = (horizontal_resolution + vertical_resolution) // 2
    return int(proportion * mean)
