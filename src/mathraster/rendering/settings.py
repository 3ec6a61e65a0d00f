"""Stroke styles, thickness and per-shape render settings.

Provides:
    - Square, RoundAliased, RoundAntiAliased: stroke styles for point stamps
    - Thickness.relative() / Thickness.absolute(): radius or line thickness
    - *RenderSettings: one frozen settings type per renderable shape

Thickness has two distinct variants that are never conflated. Relative
(plane units, canonical) is resolved against the target Screen by averaging
the horizontal and vertical scale factors; absolute is a raw pixel count.
A bare number where a Thickness is expected raises TypeError.

All settings validate in __post_init__, so a bad value fails at construction
rather than mid-render.
"""

import math
import numbers
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from mathraster.utils.color import Color
from mathraster.utils.conversions import U16_MAX, to_u16

if TYPE_CHECKING:
    from mathraster.rendering.screen import Screen


# ============================================================================
# STROKE STYLES
# ============================================================================

@dataclass(frozen=True)
class Square:
    """Overwrite every pixel of the stamp's bounding square."""


@dataclass(frozen=True)
class RoundAliased:
    """Overwrite pixels strictly inside the radius."""


@dataclass(frozen=True)
class RoundAntiAliased:
    """Blend inside the radius by ``p = (d² / r²) ** factor``.

    p = 0 at the centre gives the full stroke colour, p → 1 at the rim gives
    the prior pixel. Higher factor gives a sharper edge.
    """

    factor: float

    def __post_init__(self) -> None:
        if isinstance(self.factor, bool) or not isinstance(self.factor, numbers.Real):
            raise TypeError(f"factor must be a number, got {type(self.factor).__name__}")
        if not math.isfinite(self.factor) or self.factor <= 0:
            raise ValueError(f"factor must be finite and > 0, got {self.factor}")


StrokeStyle = Union[Square, RoundAliased, RoundAntiAliased]
_STYLES = (Square, RoundAliased, RoundAntiAliased)


# ============================================================================
# THICKNESS
# ============================================================================

class Thickness:
    """Radius or line thickness; build with relative() or absolute()."""

    __slots__ = ()

    @staticmethod
    def relative(length: float) -> "RelativeThickness":
        return RelativeThickness(length)

    @staticmethod
    def absolute(pixels: int) -> "AbsoluteThickness":
        return AbsoluteThickness(pixels)

    def to_pixels(self, screen: "Screen") -> int:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class RelativeThickness(Thickness):
    """Length in plane units."""

    length: float

    def __post_init__(self) -> None:
        if isinstance(self.length, bool) or not isinstance(self.length, numbers.Real):
            raise TypeError(f"Relative thickness must be a number, got {type(self.length).__name__}")
        if not math.isfinite(self.length) or self.length < 0:
            raise ValueError(f"Relative thickness must be finite and >= 0, got {self.length}")

    def to_pixels(self, screen: "Screen") -> int:
        span_x = screen.top_right.x - screen.bottom_left.x
        span_y = screen.top_right.y - screen.bottom_left.y
        horizontal = abs(self.length / span_x) * screen.horizontal_resolution
        vertical = abs(self.length / span_y) * screen.vertical_resolution
        return to_u16((horizontal + vertical) / 2.0)


@dataclass(frozen=True, slots=True)
class AbsoluteThickness(Thickness):
    """Raw pixel count."""

    pixels: int

    def __post_init__(self) -> None:
        if isinstance(self.pixels, bool) or not isinstance(self.pixels, numbers.Integral):
            raise TypeError(f"Absolute thickness must be an int, got {type(self.pixels).__name__}")
        if not 0 <= self.pixels <= U16_MAX:
            raise ValueError(f"Absolute thickness must be in [0, {U16_MAX}], got {self.pixels}")

    def to_pixels(self, screen: "Screen") -> int:
        return int(self.pixels)


# ============================================================================
# SETTINGS
# ============================================================================

def _check_colour(colour) -> None:
    if not isinstance(colour, Color):
        raise TypeError(f"colour must be a Color, got {type(colour).__name__}")


def _check_thickness(name: str, value) -> None:
    if not isinstance(value, Thickness):
        raise TypeError(
            f"{name} must be Thickness.relative(...) or Thickness.absolute(...), "
            f"got {type(value).__name__}"
        )


def _check_style(style) -> None:
    if not isinstance(style, _STYLES):
        raise TypeError(f"style must be Square, RoundAliased or RoundAntiAliased, got {style!r}")


def _check_samples(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if not 0 <= value <= U16_MAX:
        raise ValueError(f"{name} must be in [0, {U16_MAX}], got {value}")


@dataclass(frozen=True)
class PointRenderSettings:
    colour: Color
    radius: Thickness
    style: StrokeStyle = Square()

    def __post_init__(self) -> None:
        _check_colour(self.colour)
        _check_thickness("radius", self.radius)
        _check_style(self.style)


@dataclass(frozen=True)
class CurveRenderSettings:
    colour: Color
    thickness: Thickness
    samples: int
    style: StrokeStyle = Square()

    def __post_init__(self) -> None:
        _check_colour(self.colour)
        _check_thickness("thickness", self.thickness)
        _check_samples("samples", self.samples)
        _check_style(self.style)

    def point_settings(self) -> PointRenderSettings:
        return PointRenderSettings(self.colour, self.thickness, self.style)


@dataclass(frozen=True)
class PolygonSidesRenderSettings:
    colour: Color
    thickness: Thickness
    samples_per_side: int
    style: StrokeStyle = Square()

    def __post_init__(self) -> None:
        _check_colour(self.colour)
        _check_thickness("thickness", self.thickness)
        _check_samples("samples_per_side", self.samples_per_side)
        _check_style(self.style)

    def curve_settings(self) -> CurveRenderSettings:
        return CurveRenderSettings(self.colour, self.thickness, self.samples_per_side, self.style)


@dataclass(frozen=True)
class PolygonFillRenderSettings:
    colour: Color

    def __post_init__(self) -> None:
        _check_colour(self.colour)


@dataclass(frozen=True)
class PolygonRenderSettings:
    """Either pass may be None; fill is drawn before sides."""

    sides: Optional[PolygonSidesRenderSettings] = None
    fill: Optional[PolygonFillRenderSettings] = None

    def __post_init__(self) -> None:
        if self.sides is not None and not isinstance(self.sides, PolygonSidesRenderSettings):
            raise TypeError(f"sides must be PolygonSidesRenderSettings, got {type(self.sides).__name__}")
        if self.fill is not None and not isinstance(self.fill, PolygonFillRenderSettings):
            raise TypeError(f"fill must be PolygonFillRenderSettings, got {type(self.fill).__name__}")


@dataclass(frozen=True)
class VectorRenderSettings:
    colour: Color
    thickness: Thickness
    samples: int
    style: StrokeStyle = Square()

    def __post_init__(self) -> None:
        _check_colour(self.colour)
        _check_thickness("thickness", self.thickness)
        _check_samples("samples", self.samples)
        _check_style(self.style)

    def curve_settings(self) -> CurveRenderSettings:
        return CurveRenderSettings(self.colour, self.thickness, self.samples, self.style)


@dataclass(frozen=True)
class DashedLineRenderSettings:
    colour: Color
    thickness: Thickness
    samples_per_dash: int
    style: StrokeStyle = Square()

    def __post_init__(self) -> None:
        _check_colour(self.colour)
        _check_thickness("thickness", self.thickness)
        _check_samples("samples_per_dash", self.samples_per_dash)
        _check_style(self.style)

    def curve_settings(self) -> CurveRenderSettings:
        return CurveRenderSettings(self.colour, self.thickness, self.samples_per_dash, self.style)


@dataclass(frozen=True)
class CartesianPlaneRenderSettings:
    """Axes are always stroked Square."""

    colour: Color
    thickness: Thickness
    samples_per_axis: int

    def __post_init__(self) -> None:
        _check_colour(self.colour)
        _check_thickness("thickness", self.thickness)
        _check_samples("samples_per_axis", self.samples_per_axis)

    def vector_settings(self) -> VectorRenderSettings:
        return VectorRenderSettings(self.colour, self.thickness, self.samples_per_axis, Square())
