"""8-bit RGB colors, hex parsing, interpolation and named palettes.

Provides:
    - Color: immutable (red, green, blue) triple, each channel 0..255
    - Color.from_rgb() / Color.from_hex(): construction
    - Color.lerp(): channel-wise linear interpolation between two colors
    - lerp_channels(): vectorised lerp over numpy pixel blocks
    - rainbow(): hue sweep for magnitude color-coding
    - css_colours: named palette (WHITE, BLACK, ALMOND, ...)

Interpolation rounds half up and clamps to [0, 255], in both the scalar and
the vectorised form, so that a pixel blended by the rasterizer is bit-identical
to Color.lerp() applied to the same inputs.

Invariants:
    - lerp(a, b, 0) == a and lerp(a, b, 1) == b exactly
    - Channels are plain ints (never numpy scalars) on the Color type
"""

import colorsys
import re
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Tuple

import numpy as np

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")


@dataclass(frozen=True, slots=True)
class Color:
    """An opaque 24-bit color."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"{name} must be an int in [0, 255], got {value!r}")
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be in [0, 255], got {value}")
            object.__setattr__(self, name, int(value))

    @classmethod
    def from_rgb(cls, red: int, green: int, blue: int) -> "Color":
        """Create a color from its three channels."""
        return cls(red, green, blue)

    @classmethod
    def from_hex(cls, code: str) -> "Color":
        """Parse ``#rrggbb``, ``rrggbb`` or the short form ``#rgb``.

        Raises
        ------
        ValueError
            If the string is not a valid hex color
        """
        match = _HEX_RE.match(code.strip()) if isinstance(code, str) else None
        if match is None:
            raise ValueError(f"Invalid hex colour: {code!r}")
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    @staticmethod
    def lerp(start: "Color", end: "Color", t: float) -> "Color":
        """Linearly interpolate from ``start`` (t=0) to ``end`` (t=1)."""
        mixed = lerp_channels(
            np.array(start.as_tuple(), dtype=np.float64),
            np.array(end.as_tuple(), dtype=np.float64),
            np.float64(t),
        )
        return Color(*(int(c) for c in mixed))

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    def as_array(self) -> np.ndarray:
        """Channels as a (3,) uint8 array, ready to assign into a pixel grid."""
        return np.array(self.as_tuple(), dtype=np.uint8)

    def to_hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"


def lerp_channels(start: np.ndarray, end: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Vectorised color interpolation.

    Parameters
    ----------
    start : np.ndarray
        Colors at t=0, shape (..., 3), any numeric dtype
    end : np.ndarray
        Colors at t=1, broadcastable against ``start``
    t : np.ndarray
        Interpolation parameter, broadcastable to (..., 1) or scalar

    Returns
    -------
    np.ndarray
        Interpolated colors as uint8, same shape as the broadcast inputs

    Notes
    -----
    Rounds half up, then clamps. Endpoints are exact: at t=0 the (1-t)
    weight is exactly 1 and the t weight exactly 0.
    """
    start = np.asarray(start, dtype=np.float64)
    end = np.asarray(end, dtype=np.float64)
    t = np.asarray(t, dtype=np.float64)
    mixed = (1.0 - t) * start + t * end
    return np.clip(np.floor(mixed + 0.5), 0, 255).astype(np.uint8)


def rainbow(t: float) -> Color:
    """Map t in [0, 1] onto a red → violet hue sweep.

    Values outside [0, 1] are clamped. Used by the vector field plot to
    color-code magnitudes.
    """
    t = min(max(float(t), 0.0), 1.0)
    r, g, b = colorsys.hsv_to_rgb(t * 5.0 / 6.0, 1.0, 1.0)
    return Color(*(int(round(c * 255)) for c in (r, g, b)))


CSS_COLOURS = {
    "WHITE": Color(255, 255, 255),
    "BLACK": Color(0, 0, 0),
    "RED": Color(255, 0, 0),
    "GREEN": Color(0, 128, 0),
    "BLUE": Color(0, 0, 255),
    "ALMOND": Color(239, 222, 205),
    "BABY_BLUE": Color(137, 207, 240),
    "ALIZARIN_CRIMSON": Color(227, 38, 54),
    "ORANGE_PEEL": Color(255, 159, 0),
    "MIDNIGHT_BLUE": Color(25, 25, 112),
    "SLATE_GREY": Color(112, 128, 144),
    "GOLD": Color(255, 215, 0),
}

# Attribute access: css_colours.WHITE
css_colours = SimpleNamespace(**CSS_COLOURS)
