"""Checked numeric narrowing conversions.

Provides:
    - to_i32(), to_u32(), to_u16(): round half away from zero, then range check
    - to_u8(): truncate toward zero, then range check
    - int_to_float(): integer → float with representability check

Every conversion fails loudly instead of wrapping or saturating. A failure
here means a caller passed geometry that cannot be mapped onto the pixel
grid (e.g. a point millions of screen-widths away), which is a contract
violation, not an environmental condition. ConversionError is therefore
never converted into an OutputError.

Used by:
    - rendering.coordinates: plane → pixel mapping
    - rendering.settings: Thickness → pixel count
    - animation.pipeline: frame count from duration × frame rate
"""

import math
import sys

I32_MIN, I32_MAX = -(2 ** 31), 2 ** 31 - 1
U32_MAX = 2 ** 32 - 1
U16_MAX = 2 ** 16 - 1
U8_MAX = 2 ** 8 - 1


class ConversionError(OverflowError):
    """Raised when a value does not fit the target numeric range."""

    pass


def round_half_away(x: float) -> int:
    """Round to nearest integer, ties away from zero.

    Python's round() uses banker's rounding; pixel mapping needs the
    conventional rule so that 2.5 → 3 and -2.5 → -3.
    """
    if x >= 0:
        return int(math.floor(x + 0.5))
    return -int(math.floor(-x + 0.5))


def _check_range(value: float, low: int, high: int, target: str) -> None:
    # NaN fails both comparisons, so test for the accepted range explicitly
    if not (low <= value <= high):
        raise ConversionError(
            f"Could not convert {value!r} to {target}: "
            f"value out of bounds [{low}, {high}]"
        )


def to_i32(x: float) -> int:
    """Convert float to a signed 32-bit integer (rounded)."""
    _check_range(x, I32_MIN, I32_MAX, "i32")
    return round_half_away(x)


def to_u32(x: float) -> int:
    """Convert float to an unsigned 32-bit integer (rounded)."""
    _check_range(x, 0, U32_MAX, "u32")
    return round_half_away(x)


def to_u16(x: float) -> int:
    """Convert float to an unsigned 16-bit integer (rounded)."""
    _check_range(x, 0, U16_MAX, "u16")
    return round_half_away(x)


def to_u8(x: float) -> int:
    """Convert float to an unsigned 8-bit integer (truncated)."""
    _check_range(x, 0, U8_MAX, "u8")
    return int(x)


def int_to_float(n: int) -> float:
    """Convert integer to float, failing if it exceeds the float range."""
    if abs(n) > sys.float_info.max:
        raise ConversionError(f"Could not convert {n} to float: value out of bounds")
    return float(n)
