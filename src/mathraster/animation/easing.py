"""Easing curves for animation timing.

easy_ease() maps [0, 1] onto itself with an increasing S-curve whose
steepest point is t = 0.5::

    easy_ease(t, fn) = g(2at - a) / (2 g(a)) + 0.5

with g = arctan or tanh and ``a`` the steepness. Endpoints are fixed:
easy_ease(0) = 0 and easy_ease(1) = 1 (up to float rounding).
"""

import math
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class EaseFn:
    """Odd, increasing shaping function ``g`` with steepness ``a`` > 0."""

    function: Callable[[float], float]
    steepness: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.steepness) or self.steepness <= 0:
            raise ValueError(f"Easing steepness must be finite and > 0, got {self.steepness}")

    @classmethod
    def arctan(cls, steepness: float) -> "EaseFn":
        return cls(math.atan, steepness)

    @classmethod
    def tanh(cls, steepness: float) -> "EaseFn":
        return cls(math.tanh, steepness)


def easy_ease(t: float, fn: EaseFn) -> float:
    a = fn.steepness
    g = fn.function
    return g(2.0 * a * t - a) / (2.0 * g(a)) + 0.5
