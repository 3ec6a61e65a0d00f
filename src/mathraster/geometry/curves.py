"""Parametric curves and uniform sampling.

Provides:
    - Curve: abstract base, a rule t ↦ Point over a closed domain [t0, t1]
    - LineSegment, Ellipse, Circle, BezierCurve: built-in curve kinds
    - ParametricCurve: any user callable t ↦ Point
    - sample(): n evenly spaced points covering the domain, both ends included
    - Curve.evaluate_many(): batch evaluation (numpy de Casteljau for Béziers)

Built-in kinds carry their defining data (endpoints, radii, control points)
instead of a closure, so they are comparable, printable and picklable for the
process-pool executor. Only ParametricCurve holds an arbitrary callable.

Partial-draw reveals narrow the domain with with_domain() before sampling;
there is no separate truncation mechanism.

Invariants:
    - sample(c, n)[0] == c.evaluate(t0) and sample(c, n)[-1] == c.evaluate(t1)
      for n >= 2
    - BezierCurve(ps)(0) == ps[0] and BezierCurve(ps)(1) == ps[-1]
"""

import dataclasses
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Tuple

import numpy as np

from mathraster.geometry.point import Point

Domain = Tuple[float, float]

UNIT_DOMAIN: Domain = (0.0, 1.0)
FULL_TURN: Domain = (0.0, 2.0 * math.pi)

# Upper bound on Bézier degree + 1; evaluation is O(k²) per parameter
MAX_BEZIER_CONTROL_POINTS = 4096

# Parameters per batch times control points, caps de Casteljau scratch memory
_BEZIER_BATCH_ELEMENTS = 1 << 21


def lerp_scalar(start: float, end: float, t: float) -> float:
    return (1.0 - t) * start + t * end


def _check_domain(domain: Domain) -> Domain:
    t0, t1 = domain
    t0, t1 = float(t0), float(t1)
    if not (math.isfinite(t0) and math.isfinite(t1)):
        raise ValueError(f"Curve domain must be finite, got ({t0}, {t1})")
    return (t0, t1)


class Curve(ABC):
    """A parametric rule ``t ↦ Point`` over ``domain = (t0, t1)``.

    The rule must be defined and finite for every t in the domain; values
    outside the domain are not guaranteed to mean anything.
    """

    domain: Domain

    @abstractmethod
    def evaluate(self, t: float) -> Point:
        """Point on the curve at parameter ``t``."""

    def __call__(self, t: float) -> Point:
        return self.evaluate(t)

    def evaluate_many(self, ts: Sequence[float]) -> List[Point]:
        """Points at every parameter of ``ts``, in order."""
        return [self.evaluate(t) for t in ts]

    def with_domain(self, t0: float, t1: float) -> "Curve":
        """Copy of this curve restricted (or extended) to ``[t0, t1]``."""
        return dataclasses.replace(self, domain=(t0, t1))

    def sample(self, n: int) -> List[Point]:
        return sample(self, n)

    @property
    def start(self) -> Point:
        return self.evaluate(self.domain[0])

    @property
    def end(self) -> Point:
        return self.evaluate(self.domain[1])


@dataclass(frozen=True)
class LineSegment(Curve):
    """Straight segment; t=0 is ``start``, t=1 is ``end``."""

    start_point: Point
    end_point: Point
    domain: Domain = UNIT_DOMAIN

    def __post_init__(self) -> None:
        object.__setattr__(self, "domain", _check_domain(self.domain))

    def evaluate(self, t: float) -> Point:
        return Point.lerp(self.start_point, self.end_point, t)


@dataclass(frozen=True)
class Ellipse(Curve):
    """Axis-aligned ellipse ``(rx cos t + cx, ry sin t + cy)``."""

    radius_x: float
    radius_y: float
    centre: Point = dataclasses.field(default_factory=Point.origin)
    domain: Domain = FULL_TURN

    def __post_init__(self) -> None:
        object.__setattr__(self, "domain", _check_domain(self.domain))

    def evaluate(self, t: float) -> Point:
        return Point(
            self.radius_x * math.cos(t) + self.centre.x,
            self.radius_y * math.sin(t) + self.centre.y,
        )


@dataclass(frozen=True)
class Circle(Curve):
    """Circle of ``radius`` about ``centre``; t is the angle in radians."""

    radius: float
    centre: Point = dataclasses.field(default_factory=Point.origin)
    domain: Domain = FULL_TURN

    def __post_init__(self) -> None:
        object.__setattr__(self, "domain", _check_domain(self.domain))

    def evaluate(self, t: float) -> Point:
        return Point(
            self.radius * math.cos(t) + self.centre.x,
            self.radius * math.sin(t) + self.centre.y,
        )


@dataclass(frozen=True)
class BezierCurve(Curve):
    """Bézier curve of degree ``len(control_points) - 1``.

    Evaluated with de Casteljau's algorithm as a loop over shrinking
    levels, so degree is bounded by MAX_BEZIER_CONTROL_POINTS and not by the
    call stack. evaluate_many() runs the levels on a (batch, k, 2) array for
    a whole batch of parameters at once.
    """

    control_points: Tuple[Point, ...]
    domain: Domain = UNIT_DOMAIN
    _control: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        points = tuple(self.control_points)
        if not points:
            raise ValueError("Bézier curve needs at least 1 control point")
        if len(points) > MAX_BEZIER_CONTROL_POINTS:
            raise ValueError(
                f"Bézier curve has {len(points)} control points, "
                f"max is {MAX_BEZIER_CONTROL_POINTS}"
            )
        object.__setattr__(self, "control_points", points)
        object.__setattr__(self, "domain", _check_domain(self.domain))
        object.__setattr__(
            self, "_control", np.array([(p.x, p.y) for p in points], dtype=np.float64)
        )

    @property
    def degree(self) -> int:
        return len(self.control_points) - 1

    def evaluate(self, t: float) -> Point:
        return self.evaluate_many([t])[0]

    def evaluate_many(self, ts: Sequence[float]) -> List[Point]:
        ts = np.asarray(ts, dtype=np.float64)
        batch = max(1, _BEZIER_BATCH_ELEMENTS // len(self._control))
        points: List[Point] = []
        for start in range(0, len(ts), batch):
            t = ts[start:start + batch, None, None]
            level = np.broadcast_to(self._control, (len(t),) + self._control.shape)
            while level.shape[1] > 1:
                level = (1.0 - t) * level[:, :-1] + t * level[:, 1:]
            points.extend(Point(float(x), float(y)) for x, y in level[:, 0])
        return points


@dataclass(frozen=True)
class ParametricCurve(Curve):
    """Curve defined by an arbitrary callable ``rule(t) -> Point``.

    Closures are fine for the thread executor; the process executor needs a
    module-level function.
    """

    rule: Callable[[float], Point]
    domain: Domain = UNIT_DOMAIN

    def __post_init__(self) -> None:
        if not callable(self.rule):
            raise TypeError(f"rule must be callable, got {type(self.rule).__name__}")
        object.__setattr__(self, "domain", _check_domain(self.domain))

    def evaluate(self, t: float) -> Point:
        return self.rule(t)


def sample(curve: Curve, n: int) -> List[Point]:
    """Evaluate ``curve`` at ``n`` evenly spaced parameters.

    Parameters
    ----------
    curve : Curve
        Curve to sample
    n : int
        Number of samples, >= 0

    Returns
    -------
    List[Point]
        n points. For n >= 2, parameter i/(n-1) is lerped into the domain,
        so the first and last samples are the domain ends exactly. n == 1
        gives the start point only, n == 0 an empty list.

    Raises
    ------
    ValueError
        If n is negative
    """
    if n < 0:
        raise ValueError(f"Sample count must be >= 0, got {n}")
    t0, t1 = curve.domain
    if n == 1:
        return curve.evaluate_many([t0])
    return curve.evaluate_many([lerp_scalar(t0, t1, i / (n - 1)) for i in range(n)])


def polyline(points: Sequence[Point]) -> List[LineSegment]:
    """Consecutive segments joining ``points`` (open path)."""
    return [LineSegment(a, b) for a, b in zip(points, points[1:])]
