"""Built-in example scenes.

Each entry of SCENES knows its default plane bounds and duration and how to
run itself against a blank base Screen (resolution and background come from
the render job):

    venn          still   two circles, flood-filled regions, anti-aliased rims
    rose          anim    rose curve r = cos(k t) with k = timestamp
    trig          anim    unit circle with sine/cosine/tangent segments and axes
    reveal        video   a Bézier curve drawn progressively, then held
    vector_field  still   z ↦ z³ as a vector field

Frame generators are module-level functions bound with functools.partial, so
they pickle and run under both the thread and the process executor.
"""

import logging
import math
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Callable, Tuple

from mathraster.animation.easing import EaseFn, easy_ease
from mathraster.animation.pipeline import AnimationResult, Scene, Video, animate, placeholder
from mathraster.geometry.curves import BezierCurve, Circle, LineSegment, ParametricCurve, polyline
from mathraster.geometry.point import Point
from mathraster.geometry.shapes import CartesianPlane, DashedLine, Polygon
from mathraster.plots import vector_field
from mathraster.rendering.encoders import ENCODERS
from mathraster.rendering.screen import Screen
from mathraster.rendering.settings import (
    CartesianPlaneRenderSettings,
    CurveRenderSettings,
    DashedLineRenderSettings,
    PointRenderSettings,
    PolygonFillRenderSettings,
    PolygonRenderSettings,
    PolygonSidesRenderSettings,
    RoundAliased,
    RoundAntiAliased,
    Thickness,
)
from mathraster.utils.color import Color, css_colours

logger = logging.getLogger(__name__)

Bounds = Tuple[Tuple[float, float], Tuple[float, float]]


# ============================================================================
# VENN (still)
# ============================================================================

def venn(base: Screen) -> Screen:
    """Two overlapping circles with each region flood-filled."""
    left = Circle(25.0, Point(60.0, 50.0))
    right = Circle(25.0, Point(90.0, 50.0))

    return (
        base.copy()
        .render_many(
            [left, right],
            CurveRenderSettings(css_colours.BLACK, Thickness.relative(0.3), 900, RoundAliased()),
        )
        .fill(Point(75.0, 50.0), Color.from_hex("#9b59b6"))
        .fill(Point(60.0, 50.0), css_colours.BABY_BLUE)
        .fill(Point(90.0, 50.0), css_colours.ALIZARIN_CRIMSON)
        .render_many(
            [left, right],
            CurveRenderSettings(css_colours.BLACK, Thickness.relative(0.6), 900, RoundAntiAliased(2.0)),
        )
    )


# ============================================================================
# ROSE (animation)
# ============================================================================

def _rose_rule(coefficient: float, t: float) -> Point:
    r = math.cos(coefficient * t)
    return Point(r * math.cos(t), r * math.sin(t))


def rose_frame(base: Screen, timestamp: float, frame: int, length: float) -> Screen:
    rose = ParametricCurve(partial(_rose_rule, timestamp), (0.0, 2.0 * math.pi))
    return (
        base.copy()
        .render(
            rose,
            CurveRenderSettings(css_colours.BLACK, Thickness.relative(0.022), 4000, RoundAntiAliased(1.0)),
        )
        .render(
            Circle(1.1),
            CurveRenderSettings(css_colours.BLACK, Thickness.relative(0.007), 2500, RoundAntiAliased(1.0)),
        )
    )


# ============================================================================
# TRIG (animation)
# ============================================================================

SINE = Color.from_hex("#4cd137")
COSINE = Color.from_hex("#9c88ff")
OFF_WHITE = Color.from_hex("#f5f6fa")


def trig_frame(base: Screen, timestamp: float, frame: int, length: float) -> Screen:
    angle = math.pi / 2.0 * timestamp
    cos, sin = math.cos(angle), math.sin(angle)
    tip = Point(cos, sin)

    line = Thickness.relative(0.022)
    line_style = RoundAntiAliased(2.0)
    point_style = RoundAntiAliased(10.0)

    screen = (
        base.copy()
        .render(Circle(1.0), CurveRenderSettings(Color(240, 240, 240), line, 800, line_style))
        .render(
            CartesianPlane(Point(-1.6, -1.6), Point(1.6, 1.6), Point.origin(), 0.13, 0.13),
            CartesianPlaneRenderSettings(css_colours.WHITE, line, 100),
        )
        .render(LineSegment(Point(cos, 0.0), tip), CurveRenderSettings(SINE, line, 100, line_style))
        .render(LineSegment(Point(0.0, sin), tip), CurveRenderSettings(COSINE, line, 100, line_style))
        .render(LineSegment(Point.origin(), tip), CurveRenderSettings(OFF_WHITE, line, 100, line_style))
    )

    # The tangent meets the x axis at sec(angle), which runs off to infinity
    # as cos → 0; only draw it while it stays near the screen
    if abs(cos) > 0.25:
        secant = 1.0 / cos
        samples = min(int(abs(100.0 * math.tan(angle))) + 2, 1000)
        screen.render(
            LineSegment(tip, Point(secant, 0.0)),
            CurveRenderSettings(css_colours.ORANGE_PEEL, line, samples, line_style),
        )
        screen.render(
            DashedLine(Point(secant, -0.2), Point(secant, 0.2), 3),
            DashedLineRenderSettings(css_colours.ORANGE_PEEL, Thickness.relative(0.01), 40, line_style),
        )

    for point, colour in ((Point(cos, 0.0), SINE), (Point(0.0, sin), COSINE), (tip, OFF_WHITE)):
        screen.render(point, PointRenderSettings(colour, Thickness.relative(0.055), point_style))
    return screen


# ============================================================================
# REVEAL (video)
# ============================================================================

REVEAL_CURVE = BezierCurve((
    Point(-3.5, -1.5),
    Point(-2.0, 2.0),
    Point(0.0, -2.0),
    Point(2.0, 2.0),
    Point(3.5, -1.0),
))

REVEAL_MARKER = Polygon((Point(3.3, -1.4), Point(3.7, -1.4), Point(3.5, -1.0)))
REVEAL_HOLD = 1.0  # seconds the finished curve stays on screen


def reveal_frame(previous: Screen, timestamp: float, length: float) -> Screen:
    """Draw the visible fraction of REVEAL_CURVE, eased in and out."""
    progress = easy_ease(timestamp / length, EaseFn.tanh(3.0)) if length > 0 else 1.0
    visible = REVEAL_CURVE.with_domain(0.0, progress)
    previous.render_many(
        polyline(REVEAL_CURVE.control_points),
        CurveRenderSettings(css_colours.SLATE_GREY, Thickness.absolute(1), 200),
    )
    samples = max(2, int(1500 * progress))
    previous.render(
        visible,
        CurveRenderSettings(css_colours.MIDNIGHT_BLUE, Thickness.relative(0.05), samples, RoundAntiAliased(2.0)),
    )
    if progress > 0.99:
        previous.render(
            REVEAL_MARKER,
            PolygonRenderSettings(
                sides=PolygonSidesRenderSettings(css_colours.BLACK, Thickness.relative(0.02), 60, RoundAliased()),
                fill=PolygonFillRenderSettings(css_colours.GOLD),
            ),
        )
    return previous


# ============================================================================
# REGISTRY
# ============================================================================

def complex_cube(point: Point) -> Point:
    """z ↦ z³ on the complex plane."""
    x, y = point.x, point.y
    return Point(x ** 3 - 3.0 * x * y ** 2, 3.0 * x ** 2 * y - y ** 3)


@dataclass(frozen=True)
class RenderRequest:
    """Everything a scene runner needs besides its own drawing code.

    ``options`` holds the pipeline keywords (image_format, max_workers,
    executor, filename_pattern) and is forwarded to animate()/Video.animate().
    """

    base: Screen
    duration: float
    frame_rate: int
    output_dir: Path
    options: dict = field(default_factory=dict)

    @property
    def image_format(self) -> str:
        return self.options.get("image_format", "png")


def _still(screen: Screen, request: RenderRequest, name: str) -> AnimationResult:
    path = ENCODERS[request.image_format](screen, request.output_dir, name)
    logger.info(f"Wrote {path}")
    return AnimationResult(screen, 1, [path], request.frame_rate)


def _standalone(generator, request: RenderRequest) -> AnimationResult:
    # Standalone frames are independent, so the base Screen stands in for
    # the final frame (only its resolution ends up in the manifest)
    paths = animate(
        partial(generator, request.base),
        request.duration,
        request.frame_rate,
        request.output_dir,
        **request.options,
    )
    return AnimationResult(request.base, len(paths), paths, request.frame_rate)


def _run_venn(request: RenderRequest) -> AnimationResult:
    return _still(venn(request.base), request, "venn-diagram")


def _run_rose(request: RenderRequest) -> AnimationResult:
    return _standalone(rose_frame, request)


def _run_trig(request: RenderRequest) -> AnimationResult:
    return _standalone(trig_frame, request)


def _run_reveal(request: RenderRequest) -> AnimationResult:
    hold = min(REVEAL_HOLD, request.duration)
    video = Video([
        Scene(reveal_frame, request.duration - hold),
        Scene(placeholder, hold),
    ])
    return video.animate(request.base, request.frame_rate, request.output_dir, **request.options)


def _run_vector_field(request: RenderRequest) -> AnimationResult:
    points = vector_field.rectangular_point_array(Point(-8.0, -4.5), Point(8.0, 4.5), 17, 9)
    style = vector_field.VectorFieldStyle(
        background=request.base.pixel(0, 0),
        axis_colour=Color(240, 240, 240),
        horizontal_resolution=request.base.horizontal_resolution,
    )
    return _still(vector_field.draw(complex_cube, points, style), request, "vector-field")


@dataclass(frozen=True)
class ExampleScene:
    """A runnable example: default bounds/duration plus its runner."""

    name: str
    bounds: Bounds
    duration: float
    animated: bool
    run: Callable[[RenderRequest], AnimationResult]


SCENES = {
    scene.name: scene
    for scene in (
        ExampleScene("venn", ((0.0, 0.0), (150.0, 100.0)), 0.0, False, _run_venn),
        ExampleScene("rose", ((-2.666, -1.5), (2.666, 1.5)), 8.0, True, _run_rose),
        ExampleScene("trig", ((-3.555, -2.0), (3.555, 2.0)), 4.0, True, _run_trig),
        ExampleScene("reveal", ((-4.0, -2.25), (4.0, 2.25)), 4.0, True, _run_reveal),
        # draw() derives its own bounds from the sample grid
        ExampleScene("vector_field", ((-9.0, -5.5), (9.0, 5.5)), 0.0, False, _run_vector_field),
    )
}
