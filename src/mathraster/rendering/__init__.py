"""Pixel side of the pipeline: canvas, coordinate mapping, rasterization, encoding.

Depends on mathraster.geometry and mathraster.utils only.

Convenience imports:
    from mathraster.rendering import Screen, Thickness, CurveRenderSettings, RoundAntiAliased
"""

from .coordinates import PixelCoordinate, in_bounds, to_pixel, to_point
from .encoders import ENCODERS, bitmap_bytes, png_bytes, write_bitmap, write_png
from .flood_fill import flood_fill
from .rasterizer import render, render_many
from .screen import AspectRatios, Screen, aspect_ratios, calculate_line_thickness
from .settings import (
    CartesianPlaneRenderSettings,
    CurveRenderSettings,
    DashedLineRenderSettings,
    PointRenderSettings,
    PolygonFillRenderSettings,
    PolygonRenderSettings,
    PolygonSidesRenderSettings,
    RoundAliased,
    RoundAntiAliased,
    Square,
    Thickness,
    VectorRenderSettings,
)

__all__ = [
    'Screen',
    'AspectRatios',
    'aspect_ratios',
    'calculate_line_thickness',
    'PixelCoordinate',
    'to_pixel',
    'to_point',
    'in_bounds',
    'render',
    'render_many',
    'flood_fill',
    'bitmap_bytes',
    'png_bytes',
    'write_bitmap',
    'write_png',
    'ENCODERS',
    'Square',
    'RoundAliased',
    'RoundAntiAliased',
    'Thickness',
    'PointRenderSettings',
    'CurveRenderSettings',
    'PolygonSidesRenderSettings',
    'PolygonFillRenderSettings',
    'PolygonRenderSettings',
    'VectorRenderSettings',
    'DashedLineRenderSettings',
    'CartesianPlaneRenderSettings',
]
