"""mathraster: software rasterizer for mathematical drawings and animations.

Maps a rectangle of the continuous plane onto a fixed pixel grid, stamps
points, curves and polygons onto it with square, round or anti-aliased
brushes, flood-fills regions, and renders animations frame by frame through
a concurrent pipeline into numbered BMP or PNG files.

Architecture layers (strict one-way dependency):
    cli / scenes → animation, plots → rendering → geometry → utils
    errors is a leaf imported from any layer

Key invariants:
    - Pixel grids are uint8 (width, height, 3) indexed [x, y], y up
    - Plane → pixel mapping rounds half away from zero
    - Every numeric narrowing is checked (ConversionError, never wraps)
    - Output files are written atomically; failures raise OutputError
    - YAML-only configs, validated by pydantic before any work starts
"""

__version__ = "0.4.0"
