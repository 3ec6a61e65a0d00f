"""YAML schema validation and config loading.

Provides centralized validation for render-job configs using pydantic:
    - Screen section: resolution, plane bounds, background colour
    - Animation section: frame rate, output folder, image format, executor
    - Logging section: level, file, JSON mode
    - Job schema (render_job.v1.yaml): scene name + duration + the above

Every entry point loads configs through load_render_job() so that a bad
value fails before any frame is scheduled, with a message naming the
offending key.

Units:
    - Bounds: plane coordinates (unitless)
    - Resolution: pixels
    - Frame rate: frames per second

Usage:
    from mathraster.utils import validators

    job = validators.load_render_job("configs/render_job.v1.yaml")
    screen = job.screen.to_screen()
"""

from pathlib import Path
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mathraster.utils.color import Color

SCENE_NAMES = ("venn", "rose", "trig", "reveal", "vector_field")
IMAGE_FORMATS = ("png", "bmp")
EXECUTORS = ("thread", "process")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ============================================================================
# SCREEN
# ============================================================================

class ScreenConfig(BaseModel):
    """Canvas geometry: pixel grid plus the plane rectangle it shows."""
    horizontal_resolution: int = Field(..., ge=1, le=65535, description="Width (px)")
    vertical_resolution: int = Field(..., ge=1, le=65535, description="Height (px)")
    bottom_left: Optional[Tuple[float, float]] = Field(None, description="Plane (x, y) of pixel (0, 0); None = scene default")
    top_right: Optional[Tuple[float, float]] = Field(None, description="Plane (x, y) of the far corner; None = scene default")
    background: str = Field("#ffffff", description="Background colour as hex")

    @field_validator('background')
    @classmethod
    def validate_background(cls, v: str) -> str:
        Color.from_hex(v)
        return v

    @model_validator(mode='after')
    def validate_bounds(self) -> 'ScreenConfig':
        if (self.bottom_left is None) != (self.top_right is None):
            raise ValueError("Give both bottom_left and top_right, or neither")
        if self.bottom_left is None:
            return self
        if self.top_right[0] == self.bottom_left[0]:
            raise ValueError(f"Horizontal bounds span is zero (x = {self.bottom_left[0]})")
        if self.top_right[1] == self.bottom_left[1]:
            raise ValueError(f"Vertical bounds span is zero (y = {self.bottom_left[1]})")
        return self

    def to_screen(
        self,
        default_bounds: Optional[Tuple[Tuple[float, float], Tuple[float, float]]] = None,
    ):
        """Build a blank Screen from this config.

        Parameters
        ----------
        default_bounds : ((x0, y0), (x1, y1)), optional
            Used when the config leaves the bounds unset

        Raises
        ------
        ValueError
            If neither the config nor ``default_bounds`` gives bounds
        """
        # Imported here: utils must not import the rendering layer at load time
        from mathraster.geometry.point import Point
        from mathraster.rendering.screen import Screen

        if self.bottom_left is not None:
            bottom_left, top_right = self.bottom_left, self.top_right
        elif default_bounds is not None:
            bottom_left, top_right = default_bounds
        else:
            raise ValueError("Screen config has no bounds and no default was given")

        return Screen(
            self.horizontal_resolution,
            self.vertical_resolution,
            Point(*bottom_left),
            Point(*top_right),
            Color.from_hex(self.background),
        )


# ============================================================================
# ANIMATION
# ============================================================================

class AnimationConfig(BaseModel):
    """Frame pipeline options."""
    frame_rate: int = Field(30, ge=1, le=1000, description="Frames per second")
    output_dir: str = Field("outputs/frames", description="Folder for numbered frames")
    image_format: str = Field("png", description="png or bmp")
    max_workers: Optional[int] = Field(None, ge=1, description="Executor pool size (None = library default)")
    executor: str = Field("thread", description="thread or process")
    filename_pattern: str = Field("frame_{:08d}", description="str.format pattern taking the frame number")
    write_manifest: bool = Field(True, description="Write manifest.yaml next to the frames")

    @field_validator('image_format')
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in IMAGE_FORMATS:
            raise ValueError(f"image_format must be one of {list(IMAGE_FORMATS)}, got '{v}'")
        return v

    @field_validator('executor')
    @classmethod
    def validate_executor(cls, v: str) -> str:
        if v not in EXECUTORS:
            raise ValueError(f"executor must be one of {list(EXECUTORS)}, got '{v}'")
        return v

    @field_validator('filename_pattern')
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        try:
            first, second = v.format(0), v.format(1)
        except (IndexError, KeyError, ValueError) as e:
            raise ValueError(f"filename_pattern '{v}' cannot format a frame number: {e}") from e
        if first == second:
            raise ValueError(f"filename_pattern '{v}' does not include the frame number")
        return v


# ============================================================================
# LOGGING
# ============================================================================

class LoggingConfig(BaseModel):
    """Arguments forwarded to logging_config.setup_logging()."""
    level: str = Field("INFO", description="Root log level")
    file: Optional[str] = Field(None, description="Log file path (None = console only)")
    json_format: bool = Field(False, alias="json", description="JSON lines in the log file")
    color: bool = Field(True, description="ANSI colors on the console")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of {list(LOG_LEVELS)}, got '{v}'")
        return v


# ============================================================================
# RENDER JOB V1
# ============================================================================

class RenderJobV1(BaseModel):
    """Render job schema v1 (one scene, one output folder)."""
    schema_version: str = Field("render_job.v1", alias="schema", description="Schema version")
    scene: str = Field(..., description="Built-in scene name")
    duration: Optional[float] = Field(None, ge=0.0, description="Seconds (None = scene default)")
    screen: ScreenConfig
    animation: AnimationConfig = Field(default_factory=AnimationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "render_job.v1":
            raise ValueError(f"Expected schema 'render_job.v1', got '{v}'")
        return v

    @field_validator('scene')
    @classmethod
    def validate_scene(cls, v: str) -> str:
        if v not in SCENE_NAMES:
            raise ValueError(f"Scene must be one of {list(SCENE_NAMES)}, got '{v}'")
        return v


# ============================================================================
# PUBLIC API
# ============================================================================

def load_render_job(path: Union[str, Path]) -> RenderJobV1:
    """Load and validate a render job from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to render_job.v1.yaml file

    Returns
    -------
    RenderJobV1
        Validated job configuration

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (with actionable error message)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Render job not found: {path}")

    data = fs.load_yaml(path)
    try:
        return RenderJobV1(**data)
    except Exception as e:
        raise ValueError(f"Render job validation failed at {path}: {e}") from e
