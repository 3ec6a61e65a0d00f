"""Animation: concurrent frame pipeline and timing helpers.

Convenience imports:
    from mathraster.animation import Scene, Video, animate, placeholder
"""

from .easing import EaseFn, easy_ease
from .pipeline import (
    FRAME_PATTERN,
    AnimationResult,
    PipelineOptions,
    Scene,
    Video,
    animate,
    frame_filename,
    frame_schedule,
    placeholder,
    write_manifest,
)

__all__ = [
    'animate',
    'Scene',
    'Video',
    'AnimationResult',
    'PipelineOptions',
    'placeholder',
    'frame_schedule',
    'frame_filename',
    'FRAME_PATTERN',
    'write_manifest',
    'EaseFn',
    'easy_ease',
]
