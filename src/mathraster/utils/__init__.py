"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Checked numeric narrowing (conversions)
    - Colors, interpolation and palettes (color)
    - Output paths, atomic I/O and YAML (fs)
    - Config validation (validators)
    - Profiling (profiler)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers (geometry, rendering,
animation, plots) at import time.

Convenience imports:
    from mathraster.utils import fs, color, validators
    from mathraster.utils.logging_config import setup_logging, get_logger
"""

from . import color
from . import conversions
from . import fs
from . import logging_config
from . import profiler
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'color',
    'conversions',
    'fs',
    'logging_config',
    'profiler',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]
