"""Shared pytest fixtures."""

import logging
import sys

import pytest

from mathraster.utils import logging_config


@pytest.fixture
def clean_root():
    """Restore the root logger, logging context and excepthook after the test."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    saved_hook = sys.excepthook
    logging_config._configured = False
    logging_config.pop_context()
    yield root
    for handler in list(root.handlers):
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)
    sys.excepthook = saved_hook
    logging_config._configured = False
    logging_config.pop_context()
