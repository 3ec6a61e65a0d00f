"""Test logging configuration.

Tests for mathraster.utils.logging_config:
    - setup_logging() replaces its handlers on repeated calls
    - JSON lines in the log file carry context fields
    - Queue mode hands records to a listener
    - push_context()/pop_context() in the human layout
    - Formatter and rotation argument checks

Run:
    pytest tests/test_logging.py -v
"""

import json
import logging
import logging.handlers
import queue
import sys

import pytest

from mathraster.utils.logging_config import (
    ContextFormatter,
    pop_context,
    push_context,
    setup_logging,
)


def _record(msg="hello", level=logging.INFO):
    return logging.LogRecord("mathraster.test", level, __file__, 1, msg, None, None)


def _own_handlers(root):
    return [h for h in root.handlers if isinstance(h.formatter, ContextFormatter)]


def test_setup_logging_idempotent(clean_root):
    setup_logging("INFO", color=False)
    setup_logging("DEBUG", color=False)
    assert len(_own_handlers(clean_root)) == 1
    assert clean_root.level == logging.DEBUG


def test_json_file_output(clean_root, tmp_path):
    log_file = tmp_path / "logs" / "render.log"
    result = setup_logging(
        "INFO", str(log_file), json=True, to_stderr=False, context={"app": "test"}
    )
    logging.getLogger("mathraster.test").info("frame written")
    for handler in result["handlers"]:
        handler.flush()

    lines = log_file.read_text().strip().splitlines()
    entry = json.loads(lines[-1])
    assert entry["msg"] == "frame written"
    assert entry["lvl"] == "INFO"
    assert entry["app"] == "test"


def test_queue_mode(clean_root, tmp_path):
    log_file = tmp_path / "queued.log"
    result = setup_logging("INFO", str(log_file), to_stderr=False, queue=queue.Queue())
    assert isinstance(result["handlers"][0], logging.handlers.QueueHandler)
    logging.getLogger("mathraster.test").warning("from a worker")
    result["listener"].stop()
    assert "from a worker" in log_file.read_text()


def test_quiet_libs(clean_root):
    setup_logging("DEBUG", to_stderr=False, quiet_libs=["noisy.lib"])
    assert logging.getLogger("noisy.lib").level == logging.WARNING


def test_context_in_human_layout(clean_root):
    formatter = ContextFormatter("human", use_color=False)
    push_context(scene=2, frame=7)
    line = formatter.format(_record())
    assert "scene=2 frame=7 |" in line
    assert line.endswith("hello")

    pop_context(["frame"])
    line = formatter.format(_record())
    assert "scene=2 |" in line
    assert "frame=" not in line

    pop_context()
    assert "scene=" not in formatter.format(_record())


def test_exception_in_json_layout(clean_root):
    formatter = ContextFormatter("json")
    try:
        raise ValueError("bad frame")
    except ValueError:
        record = logging.LogRecord(
            "mathraster.test", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
        )
    entry = json.loads(formatter.format(record))
    assert "ValueError: bad frame" in entry["exc"]


def test_invalid_arguments(clean_root, tmp_path):
    with pytest.raises(ValueError):
        ContextFormatter("xml")
    with pytest.raises(ValueError):
        setup_logging(log_file=str(tmp_path / "x.log"), to_stderr=False, rotate={"mode": "weekly"})


def test_excepthook_logs_uncaught(clean_root, caplog):
    from mathraster.utils.logging_config import get_logger, install_excepthook

    install_excepthook()
    assert get_logger("mathraster.test").name == "mathraster.test"
    try:
        raise RuntimeError("unhandled")
    except RuntimeError:
        with caplog.at_level(logging.CRITICAL):
            sys.excepthook(*sys.exc_info())
    assert any(r.getMessage() == "Uncaught exception" for r in caplog.records)
