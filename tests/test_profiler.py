"""Test wall-clock profiling helpers.

Tests for mathraster.utils.profiler:
    - timer() with a sink and with DEBUG logging
    - TimerAccumulator mean, reset and concurrent add()
"""

import logging
import threading

import pytest

from mathraster.utils.profiler import TimerAccumulator, timer


def test_timer_sink():
    timings = {}
    with timer("encode", sink=timings.__setitem__):
        sum(range(1000))
    assert set(timings) == {"encode"}
    assert timings["encode"] >= 0.0


def test_timer_sink_runs_on_error():
    timings = {}
    with pytest.raises(RuntimeError):
        with timer("frame", sink=timings.__setitem__):
            raise RuntimeError("generator failed")
    assert "frame" in timings


def test_timer_logs_without_sink(caplog):
    with caplog.at_level(logging.DEBUG, logger="mathraster.utils.profiler"):
        with timer("png"):
            pass
    assert any(r.getMessage().startswith("png:") for r in caplog.records)


def test_accumulator_mean_and_reset():
    acc = TimerAccumulator("frame")
    assert acc.mean() == 0.0
    acc.add(0.5)
    acc.add(1.5)
    assert acc.count == 2
    assert acc.mean() == 1.0
    with acc.measure():
        pass
    assert acc.count == 3
    acc.reset()
    assert acc.count == 0
    assert acc.total_time == 0.0


def test_accumulator_concurrent_add():
    acc = TimerAccumulator("frame")

    def worker():
        for _ in range(1000):
            acc.add(0.001)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert acc.count == 8000
    assert acc.total_time == pytest.approx(8.0)
