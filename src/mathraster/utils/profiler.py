"""Lightweight wall-clock profiling.

Provides:
    - timer(): Context manager for one timing with optional sink
    - TimerAccumulator: mean time over many measurements

Used to measure:
    - Frame units (generate + encode) in the animation pipeline
    - Encoders (BMP / PNG) when profiling a single still

The pipeline feeds one TimerAccumulator from every worker thread of a scene,
so accumulation is guarded by a lock.
"""

import logging
import threading
import time
from contextlib import contextmanager
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@contextmanager
def timer(name: str, sink: Optional[Callable[[str, float], None]] = None):
    """Context manager for wall-clock timing.

    Parameters
    ----------
    name : str
        Timer name (for logging/display)
    sink : Optional[Callable[[str, float], None]]
        Optional callback(name, elapsed_seconds).
        If None, the timing is logged at DEBUG.

    Examples
    --------
    >>> with timer("encode_png"):
    ...     data = png_bytes(screen)

    >>> timings = {}
    >>> with timer("frame", sink=timings.__setitem__):
    ...     screen = generator(t, i, n)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if sink is not None:
            sink(name, elapsed)
        else:
            logger.debug(f"{name}: {elapsed:.3f} s")


class TimerAccumulator:
    """Accumulate multiple timing measurements for averaging.

    Attributes
    ----------
    name : str
        Timer name
    total_time : float
        Accumulated time in seconds
    count : int
        Number of measurements

    Examples
    --------
    >>> frame_timer = TimerAccumulator("frame")
    >>> for i, t in frame_schedule(2.0, 30):
    ...     with frame_timer.measure():
    ...         render_frame(i, t)
    >>> print(f"Mean: {frame_timer.mean():.4f} s")
    """

    def __init__(self, name: str):
        self.name = name
        self.total_time = 0.0
        self.count = 0
        self._lock = threading.Lock()

    @contextmanager
    def measure(self):
        """Context manager to measure and accumulate time."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.add(time.perf_counter() - start)

    def add(self, elapsed: float) -> None:
        """Record one externally measured duration (seconds)."""
        with self._lock:
            self.total_time += elapsed
            self.count += 1

    def mean(self) -> float:
        """Mean time per measurement in seconds, or 0.0 if none."""
        with self._lock:
            return self.total_time / self.count if self.count > 0 else 0.0

    def reset(self) -> None:
        """Reset accumulated data."""
        with self._lock:
            self.total_time = 0.0
            self.count = 0

    def __repr__(self) -> str:
        return f"TimerAccumulator({self.name}, mean={self.mean():.4f}s, count={self.count})"
