"""Concurrent frame pipeline: generators → Screens → numbered image files.

Provides:
    - frame_schedule(): (frame_index, timestamp) pairs for a duration and rate
    - frame_filename(): zero-padded, fixed-width frame names
    - animate(): standalone animation, generator(timestamp, index, length)
    - Scene / Video: chained scenes, generator(previous, timestamp, length)
    - placeholder(): generator that holds the previous scene's last frame
    - write_manifest(): YAML summary of a run next to the frames

Model:
    One frame unit per output frame = copy initial Screen → call generator →
    encode → atomic write. Units share nothing mutable and run concurrently
    on a concurrent.futures executor. Output order is carried by the frame
    number in the filename, not by completion order. The pipeline joins
    every unit before returning and keeps only the last frame's Screen,
    which seeds the next scene of a Video.

    Frame numbers continue across the scenes of a Video; each scene's
    timestamps restart at 0.

Failure policy (fail fast):
    The first failed unit cancels every unit that has not started yet;
    units already running are allowed to finish. The pipeline then raises
    FrameRenderError for the lowest-numbered failed frame, chained from the
    original exception. Every failure is logged at ERROR.

Executors:
    "thread" (default) works with closures and lambdas. "process" sidesteps
    the GIL but needs picklable (module-level) generators.
"""

import logging
import math
from concurrent.futures import FIRST_EXCEPTION, ProcessPoolExecutor, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from mathraster.errors import FrameRenderError
from mathraster.rendering.encoders import ENCODERS
from mathraster.rendering.screen import Screen
from mathraster.utils import fs
from mathraster.utils.conversions import to_u32
from mathraster.utils.logging_config import pop_context, push_context
from mathraster.utils.profiler import TimerAccumulator, timer

logger = logging.getLogger(__name__)

FRAME_PATTERN = "frame_{:08d}"
MANIFEST_NAME = "manifest.yaml"

StandaloneGenerator = Callable[[float, int, float], Screen]
SceneGenerator = Callable[[Screen, float, float], Screen]


# ============================================================================
# SCHEDULING
# ============================================================================

def _check_frame_rate(frame_rate) -> None:
    if isinstance(frame_rate, bool) or not isinstance(frame_rate, int) or frame_rate < 1:
        raise ValueError(f"frame_rate must be an int >= 1, got {frame_rate!r}")


def frame_schedule(duration: float, frame_rate: int) -> List[Tuple[int, float]]:
    """Frame indices and their timestamps.

    Parameters
    ----------
    duration : float
        Seconds, >= 0
    frame_rate : int
        Frames per second, >= 1

    Returns
    -------
    List[Tuple[int, float]]
        ``(i, i / frame_rate)`` for ``i in range(round(duration * frame_rate))``

    Raises
    ------
    ValueError
        If duration or frame_rate is out of range
    ConversionError
        If the frame count does not fit in 32 bits
    """
    _check_frame_rate(frame_rate)
    if not math.isfinite(duration) or duration < 0:
        raise ValueError(f"duration must be finite and >= 0, got {duration}")
    count = to_u32(duration * frame_rate)
    return [(i, i / frame_rate) for i in range(count)]


def frame_filename(number: int, pattern: str = FRAME_PATTERN) -> str:
    return pattern.format(number)


@dataclass(frozen=True)
class PipelineOptions:
    """Keyword options accepted by animate(), Scene.animate(), Video.animate()."""

    image_format: str = "png"
    max_workers: Optional[int] = None
    executor: str = "thread"
    filename_pattern: str = FRAME_PATTERN

    def __post_init__(self) -> None:
        if self.image_format not in ENCODERS:
            raise ValueError(f"image_format must be one of {sorted(ENCODERS)}, got '{self.image_format}'")
        if self.executor not in ("thread", "process"):
            raise ValueError(f"executor must be 'thread' or 'process', got '{self.executor}'")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

    def make_executor(self):
        if self.executor == "process":
            return ProcessPoolExecutor(max_workers=self.max_workers)
        return ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="frame")


@dataclass
class AnimationResult:
    """Outcome of a Scene or Video run.

    Attributes
    ----------
    final_screen : Screen
        Last rendered frame (the initial Screen if no frames were rendered)
    frame_count : int
        Frames written by this run
    paths : List[Path]
        Written files in frame order
    frame_rate : int
        Frames per second the run was scheduled at
    """

    final_screen: Screen
    frame_count: int
    paths: List[Path] = field(default_factory=list)
    frame_rate: int = 0


# ============================================================================
# FRAME UNITS
# ============================================================================
# Module-level so the process executor can pickle them. Each returns
# (screen or None, path, elapsed seconds); only the last unit keeps its Screen.

def _write_frame(screen: Screen, number: int, folder: Path, options: PipelineOptions) -> Path:
    return ENCODERS[options.image_format](
        screen, folder, frame_filename(number, options.filename_pattern)
    )


def _standalone_unit(
    generator: StandaloneGenerator,
    index: int,
    timestamp: float,
    length: float,
    number: int,
    folder: Path,
    options: PipelineOptions,
    keep: bool,
):
    timings = {}
    push_context(frame=number)
    try:
        with timer("frame", sink=timings.__setitem__):
            screen = generator(timestamp, index, length)
            path = _write_frame(screen, number, folder, options)
        logger.debug(f"Frame {number} done in {timings['frame']:.3f} s")
    finally:
        pop_context(["frame"])
    return (screen if keep else None), path, timings["frame"]


def _scene_unit(
    generator: SceneGenerator,
    init: Screen,
    timestamp: float,
    length: float,
    number: int,
    folder: Path,
    options: PipelineOptions,
    keep: bool,
):
    timings = {}
    push_context(frame=number)
    try:
        with timer("frame", sink=timings.__setitem__):
            screen = generator(init.copy(), timestamp, length)
            path = _write_frame(screen, number, folder, options)
        logger.debug(f"Frame {number} done in {timings['frame']:.3f} s")
    finally:
        pop_context(["frame"])
    return (screen if keep else None), path, timings["frame"]


def _run_units(
    unit: Callable,
    jobs: Sequence[Tuple[int, tuple]],
    options: PipelineOptions,
    frame_timer: TimerAccumulator,
) -> List[Tuple[Optional[Screen], Path]]:
    """Run frame units concurrently; return (screen, path) in job order.

    Raises
    ------
    FrameRenderError
        For the lowest-numbered failed frame, after every running unit ends
    """
    with options.make_executor() as pool:
        futures = [(number, pool.submit(unit, *args)) for number, args in jobs]
        _, pending = wait([f for _, f in futures], return_when=FIRST_EXCEPTION)
        if pending:
            cancelled = sum(f.cancel() for f in pending)
            if cancelled:
                logger.warning(f"Frame unit failed; cancelled {cancelled} pending frames")
        wait([f for _, f in futures])

    failures = []
    results = []
    for number, future in futures:
        if future.cancelled():
            continue
        error = future.exception()
        if error is not None:
            logger.error(f"Frame {number} failed: {type(error).__name__}: {error}")
            failures.append((number, error))
            continue
        screen, path, elapsed = future.result()
        frame_timer.add(elapsed)
        results.append((screen, path))

    if failures:
        number, error = min(failures, key=lambda item: item[0])
        raise FrameRenderError(number, error) from error
    return results


# ============================================================================
# STANDALONE ANIMATION
# ============================================================================

def animate(
    generator: StandaloneGenerator,
    duration: float,
    frame_rate: int,
    output_folder: Union[str, Path],
    **options,
) -> List[Path]:
    """Render ``duration * frame_rate`` independent frames.

    Parameters
    ----------
    generator : Callable[[float, int, float], Screen]
        ``generator(timestamp, frame_index, duration)`` → Screen
    duration : float
        Seconds
    frame_rate : int
        Frames per second
    output_folder : Union[str, Path]
        Existing directory for the numbered frames
    **options
        image_format, max_workers, executor, filename_pattern

    Returns
    -------
    List[Path]
        Written files in frame order

    Raises
    ------
    InvalidDirectoryError
        Before any frame is scheduled, if the folder does not exist
    FrameRenderError
        If any frame unit fails
    """
    opts = PipelineOptions(**options)
    folder = fs.validate_output_dir(output_folder)
    schedule = frame_schedule(duration, frame_rate)
    logger.info(f"Animating {len(schedule)} frames ({duration} s @ {frame_rate} fps) → {folder}")

    frame_timer = TimerAccumulator("frame")
    jobs = [
        (index, (generator, index, timestamp, duration, index, folder, opts, False))
        for index, timestamp in schedule
    ]
    results = _run_units(_standalone_unit, jobs, opts, frame_timer)

    logger.info(f"Animation done: {len(results)} frames, mean {frame_timer.mean():.3f} s/frame")
    return [path for _, path in results]


# ============================================================================
# SCENES AND VIDEOS
# ============================================================================

def placeholder(init: Screen, timestamp: float, length: float) -> Screen:
    """Scene generator that holds the previous frame unchanged."""
    return init


@dataclass(frozen=True)
class Scene:
    """One segment of a Video.

    Attributes
    ----------
    generator : Callable[[Screen, float, float], Screen]
        ``generator(previous_screen, timestamp, length)`` → Screen, where
        previous_screen is a private copy of the previous scene's last frame
    length : float
        Seconds, >= 0
    """

    generator: SceneGenerator
    length: float

    def __post_init__(self) -> None:
        if not callable(self.generator):
            raise TypeError(f"Scene generator must be callable, got {type(self.generator).__name__}")
        if not math.isfinite(self.length) or self.length < 0:
            raise ValueError(f"Scene length must be finite and >= 0, got {self.length}")

    def animate(
        self,
        init: Screen,
        frame_rate: int,
        output_folder: Union[str, Path],
        **options,
    ) -> AnimationResult:
        """Render this scene alone, numbering frames from 0."""
        return Video([self]).animate(init, frame_rate, output_folder, **options)


def _animate_scene(
    scene: Scene,
    init: Screen,
    frame_rate: int,
    first_number: int,
    folder: Path,
    opts: PipelineOptions,
) -> Tuple[Screen, List[Path]]:
    schedule = frame_schedule(scene.length, frame_rate)
    if not schedule:
        logger.info("Scene has no frames; passing initial screen through")
        return init, []

    last = len(schedule) - 1
    jobs = [
        (
            first_number + index,
            (scene.generator, init, timestamp, scene.length, first_number + index, folder, opts, index == last),
        )
        for index, timestamp in schedule
    ]
    frame_timer = TimerAccumulator("frame")
    results = _run_units(_scene_unit, jobs, opts, frame_timer)
    logger.info(
        f"Scene done: frames {first_number}..{first_number + last}, "
        f"mean {frame_timer.mean():.3f} s/frame"
    )
    return results[-1][0], [path for _, path in results]


class Video:
    """Scenes rendered in sequence, each seeded by the previous one's last frame."""

    def __init__(self, scenes: Sequence[Scene]):
        scenes = list(scenes)
        for scene in scenes:
            if not isinstance(scene, Scene):
                raise TypeError(f"Video expects Scene objects, got {type(scene).__name__}")
        self.scenes = scenes

    def __len__(self) -> int:
        return len(self.scenes)

    def animate(
        self,
        init: Screen,
        frame_rate: int,
        output_folder: Union[str, Path],
        **options,
    ) -> AnimationResult:
        """Render every scene; frame numbers continue across scenes.

        Parameters
        ----------
        init : Screen
            Initial state passed (as a copy) to the first scene's frames
        frame_rate : int
            Frames per second for every scene
        output_folder : Union[str, Path]
            Existing directory for the numbered frames
        **options
            image_format, max_workers, executor, filename_pattern

        Returns
        -------
        AnimationResult

        Raises
        ------
        InvalidDirectoryError
            Before any frame is scheduled, if the folder does not exist
        FrameRenderError
            If any frame unit fails; later scenes are not started
        """
        opts = PipelineOptions(**options)
        folder = fs.validate_output_dir(output_folder)
        _check_frame_rate(frame_rate)

        logger.info(f"Video: {len(self.scenes)} scenes @ {frame_rate} fps → {folder}")
        screen = init
        paths: List[Path] = []
        for scene_number, scene in enumerate(self.scenes):
            push_context(scene=scene_number)
            try:
                screen, scene_paths = _animate_scene(
                    scene, screen, frame_rate, len(paths), folder, opts
                )
            finally:
                pop_context(["scene"])
            paths.extend(scene_paths)

        logger.info(f"Video done: {len(paths)} frames")
        return AnimationResult(screen, len(paths), paths, frame_rate)


def write_manifest(folder: Union[str, Path], result: AnimationResult) -> Path:
    """Write ``manifest.yaml`` describing ``result`` into ``folder``.

    The manifest lists frame files by name, in order, so that an encoder
    step (e.g. ffmpeg concat) can pick them up without globbing.
    """
    folder = fs.validate_output_dir(folder)
    path = folder / MANIFEST_NAME
    fs.atomic_yaml_dump(
        {
            "schema": "frame_manifest.v1",
            "frame_rate": result.frame_rate,
            "frame_count": result.frame_count,
            "resolution": list(result.final_screen.resolution),
            "files": [p.name for p in result.paths],
        },
        path,
    )
    logger.info(f"Wrote manifest {path}")
    return path
