"""Render script: render job YAML → frames (or a still) + manifest.

Runs one built-in scene end to end:
    1. Load and validate the render job (render_job.v1)
    2. Configure logging from the job's logging section
    3. Build the blank base Screen (scene default bounds if the job has none)
    4. Render the scene through the frame pipeline
    5. Write manifest.yaml next to the output files

Structure:
    - render_main(job_config, ...) → dict
        * Callable function (used by tests and other scripts)
        * Returns: {scene, output_dir, frame_count, paths, manifest_path}
    - main(argv) → exit code, the ``mathraster-render`` console script

CLI:
    mathraster-render --config configs/render_job.v1.yaml
    mathraster-render --config configs/render_job.v1.yaml --scene trig \\
                      --output outputs/trig --duration 2 --log-level DEBUG

Exit codes:
    0  success
    1  invalid job, unwritable output or failed frame (logged at ERROR)
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from mathraster.animation.pipeline import write_manifest
from mathraster.errors import FrameRenderError, OutputError
from mathraster.scenes import SCENES, RenderRequest
from mathraster.utils import fs, validators
from mathraster.utils.logging_config import (
    install_excepthook,
    pop_context,
    push_context,
    setup_logging,
)

logger = logging.getLogger(__name__)


def render_main(
    job_config: str,
    output_dir: Optional[str] = None,
    scene: Optional[str] = None,
    duration: Optional[float] = None,
    log_level: Optional[str] = None,
    configure_logging: bool = True,
) -> Dict[str, Any]:
    """Render one scene as described by a render job.

    Parameters
    ----------
    job_config : str
        Path to a render_job.v1 YAML file
    output_dir : str, optional
        Overrides ``animation.output_dir``; created if missing
    scene : str, optional
        Overrides ``scene``
    duration : float, optional
        Overrides ``duration`` (seconds); ignored by still scenes
    log_level : str, optional
        Overrides ``logging.level``
    configure_logging : bool
        Call setup_logging() from the job's logging section, default True

    Returns
    -------
    Dict[str, Any]
        - scene: str
        - output_dir: str
        - frame_count: int
        - paths: List[str] (written images, frame order)
        - manifest_path: Optional[str]

    Raises
    ------
    FileNotFoundError
        If the job file is missing
    ValueError
        If the job or an override is invalid
    OutputError
        If the output folder or an image cannot be written
    FrameRenderError
        If a frame unit fails
    """
    job = validators.load_render_job(job_config)

    if configure_logging:
        setup_logging(
            log_level or job.logging.level,
            job.logging.file,
            json=job.logging.json_format,
            color=job.logging.color,
            context={"app": "render"},
        )

    scene_name = scene or job.scene
    if scene_name not in SCENES:
        raise ValueError(f"Unknown scene '{scene_name}', choose from {sorted(SCENES)}")
    example = SCENES[scene_name]

    if duration is None:
        duration = job.duration if job.duration is not None else example.duration
    if duration < 0:
        raise ValueError(f"duration must be >= 0, got {duration}")

    folder = fs.ensure_dir(output_dir or job.animation.output_dir)
    base = job.screen.to_screen(default_bounds=example.bounds)
    animation = job.animation
    request = RenderRequest(
        base=base,
        duration=duration,
        frame_rate=animation.frame_rate,
        output_dir=folder,
        options={
            "image_format": animation.image_format,
            "max_workers": animation.max_workers,
            "executor": animation.executor,
            "filename_pattern": animation.filename_pattern,
        },
    )

    push_context(example=scene_name)
    try:
        logger.info(
            f"Rendering '{scene_name}' at {base.horizontal_resolution}x{base.vertical_resolution}"
            + (f", {duration} s @ {animation.frame_rate} fps" if example.animated else "")
        )
        result = example.run(request)

        manifest_path = write_manifest(folder, result) if animation.write_manifest else None
        logger.info(f"Render complete: {result.frame_count} files in {folder}")
    finally:
        pop_context(["example"])

    return {
        'scene': scene_name,
        'output_dir': str(folder),
        'frame_count': result.frame_count,
        'paths': [str(p) for p in result.paths],
        'manifest_path': str(manifest_path) if manifest_path else None,
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render a built-in mathraster scene to numbered image files"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/render_job.v1.yaml",
        help="Path to render job config (render_job.v1)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        choices=sorted(SCENES),
        help="Scene to render (overrides the job)",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Output directory (overrides animation.output_dir)",
    )
    parser.add_argument(
        "--duration",
        type=float,
        help="Seconds to render (overrides the job / scene default)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=list(validators.LOG_LEVELS),
        help="Root log level (overrides logging.level)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    # Console logging until the job's own logging section is read
    setup_logging(args.log_level or "INFO", context={"app": "render"})
    install_excepthook()

    try:
        result = render_main(
            job_config=args.config,
            output_dir=args.output,
            scene=args.scene,
            duration=args.duration,
            log_level=args.log_level,
        )
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid render job: {e}")
        return 1
    except FrameRenderError as e:
        logger.error(f"Render failed at frame {e.frame_number}: {e.cause}")
        return 1
    except (OutputError, OSError) as e:
        logger.error(f"Cannot write output: {e}")
        return 1

    print("\n=== Render Complete ===")
    print(f"Scene: {result['scene']}")
    print(f"Files: {result['frame_count']} in {result['output_dir']}")
    if result['manifest_path']:
        print(f"Manifest: {result['manifest_path']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
