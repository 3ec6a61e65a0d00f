"""Output path validation, atomic file writes and YAML handling.

Provides:
    - validate_output_dir(): fail fast if the frame folder is missing
    - generate_file_path(): folder + filename + extension, validated
    - atomic_write_bytes(): tmp file → fsync → rename (prevents partial reads)
    - YAML load/save for render-job configs and frame manifests
    - list_frames(): sorted frame files of an output folder

Frames are written concurrently by the animation pipeline into one shared
folder. Filenames are disjoint, and each write goes through a tmp file in
the same directory so a reader (e.g. ffmpeg watching the folder) never sees
a half-written frame.

Errors are reported as typed OutputErrors so callers can tell creation
failures (permissions, missing folder) from write failures (disk full).

All paths use pathlib.Path.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from mathraster.errors import FileCreationError, FileWriteError, InvalidDirectoryError


def ensure_dir(p: Union[str, Path]) -> Path:
    """Create directory if it doesn't exist, return Path object.

    Parameters
    ----------
    p : Union[str, Path]
        Directory path

    Returns
    -------
    Path
        Path object (guaranteed to exist)
    """
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def validate_output_dir(folder: Union[str, Path]) -> Path:
    """Check that ``folder`` is an existing directory.

    Parameters
    ----------
    folder : Union[str, Path]
        Output folder. An empty string means the current directory.

    Returns
    -------
    Path
        The folder as a Path

    Raises
    ------
    InvalidDirectoryError
        If the path does not exist or is not a directory
    """
    path = Path(folder) if str(folder) else Path(".")
    if not path.is_dir():
        raise InvalidDirectoryError(folder)
    return path


def generate_file_path(
    folder: Union[str, Path],
    filename: str,
    extension: str
) -> Path:
    """Build ``folder/filename.extension`` after validating the folder.

    Raises
    ------
    InvalidDirectoryError
        If ``folder`` is not an existing directory
    """
    return validate_output_dir(folder) / f"{filename}.{extension}"


def atomic_write_bytes(
    path: Union[str, Path],
    data: bytes,
    tmp_suffix: str = ".tmp"
) -> None:
    """Write bytes to file atomically (tmp → fsync → rename).

    Parameters
    ----------
    path : Union[str, Path]
        Target file path (parent must exist)
    data : bytes
        Data to write
    tmp_suffix : str
        Temporary file suffix, default ".tmp"

    Raises
    ------
    FileCreationError
        If the temporary file cannot be opened
    FileWriteError
        If writing, syncing or renaming fails

    Notes
    -----
    Uses same directory for tmp file to ensure atomic rename on same filesystem.
    """
    path = Path(path)
    tmp_path = path.with_name(path.name + tmp_suffix)

    try:
        f = open(tmp_path, 'wb')
    except OSError as e:
        raise FileCreationError(path, e) from e

    try:
        with f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    except OSError as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise FileWriteError(path, e) from e


def atomic_write_text(
    path: Union[str, Path],
    text: str,
    encoding: str = "utf-8"
) -> None:
    """Write text to file atomically (wrapper around atomic_write_bytes)."""
    atomic_write_bytes(path, text.encode(encoding))


def atomic_yaml_dump(obj: Any, path: Union[str, Path]) -> None:
    """Save object as YAML atomically.

    Parameters
    ----------
    obj : Any
        Python object (dict, list, primitives)
    path : Union[str, Path]
        Target YAML file path

    Notes
    -----
    Uses PyYAML safe_dump; key order is preserved.
    """
    yaml_str = yaml.safe_dump(
        obj,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True
    )
    atomic_write_text(path, yaml_str)


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Load YAML file safely.

    Parameters
    ----------
    path : Union[str, Path]
        YAML file path

    Returns
    -------
    Dict[str, Any]
        Parsed YAML content (empty dict for an empty file)

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    yaml.YAMLError
        If YAML parsing fails
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e


def list_frames(folder: Union[str, Path], extension: str = "png") -> List[Path]:
    """List frame files in ``folder`` sorted by filename.

    Frame names are zero-padded, so lexical order is frame order.
    Temporary files left by an interrupted write are ignored.
    """
    folder = validate_output_dir(folder)
    return sorted(
        p for p in folder.iterdir()
        if p.is_file() and p.suffix == f".{extension}" and p.name.startswith("frame_")
    )
