"""Typed, recoverable errors raised by file-writing operations.

Hierarchy:
    OutputError
    ├── InvalidDirectoryError   target folder is not an existing directory
    ├── FileCreationError       OS refused to create the file
    ├── FileWriteError          OS failed while writing/flushing/renaming
    └── EncodingError           raster encoder rejected the pixel stream
    FrameRenderError            a frame unit of the animation pipeline failed

These propagate to the immediate caller and are never retried. Contract
violations (bad geometry, bad settings, numeric overflow) are not part of
this hierarchy: they surface as ValueError / TypeError / ConversionError.

This module is a leaf: it imports nothing from the package.
"""

from pathlib import Path
from typing import Optional, Union


class OutputError(Exception):
    """Base class for failures while producing an output file."""

    def __init__(self, path: Union[str, Path], cause: Optional[BaseException] = None):
        self.path = Path(path)
        self.cause = cause
        super().__init__(self._message())

    def __reduce__(self):
        # Frame units may run in worker processes; keep (path, cause) on unpickle
        return (self.__class__, (self.path, self.cause))

    def _message(self) -> str:
        return f"Output error for \"{self.path}\""

    def _os_suffix(self) -> str:
        errno = getattr(self.cause, "errno", None)
        return f". OS error {errno}" if errno is not None else ""


class InvalidDirectoryError(OutputError):
    """The output folder does not exist or is not a directory."""

    def _message(self) -> str:
        return f"Provided directory \"{self.path}\" is invalid."


class FileCreationError(OutputError):
    """The output file could not be created."""

    def _message(self) -> str:
        return f"Could not create file at \"{self.path}\"{self._os_suffix()}"


class FileWriteError(OutputError):
    """The output file was created but could not be written."""

    def _message(self) -> str:
        return f"Could not write to file at \"{self.path}\"{self._os_suffix()}"


class EncodingError(OutputError):
    """The image encoder rejected the pixel data."""

    def _message(self) -> str:
        return f"Image encoding error for \"{self.path}\": {self.cause}"


class FrameRenderError(Exception):
    """A frame unit failed inside the animation pipeline.

    Attributes
    ----------
    frame_number : int
        Global (cross-scene) number of the failed frame
    cause : BaseException
        The exception raised inside the unit
    """

    def __init__(self, frame_number: int, cause: BaseException):
        self.frame_number = frame_number
        self.cause = cause
        super().__init__(f"Frame {frame_number} failed: {cause}")

    def __reduce__(self):
        return (self.__class__, (self.frame_number, self.cause))
