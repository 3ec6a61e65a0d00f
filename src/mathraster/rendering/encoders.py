"""Serialize a Screen to BMP or PNG.

Provides:
    - bitmap_bytes(): 24-bit uncompressed BMP, byte-exact
    - rgb_rows(): (height, width, 3) uint8 array, top row first
    - png_bytes(): 8-bit RGB PNG via Pillow, fastest compression
    - write_bitmap() / write_png(): validate folder → encode → atomic write
    - ENCODERS: extension → writer, used by the frame pipeline

BMP layout (all integers little-endian)::

    offset  size  field
    0       2     "BM"
    2       4     file size = 54 + height * stride
    6       4     reserved (0)
    10      4     pixel data offset (54)
    14      4     info header size (40)
    18      4     width
    22      4     height (positive: rows stored bottom-up)
    26      2     colour planes (1)
    28      2     bits per pixel (24)
    30      4     compression (0 = none)
    34      4     raw image size (0, allowed for no compression)
    38      4     horizontal resolution (4000 px/m)
    42      4     vertical resolution (4000 px/m)
    46      4     palette colours (0)
    50      4     important colours (0)
    54      ...   rows bottom → top, pixels left → right as (B, G, R),
                  each row zero-padded to stride = ceil(3 * width / 4) * 4

The grid's y axis already grows upward, so grid column y=0 is the first BMP
row and the last PNG row.

Both encoders are pure functions of the pixel grid: same grid, same bytes.
"""

import io
import logging
import struct
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, Union

import numpy as np
from PIL import Image

from mathraster.errors import EncodingError
from mathraster.utils import fs

if TYPE_CHECKING:
    from mathraster.rendering.screen import Screen

logger = logging.getLogger(__name__)

BMP_HEADER_SIZE = 54
BMP_INFO_HEADER_SIZE = 40
BMP_PIXELS_PER_METRE = 4000
PNG_COMPRESS_LEVEL = 1

_FILE_HEADER = struct.Struct("<2sIHHI")
_INFO_HEADER = struct.Struct("<IiiHHIIiiII")


def bmp_row_stride(width: int) -> int:
    """Bytes per BMP row: 3 per pixel rounded up to a multiple of 4."""
    return 3 * width + (4 - (3 * width) % 4) % 4


def bitmap_bytes(screen: "Screen") -> bytes:
    """Encode as a 24-bit BMP.

    A 1x1 screen gives exactly 58 bytes (54 header + one 4-byte row).
    """
    width, height = screen.horizontal_resolution, screen.vertical_resolution
    stride = bmp_row_stride(width)
    file_size = BMP_HEADER_SIZE + height * stride

    header = _FILE_HEADER.pack(b"BM", file_size, 0, 0, BMP_HEADER_SIZE)
    info = _INFO_HEADER.pack(
        BMP_INFO_HEADER_SIZE,
        width,
        height,
        1,
        24,
        0,
        0,
        BMP_PIXELS_PER_METRE,
        BMP_PIXELS_PER_METRE,
        0,
        0,
    )

    # (W, H, RGB) → (H, W, BGR); row 0 is the bottom row
    rows = screen.pixels.transpose(1, 0, 2)[:, :, ::-1]
    padded = np.zeros((height, stride), dtype=np.uint8)
    padded[:, :3 * width] = rows.reshape(height, 3 * width)

    return header + info + padded.tobytes()


def rgb_rows(screen: "Screen") -> np.ndarray:
    """Pixel grid as an image array: (height, width, 3), top row first."""
    return np.ascontiguousarray(screen.pixels.transpose(1, 0, 2)[::-1])


def png_bytes(screen: "Screen") -> bytes:
    """Encode as an 8-bit RGB PNG (no alpha, no palette).

    Raises
    ------
    ValueError, OSError
        If Pillow rejects the pixel data
    """
    image = Image.fromarray(rgb_rows(screen))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG", compress_level=PNG_COMPRESS_LEVEL)
    return buffer.getvalue()


def _write(
    screen: "Screen",
    folder: Union[str, Path],
    filename: str,
    extension: str,
    encode: Callable[["Screen"], bytes],
) -> Path:
    path = fs.generate_file_path(folder, filename, extension)
    try:
        data = encode(screen)
    except (ValueError, OSError, struct.error) as e:
        raise EncodingError(path, e) from e
    fs.atomic_write_bytes(path, data)
    logger.debug(f"Wrote {path} ({len(data)} bytes)")
    return path


def write_bitmap(screen: "Screen", folder: Union[str, Path], filename: str) -> Path:
    """Write ``folder/filename.bmp`` and return its path.

    Raises
    ------
    InvalidDirectoryError
        If ``folder`` is not an existing directory
    EncodingError
        If the pixel data cannot be encoded
    FileCreationError, FileWriteError
        If the OS refuses the file or the write
    """
    return _write(screen, folder, filename, "bmp", bitmap_bytes)


def write_png(screen: "Screen", folder: Union[str, Path], filename: str) -> Path:
    """Write ``folder/filename.png`` and return its path (errors as write_bitmap)."""
    return _write(screen, folder, filename, "png", png_bytes)


ENCODERS: Dict[str, Callable[["Screen", Union[str, Path], str], Path]] = {
    "png": write_png,
    "bmp": write_bitmap,
}
