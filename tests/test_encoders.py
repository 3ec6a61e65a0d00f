"""Test BMP and PNG encoders.

Tests for mathraster.rendering.encoders:
    - BMP header fields and total size
    - 1x1 white screen encodes to exactly 58 bytes
    - Row padding to 4-byte multiples, bottom-up BGR rows
    - PNG decodes (Pillow) back to the same pixels, top row first
    - write_* raise InvalidDirectoryError / EncodingError

Run:
    pytest tests/test_encoders.py -v
"""

import io
import struct

import numpy as np
import pytest
from PIL import Image

from mathraster.errors import EncodingError, InvalidDirectoryError
from mathraster.geometry.point import Point
from mathraster.rendering import encoders
from mathraster.rendering.screen import Screen
from mathraster.utils.color import Color, css_colours


def _screen(width: int, height: int, background: Color = css_colours.WHITE) -> Screen:
    return Screen(width, height, Point(0.0, 0.0), Point(float(width), float(height)), background)


# ============================================================================
# BMP
# ============================================================================

@pytest.mark.parametrize("width,stride", [(1, 4), (2, 8), (3, 12), (4, 12), (5, 16)])
def test_row_stride(width, stride):
    assert encoders.bmp_row_stride(width) == stride


def test_one_pixel_white_bmp():
    data = encoders.bitmap_bytes(_screen(1, 1))
    assert len(data) == 58
    assert data[:2] == b"BM"
    assert data[54:] == b"\xff\xff\xff\x00"


def test_bmp_header_fields():
    data = encoders.bitmap_bytes(_screen(3, 2))
    magic, size, r1, r2, offset = struct.unpack_from("<2sIHHI", data, 0)
    assert (magic, size, r1, r2, offset) == (b"BM", 54 + 2 * 12, 0, 0, 54)

    fields = struct.unpack_from("<IiiHHIIiiII", data, 14)
    assert fields == (40, 3, 2, 1, 24, 0, 0, 4000, 4000, 0, 0)
    assert len(data) == size


def test_bmp_pixel_order():
    """Rows bottom-up, pixels left-right, channels B, G, R."""
    screen = _screen(2, 2, css_colours.BLACK)
    screen.set_pixel(0, 0, Color(1, 2, 3))
    screen.set_pixel(1, 0, Color(4, 5, 6))
    screen.set_pixel(0, 1, Color(7, 8, 9))
    data = encoders.bitmap_bytes(screen)

    stride = 8
    bottom = data[54:54 + stride]
    top = data[54 + stride:54 + 2 * stride]
    assert bottom == bytes([3, 2, 1, 6, 5, 4, 0, 0])
    assert top == bytes([9, 8, 7, 0, 0, 0, 0, 0])


def test_bmp_decodes_with_pillow():
    screen = _screen(5, 3, css_colours.BLACK)
    screen.set_pixel(4, 2, Color(200, 100, 50))
    image = Image.open(io.BytesIO(encoders.bitmap_bytes(screen)))
    assert image.size == (5, 3)
    # Pillow's row 0 is the top row, i.e. grid y = 2
    assert image.convert("RGB").getpixel((4, 0)) == (200, 100, 50)


def test_encoding_is_deterministic():
    screen = _screen(7, 5, css_colours.SLATE_GREY)
    assert encoders.bitmap_bytes(screen) == encoders.bitmap_bytes(screen.copy())
    assert encoders.png_bytes(screen) == encoders.png_bytes(screen.copy())


# ============================================================================
# PNG
# ============================================================================

def test_png_roundtrip_pixels():
    rng = np.random.default_rng(7)
    screen = _screen(6, 4)
    screen.pixels[...] = rng.integers(0, 256, size=(6, 4, 3), dtype=np.uint8)

    image = Image.open(io.BytesIO(encoders.png_bytes(screen)))
    assert image.mode == "RGB"
    assert image.size == (6, 4)
    decoded = np.asarray(image)
    np.testing.assert_array_equal(decoded, encoders.rgb_rows(screen))
    # Top-left of the image is grid (0, height - 1)
    assert tuple(decoded[0, 0]) == tuple(screen.pixels[0, 3])


# ============================================================================
# WRITERS
# ============================================================================

def test_write_bitmap(tmp_path):
    path = encoders.write_bitmap(_screen(1, 1), tmp_path, "white")
    assert path == tmp_path / "white.bmp"
    assert path.stat().st_size == 58


def test_write_png(tmp_path):
    path = encoders.write_png(_screen(3, 3), tmp_path, "frame_00000000")
    assert path.name == "frame_00000000.png"
    with Image.open(path) as image:
        assert image.size == (3, 3)


def test_write_to_missing_folder(tmp_path):
    with pytest.raises(InvalidDirectoryError):
        encoders.write_png(_screen(1, 1), tmp_path / "missing", "x")
    assert not (tmp_path / "missing").exists()


def test_encoder_failure_wrapped(tmp_path, monkeypatch):
    def broken(screen):
        raise ValueError("bad pixel data")

    monkeypatch.setattr(encoders, "png_bytes", broken)
    with pytest.raises(EncodingError) as excinfo:
        encoders._write(_screen(1, 1), tmp_path, "x", "png", encoders.png_bytes)
    assert isinstance(excinfo.value.cause, ValueError)
    assert not (tmp_path / "x.png").exists()


def test_encoders_registry():
    assert set(encoders.ENCODERS) == {"png", "bmp"}
