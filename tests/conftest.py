import io
import struct

import pytest
from PIL import Image

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


def build_bmp(stored_rows, bit_depth=24, width=None, height=None, offset=54):
    """Assemble a 24-bit BMP from rows of (r, g, b) tuples given in file (bottom-up) order."""
    row_len = len(stored_rows[0]) if stored_rows else 0
    width = row_len if width is None else width
    height = len(stored_rows) if height is None else height
    stride = (row_len * 3 + 3) // 4 * 4

    pixel_data = b""
    for row in stored_rows:
        raw = b"".join(bytes((b, g, r)) for r, g, b in row)
        pixel_data += raw + b"\x00" * (stride - len(raw))

    file_header = struct.pack("<2sIHHI", b"BM", offset + len(pixel_data), 0, 0, offset)
    info_header = struct.pack("<IiiHHIIiiII", 40, width, height, 1, bit_depth, 0, len(pixel_data), 2835, 2835, 0, 0)
    return file_header + info_header + b"\x00" * (offset - 54) + pixel_data


def encode_image(image: Image.Image, fmt: str, **params) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format=fmt, **params)
    return buf.getvalue()


@pytest.fixture
def make_bmp():
    return build_bmp


@pytest.fixture
def black_bmp():
    """A 2x5 all-black bitmap; at width 1 it renders a single row."""
    return build_bmp([[BLACK, BLACK]] * 5)
