import logging
import struct
from dataclasses import dataclass

import numpy as np

from imgcat.errors import NotABitmap, TruncatedOrInvalidBitmap, UnsupportedBitDepth
from imgcat.raster import CHANNELS, Raster

log = logging.getLogger(__name__)

MAGIC = b"BM"
# BITMAPFILEHEADER (14 bytes) + BITMAPINFOHEADER (40 bytes)
HEADER_SIZE = 54
SUPPORTED_BIT_DEPTH = 24

# (byte offset, struct format) of the header fields we read, all little-endian
PIXEL_OFFSET_FIELD = (10, "<I")
WIDTH_FIELD = (18, "<i")
HEIGHT_FIELD = (22, "<i")
BIT_DEPTH_FIELD = (28, "<H")


@dataclass(frozen=True)
class BmpHeader:
    offset: int
    width: int
    height: int
    bit_depth: int

    @property
    def row_stride(self) -> int:
        """Bytes per stored row; rows are padded to a multiple of 4 bytes."""
        return (self.width * CHANNELS + 3) // 4 * 4

    @property
    def pixel_data_size(self) -> int:
        return self.row_stride * self.height


def _read_field(data: bytes, field: tuple[int, str]) -> int:
    position, fmt = field
    # Guards callers that hand over less than a full header
    if position + struct.calcsize(fmt) > len(data):
        raise NotABitmap()
    (value,) = struct.unpack_from(fmt, data, position)
    return value


def parse_bmp_header(data: bytes) -> BmpHeader:
    """Read the header fields of a 24-bit BMP and validate them against the buffer."""
    if len(data) < HEADER_SIZE or bytes(data[:2]) != MAGIC:
        raise NotABitmap()

    header = BmpHeader(
        offset=_read_field(data, PIXEL_OFFSET_FIELD),
        width=_read_field(data, WIDTH_FIELD),
        height=_read_field(data, HEIGHT_FIELD),
        bit_depth=_read_field(data, BIT_DEPTH_FIELD),
    )
    log.debug(
        "BMP header: offset=%d width=%d height=%d bit_depth=%d",
        header.offset,
        header.width,
        header.height,
        header.bit_depth,
    )

    if header.bit_depth != SUPPORTED_BIT_DEPTH:
        raise UnsupportedBitDepth()
    if header.width < 0 or header.height < 0:
        raise TruncatedOrInvalidBitmap()
    if header.offset + header.pixel_data_size > len(data):
        raise TruncatedOrInvalidBitmap()
    return header


def decode_bmp(data: bytes) -> Raster:
    """Decode an uncompressed 24-bit BMP into a raster whose row 0 is the top of the image."""
    header = parse_bmp_header(data)
    raster = Raster.allocate(header.width, header.height)
    if header.width == 0 or header.height == 0:
        return raster

    stored = np.frombuffer(data, dtype=np.uint8, count=header.pixel_data_size, offset=header.offset)
    # Drop row padding, then split each row into (B, G, R) triples
    stored = stored.reshape(header.height, header.row_stride)[:, : header.width * CHANNELS]
    bgr = stored.reshape(header.height, header.width, CHANNELS)
    # Rows are stored bottom-up; flip rows and reverse BGR to RGB
    raster.pixels[...] = bgr[::-1, :, ::-1]
    return raster
