import logging
import sys
from collections.abc import Callable
from pathlib import Path

from imgcat.bmp import decode_bmp
from imgcat.codec import decode_jpeg, decode_png
from imgcat.errors import AllocationFailure, FormatDetectionError, InputError
from imgcat.raster import Raster
from imgcat.render import render

log = logging.getLogger(__name__)

FORMATS: dict[str, str] = {
    ".bmp": "bmp",
    ".jpg": "jpeg",
    ".jpeg": "jpeg",
    ".png": "png",
}

DECODERS: dict[str, Callable[[bytes], Raster]] = {
    "bmp": decode_bmp,
    "jpeg": decode_jpeg,
    "png": decode_png,
}


def detect_format(path: str | Path) -> str:
    suffix = Path(path).suffix.lower()
    try:
        return FORMATS[suffix]
    except KeyError:
        raise FormatDetectionError(f"Unrecognized image format: {path}") from None


def read_source(path: str | Path | None = None) -> tuple[bytes, str]:
    """Read a whole image file, or standard input as BMP when no path is given."""
    if path is None:
        log.debug("Reading BMP data from standard input")
        if sys.stdin is None:
            raise InputError("Failed to read image data.")
        try:
            return sys.stdin.buffer.read(), "bmp"
        except (OSError, ValueError) as exc:
            raise InputError("Failed to read image data.") from exc

    fmt = detect_format(path)
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise InputError(f"Failed to open image file {path}.") from exc
    log.debug("Read %d bytes of %s data from %s", len(data), fmt, path)
    return data, fmt


def decode_image(data: bytes, fmt: str) -> Raster:
    try:
        decoder = DECODERS[fmt]
    except KeyError:
        raise FormatDetectionError(f"No decoder for format {fmt!r}") from None
    return decoder(data)


def image_to_ascii(source: bytes | str | Path | None, width: int) -> str:
    """Decode an image and render it as ``width``-column ASCII art.

    ``source`` is a file path, raw BMP bytes, or ``None`` to read BMP data from stdin.
    """
    try:
        if isinstance(source, (bytes, bytearray)):
            data, fmt = bytes(source), "bmp"
        else:
            data, fmt = read_source(source)
        with decode_image(data, fmt) as raster:
            lines = render(raster, width)
    except MemoryError as exc:
        raise AllocationFailure() from exc
    return "\n".join(lines)
