import io
import logging

import numpy as np
from PIL import Image

from imgcat.errors import UnsupportedImage
from imgcat.raster import Raster

log = logging.getLogger(__name__)

# Backdrop channel value for transparent PNG pixels
WHITE = 255.0
# Alpha is normalised by 256, not 255, so fully opaque pixels keep a 1/256 share of white
ALPHA_SCALE = 256.0


def _open(data: bytes, expected_format: str) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (OSError, SyntaxError, Image.DecompressionBombError) as exc:
        raise UnsupportedImage(f"Could not decode {expected_format} image: {exc}") from exc
    if image.format != expected_format:
        image.close()
        raise UnsupportedImage(f"Expected a {expected_format} image, got {image.format}")
    log.debug("Decoded %s image: %dx%d mode=%s", image.format, image.width, image.height, image.mode)
    return image


def composite_over_white(rgba: np.ndarray) -> np.ndarray:
    """Blend an (h, w, 4) RGBA array onto an opaque white background.

    Each channel becomes ``alpha * src + (1 - alpha) * 255`` with ``alpha = a / 256``,
    truncated back to 8 bits.
    """
    rgba = rgba.astype(np.float64)
    alpha = rgba[:, :, 3:4] / ALPHA_SCALE
    blended = alpha * rgba[:, :, :3] + (1.0 - alpha) * WHITE
    return np.clip(blended, 0, 255).astype(np.uint8)


def decode_jpeg(data: bytes) -> Raster:
    with _open(data, "JPEG") as image:
        rgb = np.asarray(image.convert("RGB"), dtype=np.uint8)
    return Raster.from_array(rgb)


def decode_png(data: bytes) -> Raster:
    with _open(data, "PNG") as image:
        rgba = np.asarray(image.convert("RGBA"), dtype=np.uint8)
    return Raster.from_array(composite_over_white(rgba))
