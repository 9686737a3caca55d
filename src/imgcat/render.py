import logging
import math

import numpy as np

from imgcat.charsets import GLYPH_RAMP
from imgcat.raster import Raster

log = logging.getLogger(__name__)

# Terminal cells are roughly 2-2.5x taller than wide
ASPECT_CORRECTION = 2.5
LUMA_WEIGHTS = (0.21, 0.72, 0.07)
LUMA_RANGE = 256


def luminance(pixels: np.ndarray) -> np.ndarray:
    """Perceptual brightness of each RGB sample in an (h, w, 3) array."""
    pixels = pixels.astype(np.float64)
    wr, wg, wb = LUMA_WEIGHTS
    return wr * pixels[..., 0] + wg * pixels[..., 1] + wb * pixels[..., 2]


def glyph_for(value: float) -> str:
    """Map a luminance in [0, 256) onto the glyph ramp, dark to light."""
    index = int(len(GLYPH_RAMP) * value / LUMA_RANGE)
    return GLYPH_RAMP[min(max(index, 0), len(GLYPH_RAMP) - 1)]


def _windows(ratio: float, cells: int, limit: int) -> list[tuple[int, int]]:
    """Source index ranges [floor(ratio*i), ratio*(i+1)) for each output cell.

    Bounds are clamped to ``limit``; a window that collapses is widened to one pixel.
    """
    windows = []
    for i in range(cells):
        start = min(int(ratio * i), limit - 1)
        stop = min(math.ceil(ratio * (i + 1)), limit)
        if stop <= start:
            stop = start + 1
        windows.append((start, stop))
    return windows


def render(raster: Raster, print_width: int) -> list[str]:
    """Render a raster as ``print_width``-column rows of glyphs, top to bottom.

    Each character is the average luminance of the source pixels under its cell.
    """
    if print_width < 1:
        raise ValueError(f"print_width must be positive, got {print_width}")
    if raster.width == 0 or raster.height == 0:
        return []

    ratio_x = raster.width / print_width
    ratio_y = ratio_x * ASPECT_CORRECTION
    print_height = int(raster.height / ratio_y)
    log.debug(
        "Rendering %dx%d raster to %dx%d cells (ratio %.3f x %.3f)",
        raster.width,
        raster.height,
        print_width,
        print_height,
        ratio_x,
        ratio_y,
    )

    columns = _windows(ratio_x, print_width, raster.width)
    lines = []
    for y0, y1 in _windows(ratio_y, print_height, raster.height):
        band = luminance(raster.pixels[y0:y1])
        lines.append("".join(glyph_for(band[:, x0:x1].mean()) for x0, x1 in columns))
    return lines
