from dataclasses import dataclass, field

import numpy as np

from imgcat.errors import AllocationFailure

CHANNELS = 3


@dataclass(eq=False)
class Raster:
    """A rectangular grid of RGB samples, stored as a (height, width, 3) uint8 array.

    The decoder that builds a raster hands it to its caller, who releases it once
    rendering is done. Using the raster as a context manager releases it on exit.
    """

    width: int
    height: int
    _pixels: np.ndarray | None = field(default=None, repr=False)

    def __post_init__(self):
        if self._pixels is None:
            raise ValueError("Raster needs a pixel array; use Raster.allocate()")
        if self._pixels.shape != (self.height, self.width, CHANNELS) or self._pixels.dtype != np.uint8:
            raise ValueError(
                f"Pixel array of shape {self._pixels.shape} and dtype {self._pixels.dtype} "
                f"does not match a {self.width}x{self.height} RGB raster"
            )

    @classmethod
    def allocate(cls, width: int, height: int) -> "Raster":
        if width < 0 or height < 0:
            raise ValueError(f"Raster dimensions must be non-negative, got {width}x{height}")
        try:
            pixels = np.zeros((height, width, CHANNELS), dtype=np.uint8)
        except MemoryError as exc:
            raise AllocationFailure() from exc
        return cls(width=width, height=height, _pixels=pixels)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Raster":
        """Copy an (h, w, 3) array of 8-bit samples into a newly allocated raster."""
        if array.ndim != 3 or array.shape[2] != CHANNELS:
            raise ValueError(f"Expected an (h, w, {CHANNELS}) array, got shape {array.shape}")
        height, width = array.shape[:2]
        raster = cls.allocate(width, height)
        raster.pixels[...] = array
        return raster

    @property
    def pixels(self) -> np.ndarray:
        if self._pixels is None:
            raise RuntimeError("Raster has been released")
        return self._pixels

    @property
    def released(self) -> bool:
        return self._pixels is None

    def release(self) -> None:
        self._pixels = None

    def __enter__(self) -> "Raster":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
