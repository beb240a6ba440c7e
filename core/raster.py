"""
Raster Module
In-memory RGBA bitmap shared by the normalizer, the comparator and the codecs.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

CHANNELS = 4


@dataclass(frozen=True, eq=False)
class RasterImage:
    """
    Decoded bitmap: width, height and RGBA pixels.
    No file format knowledge outside the codecs.
    """
    width: int
    height: int
    pixels: np.ndarray  # Shape (H, W, 4), dtype uint8, RGBA order. Read-only.

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Negative image size: {self.width}x{self.height}")

        pixels = np.asarray(self.pixels)
        if pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixel data, got {pixels.dtype}")
        if pixels.shape != (self.height, self.width, CHANNELS):
            raise ValueError(
                f"Image data size does not match width/height: "
                f"{pixels.shape} for {self.width}x{self.height}"
            )

        # Private read-only copy; later writes to the caller's array don't leak in
        own = np.array(pixels, dtype=np.uint8, order='C', copy=True)
        own.flags.writeable = False
        object.__setattr__(self, 'pixels', own)

    @classmethod
    def blank(cls, width: int, height: int, fill: int = 255) -> 'RasterImage':
        """Create a width x height image with every channel set to ``fill``."""
        return cls(width, height, np.full((height, width, CHANNELS), fill, dtype=np.uint8))

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'RasterImage':
        """Wrap an (H, W, 4) uint8 array."""
        array = np.asarray(array)
        if array.ndim != 3:
            raise ValueError(f"Expected an (H, W, 4) array, got shape {array.shape}")
        height, width = array.shape[:2]
        return cls(width, height, array)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """RGBA quadruple at column x, row y."""
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def __eq__(self, other):
        if not isinstance(other, RasterImage):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.pixels, other.pixels)

    __hash__ = None

    def __repr__(self):
        return f"RasterImage(width={self.width}, height={self.height})"
