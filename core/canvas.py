"""
Canvas Normalizer Module
Pads two images of arbitrary size onto a common bounding-box canvas.
"""

import logging
from typing import Tuple

import numpy as np

from .raster import CHANNELS, RasterImage

logger = logging.getLogger(__name__)

FILL_VALUE = 255  # Opaque white


def canvas_size(a: RasterImage, b: RasterImage) -> Tuple[int, int]:
    """Width and height of the smallest canvas holding both images."""
    return max(a.width, b.width), max(a.height, b.height)


def _pad(image: RasterImage, width: int, height: int, fill: int) -> RasterImage:
    canvas = np.full((height, width, CHANNELS), fill, dtype=np.uint8)
    canvas[:image.height, :image.width] = image.pixels
    return RasterImage(width, height, canvas)


def normalize(a: RasterImage, b: RasterImage, fill: int = FILL_VALUE) -> Tuple[RasterImage, RasterImage]:
    """
    Place both images at the top-left corner of a shared canvas.

    Args:
        a: First image
        b: Second image
        fill: Channel value for the padded margins (255 = opaque white)

    Returns:
        (a', b') with identical dimensions max(a.w, b.w) x max(a.h, b.h).
        Original pixels keep their (x, y) position; margins hold ``fill``.
    """
    if isinstance(fill, bool) or not isinstance(fill, (int, np.integer)) or not 0 <= fill <= 255:
        raise ValueError(f"Fill value must be an integer in [0, 255], got {fill!r}")

    width, height = canvas_size(a, b)
    if a.size != b.size:
        logger.debug(f"Padding {a.width}x{a.height} and {b.width}x{b.height} to {width}x{height}")

    return _pad(a, width, height, int(fill)), _pad(b, width, height, int(fill))
