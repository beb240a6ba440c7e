"""
Visual Diff Module
Runs the in-memory comparison pipeline: normalize both images, then compare.
"""

import logging
from typing import Optional

from .canvas import normalize
from .pixel_comparator import ComparisonConfig, DiffResult, compare
from .raster import RasterImage

logger = logging.getLogger(__name__)


def diff_images(a: RasterImage, b: RasterImage, config: Optional[ComparisonConfig] = None) -> DiffResult:
    """Compare two images of any size on a common canvas."""
    padded_a, padded_b = normalize(a, b)
    result = compare(padded_a, padded_b, config)
    logger.info(
        f"Compared {padded_a.width}x{padded_a.height} canvas: "
        f"{result.diff_pixel_count} pixels different ({result.diff_ratio:.2%})"
    )
    return result
