"""
Image Comparison Module
Compares image files and writes the visual diff.
"""

import logging
from pathlib import Path
from typing import Optional

from core.errors import DecodeError
from core.pixel_comparator import ComparisonConfig, DiffResult
from core.raster import RasterImage
from core.visual_diff import diff_images
from utils.file_utils import read_file_bytes, write_file_bytes
from visual.codecs import ImageCodec, PillowCodec

logger = logging.getLogger(__name__)


class ImageComparator:
    def __init__(self, config: Optional[ComparisonConfig] = None, codec: Optional[ImageCodec] = None):
        self.config = config or ComparisonConfig()
        self.codec = codec or PillowCodec()

    def load(self, path: str | Path) -> RasterImage:
        """Decode an image file from disk."""
        path = Path(path)
        logger.debug(f"Loading image: {path}")
        try:
            data = read_file_bytes(path)
        except OSError as e:
            raise DecodeError(f"Cannot read image {path}: {e}") from e
        try:
            image = self.codec.decode(data)
        except DecodeError as e:
            raise DecodeError(f"{path}: {e}") from e
        logger.debug(f"Loaded {path}: {image.width}x{image.height}")
        return image

    def save(self, image: RasterImage, path: str | Path) -> Path:
        """Encode an image and write it to path."""
        return write_file_bytes(Path(path), self.codec.encode(image))

    def convert(self, source: str | Path, destination: str | Path) -> Path:
        """Re-encode any decodable image file as PNG."""
        return self.save(self.load(source), destination)

    def compare(self, image1: RasterImage, image2: RasterImage) -> DiffResult:
        return diff_images(image1, image2, self.config)

    def generate_diff_image(self, image1_path, image2_path, output_path) -> DiffResult:
        """
        Compare two image files and write the diff visualization.

        Args:
            image1_path: Path to the first image
            image2_path: Path to the second image
            output_path: Where the diff image is written

        Returns:
            DiffResult with the pixel difference count
        """
        result = self.compare(self.load(image1_path), self.load(image2_path))
        self.save(result.diff_image, output_path)
        logger.info(f"Diff image written to {output_path}")
        return result
