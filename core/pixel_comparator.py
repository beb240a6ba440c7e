"""
Pixel Comparator Module
Per-pixel perceptual comparison of two equally sized RGBA images.

Colour distance follows the YIQ metric of Kotsarenko & Ramos (2010),
"Measuring perceived color difference using YIQ NTSC transmission color
space in mobile applications". Anti-aliasing detection follows Vysniauskas
(2009), "Anti-aliased Pixel and Intensity Slope Detector".
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .errors import DimensionMismatchError, InvalidConfigError
from .raster import CHANNELS, RasterImage

logger = logging.getLogger(__name__)

# Largest possible YIQ delta between two colours
MAX_YIQ_DELTA = 35215

DEFAULT_THRESHOLD = 0.1
DEFAULT_ALPHA = 0.1
AA_COLOR = (255, 255, 0)
DIFF_COLOR = (255, 0, 0)

Color = Tuple[int, int, int]

_NEIGHBOURS = [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if dx or dy]


def _check_unit_interval(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfigError(f"{name} must be a number in [0, 1], got {value!r}")
    if math.isnan(value) or not 0 <= value <= 1:
        raise InvalidConfigError(f"{name} must be in [0, 1], got {value}")
    return float(value)


def _check_color(name: str, value) -> Color:
    try:
        channels = tuple(value)
    except TypeError:
        raise InvalidConfigError(f"{name} must be an (r, g, b) triple, got {value!r}") from None
    if len(channels) != 3 or not all(
        isinstance(c, (int, np.integer)) and not isinstance(c, bool) and 0 <= c <= 255
        for c in channels
    ):
        raise InvalidConfigError(f"{name} must hold three integers in [0, 255], got {value!r}")
    return tuple(int(c) for c in channels)


@dataclass(frozen=True)
class ComparisonConfig:
    """Options for a single comparison run. Lower threshold = more sensitive."""
    threshold: float = DEFAULT_THRESHOLD
    include_aa: bool = False
    alpha: float = DEFAULT_ALPHA
    aa_color: Color = AA_COLOR
    diff_color: Color = DIFF_COLOR
    diff_color_alt: Optional[Color] = None
    diff_mask: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'threshold', _check_unit_interval('threshold', self.threshold))
        object.__setattr__(self, 'alpha', _check_unit_interval('alpha', self.alpha))
        object.__setattr__(self, 'aa_color', _check_color('aa_color', self.aa_color))
        object.__setattr__(self, 'diff_color', _check_color('diff_color', self.diff_color))
        if self.diff_color_alt is not None:
            object.__setattr__(self, 'diff_color_alt', _check_color('diff_color_alt', self.diff_color_alt))

    @property
    def max_delta(self) -> float:
        """YIQ delta above which a pixel counts as different."""
        return MAX_YIQ_DELTA * self.threshold * self.threshold


@dataclass(frozen=True)
class DiffResult:
    diff_pixel_count: int
    diff_image: RasterImage
    antialiased_pixel_count: int = 0

    @property
    def diff_ratio(self) -> float:
        """Share of canvas pixels flagged as different."""
        total = self.diff_image.width * self.diff_image.height
        return self.diff_pixel_count / total if total else 0.0


def _blend(channel, alpha):
    """Blend a channel value onto white with the given opacity."""
    return 255 + (channel - 255) * alpha


def _rgb2y(rgb):
    return rgb[..., 0] * 0.29889531 + rgb[..., 1] * 0.58662247 + rgb[..., 2] * 0.11448223


def _rgb2i(rgb):
    return rgb[..., 0] * 0.59597799 - rgb[..., 1] * 0.27417610 - rgb[..., 2] * 0.32180189


def _rgb2q(rgb):
    return rgb[..., 0] * 0.21147017 - rgb[..., 1] * 0.52261711 + rgb[..., 2] * 0.31114694


def _blended_rgb(pixels: np.ndarray) -> np.ndarray:
    """RGB as float64 with translucent pixels composited onto white."""
    rgba = pixels.astype(np.float64)
    rgb = rgba[..., :3]
    alpha = rgba[..., 3:] / 255
    return np.where(alpha < 1, _blend(rgb, alpha), rgb)


def color_delta(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Signed YIQ distance between two (H, W, 4) uint8 arrays.

    Returns:
        float64 (H, W) array; negative where the pixel is darker in ``b``,
        exactly 0 where both RGBA quadruples are identical.
    """
    rgb_a, rgb_b = _blended_rgb(a), _blended_rgb(b)
    y_a, y_b = _rgb2y(rgb_a), _rgb2y(rgb_b)
    y = y_a - y_b
    i = _rgb2i(rgb_a) - _rgb2i(rgb_b)
    q = _rgb2q(rgb_a) - _rgb2q(rgb_b)

    delta = 0.5053 * y * y + 0.299 * i * i + 0.1957 * q * q
    delta = np.where(y_a > y_b, -delta, delta)
    delta[np.all(a == b, axis=-1)] = 0
    return delta


def _matching_neighbours(values: np.ndarray) -> np.ndarray:
    """
    For each cell, the number of 3x3 neighbours holding the same value,
    plus one for cells on the image border.
    """
    height, width = values.shape
    count = np.zeros((height, width), dtype=np.int32)
    for dx, dy in _NEIGHBOURS:
        dst = (slice(max(-dy, 0), height - max(dy, 0)), slice(max(-dx, 0), width - max(dx, 0)))
        src = (slice(max(dy, 0), height - max(-dy, 0)), slice(max(dx, 0), width - max(-dx, 0)))
        count[dst] += values[dst] == values[src]

    if height and width:
        border = np.zeros((height, width), dtype=bool)
        border[0, :] = border[-1, :] = True
        border[:, 0] = border[:, -1] = True
        count += border
    return count


class _EdgeNeighbourhood:
    """Neighbourhood statistics of one image used by the anti-aliasing test."""

    def __init__(self, pixels: np.ndarray):
        self.height, self.width = pixels.shape[:2]
        self.luma = _rgb2y(_blended_rgb(pixels))
        packed = np.ascontiguousarray(pixels).view(np.uint32).reshape(self.height, self.width)
        self.flat = _matching_neighbours(self.luma) > 2
        self.siblings = _matching_neighbours(packed) > 2

    def antialiased(self, x: int, y: int, other: '_EdgeNeighbourhood') -> bool:
        """
        True if (x, y) looks like an anti-aliased edge pixel: it sits between
        a darker and a brighter neighbour, and one of those extremes lies in
        a flat area in both images.
        """
        if self.flat[y, x]:
            return False

        centre = self.luma[y, x]
        brightest = darkest = None
        lowest = highest = 0.0
        for nx in range(max(x - 1, 0), min(x + 1, self.width - 1) + 1):
            for ny in range(max(y - 1, 0), min(y + 1, self.height - 1) + 1):
                if nx == x and ny == y:
                    continue
                delta = centre - self.luma[ny, nx]
                if delta < lowest:
                    lowest, brightest = delta, (ny, nx)
                elif delta > highest:
                    highest, darkest = delta, (ny, nx)

        if darkest is None or brightest is None:
            return False

        return (
            (self.siblings[darkest] and other.siblings[darkest])
            or (self.siblings[brightest] and other.siblings[brightest])
        )


def _grey_background(pixels: np.ndarray, alpha: float) -> np.ndarray:
    """Faded greyscale copy of ``pixels`` used as context in the diff image."""
    rgba = pixels.astype(np.float64)
    value = _blend(_rgb2y(rgba), alpha * rgba[..., 3] / 255)
    grey = np.clip(value, 0, 255).astype(np.uint8)
    out = np.empty(pixels.shape, dtype=np.uint8)
    out[..., 0] = out[..., 1] = out[..., 2] = grey
    out[..., 3] = 255
    return out


def _paint(out: np.ndarray, mask: np.ndarray, color: Color) -> None:
    out[mask] = (*color, 255)


def compare(a: RasterImage, b: RasterImage, config: Optional[ComparisonConfig] = None) -> DiffResult:
    """
    Classify every pixel of two equally sized images.

    Args:
        a: First image (already normalized)
        b: Second image, same size as ``a``
        config: Comparison options, defaults to ComparisonConfig()

    Returns:
        DiffResult holding the hard-difference count and the diff image.

    Raises:
        DimensionMismatchError: if the images differ in size
    """
    config = config or ComparisonConfig()
    if a.size != b.size:
        raise DimensionMismatchError(a.size, b.size)

    if config.diff_mask:
        out = np.zeros((a.height, a.width, CHANNELS), dtype=np.uint8)
    else:
        out = _grey_background(a.pixels, config.alpha)

    if np.array_equal(a.pixels, b.pixels):
        logger.debug("Images are identical, skipping per-pixel comparison")
        return DiffResult(0, RasterImage(a.width, a.height, out))

    delta = color_delta(a.pixels, b.pixels)
    over = np.abs(delta) > config.max_delta
    hard = over.copy()
    aliased = np.zeros_like(over)

    if not config.include_aa and over.any():
        edges_a, edges_b = _EdgeNeighbourhood(a.pixels), _EdgeNeighbourhood(b.pixels)
        # Flat in both images means neither side can be anti-aliased
        maybe_aa = over & ~(edges_a.flat & edges_b.flat)
        for y, x in np.argwhere(maybe_aa):
            if edges_a.antialiased(x, y, edges_b) or edges_b.antialiased(x, y, edges_a):
                aliased[y, x] = True
        hard &= ~aliased

    if not config.diff_mask:
        _paint(out, over, config.aa_color)
    if config.diff_color_alt is not None:
        darker = hard & (delta < 0)
        _paint(out, hard & ~darker, config.diff_color)
        _paint(out, darker, config.diff_color_alt)
    else:
        _paint(out, hard, config.diff_color)

    diff_count = int(np.count_nonzero(hard))
    aa_count = int(np.count_nonzero(aliased))
    logger.debug(f"Compared {a.width}x{a.height} pixels: {diff_count} different, {aa_count} anti-aliased")
    return DiffResult(diff_count, RasterImage(a.width, a.height, out), aa_count)
