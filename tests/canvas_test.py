import sys
import os
import numpy as np
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from core.canvas import canvas_size, normalize
from core.raster import RasterImage

WHITE = (255, 255, 255, 255)

def random_image(width, height, seed):
    rng = np.random.default_rng(seed)
    return RasterImage.from_array(rng.integers(0, 256, (height, width, 4), dtype=np.uint8))

def test_canvas_is_bounding_box():
    a = random_image(2, 7, 1)
    b = random_image(5, 3, 2)
    a2, b2 = normalize(a, b)
    assert canvas_size(a, b) == (5, 7)
    assert a2.size == b2.size == (5, 7)

def test_normalize_is_symmetric_in_shape():
    a = random_image(4, 1, 3)
    b = random_image(2, 6, 4)
    a2, b2 = normalize(a, b)
    b3, a3 = normalize(b, a)
    assert a2.size == b3.size == (4, 6)
    assert a2 == a3
    assert b2 == b3

def test_original_pixels_kept_at_origin():
    a = random_image(3, 2, 5)
    b = random_image(6, 4, 6)
    a2, b2 = normalize(a, b)
    assert np.array_equal(a2.pixels[:2, :3], a.pixels)
    assert b2 == b

def test_padding_is_opaque_white():
    a = random_image(3, 2, 7)
    b = random_image(5, 4, 8)
    a2, _ = normalize(a, b)
    for y in range(a2.height):
        for x in range(a2.width):
            if x >= a.width or y >= a.height:
                assert a2.pixel(x, y) == WHITE

def test_same_size_returns_equal_copies():
    a = random_image(3, 3, 9)
    b = random_image(3, 3, 10)
    a2, b2 = normalize(a, b)
    assert a2 == a and b2 == b
    assert a2.pixels is not a.pixels

def test_custom_fill():
    a = RasterImage.blank(1, 1, fill=7)
    b = RasterImage.blank(2, 2, fill=7)
    a2, _ = normalize(a, b, fill=0)
    assert a2.pixel(1, 1) == (0, 0, 0, 0)
    assert a2.pixel(0, 0) == (7, 7, 7, 7)

def test_invalid_fill_rejected():
    a = RasterImage.blank(1, 1)
    with pytest.raises(ValueError):
        normalize(a, a, fill=256)
    with pytest.raises(ValueError):
        normalize(a, a, fill=1.5)

def test_empty_images():
    a2, b2 = normalize(RasterImage.blank(0, 0), RasterImage.blank(0, 3))
    assert a2.size == b2.size == (0, 3)
