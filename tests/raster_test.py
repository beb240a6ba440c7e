import sys
import os
import numpy as np
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from core.raster import RasterImage

def test_blank_image_is_filled():
    img = RasterImage.blank(3, 2)
    assert img.size == (3, 2)
    assert img.pixels.shape == (2, 3, 4)
    assert img.pixel(2, 1) == (255, 255, 255, 255)

def test_from_array_reads_dimensions():
    arr = np.zeros((5, 7, 4), dtype=np.uint8)
    img = RasterImage.from_array(arr)
    assert img.width == 7
    assert img.height == 5

def test_pixel_uses_column_then_row():
    arr = np.zeros((2, 3, 4), dtype=np.uint8)
    arr[1, 2] = (10, 20, 30, 40)
    img = RasterImage.from_array(arr)
    assert img.pixel(2, 1) == (10, 20, 30, 40)
    assert img.pixel(1, 1) == (0, 0, 0, 0)

def test_shape_mismatch_rejected():
    with pytest.raises(ValueError):
        RasterImage(4, 4, np.zeros((3, 4, 4), dtype=np.uint8))

def test_non_rgba_rejected():
    with pytest.raises(ValueError):
        RasterImage(2, 2, np.zeros((2, 2, 3), dtype=np.uint8))

def test_wrong_dtype_rejected():
    with pytest.raises(ValueError):
        RasterImage(2, 2, np.zeros((2, 2, 4), dtype=np.float32))

def test_negative_size_rejected():
    with pytest.raises(ValueError):
        RasterImage(-1, 0, np.zeros((0, 0, 4), dtype=np.uint8))

def test_pixels_are_read_only():
    arr = np.zeros((2, 2, 4), dtype=np.uint8)
    img = RasterImage.from_array(arr)
    with pytest.raises(ValueError):
        img.pixels[0, 0] = (1, 2, 3, 4)
    assert arr.flags.writeable

def test_later_writes_to_source_array_do_not_change_image():
    arr = np.zeros((2, 2, 4), dtype=np.uint8)
    img = RasterImage.from_array(arr)
    twin = RasterImage(2, 2, arr)
    arr[0, 0] = 255
    assert img.pixel(0, 0) == (0, 0, 0, 0)
    assert twin.pixel(0, 0) == (0, 0, 0, 0)
    assert img == twin

def test_empty_image_allowed():
    img = RasterImage.blank(0, 0)
    assert img.size == (0, 0)

def test_equality_compares_pixels():
    assert RasterImage.blank(2, 2) == RasterImage.blank(2, 2)
    assert RasterImage.blank(2, 2) != RasterImage.blank(2, 2, fill=0)
    assert RasterImage.blank(2, 3) != RasterImage.blank(3, 2)
