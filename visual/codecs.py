"""
Image Codec Module
Decodes raster files into RasterImage values and encodes them back to PNG.
"""

import io
import logging
from typing import Dict, Protocol, Type

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from core.errors import DecodeError, EncodeError
from core.raster import RasterImage

logger = logging.getLogger(__name__)


class ImageCodec(Protocol):
    name: str

    def decode(self, data: bytes) -> RasterImage:
        ...

    def encode(self, image: RasterImage) -> bytes:
        ...


class PillowCodec:
    """Codec backed by Pillow. Handles any format Pillow can open."""
    name = 'pillow'

    def decode(self, data: bytes) -> RasterImage:
        try:
            with Image.open(io.BytesIO(data)) as img:
                rgba = img.convert('RGBA')
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise DecodeError(f"Pillow could not decode image: {e}") from e
        return RasterImage.from_array(np.array(rgba, dtype=np.uint8))

    def encode(self, image: RasterImage) -> bytes:
        buffer = io.BytesIO()
        try:
            Image.fromarray(np.ascontiguousarray(image.pixels)).save(buffer, format='PNG')
        except (OSError, ValueError, SystemError) as e:
            raise EncodeError(f"Pillow could not encode {image.width}x{image.height} image: {e}") from e
        return buffer.getvalue()


class OpenCVCodec:
    """Codec backed by OpenCV. Channels are swapped from OpenCV's BGR(A) order."""
    name = 'opencv'

    _TO_RGBA = {
        1: cv2.COLOR_GRAY2RGBA,
        3: cv2.COLOR_BGR2RGBA,
        4: cv2.COLOR_BGRA2RGBA,
    }

    def decode(self, data: bytes) -> RasterImage:
        buffer = np.frombuffer(data, dtype=np.uint8)
        arr = cv2.imdecode(buffer, cv2.IMREAD_UNCHANGED) if buffer.size else None
        if arr is None:
            raise DecodeError("OpenCV could not decode image")

        if arr.dtype == np.uint16:
            arr = (arr >> 8).astype(np.uint8)
        elif arr.dtype != np.uint8:
            raise DecodeError(f"Unsupported sample type: {arr.dtype}")

        channels = 1 if arr.ndim == 2 else arr.shape[2]
        if channels not in self._TO_RGBA:
            raise DecodeError(f"Unsupported channel count: {channels}")
        return RasterImage.from_array(cv2.cvtColor(arr, self._TO_RGBA[channels]))

    def encode(self, image: RasterImage) -> bytes:
        bgra = cv2.cvtColor(np.ascontiguousarray(image.pixels), cv2.COLOR_RGBA2BGRA)
        ok, encoded = cv2.imencode('.png', bgra)
        if not ok:
            raise EncodeError(f"OpenCV could not encode {image.width}x{image.height} image")
        return encoded.tobytes()


CODECS: Dict[str, Type] = {
    PillowCodec.name: PillowCodec,
    OpenCVCodec.name: OpenCVCodec,
}


def get_codec(name: str) -> ImageCodec:
    """Return a codec instance by name ('pillow' or 'opencv')."""
    try:
        return CODECS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown codec '{name}', expected one of: {', '.join(CODECS)}") from None
