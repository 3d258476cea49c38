"""
Image codec capability used by the transform engine.

The engine only talks to the ``ImageCodec`` protocol, so it can be driven
by a fake codec in tests. ``RasterCodec`` is the real implementation:
Pillow decodes and encodes, OpenCV resizes, NumPy crops and composites.
"""

from typing import Any, Protocol, Tuple

import numpy as np

from core.enums import ImageFormat
from core.image.converters import ImageConverters
from core.image.processors import composite_over, crop_image, resize_image


class ImageCodec(Protocol):
    """Raster operations the transform engine needs"""

    def decode(self, data: bytes) -> Any: ...

    def size(self, image: Any) -> Tuple[int, int]:
        """Return (width, height)."""
        ...

    def resize(self, image: Any, width: int, height: int) -> Any: ...

    def crop(self, image: Any, x: int, y: int, width: int, height: int) -> Any: ...

    def composite_over(
        self, image: Any, color: Tuple[int, int, int], width: int, height: int
    ) -> Any: ...

    def encode(self, image: Any, image_format: ImageFormat, quality: int) -> bytes: ...


class RasterCodec:
    """ImageCodec over NumPy arrays"""

    def decode(self, data: bytes) -> np.ndarray:
        return ImageConverters.from_bytes(data)

    def size(self, image: np.ndarray) -> Tuple[int, int]:
        height, width = image.shape[:2]
        return width, height

    def resize(self, image: np.ndarray, width: int, height: int) -> np.ndarray:
        return resize_image(image, width, height)

    def crop(self, image: np.ndarray, x: int, y: int, width: int, height: int) -> np.ndarray:
        return crop_image(image, x, y, width, height)

    def composite_over(
        self, image: np.ndarray, color: Tuple[int, int, int], width: int, height: int
    ) -> np.ndarray:
        return composite_over(image, color, width, height)

    def encode(self, image: np.ndarray, image_format: ImageFormat, quality: int) -> bytes:
        return ImageConverters.to_bytes(image, image_format, quality=quality)
