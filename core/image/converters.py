"""
Image format conversion utilities.

Handles conversions between different image representations:
- Encoded bytes (JPEG, PNG, ...)
- PIL Images
- NumPy arrays (RGB or RGBA, channel-last, uint8)
- Hex color strings
"""

import io
import logging
from typing import Tuple

import numpy as np
from PIL import Image

from core.enums import ImageFormat

logger = logging.getLogger(__name__)

PIL_FORMATS = {
    ImageFormat.JPEG: "JPEG",
    ImageFormat.PNG: "PNG",
}


class ImageConverters:
    """Utilities for converting between image formats."""

    @staticmethod
    def numpy_to_pil(image: np.ndarray) -> Image.Image:
        """
        Convert NumPy array to PIL Image.

        Args:
            image: NumPy array in RGB or RGBA order

        Returns:
            PIL Image in RGB or RGBA mode
        """
        return Image.fromarray(np.ascontiguousarray(image))

    @staticmethod
    def pil_to_numpy(image: Image.Image) -> np.ndarray:
        """
        Convert PIL Image to an RGB or RGBA NumPy array.

        Images carrying transparency keep an alpha channel; everything else
        (grayscale, palette, CMYK, 16-bit) is flattened to RGB.
        """
        has_alpha = image.mode in ("RGBA", "LA", "PA") or (
            image.mode == "P" and "transparency" in image.info
        )
        target_mode = "RGBA" if has_alpha else "RGB"
        if image.mode != target_mode:
            image = image.convert(target_mode)
        return np.array(image)

    @staticmethod
    def from_bytes(data: bytes) -> np.ndarray:
        """
        Decode encoded image bytes to a NumPy array.

        Raises:
            PIL.UnidentifiedImageError / OSError: If the bytes are not a
                readable image
        """
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            return ImageConverters.pil_to_numpy(image)

    @staticmethod
    def to_bytes(image: np.ndarray, image_format: ImageFormat, quality: int = 85) -> bytes:
        """
        Encode a NumPy array.

        Args:
            image: RGB or RGBA array
            image_format: Target encoding
            quality: JPEG quality (1-100, ignored for PNG)

        Returns:
            Encoded bytes
        """
        pil_image = ImageConverters.numpy_to_pil(image)
        buffer = io.BytesIO()
        save_kwargs = {"format": PIL_FORMATS[image_format]}

        if image_format == ImageFormat.JPEG:
            # JPEG has no alpha channel
            if pil_image.mode != "RGB":
                pil_image = pil_image.convert("RGB")
            save_kwargs["quality"] = quality
            save_kwargs["optimize"] = True

        pil_image.save(buffer, **save_kwargs)
        return buffer.getvalue()

    @staticmethod
    def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
        """
        Parse a six-digit hex color.

        Example:
            >>> ImageConverters.hex_to_rgb("ff8000")
            (255, 128, 0)
        """
        value = int(hex_color, 16)
        return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
