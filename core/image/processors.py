"""
Image processing operations.

Handles raster manipulation tasks:
- Resizing
- Cropping
- Compositing over a solid background

Every function returns a new array and leaves its input untouched.
"""

import logging
from typing import Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)


def resize_image(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Resize image to exact dimensions.

    Uses area interpolation when shrinking and bilinear when enlarging.

    Args:
        image: Input image as NumPy array
        width: Target width
        height: Target height

    Returns:
        Resized image as NumPy array
    """
    h, w = image.shape[:2]
    if (w, h) == (width, height):
        return image.copy()

    shrinking = width * height < w * h
    interpolation = cv2.INTER_AREA if shrinking else cv2.INTER_LINEAR
    return cv2.resize(image, (width, height), interpolation=interpolation)


def crop_image(image: np.ndarray, x: int, y: int, width: int, height: int) -> np.ndarray:
    """
    Extract a rectangle from image.

    Raises:
        ValueError: If the rectangle does not lie fully inside the image
    """
    img_height, img_width = image.shape[:2]
    if x < 0 or y < 0 or width < 1 or height < 1:
        raise ValueError(f"Invalid crop rectangle ({x},{y}) {width}x{height}")
    if x + width > img_width or y + height > img_height:
        raise ValueError(
            f"Crop ({x},{y}) {width}x{height} exceeds image bounds {img_width}x{img_height}"
        )

    return image[y : y + height, x : x + width].copy()


def composite_over(
    image: np.ndarray, color: Tuple[int, int, int], width: int, height: int
) -> np.ndarray:
    """
    Place image on an opaque canvas filled with color.

    The image is anchored at the canvas origin; parts falling outside the
    canvas are dropped. Alpha, if present, is blended against the color.

    Args:
        image: RGB or RGBA image
        color: Canvas color as (r, g, b)
        width: Canvas width
        height: Canvas height

    Returns:
        Opaque RGB image of size width x height
    """
    canvas = np.empty((height, width, 3), dtype=np.uint8)
    canvas[:, :] = color

    h = min(image.shape[0], height)
    w = min(image.shape[1], width)
    region = image[:h, :w]

    if region.shape[2] == 4:
        alpha = region[:, :, 3:4].astype(np.float32) / 255.0
        blended = region[:, :, :3].astype(np.float32) * alpha + canvas[:h, :w].astype(
            np.float32
        ) * (1.0 - alpha)
        canvas[:h, :w] = np.clip(np.rint(blended), 0, 255).astype(np.uint8)
    else:
        canvas[:h, :w] = region[:, :, :3]

    return canvas
