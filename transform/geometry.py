"""
Resize geometry for the supported fit modes.

Given the natural size of a source raster and the requested box, works
out the size to resize to and whether a crop has to follow.
"""

import math
from dataclasses import dataclass
from typing import Optional

from core.constants import ImageConstants
from core.enums import FitMode


@dataclass(frozen=True)
class GeometryResult:
    """Resolved resize target"""

    width: int
    height: int
    should_crop: bool


def round_dimension(value: float) -> int:
    """
    Round half up, the single rounding rule for every derived pixel value.

    Resize dimensions and crop offsets must agree, so nothing else in the
    transform path calls ``round()``.
    """
    return int(math.floor(value + 0.5))


def _scaled(value: float) -> int:
    return max(ImageConstants.MIN_DIMENSION, round_dimension(value))


def resolve_dimensions(
    natural_width: int,
    natural_height: int,
    target_width: Optional[int],
    target_height: Optional[int],
    fit: FitMode = FitMode.COVER,
) -> GeometryResult:
    """
    Calculate resize dimensions for a fit mode.

    Args:
        natural_width: Source width in pixels
        natural_height: Source height in pixels
        target_width: Requested width, or None
        target_height: Requested height, or None
        fit: Fit mode; only consulted when both dimensions are given

    Returns:
        GeometryResult. For cover both sides are >= the requested box and
        should_crop is set; every other case needs no crop.

    Example:
        >>> resolve_dimensions(1000, 800, 400, 400, FitMode.CONTAIN)
        GeometryResult(width=400, height=320, should_crop=False)
    """
    # Keep original size
    if target_width is None and target_height is None:
        return GeometryResult(natural_width, natural_height, False)

    # One side given, scale the other by the natural aspect ratio
    if target_width is None:
        return GeometryResult(
            _scaled(target_height * natural_width / natural_height), target_height, False
        )

    if target_height is None:
        return GeometryResult(
            target_width, _scaled(target_width * natural_height / natural_width), False
        )

    aspect_ratio = natural_width / natural_height
    target_ratio = target_width / target_height

    if fit == FitMode.FILL:
        return GeometryResult(target_width, target_height, False)

    if fit == FitMode.CONTAIN:
        if aspect_ratio > target_ratio:
            # Wider than the box: width binds
            return GeometryResult(target_width, _scaled(target_width / aspect_ratio), False)
        return GeometryResult(_scaled(target_height * aspect_ratio), target_height, False)

    # Cover
    if aspect_ratio > target_ratio:
        # Wider than the box: match height, crop width
        return GeometryResult(_scaled(target_height * aspect_ratio), target_height, True)
    return GeometryResult(target_width, _scaled(target_width / aspect_ratio), True)
