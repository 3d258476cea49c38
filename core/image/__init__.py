"""
Image processing utilities - modular architecture.

This package provides focused image processing utilities:
- converters: Format conversions (bytes, PIL, NumPy, hex colors)
- processors: Raster operations (resize, crop, composite)
- codec: The codec capability consumed by the transform engine
"""

from core.image.codec import ImageCodec, RasterCodec
from core.image.converters import ImageConverters

__all__ = ["ImageCodec", "ImageConverters", "RasterCodec"]
