"""
Cache key generation.

Keys look like ``<path>__w=<width>__h=<height>__fit=<fit>__fmt=<format>__q=<quality>.<ext>``
with every default-valued part left out, so requests that only differ in
explicitly-default parameters share one cache entry. Keys for a bucket other
than the default origin bucket start with ``__bucket=<name>/``.
"""

import posixpath
from typing import List, Optional

from core.constants import CacheConstants, ImageConstants
from core.enums import CropPosition, FitMode, ImageFormat
from schemas import TransformConfig


def get_extension_from_format(image_format: ImageFormat) -> str:
    """File extension for an output format (jpeg -> jpg)."""
    return ImageConstants.FORMAT_EXTENSIONS[image_format]


def get_mime_type(image_format: ImageFormat) -> str:
    """MIME type for an output format."""
    return ImageConstants.MIME_TYPES[image_format]


def infer_format_from_path(path: str) -> ImageFormat:
    """
    Infer image format from the path's extension.

    Unknown or missing extensions fall back to JPEG.
    """
    ext = posixpath.splitext(path)[1].lstrip(".").lower()
    return ImageConstants.EXTENSION_FORMATS.get(ext, ImageConstants.FALLBACK_FORMAT)


def build_cache_key(
    config: TransformConfig,
    default_quality: int = ImageConstants.DEFAULT_QUALITY,
    default_bucket: Optional[str] = None,
) -> str:
    """
    Build a deterministic cache key from a transformation config.

    Args:
        config: Validated transformation config
        default_quality: Configured default quality; equal quality is omitted
        default_bucket: Configured origin bucket; any other bucket prefixes
            the key with ``__bucket=<name>/`` so equal paths in different
            buckets never collide

    Returns:
        Storage key, e.g. ``products/shoe__w=400__h=300.jpg``
    """
    original_format = infer_format_from_path(config.path)
    output_format = config.format or original_format

    path_without_ext = posixpath.splitext(config.path)[0]
    if default_bucket is not None and config.bucket != default_bucket:
        # sanitize_path rejects "__bucket=", so no path can produce this prefix
        bucket_part = f"{CacheConstants.KEY_SEPARATOR}{CacheConstants.BUCKET_PART}={config.bucket}"
        path_without_ext = f"{bucket_part}/{path_without_ext}"

    parts: List[str] = [path_without_ext]

    if config.width is not None:
        parts.append(f"w={config.width}")

    if config.height is not None:
        parts.append(f"h={config.height}")

    if config.fit != FitMode.COVER and config.has_dimensions:
        parts.append(f"fit={config.fit.value}")

    if config.format is not None and config.format != original_format:
        parts.append(f"fmt={config.format.value}")

    if config.quality != default_quality:
        parts.append(f"q={config.quality}")

    if config.background is not None:
        parts.append(f"bg={config.background}")

    if config.crop != CropPosition.CENTER and config.has_dimensions:
        parts.append(f"crop={config.crop.value}")

    key = CacheConstants.KEY_SEPARATOR.join(parts)
    return f"{key}.{get_extension_from_format(output_format)}"
