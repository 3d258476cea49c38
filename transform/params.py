"""
Query parameter parsing and validation.

Turns the raw query string of a transformation request into a
``TransformConfig``. Nothing here performs I/O; every failure is a
``ValidationError`` that names the offending parameter.
"""

import re
from typing import Dict, Iterable, Mapping, Optional, Tuple, Type, TypeVar, Union

from api.exceptions import ValidationError
from core.constants import CacheConstants, ImageConstants, StorageConstants
from core.enums import CropPosition, FitMode, ImageFormat
from core.utils.enum_converter import allowed_values, parse_enum
from schemas import TransformConfig, ValidationLimits

E = TypeVar("E")

QueryParams = Union[Mapping[str, str], Iterable[Tuple[str, str]]]

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_HEX_COLOR_RE = re.compile(r"[0-9A-Fa-f]{6}")
_BUCKET_RE = re.compile(StorageConstants.BUCKET_NAME_PATTERN)
_CONTROL_CHAR_RE = re.compile(r"[\x00-\x1f\x7f]")
_KEY_PART_RE = re.compile(
    re.escape(CacheConstants.KEY_SEPARATOR)
    + "(?:" + "|".join(CacheConstants.KEY_PART_NAMES) + ")="
)


def first_values(params: QueryParams) -> Dict[str, str]:
    """
    Collapse query pairs to one value per key.

    The first occurrence of a repeated key wins. Mappings are taken as-is.
    """
    if isinstance(params, Mapping):
        return dict(params)

    values: Dict[str, str] = {}
    for key, value in params:
        values.setdefault(key, value)
    return values


def sanitize_path(path: str) -> str:
    """
    Sanitize a resource path to prevent directory traversal.

    Absolute paths are rejected, trailing slashes are trimmed and no
    ``..`` segment may remain. Control characters and sequences that look
    like a cache key part (``__w=``, ``__bucket=``, ...) are rejected, so a
    path can never spell out another request's cache key.

    Args:
        path: Raw path from the query string

    Returns:
        Relative path, e.g. ``products/shoe.jpg``

    Raises:
        ValidationError: If the path is absolute, escapes its container,
            contains reserved characters or is empty
    """
    sanitized = path.strip()

    if sanitized.startswith("/"):
        raise ValidationError(
            "Invalid path: absolute paths are not allowed", details={"parameter": "path"}
        )

    sanitized = sanitized.strip("/")

    if ".." in sanitized.split("/"):
        raise ValidationError(
            "Invalid path: path traversal detected", details={"parameter": "path"}
        )

    if _CONTROL_CHAR_RE.search(sanitized):
        raise ValidationError(
            "Invalid path: control characters are not allowed", details={"parameter": "path"}
        )

    reserved = _KEY_PART_RE.search(sanitized)
    if reserved:
        raise ValidationError(
            f"Invalid path: reserved sequence '{reserved.group(0)}' is not allowed",
            details={"parameter": "path"},
        )

    if not sanitized:
        raise ValidationError(
            "Invalid path: path cannot be empty", details={"parameter": "path"}
        )

    return sanitized


def sanitize_bucket(bucket: str) -> str:
    """
    Validate a bucket name: letters, digits, ``.``, ``_`` and ``-``,
    starting with a letter or digit.
    """
    if not _BUCKET_RE.fullmatch(bucket):
        raise ValidationError(
            f"Invalid bucket: {bucket}", details={"parameter": "bucket", "value": bucket}
        )
    return bucket


def parse_int_param(
    name: str,
    value: Optional[str],
    min_value: int = 1,
    max_value: Optional[int] = None,
) -> Optional[int]:
    """
    Parse a base-10 integer parameter and check its range.

    Returns None when the parameter is absent or empty.
    """
    if not value:
        return None

    if not _INTEGER_RE.fullmatch(value):
        raise ValidationError(
            f"Invalid number: {value}", details={"parameter": name, "value": value}
        )

    parsed = int(value)
    if parsed < min_value or (max_value is not None and parsed > max_value):
        raise ValidationError(
            f"Number out of range: {value} (min: {min_value}, max: {max_value})",
            details={"parameter": name, "value": value, "min": min_value, "max": max_value},
        )

    return parsed


def _parse_choice(name: str, label: str, value: Optional[str], enum_class: Type[E], default):
    try:
        return parse_enum(value, enum_class, default)
    except ValueError:
        choices = allowed_values(enum_class)
        raise ValidationError(
            f"Invalid {label}: {value}. Allowed values: {', '.join(choices)}",
            details={"parameter": name, "value": value, "allowed": choices},
        ) from None


def parse_background(value: Optional[str]) -> Optional[str]:
    """Validate a six-digit hex color (without ``#``), returned in lower case."""
    if not value:
        return None

    if not _HEX_COLOR_RE.fullmatch(value):
        raise ValidationError(
            f"Invalid background color: {value}. Expected 6-digit hex (e.g., ffffff)",
            details={"parameter": "bg", "value": value},
        )

    return value.lower()


def parse_query_params(params: QueryParams, limits: ValidationLimits) -> TransformConfig:
    """
    Parse and validate all transformation parameters.

    Args:
        params: Raw query parameters, as a mapping or ordered pairs
        limits: Configured dimension limits and defaults

    Returns:
        Immutable, normalized TransformConfig

    Raises:
        ValidationError: On the first missing, malformed or out-of-range
            parameter
    """
    values = first_values(params)

    bucket = sanitize_bucket(values.get("bucket") or limits.default_bucket)

    raw_path = values.get("path")
    if not raw_path:
        raise ValidationError(
            "Missing required parameter: path", details={"parameter": "path"}
        )
    path = sanitize_path(raw_path)

    width = parse_int_param(
        "w", values.get("w"), ImageConstants.MIN_DIMENSION, limits.max_width
    )
    height = parse_int_param(
        "h", values.get("h"), ImageConstants.MIN_DIMENSION, limits.max_height
    )
    fit = _parse_choice("fit", "fit mode", values.get("fit"), FitMode, FitMode.COVER)
    image_format = _parse_choice("format", "format", values.get("format"), ImageFormat, None)
    quality = parse_int_param(
        "q", values.get("q"), ImageConstants.MIN_QUALITY, ImageConstants.MAX_QUALITY
    )
    background = parse_background(values.get("bg"))
    crop = _parse_choice(
        "crop", "crop position", values.get("crop"), CropPosition, CropPosition.CENTER
    )

    return TransformConfig(
        bucket=bucket,
        path=path,
        width=width,
        height=height,
        fit=fit,
        format=image_format,
        quality=quality if quality is not None else limits.default_quality,
        background=background,
        crop=crop,
        no_cache=values.get("no_cache") == "1",
    )
