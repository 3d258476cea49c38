"""
Constants and configuration values for the Image CDN.
Centralizes all magic numbers and configuration constants.
"""

from core.enums import ImageFormat


# Transformation limits and defaults
class ImageConstants:
    """Constants related to image transformation."""

    # Dimensions
    DEFAULT_MAX_WIDTH = 2000
    DEFAULT_MAX_HEIGHT = 2000
    MIN_DIMENSION = 1

    # Encoding
    DEFAULT_QUALITY = 80
    MIN_QUALITY = 1
    MAX_QUALITY = 100

    # Output formats
    FORMAT_EXTENSIONS = {
        ImageFormat.JPEG: "jpg",
        ImageFormat.PNG: "png",
    }
    MIME_TYPES = {
        ImageFormat.JPEG: "image/jpeg",
        ImageFormat.PNG: "image/png",
    }
    EXTENSION_FORMATS = {
        "jpg": ImageFormat.JPEG,
        "jpeg": ImageFormat.JPEG,
        "png": ImageFormat.PNG,
    }
    FALLBACK_FORMAT = ImageFormat.JPEG


# Cache Constants
class CacheConstants:
    """Constants related to derivative caching."""

    KEY_SEPARATOR = "__"
    # Names used as "<name>=" parts after the separator
    KEY_PART_NAMES = ("bucket", "w", "h", "fit", "fmt", "q", "bg", "crop")
    BUCKET_PART = "bucket"
    DEFAULT_MAX_AGE_SECONDS = 31536000  # 1 year
    DEFAULT_IMMUTABLE = True


# Storage Constants
class StorageConstants:
    """Constants for blob storage access."""

    DEFAULT_ORIGIN_BUCKET = "images"
    DEFAULT_CACHE_BUCKET = "images-cache"
    BUCKET_NAME_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9._-]*$"
    DEFAULT_LOCAL_ROOT = "./storage"
    DEFAULT_TIMEOUT_SECONDS = 30.0
    SUPABASE_STORAGE_PATH = "/storage/v1"


# Signing Constants
class SecurityConstants:
    """Constants for request signing."""

    TOKEN_PARAM = "token"


# API Constants
class APIConstants:
    """Constants for API endpoints."""

    IMAGE_ROUTE_PREFIX = "/image-cdn"
    DEFAULT_HOST = "0.0.0.0"
    DEFAULT_PORT = 8000
