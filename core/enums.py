"""
Centralized enums for the Image CDN.

All closed value sets accepted on the query string live here so they are
parsed once at the boundary and passed around as enum members afterwards.
"""

from enum import Enum


class FitMode(str, Enum):
    """How the source aspect ratio interacts with the requested box"""

    COVER = "cover"
    CONTAIN = "contain"
    FILL = "fill"


class ImageFormat(str, Enum):
    """Output encodings"""

    JPEG = "jpeg"
    PNG = "png"


class CropPosition(str, Enum):
    """Anchor used when trimming excess pixels under cover"""

    CENTER = "center"
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class StorageBackend(str, Enum):
    SUPABASE = "supabase"
    LOCAL = "local"
    MEMORY = "memory"
