"""
Schemas Package

Pydantic schemas for data validation and serialization, shared across the
API, service and transform layers.
"""

from core.enums import CropPosition, FitMode, ImageFormat

from .common import ErrorResponse
from .system import SystemStatus
from .transform import TransformConfig, ValidationLimits

__all__ = [
    "ErrorResponse",
    "SystemStatus",
    "TransformConfig",
    "ValidationLimits",
    # Enums (re-exported from core.enums)
    "CropPosition",
    "FitMode",
    "ImageFormat",
]
