"""
Transformation request models.

This module contains the typed, normalized form of a transformation request
and the limits it is validated against.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from core.constants import ImageConstants, StorageConstants
from core.enums import CropPosition, FitMode, ImageFormat


class ValidationLimits(BaseModel):
    """Process-wide limits applied to every request"""

    model_config = ConfigDict(frozen=True)

    max_width: int = Field(
        default=ImageConstants.DEFAULT_MAX_WIDTH, ge=ImageConstants.MIN_DIMENSION
    )
    max_height: int = Field(
        default=ImageConstants.DEFAULT_MAX_HEIGHT, ge=ImageConstants.MIN_DIMENSION
    )
    default_quality: int = Field(
        default=ImageConstants.DEFAULT_QUALITY,
        ge=ImageConstants.MIN_QUALITY,
        le=ImageConstants.MAX_QUALITY,
    )
    default_bucket: str = Field(default=StorageConstants.DEFAULT_ORIGIN_BUCKET, min_length=1)


class TransformConfig(BaseModel):
    """
    Validated transformation request.

    Built once per request by the parameter validator and never mutated
    afterwards. Range checks are done by the validator so it can report
    which parameter failed; the field constraints here are a backstop.
    """

    model_config = ConfigDict(frozen=True)

    bucket: str = Field(..., min_length=1, description="Origin container")
    path: str = Field(..., min_length=1, description="Sanitized relative path")
    width: Optional[int] = Field(
        None, ge=ImageConstants.MIN_DIMENSION, description="Target width in pixels"
    )
    height: Optional[int] = Field(
        None, ge=ImageConstants.MIN_DIMENSION, description="Target height in pixels"
    )
    fit: FitMode = Field(default=FitMode.COVER)
    format: Optional[ImageFormat] = Field(None, description="None keeps the source format")
    quality: int = Field(
        default=ImageConstants.DEFAULT_QUALITY,
        ge=ImageConstants.MIN_QUALITY,
        le=ImageConstants.MAX_QUALITY,
    )
    background: Optional[str] = Field(
        None, pattern=r"^[0-9a-f]{6}$", description="RGB hex color, lower case"
    )
    crop: CropPosition = Field(default=CropPosition.CENTER)
    no_cache: bool = False

    @property
    def has_dimensions(self) -> bool:
        return self.width is not None or self.height is not None
