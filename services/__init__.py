"""
Service layer for the Image CDN.
"""

from .image_service import ImageResult, ImageService

__all__ = ["ImageResult", "ImageService"]
