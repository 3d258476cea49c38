"""
Shared FastAPI dependencies for the Image CDN.
Centralizes access to the objects created at startup.
"""

import logging

from fastapi import Depends, HTTPException, Request

from config import Settings
from core.storage.base import BlobStore
from services.image_service import ImageService
from transform.engine import TransformEngine

logger = logging.getLogger(__name__)


class Resources:
    """Container for everything created in the application lifespan."""

    def __init__(
        self,
        settings: Settings,
        origin_store: BlobStore,
        cache_store: BlobStore,
        engine: TransformEngine,
    ):
        self.settings = settings
        self.origin_store = origin_store
        self.cache_store = cache_store
        self.engine = engine


def get_resources(request: Request) -> Resources:
    """
    Get startup resources from app state.

    Raises:
        HTTPException: If the application state was not initialized
    """
    try:
        return Resources(
            settings=request.app.state.settings,
            origin_store=request.app.state.origin_store,
            cache_store=request.app.state.cache_store,
            engine=request.app.state.engine,
        )
    except AttributeError as e:
        logger.error(f"Resources not initialized in app state: {e}")
        raise HTTPException(
            status_code=500, detail="Internal server error: Resources not initialized"
        )


def get_settings_dependency(resources: Resources = Depends(get_resources)) -> Settings:
    """Get application Settings."""
    return resources.settings


def get_image_service(resources: Resources = Depends(get_resources)) -> ImageService:
    """
    Get image service instance.

    Args:
        resources: Startup resources dependency

    Returns:
        ImageService wired with the configured stores, limits and secret
    """
    settings = resources.settings
    return ImageService(
        origin_store=resources.origin_store,
        cache_store=resources.cache_store,
        cache_bucket=settings.storage.cache_bucket,
        limits=settings.limits,
        signing_secret=settings.security.signing_secret,
        engine=resources.engine,
        cache_max_age_seconds=settings.image.cache_max_age_seconds,
    )
