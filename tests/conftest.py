"""
Pytest configuration and fixtures for Image CDN tests
"""

from unittest.mock import MagicMock

import pytest

from core.enums import ImageFormat
from core.storage.memory import MemoryStorage, StoredObject
from helpers import CACHE_BUCKET, ORIGIN_BUCKET, make_image_bytes
from schemas import ValidationLimits
from services.image_service import ImageService
from transform.engine import TransformEngine


@pytest.fixture
def limits():
    """Default validation limits"""
    return ValidationLimits(
        max_width=2000, max_height=2000, default_quality=80, default_bucket=ORIGIN_BUCKET
    )


@pytest.fixture
def source_jpeg():
    """1000x800 JPEG source image"""
    return make_image_bytes(1000, 800, ImageFormat.JPEG)


@pytest.fixture
def source_png_alpha():
    """400x200 PNG with a transparent left half"""
    return make_image_bytes(400, 200, ImageFormat.PNG, alpha=True)


@pytest.fixture
def origin_store(source_jpeg):
    """Origin store seeded with test.jpg (1000x800)"""
    store = MemoryStorage()
    store.objects[(ORIGIN_BUCKET, "test.jpg")] = StoredObject(source_jpeg, "image/jpeg", 0)
    return store


@pytest.fixture
def cache_store():
    return MemoryStorage()


@pytest.fixture
def engine_spy():
    """Real TransformEngine wrapped so calls can be counted"""
    return MagicMock(wraps=TransformEngine())


@pytest.fixture
def image_service(origin_store, cache_store, limits, engine_spy):
    """ImageService over memory stores with signing disabled"""
    return ImageService(
        origin_store=origin_store,
        cache_store=cache_store,
        cache_bucket=CACHE_BUCKET,
        limits=limits,
        engine=engine_spy,
    )
