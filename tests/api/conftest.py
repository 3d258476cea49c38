"""
Pytest configuration for API integration tests
"""

import pytest
from fastapi.testclient import TestClient

from config import ImageConfig, SecurityConfig, Settings, StorageConfig
from core.enums import StorageBackend
from core.storage.memory import MemoryStorage, StoredObject
from helpers import ORIGIN_BUCKET, make_image_bytes
from transform.engine import TransformEngine


@pytest.fixture
def api_settings():
    """Settings for a memory-backed app with signing disabled"""
    return Settings(
        environment="test",
        storage=StorageConfig(backend=StorageBackend.MEMORY),
        image=ImageConfig(),
        security=SecurityConfig(),
    )


@pytest.fixture
def store():
    """Shared origin/cache store seeded with test.jpg (1000x800)"""
    memory = MemoryStorage()
    memory.objects[(ORIGIN_BUCKET, "test.jpg")] = StoredObject(
        make_image_bytes(1000, 800), "image/jpeg", 0
    )
    return memory


@pytest.fixture(scope="function")
def client(api_settings, store):
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh client to avoid state contamination.
    """
    from main import app

    # Set in app state
    app.state.settings = api_settings
    app.state.origin_store = store
    app.state.cache_store = store
    app.state.engine = TransformEngine()

    # Create test client (no context manager to avoid running the lifespan)
    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client

    for name in ("settings", "origin_store", "cache_store", "engine"):
        if hasattr(app.state, name):
            delattr(app.state, name)
