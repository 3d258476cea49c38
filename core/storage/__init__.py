"""
Blob storage backends.

- base: BlobStore protocol and storage errors
- supabase: Supabase Storage over HTTP (production)
- local: directory-per-container filesystem store
- memory: dict-backed store for development and tests
"""

import logging

from core.enums import StorageBackend
from core.storage.base import BlobStore, ObjectNotFoundError, StorageError
from core.storage.local import LocalStorage
from core.storage.memory import MemoryStorage
from core.storage.supabase import SupabaseStorage

logger = logging.getLogger(__name__)


def create_storage(settings) -> BlobStore:
    """
    Build the blob store selected by ``settings.storage.backend``.

    Args:
        settings: Application Settings
    """
    storage = settings.storage
    logger.info(f"Using {storage.backend.value} storage backend")

    if storage.backend == StorageBackend.SUPABASE:
        return SupabaseStorage(
            url=storage.supabase_url,
            service_role_key=storage.service_role_key,
            timeout=storage.timeout_seconds,
        )
    if storage.backend == StorageBackend.LOCAL:
        return LocalStorage(storage.local_root)
    return MemoryStorage()


__all__ = [
    "BlobStore",
    "LocalStorage",
    "MemoryStorage",
    "ObjectNotFoundError",
    "StorageError",
    "SupabaseStorage",
    "create_storage",
]
