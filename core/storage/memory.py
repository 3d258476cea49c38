"""
In-memory blob store for development and tests.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Tuple

from core.storage.base import ObjectNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class StoredObject:
    """Object plus the metadata it was uploaded with"""

    data: bytes
    content_type: str
    cache_control_seconds: int


class MemoryStorage:
    """Dict-backed BlobStore"""

    def __init__(self):
        self.objects: Dict[Tuple[str, str], StoredObject] = {}

    async def get(self, container: str, key: str) -> bytes:
        try:
            return self.objects[(container, key)].data
        except KeyError:
            raise ObjectNotFoundError(container, key) from None

    async def put(
        self,
        container: str,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        cache_control_seconds: int = 0,
    ) -> None:
        self.objects[(container, key)] = StoredObject(
            bytes(data), content_type, cache_control_seconds
        )
        logger.debug(f"Stored {len(data)} bytes at {container}/{key}")

    def has(self, container: str, key: str) -> bool:
        return (container, key) in self.objects

    async def close(self) -> None:
        self.objects.clear()
