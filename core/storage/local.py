"""
Filesystem blob store.

Each container is a directory under a configurable root, so
``images/products/shoe.jpg`` lives at ``<root>/images/products/shoe.jpg``.
Content type and cache-control are not persisted.
"""

import logging
import os
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

from core.storage.base import ObjectNotFoundError, StorageError

logger = logging.getLogger(__name__)


class LocalStorage:
    """BlobStore backed by the local filesystem"""

    def __init__(self, root: str):
        """
        Initialize local storage.

        Args:
            root: Base directory holding one subdirectory per container
        """
        self.root = Path(root).resolve()
        logger.info(f"Local storage rooted at {self.root}")

    def _resolve(self, container: str, key: str) -> Path:
        try:
            container_dir = (self.root / container).resolve()
            target = (container_dir / key).resolve()
        except (ValueError, OSError) as e:
            # e.g. an embedded NUL byte
            raise StorageError(f"Invalid key {container}/{key!r}: {e}", container, key) from e
        if container_dir.parent != self.root or container_dir not in target.parents:
            raise StorageError(f"Key escapes storage root: {container}/{key}", container, key)
        return target

    def _read(self, container: str, key: str) -> bytes:
        path = self._resolve(container, key)
        try:
            return path.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            raise ObjectNotFoundError(container, key) from None
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read {container}/{key}: {e}", container, key) from e

    def _write(self, container: str, key: str, data: bytes) -> None:
        path = self._resolve(container, key)
        tmp_path = path.with_name(f".{path.name}.{os.getpid()}.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(data)
            os.replace(tmp_path, path)
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to write {container}/{key}: {e}", container, key) from e

    async def get(self, container: str, key: str) -> bytes:
        return await run_in_threadpool(self._read, container, key)

    async def put(
        self,
        container: str,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        cache_control_seconds: int = 0,
    ) -> None:
        await run_in_threadpool(self._write, container, key, data)
        logger.debug(f"Wrote {len(data)} bytes to {container}/{key}")

    async def close(self) -> None:
        return None
