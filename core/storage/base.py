"""
Blob storage interface.

Both the origin container (read-only) and the cache container (read and
write) are accessed through this protocol.
"""

from typing import Protocol


class StorageError(Exception):
    """Any failure talking to the blob store"""

    def __init__(self, message: str, container: str = "", key: str = ""):
        super().__init__(message)
        self.container = container
        self.key = key


class ObjectNotFoundError(StorageError):
    """The requested object does not exist"""

    def __init__(self, container: str, key: str):
        super().__init__(f"Object not found: {container}/{key}", container, key)


class BlobStore(Protocol):
    async def get(self, container: str, key: str) -> bytes:
        """
        Download an object.

        Raises:
            ObjectNotFoundError: If the object does not exist
            StorageError: On any other failure
        """
        ...

    async def put(
        self,
        container: str,
        key: str,
        data: bytes,
        content_type: str,
        cache_control_seconds: int,
    ) -> None:
        """
        Upload an object, replacing any existing one.

        Raises:
            StorageError: On failure
        """
        ...

    async def close(self) -> None: ...
