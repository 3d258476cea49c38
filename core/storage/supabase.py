"""
Supabase Storage client.

Talks to the Storage REST API with the service role key:
- download: ``GET  {url}/storage/v1/object/{bucket}/{key}``
- upload:   ``POST {url}/storage/v1/object/{bucket}/{key}`` with ``x-upsert``
"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from core.constants import StorageConstants
from core.storage.base import ObjectNotFoundError, StorageError

logger = logging.getLogger(__name__)


class SupabaseStorage:
    """BlobStore backed by Supabase Storage"""

    def __init__(
        self,
        url: str,
        service_role_key: str,
        timeout: float = StorageConstants.DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Supabase storage client.

        Args:
            url: Project URL, e.g. https://xyz.supabase.co
            service_role_key: Service role key used for both apikey and bearer auth
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        if not url or not service_role_key:
            raise ValueError(
                "Supabase storage requires SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY"
            )

        self._client = httpx.AsyncClient(
            base_url=url.rstrip("/") + StorageConstants.SUPABASE_STORAGE_PATH,
            timeout=timeout,
            headers={
                "apikey": service_role_key,
                "Authorization": f"Bearer {service_role_key}",
            },
            transport=transport,
        )

    @staticmethod
    def _object_path(container: str, key: str) -> str:
        return f"/object/{quote(container, safe='')}/{quote(key, safe='/')}"

    async def get(self, container: str, key: str) -> bytes:
        try:
            response = await self._client.get(self._object_path(container, key))
        except httpx.HTTPError as e:
            raise StorageError(f"Download of {container}/{key} failed: {e}", container, key) from e

        # Storage answers 400 with a not_found body for missing objects
        if response.status_code in (400, 404):
            raise ObjectNotFoundError(container, key)
        if response.is_error:
            raise StorageError(
                f"Download of {container}/{key} failed with status {response.status_code}",
                container,
                key,
            )
        return response.content

    async def put(
        self,
        container: str,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        cache_control_seconds: int = 0,
    ) -> None:
        try:
            response = await self._client.post(
                self._object_path(container, key),
                content=data,
                headers={
                    "content-type": content_type,
                    "cache-control": f"max-age={cache_control_seconds}",
                    "x-upsert": "true",
                },
            )
        except httpx.HTTPError as e:
            raise StorageError(f"Upload of {container}/{key} failed: {e}", container, key) from e

        if response.is_error:
            raise StorageError(
                f"Upload of {container}/{key} failed with status {response.status_code}: "
                f"{response.text}",
                container,
                key,
            )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
