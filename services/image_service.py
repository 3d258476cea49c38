"""
Image Service - Cache-aware transformation pipeline.

Verifies the request signature, validates parameters, derives the cache
key and then either serves the cached derivative or fetches the origin,
transforms it and writes the result back to the cache.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from api.exceptions import CacheError, NotFoundError
from core.constants import CacheConstants
from core.enums import ImageFormat
from core.storage.base import BlobStore, StorageError
from core.utils.decorators import timer
from schemas import TransformConfig, ValidationLimits
from transform.cache_key import build_cache_key, get_mime_type, infer_format_from_path
from transform.engine import TransformEngine
from transform.params import QueryParams, parse_query_params
from transform.security import check_signature

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageResult:
    """Bytes to serve plus how they were produced"""

    data: bytes
    format: ImageFormat
    cache_key: str
    cache_hit: bool

    @property
    def content_type(self) -> str:
        return get_mime_type(self.format)


class ImageService:
    """
    Service for serving transformed images.

    Holds no per-request state: concurrent requests for the same key may
    both miss and both write, which is harmless because the transform is
    a pure function of its inputs.
    """

    def __init__(
        self,
        origin_store: BlobStore,
        cache_store: BlobStore,
        cache_bucket: str,
        limits: ValidationLimits,
        signing_secret: Optional[str] = None,
        engine: Optional[TransformEngine] = None,
        cache_max_age_seconds: int = CacheConstants.DEFAULT_MAX_AGE_SECONDS,
    ):
        """
        Initialize image service.

        Args:
            origin_store: Store holding source images (read only)
            cache_store: Store holding transformed derivatives
            cache_bucket: Cache container name
            limits: Validation limits and defaults
            signing_secret: Shared secret; None disables signing
            engine: Transform engine; defaults to one with the real codec
            cache_max_age_seconds: Cache-control stored with derivatives
        """
        self.origin_store = origin_store
        self.cache_store = cache_store
        self.cache_bucket = cache_bucket
        self.limits = limits
        self.signing_secret = signing_secret
        self.engine = engine or TransformEngine()
        self.cache_max_age_seconds = cache_max_age_seconds

    async def process(self, params: QueryParams) -> ImageResult:
        """
        Run one request through the pipeline.

        Args:
            params: Raw query parameters in received order

        Returns:
            ImageResult with the bytes to serve

        Raises:
            SignatureError: If signing is enabled and the token is invalid
            ValidationError: If any parameter is invalid
            NotFoundError: If the origin image cannot be fetched
            TransformError: If decoding or encoding fails
        """
        with timer() as t:
            result = await self._process(params)

        logger.info(
            f"Request completed in {t['ms']}ms "
            f"({'cached' if result.cache_hit else 'processed'})"
        )
        return result

    async def _process(self, params: QueryParams) -> ImageResult:
        check_signature(params, self.signing_secret)
        config = parse_query_params(params, self.limits)

        logger.info(
            f"Processing request: {config.bucket}/{config.path} "
            f"w={config.width} h={config.height} fit={config.fit.value} "
            f"format={config.format.value if config.format else None} q={config.quality}"
        )

        cache_key = build_cache_key(
            config, self.limits.default_quality, self.limits.default_bucket
        )
        source_format = infer_format_from_path(config.path)
        logger.debug(f"Cache key: {cache_key}")

        if config.no_cache:
            logger.info("Cache bypassed (no_cache=1)")
        else:
            cached = await self._lookup_cache(cache_key)
            if cached is not None:
                logger.info("Cache HIT - returning cached image")
                return ImageResult(cached, config.format or source_format, cache_key, True)
            logger.info("Cache MISS - will process image")

        origin = await self._fetch_origin(config)

        data, output_format = await run_in_threadpool(
            self.engine.transform, origin, config, source_format
        )
        logger.info(f"Transformation complete - output: {len(data)} bytes")

        await self._write_cache(cache_key, data, output_format)

        return ImageResult(data, output_format, cache_key, False)

    async def _lookup_cache(self, cache_key: str) -> Optional[bytes]:
        """Cached derivative, or None on any lookup failure."""
        try:
            data = await self.cache_store.get(self.cache_bucket, cache_key)
        except StorageError as e:
            logger.debug(str(CacheError("lookup", cache_key, e)))
            return None
        return data or None

    async def _fetch_origin(self, config: TransformConfig) -> bytes:
        logger.info(f"Downloading original image from bucket: {config.bucket}")
        try:
            data = await self.origin_store.get(config.bucket, config.path)
        except StorageError as e:
            logger.error(f"Failed to download original image: {e}")
            raise NotFoundError(f"{config.bucket}/{config.path}") from e

        logger.info(f"Downloaded {len(data)} bytes")
        return data

    async def _write_cache(self, cache_key: str, data: bytes, image_format: ImageFormat) -> bool:
        """
        Store a derivative; failures are logged and swallowed.

        Returns:
            True if the write succeeded
        """
        try:
            await self.cache_store.put(
                self.cache_bucket,
                cache_key,
                data,
                get_mime_type(image_format),
                self.cache_max_age_seconds,
            )
        except StorageError as e:
            logger.error(str(CacheError("write", cache_key, e)))
            return False

        logger.info("Successfully cached transformed image")
        return True
