"""
Application configuration for the Image CDN.

Settings are read from environment variables once, validated with
pydantic and then passed explicitly to every component.
"""

import os
from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from core.constants import (
    APIConstants,
    CacheConstants,
    ImageConstants,
    StorageConstants,
)
from core.enums import StorageBackend
from schemas import ValidationLimits


class StorageConfig(BaseModel):
    backend: StorageBackend = StorageBackend.SUPABASE
    supabase_url: str = ""
    service_role_key: str = Field(default="", repr=False)
    origin_bucket: str = Field(
        default=StorageConstants.DEFAULT_ORIGIN_BUCKET, pattern=StorageConstants.BUCKET_NAME_PATTERN
    )
    cache_bucket: str = Field(
        default=StorageConstants.DEFAULT_CACHE_BUCKET, pattern=StorageConstants.BUCKET_NAME_PATTERN
    )
    local_root: str = StorageConstants.DEFAULT_LOCAL_ROOT
    timeout_seconds: float = Field(default=StorageConstants.DEFAULT_TIMEOUT_SECONDS, gt=0)


class ImageConfig(BaseModel):
    max_width: int = Field(
        default=ImageConstants.DEFAULT_MAX_WIDTH, ge=ImageConstants.MIN_DIMENSION
    )
    max_height: int = Field(
        default=ImageConstants.DEFAULT_MAX_HEIGHT, ge=ImageConstants.MIN_DIMENSION
    )
    default_quality: int = Field(
        default=ImageConstants.DEFAULT_QUALITY,
        ge=ImageConstants.MIN_QUALITY,
        le=ImageConstants.MAX_QUALITY,
    )
    cache_max_age_seconds: int = Field(default=CacheConstants.DEFAULT_MAX_AGE_SECONDS, ge=0)
    cache_immutable: bool = CacheConstants.DEFAULT_IMMUTABLE


class SecurityConfig(BaseModel):
    signing_secret: Optional[str] = Field(default=None, repr=False)

    @property
    def signing_enabled(self) -> bool:
        return bool(self.signing_secret)


class APIConfig(BaseModel):
    host: str = APIConstants.DEFAULT_HOST
    port: int = Field(default=APIConstants.DEFAULT_PORT, ge=1, le=65535)
    cors_enabled: bool = True
    cors_origins: List[str] = ["*"]


class SystemConfig(BaseModel):
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    debug: bool = False


class Settings(BaseModel):
    """Top-level application settings"""

    environment: str = "development"
    storage: StorageConfig = StorageConfig()
    image: ImageConfig = ImageConfig()
    security: SecurityConfig = SecurityConfig()
    api: APIConfig = APIConfig()
    system: SystemConfig = SystemConfig()

    @property
    def limits(self) -> ValidationLimits:
        """Validation limits handed to the parameter validator."""
        return ValidationLimits(
            max_width=self.image.max_width,
            max_height=self.image.max_height,
            default_quality=self.image.default_quality,
            default_bucket=self.storage.origin_bucket,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Configuration without secrets, safe to expose."""
        data = self.model_dump(
            mode="json",
            exclude={
                "storage": {"service_role_key"},
                "security": {"signing_secret"},
            },
        )
        data["security"]["signing_enabled"] = self.security.signing_enabled
        return data


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return value.strip()


def _env_flag(name: str) -> Optional[bool]:
    value = _env(name)
    if value is None:
        return None
    return value.lower() in ("1", "true", "yes", "on")


def _section(**values: Any) -> Dict[str, Any]:
    """Drop unset values so model defaults apply."""
    return {k: v for k, v in values.items() if v is not None}


def load_settings() -> Settings:
    """
    Build settings from the environment.

    Raises:
        pydantic.ValidationError: If any variable holds an invalid value
    """
    cors_origins = _env("CORS_ORIGINS")
    log_level = _env("LOG_LEVEL")

    return Settings(
        **_section(environment=_env("ENVIRONMENT")),
        storage=StorageConfig(
            **_section(
                backend=_env("STORAGE_BACKEND"),
                supabase_url=_env("SUPABASE_URL"),
                service_role_key=_env("SUPABASE_SERVICE_ROLE_KEY"),
                origin_bucket=_env("ORIGIN_DEFAULT_BUCKET"),
                cache_bucket=_env("CACHE_BUCKET"),
                local_root=_env("LOCAL_STORAGE_ROOT"),
                timeout_seconds=_env("STORAGE_TIMEOUT_SECONDS"),
            )
        ),
        image=ImageConfig(
            **_section(
                max_width=_env("MAX_WIDTH"),
                max_height=_env("MAX_HEIGHT"),
                default_quality=_env("DEFAULT_QUALITY"),
                cache_max_age_seconds=_env("CACHE_MAX_AGE_SECONDS"),
                cache_immutable=_env_flag("CACHE_IMMUTABLE"),
            )
        ),
        security=SecurityConfig(signing_secret=_env("IMAGE_CDN_SIGNING_SECRET")),
        api=APIConfig(
            **_section(
                host=_env("API_HOST"),
                port=_env("API_PORT"),
                cors_enabled=_env_flag("CORS_ENABLED"),
                cors_origins=[o.strip() for o in cors_origins.split(",")] if cors_origins else None,
            )
        ),
        system=SystemConfig(
            **_section(
                log_level=log_level.upper() if log_level else None,
                debug=_env_flag("DEBUG"),
            )
        ),
    )


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading the environment."""
    return load_settings()
