"""
Tests for environment-driven configuration
"""

import pytest
from pydantic import ValidationError

from config import Settings, get_settings, load_settings
from core.enums import StorageBackend

ENV_VARS = [
    "ENVIRONMENT",
    "STORAGE_BACKEND",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "ORIGIN_DEFAULT_BUCKET",
    "CACHE_BUCKET",
    "LOCAL_STORAGE_ROOT",
    "STORAGE_TIMEOUT_SECONDS",
    "MAX_WIDTH",
    "MAX_HEIGHT",
    "DEFAULT_QUALITY",
    "CACHE_MAX_AGE_SECONDS",
    "CACHE_IMMUTABLE",
    "IMAGE_CDN_SIGNING_SECRET",
    "API_HOST",
    "API_PORT",
    "CORS_ENABLED",
    "CORS_ORIGINS",
    "LOG_LEVEL",
    "DEBUG",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every setting from the environment"""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


class TestLoadSettings:
    def test_defaults(self, clean_env):
        settings = load_settings()

        assert settings.storage.backend == StorageBackend.SUPABASE
        assert settings.storage.origin_bucket == "images"
        assert settings.storage.cache_bucket == "images-cache"
        assert (settings.image.max_width, settings.image.max_height) == (2000, 2000)
        assert settings.image.default_quality == 80
        assert settings.image.cache_max_age_seconds == 31536000
        assert settings.image.cache_immutable is True
        assert settings.security.signing_enabled is False
        assert settings.system.log_level == "INFO"

    def test_reads_environment(self, clean_env):
        clean_env.setenv("STORAGE_BACKEND", "local")
        clean_env.setenv("LOCAL_STORAGE_ROOT", "/tmp/blobs")
        clean_env.setenv("ORIGIN_DEFAULT_BUCKET", "media")
        clean_env.setenv("MAX_WIDTH", "1200")
        clean_env.setenv("DEFAULT_QUALITY", "70")
        clean_env.setenv("CACHE_IMMUTABLE", "false")
        clean_env.setenv("IMAGE_CDN_SIGNING_SECRET", "  s3cret ")
        clean_env.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
        clean_env.setenv("LOG_LEVEL", "debug")

        settings = load_settings()

        assert settings.storage.backend == StorageBackend.LOCAL
        assert settings.storage.local_root == "/tmp/blobs"
        assert settings.image.max_width == 1200
        assert settings.image.cache_immutable is False
        assert settings.security.signing_secret == "s3cret"
        assert settings.api.cors_origins == ["https://a.example", "https://b.example"]
        assert settings.system.log_level == "DEBUG"

        limits = settings.limits
        assert (limits.max_width, limits.max_height) == (1200, 2000)
        assert limits.default_quality == 70
        assert limits.default_bucket == "media"

    def test_blank_values_use_defaults(self, clean_env):
        clean_env.setenv("MAX_WIDTH", "")
        clean_env.setenv("IMAGE_CDN_SIGNING_SECRET", "   ")
        settings = load_settings()
        assert settings.image.max_width == 2000
        assert settings.security.signing_enabled is False

    @pytest.mark.parametrize(
        "name,value",
        [
            ("STORAGE_BACKEND", "s3"),
            ("MAX_WIDTH", "0"),
            ("MAX_HEIGHT", "wide"),
            ("DEFAULT_QUALITY", "101"),
            ("API_PORT", "70000"),
            ("LOG_LEVEL", "verbose"),
            ("ORIGIN_DEFAULT_BUCKET", "a/b"),
            ("CACHE_BUCKET", "../cache"),
        ],
    )
    def test_invalid_values_raise(self, clean_env, name, value):
        clean_env.setenv(name, value)
        with pytest.raises(ValidationError):
            load_settings()

    def test_get_settings_is_cached(self, clean_env):
        assert get_settings() is get_settings()


class TestSettingsToDict:
    def test_secrets_are_omitted(self):
        settings = Settings.model_validate(
            {
                "storage": {"service_role_key": "service-key"},
                "security": {"signing_secret": "s3cret"},
            }
        )
        data = settings.to_dict()

        assert "service_role_key" not in data["storage"]
        assert "signing_secret" not in data["security"]
        assert data["security"]["signing_enabled"] is True
        assert "service-key" not in repr(settings)
        assert "s3cret" not in str(data)

    def test_enums_serialized_as_values(self):
        assert Settings().to_dict()["storage"]["backend"] == "supabase"
