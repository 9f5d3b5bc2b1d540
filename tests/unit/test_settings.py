"""
Unit tests for service settings.
"""
import pytest
from pydantic import ValidationError as SettingsValidationError

from config.settings import Settings, get_settings


class TestSettings:
    """Tests for Settings."""

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "memory")
        monkeypatch.setenv("KAFKA_ENABLED", "false")
        monkeypatch.setenv("LOG_FORMAT", "text")
        monkeypatch.setenv("PORT", "9000")

        settings = Settings(_env_file=None)

        assert settings.storage_backend == "memory"
        assert settings.kafka_enabled is False
        assert settings.json_logs is False
        assert settings.port == 9000

    def test_unknown_storage_backend_rejected(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "sqlite")

        with pytest.raises(SettingsValidationError):
            Settings(_env_file=None)

    def test_cors_origins_are_split(self):
        settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test,")

        assert settings.get_cors_origins() == ["http://a.test", "http://b.test"]

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
