"""
Tests for settings loading
"""
import pytest
from pydantic import ValidationError

from gsc.config import Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.default_row_limit == 1000
        assert settings.default_language_code == "en-US"
        assert settings.retry_attempts == 3
        assert settings.timeout == 30
        assert settings.cache_enabled is False
        assert settings.scopes == ["https://www.googleapis.com/auth/webmasters"]

    def test_from_nested_dict(self):
        settings = Settings.from_dict({
            "application_name": "My App",
            "timeout": "60",
            "search_analytics": {"default_row_limit": 500, "default_dimensions": ["query"], "default_days": 7},
            "url_inspection": {"default_language_code": "de-DE"},
            "cache": {"enabled": "true", "ttl": 60, "prefix": "x_"},
            "debug": True,
        })
        assert settings.application_name == "My App"
        assert settings.timeout == 60
        assert settings.default_row_limit == 500
        assert settings.default_dimensions == ["query"]
        assert settings.default_days == 7
        assert settings.default_language_code == "de-DE"
        assert settings.cache_enabled is True
        assert settings.cache_ttl == 60
        assert settings.cache_prefix == "x_"
        assert settings.debug is True

    def test_empty_or_null_values_keep_defaults(self):
        settings = Settings.from_dict({"scopes": None, "search_analytics": None, "unknown": 1})
        assert settings == Settings()
        assert Settings.from_dict(None) == Settings()


class TestEnvironment:
    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_SEARCH_CONSOLE_TIMEOUT", "5")
        monkeypatch.setenv("GOOGLE_SEARCH_CONSOLE_RETRY_ATTEMPTS", "0")
        monkeypatch.setenv("GOOGLE_SEARCH_CONSOLE_CACHE_ENABLED", "1")
        monkeypatch.setenv("GOOGLE_SEARCH_CONSOLE_DEBUG", "false")
        monkeypatch.setenv("GOOGLE_SEARCH_CONSOLE_APP_NAME", "crawler")

        settings = Settings()

        assert settings.timeout == 5
        assert settings.retry_attempts == 0
        assert settings.cache_enabled is True
        assert settings.debug is False
        assert settings.application_name == "crawler"

    def test_env_beats_config_file(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_SEARCH_CONSOLE_RETRY_ATTEMPTS", "7")
        monkeypatch.setenv("GOOGLE_SEARCH_CONSOLE_CACHE_TTL", "10")

        settings = Settings.from_dict({"retry_attempts": 1, "timeout": 9, "cache": {"ttl": 60}})

        assert settings.retry_attempts == 7
        assert settings.cache_ttl == 10
        assert settings.timeout == 9

    def test_bad_value_names_the_field(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_SEARCH_CONSOLE_TIMEOUT", "30s")

        with pytest.raises(ValidationError) as exc:
            Settings()

        assert "timeout" in str(exc.value)
