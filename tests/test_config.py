"""Tests for configuration module."""

import json
import logging
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from almas_enraizadas.config import (
    DEFAULT_SITE_URL,
    Settings,
    configure_logging,
    get_settings,
    print_settings_json,
)


class TestSettings:
    """Test Settings class."""

    def test_default_settings(self) -> None:
        """Settings should have sensible defaults."""
        settings = Settings()

        assert settings.site_url == DEFAULT_SITE_URL
        assert settings.sanity_project_id == ""
        assert settings.sanity_dataset == "production"
        assert settings.sanity_use_cdn is False
        assert settings.openai_api_key is None
        assert settings.chat_model == "gpt-4o-mini"
        assert settings.image_model == "dall-e-3"
        assert settings.log_level == "INFO"
        assert settings.is_cms_configured is False
        assert settings.is_ai_configured is False

    def test_settings_from_env(self) -> None:
        """Settings should be loadable from environment variables."""
        with patch.dict(
            os.environ,
            {
                "ALMAS_SANITY_PROJECT_ID": "abc123",
                "ALMAS_SANITY_USE_CDN": "true",
                "ALMAS_LOG_LEVEL": "DEBUG",
            },
        ):
            settings = Settings()
            assert settings.sanity_project_id == "abc123"
            assert settings.sanity_use_cdn is True
            assert settings.log_level == "DEBUG"
            assert settings.is_cms_configured is True

    def test_plain_openai_key_env(self) -> None:
        """The provider key should also be read from OPENAI_API_KEY."""
        with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-plain"}):
            settings = Settings()
            assert settings.openai_api_key == "sk-plain"
            assert settings.is_ai_configured is True

    def test_vercel_url_fallback(self) -> None:
        """The deployment host should become the site URL when set."""
        with patch.dict(os.environ, {"VERCEL_URL": "almas-preview.vercel.app"}):
            assert Settings().site_url == "https://almas-preview.vercel.app"

    def test_trailing_slash_stripped(self) -> None:
        """Base URLs should not keep a trailing slash."""
        settings = Settings(site_url="https://example.test/", openai_base_url="http://llm/v1/")
        assert settings.site_url == "https://example.test"
        assert settings.openai_base_url == "http://llm/v1"

    def test_invalid_log_level_rejected(self) -> None:
        """Unknown log levels should fail validation."""
        with pytest.raises(ValidationError):
            Settings(log_level="VERBOSE")

    def test_timeout_bounds(self) -> None:
        """Request timeout must be positive."""
        with pytest.raises(ValidationError):
            Settings(request_timeout=0)


class TestGetSettings:
    """Test get_settings function."""

    def test_get_settings_returns_settings(self) -> None:
        """get_settings should return a Settings instance."""
        settings = get_settings()
        assert isinstance(settings, Settings)


class TestPrintSettingsJson:
    """Test print_settings_json function."""

    def test_print_settings_json(self) -> None:
        """print_settings_json should return valid JSON."""
        settings = Settings(sanity_project_id="abc123")
        parsed = json.loads(print_settings_json(settings))

        assert parsed["sanity_project_id"] == "abc123"
        assert "site_url" in parsed
        assert "chat_model" in parsed

    def test_secrets_are_redacted(self) -> None:
        """Tokens and API keys should never be rendered."""
        settings = Settings(sanity_token="secret-cms", openai_api_key="sk-secret")
        json_str = print_settings_json(settings)

        assert "secret-cms" not in json_str
        assert "sk-secret" not in json_str
        parsed = json.loads(json_str)
        assert "sanity_token" not in parsed
        assert "openai_api_key" not in parsed

    def test_print_settings_json_default(self) -> None:
        """print_settings_json without args should use default settings."""
        parsed = json.loads(print_settings_json())
        assert "site_url" in parsed


class TestConfigureLogging:
    """Test configure_logging function."""

    def test_sets_root_level(self) -> None:
        """The root logger should take the configured level."""
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging("WARNING")
            assert root.level == logging.WARNING
            assert root.handlers
        finally:
            root.setLevel(previous)
