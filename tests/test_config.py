"""Tests for configuration management."""

import os
import pytest
from unittest.mock import patch
from pydantic import ValidationError

from llm_webscraper.config.settings import DEFAULT_USER_AGENT, AppSettings, get_settings
from llm_webscraper.core import create_extractor


class TestAppSettings:
    """Test application settings and validation."""

    def test_default_settings(self):
        """Test default configuration values."""
        settings = AppSettings(_env_file=None)

        assert settings.host == "0.0.0.0"
        assert settings.port == 8000
        assert settings.reload is False
        assert settings.fetch_timeout is None
        assert settings.user_agent == DEFAULT_USER_AGENT
        assert settings.log_level == "INFO"
        assert settings.enable_cors is True

    def test_environment_override(self):
        """Test environment variable overrides."""
        with patch.dict(os.environ, {
            'HOST': '127.0.0.1',
            'PORT': '9000',
            'FETCH_TIMEOUT': '12.5',
            'DEFAULT_MODEL': 'gpt-4o',
            'LOG_LEVEL': 'debug'
        }):
            settings = AppSettings()

            assert settings.host == "127.0.0.1"
            assert settings.port == 9000
            assert settings.fetch_timeout == 12.5
            assert settings.default_model == "gpt-4o"
            assert settings.log_level == "DEBUG"

    def test_validation_errors(self):
        """Test configuration validation."""
        # Test invalid log level
        with patch.dict(os.environ, {'LOG_LEVEL': 'INVALID'}):
            with pytest.raises(ValidationError):
                AppSettings()

        # Test non-positive timeout
        with patch.dict(os.environ, {'FETCH_TIMEOUT': '0'}):
            with pytest.raises(ValidationError):
                AppSettings()

        # Test blank default model
        with pytest.raises(ValidationError):
            AppSettings(default_model="  ")

    def test_cors_origins_parsing(self):
        """Test CORS origins parsing."""
        # Single origin
        with patch.dict(os.environ, {'CORS_ORIGINS': 'https://example.com'}):
            settings = AppSettings()
            assert settings.get_cors_origins() == ['https://example.com']

        # Multiple origins
        with patch.dict(os.environ, {'CORS_ORIGINS': 'https://app.com, https://api.com'}):
            settings = AppSettings()
            assert settings.get_cors_origins() == ['https://app.com', 'https://api.com']

        # Wildcard
        with patch.dict(os.environ, {'CORS_ORIGINS': '*'}):
            settings = AppSettings()
            assert settings.get_cors_origins() == ['*']

    def test_config_generators(self):
        """Test configuration dict generators."""
        settings = AppSettings(fetch_timeout=10, openai_base_url="http://localhost:11434/v1")

        assert settings.get_fetcher_config() == {
            "timeout": 10,
            "user_agent": settings.user_agent,
        }
        assert settings.get_completion_config() == {"base_url": "http://localhost:11434/v1"}

        server_config = settings.get_server_config()
        for key in ["host", "port", "reload", "log_level"]:
            assert key in server_config
        assert server_config["log_level"] == settings.log_level.lower()

    @pytest.mark.asyncio
    async def test_create_extractor_from_settings(self):
        """Settings flow into the extractor's collaborators."""
        settings = AppSettings(
            fetch_timeout=7,
            user_agent="unit-test/1.0",
            openai_base_url="http://localhost:11434/v1",
        )

        async with create_extractor(settings) as extractor:
            assert extractor.fetcher.timeout == 7
            assert extractor.fetcher.http_client.headers["User-Agent"] == "unit-test/1.0"
            assert extractor.completion_client.base_url == "http://localhost:11434/v1"


class TestSettingsCache:
    """Test settings caching functionality."""

    def test_settings_caching(self):
        """Test that get_settings() returns cached instance."""
        get_settings.cache_clear()

        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2

    def test_cache_with_environment_changes(self):
        """Test cache behavior with environment changes."""
        get_settings.cache_clear()

        settings1 = get_settings()
        initial_port = settings1.port

        # Change environment (cache won't reflect this)
        with patch.dict(os.environ, {'PORT': '9999'}):
            settings2 = get_settings()
            assert settings2.port == initial_port

        # Clear cache and try again
        get_settings.cache_clear()
        with patch.dict(os.environ, {'PORT': '9999'}):
            settings3 = get_settings()
            assert settings3.port == 9999

        get_settings.cache_clear()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
