"""Application settings and configuration management."""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class AppSettings(BaseSettings):
    """Application configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    reload: bool = Field(default=False)

    # Fetch Configuration
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    fetch_timeout: Optional[float] = Field(default=None)  # None keeps the httpx default

    # Completion Provider Configuration
    openai_base_url: Optional[str] = Field(default=None)
    default_model: str = Field(default="gpt-4o-mini")

    # Logging Configuration
    log_level: str = Field(default="INFO")

    # CORS Configuration
    enable_cors: bool = Field(default=True)
    cors_origins: str = Field(default="*")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("fetch_timeout")
    @classmethod
    def validate_fetch_timeout(cls, v):
        """Validate fetch timeout."""
        if v is not None and v <= 0:
            raise ValueError("fetch_timeout must be positive")
        return v

    @field_validator("default_model")
    @classmethod
    def validate_default_model(cls, v):
        """Reject blank model identifiers."""
        if not v.strip():
            raise ValueError("default_model cannot be empty")
        return v.strip()

    def get_cors_origins(self) -> List[str]:
        """Get CORS origins as a list."""
        if self.cors_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def get_server_config(self) -> dict:
        """Get configuration dict for the uvicorn server."""
        return {
            "host": self.host,
            "port": self.port,
            "reload": self.reload,
            "log_level": self.log_level.lower(),
        }

    def get_fetcher_config(self) -> dict:
        """Get configuration dict for PageFetcher initialization."""
        return {
            "timeout": self.fetch_timeout,
            "user_agent": self.user_agent,
        }

    def get_completion_config(self) -> dict:
        """Get configuration dict for CompletionClient initialization."""
        return {
            "base_url": self.openai_base_url,
        }


@lru_cache()
def get_settings() -> AppSettings:
    """Get application settings (cached)."""
    return AppSettings()
