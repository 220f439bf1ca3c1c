"""Configuration settings for almas_enraizadas.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

import logging
import os
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SITE_URL = "https://almazasenraizadas.com"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Fields never rendered in config dumps
SECRET_FIELDS = frozenset({"openai_api_key", "sanity_token"})


def _default_site_url() -> str:
    """Return the default public base URL.

    Falls back to the deployment host when running on Vercel.
    """
    vercel_url = os.environ.get("VERCEL_URL")
    if vercel_url:
        return f"https://{vercel_url}"
    return DEFAULT_SITE_URL


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the ALMAS_ prefix.
    The OpenAI key is also accepted as plain OPENAI_API_KEY.
    """

    model_config = SettingsConfigDict(
        env_prefix="ALMAS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Site
    site_url: str = Field(
        default_factory=_default_site_url,
        description="Public base URL used for canonical and Open Graph URLs",
    )

    # CMS
    sanity_project_id: str = Field(
        default="",
        description="Sanity project ID (empty disables the CMS client)",
    )
    sanity_dataset: str = Field(default="production", description="Sanity dataset")
    sanity_api_version: str = Field(
        default="2024-01-01",
        description="Sanity API version for GROQ compatibility",
    )
    sanity_use_cdn: bool = Field(
        default=False,
        description="Query the API CDN instead of the live API",
    )
    sanity_token: str | None = Field(
        default=None,
        description="Sanity API token (needed for asset uploads)",
    )

    # AI provider
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ALMAS_OPENAI_API_KEY", "OPENAI_API_KEY"),
        description="OpenAI API key",
    )
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL of the OpenAI-compatible API",
    )
    chat_model: str = Field(default="gpt-4o-mini", description="Chat model")
    image_model: str = Field(default="dall-e-3", description="Image model")

    # Operational
    request_timeout: float = Field(
        default=60.0,
        gt=0,
        le=600,
        description="Timeout for outbound HTTP requests (seconds)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("site_url", "openai_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs so paths can be appended directly."""
        return v.rstrip("/")

    @property
    def is_cms_configured(self) -> bool:
        """Whether a CMS project is configured."""
        return bool(self.sanity_project_id)

    @property
    def is_ai_configured(self) -> bool:
        """Whether an AI provider key is configured."""
        return bool(self.openai_api_key)


def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON with secrets redacted.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2, exclude=set(SECRET_FIELDS))


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process.

    Args:
        level: Logging level name.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)


__all__ = [
    "Settings",
    "configure_logging",
    "get_settings",
    "print_settings_json",
]
