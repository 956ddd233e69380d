"""
config.py — Environment configuration for the API.

Uses pydantic-settings for type-safe environment variable handling.
Every setting can be overridden with a LIFECALENDAR_-prefixed variable
or a .env file.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from lifecalendar.providers.emoji_loader import TWEMOJI_BASE_URL
from lifecalendar.providers.font_loader import GOOGLE_FONTS_API_URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LIFECALENDAR_",
        env_file=".env",
        extra="ignore",
    )

    # Server settings
    app_name: str = "Life Calendar"
    app_version: str = "1.0.0"
    debug: bool = False
    api_prefix: str = ""

    # CORS settings
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Embedded calendars are cached for one day
    cache_max_age: int = 86400

    # Fonts (no API key: calendars are rendered without embedded fonts)
    google_fonts_api_url: str = GOOGLE_FONTS_API_URL
    google_fonts_api_key: str = ""
    google_fonts_referer: str = ""

    # Emoji
    twemoji_base_url: str = TWEMOJI_BASE_URL

    http_timeout: float = 30.0

    @property
    def has_fonts_api_key(self) -> bool:
        """Check if a Google Fonts API key is configured."""
        return bool(self.google_fonts_api_key)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
