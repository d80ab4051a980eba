"""
Application configuration using pydantic-settings.

Loads environment variables from .env file and provides typed access
to configuration values throughout the application.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LISTINGS_SOURCE = str(Path(__file__).parent / "data" / "listings.json")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Listing store: a local JSON file or an http(s) URL serving the same document
    listings_source: str = DEFAULT_LISTINGS_SOURCE

    # Search pagination
    default_page_size: int = 12
    max_page_size: int = 100
    featured_limit: int = 6

    # Chat assistant UX timings, echoed to clients and never awaited server-side
    chat_typing_delay_ms: int = 1500
    chat_redirect_delay_ms: int = 2000
    default_language: str = "en"

    # Application settings
    debug: bool = False
    app_name: str = "Property Marketplace API"
    app_version: str = "0.1.0"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures we only load settings once and reuse
    the same instance throughout the application lifecycle.
    """
    return Settings()
