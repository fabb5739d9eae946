"""Application configuration loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable loading."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Synthetic data generation
    death_count: int = 5000
    random_seed: int | None = None  # None = different data every start

    # Background map image
    map_image_url: str = (
        "https://oldschool.runescape.wiki/images/thumb/The_Wilderness.png/"
        "800px-The_Wilderness.png?48133"
    )
    map_image_timeout_seconds: float = 10.0

    # Dashboard
    dashboard_title: str = "OSRS Wilderness Death Analytics Dashboard"
    api_base_url: str = "http://localhost:10000"  # Used by the Streamlit "Live API" source

    # Logging
    log_level: str = "INFO"

    # Server - Render injects PORT dynamically
    port: int = 10000  # Default for Render, overridden by $PORT env var


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
