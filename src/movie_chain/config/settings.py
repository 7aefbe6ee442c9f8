# ABOUTME: Configuration settings for the movie chain game using Pydantic Settings.
# ABOUTME: Loads environment variables and .env values and provides type-safe configuration access.

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    # Authority API Configuration
    api_base_url: str = Field(
        default="http://localhost:8080/api",
        description="Base URL of the game authority (start game, validate step, search)"
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Transport timeout for a single authority request"
    )

    # Display Configuration
    image_base_url: str = Field(
        default="https://image.tmdb.org/t/p/w185",
        description="Prefix for partial profile and poster paths"
    )
    share_base_url: str = Field(
        default="http://localhost:5173/",
        description="Entry address used when building shareable game links"
    )

    # Search Settings
    search_min_length: int = Field(
        default=2,
        ge=1,
        description="Minimum query length before a search request is sent"
    )
    search_debounce_ms: int = Field(
        default=300,
        ge=0,
        description="Quiet period before a typed query is searched"
    )
    search_cache_ttl_seconds: float = Field(
        default=30.0,
        ge=0,
        description="How long search results stay fresh in the query cache"
    )

    # Application Settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for rotating log files (default: logs)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def search_debounce_seconds(self) -> float:
        """Debounce quiet period in seconds, as asyncio expects"""
        return self.search_debounce_ms / 1000


# Singleton settings instance - lazy initialization to allow import without .env
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the singleton settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
