"""
Application settings and configuration management.

Uses Pydantic for environment variable validation and type safety.
"""

from functools import lru_cache
from typing import Annotated, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Provides type-safe configuration with validation and defaults.
    """

    # Application settings
    debug: bool = Field(default=False)
    environment: str = Field(default="development")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    log_level: str = Field(default="INFO")

    # Security settings
    allowed_hosts: Annotated[List[str], NoDecode] = Field(default=["*"])
    cors_origins: Annotated[List[str], NoDecode] = Field(default=["*"])
    cors_allow_credentials: bool = Field(default=False)
    cors_allow_methods: List[str] = Field(default=["GET", "POST", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default=["*"])

    # Spotify Web API settings
    spotify_api_base_url: str = Field(default="https://api.spotify.com/v1")
    spotify_request_timeout_seconds: float = Field(default=15.0, gt=0)
    recommendation_limit: int = Field(default=50, ge=1, le=100)
    fallback_seed_genres: Annotated[List[str], NoDecode] = Field(
        default=["pop", "rock", "indie", "electronic", "hip-hop"]
    )

    # Playlist defaults
    default_playlist_name: str = Field(default="Mood Playlist")
    default_playlist_description: str = Field(default="Generated from image mood")
    playlist_public: bool = Field(default=False)

    # Image processing settings
    max_image_size_mb: int = Field(default=20, gt=0)
    image_download_timeout_seconds: float = Field(default=15.0, gt=0)
    palette_sample_size: int = Field(default=256, ge=16)
    palette_quantize_colors: int = Field(default=16, ge=5, le=256)

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore"
    }

    @field_validator("allowed_hosts", "cors_origins", "fallback_seed_genres", mode="before")
    @classmethod
    def parse_comma_separated_list(cls, v):
        """Parse comma-separated string into list."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @property
    def max_image_size_bytes(self) -> int:
        """Maximum accepted image payload in bytes."""
        return self.max_image_size_mb * 1024 * 1024


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are loaded only once
    and reused throughout the application lifecycle.
    """
    return Settings()
