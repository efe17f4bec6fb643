"""Configuration settings for the Workout Map app."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from WORKOUT_MAP_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WORKOUT_MAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    db_path: Path = Path("workouts.db")
    storage_key: str = "workouts"

    # Map
    map_element_id: str = "map"
    zoom_level: int = Field(default=13, ge=1, le=20)

    # Headless position source; positioning is unavailable unless both are set
    home_latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    home_longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    # API settings
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
