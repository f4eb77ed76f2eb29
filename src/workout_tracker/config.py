"""Application configuration loaded from environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_prefix="WORKOUT_TRACKER_")

    data_dir: Path = DATA_DIR

    # Statistics backend
    api_base_url: str = "https://api.workout-tracker.example.com"
    api_timeout: float = 30.0  # seconds
    health_timeout: float = 5.0  # seconds

    # Background sync interval in milliseconds
    sync_interval: int = 60000


@lru_cache
def get_settings() -> Settings:
    return Settings()
