"""API settings."""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    prospeo_api_key: str = ""
    prospeo_api_url: str = "https://api.prospeo.io"
    prospeo_max_concurrent: int = 5
    prospeo_min_interval: float = 0.6

    icypeas_api_key: str = ""
    icypeas_api_url: str = "https://api.icypeas.com"
    icypeas_max_concurrent: int = 3
    icypeas_min_interval: float = 1.0

    provider_timeout_seconds: float = 10.0
    batch_size: int = 10
    job_max_age_minutes: int = 60
    eviction_interval_minutes: int = 30

    max_upload_mb: int = 10
    max_rows: int = 1000
    cors_origin: str = "http://localhost:5173"

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings."""
    return Settings()
