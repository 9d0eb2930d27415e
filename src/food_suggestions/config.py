"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    environment: str = _ENVIRONMENT
    default_timezone: str = "UTC"
    lookback_days: int = 90
    default_page_limit: int = 10
    max_page_limit: int = 50
    time_sigma_minutes: float = 90.0
    recency_half_life_days: float = 14.0
    weekday_boost: float = 1.3
    include_unsynced_foods: bool = False

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
