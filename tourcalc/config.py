"""Typed settings configuration - single source of truth."""

from enum import Enum
from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class HotelShrinkPolicy(str, Enum):
    """How hotel nights are removed when the trip gets shorter."""

    floor_zero = "floor_zero"
    floor_one = "floor_one"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="TOURCALC_", extra="ignore"
    )

    # Persistence
    database_url: str | None = None
    local_store_path: str = "tourcalc_saves.json"

    # Advisory text generation
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"
    advisory_language: str = "Italian"

    # Autosave (seconds)
    autosave_enabled: bool = True
    autosave_interval_seconds: float = 30.0

    # Reshaping rules
    min_duration_days: int = 0
    hotel_shrink_policy: HotelShrinkPolicy = HotelShrinkPolicy.floor_zero

    # Default daily costs used when a per-day vector grows from empty
    default_guide_daily_rate: float = 150.0
    default_driver_daily_rate: float = 120.0
    default_staff_lunch_cost: float = 25.0
    default_staff_accommodation_cost: float = 90.0
    default_van_rental_cost: float = 160.0
    default_fuel_cost: float = 40.0
    default_bike_rental_cost: float = 30.0
    default_client_dinner_cost: float = 0.0
    default_guide_bike_cost: float = 0.0
    default_hotel_cost_per_night: float = 90.0

    # UI
    backend_url: str = "http://localhost:8000"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
