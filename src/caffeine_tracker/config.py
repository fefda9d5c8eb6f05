"""Application configuration."""

import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class InvalidTimezoneError(ValueError):
    """Raised when a timezone name cannot be resolved."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    timezone: str = "UTC"
    half_life_hours: float = 4.0
    weight_kg: float = 60.0
    volume_of_distribution_l_per_kg: float = 0.6
    safe_sleep_threshold_concentration: float = 1.5
    max_daily_caffeine_mg: float = 400.0
    recommended_dose_per_kg: float = 5.0
    chart_hours_before: float = 6
    chart_hours_after: float = 18
    chart_points_per_hour: int = 4
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_timezone(name: str | None) -> ZoneInfo:
    """Return a ZoneInfo for ``name``, raising InvalidTimezoneError if unknown."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidTimezoneError("Timezone name is empty")
    try:
        return ZoneInfo(cleaned)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise InvalidTimezoneError(f"Unknown timezone: {cleaned}") from exc
