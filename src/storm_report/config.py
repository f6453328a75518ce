"""
Application configuration via pydantic-settings.

All values come from ``STORM_REPORT_*`` environment variables (or a local
``.env``) with defaults suited to continental Portugal.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STORM_REPORT_", env_file=".env", extra="ignore")

    # App
    app_name: str = "storm-report"
    debug: bool = False

    # Locality
    timezone: str = "Europe/Lisbon"
    country_code: str = Field(default="PT", min_length=2, max_length=2)
    default_locality: str = "porto"

    # Station observations (Meteostat)
    meteostat_api_key: SecretStr | None = None
    station_radius_km: int = Field(default=50, gt=0)
    station_limit: int = Field(default=5, ge=1, le=20)

    # Merge
    reanalysis_fallback: bool = True

    # Thunder
    recent_window_hours: int = Field(default=24, gt=0)

    # Upstream HTTP
    http_timeout: float = Field(default=30.0, gt=0)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once."""
    return Settings()
