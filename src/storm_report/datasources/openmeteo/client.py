"""Open-Meteo reanalysis API constants and URL builders.

API docs:
  - ERA5: https://open-meteo.com/en/docs/historical-weather-api
  - Archive: https://archive-api.open-meteo.com/v1/archive
"""

from __future__ import annotations

from datetime import date

from storm_report.services.http import build_url

ERA5_API = "https://archive-api.open-meteo.com/v1/era5"
ARCHIVE_API = "https://archive-api.open-meteo.com/v1/archive"

# Hourly variables we request, in km/h and mm
HOURLY_VARS = ["wind_speed_10m", "wind_gusts_10m", "precipitation"]


def hourly_url(base: str, lat: float, lon: float, start: date, end: date, tz: str) -> str:
    return build_url(
        base,
        {
            "latitude": lat,
            "longitude": lon,
            "hourly": ",".join(HOURLY_VARS),
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "timezone": tz,
            "wind_speed_unit": "kmh",
        },
    )
