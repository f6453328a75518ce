"""Meteostat API constants and URL builders.

API docs: https://dev.meteostat.net/api/
``model=false`` restricts every query to measured values (no model fill).
"""

from __future__ import annotations

from datetime import date

from storm_report.services.http import build_url

API_BASE = "https://api.meteostat.net/v2"
POINT_HOURLY_API = f"{API_BASE}/point/hourly"
STATIONS_NEARBY_API = f"{API_BASE}/stations/nearby"
STATION_HOURLY_API = f"{API_BASE}/stations/hourly"


def auth_headers(api_key: str | None) -> dict[str, str]:
    """Request headers carrying the API key, when one is configured."""
    return {"X-Api-Key": api_key} if api_key else {}


def point_hourly_url(lat: float, lon: float, start: date, end: date, tz: str) -> str:
    return build_url(
        POINT_HOURLY_API,
        {
            "lat": lat,
            "lon": lon,
            "start": start.isoformat(),
            "end": end.isoformat(),
            "tz": tz,
            "model": "false",
        },
    )


def nearby_stations_url(lat: float, lon: float, radius_km: int, limit: int) -> str:
    return build_url(
        STATIONS_NEARBY_API,
        {"lat": lat, "lon": lon, "radius": radius_km, "limit": limit},
    )


def station_hourly_url(station_id: str, start: date, end: date, tz: str) -> str:
    return build_url(
        STATION_HOURLY_API,
        {
            "station": station_id,
            "start": start.isoformat(),
            "end": end.isoformat(),
            "tz": tz,
            "model": "false",
        },
    )
