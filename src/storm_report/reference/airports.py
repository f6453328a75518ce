"""METAR-reporting airports and great-circle distance."""

from __future__ import annotations

import math
from dataclasses import dataclass

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class Airport:
    """An airport that issues METAR reports."""

    icao: str
    name: str
    lat: float
    lon: float


AIRPORTS: tuple[Airport, ...] = (
    Airport("LPPR", "Porto", 41.235, -8.678),
    Airport("LPPT", "Lisboa", 38.781, -9.135),
    Airport("LPFR", "Faro", 37.015, -7.971),
    Airport("LPBJ", "Beja", 38.078, -7.932),
    Airport("LPOV", "Covilhã", 40.272, -7.479),
)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def nearest_airport(lat: float, lon: float, airports: tuple[Airport, ...] = AIRPORTS) -> Airport:
    """Closest airport by haversine distance; ties keep table order."""
    return min(airports, key=lambda ap: haversine_km(lat, lon, ap.lat, ap.lon))
