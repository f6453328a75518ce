"""Observed hourly wind, gust and precipitation from Meteostat.

Two tiers: a point query at the place's coordinates, then, when that has no
usable values, up to ``limit`` stations within ``radius_km`` merged in
proximity order (per hour and per field, the nearest station with a value
wins).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from storm_report.datasources.meteostat import client
from storm_report.datasources.series import (
    HourlyValues,
    RawSeries,
    merge_series,
    sanitize_number,
)
from storm_report.epochs import local_to_epoch
from storm_report.errors import UpstreamUnavailable
from storm_report.services.http import get_json

logger = logging.getLogger(__name__)

# =============================================================================
# Data Model
# =============================================================================


@dataclass
class StationResult:
    """
    Station observations keyed by local wall-clock hour (``YYYY-MM-DDTHH:MM``).

    Rows that state their own UTC offset keep it in the key.
    """

    url: str
    available: bool
    samples: dict[str, HourlyValues] = field(default_factory=dict)
    nearby_url: str | None = None
    station_ids: list[str] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.samples)

    @property
    def used_nearby_stations(self) -> bool:
        return bool(self.station_ids)

    def series(self, offset_seconds: int) -> RawSeries:
        """Epoch-indexed view using the request's fixed UTC offset."""
        return {local_to_epoch(t, offset_seconds): v for t, v in self.samples.items()}


# =============================================================================
# Parsing
# =============================================================================


def _first_present(row: dict[str, Any], *names: str) -> Any:
    for name in names:
        value = row.get(name)
        if value is not None:
            return value
    return None


def _normalize_local_time(raw: object) -> str | None:
    """
    ``YYYY-MM-DDTHH:MM`` for a local time string, or None if unparseable.

    A time that carries its own offset (or ``Z``) keeps it, so the request
    offset is not applied to it later.
    """
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        parsed = datetime.fromisoformat(raw.strip().replace(" ", "T"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        return parsed.isoformat(timespec="minutes")
    return parsed.strftime("%Y-%m-%dT%H:%M")


def parse_hourly_rows(url: str, payload: Any) -> dict[str, HourlyValues]:
    """
    Parse a Meteostat hourly response into local-time samples.

    Wind speed (``wspd``, older ``ws``) and gust (``wpgt``) are taken as km/h.

    Raises:
        UpstreamUnavailable: If the payload has no ``data`` list.
    """
    rows = (payload.get("data") or []) if isinstance(payload, dict) else None
    if not isinstance(rows, list):
        raise UpstreamUnavailable(url, "unexpected payload shape")

    samples: dict[str, HourlyValues] = {}
    for row in rows:
        if not isinstance(row, dict):
            continue
        local = _normalize_local_time(_first_present(row, "time", "date"))
        if local is None:
            continue
        samples[local] = HourlyValues(
            wind=sanitize_number(_first_present(row, "wspd", "ws")),
            gust=sanitize_number(row.get("wpgt")),
            precip=sanitize_number(row.get("prcp")),
        )
    return samples


def _has_values(samples: dict[str, HourlyValues]) -> bool:
    return any(not v.is_empty for v in samples.values())


# =============================================================================
# API Fetching
# =============================================================================


def fetch_station_hourly(
    lat: float,
    lon: float,
    start: date,
    end: date,
    *,
    tz: str,
    api_key: str | None = None,
    radius_km: int = 50,
    limit: int = 5,
    timeout: float | None = None,
) -> StationResult:
    """
    Fetch observed hourly values near a point, never raising on upstream failure.

    Args:
        lat: Latitude.
        lon: Longitude.
        start: First local date (inclusive).
        end: Last local date (inclusive).
        tz: IANA zone the API should report local times in.
        api_key: Meteostat key, sent as ``X-Api-Key``.
        radius_km: Search radius for the nearby-stations tier.
        limit: Maximum stations queried in the nearby-stations tier.
        timeout: Per-request timeout override.

    Returns:
        StationResult; ``available`` is False when neither tier produced values.
    """
    headers = client.auth_headers(api_key)
    point_url = client.point_hourly_url(lat, lon, start, end, tz)

    samples: dict[str, HourlyValues] = {}
    try:
        samples = parse_hourly_rows(point_url, get_json(point_url, headers=headers, timeout=timeout))
    except UpstreamUnavailable as exc:
        logger.warning("Station point query failed: %s", exc)

    if _has_values(samples):
        return StationResult(url=point_url, available=True, samples=samples)

    logger.info("Station point query had no usable values, trying stations within %d km", radius_km)
    return _fetch_nearby_stations(
        point_url, lat, lon, start, end, tz=tz, headers=headers,
        radius_km=radius_km, limit=limit, timeout=timeout,
    )


def _fetch_nearby_stations(
    point_url: str,
    lat: float,
    lon: float,
    start: date,
    end: date,
    *,
    tz: str,
    headers: dict[str, str],
    radius_km: int,
    limit: int,
    timeout: float | None,
) -> StationResult:
    nearby_url = client.nearby_stations_url(lat, lon, radius_km, limit)
    try:
        stations = _parse_nearby(nearby_url, get_json(nearby_url, headers=headers, timeout=timeout))
    except UpstreamUnavailable as exc:
        logger.warning("Nearby station lookup failed: %s", exc)
        return StationResult(url=point_url, available=False, nearby_url=nearby_url)

    ranked: list[dict[str, HourlyValues]] = []
    used: list[str] = []
    for station_id in stations[:limit]:
        url = client.station_hourly_url(station_id, start, end, tz)
        try:
            station_samples = parse_hourly_rows(url, get_json(url, headers=headers, timeout=timeout))
        except UpstreamUnavailable as exc:
            logger.warning("Station %s query failed: %s", station_id, exc)
            continue
        if _has_values(station_samples):
            ranked.append(station_samples)
            used.append(station_id)

    merged = merge_series(ranked)
    if used:
        logger.info("Merged %d hours from stations %s", len(merged), ", ".join(used))
    return StationResult(
        url=point_url,
        available=_has_values(merged),
        samples=merged,
        nearby_url=nearby_url,
        station_ids=used,
    )


def _distance(raw: object) -> float:
    distance = sanitize_number(raw)
    return math.inf if distance is None else distance


def _parse_nearby(url: str, payload: Any) -> list[str]:
    """Station ids ordered by ascending distance."""
    data = (payload.get("data") or []) if isinstance(payload, dict) else None
    if not isinstance(data, list):
        raise UpstreamUnavailable(url, "unexpected payload shape")
    rows = [r for r in data if isinstance(r, dict) and r.get("id")]
    # Stations without a usable distance go last
    rows.sort(key=lambda r: _distance(r.get("distance")))
    return [str(r["id"]) for r in rows]
