"""Hourly reanalysis wind, gust and precipitation from Open-Meteo."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from storm_report.datasources.openmeteo.client import ARCHIVE_API, ERA5_API, hourly_url
from storm_report.datasources.series import HourlyValues, RawSeries, sanitize_number
from storm_report.epochs import local_to_epoch
from storm_report.errors import UpstreamUnavailable
from storm_report.services.http import get_json

logger = logging.getLogger(__name__)


@dataclass
class ReanalysisResult:
    """Epoch-indexed reanalysis values plus which endpoint answered."""

    url: str
    available: bool
    series: RawSeries = field(default_factory=dict)
    utc_offset_seconds: int | None = None
    used_archive_fallback: bool = False

    @property
    def size(self) -> int:
        return len(self.series)


def _sanitize_array(values: Any, length: int) -> list[float | None]:
    values = values if isinstance(values, list) else []
    return [sanitize_number(values[i]) if i < len(values) else None for i in range(length)]


def parse_hourly(url: str, payload: Any) -> tuple[RawSeries, int]:
    """
    Parse an Open-Meteo hourly response into ``(series, utc_offset_seconds)``.

    Only rows present in all four arrays are kept; unparseable numbers become
    None.

    Raises:
        UpstreamUnavailable: If the payload is not a JSON object.
    """
    if not isinstance(payload, dict):
        raise UpstreamUnavailable(url, "unexpected payload shape")

    offset = int(sanitize_number(payload.get("utc_offset_seconds")) or 0)
    hourly = payload.get("hourly")
    if not isinstance(hourly, dict):
        return {}, offset

    arrays = [hourly.get(name) for name in ("time", "wind_speed_10m", "wind_gusts_10m", "precipitation")]
    length = min(len(a) if isinstance(a, list) else 0 for a in arrays)
    times = arrays[0][:length] if length else []
    wind = _sanitize_array(arrays[1], length)
    gust = _sanitize_array(arrays[2], length)
    precip = _sanitize_array(arrays[3], length)

    series: RawSeries = {}
    for i, local in enumerate(times):
        try:
            epoch = local_to_epoch(str(local), offset)
        except ValueError:
            continue
        series[epoch] = HourlyValues(wind=wind[i], gust=gust[i], precip=precip[i])
    return series, offset


def _attempt(url: str, timeout: float | None) -> tuple[RawSeries, int | None]:
    try:
        return parse_hourly(url, get_json(url, timeout=timeout))
    except UpstreamUnavailable as exc:
        logger.warning("Reanalysis query failed: %s", exc)
        return {}, None


def fetch_reanalysis_hourly(
    lat: float,
    lon: float,
    start: date,
    end: date,
    *,
    tz: str,
    timeout: float | None = None,
) -> ReanalysisResult:
    """
    Fetch hourly reanalysis, falling back to the archive endpoint once.

    The archive endpoint is queried with identical parameters when the ERA5
    endpoint fails or returns zero aligned rows.  Never raises on upstream
    failure.

    Args:
        lat: Latitude.
        lon: Longitude.
        start: First local date (inclusive).
        end: Last local date (inclusive).
        tz: IANA zone for the local times in the response.
        timeout: Per-request timeout override.
    """
    url = hourly_url(ERA5_API, lat, lon, start, end, tz)
    series, offset = _attempt(url, timeout)
    if series:
        return ReanalysisResult(url=url, available=True, series=series, utc_offset_seconds=offset)

    logger.info("Reanalysis primary returned no rows, trying archive endpoint")
    url = hourly_url(ARCHIVE_API, lat, lon, start, end, tz)
    series, offset = _attempt(url, timeout)
    return ReanalysisResult(
        url=url,
        available=bool(series),
        series=series,
        utc_offset_seconds=offset if series else None,
        used_archive_fallback=True,
    )
