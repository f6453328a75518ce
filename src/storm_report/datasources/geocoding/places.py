"""Place resolution: seeded table, geocoder, then a default locality.

Name resolution always succeeds.  Only explicit coordinates can fail, and
only when they are out of range.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import pydantic

from storm_report.datasources.geocoding.client import search_url
from storm_report.datasources.series import sanitize_number
from storm_report.errors import UpstreamUnavailable, ValidationError
from storm_report.reference.localities import SEEDED_PLACES, seeded_place
from storm_report.schemas import Place
from storm_report.services.http import get_json

logger = logging.getLogger(__name__)

_CONTINENTAL = re.compile(r"continental", re.IGNORECASE)


def place_from_coordinates(lat: float, lon: float) -> Place:
    """
    Wrap explicit coordinates in a Place named ``"lat,lon"``.

    Raises:
        ValidationError: If lat is outside [-90, 90] or lon outside [-180, 180].
    """
    if not -90 <= lat <= 90:
        msg = f"latitude must be between -90 and 90, got {lat}"
        raise ValidationError(msg)
    if not -180 <= lon <= 180:
        msg = f"longitude must be between -180 and 180, got {lon}"
        raise ValidationError(msg)
    return Place(name=f"{lat},{lon}", lat=lat, lon=lon)


def _is_continental(candidate: dict[str, Any]) -> bool:
    return bool(
        _CONTINENTAL.search(str(candidate.get("admin1") or ""))
        or _CONTINENTAL.search(str(candidate.get("country") or ""))
    )


def pick_candidate(results: list[dict[str, Any]], country_code: str) -> dict[str, Any] | None:
    """
    Best geocoder candidate within ``country_code``.

    Entries tagged "continental" are preferred; ties go to the larger
    population.
    """
    in_country = [
        r for r in results
        if isinstance(r, dict) and str(r.get("country_code", "")).upper() == country_code.upper()
    ]
    if not in_country:
        return None
    continental = [r for r in in_country if _is_continental(r)]
    pool = continental or in_country
    return max(pool, key=lambda r: sanitize_number(r.get("population")) or 0.0)


def _candidate_to_place(candidate: dict[str, Any], query: str, country_code: str) -> Place | None:
    lat = sanitize_number(candidate.get("latitude"))
    lon = sanitize_number(candidate.get("longitude"))
    if lat is None or lon is None:
        return None
    try:
        return Place(
            name=str(candidate.get("name") or query),
            lat=lat,
            lon=lon,
            admin1=str(candidate["admin1"]) if candidate.get("admin1") else None,
            admin2=str(candidate["admin2"]) if candidate.get("admin2") else None,
            country_code=country_code.upper(),
        )
    except pydantic.ValidationError:
        return None


def resolve_place(
    name: str,
    *,
    country_code: str = "PT",
    default_locality: str = "porto",
    timeout: float | None = None,
) -> Place:
    """
    Resolve a free-text place name to coordinates.

    Seeded localities (exact, case-insensitive) return without a network
    call.  Otherwise the geocoder is queried; on failure or no usable
    candidate the seeded ``default_locality`` is returned.

    Args:
        name: Place name as typed by the user.
        country_code: ISO country the result must belong to.
        default_locality: Seeded key used when resolution fails.
        timeout: Per-request timeout override.
    """
    seeded = seeded_place(name)
    if seeded is not None:
        return seeded

    fallback = SEEDED_PLACES.get(default_locality.lower()) or SEEDED_PLACES["porto"]
    url = search_url(name.strip())
    try:
        payload = get_json(url, timeout=timeout)
    except UpstreamUnavailable as exc:
        logger.warning("Geocoding failed for %r, using %s: %s", name, fallback.name, exc)
        return fallback

    results = payload.get("results") if isinstance(payload, dict) else None
    candidate = pick_candidate(results if isinstance(results, list) else [], country_code)
    place = _candidate_to_place(candidate, name, country_code) if candidate else None
    if place is None:
        logger.warning("No %s geocoding match for %r, using %s", country_code, name, fallback.name)
        return fallback
    return place
