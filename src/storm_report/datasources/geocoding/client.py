"""Open-Meteo geocoding API constants.

API docs: https://open-meteo.com/en/docs/geocoding-api
"""

from __future__ import annotations

from storm_report.services.http import build_url

GEOCODING_API = "https://geocoding-api.open-meteo.com/v1/search"
MAX_CANDIDATES = 10


def search_url(name: str, language: str = "pt") -> str:
    return build_url(
        GEOCODING_API,
        {"name": name, "count": MAX_CANDIDATES, "language": language, "format": "json"},
    )
