"""Historical METAR archive endpoints.

  - Ogimet: https://www.ogimet.com/display_metars2.php (plain-text archive)
  - aviationweather.gov: https://aviationweather.gov/data/api/ (recent XML archive)
"""

from __future__ import annotations

import math
from datetime import datetime

from storm_report.services.http import build_url

OGIMET_API = "https://www.ogimet.com/display_metars2.php"
AVIATIONWEATHER_API = "https://aviationweather.gov/api/data/metar"

OGIMET_SOURCE = "ogimet"
AVIATIONWEATHER_SOURCE = "aviationweather"


def ogimet_url(icao: str, start: datetime, end: datetime) -> str:
    """METAR and SPECI reports for ``icao`` between two UTC instants."""
    return build_url(
        OGIMET_API,
        {
            "lang": "en",
            "lugar": icao,
            "tipo": "ALL",
            "ord": "REV",
            "nil": "SI",
            "fmt": "txt",
            "ano": start.year,
            "mes": f"{start.month:02d}",
            "day": f"{start.day:02d}",
            "hora": f"{start.hour:02d}",
            "anof": end.year,
            "mesf": f"{end.month:02d}",
            "dayf": f"{end.day:02d}",
            "horaf": f"{end.hour:02d}",
            "minf": "59",
            "send": "send",
        },
    )


def aviationweather_url(icao: str, start: datetime, end: datetime) -> str:
    """Reports for ``icao`` in the ``hours`` before ``end``, covering ``start``."""
    hours = math.ceil((end - start).total_seconds() / 3600) + 1
    return build_url(
        AVIATIONWEATHER_API,
        {
            "ids": icao,
            "format": "xml",
            "date": end.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "hours": hours,
        },
    )
