"""Historical METAR data source (thunderstorm evidence for older intervals).

Public API:
  - archive: MetarResult, fetch_metar_history, fetch_ogimet_reports,
             fetch_aviationweather_reports
  - parse: MetarReport, thunder_flag, bucket_flags, parse_ogimet_text
  - client: archive URLs and source labels
"""

from storm_report.datasources.metar.archive import (
    MetarResult,
    fetch_aviationweather_reports,
    fetch_metar_history,
    fetch_ogimet_reports,
)
from storm_report.datasources.metar.client import AVIATIONWEATHER_SOURCE, OGIMET_SOURCE
from storm_report.datasources.metar.parse import (
    MetarReport,
    bucket_flags,
    parse_ogimet_text,
    thunder_flag,
)

__all__ = [
    "AVIATIONWEATHER_SOURCE",
    "OGIMET_SOURCE",
    "MetarReport",
    "MetarResult",
    "bucket_flags",
    "fetch_aviationweather_reports",
    "fetch_metar_history",
    "fetch_ogimet_reports",
    "parse_ogimet_text",
    "thunder_flag",
]
