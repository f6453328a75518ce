"""Open-Meteo reanalysis data source.

Public API:
  - hourly: ReanalysisResult, fetch_reanalysis_hourly, parse_hourly
  - client: API URLs, hourly variable list
"""

from storm_report.datasources.openmeteo.client import ARCHIVE_API, ERA5_API, HOURLY_VARS
from storm_report.datasources.openmeteo.hourly import (
    ReanalysisResult,
    fetch_reanalysis_hourly,
    parse_hourly,
)

__all__ = [
    "ARCHIVE_API",
    "ERA5_API",
    "HOURLY_VARS",
    "ReanalysisResult",
    "fetch_reanalysis_hourly",
    "parse_hourly",
]
