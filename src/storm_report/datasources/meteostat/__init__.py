"""Meteostat station-observation data source.

Public API:
  - hourly: StationResult, fetch_station_hourly, parse_hourly_rows
  - client: API URLs and URL builders
"""

from storm_report.datasources.meteostat.client import (
    POINT_HOURLY_API,
    STATION_HOURLY_API,
    STATIONS_NEARBY_API,
)
from storm_report.datasources.meteostat.hourly import (
    StationResult,
    fetch_station_hourly,
    parse_hourly_rows,
)

__all__ = [
    "POINT_HOURLY_API",
    "STATIONS_NEARBY_API",
    "STATION_HOURLY_API",
    "StationResult",
    "fetch_station_hourly",
    "parse_hourly_rows",
]
