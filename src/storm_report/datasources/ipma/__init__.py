"""IPMA data source: lightning strikes and official hazard warnings.

Public API:
  - lightning: LightningResult, fetch_lightning_counts, bucket_strikes
  - warnings_feed: WarningsResult, fetch_warnings, select_warnings
  - client: API URLs, source labels
"""

from storm_report.datasources.ipma.client import (
    LIGHTNING_LAST24H_API,
    LIGHTNING_SOURCE,
    WARNINGS_API,
)
from storm_report.datasources.ipma.lightning import (
    LightningResult,
    bucket_strikes,
    fetch_lightning_counts,
)
from storm_report.datasources.ipma.warnings_feed import (
    WarningsResult,
    fetch_warnings,
    select_warnings,
)

__all__ = [
    "LIGHTNING_LAST24H_API",
    "LIGHTNING_SOURCE",
    "WARNINGS_API",
    "LightningResult",
    "WarningsResult",
    "bucket_strikes",
    "fetch_lightning_counts",
    "fetch_warnings",
    "select_warnings",
]
