"""Daily aggregation and interval extremes for reports."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date

from storm_report.epochs import local_date
from storm_report.schemas import MergedRecord


@dataclass
class DailySummary:
    """One local calendar day of the merged timeline."""

    day: date
    wind_mean_kmh: float | None
    gust_max_kmh: float | None
    precip_max_mm: float | None
    thunder_hours: int


@dataclass
class Extreme:
    value: float
    time: str


@dataclass
class Extremes:
    """Largest gust and largest hourly precipitation in the interval."""

    gust: Extreme | None = None
    precip: Extreme | None = None


def _max(values: list[float]) -> float | None:
    return max(values) if values else None


def aggregate_daily(
    records: Sequence[MergedRecord],
    tz: str,
    thunder_daily: Mapping[str, int] | None = None,
) -> list[DailySummary]:
    """
    Mean wind, max gust, max hourly precipitation and thunder hours per day.

    Args:
        records: Merged hours in timeline order.
        tz: Zone that defines the calendar day.
        thunder_daily: Pre-computed thunder counts by ISO date, overriding the
            count of thunder-positive hours.
    """
    by_day: dict[date, list[MergedRecord]] = {}
    for record in records:
        by_day.setdefault(local_date(record.epoch, tz), []).append(record)

    summaries: list[DailySummary] = []
    for day in sorted(by_day):
        hours = by_day[day]
        winds = [r.wind_kmh for r in hours if r.wind_kmh is not None]
        thunder = sum(1 for r in hours if r.has_thunder)
        if thunder_daily and day.isoformat() in thunder_daily:
            thunder = thunder_daily[day.isoformat()]
        summaries.append(
            DailySummary(
                day=day,
                wind_mean_kmh=sum(winds) / len(winds) if winds else None,
                gust_max_kmh=_max([r.gust_kmh for r in hours if r.gust_kmh is not None]),
                precip_max_mm=_max([r.precip_mm for r in hours if r.precip_mm is not None]),
                thunder_hours=thunder,
            )
        )
    return summaries


def find_extremes(records: Sequence[MergedRecord]) -> Extremes:
    """First hour holding the maximum gust and the maximum precipitation."""
    extremes = Extremes()
    for record in records:
        if record.gust_kmh is not None and (extremes.gust is None or record.gust_kmh > extremes.gust.value):
            extremes.gust = Extreme(record.gust_kmh, record.time)
        if record.precip_mm is not None and (
            extremes.precip is None or record.precip_mm > extremes.precip.value
        ):
            extremes.precip = Extreme(record.precip_mm, record.time)
    return extremes
