"""METAR parsing: report timestamps and thunderstorm tokens."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from storm_report.epochs import datetime_to_epoch, truncate_to_hour
from storm_report.schemas import ThunderFlagValue

# In-progress thunderstorm, optionally with intensity and precipitation (TS, +TSRA, -TSGR)
_TS_IN_PROGRESS = re.compile(r"[+-]?TS(?:[A-Z]{2})*")
_TS_VICINITY = re.compile(r"VCTS(?:[A-Z]{2})*")
_TIME_GROUP = re.compile(r"\d{6}Z")

# Everything after these is remarks or a forecast trend, not present weather
_STOP_TOKENS = frozenset({"RMK", "TEMPO", "BECMG", "NOSIG"})

_OGIMET_LINE = re.compile(
    r"^(?:(?P<stamp>\d{12})\s+)?(?:(?:METAR|SPECI)\s+)?(?:COR\s+)?"
    r"(?P<icao>[A-Z]{4})\s+(?P<ddhhmm>\d{6})Z\b"
)


@dataclass(frozen=True)
class MetarReport:
    """A raw report with its observation time."""

    raw: str
    observed_at: datetime

    @property
    def epoch_hour(self) -> int:
        return truncate_to_hour(datetime_to_epoch(self.observed_at))


def thunder_flag(raw: str) -> ThunderFlagValue | None:
    """
    Thunderstorm category of a single report.

    ``TS`` (in progress, any intensity) outranks ``VCTS`` (vicinity) in the
    same report.
    """
    tokens = raw.replace("=", " ").split()
    start = next((i + 1 for i, t in enumerate(tokens) if _TIME_GROUP.fullmatch(t)), 0)

    in_progress = vicinity = False
    for token in tokens[start:]:
        if token in _STOP_TOKENS:
            break
        if _TS_IN_PROGRESS.fullmatch(token):
            in_progress = True
        elif _TS_VICINITY.fullmatch(token):
            vicinity = True

    if in_progress:
        return ThunderFlagValue.TS
    if vicinity:
        return ThunderFlagValue.VCTS
    return None


def bucket_flags(reports: Iterable[MetarReport]) -> dict[int, ThunderFlagValue | None]:
    """
    Thunder flag per UTC hour.

    Once an hour is ``TS`` it stays ``TS``; ``VCTS`` only fills hours without
    it.  Hours whose reports carry no thunder map to None.
    """
    by_hour: dict[int, ThunderFlagValue | None] = {}
    for report in reports:
        flag = thunder_flag(report.raw)
        hour = report.epoch_hour
        previous = by_hour.get(hour)
        if flag is ThunderFlagValue.TS or previous is ThunderFlagValue.TS:
            by_hour[hour] = ThunderFlagValue.TS
        elif flag is ThunderFlagValue.VCTS:
            by_hour[hour] = ThunderFlagValue.VCTS
        else:
            by_hour.setdefault(hour, None)
    return by_hour


def resolve_day_time(ddhhmm: str, reference: datetime) -> datetime | None:
    """
    Resolve a ``DDHHMM`` group to a UTC datetime near ``reference``.

    The day is placed in the reference month, or the next month when that
    would land more than twelve hours before the reference.
    """
    day, hour, minute = int(ddhhmm[:2]), int(ddhhmm[2:4]), int(ddhhmm[4:6])
    year, month = reference.year, reference.month
    for _ in range(2):
        try:
            candidate = datetime(year, month, day, hour, minute, tzinfo=UTC)
        except ValueError:
            candidate = None
        if candidate is not None and candidate >= reference - timedelta(hours=12):
            return candidate
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
    return None


def parse_ogimet_text(text: str, icao: str, reference: datetime) -> list[MetarReport]:
    """Reports for ``icao`` in an Ogimet plain-text listing; other lines are ignored."""
    reports: list[MetarReport] = []
    for line in text.splitlines():
        stripped = line.strip()
        match = _OGIMET_LINE.match(stripped)
        if not match or match["icao"] != icao.upper():
            continue
        observed = _stamp_time(match["stamp"]) or resolve_day_time(match["ddhhmm"], reference)
        if observed is not None:
            reports.append(MetarReport(raw=stripped, observed_at=observed))
    return reports


def _stamp_time(stamp: str | None) -> datetime | None:
    if not stamp:
        return None
    try:
        return datetime.strptime(stamp, "%Y%m%d%H%M").replace(tzinfo=UTC)
    except ValueError:
        return None
