"""Epoch and time-zone helpers.

An *epoch* here is an integer count of UTC milliseconds truncated to the top
of an hour; it is the join key across every datasource.  Upstreams report
local wall-clock times, so conversion always goes through a fixed UTC offset
in seconds (``epoch = utc(local components) - offset * 1000``).
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

HOUR_MS = 3_600_000

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def truncate_to_hour(epoch_ms: int) -> int:
    """Floor an epoch to the start of its UTC hour."""
    return (epoch_ms // HOUR_MS) * HOUR_MS


def datetime_to_epoch(dt: datetime) -> int:
    """Epoch milliseconds for an aware datetime (sub-millisecond part dropped)."""
    return (dt - _UNIX_EPOCH) // timedelta(milliseconds=1)


def epoch_to_datetime(epoch_ms: int) -> datetime:
    """Aware UTC datetime for an epoch."""
    return _UNIX_EPOCH + timedelta(milliseconds=epoch_ms)


def local_midnight_epoch(day: date, offset_seconds: int) -> int:
    """Epoch of local 00:00 on ``day`` under a fixed UTC offset."""
    return datetime_to_epoch(datetime.combine(day, time(0), tzinfo=UTC)) - offset_seconds * 1000


def local_to_epoch(local: str, offset_seconds: int) -> int:
    """
    Convert a local wall-clock string to an epoch using a fixed UTC offset.

    Accepts ``YYYY-MM-DDTHH:MM[:SS]`` or the space-separated form.  A string
    that carries its own offset is honoured as-is.

    Raises:
        ValueError: If the string is not an ISO date-time.
    """
    dt = datetime.fromisoformat(local.strip().replace(" ", "T"))
    if dt.tzinfo is not None:
        return datetime_to_epoch(dt)
    return datetime_to_epoch(dt.replace(tzinfo=UTC)) - offset_seconds * 1000


def utc_offset_seconds(tz: str, day: date) -> int:
    """UTC offset of ``tz`` at local midnight of ``day``."""
    offset = datetime.combine(day, time(0), tzinfo=ZoneInfo(tz)).utcoffset() or timedelta(0)
    return int(offset.total_seconds())


def iso_with_offset(epoch_ms: int, tz: str) -> str:
    """Local wall-clock time in ``tz`` with an explicit ``±HH:MM`` suffix."""
    local = epoch_to_datetime(epoch_ms).astimezone(ZoneInfo(tz))
    return local.isoformat(timespec="seconds")


def local_date(epoch_ms: int, tz: str) -> date:
    """Calendar date of an epoch in ``tz``."""
    return epoch_to_datetime(epoch_ms).astimezone(ZoneInfo(tz)).date()
