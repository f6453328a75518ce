"""Canonical hourly timeline.

The timeline is built once per request and only read afterwards.  A
datasource's own epochs take precedence over the synthetic grid, which is the
last resort when nothing came back.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from storm_report.epochs import HOUR_MS, local_midnight_epoch

#: An ordered, strictly increasing tuple of hour epochs.
Timeline = tuple[int, ...]


def build_timeline(start: date, end: date, offset_seconds: int) -> Timeline:
    """
    Hour epochs from local midnight of ``start`` to local 23:00 of ``end``.

    Always ``24 * days`` entries, spaced exactly one hour apart.
    """
    if start > end:
        msg = f"start {start} is after end {end}"
        raise ValueError(msg)
    first = local_midnight_epoch(start, offset_seconds)
    hours = 24 * ((end - start).days + 1)
    return tuple(first + i * HOUR_MS for i in range(hours))


def choose_timeline(
    reanalysis_epochs: Iterable[int],
    station_epochs: Iterable[int],
    start: date,
    end: date,
    offset_seconds: int,
) -> tuple[Timeline, str]:
    """
    Pick the timeline for a request and say where it came from.

    Reanalysis epochs win (a gap-free hourly grid), then station epochs,
    then ``build_timeline``.

    Returns:
        ``(timeline, origin)`` with origin ``"reanalysis"``, ``"station"`` or
        ``"generated"``.
    """
    reanalysis = tuple(sorted(set(reanalysis_epochs)))
    if reanalysis:
        return reanalysis, "reanalysis"
    station = tuple(sorted(set(station_epochs)))
    if station:
        return station, "station"
    return build_timeline(start, end, offset_seconds), "generated"


def interval_bounds(timeline: Timeline) -> tuple[int, int]:
    """First epoch and the last millisecond of the final hour."""
    return timeline[0], timeline[-1] + HOUR_MS - 1
