"""Thunder evidence: pick one strategy per response and attach it hour by hour.

Recent intervals (ending within the recency window) use lightning strike
counts; older intervals use METAR thunderstorm flags.  The two shapes are
never mixed in one timeline.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from datetime import datetime
from enum import StrEnum

from storm_report.analysis.timeline import Timeline, interval_bounds
from storm_report.epochs import HOUR_MS, datetime_to_epoch
from storm_report.schemas import (
    MergedRecord,
    ThunderCount,
    ThunderEvidence,
    ThunderFlag,
    ThunderFlagValue,
)


class ThunderStrategy(StrEnum):
    RECENT = "recent"
    HISTORICAL = "historical"


def choose_strategy(timeline: Timeline, now: datetime, recent_window_hours: int = 24) -> ThunderStrategy:
    """``RECENT`` when the interval ends no more than the window before ``now``."""
    _, interval_end = interval_bounds(timeline)
    if datetime_to_epoch(now) - interval_end <= recent_window_hours * HOUR_MS:
        return ThunderStrategy.RECENT
    return ThunderStrategy.HISTORICAL


def count_evidence(timeline: Timeline, counts: Mapping[int, float], source: str) -> list[ThunderCount]:
    """Strike count per hour; hours without strikes count zero."""
    return [
        ThunderCount(value=max(0, math.floor(counts.get(epoch, 0))), source=source)
        for epoch in timeline
    ]


def flag_evidence(
    timeline: Timeline, flags: Mapping[int, ThunderFlagValue | None], source: str
) -> list[ThunderFlag]:
    """Thunder flag per hour; hours without a matching report are null."""
    return [ThunderFlag(value=flags.get(epoch), source=source) for epoch in timeline]


def attach_thunder(
    records: Sequence[MergedRecord], evidence: Sequence[ThunderEvidence]
) -> list[MergedRecord]:
    """Copy of ``records`` with one piece of evidence per hour."""
    if len(records) != len(evidence):
        msg = f"{len(evidence)} thunder entries for {len(records)} hours"
        raise ValueError(msg)
    return [r.model_copy(update={"thunder": e}) for r, e in zip(records, evidence, strict=True)]
