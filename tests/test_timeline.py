"""Tests for epoch helpers and the canonical timeline."""

from __future__ import annotations

from datetime import UTC, date, datetime

import pytest

from storm_report.analysis.timeline import build_timeline, choose_timeline, interval_bounds
from storm_report.epochs import (
    HOUR_MS,
    datetime_to_epoch,
    epoch_to_datetime,
    iso_with_offset,
    local_date,
    local_midnight_epoch,
    local_to_epoch,
    truncate_to_hour,
    utc_offset_seconds,
)


def _epoch(*args: int) -> int:
    return datetime_to_epoch(datetime(*args, tzinfo=UTC))


class TestEpochHelpers:
    """Conversions between wall-clock times and UTC hour epochs."""

    def test_truncate_to_hour(self) -> None:
        assert truncate_to_hour(_epoch(2025, 5, 2, 10, 59, 59)) == _epoch(2025, 5, 2, 10)

    def test_round_trip_datetime(self) -> None:
        dt = datetime(2025, 5, 2, 10, tzinfo=UTC)
        assert epoch_to_datetime(datetime_to_epoch(dt)) == dt

    def test_local_midnight_summer_offset(self) -> None:
        # 00:00 at UTC+1 is 23:00 UTC the previous day
        assert local_midnight_epoch(date(2025, 5, 2), 3600) == _epoch(2025, 5, 1, 23)

    def test_local_to_epoch_naive(self) -> None:
        assert local_to_epoch("2025-05-02T14:00", 3600) == _epoch(2025, 5, 2, 13)

    def test_local_to_epoch_space_separated(self) -> None:
        assert local_to_epoch("2025-05-02 14:00:00", 0) == _epoch(2025, 5, 2, 14)

    def test_local_to_epoch_honours_own_offset(self) -> None:
        assert local_to_epoch("2025-05-02T14:00+02:00", 3600) == _epoch(2025, 5, 2, 12)

    def test_local_to_epoch_invalid(self) -> None:
        with pytest.raises(ValueError):
            local_to_epoch("yesterday", 0)

    def test_utc_offset_seconds(self) -> None:
        assert utc_offset_seconds("Europe/Lisbon", date(2025, 5, 2)) == 3600
        assert utc_offset_seconds("Europe/Lisbon", date(2025, 1, 15)) == 0

    def test_iso_with_offset(self) -> None:
        assert iso_with_offset(_epoch(2025, 5, 2, 13), "Europe/Lisbon") == "2025-05-02T14:00:00+01:00"
        assert iso_with_offset(_epoch(2025, 1, 15, 13), "Europe/Lisbon") == "2025-01-15T13:00:00+00:00"

    def test_local_date(self) -> None:
        assert local_date(_epoch(2025, 5, 1, 23), "Europe/Lisbon") == date(2025, 5, 2)


class TestBuildTimeline:
    """The synthetic hourly grid."""

    def test_two_days(self) -> None:
        timeline = build_timeline(date(2025, 5, 2), date(2025, 5, 3), 3600)
        assert len(timeline) == 48
        assert timeline[0] == _epoch(2025, 5, 1, 23)
        assert timeline[-1] == _epoch(2025, 5, 3, 22)

    def test_single_day(self) -> None:
        assert len(build_timeline(date(2025, 5, 2), date(2025, 5, 2), 0)) == 24

    @pytest.mark.parametrize(
        ("start", "end", "offset"),
        [
            (date(2025, 1, 1), date(2025, 1, 1), 0),
            (date(2025, 3, 29), date(2025, 3, 31), 3600),
            (date(2024, 2, 27), date(2024, 3, 2), -18000),
            (date(2025, 12, 30), date(2026, 1, 2), 19800),
        ],
    )
    def test_length_and_spacing(self, start: date, end: date, offset: int) -> None:
        timeline = build_timeline(start, end, offset)
        days = (end - start).days + 1
        assert len(timeline) == 24 * days
        assert all(b - a == HOUR_MS for a, b in zip(timeline, timeline[1:], strict=False))

    def test_start_after_end(self) -> None:
        with pytest.raises(ValueError):
            build_timeline(date(2025, 5, 3), date(2025, 5, 2), 0)


class TestChooseTimeline:
    """Observed epochs take precedence over the synthetic grid."""

    def test_reanalysis_epochs_win(self) -> None:
        reanalysis = [_epoch(2025, 5, 2, 1), _epoch(2025, 5, 2, 0)]
        station = [_epoch(2025, 5, 2, 5)]
        timeline, origin = choose_timeline(reanalysis, station, date(2025, 5, 2), date(2025, 5, 2), 0)
        assert origin == "reanalysis"
        assert timeline == (_epoch(2025, 5, 2, 0), _epoch(2025, 5, 2, 1))

    def test_station_epochs_second(self) -> None:
        station = [_epoch(2025, 5, 2, 5), _epoch(2025, 5, 2, 5)]
        timeline, origin = choose_timeline([], station, date(2025, 5, 2), date(2025, 5, 2), 0)
        assert origin == "station"
        assert timeline == (_epoch(2025, 5, 2, 5),)

    def test_generated_last(self) -> None:
        timeline, origin = choose_timeline([], [], date(2025, 5, 2), date(2025, 5, 3), 3600)
        assert origin == "generated"
        assert len(timeline) == 48


class TestIntervalBounds:
    """Interval end is the last millisecond of the final hour."""

    def test_bounds(self) -> None:
        timeline = build_timeline(date(2025, 5, 2), date(2025, 5, 2), 0)
        start, end = interval_bounds(timeline)
        assert start == _epoch(2025, 5, 2, 0)
        assert end == _epoch(2025, 5, 3, 0) - 1

