"""Tests for the IPMA lightning and warnings feeds."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from unittest.mock import Mock, patch

import requests

from storm_report.datasources.ipma import (
    LIGHTNING_SOURCE,
    bucket_strikes,
    fetch_lightning_counts,
    fetch_warnings,
    select_warnings,
)
from storm_report.epochs import datetime_to_epoch

START = datetime(2025, 5, 1, 23, tzinfo=UTC)
END = datetime(2025, 5, 3, 22, 59, 59, 999000, tzinfo=UTC)

WARNINGS_FEED: list[dict[str, Any]] = [
    {
        "idAreaAviso": "PTO",
        "awarenessTypeName": "Trovoada",
        "awarenessLevelID": "yellow",
        "startTime": "2025-05-01T18:00:00",
        "endTime": "2025-05-02T06:00:00",
    },
    {
        "idAreaAviso": "PTO",
        "awarenessTypeName": "Precipitação",
        "awarenessLevelID": "orange",
        "startTime": "2025-05-03T12:00:00",
        "endTime": "2025-05-04T03:00:00",
    },
    {
        "idAreaAviso": "PTO",
        "awarenessTypeName": "Tempo Quente",
        "awarenessLevelID": "yellow",
        "startTime": "2025-05-02T10:00:00",
        "endTime": "2025-05-02T18:00:00",
    },
    {
        "idAreaAviso": "PTO",
        "awarenessTypeName": "Vento",
        "awarenessLevelID": "green",
        "startTime": "2025-05-02T00:00:00",
        "endTime": "2025-05-02T23:59:00",
    },
    {
        "idAreaAviso": "LSB",
        "awarenessTypeName": "Trovoada",
        "awarenessLevelID": "yellow",
        "startTime": "2025-05-02T00:00:00",
        "endTime": "2025-05-02T12:00:00",
    },
    {
        "idAreaAviso": "PTO",
        "awarenessTypeName": "Vento",
        "awarenessLevelID": "yellow",
        "startTime": "2025-04-20T00:00:00",
        "endTime": "2025-04-21T00:00:00",
    },
    {"idAreaAviso": "PTO", "awarenessTypeName": "Vento", "startTime": "soon", "endTime": "later"},
]


def _json_response(payload: Any) -> Mock:
    response = Mock()
    response.json.return_value = payload
    response.raise_for_status = Mock()
    return response


class TestBucketStrikes:
    """Strike entries summed per UTC hour."""

    def test_buckets(self) -> None:
        items = [
            {"time": "2025-05-02T10:05:00Z"},
            {"time": "2025-05-02T10:55:00Z", "count": 3},
            {"t": "2025-05-02T11:00:00+00:00", "n": 2},
            {"time": "not a time"},
            {"count": 4},
        ]

        counts = bucket_strikes(items)

        ten = datetime_to_epoch(datetime(2025, 5, 2, 10, tzinfo=UTC))
        assert counts == {ten: 4.0, ten + 3_600_000: 2.0}

    def test_null_count_is_one_strike(self) -> None:
        counts = bucket_strikes(
            [{"time": "2025-05-02T10:05:00Z", "count": None}, {"time": "2025-05-02T10:20:00Z"}]
        )
        assert counts == {datetime_to_epoch(datetime(2025, 5, 2, 10, tzinfo=UTC)): 2.0}

    def test_naive_time_is_utc(self) -> None:
        counts = bucket_strikes([{"date": "2025-05-02T10:30:00"}])
        assert list(counts) == [datetime_to_epoch(datetime(2025, 5, 2, 10, tzinfo=UTC))]


class TestFetchLightningCounts:
    """The feed never raises."""

    @patch("storm_report.services.http.session.get")
    def test_list_payload(self, mock_get: Mock) -> None:
        mock_get.return_value = _json_response([{"time": "2025-05-02T10:05:00Z"}])

        result = fetch_lightning_counts()

        assert result.available
        assert sum(result.counts.values()) == 1

    @patch("storm_report.services.http.session.get")
    def test_wrapped_payload(self, mock_get: Mock) -> None:
        mock_get.return_value = _json_response({"data": [{"time": "2025-05-02T10:05:00Z", "value": 5}]})
        assert sum(fetch_lightning_counts().counts.values()) == 5

    @patch("storm_report.services.http.session.get")
    def test_unavailable(self, mock_get: Mock) -> None:
        mock_get.side_effect = requests.ConnectionError("down")

        result = fetch_lightning_counts()

        assert not result.available
        assert result.counts == {}

    def test_source_label(self) -> None:
        assert LIGHTNING_SOURCE == "ipma-lightning"


class TestSelectWarnings:
    """District, phenomenon, level and interval filters."""

    def test_selects_and_clips(self) -> None:
        warnings = select_warnings(WARNINGS_FEED, "Porto", START, END)

        assert [w.phenomenon for w in warnings] == ["Trovoada", "Precipitação"]
        thunder, rain = warnings
        assert thunder.start == START
        assert thunder.end == datetime(2025, 5, 2, 6, tzinfo=UTC)
        assert rain.start == datetime(2025, 5, 3, 12, tzinfo=UTC)
        assert rain.end == END
        assert thunder.level == "yellow"
        assert thunder.link == "https://www.ipma.pt/pt/"

    def test_warnings_inside_interval(self) -> None:
        for warning in select_warnings(WARNINGS_FEED, "Porto", START, END):
            assert START <= warning.start <= warning.end <= END

    def test_region_by_name(self) -> None:
        feed = [
            {
                "distrito": "Distrito de Aveiro",
                "fenomeno": "Chuva forte",
                "nivel": "yellow",
                "dataInicio": "2025-05-02T00:00:00Z",
                "dataFim": "2025-05-02T12:00:00Z",
                "link": "https://www.ipma.pt/pt/otempo/prev-sam/",
            }
        ]

        warnings = select_warnings(feed, "aveiro", START, END)

        assert len(warnings) == 1
        assert warnings[0].link == "https://www.ipma.pt/pt/otempo/prev-sam/"

    def test_other_district(self) -> None:
        assert select_warnings(WARNINGS_FEED, "Faro", START, END) == []


class TestFetchWarnings:
    """Upstream failure yields an empty list."""

    @patch("storm_report.services.http.session.get")
    def test_fetch(self, mock_get: Mock) -> None:
        mock_get.return_value = _json_response(WARNINGS_FEED)

        result = fetch_warnings("Porto", datetime_to_epoch(START), datetime_to_epoch(END))

        assert result.available
        assert len(result.warnings) == 2

    @patch("storm_report.services.http.session.get")
    def test_unavailable(self, mock_get: Mock) -> None:
        mock_get.side_effect = requests.HTTPError("500 Server Error")

        result = fetch_warnings("Porto", datetime_to_epoch(START), datetime_to_epoch(END))

        assert not result.available
        assert result.warnings == []

    @patch("storm_report.services.http.session.get")
    def test_unexpected_payload(self, mock_get: Mock) -> None:
        mock_get.return_value = _json_response({"error": "maintenance"})

        assert fetch_warnings("Porto", 0, 1).warnings == []
