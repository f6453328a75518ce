"""Rolling 24-hour lightning feed, bucketed into hourly strike counts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

import pydantic
from pydantic import AliasChoices, BaseModel, Field, field_validator

from storm_report.datasources.ipma.client import LIGHTNING_LAST24H_API
from storm_report.epochs import datetime_to_epoch, truncate_to_hour
from storm_report.errors import UpstreamUnavailable
from storm_report.services.http import get_json

logger = logging.getLogger(__name__)


class LightningEntry(BaseModel):
    """One feed entry: a strike, or a strike count for a short slot."""

    time: datetime = Field(validation_alias=AliasChoices("time", "t", "date"))
    count: float = Field(default=1.0, ge=0, validation_alias=AliasChoices("count", "n", "value"))

    @field_validator("count", mode="before")
    @classmethod
    def _null_count_is_one_strike(cls, value: Any) -> Any:
        return 1.0 if value is None else value

    @property
    def epoch_hour(self) -> int:
        when = self.time if self.time.tzinfo else self.time.replace(tzinfo=UTC)
        return truncate_to_hour(datetime_to_epoch(when))


@dataclass
class LightningResult:
    """Strike counts keyed by hour epoch."""

    url: str
    available: bool
    counts: dict[int, float] = field(default_factory=dict)


def bucket_strikes(items: list[Any]) -> dict[int, float]:
    """Sum entry counts per UTC hour; malformed entries are skipped."""
    counts: dict[int, float] = {}
    for item in items:
        try:
            entry = LightningEntry.model_validate(item)
        except pydantic.ValidationError:
            continue
        counts[entry.epoch_hour] = counts.get(entry.epoch_hour, 0.0) + entry.count
    return counts


def fetch_lightning_counts(timeout: float | None = None) -> LightningResult:
    """Fetch the last 24 h of lightning and bucket it by hour. Never raises."""
    url = LIGHTNING_LAST24H_API
    try:
        payload = get_json(url, timeout=timeout)
    except UpstreamUnavailable as exc:
        logger.warning("Lightning feed unavailable: %s", exc)
        return LightningResult(url=url, available=False)

    items = payload.get("data") if isinstance(payload, dict) else payload
    if not isinstance(items, list):
        logger.warning("Lightning feed returned an unexpected payload from %s", url)
        return LightningResult(url=url, available=False)
    return LightningResult(url=url, available=True, counts=bucket_strikes(items))
