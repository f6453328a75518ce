"""Official IPMA hazard warnings for a district and interval."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

import pydantic
from pydantic import AliasChoices, BaseModel, Field

from storm_report.datasources.ipma.client import WARNINGS_API, WARNINGS_PAGE
from storm_report.epochs import epoch_to_datetime
from storm_report.errors import UpstreamUnavailable
from storm_report.reference.localities import DISTRICT_AREA_CODES
from storm_report.schemas import HazardWarning
from storm_report.services.http import get_json

logger = logging.getLogger(__name__)

PHENOMENA = re.compile(r"trovoada|thunder|precip|rain|chuva|vento|wind", re.IGNORECASE)

# Awareness level meaning "no warning in effect"
INACTIVE_LEVELS = frozenset({"green", "verde"})


class WarningEntry(BaseModel):
    """One feed entry as published by IPMA."""

    region: str = Field(validation_alias=AliasChoices("idAreaAviso", "distrito", "region"))
    phenomenon: str = Field(validation_alias=AliasChoices("awarenessTypeName", "phenomena", "fenomeno"))
    start: datetime = Field(validation_alias=AliasChoices("startTime", "start", "dataInicio"))
    end: datetime = Field(validation_alias=AliasChoices("endTime", "end", "dataFim"))
    level: str = Field(default="", validation_alias=AliasChoices("awarenessLevelID", "awareness_level", "nivel", "level"))
    link: str = Field(default=WARNINGS_PAGE, validation_alias=AliasChoices("source", "link"))

    def matches_region(self, district: str) -> bool:
        region = self.region.lower()
        code = DISTRICT_AREA_CODES.get(district.lower())
        return district.lower() in region or (code is not None and region == code.lower())


@dataclass
class WarningsResult:
    url: str
    available: bool
    warnings: list[HazardWarning] = field(default_factory=list)


def _aware(dt: datetime) -> datetime:
    return dt if dt.tzinfo else dt.replace(tzinfo=UTC)


def select_warnings(
    items: list[Any], district: str, start: datetime, end: datetime
) -> list[HazardWarning]:
    """
    Keep thunder/rain/wind warnings for ``district`` that intersect ``[start, end]``.

    Each kept warning is clipped to the intersection.
    """
    selected: list[HazardWarning] = []
    for item in items:
        try:
            entry = WarningEntry.model_validate(item)
        except pydantic.ValidationError:
            continue
        if not entry.matches_region(district) or not PHENOMENA.search(entry.phenomenon):
            continue
        if entry.level.lower() in INACTIVE_LEVELS:
            continue
        w_start, w_end = _aware(entry.start), _aware(entry.end)
        if w_end < start or w_start > end:
            continue
        selected.append(
            HazardWarning(
                start=max(w_start, start).astimezone(UTC),
                end=min(w_end, end).astimezone(UTC),
                phenomenon=entry.phenomenon or "Aviso",
                level=entry.level,
                link=entry.link or WARNINGS_PAGE,
            )
        )
    return selected


def fetch_warnings(
    district: str,
    start_ms: int,
    end_ms: int,
    timeout: float | None = None,
) -> WarningsResult:
    """
    Fetch IPMA warnings for ``district`` within ``[start_ms, end_ms]``.

    Upstream failure yields an empty list, never an error.
    """
    url = WARNINGS_API
    try:
        payload = get_json(url, timeout=timeout)
    except UpstreamUnavailable as exc:
        logger.warning("Warnings feed unavailable: %s", exc)
        return WarningsResult(url=url, available=False)

    if not isinstance(payload, list):
        logger.warning("Warnings feed returned an unexpected payload from %s", url)
        return WarningsResult(url=url, available=False)

    warnings = select_warnings(payload, district, epoch_to_datetime(start_ms), epoch_to_datetime(end_ms))
    logger.info("%d warning(s) for %s", len(warnings), district)
    return WarningsResult(url=url, available=True, warnings=warnings)
