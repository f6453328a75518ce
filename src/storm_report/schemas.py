"""
Domain models for storm-report.

Pydantic models for the request boundary, the merged hourly timeline and the
assembled response. Datasources normalize upstream payloads to these.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum
from typing import Annotated, Any, Literal

import pydantic
from pydantic import BaseModel, Field, model_validator

from storm_report.errors import ValidationError

# =============================================================================
# Request boundary
# =============================================================================


class Resolution(StrEnum):
    """Timeline resolutions the pipeline can compute."""

    HOURLY = "hourly"


class AnalysisRequest(BaseModel):
    """A normalized analysis request, populated once at the boundary."""

    model_config = {"str_strip_whitespace": True, "frozen": True}

    place: str | None = Field(default=None, min_length=1, description="Free-text place name")
    lat: float | None = Field(default=None, ge=-90, le=90)
    lon: float | None = Field(default=None, ge=-180, le=180)
    start: date
    end: date
    resolution: str = Resolution.HOURLY.value
    reanalysis_fallback: bool | None = None

    @model_validator(mode="after")
    def _check_shape(self) -> AnalysisRequest:
        if self.place is None and (self.lat is None or self.lon is None):
            msg = "either place or both lat and lon are required"
            raise ValueError(msg)
        if self.start > self.end:
            msg = "start date must be on or before end date"
            raise ValueError(msg)
        return self

    @classmethod
    def parse(cls, **params: Any) -> AnalysisRequest:
        """Build a request, raising ``ValidationError`` on bad input."""
        try:
            return cls(**params)
        except pydantic.ValidationError as exc:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'request'}: {err['msg']}"
                for err in exc.errors()
            )
            raise ValidationError(details) from exc

    @property
    def days(self) -> int:
        """Number of calendar days covered, inclusive."""
        return (self.end - self.start).days + 1


# =============================================================================
# Geographic
# =============================================================================


class Place(BaseModel):
    """A resolved locality."""

    model_config = {"frozen": True}

    name: str
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)
    admin1: str | None = None
    admin2: str | None = None
    country_code: str | None = None


# =============================================================================
# Merged timeline
# =============================================================================


class SourceName(StrEnum):
    """Providers that can supply an hourly value."""

    STATION = "meteostat"
    REANALYSIS = "open-meteo"


class SourceTags(BaseModel):
    """Which provider supplied each field of a merged hour."""

    wind: SourceName | None = None
    gust: SourceName | None = None
    precip: SourceName | None = None


class ThunderFlagValue(StrEnum):
    """METAR thunderstorm categories."""

    TS = "TS"  # thunderstorm in progress
    VCTS = "VCTS"  # thunderstorm in the vicinity


class ThunderCount(BaseModel):
    """Lightning strikes counted in one hour."""

    type: Literal["count"] = "count"
    value: int = Field(..., ge=0)
    source: str


class ThunderFlag(BaseModel):
    """Thunderstorm category reported for one hour."""

    type: Literal["flag"] = "flag"
    value: ThunderFlagValue | None = None
    source: str


ThunderEvidence = Annotated[ThunderCount | ThunderFlag, Field(discriminator="type")]


class MergedRecord(BaseModel):
    """One hour of the reconciled timeline."""

    epoch: int = Field(..., description="UTC milliseconds, top of the hour")
    time: str = Field(..., description="Local time with explicit UTC offset")
    wind_kmh: float | None = None
    gust_kmh: float | None = None
    precip_mm: float | None = None
    sources: SourceTags = Field(default_factory=SourceTags)
    thunder: ThunderEvidence | None = None

    @model_validator(mode="after")
    def _check_source_tags(self) -> MergedRecord:
        pairs = (
            ("wind", self.wind_kmh, self.sources.wind),
            ("gust", self.gust_kmh, self.sources.gust),
            ("precip", self.precip_mm, self.sources.precip),
        )
        for name, value, tag in pairs:
            if (value is None) != (tag is None):
                msg = f"{name}: value and source tag must both be set or both be null"
                raise ValueError(msg)
        return self

    @property
    def has_thunder(self) -> bool:
        """Whether this hour carries positive thunder evidence."""
        if self.thunder is None:
            return False
        if isinstance(self.thunder, ThunderCount):
            return self.thunder.value > 0
        return self.thunder.value is not None


# =============================================================================
# Warnings
# =============================================================================


class HazardWarning(BaseModel):
    """An official hazard warning clipped to the requested interval."""

    start: datetime
    end: datetime
    phenomenon: str
    level: str
    link: str


# =============================================================================
# Response
# =============================================================================


class AnalysisResult(BaseModel):
    """Everything the renderer or an HTTP layer needs from one analysis."""

    ok: bool = True
    resolution_requested: str
    resolution_used: Resolution = Resolution.HOURLY
    tz: str
    period_start: date
    period_end: date
    place: Place
    icao: str
    series: list[MergedRecord] = Field(default_factory=list)
    warnings: list[HazardWarning] = Field(default_factory=list)
    sources_links: dict[str, str] = Field(default_factory=dict)
    notes: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_single_thunder_shape(self) -> AnalysisResult:
        kinds = {r.thunder.type for r in self.series if r.thunder is not None}
        if len(kinds) > 1:
            msg = "thunder evidence must use a single shape per response"
            raise ValueError(msg)
        return self
