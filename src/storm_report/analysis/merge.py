"""Merge station and reanalysis series onto the canonical timeline.

Per hour and per field, sources are tried in priority order: station
observations first, then (when permitted) reanalysis.  Each value carries a
tag naming the source that supplied it; a field with no value has no tag.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal, localcontext

from storm_report.analysis.timeline import Timeline
from storm_report.datasources.series import FIELDS, HourlyValues, first_available
from storm_report.epochs import iso_with_offset
from storm_report.schemas import MergedRecord, SourceName, SourceTags

# Fields rounded to one decimal; precipitation keeps full precision
_ROUNDED_FIELDS = frozenset({"wind", "gust"})


def round_tenths(value: float) -> float:
    """Round to one decimal place, halves away from zero."""
    # Wide enough for every finite float (max ~1.8e308) plus one decimal
    with localcontext(prec=400):
        return float(Decimal(repr(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def rank_sources(
    station: Mapping[int, HourlyValues],
    reanalysis: Mapping[int, HourlyValues] | None,
    *,
    reanalysis_fallback: bool,
) -> list[tuple[SourceName, Mapping[int, HourlyValues]]]:
    """Sources in merge priority order."""
    ranked: list[tuple[SourceName, Mapping[int, HourlyValues]]] = [(SourceName.STATION, station)]
    if reanalysis_fallback and reanalysis:
        ranked.append((SourceName.REANALYSIS, reanalysis))
    return ranked


def merge_timeline(
    timeline: Timeline,
    station: Mapping[int, HourlyValues],
    reanalysis: Mapping[int, HourlyValues] | None,
    *,
    tz: str,
    reanalysis_fallback: bool = True,
) -> list[MergedRecord]:
    """
    One MergedRecord per timeline epoch, in timeline order.

    Args:
        timeline: Canonical hour epochs.
        station: Station observations by epoch.
        reanalysis: Reanalysis values by epoch, if fetched.
        tz: Zone used for each record's ``time``.
        reanalysis_fallback: Whether reanalysis may fill station gaps.
    """
    ranked = rank_sources(station, reanalysis, reanalysis_fallback=reanalysis_fallback)
    records: list[MergedRecord] = []
    for epoch in timeline:
        values: dict[str, float | None] = {}
        tags: dict[str, SourceName | None] = {}
        for field in FIELDS:
            picked = first_available(ranked, epoch, field)
            if picked is None:
                values[field], tags[field] = None, None
                continue
            value, source = picked
            values[field] = round_tenths(value) if field in _ROUNDED_FIELDS else value
            tags[field] = source
        records.append(
            MergedRecord(
                epoch=epoch,
                time=iso_with_offset(epoch, tz),
                wind_kmh=values["wind"],
                gust_kmh=values["gust"],
                precip_mm=values["precip"],
                sources=SourceTags(**tags),
            )
        )
    return records


def source_usage(records: Sequence[MergedRecord]) -> Counter[SourceName]:
    """How many hours each source supplied at least one field for."""
    usage: Counter[SourceName] = Counter()
    for record in records:
        tags = {record.sources.wind, record.sources.gust, record.sources.precip}
        usage.update(tag for tag in tags if tag is not None)
    return usage
