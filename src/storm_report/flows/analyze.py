"""
Prefect flow for one weather analysis request.

Resolves the place, fetches station observations and reanalysis concurrently,
merges them onto the canonical timeline, attaches thunder evidence and
official warnings, and assembles an ``AnalysisResult``.

Run locally:
    python -m storm_report.flows.analyze Porto 2025-05-02 2025-05-03
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime

from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from storm_report.analysis.merge import merge_timeline, source_usage
from storm_report.analysis.thunder import (
    ThunderStrategy,
    attach_thunder,
    choose_strategy,
    count_evidence,
    flag_evidence,
)
from storm_report.analysis.timeline import Timeline, choose_timeline, interval_bounds
from storm_report.config import Settings, get_settings
from storm_report.datasources.geocoding import place_from_coordinates, resolve_place
from storm_report.datasources.ipma import LIGHTNING_SOURCE, fetch_lightning_counts, fetch_warnings
from storm_report.datasources.meteostat import StationResult, fetch_station_hourly
from storm_report.datasources.metar import bucket_flags, fetch_metar_history
from storm_report.datasources.openmeteo import ReanalysisResult, fetch_reanalysis_hourly
from storm_report.epochs import epoch_to_datetime, utc_offset_seconds
from storm_report.reference.airports import Airport, nearest_airport
from storm_report.reference.localities import DEFAULT_DISTRICT, infer_district
from storm_report.schemas import (
    AnalysisRequest,
    AnalysisResult,
    HazardWarning,
    MergedRecord,
    Place,
    Resolution,
    SourceName,
)

# =============================================================================
# Pure helpers
# =============================================================================


@dataclass
class Reconciled:
    """Merged timeline plus the audit trail gathered along the way."""

    timeline: Timeline
    records: list[MergedRecord]
    links: dict[str, str] = field(default_factory=dict)
    notes: list[str] = field(default_factory=list)


def resolve(request: AnalysisRequest, settings: Settings) -> Place:
    """Place for a request: explicit coordinates win over a name."""
    if request.lat is not None and request.lon is not None:
        return place_from_coordinates(request.lat, request.lon)
    assert request.place is not None  # guaranteed by AnalysisRequest
    return resolve_place(
        request.place,
        country_code=settings.country_code,
        default_locality=settings.default_locality,
        timeout=settings.http_timeout,
    )


def district_for(place: Place) -> str:
    """District used to filter official warnings."""
    return place.admin1 or infer_district(place.lat, place.lon) or DEFAULT_DISTRICT


def reconcile(
    request: AnalysisRequest,
    station: StationResult,
    reanalysis: ReanalysisResult,
    settings: Settings,
) -> Reconciled:
    """Pick the timeline, merge both sources onto it and note degraded paths."""
    offset = reanalysis.utc_offset_seconds
    if offset is None:
        offset = utc_offset_seconds(settings.timezone, request.start)

    station_series = station.series(offset)
    timeline, origin = choose_timeline(
        reanalysis.series.keys(), station_series.keys(), request.start, request.end, offset
    )
    fallback = (
        settings.reanalysis_fallback
        if request.reanalysis_fallback is None
        else request.reanalysis_fallback
    )
    records = merge_timeline(
        timeline,
        station_series,
        reanalysis.series,
        tz=settings.timezone,
        reanalysis_fallback=fallback,
    )

    links = {"meteostat": station.url, "open_meteo": reanalysis.url}
    if station.nearby_url:
        links["meteostat_nearby"] = station.nearby_url

    notes: list[str] = []
    if not station.available:
        notes.append("station data unavailable")
    elif station.used_nearby_stations:
        notes.append(f"station data from nearby stations: {', '.join(station.station_ids)}")
    if reanalysis.used_archive_fallback:
        notes.append("reanalysis archive fallback used")
    filled = source_usage(records)[SourceName.REANALYSIS]
    if filled:
        notes.append(f"reanalysis filled {filled} hour(s)")
    if origin == "generated":
        notes.append("no upstream data; hourly timeline generated for the requested dates")

    return Reconciled(timeline=timeline, records=records, links=links, notes=notes)


def assemble_result(
    request: AnalysisRequest,
    place: Place,
    airport: Airport,
    records: list[MergedRecord],
    warnings: list[HazardWarning],
    links: dict[str, str],
    notes: list[str],
    settings: Settings,
) -> AnalysisResult:
    """Build the response, noting an unsupported resolution."""
    all_notes = list(notes)
    if request.resolution != Resolution.HOURLY:
        all_notes.insert(0, f"resolution '{request.resolution}' unsupported, used hourly")
    return AnalysisResult(
        resolution_requested=request.resolution,
        tz=settings.timezone,
        period_start=request.start,
        period_end=request.end,
        place=place,
        icao=airport.icao,
        series=records,
        warnings=warnings,
        sources_links=links,
        notes=all_notes,
    )


# =============================================================================
# Tasks
# =============================================================================


@task(name="fetch-station-observations", cache_policy=NO_CACHE)
def fetch_station(place: Place, request: AnalysisRequest, settings: Settings) -> StationResult:
    """Fetch observed hourly values (point query, then nearby stations)."""
    api_key = settings.meteostat_api_key.get_secret_value() if settings.meteostat_api_key else None
    return fetch_station_hourly(
        place.lat,
        place.lon,
        request.start,
        request.end,
        tz=settings.timezone,
        api_key=api_key,
        radius_km=settings.station_radius_km,
        limit=settings.station_limit,
        timeout=settings.http_timeout,
    )


@task(name="fetch-reanalysis", cache_policy=NO_CACHE)
def fetch_reanalysis(place: Place, request: AnalysisRequest, settings: Settings) -> ReanalysisResult:
    """Fetch hourly reanalysis (ERA5, then archive)."""
    return fetch_reanalysis_hourly(
        place.lat,
        place.lon,
        request.start,
        request.end,
        tz=settings.timezone,
        timeout=settings.http_timeout,
    )


@task(name="annotate-thunder", cache_policy=NO_CACHE)
def annotate_thunder(
    reconciled: Reconciled, airport: Airport, settings: Settings, now: datetime
) -> Reconciled:
    """Attach strike counts (recent interval) or METAR flags (older interval)."""
    timeline = reconciled.timeline
    strategy = choose_strategy(timeline, now, settings.recent_window_hours)
    links = dict(reconciled.links)
    notes = list(reconciled.notes)

    if strategy is ThunderStrategy.RECENT:
        lightning = fetch_lightning_counts(timeout=settings.http_timeout)
        links["ipma_lightning"] = lightning.url
        evidence = count_evidence(timeline, lightning.counts, LIGHTNING_SOURCE)
        if not lightning.available:
            notes.append("thunder evidence unavailable: lightning feed did not answer")
    else:
        start_ms, end_ms = interval_bounds(timeline)
        metar = fetch_metar_history(
            airport.icao, epoch_to_datetime(start_ms), epoch_to_datetime(end_ms),
            timeout=settings.http_timeout,
        )
        links.update(metar.links)
        evidence = flag_evidence(timeline, bucket_flags(metar.reports), metar.source)
        if not metar.available:
            notes.append(f"thunder evidence unavailable: no METAR reports for {airport.icao}")

    print(f"Thunder evidence: {strategy} strategy over {len(timeline)} hours")
    return Reconciled(
        timeline=timeline,
        records=attach_thunder(reconciled.records, evidence),
        links=links,
        notes=notes,
    )


@task(name="fetch-warnings", cache_policy=NO_CACHE)
def fetch_official_warnings(
    place: Place, timeline: Timeline, settings: Settings
) -> tuple[str, list[HazardWarning]]:
    """Official warnings for the place's district, clipped to the interval."""
    start_ms, end_ms = interval_bounds(timeline)
    result = fetch_warnings(district_for(place), start_ms, end_ms, timeout=settings.http_timeout)
    return result.url, result.warnings


# =============================================================================
# Flow
# =============================================================================


@flow(name="analyze-weather", log_prints=True)
def analyze(
    request: AnalysisRequest,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> AnalysisResult:
    """
    Run the full reconciliation pipeline for one request.

    Only request validation can fail; every upstream is optional and degraded
    paths are reported in ``notes``.
    """
    settings = settings or get_settings()
    now = now or datetime.now(UTC)

    place = resolve(request, settings)
    airport = nearest_airport(place.lat, place.lon)
    print(f"Analyzing {place.name} ({place.lat}, {place.lon}) near {airport.icao}")

    station_future = fetch_station.submit(place, request, settings)
    reanalysis_future = fetch_reanalysis.submit(place, request, settings)
    station = station_future.result()
    reanalysis = reanalysis_future.result()
    print(f"Station hours: {station.size}, reanalysis hours: {reanalysis.size}")

    reconciled = reconcile(request, station, reanalysis, settings)
    reconciled = annotate_thunder(reconciled, airport, settings, now)
    warnings_url, warnings = fetch_official_warnings(place, reconciled.timeline, settings)

    links = {**reconciled.links, "ipma_warnings": warnings_url}
    return assemble_result(
        request, place, airport, reconciled.records, warnings, links, reconciled.notes, settings
    )


if __name__ == "__main__":
    name, start, end = sys.argv[1:4]
    result = analyze(AnalysisRequest.parse(place=name, start=start, end=end))
    print(result.model_dump_json(indent=2))
