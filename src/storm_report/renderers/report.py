"""Storm report document.

Turns an ``AnalysisResult`` into a standalone HTML document: place and
period header, summary of extremes, daily table, official warnings, notes
and the upstream URLs used.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Mapping
from dataclasses import dataclass

import jinja2

from storm_report.analysis.daily import aggregate_daily, find_extremes
from storm_report.errors import RenderError
from storm_report.renderers import render_template
from storm_report.schemas import AnalysisResult, SourceName

MEDIA_TYPE = "text/html; charset=utf-8"

SOURCE_LABELS = {
    "meteostat": "Meteostat (station observations)",
    "meteostat_nearby": "Meteostat (nearby stations)",
    "open_meteo": "Open-Meteo (ERA5 reanalysis)",
    "ipma_lightning": "IPMA (lightning, last 24h)",
    "ogimet": "Ogimet (METAR archive)",
    "aviationweather": "aviationweather.gov (METAR archive)",
    "ipma_warnings": "IPMA (hazard warnings)",
}


@dataclass
class RenderedReport:
    """An opaque document ready to be written or served."""

    content: bytes
    filename: str
    media_type: str = MEDIA_TYPE

    @property
    def size(self) -> int:
        return len(self.content)


def slugify(text: str) -> str:
    """ASCII, lower-case, hyphen-separated form of ``text``."""
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode()
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_text.lower()).strip("-")
    return slug or "place"


def report_filename(result: AnalysisResult) -> str:
    """``storm-report-<place>-<YYYYMMDD>-<YYYYMMDD>.html``."""
    return (
        f"storm-report-{slugify(result.place.name)}-"
        f"{result.period_start:%Y%m%d}-{result.period_end:%Y%m%d}.html"
    )


def _fmt(value: float | None, unit: str) -> str:
    return "–" if value is None else f"{value:.1f} {unit}"


def _data_quality(result: AnalysisResult) -> str:
    """One-line summary of where the values came from."""
    tagged = [
        tag
        for record in result.series
        for tag in (record.sources.wind, record.sources.gust, record.sources.precip)
    ]
    if not any(tagged):
        return "No observations or reanalysis values were available for this period."
    filled = sum(1 for tag in tagged if tag == SourceName.REANALYSIS)
    if filled == 0:
        return "All values are station observations."
    share = 100 * filled / sum(1 for tag in tagged if tag is not None)
    return f"{share:.0f}% of values are reanalysis estimates filling station gaps."


def render_report(
    result: AnalysisResult,
    thunder_daily: Mapping[str, int] | None = None,
) -> RenderedReport:
    """
    Render the report document for one analysis.

    Args:
        result: The assembled analysis response.
        thunder_daily: Optional thunder-hour counts by ISO date overriding the
            ones computed from the merged records.

    Raises:
        RenderError: If the template cannot be loaded or rendered.
    """
    days = aggregate_daily(result.series, result.tz, thunder_daily)
    extremes = find_extremes(result.series)
    thunder_hours = sum(d.thunder_hours for d in days)
    thunder_days = sum(1 for d in days if d.thunder_hours > 0)

    rows = [
        {
            "day": d.day.strftime("%a %d %b %Y"),
            "wind": _fmt(d.wind_mean_kmh, "km/h"),
            "gust": _fmt(d.gust_max_kmh, "km/h"),
            "precip": _fmt(d.precip_max_mm, "mm"),
            "thunder": d.thunder_hours,
        }
        for d in days
    ]
    links = [
        {"label": SOURCE_LABELS.get(key, key), "url": url}
        for key, url in result.sources_links.items()
    ]
    region = ", ".join(p for p in (result.place.admin2, result.place.admin1) if p)

    try:
        html = render_template(
            "report.html.j2",
            result=result,
            region=region,
            rows=rows,
            extremes=extremes,
            thunder_hours=thunder_hours,
            thunder_days=thunder_days,
            data_quality=_data_quality(result),
            links=links,
        )
    except jinja2.TemplateError as exc:
        raise RenderError(f"could not render report: {exc}") from exc

    return RenderedReport(content=html.encode("utf-8"), filename=report_filename(result))
