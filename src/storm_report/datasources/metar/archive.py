"""Historical METAR fetching with a primary and a secondary archive."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

import defusedxml.ElementTree as ET  # noqa: N817
from defusedxml import DefusedXmlException

from storm_report.datasources.metar import client
from storm_report.datasources.metar.parse import MetarReport, parse_ogimet_text
from storm_report.errors import UpstreamUnavailable
from storm_report.services.http import get_text

logger = logging.getLogger(__name__)


@dataclass
class MetarResult:
    """Reports from the archive that answered, plus every URL queried."""

    source: str
    url: str
    reports: list[MetarReport] = field(default_factory=list)
    links: dict[str, str] = field(default_factory=dict)

    @property
    def available(self) -> bool:
        return bool(self.reports)


def fetch_ogimet_reports(
    icao: str, start: datetime, end: datetime, timeout: float | None = None
) -> MetarResult:
    """METAR/SPECI reports from Ogimet's plain-text archive. Never raises."""
    url = client.ogimet_url(icao, start, end)
    result = MetarResult(source=client.OGIMET_SOURCE, url=url, links={client.OGIMET_SOURCE: url})
    try:
        text = get_text(url, timeout=timeout)
    except UpstreamUnavailable as exc:
        logger.warning("Ogimet unavailable: %s", exc)
        return result
    result.reports = [r for r in parse_ogimet_text(text, icao, start) if start <= r.observed_at <= end]
    return result


def parse_aviationweather_xml(url: str, xml_text: str) -> list[MetarReport]:
    """
    Reports from an aviationweather.gov XML response.

    Raises:
        UpstreamUnavailable: If the body is not well-formed XML.
    """
    try:
        root = ET.fromstring(xml_text)
    except (ET.ParseError, DefusedXmlException) as exc:
        raise UpstreamUnavailable(url, "malformed XML") from exc

    reports: list[MetarReport] = []
    for node in root.iter("METAR"):
        raw = (node.findtext("raw_text") or "").strip()
        observed = (node.findtext("observation_time") or "").strip()
        if not raw or not observed:
            continue
        try:
            when = datetime.fromisoformat(observed.replace("Z", "+00:00"))
        except ValueError:
            continue
        reports.append(MetarReport(raw=raw, observed_at=when if when.tzinfo else when.replace(tzinfo=UTC)))
    return reports


def fetch_aviationweather_reports(
    icao: str, start: datetime, end: datetime, timeout: float | None = None
) -> MetarResult:
    """METAR reports from aviationweather.gov. Never raises."""
    url = client.aviationweather_url(icao, start, end)
    result = MetarResult(
        source=client.AVIATIONWEATHER_SOURCE, url=url, links={client.AVIATIONWEATHER_SOURCE: url}
    )
    try:
        reports = parse_aviationweather_xml(url, get_text(url, timeout=timeout))
    except UpstreamUnavailable as exc:
        logger.warning("aviationweather.gov unavailable: %s", exc)
        return result
    result.reports = [r for r in reports if start <= r.observed_at <= end]
    return result


def fetch_metar_history(
    icao: str, start: datetime, end: datetime, timeout: float | None = None
) -> MetarResult:
    """
    Reports for ``icao`` in ``[start, end]``: Ogimet first, then aviationweather.gov.

    The secondary archive is only queried when Ogimet returns zero usable
    reports.  The result's ``links`` lists every archive queried.
    """
    primary = fetch_ogimet_reports(icao, start, end, timeout)
    if primary.available:
        return primary

    logger.info("No usable Ogimet reports for %s, trying aviationweather.gov", icao)
    secondary = fetch_aviationweather_reports(icao, start, end, timeout)
    secondary.links = {**primary.links, **secondary.links}
    return secondary
