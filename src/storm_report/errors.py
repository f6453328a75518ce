"""Error taxonomy.

Only request-shape problems are fatal. Upstream failures are raised as
``UpstreamUnavailable`` inside datasource helpers and recovered at each
fetcher boundary; ``RenderError`` fails the whole report.
"""

from __future__ import annotations


class StormReportError(Exception):
    """Base class for all storm-report errors."""


class ValidationError(StormReportError, ValueError):
    """Malformed or out-of-range request input."""


class UpstreamUnavailable(StormReportError):
    """An upstream fetch or parse failed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class RenderError(StormReportError):
    """The report document could not be built."""
