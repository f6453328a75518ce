"""
Prefect flow for building a storm report document.

Runs the analysis flow, renders the HTML report and writes it to disk.

Run locally:
    python -m storm_report.flows.report Porto 2025-05-02 2025-05-03
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from storm_report.config import Settings
from storm_report.flows.analyze import analyze
from storm_report.renderers.report import RenderedReport, render_report
from storm_report.schemas import AnalysisRequest, AnalysisResult

OUTPUT_DIR = Path("reports")


@task(name="render-report", cache_policy=NO_CACHE)
def render(result: AnalysisResult, thunder_daily: Mapping[str, int] | None = None) -> RenderedReport:
    """Render the analysis into an HTML document."""
    return render_report(result, thunder_daily)


@task(name="write-report")
def write_report(report: RenderedReport, output: Path | None = None) -> Path:
    """Write the document; a directory (or None) gets the default file name."""
    if output is None or output.is_dir():
        output = (output or OUTPUT_DIR) / report.filename
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(report.content)
    return output


@flow(name="build-report", log_prints=True)
def build_report(
    request: AnalysisRequest,
    output: Path | None = None,
    settings: Settings | None = None,
    now: datetime | None = None,
    thunder_daily: Mapping[str, int] | None = None,
) -> dict[str, Any]:
    """
    Analyze a request and write its report document.

    ``thunder_daily`` (local ISO date to thunder hours) replaces the thunder
    column computed from the timeline.

    Raises:
        RenderError: If the document cannot be rendered.
    """
    print("Analyzing...")
    result = analyze(request, settings=settings, now=now)

    print("Rendering report...")
    report = render(result, thunder_daily)

    print("Writing report...")
    path = write_report(report, output)

    print(f"Report written: {path} ({report.size} bytes)")
    return {"output": str(path), "size": report.size, "notes": result.notes}


if __name__ == "__main__":
    name, start, end = sys.argv[1:4]
    summary = build_report(AnalysisRequest.parse(place=name, start=start, end=end))
    print(f"Flow complete: {summary}")
