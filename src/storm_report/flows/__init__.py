"""
Prefect flows for the report pipeline.

Flows:
- analyze: Resolve the place, fetch station + reanalysis concurrently, merge,
  annotate thunder, fetch warnings, assemble an AnalysisResult
- report: Run analyze, render the HTML report and write it to disk

Usage (local):
    python -m storm_report.flows.analyze Porto 2025-05-02 2025-05-03
    python -m storm_report.flows.report Porto 2025-05-02 2025-05-03

Usage (Prefect):
    prefect server start  # Optional, for dashboard
"""
