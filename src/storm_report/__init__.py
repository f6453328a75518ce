"""Storm Report - reconciled hourly wind, rain and thunder timelines.

Architecture::

    datasources/   External APIs (Meteostat, Open-Meteo, IPMA, METAR archives)
    reference/     Static tables (seeded localities, districts, airports)
    analysis/      Pure logic (timeline, merge, thunder evidence, daily stats)
    renderers/     Pure data → HTML report document
    flows/         Prefect orchestration (analyze fetches + merges, report renders)
    services/      Shared utilities (HTTP session with timeout and User-Agent)

Data flow: place → datasources (station + reanalysis in parallel) → merge →
thunder → warnings → AnalysisResult → renderer

Extension points (see each package's docstring for step-by-step guides):
  - New data source:   datasources/__init__.py
  - New analysis:      analysis/__init__.py
  - New report section: renderers/__init__.py
"""

__version__ = "0.1.0"

from storm_report.config import Settings
from storm_report.schemas import AnalysisRequest, AnalysisResult

__all__ = ["AnalysisRequest", "AnalysisResult", "Settings", "__version__"]
