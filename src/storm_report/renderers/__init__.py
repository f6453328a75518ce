"""Pure rendering functions: analysis results -> report documents.

Renderers follow the same pattern:
  - Input: ``AnalysisResult`` plus optional pre-computed aggregates
  - Output: a ``RenderedReport`` (bytes, file name, media type)
  - No network I/O, no Prefect decorators

Used by flows/report.py, which writes the document to disk.

Public API:
  - report: RenderedReport, render_report, report_filename

Adding a section to the report
------------------------------
1. Compute the data in ``analysis/`` (pure function over merged records).
2. Pass it to ``render_template("report.html.j2", ...)`` in
   ``renderers/report.py``.
3. Add the markup to ``templates/report.html.j2``; CSS lives in its
   <style> block.
4. Add tests asserting the rendered HTML contains the expected content.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
    undefined=jinja2.StrictUndefined,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
