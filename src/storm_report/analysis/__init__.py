"""Timeline reconciliation: pure functions over datasource models.

Each module combines outputs from one or more datasources into structures
the flows assemble and the renderers consume directly.

Dependency rule: analysis/ imports from datasources/ models only.
It never fetches data or produces HTML.

Modules:
  - timeline: canonical hour epochs (built grid or a source's own epochs)
  - merge: station + reanalysis -> MergedRecord per hour with source tags
  - thunder: recency decision, strike counts / METAR flags -> evidence
  - daily: daily aggregation and interval extremes for reports
"""
