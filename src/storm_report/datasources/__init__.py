"""External data source integrations.

Each subdirectory is one upstream provider with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, URL builders
    └── {feature}.py      # Fetch + parse functions (one per endpoint/concept)

``series.py`` holds the sparse hourly record shared by the weather sources
and the ranked first-available-wins merge used across stations.

Fetcher contract
----------------
Every ``fetch_*`` function returns a result object carrying the URL it used
and an ``available`` flag. Upstream failures (``UpstreamUnavailable`` from
``services.http``) are caught inside the fetcher and logged; callers never
see an exception for a missing or malformed upstream.

Adding a new datasource
-----------------------
1. Create ``datasources/{name}/`` with the files above.
   See ``openmeteo/`` for a minimal example, ``metar/`` for a richer one.

2. Write fetch functions on top of the shared session::

       from storm_report.services.http import get_json

       def fetch_something(lat, lon) -> SomethingResult:
           try:
               payload = get_json(API_URL, params={...})
           except UpstreamUnavailable as exc:
               logger.warning("something unavailable: %s", exc)
               return SomethingResult(url=exc.url, available=False)
           ...

3. Re-export the public API in ``__init__.py`` with ``__all__``.

4. Wire into ``flows/analyze.py`` with a ``@task`` and add tests in
   ``tests/test_{name}.py``.
"""
