"""
Shared HTTP client for upstream weather providers.

Provides a pre-configured ``requests.Session`` with a project User-Agent and a
default per-request timeout.  The transport does not retry: each datasource
owns an explicit, bounded fallback ladder instead.

Usage::

    from storm_report.services.http import session

    resp = session.get("https://api.example.com/v1/data", params={...})
    resp.raise_for_status()
"""

from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from storm_report.errors import UpstreamUnavailable

#: No transport-level retries; fallbacks are explicit per datasource.
DEFAULT_RETRY = Retry(total=0, raise_on_status=False)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = "storm-report/0.1 (hourly wind, rain and thunder reports)"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with the adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT

    # Inject a default timeout so callers don't need to pass ``timeout=``.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session; import and use directly.
session: requests.Session = create_session()


def get_json(
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float | None = None,
) -> Any:
    """GET ``url`` and decode JSON, raising ``UpstreamUnavailable`` on any failure."""
    resp = _get(url, params, headers, timeout)
    try:
        return resp.json()
    except ValueError as exc:
        raise UpstreamUnavailable(resp.url or url, "malformed JSON") from exc


def get_text(
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float | None = None,
) -> str:
    """GET ``url`` and return the body text, raising ``UpstreamUnavailable`` on failure."""
    return _get(url, params, headers, timeout).text


def _get(
    url: str,
    params: dict[str, Any] | None,
    headers: dict[str, str] | None,
    timeout: float | None,
) -> requests.Response:
    kwargs: dict[str, Any] = {"params": params, "headers": headers}
    if timeout is not None:
        kwargs["timeout"] = timeout
    try:
        resp = session.get(url, **kwargs)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise UpstreamUnavailable(url, str(exc)) from exc
    return resp


def build_url(base: str, params: dict[str, Any]) -> str:
    """Return ``base`` with ``params`` encoded, exactly as it will be requested."""
    prepared = requests.Request("GET", base, params=params).prepare()
    return prepared.url or base
