"""requests-backed implementation of :class:`FetchBackend`."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import requests

from meteofusion.backends.base import FetchBackend, UpstreamFetchError, UpstreamParseError
from meteofusion.config import get_http_headers, get_request_timeout

LOGGER = logging.getLogger("meteofusion.backends")


class HttpBackend(FetchBackend):
    """Fetch backend that performs one blocking GET per call."""

    def __init__(
        self,
        *,
        timeout: float | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.timeout = timeout if timeout is not None else get_request_timeout()
        self.headers = dict(headers or get_http_headers())

    def fetch_json(
        self,
        url: str,
        *,
        params: Mapping[str, object] | None = None,
    ) -> dict[str, Any]:
        """
        Download ``url`` and decode its JSON body.
        """

        try:
            response = requests.get(
                url,
                params=dict(params) if params else None,
                headers=self.headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            LOGGER.warning("Upstream fetch failed for %s: %s", url, exc)
            raise UpstreamFetchError(f"Fetch failed for {url}: {exc}") from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamParseError(f"Invalid JSON from {url}: {exc}") from exc
        if not isinstance(payload, dict):
            raise UpstreamParseError(f"Unexpected JSON document from {url}")
        return payload
