"""Core interfaces for upstream fetch backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping


class BackendError(Exception):
    """Raised when a backend cannot satisfy a request."""


class UpstreamFetchError(BackendError):
    """Raised on connection failures, timeouts and HTTP error statuses."""


class UpstreamParseError(BackendError):
    """Raised when an upstream body is not valid JSON."""


class FetchBackend(ABC):
    """Abstract base class for JSON forecast backends."""

    @abstractmethod
    def fetch_json(
        self,
        url: str,
        *,
        params: Mapping[str, object] | None = None,
    ) -> dict[str, Any]:
        """Return the decoded JSON document served at ``url``."""
