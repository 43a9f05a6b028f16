"""Backend implementations for fetching provider payloads."""

from __future__ import annotations

from .base import BackendError, FetchBackend, UpstreamFetchError, UpstreamParseError
from .http_backend import HttpBackend

__all__ = ["BackendError", "FetchBackend", "HttpBackend", "UpstreamFetchError", "UpstreamParseError"]
