"""Abstract forecast-provider definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Mapping
import logging

from meteofusion.backends.base import FetchBackend


class ForecastProvider(ABC):
    """Defines the high-level point-forecast provider interface."""

    @abstractmethod
    def fetch(self, backend: FetchBackend) -> dict[str, Any]:
        """Download the raw provider payload via the provided backend."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the key used for this provider in the response."""


class BasePointProvider(ForecastProvider):
    """Shared implementation for simple point-forecast providers."""

    provider_key: str
    base_url: str

    def __init__(self, lat: float, lon: float, *, now: datetime | None = None) -> None:
        """
        Store the core request parameters.
        """

        self.lat = lat
        self.lon = lon
        self.now = now or datetime.now(timezone.utc)

    @property
    def provider_name(self) -> str:
        return self.provider_key

    def request_params(self) -> Mapping[str, object]:
        """Return the query parameters for this provider."""

        return {"lat": self.lat, "lon": self.lon}

    def fetch(self, backend: FetchBackend) -> dict[str, Any]:
        """
        Delegate the download to the backend.
        """

        logger = logging.getLogger("meteofusion.models")
        logger.info("Fetching %s for %.4f,%.4f", self.provider_key, self.lat, self.lon)
        return backend.fetch_json(self.base_url, params=self.request_params())
