"""Orchestrate provider fetches, enrichment, aggregation and caching."""

from __future__ import annotations

import copy
import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from meteofusion.backends.base import FetchBackend
from meteofusion.backends.http_backend import HttpBackend
from meteofusion.config import (
    AROME_PROFILE,
    PRIMARY_PROFILE,
    FusionProfile,
    get_local_timezone,
    get_request_delay,
)
from meteofusion.models import MetNo, OpenMeteo
from meteofusion.pipeline import (
    EnrichedHourlyRecord,
    SixHourAggregate,
    aggregate_hourly_to_6h,
    available_days,
    enrich_metno_timeseries,
    enrich_openmeteo_hourly,
    merge_metno_payload,
    records_to_columns,
)
from meteofusion.storage import CacheIOError, CoordinateCache

LOGGER = logging.getLogger("meteofusion.runner")

SOURCES = {
    "openmeteo": {
        "description": "Open-Meteo best_match (multi-model fusion)",
        "priority": "best_match → arome_hd → seamless → arome",
        "coverage": "7 days",
    },
    "arome": {
        "description": "Météo-France AROME (French models only)",
        "priority": "arome_hd → arome → seamless",
        "coverage": "~4.5 days (null afterwards)",
    },
    "metno": {
        "description": "MET.no Locationforecast (Norwegian Meteorological Institute)",
        "coverage": "~10 days",
    },
}


class MissingCoordinates(ValueError):
    """Raised when a request lacks latitude or longitude."""


def parse_coordinates(lat: object, lon: object) -> tuple[float, float]:
    """Validate raw request coordinates."""

    if lat is None or lon is None or lat == "" or lon == "":
        raise MissingCoordinates("Missing coordinates")
    try:
        return float(lat), float(lon)
    except (TypeError, ValueError) as exc:
        raise MissingCoordinates(f"Invalid coordinates: {lat!r}, {lon!r}") from exc


def build_aggregated(
    openmeteo: Mapping[str, Any] | None,
    elevation: float | None,
    profile: FusionProfile,
    tz: str,
) -> dict[str, Any] | None:
    """Enrich and aggregate an Open-Meteo document with one profile."""

    hourly = enrich_openmeteo_hourly(openmeteo, elevation, profile)
    if hourly is None:
        return None
    six_hourly = aggregate_hourly_to_6h(hourly, profile.snow) or []
    return {
        "hourly": records_to_columns(hourly, EnrichedHourlyRecord),
        "six_hourly": records_to_columns(six_hourly, SixHourAggregate),
        "available_days": available_days(six_hourly, tz),
    }


def _utc_stamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class FusionRunner:
    """Fetch, enrich, aggregate and cache the fused forecast for one point."""

    def __init__(
        self,
        *,
        lat: float,
        lon: float,
        backend: FetchBackend | None = None,
        cache: CoordinateCache | None = None,
        primary_profile: FusionProfile = PRIMARY_PROFILE,
        secondary_profile: FusionProfile = AROME_PROFILE,
        tz: str | None = None,
        request_delay: float | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.lat = lat
        self.lon = lon
        self.backend = backend or HttpBackend()
        self.cache = cache or CoordinateCache()
        self.primary_profile = primary_profile
        self.secondary_profile = secondary_profile
        self.tz = tz or get_local_timezone()
        self.request_delay = get_request_delay() if request_delay is None else request_delay
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def run(self, *, refresh: bool = False) -> dict[str, Any]:
        """Return the fused document, from cache when it is still valid."""

        if not refresh:
            cached = self._load_valid_cache()
            if cached is not None:
                return cached

        now = self.clock()
        metno_raw = MetNo(self.lat, self.lon, now=now).fetch(self.backend)
        if self.request_delay:
            time.sleep(self.request_delay)
        openmeteo = OpenMeteo(self.lat, self.lon, now=now).fetch(self.backend)

        metno = enrich_metno_timeseries(metno_raw, self.primary_profile)
        elevation = openmeteo.get("elevation")

        aggregated = None
        arome_aggregated = None
        if "hourly" in openmeteo:
            aggregated = build_aggregated(openmeteo, elevation, self.primary_profile, self.tz)
            arome_aggregated = build_aggregated(openmeteo, elevation, self.secondary_profile, self.tz)

        output = {
            "metno": self._merge_history(metno, now),
            "openmeteo": openmeteo,
            "openmeteo_aggregated": aggregated,
            "arome_aggregated": arome_aggregated,
            "elevation": elevation,
            "meta": self._meta(now),
        }
        try:
            self.cache.save(self.lat, self.lon, output)
        except CacheIOError as exc:
            LOGGER.warning("Serving uncached result for %s,%s: %s", self.lat, self.lon, exc)
        return output

    def _load_valid_cache(self) -> dict[str, Any] | None:
        try:
            status = self.cache.status(self.lat, self.lon)
            if not self.cache.is_valid(status):
                return None
            document = self.cache.load(self.lat, self.lon)
        except CacheIOError as exc:
            LOGGER.warning("Ignoring unreadable cache for %s,%s: %s", self.lat, self.lon, exc)
            return None
        if not document:
            return None
        meta = document.setdefault("meta", {})
        meta["from_cache"] = True
        meta["cache_age"] = int(status.age_seconds or 0)
        LOGGER.info("Cache hit for %s,%s (age %ss)", self.lat, self.lon, meta["cache_age"])
        return document

    def _merge_history(self, metno: dict[str, Any] | None, now: datetime) -> dict[str, Any] | None:
        if not metno:
            return metno
        try:
            previous = self.cache.load(self.lat, self.lon)
        except CacheIOError as exc:
            LOGGER.warning("Cached MET.no history unavailable: %s", exc)
            return metno
        if not previous:
            return metno
        return merge_metno_payload(previous.get("metno"), metno, tz=self.tz, now=now)

    def _meta(self, now: datetime) -> dict[str, Any]:
        snow = self.primary_profile.snow
        return {
            "generated_at": _utc_stamp(now),
            "sources": copy.deepcopy(SOURCES),
            "slr_method": "Simplified Roebber (base 14, Alpine calibration) - factors: temp, humidity, wind",
            "snow_detection": f"temp <= {snow.max_temp_c}°C AND dew_point <= {snow.max_dewpoint_c}°C",
            "snow_quality": (
                f"wet if temp > {snow.wet_min_temp_c:g}°C AND dew_point > "
                f"{snow.wet_min_dewpoint_c:g}°C, else dry"
            ),
            "freezing_level_correction": "corrected=true when API value > elevation AND temp <= 0°C",
            "from_cache": False,
        }
