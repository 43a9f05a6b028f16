"""Per-coordinate JSON cache for fused forecast documents."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from meteofusion.config import ensure_dir, get_cache_dir, get_cache_min_bytes, get_cache_ttl

LOGGER = logging.getLogger("meteofusion.storage")
CACHE_PREFIX = "meteo_"


class CacheIOError(OSError):
    """Raised when a cache document cannot be read or written."""


def _format_coordinate(value: float) -> str:
    rounded = round(float(value), 4)
    if rounded == int(rounded):
        return str(int(rounded))
    return repr(rounded)


@dataclass(frozen=True)
class CacheStatus:
    exists: bool
    age_seconds: float | None = None
    size_bytes: int | None = None


class CoordinateCache:
    """One JSON document per coordinate rounded to four decimals.

    A document is served only while younger than ``ttl`` seconds and larger
    than ``min_bytes``; the size floor rejects truncated or error documents.
    """

    def __init__(
        self,
        cache_dir: Path | str | None = None,
        *,
        ttl: float | None = None,
        min_bytes: int | None = None,
    ) -> None:
        self.cache_dir = Path(cache_dir or get_cache_dir())
        self.ttl = get_cache_ttl() if ttl is None else ttl
        self.min_bytes = get_cache_min_bytes() if min_bytes is None else min_bytes

    def path_for(self, lat: float, lon: float) -> Path:
        name = f"{CACHE_PREFIX}{_format_coordinate(lat)}_{_format_coordinate(lon)}.json"
        return self.cache_dir / name

    def status(self, lat: float, lon: float, *, now: float | None = None) -> CacheStatus:
        path = self.path_for(lat, lon)
        try:
            stat = path.stat()
        except FileNotFoundError:
            return CacheStatus(exists=False)
        except OSError as exc:
            raise CacheIOError(f"Cannot stat cache document {path}: {exc}") from exc
        current = time.time() if now is None else now
        return CacheStatus(exists=True, age_seconds=current - stat.st_mtime, size_bytes=stat.st_size)

    def is_valid(self, status: CacheStatus) -> bool:
        return (
            status.exists
            and status.age_seconds is not None
            and status.age_seconds < self.ttl
            and (status.size_bytes or 0) > self.min_bytes
        )

    def load(self, lat: float, lon: float) -> dict[str, Any] | None:
        """Return the cached document, or None when there is none."""

        path = self.path_for(lat, lon)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise CacheIOError(f"Cannot read cache document {path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise CacheIOError(f"Cache document {path} is not a JSON object")
        return payload

    def save(self, lat: float, lon: float, payload: dict[str, Any]) -> Path:
        """
        Write ``payload`` through a temporary file renamed over the target.
        """

        path = self.path_for(lat, lon)
        tmp_name = None
        try:
            ensure_dir(self.cache_dir)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=self.cache_dir)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, ensure_ascii=False, separators=(",", ":"))
            os.replace(tmp_name, path)
        except (OSError, TypeError, ValueError) as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise CacheIOError(f"Cannot write cache document {path}: {exc}") from exc
        LOGGER.info("Cached forecast document %s", path.name)
        return path
