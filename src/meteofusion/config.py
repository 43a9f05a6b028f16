"""Shared configuration helpers for meteofusion."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]


def _resolve_path_from_env(name: str, default: Path) -> Path:
    value = os.environ.get(name)
    if not value:
        return default
    candidate = Path(value).expanduser()
    if not candidate.is_absolute():
        candidate = (REPO_ROOT / candidate).resolve()
    return candidate


def _float_from_env(name: str, default: float) -> float:
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def get_cache_dir() -> Path:
    """Return where per-coordinate cache documents are written."""

    return _resolve_path_from_env("METEOFUSION_CACHE_DIR", REPO_ROOT / "cache")


def ensure_dir(path: Path) -> Path:
    """Create ``path`` and its parents when missing."""

    path.mkdir(parents=True, exist_ok=True)
    return path


def get_cache_ttl() -> float:
    """Return how many seconds a cache document stays fresh."""

    return max(0.0, _float_from_env("METEOFUSION_CACHE_TTL", 15 * 60))


def get_cache_min_bytes() -> int:
    """Return the size a cache document must exceed to be served."""

    return int(max(0.0, _float_from_env("METEOFUSION_CACHE_MIN_BYTES", 50 * 1024)))


def get_request_timeout() -> float:
    return _float_from_env("METEOFUSION_TIMEOUT", 30.0)


def get_request_delay() -> float:
    """Return the pause between the two upstream calls."""

    return max(0.0, _float_from_env("METEOFUSION_REQUEST_DELAY", 0.1))


def get_local_timezone() -> str:
    return os.environ.get("METEOFUSION_TZ", "Europe/Paris").strip() or "Europe/Paris"


def get_http_headers() -> dict[str, str]:
    """Return the identification headers sent to both providers."""

    headers = {"User-Agent": os.environ.get("METEOFUSION_USER_AGENT", "MeteoFusion/1.0")}
    contact = os.environ.get("METEOFUSION_CONTACT", "").strip()
    if contact:
        headers["Contact"] = contact
    return headers


@dataclass(frozen=True)
class SnowThresholds:
    """Temperature and dew-point limits used to call precipitation snow."""

    max_temp_c: float = 1.5
    max_dewpoint_c: float = 0.5
    wet_min_temp_c: float = -2.0
    wet_min_dewpoint_c: float = -3.0


@dataclass(frozen=True)
class SlrCoefficients:
    """Roebber-style snow-to-liquid ratio terms, calibrated for the Alps."""

    base: float = 14.0
    threshold_k: float = 271.16
    warm_slope: float = 2.0
    humidity_neutral: float = 75.0
    humidity_scale: float = 15.0
    wind_onset_ms: float = 3.0
    wind_slope: float = 0.3
    minimum: float = 5.0
    maximum: float = 25.0


@dataclass(frozen=True)
class FusionProfile:
    """Per-variable model priorities and thresholds for one enrichment pass.

    ``hd`` drives temperature, wind, humidity and total precipitation,
    ``decomp`` drives the rain/snowfall split, weather code and cloud cover,
    ``prob`` drives precipitation probability and ``freezing`` the 0 °C
    isotherm altitude.
    """

    name: str
    hd: tuple[str, ...]
    decomp: tuple[str, ...]
    prob: tuple[str, ...]
    freezing: tuple[str, ...]
    freezing_fallback_model: str = "meteoswiss_icon_seamless"
    consistency_model: str = "meteofrance_arome_france"
    snow: SnowThresholds = field(default_factory=SnowThresholds)
    slr: SlrCoefficients = field(default_factory=SlrCoefficients)


PRIMARY_PROFILE = FusionProfile(
    name="openmeteo",
    hd=("best_match", "meteofrance_arome_france_hd", "meteofrance_seamless", "meteofrance_arome_france"),
    decomp=("best_match", "meteofrance_arome_france", "meteofrance_seamless"),
    prob=("meteofrance_seamless", "best_match"),
    freezing=("best_match",),
)

AROME_PROFILE = FusionProfile(
    name="arome",
    hd=("meteofrance_arome_france_hd", "meteofrance_arome_france", "meteofrance_seamless"),
    decomp=("meteofrance_arome_france", "meteofrance_seamless"),
    prob=("meteofrance_seamless",),
    freezing=("meteofrance_arome_france_hd", "meteofrance_arome_france", "meteofrance_seamless"),
)

DEFAULT_LAT = _float_from_env("METEOFUSION_LAT", 44.2902)
DEFAULT_LON = _float_from_env("METEOFUSION_LON", 6.5689)
