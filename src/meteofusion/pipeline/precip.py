"""Precipitation phase classification and weather-code consistency checks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from meteofusion.config import SnowThresholds

DEFAULT_THRESHOLDS = SnowThresholds()

PRECIP_CODES = frozenset(range(51, 100))
CLEAR_CODES = frozenset({0, 1})


@dataclass(frozen=True)
class PrecipSplit:
    """Rain (mm) and snowfall (cm) attributed to one time step."""

    rain: float
    snowfall: float


@dataclass(frozen=True)
class ModelPrecip:
    """Weather code and precipitation fields reported by a single model."""

    weather_code: Optional[int]
    rain: Optional[float]
    snowfall: Optional[float]
    precipitation: float

    @property
    def has_precip(self) -> bool:
        return _positive(self.rain) or _positive(self.snowfall) or _positive(self.precipitation)


def _positive(value: Optional[float]) -> bool:
    return value is not None and value > 0


def is_snow(
    temp: Optional[float],
    dew_point: Optional[float],
    thresholds: SnowThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Return True when near-surface conditions support snow."""

    if temp is None:
        return False
    return temp <= thresholds.max_temp_c and (
        dew_point is None or dew_point <= thresholds.max_dewpoint_c
    )


def snow_quality(
    snowfall: float,
    temp: Optional[float],
    dew_point: Optional[float],
    thresholds: SnowThresholds = DEFAULT_THRESHOLDS,
) -> Optional[str]:
    """Return ``"wet"``, ``"dry"`` or None when no snow is falling."""

    if snowfall is None or snowfall <= 0 or temp is None or dew_point is None:
        return None
    sticky = temp > thresholds.wet_min_temp_c and dew_point > thresholds.wet_min_dewpoint_c
    return "wet" if sticky else "dry"


def split_precipitation(
    precipitation: float,
    rain: Optional[float],
    snowfall: Optional[float],
    temp: Optional[float],
    dew_point: Optional[float],
    thresholds: SnowThresholds = DEFAULT_THRESHOLDS,
) -> PrecipSplit:
    """
    Attribute total precipitation to rain or snow when the provider gave no split.

    A provider split is kept as is unless it is missing or all zero while the
    total is positive; then the whole total goes to one phase.
    """

    if rain is None and snowfall is None:
        if precipitation > 0 and temp is not None:
            return _whole_amount(precipitation, temp, dew_point, thresholds)
        return PrecipSplit(rain=0.0, snowfall=0.0)
    if not rain and not snowfall and precipitation > 0:
        return _whole_amount(precipitation, temp, dew_point, thresholds)
    return PrecipSplit(rain=rain or 0, snowfall=snowfall or 0)


def _whole_amount(
    precipitation: float,
    temp: Optional[float],
    dew_point: Optional[float],
    thresholds: SnowThresholds,
) -> PrecipSplit:
    if is_snow(temp, dew_point, thresholds):
        return PrecipSplit(rain=0, snowfall=precipitation)
    return PrecipSplit(rain=precipitation, snowfall=0)


def hybrid_correction(
    split: PrecipSplit,
    temp: Optional[float],
    dew_point: Optional[float],
    thresholds: SnowThresholds = DEFAULT_THRESHOLDS,
) -> PrecipSplit:
    """
    Move rain reported under snow conditions into snowfall.

    The amount is carried over 1:1, so millimetres of rain are reported as
    centimetres of snow. This is an approximation, not a density conversion.
    """

    if split.rain > 0 and is_snow(temp, dew_point, thresholds):
        return PrecipSplit(rain=0, snowfall=split.snowfall + split.rain)
    return split


def code_from_cloud_cover(cloud_cover: Optional[float]) -> int:
    """Derive a clear/partly cloudy/overcast code from cloud cover alone."""

    cloud = cloud_cover or 0
    if cloud >= 80:
        return 3
    if cloud >= 50:
        return 2
    return 1


def reconcile_weather_code(
    primary: ModelPrecip,
    alternate: ModelPrecip,
    cloud_cover: Optional[float],
) -> ModelPrecip:
    """
    Make the weather code agree with the precipitation amounts.

    A precipitation code without any precipitation first falls back to the
    alternate model when that model is self-consistent, then to a code
    derived from cloud cover. A clear code under heavy cloud is raised to
    partly cloudy or overcast.
    """

    result = primary
    if primary.weather_code in PRECIP_CODES and not primary.has_precip:
        alternate_consistent = alternate.weather_code is not None and (
            (alternate.weather_code in PRECIP_CODES) == alternate.has_precip
        )
        if alternate_consistent:
            result = alternate
        else:
            result = ModelPrecip(
                weather_code=code_from_cloud_cover(cloud_cover),
                rain=primary.rain,
                snowfall=primary.snowfall,
                precipitation=primary.precipitation,
            )

    code = result.weather_code
    # a missing code counts as clear sky here
    sky = 0 if code is None else code
    if sky in CLEAR_CODES and cloud_cover is not None:
        if cloud_cover >= 80:
            code = 3
        elif cloud_cover >= 50 and sky == 0:
            code = 2
    if code != result.weather_code:
        result = ModelPrecip(
            weather_code=code,
            rain=result.rain,
            snowfall=result.snowfall,
            precipitation=result.precipitation,
        )
    return result
