"""Hourly enrichment of provider payloads.

Open-Meteo exposes every variable once per model; the enricher walks the time
axis, picks each variable from the profile's model priorities and derives the
fields the providers do not supply (phase split, Roebber snow, corrected
freezing level, symbol, snow quality).
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, Sequence

from meteofusion.config import PRIMARY_PROFILE, FusionProfile
from meteofusion.pipeline.derive import dewpoint_c, is_daytime_hour
from meteofusion.pipeline.freezing import correct_freezing_level
from meteofusion.pipeline.normalize import kmh_to_ms, maybe_round
from meteofusion.pipeline.precip import (
    ModelPrecip,
    hybrid_correction,
    is_snow,
    reconcile_weather_code,
    snow_quality,
    split_precipitation,
)
from meteofusion.pipeline.resolve import ModelFields, resolve
from meteofusion.pipeline.slr import roebber_slr, snow_depth_cm
from meteofusion.pipeline.symbols import determine_symbol

LOGGER = logging.getLogger("meteofusion.pipeline")

METNO_PERIODS = ("next_1_hours", "next_6_hours")


@dataclass(frozen=True)
class EnrichedHourlyRecord:
    time: str
    temperature: Optional[float]
    apparent_temperature: Optional[float]
    dew_point: Optional[float]
    humidity: Optional[float]
    wind_speed: Optional[float]
    wind_direction: Optional[float]
    wind_gusts: Optional[float]
    precipitation: float
    rain: float
    snowfall: float
    snowfall_roebber: float
    roebber_slr: float
    precipitation_probability: float
    freezing_point: Optional[int]
    freezing_point_corrected: bool
    cloud_cover: Optional[float]
    weather_code: Optional[int]
    symbol_code: str
    snow_quality: Optional[str]
    uv_index: Optional[float]
    is_day: int


def records_to_columns(records: Sequence[Any], record_type: type) -> dict[str, list]:
    """Lay out dataclass records as index-aligned columns for the wire format."""

    names = [f.name for f in fields(record_type)]
    return {name: [getattr(record, name) for record in records] for name in names}


def _or_zero(value: Optional[float]) -> float:
    return 0 if value is None else value


def _as_code(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def _model_precip(fields_: ModelFields, index: int, priority: Sequence[str]) -> ModelPrecip:
    return ModelPrecip(
        weather_code=_as_code(resolve(fields_, "weather_code", index, priority)),
        rain=resolve(fields_, "rain", index, priority),
        snowfall=resolve(fields_, "snowfall", index, priority),
        precipitation=_or_zero(resolve(fields_, "precipitation", index, priority)),
    )


def enrich_hour(
    fields_: ModelFields,
    index: int,
    elevation: Optional[float],
    profile: FusionProfile,
) -> EnrichedHourlyRecord:
    """Build the enriched record for one time step."""

    hd = profile.hd
    time = fields_.time[index]

    temp = resolve(fields_, "temperature_2m", index, hd)
    apparent = resolve(fields_, "apparent_temperature", index, hd)
    dew = resolve(fields_, "dew_point_2m", index, hd)
    humidity = resolve(fields_, "relative_humidity_2m", index, hd)
    wind_speed = resolve(fields_, "wind_speed_10m", index, hd)
    wind_dir = resolve(fields_, "wind_direction_10m", index, hd)
    wind_gusts = resolve(fields_, "wind_gusts_10m", index, hd)
    cloud = resolve(fields_, "cloud_cover", index, profile.decomp)
    precip_prob = _or_zero(resolve(fields_, "precipitation_probability", index, profile.prob))

    freezing = correct_freezing_level(
        resolve(fields_, "freezing_level_height", index, profile.freezing),
        fields_.value(f"freezing_level_height_{profile.freezing_fallback_model}", index),
        temp,
        elevation,
    )

    reported = ModelPrecip(
        weather_code=_as_code(resolve(fields_, "weather_code", index, profile.decomp)),
        rain=resolve(fields_, "rain", index, profile.decomp),
        snowfall=resolve(fields_, "snowfall", index, profile.decomp),
        precipitation=_or_zero(resolve(fields_, "precipitation", index, hd)),
    )
    alternate = _model_precip(fields_, index, (profile.consistency_model,))
    reconciled = reconcile_weather_code(reported, alternate, cloud)
    precip = reconciled.precipitation

    split = split_precipitation(
        precip, reconciled.rain, reconciled.snowfall, temp, dew, profile.snow
    )

    slr = roebber_slr(temp, humidity, kmh_to_ms(wind_speed), profile.slr)
    snowfall_roebber = 0
    snowy = is_snow(temp, dew, profile.snow)
    if precip > 0 and snowy:
        snowfall_roebber = round(snow_depth_cm(precip, slr), 2)

    split = hybrid_correction(split, temp, dew, profile.snow)

    uv = resolve(fields_, "uv_index", index, hd)
    if uv is None:
        uv = resolve(fields_, "uv_index_clear_sky", index, hd)

    is_day = resolve(fields_, "is_day", index, hd)
    if is_day is None:
        is_day = is_daytime_hour(time)

    return EnrichedHourlyRecord(
        time=time,
        temperature=temp,
        apparent_temperature=apparent,
        dew_point=dew,
        humidity=humidity,
        wind_speed=kmh_to_ms(wind_speed, 1),
        wind_direction=wind_dir,
        wind_gusts=kmh_to_ms(wind_gusts, 1),
        precipitation=round(precip, 4),
        rain=split.rain,
        snowfall=split.snowfall,
        snowfall_roebber=snowfall_roebber,
        roebber_slr=round(slr, 1),
        precipitation_probability=precip_prob,
        freezing_point=freezing.value,
        freezing_point_corrected=freezing.corrected,
        cloud_cover=cloud,
        weather_code=reconciled.weather_code,
        symbol_code=determine_symbol(split.snowfall, split.rain, reconciled.weather_code, bool(is_day)),
        snow_quality=snow_quality(split.snowfall, temp, dew, profile.snow),
        uv_index=maybe_round(uv, 1),
        is_day=1 if is_day else 0,
    )


def enrich_openmeteo_hourly(
    payload: Mapping[str, Any] | None,
    elevation: Optional[float] = None,
    profile: FusionProfile = PRIMARY_PROFILE,
) -> list[EnrichedHourlyRecord] | None:
    """
    Enrich every hourly step of an Open-Meteo document, preserving order.

    Returns None when the payload carries no hourly time axis.
    """

    model_fields = ModelFields.from_payload(payload)
    if model_fields is None:
        return None
    records = [enrich_hour(model_fields, i, elevation, profile) for i in range(len(model_fields))]
    LOGGER.debug("Enriched %d hourly steps with profile %s", len(records), profile.name)
    return records


def _enrich_metno_period(
    block: dict[str, Any],
    temp: Optional[float],
    dew: Optional[float],
    slr: float,
    profile: FusionProfile,
) -> None:
    details = block.setdefault("details", {})
    precip = _or_zero(details.get("precipitation_amount"))
    if precip > 0:
        snowy = is_snow(temp, dew, profile.snow)
        snowfall = round(snow_depth_cm(precip, slr), 2) if snowy else 0
        details["snowfall"] = snowfall
        details["rain"] = 0 if snowy else precip
        details["snow_quality"] = snow_quality(snowfall, temp, dew, profile.snow) if snowy else None
    else:
        details["snowfall"] = 0
        details["rain"] = 0
        details["snow_quality"] = None


def enrich_metno_timeseries(
    payload: Mapping[str, Any] | None,
    profile: FusionProfile = PRIMARY_PROFILE,
) -> dict[str, Any] | None:
    """
    Return a copy of a MET.no document with rain/snow/snow quality per period.

    MET.no reports wind in m/s already; a missing dew point is derived from
    temperature and humidity and written back into the instant details.
    """

    if payload is None:
        return None
    result = copy.deepcopy(dict(payload))
    timeseries = result.get("properties", {}).get("timeseries")
    if not isinstance(timeseries, list):
        return result

    for entry in timeseries:
        data = entry.get("data") or {}
        details = (data.get("instant") or {}).get("details")
        if not details:
            continue
        temp = details.get("air_temperature")
        humidity = details.get("relative_humidity")
        dew = details.get("dew_point_temperature")
        if dew is None:
            dew = dewpoint_c(temp, humidity)
            if dew is not None:
                details["dew_point_temperature"] = dew
        slr = roebber_slr(temp, humidity, details.get("wind_speed"), profile.slr)
        for period in METNO_PERIODS:
            if isinstance(data.get(period), dict):
                _enrich_metno_period(data[period], temp, dew, slr, profile)
    return result
