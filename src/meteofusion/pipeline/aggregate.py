"""Six-hour synoptic aggregation of enriched hourly records."""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, fields
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from meteofusion.config import SnowThresholds
from meteofusion.pipeline.enrich import EnrichedHourlyRecord
from meteofusion.pipeline.normalize import maybe_round
from meteofusion.pipeline.precip import DEFAULT_THRESHOLDS, snow_quality
from meteofusion.pipeline.symbols import determine_symbol

BUCKET_HOURS = (0, 6, 12, 18)
BUCKET_SIZE = 6
MIN_BUCKETS_PER_DAY = 4

NUMERIC_COLUMNS = (
    "temperature",
    "dew_point",
    "wind_speed",
    "wind_direction",
    "precipitation",
    "rain",
    "snowfall",
    "snowfall_roebber",
    "precipitation_probability",
    "freezing_point",
    "cloud_cover",
    "weather_code",
    "uv_index",
)


@dataclass(frozen=True)
class SixHourAggregate:
    time: str
    temperature_min: Optional[float]
    temperature_max: Optional[float]
    wind_speed_max: Optional[float]
    wind_direction: Optional[int]
    precipitation: float
    rain: float
    snowfall: float
    snowfall_roebber: float
    precipitation_probability: float
    freezing_point: Optional[int]
    freezing_point_corrected: bool
    weather_code: int
    symbol_code: str
    snow_quality: Optional[str]
    uv_index_max: Optional[float]
    cloud_cover: Optional[int]


def _hourly_frame(records: Sequence[EnrichedHourlyRecord]) -> pd.DataFrame:
    columns = [f.name for f in fields(EnrichedHourlyRecord)]
    frame = pd.DataFrame([asdict(record) for record in records], columns=columns)
    for column in NUMERIC_COLUMNS:
        frame[column] = pd.to_numeric(frame[column], errors="coerce")
    return frame


def _mean(values: pd.Series) -> Optional[float]:
    values = values.dropna()
    return float(values.mean()) if not values.empty else None


def _nearest_to_mean(values: pd.Series) -> tuple[Optional[float], pd.Index]:
    values = values.dropna()
    if values.empty:
        return None, values.index
    deviations = np.abs(values.to_numpy() - values.mean())
    return float(values.iloc[int(np.argmin(deviations))]), values.index


def _most_common_symbol(symbols: pd.Series) -> Optional[str]:
    counts = Counter(symbol for symbol in symbols if symbol is not None)
    if not counts:
        return None
    return counts.most_common(1)[0][0]


def _fold(window: pd.DataFrame, start: str, hour: int, thresholds: SnowThresholds) -> SixHourAggregate:
    temps = window["temperature"].dropna()
    winds = window["wind_speed"].dropna()
    rain_sum = float(window["rain"].fillna(0).sum())
    snowfall_sum = float(window["snowfall"].fillna(0).sum())
    prob_max = max(0.0, float(window["precipitation_probability"].fillna(0).max()))
    uv_max = max(0.0, float(window["uv_index"].fillna(0).max()))

    freezing_point, freezing_index = _nearest_to_mean(window["freezing_point"])
    corrected = bool(window.loc[freezing_index, "freezing_point_corrected"].astype(bool).any())

    codes = window["weather_code"].dropna()
    dominant = int(codes.max()) if not codes.empty else 0

    is_day = 6 <= hour < 18
    symbol = determine_symbol(snowfall_sum, rain_sum, dominant, is_day)
    if snowfall_sum == 0 and rain_sum == 0:
        symbol = _most_common_symbol(window["symbol_code"]) or symbol

    return SixHourAggregate(
        time=start,
        temperature_min=maybe_round(temps.min(), 1) if not temps.empty else None,
        temperature_max=maybe_round(temps.max(), 1) if not temps.empty else None,
        wind_speed_max=maybe_round(winds.max(), 1) if not winds.empty else None,
        wind_direction=maybe_round(_mean(window["wind_direction"])),
        precipitation=round(float(window["precipitation"].fillna(0).sum()), 4),
        rain=round(rain_sum, 4),
        snowfall=round(snowfall_sum, 4),
        snowfall_roebber=round(float(window["snowfall_roebber"].fillna(0).sum()), 2),
        precipitation_probability=prob_max,
        freezing_point=maybe_round(freezing_point),
        freezing_point_corrected=corrected,
        weather_code=dominant,
        symbol_code=symbol,
        snow_quality=snow_quality(
            snowfall_sum, _mean(window["temperature"]), _mean(window["dew_point"]), thresholds
        ),
        uv_index_max=round(uv_max, 1) if uv_max > 0 else None,
        cloud_cover=maybe_round(_mean(window["cloud_cover"])),
    )


def aggregate_hourly_to_6h(
    records: Sequence[EnrichedHourlyRecord] | None,
    thresholds: SnowThresholds = DEFAULT_THRESHOLDS,
) -> list[SixHourAggregate] | None:
    """
    Fold hourly records into buckets opening at 00, 06, 12 and 18 UTC.

    Each bucket takes its opening record and the following ones, six at most.
    ``thresholds`` should match the ones the hourly records were built with.
    """

    if records is None:
        return None
    if not records:
        return []
    frame = _hourly_frame(records)
    hours = pd.to_datetime(frame["time"], utc=True).dt.hour
    aggregates: list[SixHourAggregate] = []
    for position, hour in enumerate(hours):
        if hour not in BUCKET_HOURS:
            continue
        window = frame.iloc[position : position + BUCKET_SIZE]
        aggregates.append(_fold(window, frame["time"].iloc[position], int(hour), thresholds))
    return aggregates


def available_days(
    aggregates: Sequence[SixHourAggregate] | None,
    tz: str,
    minimum: int = MIN_BUCKETS_PER_DAY,
) -> list[str]:
    """Return local days (YYYY-MM-DD) covered by at least ``minimum`` buckets."""

    if not aggregates:
        return []
    times = pd.to_datetime(pd.Series([agg.time for agg in aggregates]), utc=True)
    days = times.dt.tz_convert(tz).dt.strftime("%Y-%m-%d")
    counts = days.value_counts()
    return sorted(counts[counts >= minimum].index.tolist())
