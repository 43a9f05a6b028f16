"""Pipeline helpers for resolving, enriching, aggregating and merging forecasts."""

from __future__ import annotations

from .aggregate import SixHourAggregate, aggregate_hourly_to_6h, available_days
from .enrich import EnrichedHourlyRecord, enrich_metno_timeseries, enrich_openmeteo_hourly, records_to_columns
from .freezing import FreezingLevel, correct_freezing_level
from .merge import merge_metno_payload, merge_timeseries
from .precip import is_snow, snow_quality
from .resolve import ModelFields, resolve
from .slr import roebber_slr, snow_depth_cm
from .symbols import determine_symbol

__all__ = [
    "EnrichedHourlyRecord",
    "FreezingLevel",
    "ModelFields",
    "SixHourAggregate",
    "aggregate_hourly_to_6h",
    "available_days",
    "correct_freezing_level",
    "determine_symbol",
    "enrich_metno_timeseries",
    "enrich_openmeteo_hourly",
    "is_snow",
    "merge_metno_payload",
    "merge_timeseries",
    "records_to_columns",
    "resolve",
    "roebber_slr",
    "snow_depth_cm",
    "snow_quality",
]
