"""Merge utilities for keeping secondary-provider history across refreshes."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Sequence

import pandas as pd


def _entries_frame(entries: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
    entries = [entry for entry in entries if entry.get("time")]
    return pd.DataFrame(
        {
            "time": pd.Series([entry["time"] for entry in entries], dtype=object),
            "entry": pd.Series(list(entries), dtype=object),
        }
    )


def local_midnight(now: datetime | pd.Timestamp | None, tz: str) -> pd.Timestamp:
    """Return the start of the current local day as a UTC timestamp."""

    stamp = pd.Timestamp.now(tz="UTC") if now is None else pd.Timestamp(now)
    if stamp.tzinfo is None:
        stamp = stamp.tz_localize("UTC")
    return stamp.tz_convert(tz).normalize().tz_convert("UTC")


def merge_timeseries(
    cached: Sequence[Mapping[str, Any]],
    fresh: Sequence[Mapping[str, Any]],
    *,
    tz: str,
    now: datetime | pd.Timestamp | None = None,
) -> list[Mapping[str, Any]]:
    """
    Merge fresh time-series entries into cached ones keyed by ``time``.

    Fresh entries win on equal timestamps, cached-only entries are kept, and
    everything before local midnight is dropped. The result is time-ordered.
    """

    combined = pd.concat([_entries_frame(fresh), _entries_frame(cached)], ignore_index=True)
    if combined.empty:
        return []
    combined = combined.drop_duplicates(subset=["time"], keep="first")
    combined["valid_time"] = pd.to_datetime(combined["time"], utc=True)
    combined = combined.sort_values("valid_time", kind="stable")
    combined = combined[combined["valid_time"] >= local_midnight(now, tz)]
    return combined["entry"].tolist()


def merge_metno_payload(
    cached_payload: Mapping[str, Any] | None,
    fresh_payload: Mapping[str, Any],
    *,
    tz: str,
    now: datetime | pd.Timestamp | None = None,
) -> dict[str, Any]:
    """
    Return ``fresh_payload`` with its time series extended by cached history.

    Nothing is merged unless the cached document carries a time series.
    """

    merged = dict(fresh_payload)
    cached_series = ((cached_payload or {}).get("properties") or {}).get("timeseries")
    if not isinstance(cached_series, list):
        return merged
    fresh_series = (fresh_payload.get("properties") or {}).get("timeseries") or []
    properties = dict(fresh_payload.get("properties") or {})
    properties["timeseries"] = merge_timeseries(cached_series, fresh_series, tz=tz, now=now)
    merged["properties"] = properties
    return merged
