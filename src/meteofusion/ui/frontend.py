"""Simple frontend helpers for meteofusion."""

from __future__ import annotations

from typing import Any, Mapping


def summarize_point_data(document: Mapping[str, Any]) -> Mapping[str, object]:
    """
    Prepare a compact summary of a fused forecast document.
    """

    def _block(name: str) -> Mapping[str, object]:
        block = document.get(name) or {}
        return {
            "hourly": len((block.get("hourly") or {}).get("time", [])),
            "six_hourly": len((block.get("six_hourly") or {}).get("time", [])),
            "available_days": list(block.get("available_days") or []),
        }

    metno = document.get("metno") or {}
    meta = document.get("meta") or {}
    return {
        "elevation": document.get("elevation"),
        "openmeteo": _block("openmeteo_aggregated"),
        "arome": _block("arome_aggregated"),
        "metno_entries": len((metno.get("properties") or {}).get("timeseries", [])),
        "from_cache": bool(meta.get("from_cache")),
        "cache_age": meta.get("cache_age"),
    }
