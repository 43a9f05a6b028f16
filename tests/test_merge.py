import pandas as pd

from meteofusion.pipeline.merge import local_midnight, merge_metno_payload, merge_timeseries


def _entry(time: str, value: float) -> dict:
    return {"time": time, "data": {"instant": {"details": {"air_temperature": value}}}}


NOW = pd.Timestamp("2024-01-10T15:00:00Z")


def test_merge_fresh_wins_and_history_is_kept():
    cached = [_entry("2024-01-10T06:00:00Z", 1.0), _entry("2024-01-10T07:00:00Z", 2.0)]
    fresh = [_entry("2024-01-10T07:00:00Z", 9.0), _entry("2024-01-10T08:00:00Z", 3.0)]
    merged = merge_timeseries(cached, fresh, tz="UTC", now=NOW)
    assert [e["time"] for e in merged] == [
        "2024-01-10T06:00:00Z",
        "2024-01-10T07:00:00Z",
        "2024-01-10T08:00:00Z",
    ]
    assert merged[1]["data"]["instant"]["details"]["air_temperature"] == 9.0


def test_merge_prunes_before_local_midnight():
    cached = [_entry("2024-01-09T22:00:00Z", 1.0), _entry("2024-01-09T23:00:00Z", 1.5)]
    fresh = [_entry("2024-01-10T00:00:00Z", 2.0)]
    utc = merge_timeseries(cached, fresh, tz="UTC", now=NOW)
    assert [e["time"] for e in utc] == ["2024-01-10T00:00:00Z"]
    # Paris midnight is 23:00 UTC in winter
    paris = merge_timeseries(cached, fresh, tz="Europe/Paris", now=NOW)
    assert [e["time"] for e in paris] == ["2024-01-09T23:00:00Z", "2024-01-10T00:00:00Z"]


def test_local_midnight_accepts_naive_now():
    midnight = local_midnight(pd.Timestamp("2024-07-01T12:00:00"), "Europe/Paris")
    assert midnight == pd.Timestamp("2024-06-30T22:00:00Z")


def test_merge_payload_requires_cached_series():
    fresh = {"type": "Feature", "properties": {"meta": {"units": {}}, "timeseries": [_entry("2024-01-10T08:00:00Z", 3.0)]}}
    assert merge_metno_payload(None, fresh, tz="UTC", now=NOW) == fresh
    assert merge_metno_payload({"properties": {}}, fresh, tz="UTC", now=NOW) == fresh

    cached = {"properties": {"timeseries": [_entry("2024-01-10T07:00:00Z", 2.0)]}}
    merged = merge_metno_payload(cached, fresh, tz="UTC", now=NOW)
    assert merged["type"] == "Feature"
    assert merged["properties"]["meta"] == {"units": {}}
    assert [e["time"] for e in merged["properties"]["timeseries"]] == [
        "2024-01-10T07:00:00Z",
        "2024-01-10T08:00:00Z",
    ]
    assert len(fresh["properties"]["timeseries"]) == 1


def test_merge_of_empty_series():
    assert merge_timeseries([], [], tz="UTC", now=NOW) == []
