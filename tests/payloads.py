from datetime import datetime, timezone
from typing import Mapping

import pandas as pd

from meteofusion.backends.base import FetchBackend, UpstreamFetchError

FIXED_NOW = datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)


def openmeteo_payload(hours: int = 24, temperature: float = -4.0) -> dict:
    times = pd.date_range("2024-01-10T00:00", periods=hours, freq="h")
    return {
        "latitude": 44.29,
        "longitude": 6.57,
        "elevation": 1600.0,
        "hourly": {
            "time": [t.strftime("%Y-%m-%dT%H:%M") for t in times],
            "temperature_2m_best_match": [temperature] * hours,
            "temperature_2m_meteofrance_arome_france_hd": [temperature + 1.0] * hours,
            "dew_point_2m_best_match": [temperature - 2.0] * hours,
            "relative_humidity_2m_best_match": [85] * hours,
            "wind_speed_10m_best_match": [18.0] * hours,
            "wind_direction_10m_best_match": [200] * hours,
            "wind_gusts_10m_best_match": [36.0] * hours,
            "precipitation_best_match": [1.0 if i % 2 else 0.0 for i in range(hours)],
            "weather_code_best_match": [73 if i % 2 else 3 for i in range(hours)],
            "cloud_cover_best_match": [100] * hours,
            "precipitation_probability_meteofrance_seamless": [60] * hours,
            "freezing_level_height_best_match": [1200.0] * hours,
            "is_day_best_match": [1 if 7 <= t.hour < 17 else 0 for t in times],
        },
    }


def metno_payload(times: list[str], temperature: float = -3.0) -> dict:
    return {
        "type": "Feature",
        "properties": {
            "timeseries": [
                {
                    "time": t,
                    "data": {
                        "instant": {
                            "details": {
                                "air_temperature": temperature,
                                "relative_humidity": 90.0,
                                "wind_speed": 2.0,
                            }
                        },
                        "next_1_hours": {"details": {"precipitation_amount": 0.5}},
                    },
                }
                for t in times
            ]
        },
    }


class StubBackend(FetchBackend):
    """Serve canned provider documents keyed by host."""

    def __init__(self, metno: dict, openmeteo: dict, *, fail: str | None = None):
        self.metno = metno
        self.openmeteo = openmeteo
        self.fail = fail
        self.calls: list[str] = []

    def fetch_json(self, url: str, *, params: Mapping[str, object] | None = None) -> dict:
        host = "metno" if "met.no" in url else "openmeteo"
        self.calls.append(host)
        if host == self.fail:
            raise UpstreamFetchError(f"{host} unavailable")
        return self.metno if host == "metno" else self.openmeteo


