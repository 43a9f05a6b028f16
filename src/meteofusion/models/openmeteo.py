"""Open-Meteo multi-model provider (primary source)."""

from __future__ import annotations

from datetime import timedelta
from typing import Mapping

from meteofusion.models.base import BasePointProvider

OPENMETEO_MODELS = (
    "best_match",
    "meteofrance_arome_france_hd",
    "meteofrance_arome_france",
    "meteofrance_seamless",
    "meteoswiss_icon_seamless",
)

HOURLY_VARIABLES = (
    "temperature_2m",
    "apparent_temperature",
    "dew_point_2m",
    "freezing_level_height",
    "relative_humidity_2m",
    "precipitation",
    "rain",
    "snowfall",
    "showers",
    "weather_code",
    "cloud_cover",
    "wind_speed_10m",
    "wind_direction_10m",
    "wind_gusts_10m",
    "precipitation_probability",
    "is_day",
    "total_column_integrated_water_vapour",
    "uv_index",
    "uv_index_clear_sky",
    "temperature_850hPa",
    "temperature_700hPa",
    "temperature_500hPa",
)

DAILY_VARIABLES = ("precipitation_sum", "showers_sum", "snowfall_sum")


class OpenMeteo(BasePointProvider):
    """Adapter for the Open-Meteo forecast API.

    The window starts the previous UTC day so local midnight is always
    covered, and runs seven days ahead.
    """

    provider_key = "openmeteo"
    base_url = "https://api.open-meteo.com/v1/forecast"

    def request_params(self) -> Mapping[str, object]:
        start = (self.now - timedelta(days=1)).strftime("%Y-%m-%d")
        end = (self.now + timedelta(days=7)).strftime("%Y-%m-%d")
        return {
            "latitude": self.lat,
            "longitude": self.lon,
            "models": ",".join(OPENMETEO_MODELS),
            "timezone": "GMT",
            "start_date": start,
            "end_date": end,
            "hourly": ",".join(HOURLY_VARIABLES),
            "daily": ",".join(DAILY_VARIABLES),
            "cell_selection": "land",
        }
