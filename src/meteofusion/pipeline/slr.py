"""Snow-to-liquid ratio (Roebber simplified, Alpine calibration)."""

from __future__ import annotations

from typing import Optional

from meteofusion.config import SlrCoefficients

DEFAULT_COEFFICIENTS = SlrCoefficients()


def roebber_slr(
    temp_c: Optional[float],
    humidity_pct: Optional[float] = None,
    wind_speed_ms: Optional[float] = None,
    coefficients: SlrCoefficients = DEFAULT_COEFFICIENTS,
) -> float:
    """
    Return the snow-to-liquid ratio for the given surface conditions.

    Above -2 °C the ratio drops twice as fast; high humidity and wind above
    3 m/s both densify the snow. The result is clamped to [5, 25].
    """

    c = coefficients
    if temp_c is None:
        return c.base

    temp_k = temp_c + 273.15
    if temp_k > c.threshold_k:
        temp_adj = c.warm_slope * (c.threshold_k - temp_k)
    else:
        temp_adj = c.threshold_k - temp_k

    humidity = c.humidity_neutral if humidity_pct is None else humidity_pct
    humid_adj = (c.humidity_neutral - humidity) / c.humidity_scale

    wind = 0.0 if wind_speed_ms is None else wind_speed_ms
    wind_adj = -max(0.0, wind - c.wind_onset_ms) * c.wind_slope

    slr = c.base + temp_adj + humid_adj + wind_adj
    return max(c.minimum, min(slr, c.maximum))


def snow_depth_cm(precip_mm: float, slr: float) -> float:
    """Convert liquid-equivalent millimetres to centimetres of snow."""

    return precip_mm * slr / 10.0
