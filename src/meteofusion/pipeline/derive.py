"""Derived field calculators for point forecasts."""

from __future__ import annotations

import math
from typing import Optional

MAGNUS_A = 17.27
MAGNUS_B = 237.7


def dewpoint_c(temp_c: Optional[float], rh_pct: Optional[float]) -> Optional[float]:
    """
    Compute dew point with the Magnus-Tetens formula (about ±0.4 °C, -40..50 °C).
    """

    if temp_c is None or rh_pct is None or rh_pct <= 0:
        return None
    alpha = (MAGNUS_A * temp_c) / (MAGNUS_B + temp_c) + math.log(rh_pct / 100.0)
    return round((MAGNUS_B * alpha) / (MAGNUS_A - alpha), 1)


def is_daytime_hour(timestamp: str) -> bool:
    """
    Guess daylight from the hour of an ISO timestamp (07:00 to 16:59).
    """

    try:
        hour = int(timestamp[11:13])
    except (TypeError, ValueError):
        return False
    return 7 <= hour < 17
