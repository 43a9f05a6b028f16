"""Unit normalization helpers for provider values."""

from __future__ import annotations

import math
from typing import Optional

KMH_PER_MS = 3.6


def kmh_to_ms(value: Optional[float], digits: Optional[int] = None) -> Optional[float]:
    """
    Convert a km/h wind value to m/s, optionally rounded.
    """

    if value is None:
        return None
    converted = value / KMH_PER_MS
    return round(converted, digits) if digits is not None else converted


def is_missing(value: object) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def maybe_round(value: Optional[float], digits: int = 0) -> Optional[float]:
    """Round a value, mapping None and NaN to None; ``digits=0`` yields an int."""

    if is_missing(value):
        return None
    if digits:
        return round(float(value), digits)
    return int(round(float(value)))
