"""Freezing-level correction against station elevation and temperature.

Models derive the 0 °C isotherm from the free atmosphere and miss valley
inversions, so a sub-zero station can be reported well below the freezing
level. Candidates are checked in turn and the station elevation is returned,
flagged as corrected, when none of them is plausible.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

SUSPECT_TEMP_C = -5.0
SUSPECT_BAND_M = 500.0


@dataclass(frozen=True)
class FreezingLevel:
    value: Optional[int]
    corrected: bool
    source: str


def _round(value: float) -> int:
    return int(round(value))


def _is_consistent(altitude: float, temp: Optional[float], elevation: float) -> bool:
    return altitude <= elevation or temp is None or temp > 0


def is_suspect(altitude: Optional[float], temp: Optional[float], elevation: float) -> bool:
    """Return True when a cold station sits just above the reported level.

    At -10 °C the isotherm should lie roughly 1500 m lower (about 6.5 °C per
    1000 m), so a level within 500 m below the station is implausible.
    """

    return (
        temp is not None
        and temp < SUSPECT_TEMP_C
        and altitude is not None
        and altitude > elevation - SUSPECT_BAND_M
    )


def correct_freezing_level(
    primary: Optional[float],
    fallback: Optional[float],
    temp: Optional[float],
    elevation: Optional[float],
) -> FreezingLevel:
    """Pick a plausible freezing altitude; ``corrected`` implies the elevation."""

    if elevation is None:
        value = _round(primary) if primary is not None else None
        return FreezingLevel(value=value, corrected=False, source="best_match")

    if (
        primary is not None
        and not is_suspect(primary, temp, elevation)
        and _is_consistent(primary, temp, elevation)
    ):
        return FreezingLevel(value=_round(primary), corrected=False, source="best_match")

    if fallback is not None and _is_consistent(fallback, temp, elevation):
        return FreezingLevel(value=_round(fallback), corrected=False, source="meteoswiss")

    return FreezingLevel(value=_round(elevation), corrected=True, source="elevation")
