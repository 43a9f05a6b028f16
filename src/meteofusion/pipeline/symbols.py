"""Weather-symbol selection as an ordered decision table.

Icon ids follow the MET.no weather icon legend. Icons with day/night variants
carry a ``_day``/``_night`` suffix; plain sleet and snow icons have no night
variant, so at night the matching ``...showers_night`` icon stands in. The
legend spells two thunder icons ``lightssleetshowersandthunder`` and
``lightssnowshowersandthunder``; those names are kept verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

SHOWER_CODES = frozenset({80, 81, 82, 85, 86})
THUNDER_CODES = frozenset({95, 96, 99})
SLEET_CODES = frozenset({56, 57, 66, 67, 68, 69})
HEAVY_SLEET_CODES = frozenset({57, 67, 69})


@dataclass(frozen=True)
class IconFamily:
    """One precipitation icon and its thunder/shower/night variants."""

    name: str
    showers_thunder: str
    night_substitute: bool = False

    def icon(self, *, thunder: bool, showers: bool, is_day: bool) -> str:
        suffix = _suffix(is_day)
        if thunder:
            return self.showers_thunder if showers else f"{self.name}andthunder"
        if showers:
            return f"{self.name}showers{suffix}"
        if self.night_substitute and not is_day:
            return f"{self.name}showers{suffix}"
        return self.name


HEAVY_SLEET = IconFamily("heavysleet", "heavysleetshowersandthunder", night_substitute=True)
SLEET = IconFamily("sleet", "sleetshowersandthunder", night_substitute=True)
LIGHT_SLEET = IconFamily("lightsleet", "lightssleetshowersandthunder", night_substitute=True)
HEAVY_SNOW = IconFamily("heavysnow", "heavysnowshowersandthunder")
SNOW = IconFamily("snow", "snowshowersandthunder", night_substitute=True)
LIGHT_SNOW = IconFamily("lightsnow", "lightssnowshowersandthunder", night_substitute=True)
HEAVY_RAIN = IconFamily("heavyrain", "heavyrainshowersandthunder")
RAIN = IconFamily("rain", "rainshowersandthunder")
LIGHT_RAIN = IconFamily("lightrain", "lightrainshowersandthunder")

# (minimum amount, family), heaviest first; the last tier has no minimum.
SLEET_TIERS = ((2.5, HEAVY_SLEET), (1.0, SLEET), (0.0, LIGHT_SLEET))
SNOW_TIERS = ((2.5, HEAVY_SNOW), (1.0, SNOW), (0.0, LIGHT_SNOW))
RAIN_TIERS = ((7.5, HEAVY_RAIN), (2.5, RAIN), (0.0, LIGHT_RAIN))

# Precipitation implied by the code alone, without thunder/shower variants.
CODE_FALLBACK: dict[int, IconFamily | str] = {
    **{code: "lightrain" for code in (51, 53, 55, 56, 57, 61, 63, 80)},
    **{code: "rain" for code in (65, 81, 82)},
    **{code: LIGHT_SLEET for code in (66, 67, 68, 69)},
    **{code: LIGHT_SNOW for code in (71, 85)},
    73: SNOW,
    **{code: "heavysnow" for code in (75, 77, 86)},
    **{code: "rainandthunder" for code in (95, 96, 99)},
}

# Sky codes; True marks icons with day/night variants.
SKY_ICONS: dict[int, tuple[str, bool]] = {
    0: ("clearsky", True),
    1: ("fair", True),
    2: ("partlycloudy", True),
    3: ("cloudy", False),
    45: ("fog", False),
    48: ("fog", False),
}


@dataclass(frozen=True)
class SymbolContext:
    snowfall: float
    rain: float
    code: int
    is_day: bool

    @property
    def thunder(self) -> bool:
        return self.code in THUNDER_CODES

    @property
    def showers(self) -> bool:
        return self.code in SHOWER_CODES

    def variant(self, family: IconFamily) -> str:
        return family.icon(thunder=self.thunder, showers=self.showers, is_day=self.is_day)


@dataclass(frozen=True)
class SymbolRule:
    name: str
    applies: Callable[[SymbolContext], bool]
    resolve: Callable[[SymbolContext], str]


def _suffix(is_day: bool) -> str:
    return "_day" if is_day else "_night"


def _tier(amount: float, tiers) -> IconFamily:
    for minimum, family in tiers:
        if amount >= minimum:
            return family
    return tiers[-1][1]


def _code_fallback(ctx: SymbolContext) -> str:
    entry = CODE_FALLBACK[ctx.code]
    if isinstance(entry, IconFamily):
        return entry.icon(thunder=False, showers=False, is_day=ctx.is_day)
    return entry


def _sky(ctx: SymbolContext) -> str:
    name, has_variants = SKY_ICONS[ctx.code]
    return f"{name}{_suffix(ctx.is_day)}" if has_variants else name


SYMBOL_RULES: tuple[SymbolRule, ...] = (
    SymbolRule(
        "sleet_code",
        lambda ctx: ctx.code in SLEET_CODES,
        lambda ctx: ctx.variant(HEAVY_SLEET if ctx.code in HEAVY_SLEET_CODES else LIGHT_SLEET),
    ),
    SymbolRule(
        "sleet_mixed",
        lambda ctx: ctx.rain > 0 and ctx.snowfall > 0,
        lambda ctx: ctx.variant(_tier(ctx.rain + ctx.snowfall, SLEET_TIERS)),
    ),
    SymbolRule(
        "snow",
        lambda ctx: ctx.snowfall > 0,
        lambda ctx: ctx.variant(_tier(ctx.snowfall, SNOW_TIERS)),
    ),
    SymbolRule(
        "rain",
        lambda ctx: ctx.rain > 0,
        lambda ctx: ctx.variant(_tier(ctx.rain, RAIN_TIERS)),
    ),
    SymbolRule("code_fallback", lambda ctx: ctx.code in CODE_FALLBACK, _code_fallback),
    SymbolRule("sky", lambda ctx: ctx.code in SKY_ICONS, _sky),
    SymbolRule("default", lambda ctx: True, lambda ctx: f"clearsky{_suffix(ctx.is_day)}"),
)


def determine_symbol(
    snowfall: Optional[float],
    rain: Optional[float],
    weather_code: Optional[int],
    is_day: bool,
    rules: tuple[SymbolRule, ...] = SYMBOL_RULES,
) -> str:
    """Return the icon id for one period; the first matching rule wins."""

    ctx = SymbolContext(
        snowfall=snowfall or 0.0,
        rain=rain or 0.0,
        code=int(weather_code) if weather_code is not None else 0,
        is_day=bool(is_day),
    )
    for rule in rules:
        if rule.applies(ctx):
            return rule.resolve(ctx)
    return f"clearsky{_suffix(ctx.is_day)}"
