"""Turn raw conditions and a geocoding candidate into a rendering-ready reading."""
from __future__ import annotations

import math
from typing import Optional

from weather_lookup.data_sources import CurrentConditions, GeoCandidate
from weather_lookup.domain import IconClass, WeatherReading

HUMIDITY_PLACEHOLDER = "--"

RAIN_RANGES = ((51, 67), (80, 86))
SNOW_RANGE = (71, 77)
THUNDERSTORM_MIN = 95


def icon_class_for_code(code: int) -> IconClass:
    """Classify a WMO weather code into an icon group. Order matters."""
    if code == 0:
        return IconClass.CLEAR
    if code in (1, 2, 3):
        return IconClass.PARTLY_CLOUDY
    if code in (45, 48):
        return IconClass.FOG
    if any(low <= code <= high for low, high in RAIN_RANGES):
        return IconClass.RAIN
    if SNOW_RANGE[0] <= code <= SNOW_RANGE[1]:
        return IconClass.SNOW
    if code >= THUNDERSTORM_MIN:
        return IconClass.THUNDERSTORM
    return IconClass.DEFAULT_CLOUD


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (19.5 -> 20, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def _plain_number(value: float) -> str:
    """Render a number without a trailing '.0' for integral values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def temperature_label(temperature_c: float) -> str:
    return f"{round_half_up(temperature_c)}°C"


def wind_label(wind_speed_kmh: float) -> str:
    return f"{_plain_number(wind_speed_kmh)} km/h"


def humidity_label(humidity_percent: Optional[float]) -> str:
    if humidity_percent is None:
        return HUMIDITY_PLACEHOLDER
    return f"{_plain_number(humidity_percent)}%"


def city_label(candidate: GeoCandidate) -> str:
    """Place name, with the country appended only when one is known."""
    if candidate.country:
        return f"{candidate.display_name}, {candidate.country}"
    return candidate.display_name


def build_reading(conditions: CurrentConditions, candidate: GeoCandidate) -> WeatherReading:
    """Assemble the immutable WeatherReading for one resolved query."""
    return WeatherReading(
        city=city_label(candidate),
        temperature_label=temperature_label(conditions.temperature_c),
        wind_label=wind_label(conditions.wind_speed_kmh),
        humidity_label=humidity_label(conditions.humidity_percent),
        icon_class=icon_class_for_code(conditions.weather_code),
    )
