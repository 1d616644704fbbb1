"""Helpers for geocoding place names and fetching current weather from the Open-Meteo APIs."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

import requests

from weather_lookup.config import settings
from weather_lookup.data_sources.base import GeoCandidate, GeocodeOptions
from weather_lookup.errors import WeatherFetchFailed
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="open_meteo_client")

session = requests.Session()
session.headers.update({"User-Agent": settings.user_agent})

OPEN_METEO_GEOCODING_URL = settings.geocoding_url
OPEN_METEO_WEATHER_URL = settings.forecast_url

HUMIDITY_SERIES = "relativehumidity_2m"


@dataclass(frozen=True)
class CurrentConditions:
    """Normalized current-weather snapshot returned by Open-Meteo."""
    temperature_c: float
    wind_speed_kmh: float
    weather_code: int
    observation_time: str  # local ISO timestamp, e.g. "2024-01-01T12:00"
    humidity_percent: Optional[float] = None


def search_places(
    name: str,
    *,
    language: str = "en",
    count: int = 1,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> List[dict]:
    """Query the geocoding API and return its raw result list (possibly empty)."""
    params = {
        "name": name,
        "count": count,
        "language": language,
    }

    resp = session.get(
        base_url or OPEN_METEO_GEOCODING_URL,
        params=params,
        timeout=timeout or settings.request_timeout_seconds,
    )
    resp.raise_for_status()
    data = resp.json()

    if not isinstance(data, dict):
        raise ValueError(f"Unexpected geocoding payload: {data!r}")
    # The API omits "results" entirely when nothing matched.
    results = data.get("results") or []
    if not isinstance(results, list):
        raise ValueError(f"Geocoding results are not a list: {results!r}")
    return results


def _candidate_from_result(result: dict, *, source: str) -> GeoCandidate:
    """Build a GeoCandidate from one geocoding result entry."""
    try:
        latitude = float(result["latitude"])
        longitude = float(result["longitude"])
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Geocoding result is missing coordinates: {result!r}") from exc
    country = result.get("country") or None
    return GeoCandidate(
        latitude=latitude,
        longitude=longitude,
        display_name=result.get("name") or "",
        country=country,
        source=source,
    )


class OpenMeteoGeocodeProvider:
    """Structured geocoder that honours a language tag."""

    name = "open_meteo"
    language_aware = True

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.base_url = base_url
        self.timeout = timeout

    def search(self, query: str, options: GeocodeOptions) -> Optional[GeoCandidate]:
        """Return the first Open-Meteo match for ``query`` in ``options.language``."""
        results = search_places(
            query,
            language=options.language or "en",
            count=1,
            base_url=self.base_url,
            timeout=self.timeout,
        )
        if not results:
            return None
        return _candidate_from_result(results[0], source=self.name)

    def __repr__(self) -> str:
        return f"OpenMeteoGeocodeProvider(base_url={self.base_url or OPEN_METEO_GEOCODING_URL!r})"


def _humidity_at(observation_time: Optional[str], hourly: Any) -> Optional[float]:
    """Return the hourly humidity whose timestamp exactly matches ``observation_time``.

    Anything unexpected in the hourly block (wrong shapes, missing entries,
    non-numeric values) means the humidity is absent.
    """
    if not observation_time or not isinstance(hourly, dict):
        return None
    times = hourly.get("time") or []
    humidities = hourly.get(HUMIDITY_SERIES) or []
    if not isinstance(times, list) or not isinstance(humidities, list):
        logger.debug("Hourly block has unexpected shape", extra={"observation_time": observation_time})
        return None
    try:
        idx = times.index(observation_time)
    except ValueError:
        logger.debug("Observation time not in hourly series", extra={"observation_time": observation_time})
        return None
    if idx >= len(humidities):
        return None
    value = humidities[idx]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _parse_current(data: Any) -> CurrentConditions:
    """Turn a forecast response body into CurrentConditions."""
    if not isinstance(data, dict):
        raise WeatherFetchFailed("Forecast response is not a JSON object")
    current = data.get("current_weather")
    if not current:
        raise WeatherFetchFailed("Forecast response has no current_weather block")
    try:
        temperature = float(current["temperature"])
        wind_speed = float(current["windspeed"])
        weather_code = int(current["weathercode"])
        observation_time = current["time"]
    except (KeyError, TypeError, ValueError) as exc:
        raise WeatherFetchFailed(f"Incomplete current_weather block: {current!r}") from exc

    return CurrentConditions(
        temperature_c=temperature,
        wind_speed_kmh=wind_speed,
        weather_code=weather_code,
        observation_time=observation_time,
        humidity_percent=_humidity_at(observation_time, data.get("hourly")),
    )


def fetch_current_conditions(
    latitude: float,
    longitude: float,
    *,
    timezone: str = "auto",
    temperature_unit: str = "celsius",
    wind_speed_unit: str = "kmh",
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> CurrentConditions:
    """Fetch current weather plus the hourly humidity series for the given coordinates."""
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "current_weather": "true",
        "hourly": HUMIDITY_SERIES,
        "temperature_unit": temperature_unit,
        "windspeed_unit": wind_speed_unit,
        "timezone": timezone,
    }

    resp = session.get(
        base_url or OPEN_METEO_WEATHER_URL,
        params=params,
        timeout=timeout or settings.request_timeout_seconds,
    )
    resp.raise_for_status()
    conditions = _parse_current(resp.json())
    logger.debug(
        "Fetched current conditions",
        extra={"latitude": latitude, "longitude": longitude, "observation_time": conditions.observation_time},
    )
    return conditions
