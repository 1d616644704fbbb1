"""Factory helpers for choosing geocoding and weather data sources at startup."""

from __future__ import annotations

from typing import List

from weather_lookup import config
from weather_lookup.data_sources.base import CallableWeatherDataSource, GeocodeProvider, WeatherDataSource
from weather_lookup.data_sources.nominatim_client import NominatimGeocodeProvider
from weather_lookup.data_sources.open_meteo_client import OpenMeteoGeocodeProvider, fetch_current_conditions
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_PROVIDER_NAMES = ("open_meteo", "nominatim")


def build_geocode_provider(name: str, settings: config.Settings | None = None) -> GeocodeProvider:
    """Instantiate a single geocoding provider by name."""
    settings = settings or config.settings
    key = (name or "").strip().lower()

    if key == "open_meteo":
        return OpenMeteoGeocodeProvider(
            base_url=settings.geocoding_url,
            timeout=settings.request_timeout_seconds,
        )

    if key == "nominatim":
        return NominatimGeocodeProvider(
            base_url=settings.nominatim_url,
            timeout=settings.request_timeout_seconds,
        )

    raise ValueError(f"Unknown geocode provider '{name}'")


def build_geocode_providers(settings: config.Settings | None = None) -> List[GeocodeProvider]:
    """Instantiate the configured geocoding providers in fallback order."""
    settings = settings or config.settings
    names = list(getattr(settings, "geocode_provider_names", None) or DEFAULT_PROVIDER_NAMES)
    providers = [build_geocode_provider(name, settings) for name in names]
    logger.info("Using geocode providers", extra={"providers": [p.name for p in providers]})
    return providers


def build_weather_source(settings: config.Settings | None = None) -> WeatherDataSource:
    """Instantiate the Open-Meteo current-conditions source."""
    settings = settings or config.settings
    base_url = settings.forecast_url
    timeout = settings.request_timeout_seconds

    def _current(latitude: float, longitude: float):
        return fetch_current_conditions(latitude, longitude, base_url=base_url, timeout=timeout)

    logger.info("Using Open-Meteo weather source", extra={"forecast_url": base_url})
    return CallableWeatherDataSource(current_conditions=_current)
