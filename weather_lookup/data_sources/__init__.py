"""Data source factories for plugging different geocoding and weather backends."""

from .base import CallableWeatherDataSource, GeoCandidate, GeocodeOptions, GeocodeProvider, WeatherDataSource
from .factory import build_geocode_provider, build_geocode_providers, build_weather_source
from .nominatim_client import NominatimGeocodeProvider
from .open_meteo_client import (
    CurrentConditions,
    OpenMeteoGeocodeProvider,
    fetch_current_conditions,
)

__all__ = [
    "build_geocode_provider",
    "build_geocode_providers",
    "build_weather_source",
    "CallableWeatherDataSource",
    "CurrentConditions",
    "GeoCandidate",
    "GeocodeOptions",
    "GeocodeProvider",
    "NominatimGeocodeProvider",
    "OpenMeteoGeocodeProvider",
    "WeatherDataSource",
    "fetch_current_conditions",
]
