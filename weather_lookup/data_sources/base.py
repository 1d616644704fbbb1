"""Interfaces and shared records for geocoding and weather data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Protocol

if TYPE_CHECKING:
    from weather_lookup.data_sources.open_meteo_client import CurrentConditions


@dataclass(frozen=True)
class GeoCandidate:
    """First match returned by a geocoding backend."""
    latitude: float
    longitude: float
    display_name: str
    country: Optional[str] = None
    source: Optional[str] = None  # provider name that produced it


@dataclass(frozen=True)
class GeocodeOptions:
    """Per-attempt search options; language is ignored by language-agnostic backends."""
    language: Optional[str] = None


class GeocodeProvider(Protocol):
    """Anything that can turn a place name into at most one candidate."""

    name: str
    language_aware: bool

    def search(self, query: str, options: GeocodeOptions) -> Optional[GeoCandidate]:
        """Return the first candidate for ``query`` or None when nothing matched.

        Transport failures propagate; the caller decides how to recover.
        """
        ...


class WeatherDataSource(Protocol):
    """Interface for anything that can provide current conditions for a point."""

    def fetch_current_conditions(self, latitude: float, longitude: float) -> "CurrentConditions":
        """Return the current conditions, raising WeatherFetchFailed when incomplete."""
        ...


@dataclass
class CallableWeatherDataSource(WeatherDataSource):
    """Wrap a callable so the weather backend can be swapped in tests or config."""

    current_conditions: Callable[..., "CurrentConditions"]

    def fetch_current_conditions(self, latitude: float, longitude: float) -> "CurrentConditions":
        """Delegate to the configured current-conditions callable."""
        return self.current_conditions(latitude, longitude)
