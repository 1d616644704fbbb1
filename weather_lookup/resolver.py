"""Orchestrate geocoding, weather retrieval and reading assembly for one query."""
from __future__ import annotations

from typing import Optional

import requests

from weather_lookup.assembler import build_reading
from weather_lookup.data_sources import GeoCandidate, WeatherDataSource, build_geocode_providers, build_weather_source
from weather_lookup.domain import LookupState, ResolutionResult
from weather_lookup.errors import (
    INVALID_CITY_MESSAGE,
    WEATHER_FETCH_MESSAGE,
    LocationNotFound,
    WeatherFetchFailed,
)
from weather_lookup.geocoding import GeocodeChain
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="resolver")


class WeatherResolver:
    """Sequential pipeline: place name -> candidate -> conditions -> reading."""

    def __init__(self, geocoder: GeocodeChain, weather_source: WeatherDataSource) -> None:
        self.geocoder = geocoder
        self.weather_source = weather_source

    @classmethod
    def from_settings(cls, settings=None) -> "WeatherResolver":
        """Build a resolver wired to the configured providers."""
        return cls(
            geocoder=GeocodeChain(build_geocode_providers(settings)),
            weather_source=build_weather_source(settings),
        )

    def locate(self, query: str) -> GeoCandidate:
        """Return the first candidate for ``query`` or raise LocationNotFound."""
        candidate = self.geocoder.resolve(query)
        if candidate is None:
            raise LocationNotFound(query)
        return candidate

    def resolve(self, query: str) -> ResolutionResult:
        """Run the pipeline and classify the outcome; never raises for provider failures.

        A blank query is a caller error and raises ValueError before any call is made.
        """
        if not query or not query.strip():
            raise ValueError("Query must not be blank")

        try:
            candidate = self.locate(query)
        except LocationNotFound:
            logger.info("Location not found", extra={"query": query})
            return _error(query, INVALID_CITY_MESSAGE)
        logger.debug(
            "Resolved coordinates",
            extra={"latitude": candidate.latitude, "longitude": candidate.longitude, "source": candidate.source},
        )

        try:
            conditions = self.weather_source.fetch_current_conditions(candidate.latitude, candidate.longitude)
        except WeatherFetchFailed as exc:
            logger.warning("Weather response incomplete", extra={"query": query, "error": str(exc)})
            return _error(query, WEATHER_FETCH_MESSAGE, candidate)
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Weather request failed", extra={"query": query, "error": str(exc)})
            return _error(query, WEATHER_FETCH_MESSAGE, candidate)

        reading = build_reading(conditions, candidate)
        logger.info("Resolved weather", extra={"query": query, "city": reading.city})
        return ResolutionResult(
            query=query,
            state=LookupState.SUCCESS,
            reading=reading,
            candidate=candidate,
        )


def _error(query: str, message: str, candidate: Optional[GeoCandidate] = None) -> ResolutionResult:
    return ResolutionResult(query=query, state=LookupState.ERROR, error=message, candidate=candidate)
