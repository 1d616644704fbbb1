"""Free-text place search against an OpenStreetMap Nominatim instance.

Used as the last geocoding fallback: it indexes far more place names than
the structured geocoder but returns coordinates as strings and only a
free-form ``display_name`` (no separate country field).
"""
from __future__ import annotations

from typing import List, Optional

import requests

from weather_lookup.config import settings
from weather_lookup.data_sources.base import GeoCandidate, GeocodeOptions
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="nominatim_client")

# Nominatim's usage policy requires an identifying User-Agent.
session = requests.Session()
session.headers.update({"User-Agent": settings.user_agent})

NOMINATIM_SEARCH_URL = settings.nominatim_url


def search_places(
    query: str,
    *,
    limit: int = 1,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> List[dict]:
    """Run a free-text search and return the raw result list (possibly empty)."""
    params = {
        "format": "json",
        "q": query,
        "limit": limit,
    }

    resp = session.get(
        base_url or NOMINATIM_SEARCH_URL,
        params=params,
        timeout=timeout or settings.request_timeout_seconds,
    )
    resp.raise_for_status()
    data = resp.json()
    if not isinstance(data, list):
        raise ValueError(f"Unexpected Nominatim payload type: {type(data).__name__}")
    return data


class NominatimGeocodeProvider:
    """Language-agnostic free-text geocoder."""

    name = "nominatim"
    language_aware = False

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.base_url = base_url
        self.timeout = timeout

    def search(self, query: str, options: GeocodeOptions) -> Optional[GeoCandidate]:
        """Return the first Nominatim match for ``query``; ``options`` are ignored."""
        results = search_places(query, limit=1, base_url=self.base_url, timeout=self.timeout)
        if not results:
            return None
        first = results[0]
        try:
            latitude = float(first["lat"])
            longitude = float(first["lon"])
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Nominatim result is missing coordinates: {first!r}") from exc
        return GeoCandidate(
            latitude=latitude,
            longitude=longitude,
            display_name=first.get("display_name") or query,
            country=None,
            source=self.name,
        )

    def __repr__(self) -> str:
        return f"NominatimGeocodeProvider(base_url={self.base_url or NOMINATIM_SEARCH_URL!r})"
