"""Resolve a place name to one coordinate pair by walking an ordered provider chain."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import requests

from weather_lookup.data_sources import GeoCandidate, GeocodeOptions, GeocodeProvider, build_geocode_providers
from weather_lookup.domain import ScriptHint
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="geocoding")

CYRILLIC_FIRST = "\u0400"
CYRILLIC_LAST = "\u04ff"

LANGUAGE_BY_SCRIPT = {
    ScriptHint.CYRILLIC: "ru",
    ScriptHint.LATIN_OR_OTHER: "en",
}


def detect_script(query: str) -> ScriptHint:
    """Classify ``query`` as Cyrillic if any character falls in the Cyrillic block."""
    if any(CYRILLIC_FIRST <= ch <= CYRILLIC_LAST for ch in query):
        return ScriptHint.CYRILLIC
    return ScriptHint.LATIN_OR_OTHER


def preferred_language(hint: ScriptHint) -> str:
    """Map a script hint to the language tag tried first."""
    return LANGUAGE_BY_SCRIPT[hint]


def other_language(language: str) -> str:
    """Return the fallback language tag for a bilingual retry."""
    return "en" if language == "ru" else "ru"


@dataclass(frozen=True)
class GeocodeAttempt:
    """One planned call: a provider and the options to call it with."""
    provider: GeocodeProvider
    options: GeocodeOptions

    def describe(self) -> str:
        """Short label for log events."""
        if self.options.language:
            return f"{self.provider.name}[{self.options.language}]"
        return self.provider.name


class GeocodeChain:
    """Ordered fallback over geocoding providers.

    Language-aware providers are tried once per language (preferred first,
    then the other one); language-agnostic providers are tried once. The
    first attempt that yields a candidate wins. Transport errors and
    malformed payloads are logged and treated as an empty result so the
    chain always finishes with a candidate or None.
    """

    def __init__(self, providers: Sequence[GeocodeProvider]) -> None:
        if not providers:
            raise ValueError("GeocodeChain needs at least one provider")
        self.providers = list(providers)

    def plan(self, query: str) -> List[GeocodeAttempt]:
        """Return the attempts that ``resolve`` would make for ``query``, in order."""
        preferred = preferred_language(detect_script(query))
        attempts: List[GeocodeAttempt] = []
        for provider in self.providers:
            if getattr(provider, "language_aware", False):
                for language in (preferred, other_language(preferred)):
                    attempts.append(GeocodeAttempt(provider, GeocodeOptions(language=language)))
            else:
                attempts.append(GeocodeAttempt(provider, GeocodeOptions()))
        return attempts

    def resolve(self, query: str) -> Optional[GeoCandidate]:
        """Return the first candidate any attempt produces, or None when all come up empty."""
        attempts = self.plan(query)
        logger.debug(
            "Planned geocode attempts",
            extra={"query": query, "attempts": [a.describe() for a in attempts]},
        )
        for attempt in attempts:
            try:
                candidate = attempt.provider.search(query, attempt.options)
            except (requests.RequestException, ValueError) as exc:
                logger.warning(
                    "Geocode attempt failed; treating as no results",
                    extra={"attempt": attempt.describe(), "error": str(exc)},
                )
                continue

            if candidate is None:
                logger.debug("Geocode attempt returned no results", extra={"attempt": attempt.describe()})
                continue

            logger.debug(
                "Geocode attempt matched",
                extra={
                    "attempt": attempt.describe(),
                    "latitude": candidate.latitude,
                    "longitude": candidate.longitude,
                    "display_name": candidate.display_name,
                },
            )
            return candidate

        logger.info("No geocode provider matched", extra={"query": query})
        return None


_default_chain: Optional[GeocodeChain] = None


def default_chain() -> GeocodeChain:
    """Return the chain built from the configured providers, building it once."""
    global _default_chain
    if _default_chain is None:
        _default_chain = GeocodeChain(build_geocode_providers())
    return _default_chain


def resolve_coordinates(query: str, chain: GeocodeChain | None = None) -> Optional[GeoCandidate]:
    """Resolve ``query`` with ``chain`` or with the configured default providers."""
    if chain is None:
        chain = default_chain()
    return chain.resolve(query)
