import unittest
from unittest.mock import patch

import requests

from weather_lookup.data_sources.base import GeoCandidate
from weather_lookup.domain import ScriptHint
from weather_lookup import geocoding
from weather_lookup.geocoding import (
    GeocodeChain,
    detect_script,
    other_language,
    preferred_language,
    resolve_coordinates,
)


class FakeProvider:
    """Returns canned answers per language and records every call."""

    def __init__(self, name, language_aware, answers=None, errors=None):
        self.name = name
        self.language_aware = language_aware
        self.answers = answers or {}
        self.errors = errors or {}
        self.calls = []

    def search(self, query, options):
        self.calls.append((query, options.language))
        if options.language in self.errors:
            raise self.errors[options.language]
        return self.answers.get(options.language)


def _candidate(name, country=None, source="fake"):
    return GeoCandidate(latitude=1.0, longitude=2.0, display_name=name, country=country, source=source)


class TestScriptDetection(unittest.TestCase):
    def test_latin_query_prefers_english(self):
        self.assertEqual(detect_script("Berlin"), ScriptHint.LATIN_OR_OTHER)
        self.assertEqual(preferred_language(detect_script("Berlin")), "en")

    def test_any_cyrillic_character_prefers_russian(self):
        self.assertEqual(detect_script("Москва"), ScriptHint.CYRILLIC)
        self.assertEqual(detect_script("Novo Москва"), ScriptHint.CYRILLIC)
        self.assertEqual(preferred_language(detect_script("Київ")), "ru")

    def test_non_latin_non_cyrillic_is_latin_or_other(self):
        self.assertEqual(detect_script("東京"), ScriptHint.LATIN_OR_OTHER)
        self.assertEqual(detect_script("Ελλάδα"), ScriptHint.LATIN_OR_OTHER)

    def test_cyrillic_block_boundaries(self):
        self.assertEqual(detect_script("Ѐ"), ScriptHint.CYRILLIC)
        self.assertEqual(detect_script("ӿ"), ScriptHint.CYRILLIC)
        self.assertEqual(detect_script("Ԁ"), ScriptHint.LATIN_OR_OTHER)

    def test_other_language(self):
        self.assertEqual(other_language("ru"), "en")
        self.assertEqual(other_language("en"), "ru")


class TestGeocodeChain(unittest.TestCase):
    def test_plan_orders_languages_then_free_text(self):
        primary = FakeProvider("open_meteo", True)
        secondary = FakeProvider("nominatim", False)
        chain = GeocodeChain([primary, secondary])

        plan = [a.describe() for a in chain.plan("Москва")]

        self.assertEqual(plan, ["open_meteo[ru]", "open_meteo[en]", "nominatim"])

    def test_first_attempt_uses_preferred_language_and_short_circuits(self):
        primary = FakeProvider("open_meteo", True, answers={"en": _candidate("Berlin", "Germany")})
        secondary = FakeProvider("nominatim", False)

        candidate = GeocodeChain([primary, secondary]).resolve("Berlin")

        self.assertEqual(candidate.display_name, "Berlin")
        self.assertEqual(primary.calls, [("Berlin", "en")])
        self.assertEqual(secondary.calls, [])

    def test_cyrillic_query_first_attempt_is_russian(self):
        primary = FakeProvider("open_meteo", True, answers={"ru": _candidate("Москва", "Россия")})

        GeocodeChain([primary]).resolve("Москва")

        self.assertEqual(primary.calls[0], ("Москва", "ru"))

    def test_falls_back_to_other_language(self):
        primary = FakeProvider("open_meteo", True, answers={"en": _candidate("Moscow", "Russia")})
        secondary = FakeProvider("nominatim", False)

        candidate = GeocodeChain([primary, secondary]).resolve("Москва")

        self.assertEqual(candidate.display_name, "Moscow")
        self.assertEqual(primary.calls, [("Москва", "ru"), ("Москва", "en")])
        self.assertEqual(secondary.calls, [])

    def test_falls_back_to_free_text_provider(self):
        primary = FakeProvider("open_meteo", True)
        free_text = GeoCandidate(latitude=46.84, longitude=29.64, display_name="Tiraspol, Moldova", source="nominatim")
        secondary = FakeProvider("nominatim", False, answers={None: free_text})

        candidate = GeocodeChain([primary, secondary]).resolve("Tiraspol")

        self.assertEqual(candidate.latitude, 46.84)
        self.assertEqual(candidate.longitude, 29.64)
        self.assertIsNone(candidate.country)
        self.assertEqual(secondary.calls, [("Tiraspol", None)])

    def test_all_empty_returns_none(self):
        primary = FakeProvider("open_meteo", True)
        secondary = FakeProvider("nominatim", False)

        self.assertIsNone(GeocodeChain([primary, secondary]).resolve("Xyzzy"))
        self.assertEqual(len(primary.calls), 2)
        self.assertEqual(len(secondary.calls), 1)

    def test_transport_errors_are_treated_as_empty(self):
        primary = FakeProvider(
            "open_meteo",
            True,
            errors={"en": requests.ConnectionError("down"), "ru": requests.Timeout("slow")},
        )
        fallback = _candidate("Berlin, Deutschland", source="nominatim")
        secondary = FakeProvider("nominatim", False, answers={None: fallback})

        candidate = GeocodeChain([primary, secondary]).resolve("Berlin")

        self.assertIs(candidate, fallback)

    def test_failure_in_last_provider_yields_none(self):
        primary = FakeProvider("open_meteo", True)
        secondary = FakeProvider("nominatim", False, errors={None: ValueError("bad json")})

        self.assertIsNone(GeocodeChain([primary, secondary]).resolve("Berlin"))

    def test_attempts_are_logged_at_debug(self):
        primary = FakeProvider("open_meteo", True, answers={"ru": _candidate("Berlin")})
        chain = GeocodeChain([primary])

        with self.assertLogs("weather_lookup.geocoding", level="DEBUG") as captured:
            chain.resolve("Berlin")

        attempts = [getattr(r, "attempt", None) for r in captured.records]
        self.assertIn("open_meteo[en]", attempts)
        self.assertIn("open_meteo[ru]", attempts)

    def test_empty_provider_list_rejected(self):
        with self.assertRaises(ValueError):
            GeocodeChain([])

    def test_resolve_coordinates_accepts_explicit_chain(self):
        primary = FakeProvider("open_meteo", True, answers={"en": _candidate("Paris", "France")})
        candidate = resolve_coordinates("Paris", chain=GeocodeChain([primary]))
        self.assertEqual(candidate.country, "France")


class TestDefaultChain(unittest.TestCase):
    def setUp(self):
        self._orig_chain = geocoding._default_chain
        geocoding._default_chain = None

    def tearDown(self):
        geocoding._default_chain = self._orig_chain

    def test_default_chain_is_built_once(self):
        primary = FakeProvider("open_meteo", True, answers={"en": _candidate("Paris", "France")})
        with patch.object(geocoding, "build_geocode_providers", return_value=[primary]) as build:
            first = resolve_coordinates("Paris")
            second = resolve_coordinates("Paris")

        self.assertEqual(build.call_count, 1)
        self.assertEqual(first, second)
        self.assertIs(geocoding.default_chain(), geocoding._default_chain)


if __name__ == "__main__":
    unittest.main()
