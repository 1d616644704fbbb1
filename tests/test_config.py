import os
import unittest

from weather_lookup.config import Settings


class TestConfig(unittest.TestCase):
    def test_settings_defaults(self):
        previous = os.environ.pop("WEATHER_GEOCODE_PROVIDERS", None)
        try:
            s = Settings()
            self.assertEqual(s.geocoding_url, "https://geocoding-api.open-meteo.com/v1/search")
            self.assertEqual(s.nominatim_url, "https://nominatim.openstreetmap.org/search")
            self.assertEqual(s.forecast_url, "https://api.open-meteo.com/v1/forecast")
            self.assertEqual(s.geocode_provider_names, ["open_meteo", "nominatim"])
            self.assertEqual(s.request_timeout_seconds, 10.0)
        finally:
            if previous is not None:
                os.environ["WEATHER_GEOCODE_PROVIDERS"] = previous

    def test_settings_env_override_strips_trailing_slash(self):
        previous = os.environ.get("WEATHER_FORECAST_URL")
        try:
            os.environ["WEATHER_FORECAST_URL"] = "http://example.com/v1/forecast/"
            s = Settings()
            self.assertEqual(s.forecast_url, "http://example.com/v1/forecast")
        finally:
            if previous is None:
                os.environ.pop("WEATHER_FORECAST_URL", None)
            else:
                os.environ["WEATHER_FORECAST_URL"] = previous

    def test_provider_order_override(self):
        previous = os.environ.get("WEATHER_GEOCODE_PROVIDERS")
        try:
            os.environ["WEATHER_GEOCODE_PROVIDERS"] = " Nominatim , ,open_meteo"
            s = Settings()
            self.assertEqual(s.geocode_provider_names, ["nominatim", "open_meteo"])
        finally:
            if previous is None:
                os.environ.pop("WEATHER_GEOCODE_PROVIDERS", None)
            else:
                os.environ["WEATHER_GEOCODE_PROVIDERS"] = previous


if __name__ == "__main__":
    unittest.main()
