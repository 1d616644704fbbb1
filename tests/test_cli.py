import contextlib
import io
import unittest
from unittest.mock import patch

from weather_lookup import __main__ as cli
from weather_lookup.domain import IconClass, LookupState, ResolutionResult, WeatherReading


class StubResolver:
    def __init__(self, result):
        self.result = result
        self.queries = []

    def resolve(self, query):
        self.queries.append(query)
        return self.result


def _run(argv, resolver):
    out, err = io.StringIO(), io.StringIO()
    with patch.object(cli, "setup_logging"), contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        code = cli.main(argv, resolver=resolver)
    return code, out.getvalue(), err.getvalue()


class TestCli(unittest.TestCase):
    def test_prints_reading(self):
        reading = WeatherReading(
            city="Berlin, Germany",
            temperature_label="15°C",
            wind_label="10 km/h",
            humidity_label="--",
            icon_class=IconClass.PARTLY_CLOUDY,
        )
        resolver = StubResolver(ResolutionResult(query="Berlin", state=LookupState.SUCCESS, reading=reading))

        code, out, _ = _run(["Berlin"], resolver)

        self.assertEqual(code, 0)
        self.assertIn("Berlin, Germany", out)
        self.assertIn("Temperature: 15°C", out)
        self.assertIn("Humidity: --", out)
        self.assertIn("Icon: wi wi-day-cloudy", out)

    def test_multi_word_query_is_joined(self):
        resolver = StubResolver(ResolutionResult(query="x", state=LookupState.ERROR, error="Invalid city name"))
        _run(["New", "York"], resolver)
        self.assertEqual(resolver.queries, ["New York"])

    def test_error_goes_to_stderr_with_exit_one(self):
        resolver = StubResolver(ResolutionResult(query="Xyzzy", state=LookupState.ERROR, error="Invalid city name"))

        code, out, err = _run(["Xyzzy"], resolver)

        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("Invalid city name", err)

    def test_blank_query_exits_two_without_lookup(self):
        resolver = StubResolver(None)

        code, _, _ = _run(["   "], resolver)

        self.assertEqual(code, 2)
        self.assertEqual(resolver.queries, [])


if __name__ == "__main__":
    unittest.main()
