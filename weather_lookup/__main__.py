"""Command-line lookup: ``python -m weather_lookup "Berlin"``."""

import argparse
import sys
from typing import Optional, Sequence

from weather_lookup.config import settings
from weather_lookup.resolver import WeatherResolver
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weather_lookup",
        description="Look up current weather for a place name.",
    )
    parser.add_argument("query", nargs="+", help="Place name, e.g. Berlin or Москва")
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Root log level (default: %(default)s)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None, resolver: Optional[WeatherResolver] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level.upper(), job_name="weather_lookup_cli")

    query = " ".join(args.query).strip()
    if not query:
        print("Nothing to look up: query is blank.", file=sys.stderr)
        return 2

    resolver = resolver or WeatherResolver.from_settings(settings)
    result = resolver.resolve(query)
    if not result.ok:
        print(result.error, file=sys.stderr)
        return 1

    reading = result.reading
    print(reading.city)
    print(f"Temperature: {reading.temperature_label}")
    print(f"Wind: {reading.wind_label}")
    print(f"Humidity: {reading.humidity_label}")
    print(f"Icon: {reading.icon_class.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
