"""Exception types and user-facing messages for the lookup pipeline."""

INVALID_CITY_MESSAGE = "Invalid city name"
WEATHER_FETCH_MESSAGE = "Error fetching weather"


class WeatherLookupError(Exception):
    """Base class for pipeline failures."""


class LocationNotFound(WeatherLookupError):
    """No geocoding provider produced a candidate for the query."""


class WeatherFetchFailed(WeatherLookupError):
    """The forecast API answered but without the expected current-conditions fields."""
