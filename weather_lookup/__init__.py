"""Place-name to current-weather lookup with multi-provider geocoding fallback."""

__version__ = "0.1.0"
