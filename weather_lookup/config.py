"""Application configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the weather lookup service."""
    model_config = SettingsConfigDict(env_prefix="WEATHER_", extra="ignore")

    geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    nominatim_url: str = "https://nominatim.openstreetmap.org/search"
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    geocode_providers: str = "open_meteo,nominatim"  # tried in this order
    request_timeout_seconds: float = 10.0
    user_agent: str = "weather-lookup/0.1"
    widget_ttl_seconds: int = 3600
    log_level: str = "INFO"

    @field_validator("geocoding_url", "nominatim_url", "forecast_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @property
    def geocode_provider_names(self) -> list[str]:
        """Return the configured provider names, lowercased and without blanks."""
        return [name.strip().lower() for name in self.geocode_providers.split(",") if name.strip()]


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
