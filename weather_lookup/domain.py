"""Domain vocabulary and immutable result schemas for weather lookups.

This module defines the contract between the resolution pipeline and any
presentation layer: enums for script hints, icon classes and lookup states,
and frozen Pydantic models for the artifacts handed to renderers. No network
or interpretation logic lives here.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from weather_lookup.data_sources.base import GeoCandidate


class _FrozenModel(BaseModel):
    """Base model that forbids extras and mutation."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class ScriptHint(str, Enum):
    """Coarse writing-system classification of a query."""
    CYRILLIC = "cyrillic"
    LATIN_OR_OTHER = "latin_or_other"


class IconClass(str, Enum):
    """CSS icon classes for weather-code groups."""
    CLEAR = "wi wi-day-sunny"
    PARTLY_CLOUDY = "wi wi-day-cloudy"
    FOG = "wi wi-fog"
    RAIN = "wi wi-rain"
    SNOW = "wi wi-snow"
    THUNDERSTORM = "wi wi-thunderstorm"
    DEFAULT_CLOUD = "wi wi-cloud"


class LookupState(str, Enum):
    """Lifecycle of a single query as seen by the presentation layer."""
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class WeatherReading(_FrozenModel):
    """Rendering-ready weather summary for one resolved place."""
    city: str
    temperature_label: str
    wind_label: str
    humidity_label: str
    icon_class: IconClass


class ResolutionResult(_FrozenModel):
    """Outcome of one resolver call: a reading on success, a message on error."""
    query: str
    state: LookupState
    reading: Optional[WeatherReading] = None
    error: Optional[str] = None
    candidate: Optional[GeoCandidate] = None

    @property
    def ok(self) -> bool:
        """True when a reading was produced."""
        return self.state is LookupState.SUCCESS


class WidgetSnapshot(_FrozenModel):
    """Point-in-time copy of a widget's display state."""
    widget_id: Optional[str] = None
    state: LookupState = LookupState.IDLE
    query: Optional[str] = None
    reading: Optional[WeatherReading] = None
    error: Optional[str] = None
    is_loading: bool = False
