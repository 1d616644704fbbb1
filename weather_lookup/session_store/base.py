"""Shared protocol for widget session storage backends."""

from typing import Optional, Protocol

from weather_lookup.widget import WeatherWidget


class SessionStore(Protocol):
    """Protocol for widget session storage backends."""
    def create_session(self, widget: WeatherWidget) -> str:
        """Register a widget and return its id."""

    def get_session(self, session_id: str) -> Optional[WeatherWidget]:
        """Fetch a widget by id, returning None if missing or expired."""

    def delete_session(self, session_id: str) -> None:
        """Delete a widget without raising if it is absent."""

    def clear(self) -> None:
        """Clear all stored widgets."""
