"""Widget registry facade over the in-memory session store."""
from typing import Optional

from weather_lookup.config import settings
from weather_lookup.resolver import WeatherResolver
from weather_lookup.session_store import InMemorySessionStore, SessionStore
from weather_lookup.widget import WeatherWidget
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="session_manager")


_store: SessionStore = InMemorySessionStore(ttl_seconds=settings.widget_ttl_seconds)


def use_in_memory_store_for_tests(ttl_seconds: int = 3600) -> None:
    """Override store for tests to ensure isolation and determinism."""
    global _store
    _store = InMemorySessionStore(ttl_seconds=ttl_seconds)


def create_widget(resolver: WeatherResolver) -> WeatherWidget:
    """Create, register and return a new widget bound to ``resolver``."""
    widget = WeatherWidget(resolver)
    widget_id = _store.create_session(widget)
    logger.debug("Created widget", extra={"widget_id": widget_id})
    return widget


def get_widget(widget_id: str) -> Optional[WeatherWidget]:
    """Fetch a widget by ID, refreshing its TTL if present."""
    return _store.get_session(widget_id)


def delete_widget(widget_id: str) -> None:
    """Delete a widget by ID."""
    _store.delete_session(widget_id)


def clear_widgets() -> None:
    """Clear all widgets from the backing store (dev/testing)."""
    _store.clear()
