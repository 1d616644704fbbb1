"""In-memory widget store with TTL; widgets live only as long as the process."""

import threading
import time
import uuid
from typing import Any, Optional

from weather_lookup.session_store.base import SessionStore
from weather_lookup.widget import WeatherWidget

from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="session_store/in_memory_session_store")


class InMemorySessionStore(SessionStore):
    """Thread-safe, TTL-aware in-memory widget registry."""

    def __init__(self, ttl_seconds: int = 3600, max_age_seconds: int | None = None) -> None:
        """Initialize the store with a TTL (seconds) and optional absolute max age."""
        logger.debug("Initializing InMemorySessionStore")
        self.ttl = ttl_seconds
        self.max_age = max_age_seconds
        self._sessions: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def _expired(self, exp: float, created_at: float) -> bool:
        """Return True if the session is beyond TTL or absolute max age."""
        now = time.monotonic()
        if exp < now:
            return True
        if self.max_age is None:
            return False
        return now - created_at > self.max_age

    def _next_expiry(self, created_at: float) -> float:
        """Compute the next expiry time, capped by absolute max age."""
        now = time.monotonic()
        next_exp = now + self.ttl
        if self.max_age is None:
            return next_exp
        return min(next_exp, created_at + self.max_age)

    def _generate_id(self) -> str:
        """Generate a new session id."""
        return str(uuid.uuid4())

    def create_session(self, widget: WeatherWidget) -> str:
        """Register ``widget``, stamp it with a fresh id and return that id."""
        with self._lock:
            sid = self._generate_id()
            widget.widget_id = sid
            created_at = time.monotonic()
            self._sessions[sid] = {
                "widget": widget,
                "created_at": created_at,
                "exp": self._next_expiry(created_at),
            }
            return sid

    def get_session(self, session_id: str) -> Optional[WeatherWidget]:
        """Return the widget, refreshing TTL, or None if missing/expired."""
        with self._lock:
            data = self._sessions.get(session_id)
            if not data:
                return None
            if self._expired(data["exp"], data["created_at"]):
                self._sessions.pop(session_id, None)
                return None
            # refresh TTL on access
            data["exp"] = self._next_expiry(data["created_at"])
            return data["widget"]

    def delete_session(self, session_id: str) -> None:
        """Remove a widget if it exists."""
        with self._lock:
            self._sessions.pop(session_id, None)

    def clear(self) -> None:
        """Clear all widgets."""
        with self._lock:
            self._sessions.clear()
