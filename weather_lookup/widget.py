"""Presentation-side state holder for a single weather search box.

The resolver returns immutable results; the widget owns the mutable display
state (latest reading, latest error, loading flag) and notifies subscribers
when a query completes. Each submission carries a request id, and a result
that arrives after a newer submission is discarded.
"""
from __future__ import annotations

import itertools
import threading
from typing import Callable, List, Optional

from weather_lookup.domain import LookupState, ResolutionResult, WeatherReading, WidgetSnapshot
from weather_lookup.errors import WEATHER_FETCH_MESSAGE
from weather_lookup.resolver import WeatherResolver
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="widget")

Listener = Callable[[ResolutionResult], None]


class WeatherWidget:
    """Mutable display state driven by ``submit_query``."""

    def __init__(self, resolver: WeatherResolver, widget_id: Optional[str] = None) -> None:
        self.resolver = resolver
        self.widget_id = widget_id
        self._lock = threading.Lock()
        self._request_ids = itertools.count(1)
        self._latest_request = 0
        self._listeners: List[Listener] = []
        self._state = LookupState.IDLE
        self._query: Optional[str] = None
        self._reading: Optional[WeatherReading] = None
        self._error: Optional[str] = None

    @property
    def state(self) -> LookupState:
        return self._state

    @property
    def current_reading(self) -> Optional[WeatherReading]:
        return self._reading

    @property
    def current_error(self) -> Optional[str]:
        return self._error

    @property
    def is_loading(self) -> bool:
        return self._state is LookupState.LOADING

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a completion listener; returns a callable that unregisters it."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def snapshot(self) -> WidgetSnapshot:
        """Return an immutable copy of the current display state."""
        with self._lock:
            return WidgetSnapshot(
                widget_id=self.widget_id,
                state=self._state,
                query=self._query,
                reading=self._reading,
                error=self._error,
                is_loading=self._state is LookupState.LOADING,
            )

    def submit_query(self, text: Optional[str]) -> Optional[ResolutionResult]:
        """Resolve ``text`` and update the display state.

        Blank input is ignored: no state change and no network call; returns
        None. Otherwise returns the ResolutionResult, even when a newer
        submission superseded it and it was not applied. Every path leaves
        the widget out of the loading state.
        """
        if not text or not text.strip():
            logger.debug("Ignoring blank query")
            return None

        query = text.strip()
        with self._lock:
            request_id = next(self._request_ids)
            self._latest_request = request_id
            self._state = LookupState.LOADING
            self._query = query
            self._reading = None
            self._error = None

        logger.debug("Submitting query", extra={"query": query, "request_id": request_id})
        try:
            result = self.resolver.resolve(query)
        except Exception:
            logger.exception("Resolver raised unexpectedly", extra={"query": query})
            result = ResolutionResult(query=query, state=LookupState.ERROR, error=WEATHER_FETCH_MESSAGE)

        with self._lock:
            if request_id != self._latest_request:
                logger.debug(
                    "Discarding stale result",
                    extra={"request_id": request_id, "latest_request": self._latest_request},
                )
                return result
            self._state = result.state
            self._reading = result.reading
            self._error = result.error
            listeners = list(self._listeners)

        for listener in listeners:
            listener(result)
        return result
