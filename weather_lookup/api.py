"""HTTP API for the weather lookup widget."""

from fastapi import APIRouter, HTTPException, Query, Response, status
from pydantic import BaseModel

from weather_lookup.domain import WeatherReading, WidgetSnapshot
from weather_lookup.errors import INVALID_CITY_MESSAGE
from .config import settings
from .resolver import WeatherResolver
from .session_manager import create_widget, delete_widget, get_widget
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="weather_lookup/api")

router = APIRouter()
RESOLVER = WeatherResolver.from_settings(settings)


class QueryRequest(BaseModel):
    """Incoming search-box submission."""
    text: str


def _require_widget(widget_id: str):
    """Return the widget or raise a 404."""
    widget = get_widget(widget_id)
    if widget is None:
        raise HTTPException(status_code=404, detail="Unknown widget ID")
    return widget


@router.get(
    "/weather",
    response_model=WeatherReading,
    responses={204: {"description": "Blank query; nothing was looked up"}},
)
def lookup_weather(q: str = Query(default="", description="Place name")):
    """Resolve a place name and return its current weather reading."""
    if not q.strip():
        logger.debug("Blank query; no lookup issued")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    result = RESOLVER.resolve(q.strip())
    if result.ok:
        return result.reading
    if result.error == INVALID_CITY_MESSAGE:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.error)
    raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result.error)


@router.post("/widget", response_model=WidgetSnapshot)
def start_widget():
    """Create a widget with an empty display state."""
    widget = create_widget(RESOLVER)
    logger.info("Started widget", extra={"widget_id": widget.widget_id})
    return widget.snapshot()


@router.get("/widget/{widget_id}", response_model=WidgetSnapshot)
def widget_state(widget_id: str):
    """Return the current display state of a widget."""
    return _require_widget(widget_id).snapshot()


@router.post("/widget/{widget_id}/query", response_model=WidgetSnapshot)
def submit_widget_query(widget_id: str, req: QueryRequest):
    """Submit search-box text; blank text leaves the state untouched."""
    widget = _require_widget(widget_id)
    widget.submit_query(req.text)
    return widget.snapshot()


@router.delete("/widget/{widget_id}", status_code=status.HTTP_204_NO_CONTENT)
def close_widget(widget_id: str):
    """Drop a widget and its display state."""
    _require_widget(widget_id)
    delete_widget(widget_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
