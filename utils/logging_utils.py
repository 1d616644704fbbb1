"""
Central logging configuration utilities.

Usage
-----
In your entrypoint (server, CLI):

    from utils.logging_utils import setup_logging

    def main() -> None:
        setup_logging(level="INFO", job_name="weather_lookup")
        ...

In a module:

    from utils.logging_utils import get_tagged_logger

    logger = get_tagged_logger(__name__, tag="geocoding")

    def resolve(query: str) -> None:
        logger.debug("Geocode attempt matched", extra={"attempt": "open_meteo[en]"})

This ensures:
- consistent formatting across the app
- useful early logs even before setup_logging() runs
- structured fields: job_name, tag, logger name, message, plus any
  ``extra`` fields rendered as ``key=value`` pairs
"""

from __future__ import annotations

import logging
import logging.config
from typing import Any, Dict, Mapping, Optional


# ---------------------------------------------------------------------------
# Minimal bootstrap config (early logs)
# ---------------------------------------------------------------------------

# Runs on import so that anything logged before setup_logging() still gets
# timestamps and levels.
BOOTSTRAP_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
BOOTSTRAP_DATEFMT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(
    level=logging.INFO,
    format=BOOTSTRAP_FORMAT,
    datefmt=BOOTSTRAP_DATEFMT,
)


# ---------------------------------------------------------------------------
# Defaults for full configuration
# ---------------------------------------------------------------------------

DEFAULT_LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(job_name)s | %(tag)s | %(name)s | %(message)s"
)
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "tag", "job_name", "taskName"}

_CONFIGURED: bool = False


# ---------------------------------------------------------------------------
# Filters and formatter
# ---------------------------------------------------------------------------

class MaxLevelFilter(logging.Filter):
    """
    Allow only records up to (and including) `max_level`.

    Routes DEBUG/INFO to stdout while WARNING+ go to stderr.
    """

    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        return record.levelno <= self.max_level


class EnsureTagFilter(logging.Filter):
    """
    Ensure every LogRecord has a `tag` attribute.

    Records from a tagged LoggerAdapter keep their tag; anything else gets
    the last segment of its logger name, e.g. "weather_lookup.resolver" ->
    "resolver".
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "tag"):
            logger_name = getattr(record, "name", "")
            record.tag = logger_name.split(".")[-1] if logger_name else "-"
        return True


class JobNameFilter(logging.Filter):
    """Inject a fixed `job_name` attribute (server, CLI, ...) into every LogRecord."""

    def __init__(self, job_name: Optional[str] = None) -> None:
        super().__init__()
        self._job_name = job_name or "-"

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "job_name"):
            record.job_name = self._job_name
        return True


def record_extras(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the fields that were attached to ``record`` through ``extra``."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_RECORD_ATTRS and not key.startswith("_")
    }


class ExtrasFormatter(logging.Formatter):
    """Formatter that appends ``extra`` fields as sorted ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = record_extras(record)
        if not extras:
            return base
        pairs = " ".join(f"{key}={extras[key]!r}" for key in sorted(extras))
        return f"{base} | {pairs}"


# ---------------------------------------------------------------------------
# Config builder and setup function
# ---------------------------------------------------------------------------


def build_logging_config(
    *,
    level: str | int = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    job_name: Optional[str] = None,
) -> Mapping[str, Any]:
    """
    Build a dictConfig-style logging configuration.

    Parameters
    ----------
    level:
        Root logger level (e.g., "DEBUG", "INFO", logging.INFO).
    log_format:
        Formatter pattern for log messages.
    date_format:
        Formatter pattern for timestamps.
    job_name:
        Optional logical name for this process (e.g. "weather_lookup").

    Returns
    -------
    dict suitable for logging.config.dictConfig().
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "ensure_tag": {"()": EnsureTagFilter},
            "job_name": {"()": JobNameFilter, "job_name": job_name},
            "stdout_max_info": {
                "()": MaxLevelFilter,
                "max_level": logging.INFO,
            },
        },
        "formatters": {
            "standard": {
                "()": ExtrasFormatter,
                "fmt": log_format,
                "datefmt": date_format,
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "filters": ["ensure_tag", "job_name", "stdout_max_info"],
                "level": "DEBUG",  # lower bound
                "stream": "ext://sys.stdout",
            },
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "filters": ["ensure_tag", "job_name"],
                "level": "WARNING",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": level,
            "handlers": ["stdout", "stderr"],
        },
    }


def setup_logging(
    *,
    level: str | int = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    job_name: Optional[str] = None,
    override_existing: bool = False,
) -> None:
    """
    Configure application-wide logging once per process.

    Parameters
    ----------
    level:
        Root logger level (e.g., "DEBUG" to see every geocode attempt).
    log_format:
        Formatter pattern for log messages.
    date_format:
        Timestamp format for `asctime`.
    job_name:
        Logical name for this process. Appears in `%(job_name)s`.
    override_existing:
        If False (default), calling setup_logging() again is a no-op after
        the first call. If True, the configuration is reapplied.
    """
    global _CONFIGURED

    if _CONFIGURED and not override_existing:
        return

    config_dict = build_logging_config(
        level=level,
        log_format=log_format,
        date_format=date_format,
        job_name=job_name,
    )
    logging.config.dictConfig(config_dict)
    _CONFIGURED = True


# ---------------------------------------------------------------------------
# Logger helper
# ---------------------------------------------------------------------------


class _TaggedAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges its tag with per-call ``extra`` instead of replacing them."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**(self.extra or {}), **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_tagged_logger(
    name: str,
    *,
    tag: Optional[str] = None,
) -> logging.LoggerAdapter:
    """
    Return a LoggerAdapter that always carries a `tag` field.

    Parameters
    ----------
    name:
        Base logger name (usually __name__).
    tag:
        Semantic tag for this component. Defaults to the last segment of the
        logger name.
    """
    base_logger = logging.getLogger(name)
    if tag is None:
        tag = name.split(".")[-1]
    return _TaggedAdapter(base_logger, {"tag": tag})
