"""
Logging setup shared by the GasByGas API and its core components.

Every line is written as:
    2026-01-06T14:05:52Z [source] LEVEL message

LOG_LEVEL selects the threshold (TRACE, DEBUG, INFO, WARNING, ERROR). TRACE
sits below DEBUG and carries the raw PocketBase request parameters the
document store sends (paths, filters, pages).

Usage:
    from gasbygas.logging_config import configure_logging

    configure_logging(source="api")
"""

from __future__ import annotations

import logging
import os
import re
import sys
from datetime import UTC, datetime

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LEVELS: dict[str, int] = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

# Loggers that get their own copy of our handler instead of propagating
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# The PocketBase SDK logs every request through httpx
QUIET_LOGGERS = ("httpx", "httpcore")


class ISO8601Formatter(logging.Formatter):
    """Render records as `<UTC timestamp> [source] LEVEL message`."""

    def __init__(self, source: str = "gasbygas"):
        self.source = source
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{timestamp} [{self.source}] {record.levelname} {message}"


class HealthCheckFilter(logging.Filter):
    """Drop uvicorn access lines for health checks unless running at DEBUG or below."""

    HEALTH_REQUEST = re.compile(r'"GET /health(?:\?\S*)? HTTP/')

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno <= logging.DEBUG:
            return True
        return not self.HEALTH_REQUEST.search(record.getMessage())


def resolve_level(debug: bool | None = None) -> int:
    """Threshold from LOG_LEVEL; the debug flag lowers INFO to DEBUG."""
    level = LEVELS.get(os.getenv("LOG_LEVEL", "").strip().upper(), logging.INFO)
    if debug and level > logging.DEBUG:
        return logging.DEBUG
    return level


def _route_uvicorn(handler: logging.Handler, level: int) -> None:
    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.addHandler(handler)
        uvicorn_logger.setLevel(level)
        uvicorn_logger.propagate = False


def configure_logging(
    source: str = "gasbygas",
    level: int | None = None,
    debug: bool | None = None,
) -> logging.Logger:
    """Install the stdout handler on the root logger and return it.

    Args:
        source: Tag printed in brackets on every line (e.g. "api")
        level: Explicit threshold; defaults to resolve_level(debug)
        debug: Lower the default threshold to DEBUG
    """
    if level is None:
        level = resolve_level(debug)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ISO8601Formatter(source=source))
    handler.addFilter(HealthCheckFilter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    _route_uvicorn(handler, level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
