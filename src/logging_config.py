"""Logging for the scraper service.

Every record, from the API, the scraper pipeline or uvicorn itself, is
written to stdout as one JSON object per line. Fields passed through
``extra`` (``url``, ``url_count``, ``errors`` and so on) become
top-level keys next to ``timestamp``, ``level``, ``logger`` and ``message``.
"""

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

# Chatty per-request transport loggers; one line per fetch is logged by the fetcher itself.
_QUIET_LOGGERS = ("httpx", "httpcore")
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")


def _stdout_json_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    )
    return handler


def setup_logging(log_level: str = "INFO") -> None:
    """Route scrape, API and uvicorn logs to stdout as JSON lines.

    Unknown level names fall back to ``INFO``. httpx and httpcore are held
    at ``WARNING`` or above even in debug mode.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    # Access lines and scrape events share one stream so they interleave in order
    handler = _stdout_json_handler()

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _UVICORN_LOGGERS:
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.addHandler(handler)
        uv_logger.propagate = False

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
