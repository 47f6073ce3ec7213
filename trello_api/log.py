"""Debug logging helpers for the client."""

from __future__ import annotations

import logging
import sys

import httpx

LOGGER_NAME = "trello_api"

_REDACTED = "REDACTED"
_SECRET_PARAMS = ("key", "token")


class _PlainFormatter(logging.Formatter):
    """Plain-text ``ts LEVEL [name] msg`` formatter."""

    def format(self, record: logging.LogRecord) -> str:
        ts = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        name = record.name.split(".")[-1][:20]
        msg = record.getMessage()
        return f"{ts} {record.levelname:<8s} [{name:>20s}] {msg}"


def enable_debug_logging() -> logging.Logger:
    """Send ``trello_api`` DEBUG records to stderr.

    Safe to call repeatedly; only one handler is ever attached.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    if not any(getattr(h, "_trello_debug", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_PlainFormatter())
        handler._trello_debug = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


def redact_url(url: httpx.URL | str) -> str:
    """Return *url* as a string with credential query params masked."""
    url = httpx.URL(str(url))
    for name in _SECRET_PARAMS:
        if name in url.params:
            url = url.copy_set_param(name, _REDACTED)
    return str(url)
