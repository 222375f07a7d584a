"""Request-oriented JSON logging with credential redaction.

The transport and client attach ``method``, ``url``, ``status_code``,
``timeout``, ``error`` and ``headers`` to their log records through
``extra``.  :class:`RequestLogFormatter` lifts those onto the top level of a
JSON line; header values that carry credentials never leave the process.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from typing import Any, Final


REDACTED: Final[str] = "[redacted]"
SENSITIVE_HEADERS: Final[frozenset[str]] = frozenset(
    {"authorization", "proxy-authorization", "cookie", "set-cookie", "x-api-key"}
)
REQUEST_FIELDS: Final[tuple[str, ...]] = ("method", "url", "status_code", "timeout", "error")


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy ``headers`` with credential-bearing values replaced."""

    return {
        name: REDACTED if name.lower() in SENSITIVE_HEADERS else value
        for name, value in headers.items()
    }


class RequestLogFormatter(logging.Formatter):
    """One JSON object per record, request context at the top level."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        entry: dict[str, Any] = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in REQUEST_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        headers = getattr(record, "headers", None)
        if isinstance(headers, Mapping):
            entry["headers"] = redact_headers(headers)

        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level: str | None = None) -> logging.Handler:
    """Send ``oneshot_http`` records to stderr as JSON lines.

    ``level`` falls back to ``LOG_LEVEL``, then ``INFO``.  Calling it again
    replaces the previous handler.
    """

    handler = logging.StreamHandler()
    handler.setFormatter(RequestLogFormatter())

    package_logger = logging.getLogger("oneshot_http")
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel((level or os.environ.get("LOG_LEVEL", "INFO")).upper())
    return handler


__all__ = [
    "REDACTED",
    "REQUEST_FIELDS",
    "RequestLogFormatter",
    "SENSITIVE_HEADERS",
    "configure_logging",
    "redact_headers",
]
