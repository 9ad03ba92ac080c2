"""JSON logging for the Bitstamp CLI.

Every record becomes one JSON object per line. Request context travels in the
logging ``extra`` dict; :func:`structured_log_extra` builds it so call sites
agree on key names (``event``, ``symbol``, ``endpoint``, ``url``,
``status_code``).
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import IO, Any, Dict

DEFAULT_ENV = os.getenv("BITSTAMP_CLI_ENV", os.getenv("ENV", "local"))

# Attributes every LogRecord carries; anything else on a record came from ``extra``.
_STANDARD_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_OPTIONAL_CONTEXT_KEYS = ("symbol", "endpoint", "url", "status_code")


class JsonFormatter(logging.Formatter):
    """Formats records as JSON with a fixed header plus any ``extra`` fields."""

    def __init__(self, env: str | None = None) -> None:
        super().__init__()
        self.env = env or DEFAULT_ENV

    def _header(self, record: logging.LogRecord) -> Dict[str, Any]:
        return {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "event": getattr(record, "event", None),
            "env": getattr(record, "env", self.env),
            "request_id": getattr(record, "request_id", None),
        }

    @staticmethod
    def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
        return {
            key: value
            for key, value in vars(record).items()
            if key not in _STANDARD_RECORD_ATTRS
        }

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload = self._header(record)
        for key, value in self._extra_fields(record).items():
            payload.setdefault(key, value)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        # Extras may hold exceptions or paths; fall back to their text form.
        return json.dumps(payload, default=str)


def configure_logging(
    level: int = logging.INFO,
    env: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Route the root logger to a single JSON handler.

    ``stream`` defaults to stderr; stdout is reserved for command output.
    """

    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter(env=env))

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)


def structured_log_extra(
    *,
    event: str | None = None,
    env: str | None = None,
    request_id: str | None = None,
    **context: Any,
) -> Dict[str, Any]:
    """Build the ``extra`` dict for a log call.

    ``event``, ``env`` and ``request_id`` are always present. The request
    identifiers ``symbol``, ``endpoint``, ``url`` and ``status_code`` are
    dropped when None; any other keyword is passed through unchanged.
    """

    extra: Dict[str, Any] = {
        "event": event,
        "env": env or DEFAULT_ENV,
        "request_id": request_id,
    }
    for key, value in context.items():
        if key in _OPTIONAL_CONTEXT_KEYS and value is None:
            continue
        extra[key] = value
    return extra


__all__: list[str] = [
    "JsonFormatter",
    "configure_logging",
    "structured_log_extra",
]
