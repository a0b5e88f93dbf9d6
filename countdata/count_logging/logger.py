"""
Structured logging for the CountData API.

Every event is one JSON line carrying event_type, level, timestamp and logger,
plus the request context (request_id, method, path) bound by the HTTP
middleware, so a store failure can be traced back to the call that caused it.
Secrets never reach the output: any api_key field is masked.

No countdata imports here to avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

# json (default) or console
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()

REDACTED = "***"
SECRET_KEYS = ("api_key", "x-api-key", "password")


def _event_type(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Emit the event name as event_type (and message when none given)."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    event_dict.setdefault("message", str(event_dict.get("event_type", "")))
    return event_dict


def _mask_secrets(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    for key in SECRET_KEYS:
        if event_dict.get(key):
            event_dict[key] = REDACTED
    return event_dict


def configure_structlog() -> None:
    """Configure structlog once: request context, level, UTC timestamp, renderer."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.format_exc_info,
        _mask_secrets,
        _event_type,
    ]
    if LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("count_inserted", date="06/05/2025", tf_count=5)

    Output (JSON): {"event_type": "count_inserted", "date": "06/05/2025", "tf_count": 5,
    "request_id": "...", "method": "POST", "path": "/api/add",
    "timestamp": "...", "level": "info", "logger": "module.name"}
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_request_context(method: str, path: str, request_id: str | None = None) -> str:
    """
    Start a fresh logging context for one HTTP request and return its request_id.

    Fields bound here appear on every event logged while the request is handled,
    including events from the store running in the threadpool.
    """
    request_id = request_id or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=method, path=path)
    return request_id


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
