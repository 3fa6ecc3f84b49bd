"""Structured logging for passhash.

This module configures structlog for JSON or console output. Log entries
go to stderr so that command output on stdout stays machine readable.

Loggers returned by get_logger write through the standard library logger
of the same name. Until configure_logging runs, the "passhash" logger only
has a NullHandler, so embedding applications see nothing unless they set
up logging themselves.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from passhash.core.config import get_settings

LIBRARY_LOGGER = "passhash"

logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())

# Event keys that must never reach a log sink
SENSITIVE_FIELDS = frozenset(
    {
        "password",
        "salt",
        "key",
        "derived_key",
        "encoded",
        "encoded_hash",
    }
)


def drop_sensitive_fields(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Remove credential material from a log entry.

    Args:
        logger: Logger instance (unused).
        method_name: Method name (unused).
        event_dict: Event dictionary to modify.

    Returns:
        EventDict: Event dictionary without sensitive keys.
    """
    for field in SENSITIVE_FIELDS.intersection(event_dict):
        del event_dict[field]
    return event_dict


def add_logger_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log entry.

    Args:
        logger: Logger instance.
        method_name: Method name (unused).
        event_dict: Event dictionary to modify.

    Returns:
        EventDict: Modified event dictionary with logger name.
    """
    event_dict["logger"] = logger.name if hasattr(logger, "name") else "passhash"
    return event_dict


def rename_message_field(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' field to 'message' for compatibility."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def configure_logging(settings: Any | None = None) -> None:
    """Configure structured logging for the application.

    Sets up structlog with console formatting for development (or when
    ``log_format`` is ``console``) and JSON formatting otherwise.

    Args:
        settings: Optional settings instance. If not provided, will load from environment.
    """
    if settings is None:
        settings = get_settings()

    level = getattr(logging, settings.log_level)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        drop_sensitive_fields,
        structlog.stdlib.add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_development or settings.log_format == "console":
        renderer: Processor = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    else:
        shared_processors.append(rename_message_field)
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    library_logger = logging.getLogger(LIBRARY_LOGGER)
    library_logger.handlers = [handler]
    library_logger.setLevel(level)
    library_logger.propagate = False

    # Configure standard logging for third-party libraries
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Optional logger name. If not provided, uses 'passhash'.

    Returns:
        BoundLogger: Configured structured logger instance.
    """
    return structlog.wrap_logger(logging.getLogger(name or LIBRARY_LOGGER))
