"""Structured logging configuration using structlog.

Provides correlation IDs for tracing operations on a Map and
configurable output formats (JSON for production, colored console for dev).
"""

import logging
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, cast

import structlog
from structlog.types import Processor

from worldraster.config import settings

# Context variables for correlation IDs
_map_id: ContextVar[str | None] = ContextVar("map_id", default=None)
_operation: ContextVar[str | None] = ContextVar("operation", default=None)


def set_correlation_context(
    map_id: str | None = None,
    operation: str | None = None,
) -> None:
    """Set correlation IDs for the current context.

    Args:
        map_id: Identifier of the Map being worked on
        operation: Name of the running operation (e.g. "draw", "convert")
    """
    if map_id is not None:
        _map_id.set(map_id)
    if operation is not None:
        _operation.set(operation)


def clear_correlation_context() -> None:
    """Clear all correlation context variables."""
    _map_id.set(None)
    _operation.set(None)


@contextmanager
def correlation_context(
    map_id: str | None = None,
    operation: str | None = None,
) -> Iterator[None]:
    """Bind correlation IDs for the duration of a block.

    Values that were bound before the block are restored on exit, so nested
    operations (a transform that draws, for example) report their own IDs
    and hand the outer ones back afterwards.

    Args:
        map_id: Identifier of the Map being worked on
        operation: Name of the running operation
    """
    tokens: list[tuple[ContextVar[str | None], Token[str | None]]] = []
    if map_id is not None:
        tokens.append((_map_id, _map_id.set(map_id)))
    if operation is not None:
        tokens.append((_operation, _operation.set(operation)))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


def _add_correlation_ids(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor to add correlation IDs to log events."""
    _ = logger, method_name  # Required by structlog processor signature
    map_id = _map_id.get()
    operation = _operation.get()

    if map_id is not None:
        event_dict.setdefault("map_id", map_id)
    if operation is not None:
        event_dict.setdefault("operation", operation)

    return event_dict


def configure_logging(
    level: str | None = None,
    log_format: str | None = None,
) -> None:
    """Configure structlog with the specified settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to settings.LOG_LEVEL.
        log_format: Output format ("console" or "json").
                    Defaults to settings.LOG_FORMAT.
    """
    level = level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_correlation_ids,
    ]

    if log_format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure stdlib logging to match
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
        force=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name. If None, uses the calling module's name.

    Returns:
        A bound structlog logger instance.
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
