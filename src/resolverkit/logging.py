"""
Centralized logging configuration using structlog
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

import structlog

from .config import settings

# Context variables for operation tracking
operation_ctx: ContextVar[str | None] = ContextVar("operation", default=None)
model_ctx: ContextVar[str | None] = ContextVar("model", default=None)


class OperationContextFilter:
    """Add the current resolver operation to log records."""

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        """Add operation context to the event dict."""
        # Required by the structlog processor interface
        _ = logger, method_name

        operation = operation_ctx.get()
        model = model_ctx.get()

        if operation:
            event_dict.setdefault("operation", operation)

        if model:
            event_dict.setdefault("model", model)

        return event_dict


def configure_logging(debug: bool | None = None, log_level: str | None = None) -> None:
    """Configure structlog with appropriate processors and formatters.

    Args:
        debug: If True, use human-readable console output at DEBUG level.
            If False, use JSON. Defaults to ``settings.debug``.
        log_level: Explicit level name; overrides the level implied by ``debug``.
            Defaults to ``settings.log_level`` when debug output is off.
    """
    if debug is None:
        debug = settings.debug

    if log_level is not None:
        level = logging.getLevelName(log_level.upper())
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.getLevelName(settings.log_level.upper())

    logging.basicConfig(
        level=level,
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        OperationContextFilter(),
        structlog.processors.TimeStamper(fmt="ISO", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


@contextmanager
def operation_context(operation: str, model: str | None = None) -> Iterator[None]:
    """Tag every log line emitted inside the block with the operation and model."""
    operation_token = operation_ctx.set(operation)
    model_token = model_ctx.set(model)
    try:
        yield
    finally:
        model_ctx.reset(model_token)
        operation_ctx.reset(operation_token)


def get_operation() -> str | None:
    """Get the current operation name."""
    return operation_ctx.get()
