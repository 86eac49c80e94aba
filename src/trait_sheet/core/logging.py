"""Structured logging configuration for the trait sheet core.

structlog events are handed to the standard library through
``ProcessorFormatter``, so every handler (console or log file) renders the
same structured entries, including the ones emitted by this package.

Example:
    >>> from trait_sheet.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", log_file="sheet.log")
    >>> get_logger(__name__).info("Skill value set", skill="battle", value=6)
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

from trait_sheet.core.config import Settings, get_settings


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


HANDLER_NAME = "trait_sheet"
"""Name given to the handlers installed by ``configure_logging``."""


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every entry with the application name."""
    event_dict["app"] = "trait_sheet"
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _handler(handler: logging.Handler, renderer: Processor, level: int) -> logging.Handler:
    handler.set_name(HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_shared_processors(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                renderer,
            ],
        )
    )
    return handler


def remove_handlers() -> None:
    """Detach and close the handlers installed by ``configure_logging``."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)
            handler.close()


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
) -> None:
    """Configure application-wide logging.

    Calling it again replaces the handlers of the previous call.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Render console entries as JSON instead of colored text.
        log_file: Optional path of a file receiving JSON entries.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    console_renderer: Processor
    if json_format:
        console_renderer = structlog.processors.JSONRenderer()
    else:
        console_renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )

    remove_handlers()
    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.addHandler(_handler(logging.StreamHandler(sys.stdout), console_renderer, numeric_level))
    if log_file:
        root.addHandler(
            _handler(logging.FileHandler(log_file), structlog.processors.JSONRenderer(), numeric_level)
        )


def configure_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from the application settings.

    Debug mode forces the DEBUG level.

    Args:
        settings: The settings to apply; the application settings when omitted.
    """
    settings = settings or get_settings()
    configure_logging(
        level="DEBUG" if settings.debug else settings.log_level,
        json_format=settings.json_logs,
        log_file=settings.log_file,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Optional name for the logger (typically __name__).

    Returns:
        A configured structlog BoundLogger instance.
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables included in all subsequent entries.

    Example:
        >>> bind_context(guild_id=42, character="Paul")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "HANDLER_NAME",
    "add_app_context",
    "configure_logging",
    "configure_from_settings",
    "remove_handlers",
    "get_logger",
    "bind_context",
    "clear_context",
]
