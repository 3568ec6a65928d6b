"""
Structured logging configuration for sdkpatcher.

structlog events are handed to the standard library ``sdkpatcher`` logger and
rendered by a single handler: a rich console handler when stderr is a terminal,
or one JSON object per line for build servers that capture stderr. Patch
outcomes are reported exclusively through this channel.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import Settings

LOGGER_NAMESPACE = "sdkpatcher"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _build_handler(json_logs: bool) -> logging.Handler:
    if json_logs:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        renderers: list[structlog.types.Processor] = [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        # Level and time come from the event itself
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_level=False,
            show_path=False,
            markup=False,
        )
        renderers = [structlog.dev.ConsoleRenderer(colors=False)]

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_shared_processors(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
        )
    )
    return handler


def setup_logging(settings: Settings | None = None, json_logs: bool | None = None) -> None:
    """Configure structured logging for the application.

    Args:
        settings: Optional configuration. If None, uses INFO level.
        json_logs: Force JSON (True) or console (False) output; by default JSON
            is used whenever stderr is not a terminal.
    """
    log_level = settings.log_level if settings else "INFO"
    level = getattr(logging, log_level, logging.INFO)
    if json_logs is None:
        json_logs = not sys.stderr.isatty()

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.handlers = [_build_handler(json_logs)]
    package_logger.setLevel(level)
    package_logger.propagate = False

    structlog.configure(
        processors=_shared_processors() + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__), under the ``sdkpatcher`` namespace

    Returns:
        Configured bound logger
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: object) -> None:
    """Bind context variables to all subsequent log entries in this context.

    Args:
        **kwargs: Context key-value pairs to bind
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
