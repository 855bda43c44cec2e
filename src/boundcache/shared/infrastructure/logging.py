"""
Structured logging configuration using structlog.

Provides consistent, structured logging across all modules, and the
diagnostic sink protocol caches trace their operations to.
"""

import logging
import sys
from typing import Any, Protocol, runtime_checkable

import structlog

from boundcache.shared.infrastructure.config import CacheSettings, settings


@runtime_checkable
class DiagnosticSink(Protocol):
    """
    Anything a cache can record diagnostics to.

    structlog loggers satisfy this protocol.
    """

    def debug(self, event: str, **kw: Any) -> Any: ...

    def info(self, event: str, **kw: Any) -> Any: ...

    def error(self, event: str, **kw: Any) -> Any: ...


def configure_logging(
    stream: Any = None,
    config: CacheSettings | None = None,
    level: str | None = None,
) -> None:
    """
    Configure structlog for the application.

    Sets up:
    - Pretty console output for development
    - JSON output for production
    - Log level from settings
    - Context variable merging

    Args:
        stream: Output stream, sys.stderr when omitted
        config: Settings to read environment and level from
        level: Overrides the configured log level (e.g. "DEBUG")
    """
    config = config or settings
    stream = stream if stream is not None else sys.stderr
    level = level or config.log_level

    # Determine if we want colored output
    use_colors = config.is_development

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    # Development: Pretty console output
    if config.is_development:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=use_colors),
        ]
    # Production: JSON output
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("cache_initialized", capacity=100)
    """
    return structlog.get_logger(name)
