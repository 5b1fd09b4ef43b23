"""
Structured logging configuration using structlog.

Colored console output for interactive use, JSON lines when
SHOPDESK_LOG_JSON is set.
"""

import logging
import os
import sys

import structlog
from structlog.types import Processor


def configure_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """Configure structlog and stdlib logging for the application.

    Args:
        level: Log level name. Defaults to SHOPDESK_LOG_LEVEL, then WARNING.
        json_output: Render JSON lines. Defaults to SHOPDESK_LOG_JSON.
    """
    if level is None:
        level = os.environ.get("SHOPDESK_LOG_LEVEL", "WARNING")
    if json_output is None:
        json_output = os.environ.get("SHOPDESK_LOG_JSON", "").lower() in ("1", "true", "yes")

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Logs go to stderr so command output on stdout stays clean
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        force=True,
    )

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
