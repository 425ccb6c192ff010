"""
Structured logging setup.

Every entry carries the context bound for the current request or task
(``request_id``, acting party) through structlog's contextvars support.
"""

import logging
import sys
from typing import Optional

import structlog

from fixitnow.config.settings import settings

_QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "asyncio": logging.WARNING,
    "celery": logging.INFO,
    "uvicorn.access": logging.WARNING,
}


def configure_logging(json_logs: Optional[bool] = None) -> None:
    """Configure structlog on top of the standard library handlers."""
    if json_logs is None:
        json_logs = settings.ENVIRONMENT in ("production", "staging")

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL),
    )
    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)


def bind_request_context(**values) -> None:
    """Replace the log context of the current request or task."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        **{key: value for key, value in values.items() if value is not None}
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)
