"""
Configuration package.
"""

from .database import (
    async_session_factory,
    create_engine,
    dispose_engine,
    get_database_url,
    get_db_session,
    isolated_session_factory,
)
from .logging import bind_request_context, configure_logging, get_logger
from .settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
    # Database
    "async_session_factory",
    "create_engine",
    "dispose_engine",
    "get_database_url",
    "get_db_session",
    "isolated_session_factory",
    # Logging
    "bind_request_context",
    "configure_logging",
    "get_logger",
]
