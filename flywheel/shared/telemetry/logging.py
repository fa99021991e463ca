"""Logging configuration: one stdout handler for the service and its scripts."""

import logging
import sys

from flywheel.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"

# Driver loggers that are chatty at DEBUG and add nothing to the engine's own logs
_QUIET_LOGGERS = ("aiosqlite", "asyncpg")


def setup_logging() -> None:
    """Configure root logging from settings.

    DEBUG when settings.debug, INFO otherwise. SQL statements are logged at
    INFO when settings.database_echo is on.
    """
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass __name__)."""
    return logging.getLogger(name)
