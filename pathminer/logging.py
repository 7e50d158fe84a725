"""Package-wide logging for pathminer.

All modules obtain their logger through :func:`get_logger`; the loggers hang
off a single ``"pathminer"`` parent that owns the only handler. The initial
level can be overridden with the ``PATHMINER_LOG_LEVEL`` environment variable.

The ranking and scope solvers accept a ``verbose`` flag. Verbose narration is
routed through :func:`narrate`, which logs at INFO when enabled and at DEBUG
otherwise, so the flag never changes algorithm behaviour.
"""

import logging
import os
import sys
from typing import Optional

PACKAGE_LOGGER = "pathminer"
LOG_LEVEL_ENV = "PATHMINER_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_PACKAGE_LOGGER_CONFIGURED = False


def _level_from_env(default: int) -> int:
    """Resolve a level name from the environment, falling back to ``default``."""
    raw = os.getenv(LOG_LEVEL_ENV, "").strip().upper()
    if not raw:
        return default
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Install the single handler on the ``pathminer`` logger.

    Repeated calls are no-ops until :func:`reset_logging` is called.

    Args:
        level: Logging level used when ``PATHMINER_LOG_LEVEL`` is unset.
        format_string: Custom format string (optional).
        handler: Custom handler (optional, defaults to a stdout StreamHandler).
    """
    global _PACKAGE_LOGGER_CONFIGURED

    if _PACKAGE_LOGGER_CONFIGURED:
        return

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(_level_from_env(level))
    package_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    package_logger.addHandler(handler)

    # Propagate so pytest's caplog sees package records
    package_logger.propagate = True

    _PACKAGE_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a child logger of the ``pathminer`` package logger.

    Args:
        name: Logger name, normally ``__name__`` of the calling module.

    Returns:
        Logger that inherits level and handler from the package logger.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the package logger and its handlers.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.INFO).
    """
    setup_root_logger()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Enable debug logging for the entire package."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Disable debug logging, set to INFO level."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop the package handler so the next call reconfigures (mainly for tests)."""
    global _PACKAGE_LOGGER_CONFIGURED
    _PACKAGE_LOGGER_CONFIGURED = False

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


def narrate(logger: logging.Logger, verbose: bool, msg: str, *args: object) -> None:
    """Log a progress message at INFO when ``verbose`` is set, DEBUG otherwise."""
    logger.log(logging.INFO if verbose else logging.DEBUG, msg, *args)


setup_root_logger()
