"""Logging setup for the ``photoexpress`` logger hierarchy.

Modules log through ``logging.getLogger(__name__)``, which places them under
the ``photoexpress`` package logger.  The application bootstrap calls
:func:`configure_logging` once so those records reach the console.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

PACKAGE_LOGGER_NAME = "photoexpress"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _ConsoleHandler(logging.StreamHandler):
    """Marker subclass so repeated configuration reuses the same handler."""


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Attach the console handler to the package logger and apply *level*.

    Safe to call more than once: the handler is installed a single time and
    later calls only change the level.
    """

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not any(isinstance(handler, _ConsoleHandler) for handler in package_logger.handlers):
        handler = _ConsoleHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    package_logger.setLevel(_resolve_level(level))
    return package_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or the child logger for module *name*.

    Relative names such as ``"gui.app"`` are placed under ``photoexpress``.
    """

    if not name or name == PACKAGE_LOGGER_NAME:
        return logging.getLogger(PACKAGE_LOGGER_NAME)
    if not name.startswith(PACKAGE_LOGGER_NAME + "."):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


__all__ = ["LOG_FORMAT", "PACKAGE_LOGGER_NAME", "configure_logging", "get_logger"]
