"""Logging helpers for brickDB.

brickDB logs through the standard :mod:`logging` module under the
``brickdb`` namespace and never configures handlers on import.  Applications
that want console output call :func:`setup_logging` once at startup::

    from brickdb.logger import setup_logging

    setup_logging("DEBUG")
"""
from __future__ import annotations

import logging
import sys

ROOT_LOGGER_NAME = "brickdb"

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``brickdb`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module.  Names outside the
            ``brickdb`` package are nested under it.

    Returns:
        The :class:`logging.Logger` instance.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(level: str = "INFO", fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """Attach a stderr handler to the ``brickdb`` logger.

    Calling this more than once only updates the level and format of the
    handler installed by the first call.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        fmt: :class:`logging.Formatter` format string.

    Returns:
        The configured ``brickdb`` logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level.upper())

    handler = next(
        (h for h in logger.handlers if getattr(h, "_brickdb_handler", False)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler._brickdb_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    handler.setLevel(level.upper())
    handler.setFormatter(logging.Formatter(fmt))
    return logger
