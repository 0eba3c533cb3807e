"""Logging setup for the command line front end."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

DEFAULT_FORMAT = "%(name)s: %(message)s"
DEFAULT_LEVEL = logging.WARNING


def setup_logger(
    name: str = "tilepuzzle",
    level: int = DEFAULT_LEVEL,
    console: Console | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Configure and return the logger called *name*.

    Output goes through a :class:`RichHandler` on stderr so it does not
    interleave with the rendered board.
    """
    logger = logging.getLogger(name)
    # Calling this twice must not duplicate output.
    if logger.hasHandlers():
        logger.handlers.clear()
    logger.setLevel(level)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(handler)

    logger.debug("Logging configured at %s", logging.getLevelName(level))
    return logger


def get_level_from_string(level_str: str) -> int:
    """Convert a level name such as ``"debug"`` to a logging constant."""
    return LOG_LEVELS.get(level_str.lower(), DEFAULT_LEVEL)
