"""Console logging setup for the ``bundlelens`` logger tree.

Modules log through ``logging.getLogger(__name__)``; this module only owns
the single stderr handler and the level names accepted on the command line.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "bundlelens"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"

# ``silent`` sits above every real level so nothing is emitted.
SILENT = logging.CRITICAL + 10

LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "silent": SILENT,
}

_HANDLER_TAG_ATTR = "_bundlelens_handler"


def parse_level(level: str | int) -> int:
    """Map a level name (case-insensitive) or number to a ``logging`` level."""
    if isinstance(level, int):
        return level
    try:
        return LOG_LEVELS[level.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown log level {level!r}. Use one of these: {', '.join(LOG_LEVELS)}") from None


def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def configure_logging(level: str | int = "info", *, force: bool = False) -> logging.Logger:
    """Attach one stderr handler to the ``bundlelens`` logger.

    Repeated calls are no-ops unless ``force`` is set, in which case the
    existing handler is replaced and the new level applied.
    """
    level_int = parse_level(level)
    logger = logging.getLogger(LOGGER_NAME)

    existing = [handler for handler in logger.handlers if _is_our_handler(handler)]
    if existing and not force:
        return logger
    for handler in existing:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    _tag_handler(handler)
    logger.addHandler(handler)
    logger.setLevel(level_int)
    logger.propagate = False
    return logger
