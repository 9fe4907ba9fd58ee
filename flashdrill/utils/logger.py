"""Logging setup."""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logger(
    name: str = "flashdrill",
    level: Union[int, str] = logging.INFO,
    stream: Optional[object] = None,
) -> logging.Logger:
    """
    Configure and return the application logger.

    Calling it again only updates the level; no second handler is added.

    Args:
        name: Logger name (child loggers inherit its handler)
        level: Level name or number
        stream: Output stream, stderr by default
    """
    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not any(getattr(h, "_flashdrill", False) for h in logger.handlers):
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handler._flashdrill = True
        logger.addHandler(handler)

    return logger
