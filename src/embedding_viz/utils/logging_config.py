"""
Logging helpers for Embedding Viz.

Usage:
    from embedding_viz.utils.logging_config import get_logger

    logger = get_logger(__name__)
"""

import logging
import sys
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
ROOT_LOGGER_NAME = "embedding_viz"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(name)


def setup_logging(
    level: Union[int, str] = logging.INFO,
    fmt: Optional[str] = None,
    stream=None,
) -> logging.Logger:
    """
    Configure the package logger with a single stream handler.

    Calling this more than once only updates the level.

    Args:
        level: Logging level as int or name ("DEBUG", "INFO", ...)
        fmt: Optional log format string
        stream: Stream to write to (default: stderr)

    Returns:
        The package root logger
    """
    global _configured

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not _configured:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True

    return logger
