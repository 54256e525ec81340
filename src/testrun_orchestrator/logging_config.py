"""Logging setup for the command line entry point."""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "TESTRUN_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_PACKAGE_LOGGER = "testrun_orchestrator"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Attach one stderr handler to the package logger.

    Args:
      level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL). Falls back to
        the TESTRUN_LOG_LEVEL environment variable, then WARNING.

    Returns:
      The configured package logger.
    """
    level_name = (level or os.getenv(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    resolved_level = logging.getLevelName(level_name)
    if not isinstance(resolved_level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(resolved_level)
    for handler in list(logger.handlers):
        if getattr(handler, "_testrun_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._testrun_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
