"""Logging setup for applications embedding the engine."""

from __future__ import annotations

import sys

from loguru import logger


def configure_logging(level: str = "INFO") -> None:
    """Route engine logs to stderr at ``level``."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format="{time:HH:mm:ss} | {level: <8} | {name}:{line} - {message}")
    logger.enable("watten")
    logger.enable("bots")
