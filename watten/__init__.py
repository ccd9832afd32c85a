"""Core rules engine package for Watten."""

from loguru import logger

# Library logs stay silent until the embedding application opts in.
logger.disable("watten")

__all__ = [
    "cards",
    "deck",
    "scoring",
    "mechanics",
    "trick",
    "state",
    "game",
    "events",
    "rules_schema",
    "service",
    "log",
]
