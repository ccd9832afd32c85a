"""Bot strategies for Watten."""

from loguru import logger

from .base import BotInvariantError, BotStrategy
from .heuristic import HeuristicBot
from .random_bot import RandomBot

logger.disable("bots")

__all__ = ["BotStrategy", "BotInvariantError", "HeuristicBot", "RandomBot"]
