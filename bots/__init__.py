"""Bot strategies for Whot!."""

from .base import BotStrategy, choose_shape
from .baseline_greedy import GreedyBot
from .random_bot import RandomBot

__all__ = ["BotStrategy", "GreedyBot", "RandomBot", "choose_shape"]
