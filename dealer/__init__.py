"""Dealer package: drives hands of the holdem engine from a queue of actions."""

from .bots import BotTable, baseline_strategy, passive_strategy
from .dealer import ActionSourceClosed, Dealer, run_match

__all__ = [
    "ActionSourceClosed",
    "BotTable",
    "Dealer",
    "baseline_strategy",
    "passive_strategy",
    "run_match",
]
