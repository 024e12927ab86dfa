"""
Best Men Engine

Game-agnostic plumbing shared by the battle and dialogue core.

Quick Start:
    from bestmen_engine.core import EventBus, GameConfig, DiceRoller

    config = GameConfig(seed=42)
    events = EventBus()
    dice = DiceRoller(seed=config.seed)
"""

__version__ = "0.1.0"
__author__ = "Developer"

from bestmen_engine.core import (
    Component,
    EventBus,
    Event,
    GameConfig,
    DiceRoller,
    setup_logging,
)
from bestmen_engine.resources import Database

__all__ = [
    "Component",
    "EventBus",
    "Event",
    "GameConfig",
    "DiceRoller",
    "setup_logging",
    "Database",
]
