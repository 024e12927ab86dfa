"""
Core engine module.

Exports:
- Component: Pydantic base for data-only models
- EventBus, Event: Event system
- GameConfig, setup_logging: Configuration
- DiceRoller: Injectable randomness
"""

from bestmen_engine.core.component import Component
from bestmen_engine.core.events import EventBus, Event
from bestmen_engine.core.config import GameConfig, setup_logging
from bestmen_engine.core.dice import DiceRoller

__all__ = [
    "Component",
    "EventBus",
    "Event",
    "GameConfig",
    "setup_logging",
    "DiceRoller",
]
