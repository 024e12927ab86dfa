"""
World module - NPCs and the session that ties dialogue to battle.
"""

from bestmen.world.npc import Npc
from bestmen.world.session import (
    GameSession,
    InventoryEvent,
    QUEST_ITEMS,
    FINAL_BOSS_ID,
)

__all__ = [
    "Npc",
    "GameSession",
    "InventoryEvent",
    "QUEST_ITEMS",
    "FINAL_BOSS_ID",
]
