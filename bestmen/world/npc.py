"""
NPC registry entries.
"""

from __future__ import annotations

from dataclasses import dataclass

from bestmen.dialog import foe_id_for


@dataclass
class Npc:
    """Someone the player can talk to (and possibly fight)."""
    ref: str
    name: str
    dialogue_id: str
    spent: bool = False

    @property
    def foe_id(self) -> str:
        return foe_id_for(self.name)
