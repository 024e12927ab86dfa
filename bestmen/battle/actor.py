"""
Combatant profiles - static data that combatants are built from.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from bestmen_engine.core import Component
from bestmen.components import Combatant, Move


class CombatantProfile(Component):
    """Static data for a playable character or a foe."""
    id: str = Field(min_length=1)
    display_name: str = Field(min_length=1)
    max_hp: int = Field(gt=0)
    moves: list[Move] = Field(min_length=2, max_length=4)
    description: str = ""
    rewards: list[str] = Field(default_factory=list)


def create_combatant(profile: CombatantProfile, hp: Optional[int] = None) -> Combatant:
    """
    Create a fresh Combatant from profile data.

    Args:
        profile: Source profile
        hp: Starting HP (defaults to full)
    """
    return Combatant(
        id=profile.id,
        display_name=profile.display_name,
        max_hp=profile.max_hp,
        hp=profile.max_hp if hp is None else hp,
        moves=[move.clone() for move in profile.moves],
    )
