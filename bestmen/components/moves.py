"""
Move definitions.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field

from bestmen_engine.core import Component
from bestmen.components.effects import Effect


class MoveType(Enum):
    """Flavor category of a move; only affects narration."""
    PHYSICAL = "physical"
    PSYCHIC = "psychic"
    TRICK = "trick"
    STORY = "story"


class Move(Component):
    """
    A single battle action.

    Attributes:
        name: Display name
        power: Base damage (0 for pure-utility moves)
        accuracy: Percent chance to hit
        move_type: Narration flavor
        effect: Optional payload applied to the target on hit
    """
    name: str = Field(min_length=1)
    power: int = Field(default=0, ge=0)
    accuracy: int = Field(default=100, ge=0, le=100)
    move_type: MoveType = MoveType.PHYSICAL
    effect: Optional[Effect] = None

    @property
    def is_no_op(self) -> bool:
        """Zero power and no payload: always 'hits', changes nothing."""
        return self.power == 0 and self.effect is None
