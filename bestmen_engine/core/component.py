"""
Component base class for game data models.

Components hold state plus small helpers that keep it valid (clamping,
pruning). Rules that decide how the state changes live in the battle
and dialogue engines.

Usage:
    class Gauge(Component):
        current: int = 0
        maximum: int = 10
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """
    Base class for all components.

    Uses Pydantic for:
    - Validation on construction and on assignment
    - JSON round-tripping
    - Deep copies for working state
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra='forbid',
    )

    def clone(self) -> Component:
        """Create a deep copy of this component."""
        return self.model_copy(deep=True)
