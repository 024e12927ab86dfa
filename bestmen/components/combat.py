"""
Combatant model - one side of a fight.
"""

from __future__ import annotations

from pydantic import Field, model_validator

from bestmen_engine.core import Component
from bestmen.components.moves import Move
from bestmen.components.status import StatusKind


class Combatant(Component):
    """
    A participant in battle.

    HP carries across encounters within a session; the multipliers and
    statuses only ever change through the status engine.

    Attributes:
        id: Stable identifier (catalog id)
        display_name: Name used in narration
        max_hp: Fixed maximum HP
        hp: Current HP, always within [0, max_hp]
        attack_multiplier: Outgoing damage scale (1.0 = normal)
        defense_multiplier: Incoming damage divisor (1.0 = normal)
        statuses: Remaining turns per active status (no zero entries)
        moves: Two to four moves, fixed for the encounter
    """
    id: str = Field(min_length=1)
    display_name: str = Field(min_length=1)
    max_hp: int = Field(gt=0)
    hp: int = Field(ge=0)
    attack_multiplier: float = Field(default=1.0, gt=0)
    defense_multiplier: float = Field(default=1.0, gt=0)
    statuses: dict[StatusKind, int] = Field(default_factory=dict)
    moves: list[Move] = Field(min_length=2, max_length=4)

    @model_validator(mode='after')
    def _check_hp(self) -> Combatant:
        if self.hp > self.max_hp:
            raise ValueError(f"hp {self.hp} exceeds max_hp {self.max_hp}")
        return self

    @property
    def is_fainted(self) -> bool:
        return self.hp == 0

    @property
    def hp_percent(self) -> float:
        return self.hp / self.max_hp

    def percent_of_max(self, percent: int) -> int:
        """ceil(max_hp * percent / 100) in exact integer arithmetic."""
        return -(-self.max_hp * percent // 100)

    def take_damage(self, amount: int) -> int:
        """
        Lose HP, floored at 0.

        Returns:
            HP actually lost
        """
        amount = max(0, amount)
        actual = min(amount, self.hp)
        self.hp = self.hp - actual
        assert 0 <= self.hp <= self.max_hp
        return actual

    def heal(self, amount: int) -> int:
        """
        Apply a signed HP change clamped to [0, max_hp].

        Returns:
            Signed HP actually changed
        """
        before = self.hp
        self.hp = min(self.max_hp, max(0, self.hp + amount))
        assert 0 <= self.hp <= self.max_hp
        return self.hp - before

    def status(self, kind: StatusKind) -> int:
        """Remaining turns for a status (0 if absent)."""
        return self.statuses.get(kind, 0)

    def has_status(self, kind: StatusKind) -> bool:
        return self.status(kind) > 0

    def set_status(self, kind: StatusKind, turns: int) -> None:
        """Set remaining turns; zero removes the entry."""
        statuses = dict(self.statuses)
        if turns > 0:
            statuses[kind] = turns
        else:
            statuses.pop(kind, None)
        self.statuses = statuses

    def scale_stat(self, stat: str, factor: float) -> float:
        """Multiply the attack or defense multiplier and return the new value."""
        field_name = f"{stat}_multiplier"
        value = getattr(self, field_name) * factor
        assert value > 0, f"{field_name} must stay positive"
        setattr(self, field_name, value)
        return value

    def reset_stat(self, stat: str) -> None:
        setattr(self, f"{stat}_multiplier", 1.0)
