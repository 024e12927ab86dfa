"""
Move execution - accuracy, damage and effect application.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from bestmen_engine.core import DiceRoller
from bestmen.components import Combatant, Move, MoveType
from bestmen.battle.status import StatusEngine

_TYPE_FLAVOR = {
    MoveType.PSYCHIC: "The foe stares into the void...",
    MoveType.TRICK: "The foe's confidence is mildly shaken.",
}
_DEFAULT_FLAVOR = "It was oddly specific."
_OVERKILL_POWER = 15


def calculate_damage(power: int, attack_multiplier: float, defense_multiplier: float) -> int:
    """ceil(power * attack / defense), never negative."""
    assert attack_multiplier > 0 and defense_multiplier > 0
    raw = power * attack_multiplier / defense_multiplier
    # Scrub float noise so 20 * 1.1 is 22, not 23.
    return max(0, math.ceil(round(raw, 9)))


@dataclass
class MoveResult:
    """Result of executing one move."""
    move_name: str
    hit: bool = True
    damage: int = 0
    log: list[str] = field(default_factory=list)


class MoveExecutor:
    """Executes a chosen move from attacker to defender."""

    def __init__(self, status_engine: StatusEngine, dice: Optional[DiceRoller] = None):
        self.status_engine = status_engine
        self.dice = dice or status_engine.dice

    def check_hit(self, move: Move) -> bool:
        """Hit iff a [1, 100] roll is at or under the move's accuracy."""
        return self.dice.roll_percent() <= move.accuracy

    def execute(
        self,
        attacker: Combatant,
        defender: Combatant,
        move: Move,
        foe_narration: bool = False,
    ) -> MoveResult:
        """
        Roll accuracy, deal damage and apply the move's effect.

        Args:
            attacker: Acting combatant
            defender: Target
            move: Move being used
            foe_narration: Use the foe's flavor lines instead of the player's
        """
        result = MoveResult(move_name=move.name)

        if move.is_no_op:
            result.log.append(f"{attacker.display_name} used {move.name}!")
            return result

        if not self.check_hit(move):
            result.hit = False
            result.log.append(f"{attacker.display_name}'s {move.name} missed!")
            return result

        damage = calculate_damage(
            move.power,
            attacker.attack_multiplier,
            defender.defense_multiplier,
        )
        result.damage = defender.take_damage(damage)

        if result.damage > 0:
            result.log.append(
                f"{attacker.display_name} used {move.name} for {result.damage} damage!"
            )
        else:
            result.log.append(f"{attacker.display_name} used {move.name}!")
        result.log.append(self._flavor(move, foe_narration))

        result.log.extend(
            self.status_engine.apply_effect(
                defender,
                move.effect,
                attacker.display_name,
                defender.display_name,
            )
        )
        return result

    @staticmethod
    def _flavor(move: Move, foe_narration: bool) -> str:
        if foe_narration:
            if move.power > _OVERKILL_POWER:
                return "It's ridiculously overkill!"
            return "It's vaguely annoying."
        return _TYPE_FLAVOR.get(move.move_type, _DEFAULT_FLAVOR)
