"""
Status effect engine - applies, gates on and decays timed statuses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from bestmen_engine.core import DiceRoller, GameConfig
from bestmen.components import (
    Affliction,
    Combatant,
    Effect,
    Heal,
    StatModifier,
    StatusKind,
    Surrender,
)

logger = logging.getLogger(__name__)


class Gate(Enum):
    """Outcome of the pre-turn check."""
    CLEAR = auto()
    ASLEEP = auto()
    STUNNED = auto()
    FLINCHED = auto()
    SELF_HIT = auto()


@dataclass(frozen=True)
class GateResult:
    gate: Gate
    damage: int = 0

    @property
    def blocked(self) -> bool:
        return self.gate is not Gate.CLEAR

    def describe(self, name: str) -> str:
        if self.gate is Gate.ASLEEP:
            return f"{name} is fast asleep."
        if self.gate is Gate.STUNNED:
            return f"{name} is stunned and can't move!"
        if self.gate is Gate.FLINCHED:
            return f"{name} flinched and lost the turn!"
        if self.gate is Gate.SELF_HIT:
            return f"{name} is confused! It hurt itself for {self.damage} damage!"
        return ""


CLEAR = GateResult(Gate.CLEAR)

_AFFLICTION_TEXT = {
    StatusKind.CONFUSE: "{target} became confused!",
    StatusKind.SKIP: "{target} flinched!",
    StatusKind.SLEEP: "{target} fell asleep!",
    StatusKind.STUN: "{target} is stunned!",
    StatusKind.BLEED: "{target} is bleeding!",
}

# Tick order; also the tie-break for same-tick expiry messages.
_CONTROL_KINDS = (StatusKind.SLEEP, StatusKind.STUN, StatusKind.SKIP)
_MODIFIER_KINDS = (
    (StatusKind.ATK_BOOST, "attack"),
    (StatusKind.DEF_BOOST, "defense"),
    (StatusKind.ATK_DEBUFF, "attack"),
    (StatusKind.DEF_DEBUFF, "defense"),
)


class StatusEngine:
    """
    Applies effect payloads and runs the once-per-turn status tick.

    All randomness comes from the injected DiceRoller.
    """

    def __init__(self, config: Optional[GameConfig] = None, dice: Optional[DiceRoller] = None):
        self.config = config or GameConfig()
        self.dice = dice or DiceRoller(self.config.seed)

    def apply_effect(
        self,
        target: Combatant,
        effect: Optional[Effect],
        source_name: str,
        target_name: Optional[str] = None,
    ) -> list[str]:
        """
        Apply every part of an effect to the target, in order.

        Returns:
            One log line per part that took hold
        """
        if effect is None:
            return []

        target_name = target_name or target.display_name
        lines: list[str] = []

        for part in effect.parts:
            if isinstance(part, Heal):
                changed = target.heal(part.amount)
                if changed >= 0:
                    lines.append(f"{target_name} recovered {changed} HP!")
                else:
                    lines.append(f"{target_name} lost {-changed} HP!")

            elif isinstance(part, Affliction):
                if part.chance < 100 and not self.dice.succeeds(part.chance):
                    continue
                target.set_status(part.status, self._affliction_turns(part))
                lines.append(_AFFLICTION_TEXT[part.status].format(target=target_name))

            elif isinstance(part, StatModifier):
                target.scale_stat(part.stat, part.factor)
                target.set_status(part.status, part.duration or self.config.default_status_duration)
                verb = "rose" if part.sign > 0 else "fell"
                lines.append(f"{target_name}'s {part.stat} {verb} by {part.percent}%!")

            elif isinstance(part, Surrender):
                lines.append(
                    f"{source_name} waves a white flag. {target_name} is not sure what it means."
                )

            else:
                raise TypeError(f"Unhandled effect part: {part!r}")

        return lines

    def _affliction_turns(self, part: Affliction) -> int:
        if part.status is StatusKind.SKIP:
            return 1
        return part.duration or self.config.default_status_duration

    def tick_statuses(self, target: Combatant, acting: bool = True) -> tuple[list[str], bool]:
        """
        Decay statuses once at the end of a turn.

        Args:
            target: Combatant to tick
            acting: Whether the target took this turn. A flinch is only
                consumed by its owner's own turn.

        Returns:
            (log lines, whether bleed damage was dealt)
        """
        name = target.display_name
        lines: list[str] = []
        self_damage = False

        bleed = target.status(StatusKind.BLEED)
        if bleed > 0:
            damage = target.take_damage(target.percent_of_max(self.config.bleed_percent))
            self_damage = damage > 0
            target.set_status(StatusKind.BLEED, bleed - 1)
            lines.append(f"{name} bleeds for {damage} damage! ({bleed - 1} turns left)")

        for kind in _CONTROL_KINDS:
            if kind is StatusKind.SKIP and not acting:
                continue
            turns = target.status(kind)
            if turns > 0:
                target.set_status(kind, turns - 1)

        confuse = target.status(StatusKind.CONFUSE)
        if confuse > 0:
            if self.dice.succeeds(self.config.confusion_recover_chance):
                target.set_status(StatusKind.CONFUSE, 0)
                lines.append(f"{name} snapped out of confusion!")
            else:
                target.set_status(StatusKind.CONFUSE, confuse - 1)

        for kind, stat in _MODIFIER_KINDS:
            turns = target.status(kind)
            if turns > 0:
                target.set_status(kind, turns - 1)
                if turns - 1 == 0:
                    target.reset_stat(stat)
                    lines.append(f"{name}'s {stat} returned to normal.")

        return lines, self_damage

    def roll_pre_turn_gate(self, actor: Combatant) -> GateResult:
        """
        Decide whether the actor may move this turn.

        Sleep, stun and flinch block outright, in that order. Otherwise a
        confused actor may hit itself instead of moving.
        """
        if actor.has_status(StatusKind.SLEEP):
            return GateResult(Gate.ASLEEP)
        if actor.has_status(StatusKind.STUN):
            return GateResult(Gate.STUNNED)
        if actor.has_status(StatusKind.SKIP):
            return GateResult(Gate.FLINCHED)
        if actor.has_status(StatusKind.CONFUSE):
            if self.dice.succeeds(self.config.confusion_self_hit_chance):
                damage = actor.take_damage(actor.percent_of_max(self.config.confusion_self_hit_percent))
                logger.debug("%s hit itself in confusion for %d", actor.display_name, damage)
                return GateResult(Gate.SELF_HIT, damage)
        return CLEAR
