"""
Status kinds tracked on a combatant.
"""

from __future__ import annotations

from enum import Enum


class StatusKind(Enum):
    """Closed set of timed statuses. Values are the names used in logs."""
    CONFUSE = "confuse"
    SKIP = "skip"
    SLEEP = "sleep"
    STUN = "stun"
    BLEED = "bleed"
    ATK_BOOST = "atkBoost"
    DEF_BOOST = "defBoost"
    ATK_DEBUFF = "atkDebuff"
    DEF_DEBUFF = "defDebuff"

    @property
    def is_stat_modifier(self) -> bool:
        return self in _STAT_MODIFIERS


_STAT_MODIFIERS = frozenset({
    StatusKind.ATK_BOOST,
    StatusKind.DEF_BOOST,
    StatusKind.ATK_DEBUFF,
    StatusKind.DEF_DEBUFF,
})
