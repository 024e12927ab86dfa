"""
Components - data models for combat, dialogue and inventory.

Pydantic models validate on construction and assignment; dialogue
trees are plain dataclasses.
"""

from bestmen.components.status import StatusKind
from bestmen.components.effects import (
    Effect,
    EffectPart,
    Heal,
    Affliction,
    Confuse,
    Skip,
    Sleep,
    Stun,
    Bleed,
    StatModifier,
    AtkBoost,
    DefBoost,
    AtkDebuff,
    DefDebuff,
    Surrender,
)
from bestmen.components.moves import Move, MoveType
from bestmen.components.combat import Combatant
from bestmen.components.inventory import Inventory
from bestmen.components.dialog import (
    DialogueChoice,
    DialogueNode,
    DialogueTree,
    BATTLE,
    END,
)

__all__ = [
    # Status
    "StatusKind",
    # Effects
    "Effect",
    "EffectPart",
    "Heal",
    "Affliction",
    "Confuse",
    "Skip",
    "Sleep",
    "Stun",
    "Bleed",
    "StatModifier",
    "AtkBoost",
    "DefBoost",
    "AtkDebuff",
    "DefDebuff",
    "Surrender",
    # Moves
    "Move",
    "MoveType",
    # Combat
    "Combatant",
    # Inventory
    "Inventory",
    # Dialogue
    "DialogueChoice",
    "DialogueNode",
    "DialogueTree",
    "BATTLE",
    "END",
]
