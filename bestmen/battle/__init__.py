"""
Battle module - one-on-one turn-based combat.

Provides:
- Combatant profiles and construction
- Status effect engine (apply, tick, pre-turn gate)
- Move execution (accuracy, damage, effects)
- Turn resolution and the encounter controller
"""

from bestmen.battle.actor import CombatantProfile, create_combatant
from bestmen.battle.status import StatusEngine, Gate, GateResult
from bestmen.battle.actions import MoveExecutor, MoveResult, calculate_damage
from bestmen.battle.system import (
    BattleSystem,
    BattleEvent,
    TurnResolver,
    TurnResult,
    EncounterState,
    EncounterRequest,
    TerminalReport,
    Side,
    Outcome,
    UseMove,
    FoeTurn,
    MoveUsed,
    TurnBlocked,
    HpChanged,
    TurnPassed,
    EncounterEnded,
)

__all__ = [
    # Actor
    "CombatantProfile",
    "create_combatant",
    # Status
    "StatusEngine",
    "Gate",
    "GateResult",
    # Actions
    "MoveExecutor",
    "MoveResult",
    "calculate_damage",
    # System
    "BattleSystem",
    "BattleEvent",
    "TurnResolver",
    "TurnResult",
    "EncounterState",
    "EncounterRequest",
    "TerminalReport",
    "Side",
    "Outcome",
    "UseMove",
    "FoeTurn",
    "MoveUsed",
    "TurnBlocked",
    "HpChanged",
    "TurnPassed",
    "EncounterEnded",
]
