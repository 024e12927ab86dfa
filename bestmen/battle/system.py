"""
Battle system - turn resolution and the encounter controller.

The rules live in TurnResolver.resolve(), a state transition

    (EncounterState, Action) -> TurnResult(new state, log, events)

that never mutates its input. BattleSystem wraps it for the
presentation layer: it holds the current state, rejects out-of-turn
input, paces the foe's reply and reports the terminal outcome.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Optional, Union

from pydantic import Field

from bestmen_engine.core import Component, DiceRoller, EventBus, GameConfig
from bestmen.components import Combatant
from bestmen.errors import EncounterError
from bestmen.battle.actor import CombatantProfile, create_combatant
from bestmen.battle.actions import MoveExecutor
from bestmen.battle.status import Gate, StatusEngine

if TYPE_CHECKING:
    from bestmen.catalog import Catalog

logger = logging.getLogger(__name__)


class Side(Enum):
    PLAYER = "player"
    FOE = "foe"

    @property
    def other(self) -> Side:
        return Side.FOE if self is Side.PLAYER else Side.PLAYER


class Outcome(Enum):
    """Terminal result, from the player's point of view."""
    WIN = "win"
    LOSE = "lose"


class BattleEvent(Enum):
    """Events published by BattleSystem."""
    ENCOUNTER_STARTED = auto()
    TURN_RESOLVED = auto()
    ENCOUNTER_ENDED = auto()


class EncounterState(Component):
    """
    Snapshot of one fight.

    Attributes:
        player: Working copy of the player
        foe: The opponent
        turn_owner: Side whose turn it is
        terminal: Set once the fight is over (absorbing)
        turn_count: Turns resolved so far
        rewards: Item ids granted if the player wins
    """
    player: Combatant
    foe: Combatant
    turn_owner: Side = Side.PLAYER
    terminal: Optional[Outcome] = None
    turn_count: int = 0
    rewards: list[str] = Field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return self.terminal is not None

    def combatant(self, side: Side) -> Combatant:
        return self.player if side is Side.PLAYER else self.foe


# Actions

@dataclass(frozen=True)
class UseMove:
    """Player picks a move by 0-based index."""
    index: int


@dataclass(frozen=True)
class FoeTurn:
    """Let the foe act (it picks a move uniformly at random)."""


Action = Union[UseMove, FoeTurn]


# Effects emitted by a turn

@dataclass(frozen=True)
class MoveUsed:
    side: Side
    move_name: str
    hit: bool
    damage: int


@dataclass(frozen=True)
class TurnBlocked:
    side: Side
    gate: Gate
    damage: int = 0


@dataclass(frozen=True)
class HpChanged:
    side: Side
    before: int
    after: int


@dataclass(frozen=True)
class TurnPassed:
    to: Side


@dataclass(frozen=True)
class EncounterEnded:
    outcome: Outcome


BattleEffect = Union[MoveUsed, TurnBlocked, HpChanged, TurnPassed, EncounterEnded]


@dataclass
class TurnResult:
    """New state plus everything that happened on the way there."""
    state: EncounterState
    log: list[str] = field(default_factory=list)
    events: list[BattleEffect] = field(default_factory=list)
    accepted: bool = True


@dataclass
class EncounterRequest:
    """Inputs for starting a fight."""
    player: Combatant
    foe: CombatantProfile
    source_ref: Optional[str] = None


@dataclass
class TerminalReport:
    """Handed back to the session when a fight ends."""
    outcome: Outcome
    final_player_hp: int
    rewards_granted: list[str] = field(default_factory=list)
    source_ref: Optional[str] = None


_VICTORY_LINES = ("{name} is victorious!", "Foe is now emotionally unstable.")
_DEFEAT_LINES = ("You fainted...", "And dropped your dignity.")


class TurnResolver:
    """
    Resolves one turn of a fight.

    Per turn: pre-turn gate, move selection, accuracy, damage and
    effects, KO check, then status ticks for the acting side followed by
    the other side, then hand-off.
    """

    def __init__(self, config: Optional[GameConfig] = None, dice: Optional[DiceRoller] = None):
        self.config = config or GameConfig()
        self.dice = dice or DiceRoller(self.config.seed)
        self.status_engine = StatusEngine(self.config, self.dice)
        self.executor = MoveExecutor(self.status_engine, self.dice)

    def resolve(self, state: EncounterState, action: Action) -> TurnResult:
        """Apply an action to a state; the input state is left untouched."""
        reason = self._rejection(state, action)
        if reason:
            logger.warning("Rejected %r: %s", action, reason)
            return TurnResult(state=state, accepted=False)

        new = state.model_copy(deep=True)
        side = new.turn_owner
        actor = new.combatant(side)
        target = new.combatant(side.other)
        hp_before = {Side.PLAYER: new.player.hp, Side.FOE: new.foe.hp}
        result = TurnResult(state=new)

        gate = self.status_engine.roll_pre_turn_gate(actor)
        if gate.blocked:
            result.log.append(gate.describe(actor.display_name))
            result.events.append(TurnBlocked(side, gate.gate, gate.damage))
        else:
            if isinstance(action, UseMove):
                move = actor.moves[action.index]
            else:
                move = actor.moves[self.dice.choose_index(len(actor.moves))]

            outcome = self.executor.execute(actor, target, move, foe_narration=side is Side.FOE)
            result.log.extend(outcome.log)
            result.events.append(MoveUsed(side, outcome.move_name, outcome.hit, outcome.damage))

            if target.is_fainted:
                self._record_hp(result, hp_before)
                self._finish(result, winner=side)
                return result

        for combatant, acting in ((actor, True), (target, False)):
            lines, _ = self.status_engine.tick_statuses(combatant, acting=acting)
            result.log.extend(lines)

        self._record_hp(result, hp_before)

        if actor.is_fainted or target.is_fainted:
            # Simultaneous KO goes to the acting side.
            self._finish(result, winner=side if target.is_fainted else side.other)
            return result

        new.turn_owner = side.other
        new.turn_count += 1
        result.events.append(TurnPassed(new.turn_owner))
        return result

    @staticmethod
    def _rejection(state: EncounterState, action: Action) -> Optional[str]:
        if state.is_terminal:
            return "encounter is over"
        if isinstance(action, UseMove):
            if state.turn_owner is not Side.PLAYER:
                return "not the player's turn"
            if not 0 <= action.index < len(state.player.moves):
                return f"move index {action.index} out of range"
        elif isinstance(action, FoeTurn):
            if state.turn_owner is not Side.FOE:
                return "not the foe's turn"
        else:
            return "unknown action"
        return None

    @staticmethod
    def _record_hp(result: TurnResult, hp_before: dict[Side, int]) -> None:
        for side in (Side.PLAYER, Side.FOE):
            after = result.state.combatant(side).hp
            if after != hp_before[side]:
                result.events.append(HpChanged(side, hp_before[side], after))

    @staticmethod
    def _finish(result: TurnResult, winner: Side) -> None:
        state = result.state
        state.turn_count += 1
        if winner is Side.PLAYER:
            state.terminal = Outcome.WIN
            result.log.extend(line.format(name=state.player.display_name) for line in _VICTORY_LINES)
        else:
            state.terminal = Outcome.LOSE
            result.log.extend(_DEFEAT_LINES)
        result.events.append(EncounterEnded(state.terminal))


class BattleSystem:
    """
    Encounter controller driven by the presentation layer.

    Manages:
    - Encounter construction from a request
    - Player move input (ignored outside the player's turn)
    - Paced foe replies via update(dt)
    - Terminal reporting back to the session
    """

    def __init__(
        self,
        catalog: Catalog,
        events: Optional[EventBus] = None,
        config: Optional[GameConfig] = None,
        dice: Optional[DiceRoller] = None,
    ):
        self.catalog = catalog
        self.events = events or EventBus()
        self.config = config or GameConfig()
        self.resolver = TurnResolver(self.config, dice)

        self._state: Optional[EncounterState] = None
        self._source_ref: Optional[str] = None
        self._log: list[str] = []
        self._foe_timer: float = 0.0
        self._on_battle_end: Optional[Callable[[TerminalReport], None]] = None

    def request_encounter(
        self,
        player: Combatant,
        foe_id: str,
        source_ref: Optional[str] = None,
    ) -> EncounterRequest:
        """Build a request, resolving the foe against the catalog."""
        return EncounterRequest(player=player, foe=self.catalog.foe(foe_id), source_ref=source_ref)

    def start(self, request: EncounterRequest) -> EncounterState:
        """
        Start a fight.

        The player is copied, so the caller's combatant is untouched
        until the terminal report is applied.

        Raises:
            EncounterError: A fight is in progress or a side cannot fight
        """
        if self.in_progress:
            raise EncounterError("an encounter is already in progress")
        if request.player.is_fainted:
            raise EncounterError(f"{request.player.display_name} has fainted and cannot fight")

        self._state = EncounterState(
            player=request.player.model_copy(deep=True),
            foe=create_combatant(request.foe),
            rewards=list(request.foe.rewards),
        )
        self._source_ref = request.source_ref
        self._foe_timer = 0.0
        self._log = [f"{request.foe.display_name} wants to fight!", "What will you do?"]

        logger.info(
            "Encounter started: %s (%d/%d HP) vs %s",
            self._state.player.display_name,
            self._state.player.hp,
            self._state.player.max_hp,
            self._state.foe.display_name,
        )
        self.events.publish(
            BattleEvent.ENCOUNTER_STARTED,
            player=self._state.player.id,
            foe=self._state.foe.id,
            source_ref=self._source_ref,
        )
        return self._state

    def choose_move(self, index: int) -> Optional[TurnResult]:
        """Resolve the player's turn; returns None if the input was ignored."""
        if self._state is None:
            logger.warning("Move %d chosen with no encounter", index)
            return None
        return self._apply(UseMove(index))

    def update(self, dt: float) -> Optional[TurnResult]:
        """Advance pacing time; runs the foe's turn once its delay elapses."""
        if not self.awaiting_foe:
            return None
        self._foe_timer += dt
        if self._foe_timer < self.config.foe_reply_delay:
            return None
        return self.advance()

    def advance(self) -> Optional[TurnResult]:
        """Run the pending foe turn immediately."""
        if not self.awaiting_foe:
            return None
        return self._apply(FoeTurn())

    def _apply(self, action: Action) -> Optional[TurnResult]:
        result = self.resolver.resolve(self._state, action)
        if not result.accepted:
            return None

        self._state = result.state
        self._foe_timer = 0.0
        self._log.extend(result.log)
        self.events.publish(BattleEvent.TURN_RESOLVED, result=result)

        if result.state.is_terminal:
            self._report()
        return result

    def _report(self) -> None:
        state = self._state
        report = TerminalReport(
            outcome=state.terminal,
            final_player_hp=state.player.hp,
            rewards_granted=list(state.rewards) if state.terminal is Outcome.WIN else [],
            source_ref=self._source_ref,
        )
        logger.info(
            "Encounter ended: %s after %d turns (player HP %d)",
            report.outcome.value,
            state.turn_count,
            report.final_player_hp,
        )
        self.events.publish(BattleEvent.ENCOUNTER_ENDED, report=report)
        if self._on_battle_end:
            self._on_battle_end(report)

    def end_battle(self) -> None:
        """Discard the finished (or abandoned) encounter."""
        self._state = None
        self._source_ref = None
        self._foe_timer = 0.0

    def on_battle_end(self, callback: Callable[[TerminalReport], None]) -> None:
        """Set callback for the terminal report."""
        self._on_battle_end = callback

    @property
    def state(self) -> Optional[EncounterState]:
        return self._state

    @property
    def log(self) -> list[str]:
        """Narration for the current encounter, oldest first."""
        return list(self._log)

    @property
    def is_active(self) -> bool:
        """An encounter is loaded (possibly finished but not yet discarded)."""
        return self._state is not None

    @property
    def in_progress(self) -> bool:
        return self._state is not None and not self._state.is_terminal

    @property
    def awaiting_player(self) -> bool:
        return self.in_progress and self._state.turn_owner is Side.PLAYER

    @property
    def awaiting_foe(self) -> bool:
        return self.in_progress and self._state.turn_owner is Side.FOE
