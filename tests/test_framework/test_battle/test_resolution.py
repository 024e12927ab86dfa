import pytest

from bestmen.battle import (
    EncounterEnded,
    EncounterState,
    FoeTurn,
    Gate,
    HpChanged,
    MoveUsed,
    Outcome,
    Side,
    TurnBlocked,
    TurnPassed,
    TurnResolver,
    UseMove,
    calculate_damage,
)
from bestmen.components import StatusKind


@pytest.fixture
def resolver(config, rigged_roller):
    return TurnResolver(config, rigged_roller)


@pytest.fixture
def state(combatant_factory, move_factory):
    player = combatant_factory("Hero", moves=[
        move_factory("Jab", 20),
        move_factory("Whiff", 20, accuracy=0),
        move_factory("Shrug", 0),
    ])
    foe = combatant_factory("Uncle", moves=[
        move_factory("Angry Slap", 10),
        move_factory("Bouquet Slam", 25),
    ])
    return EncounterState(player=player, foe=foe)


@pytest.mark.parametrize("power,atk,dfn,expected", [
    (20, 1.0, 1.0, 20),
    (20, 1.1, 1.0, 22),
    (10, 1.2, 0.9, 14),
    (15, 1.0, 0.9, 17),
    (5, 0.8, 1.0, 4),
    (1, 0.01, 5.0, 1),
    (0, 3.0, 0.1, 0),
])
def test_calculate_damage(power, atk, dfn, expected):
    assert calculate_damage(power, atk, dfn) == expected


def test_player_hit_passes_turn(resolver, state):
    result = resolver.resolve(state, UseMove(0))

    assert result.accepted
    assert result.state.foe.hp == 80
    assert result.state.turn_owner is Side.FOE
    assert result.state.turn_count == 1
    assert result.log[:2] == ["Hero used Jab for 20 damage!", "It was oddly specific."]
    assert MoveUsed(Side.PLAYER, "Jab", True, 20) in result.events
    assert HpChanged(Side.FOE, 100, 80) in result.events
    assert result.events[-1] == TurnPassed(Side.FOE)


def test_input_state_is_not_mutated(resolver, state):
    before = state.model_dump()
    result = resolver.resolve(state, UseMove(0))

    assert state.model_dump() == before
    assert result.state is not state


def test_miss_on_forced_high_roll(resolver, rigged_roller, state):
    rigged_roller.queue(101)

    result = resolver.resolve(state, UseMove(0))

    assert result.state.foe.hp == 100
    assert result.log == ["Hero's Jab missed!"]
    assert MoveUsed(Side.PLAYER, "Jab", False, 0) in result.events
    assert result.state.turn_owner is Side.FOE


def test_accuracy_100_never_misses(resolver, config, state):
    from bestmen_engine.core import DiceRoller
    real = TurnResolver(config, DiceRoller(seed=99))
    move = state.player.moves[0]
    assert all(real.executor.check_hit(move) for _ in range(10_000))


def test_accuracy_0_always_misses(config, state):
    from bestmen_engine.core import DiceRoller
    real = TurnResolver(config, DiceRoller(seed=99))
    move = state.player.moves[1]
    assert not any(real.executor.check_hit(move) for _ in range(10_000))


def test_no_op_move_skips_accuracy_roll(resolver, rigged_roller, state):
    result = resolver.resolve(state, UseMove(2))

    assert result.log == ["Hero used Shrug!"]
    assert rigged_roller.rolled == []
    assert result.state.turn_owner is Side.FOE


def test_foe_picks_random_move(resolver, rigged_roller, state):
    rigged_roller.choices = [1]
    state.turn_owner = Side.FOE

    result = resolver.resolve(state, FoeTurn())

    assert result.state.player.hp == 75
    assert result.log[:2] == ["Uncle used Bouquet Slam for 25 damage!", "It's ridiculously overkill!"]
    assert result.state.turn_owner is Side.PLAYER


def test_foe_weak_move_flavor(resolver, state):
    state.turn_owner = Side.FOE
    result = resolver.resolve(state, FoeTurn())
    assert result.log[1] == "It's vaguely annoying."


@pytest.mark.parametrize("action,owner", [
    (UseMove(0), Side.FOE),
    (FoeTurn(), Side.PLAYER),
    (UseMove(3), Side.PLAYER),
    (UseMove(-1), Side.PLAYER),
])
def test_rejected_actions(resolver, state, action, owner):
    state.turn_owner = owner
    result = resolver.resolve(state, action)

    assert not result.accepted
    assert result.state is state
    assert result.log == []


def test_terminal_state_is_absorbing(resolver, state):
    state.terminal = Outcome.WIN
    assert not resolver.resolve(state, UseMove(0)).accepted
    state.turn_owner = Side.FOE
    assert not resolver.resolve(state, FoeTurn()).accepted


def test_knockout_ends_encounter(resolver, state):
    state.foe.hp = 15

    result = resolver.resolve(state, UseMove(0))

    assert result.state.terminal is Outcome.WIN
    assert result.state.foe.hp == 0
    assert result.log[-2:] == ["Hero is victorious!", "Foe is now emotionally unstable."]
    assert result.events[-1] == EncounterEnded(Outcome.WIN)


def test_knockout_skips_status_ticks(resolver, state):
    state.foe.hp = 15
    state.player.set_status(StatusKind.BLEED, 2)

    result = resolver.resolve(state, UseMove(0))

    assert result.state.player.hp == 100
    assert result.state.player.status(StatusKind.BLEED) == 2


def test_player_knocked_out(resolver, state):
    state.turn_owner = Side.FOE
    state.player.hp = 5

    result = resolver.resolve(state, FoeTurn())

    assert result.state.terminal is Outcome.LOSE
    assert result.log[-2:] == ["You fainted...", "And dropped your dignity."]


def test_lethal_bleed_without_direct_hit(resolver, rigged_roller, state):
    state.foe.hp = 4
    state.foe.set_status(StatusKind.BLEED, 1)
    rigged_roller.queue(101)

    result = resolver.resolve(state, UseMove(0))

    assert result.state.foe.hp == 0
    assert result.state.terminal is Outcome.WIN
    assert "Uncle bleeds for 4 damage! (0 turns left)" in result.log


def test_lethal_bleed_on_player_during_foe_turn(resolver, rigged_roller, state):
    state.turn_owner = Side.FOE
    state.player.hp = 4
    state.player.set_status(StatusKind.BLEED, 1)
    rigged_roller.queue(101)

    result = resolver.resolve(state, FoeTurn())

    assert result.state.player.hp == 0
    assert result.state.terminal is Outcome.LOSE


def test_simultaneous_knockout_goes_to_acting_side(resolver, move_factory, state):
    state.player.moves = [move_factory("Tap", 3), move_factory("Tap Again", 3)]
    state.player.hp = 3
    state.player.set_status(StatusKind.BLEED, 1)
    state.foe.hp = 8
    state.foe.set_status(StatusKind.BLEED, 1)

    result = resolver.resolve(state, UseMove(0))

    assert result.state.player.hp == 0
    assert result.state.foe.hp == 0
    assert result.state.terminal is Outcome.WIN


def test_confusion_self_hit_scenario(resolver, rigged_roller, state):
    state.player.hp = 50
    state.player.max_hp = 50
    state.player.set_status(StatusKind.CONFUSE, 2)
    rigged_roller.queue(10)

    result = resolver.resolve(state, UseMove(0))

    assert result.state.player.hp == 45
    assert result.state.foe.hp == 100
    assert result.log[0] == "Hero is confused! It hurt itself for 5 damage!"
    assert TurnBlocked(Side.PLAYER, Gate.SELF_HIT, 5) in result.events
    assert not any(isinstance(e, MoveUsed) for e in result.events)
    assert result.state.turn_owner is Side.FOE


def test_confusion_self_knockout_loses(resolver, rigged_roller, state):
    state.player.hp = 5
    state.player.set_status(StatusKind.CONFUSE, 2)
    rigged_roller.queue(10)

    result = resolver.resolve(state, UseMove(0))

    assert result.state.player.hp == 0
    assert result.state.terminal is Outcome.LOSE


def test_sleeping_actor_loses_turn(resolver, state):
    state.player.set_status(StatusKind.SLEEP, 1)

    result = resolver.resolve(state, UseMove(0))

    assert result.log[0] == "Hero is fast asleep."
    assert result.state.foe.hp == 100
    assert not result.state.player.has_status(StatusKind.SLEEP)
    assert result.state.turn_owner is Side.FOE


def test_flinch_costs_the_owner_one_turn(resolver, move_factory, state):
    state.player.moves = [move_factory("Sup?", 5, effect={"chanceSkip": 100}), move_factory("Jab", 20)]

    after_player = resolver.resolve(state, UseMove(0)).state
    assert after_player.foe.has_status(StatusKind.SKIP)

    after_foe = resolver.resolve(after_player, FoeTurn())
    assert after_foe.log[0] == "Uncle flinched and lost the turn!"
    assert after_foe.state.player.hp == 100
    assert not after_foe.state.foe.has_status(StatusKind.SKIP)


def test_effects_apply_on_hit(resolver, move_factory, state):
    state.player.moves = [
        move_factory("Paws of Justice", 15, effect={"reduceDefPct": 10, "durationTurns": 2}),
        move_factory("Jab", 20),
    ]

    result = resolver.resolve(state, UseMove(0))

    assert result.state.foe.hp == 85
    assert result.state.foe.defense_multiplier == pytest.approx(0.9)
    assert "Uncle's defense fell by 10%!" in result.log
    # Non-acting tick already took one turn off.
    assert result.state.foe.status(StatusKind.DEF_DEBUFF) == 1
