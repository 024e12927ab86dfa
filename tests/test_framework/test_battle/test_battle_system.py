import pytest

from bestmen.battle import BattleEvent, BattleSystem, Outcome, Side
from bestmen.errors import CatalogError, EncounterError


@pytest.fixture
def battle(catalog, event_bus, config, rigged_roller):
    return BattleSystem(catalog, event_bus, config, rigged_roller)


@pytest.fixture
def hero(combatant_factory, move_factory):
    return combatant_factory("Hero", moves=[move_factory("Haymaker", 40), move_factory("Jab", 10)])


def test_unknown_foe_fails_fast(battle, hero):
    with pytest.raises(CatalogError):
        battle.request_encounter(hero, "wedding_planner")


def test_start(battle, event_bus, hero):
    started = []
    event_bus.subscribe(BattleEvent.ENCOUNTER_STARTED, started.append)

    state = battle.start(battle.request_encounter(hero, "angry_bridesmaid", "bridesmaid_npc"))

    assert state.foe.display_name == "Angry Bridesmaid"
    assert state.foe.hp == 80
    assert state.turn_owner is Side.PLAYER
    assert battle.log == ["Angry Bridesmaid wants to fight!", "What will you do?"]
    assert battle.is_active and battle.in_progress and battle.awaiting_player
    assert started[0]["foe"] == "angry_bridesmaid"
    assert started[0]["source_ref"] == "bridesmaid_npc"


def test_cannot_start_twice(battle, hero):
    battle.start(battle.request_encounter(hero, "priest"))
    with pytest.raises(EncounterError):
        battle.start(battle.request_encounter(hero, "priest"))


def test_fainted_player_cannot_fight(battle, combatant_factory):
    with pytest.raises(EncounterError):
        battle.start(battle.request_encounter(combatant_factory(hp=0), "priest"))
    assert not battle.is_active


def test_player_is_copied(battle, hero):
    battle.start(battle.request_encounter(hero, "angry_bridesmaid"))
    battle.choose_move(0)
    battle.advance()

    assert battle.state.player.hp == 90
    assert hero.hp == 100


def test_input_outside_player_turn_is_ignored(battle, hero):
    assert battle.choose_move(0) is None

    battle.start(battle.request_encounter(hero, "angry_bridesmaid"))
    battle.choose_move(0)

    assert battle.awaiting_foe
    assert battle.choose_move(0) is None
    assert battle.choose_move(9) is None


def test_foe_reply_is_paced(battle, config, hero):
    battle.start(battle.request_encounter(hero, "angry_bridesmaid"))
    assert battle.update(5.0) is None

    battle.choose_move(0)
    assert battle.update(1.0) is None
    assert battle.awaiting_foe

    result = battle.update(config.foe_reply_delay)
    assert result is not None
    assert battle.awaiting_player


def test_win_grants_rewards(battle, event_bus, hero):
    reports = []
    ended = []
    battle.on_battle_end(reports.append)
    event_bus.subscribe(BattleEvent.ENCOUNTER_ENDED, ended.append)

    battle.start(battle.request_encounter(hero, "angry_bridesmaid", "bridesmaid_npc"))
    battle.choose_move(0)
    battle.advance()
    battle.choose_move(0)

    assert battle.state.terminal is Outcome.WIN
    assert not battle.in_progress
    assert battle.is_active
    assert battle.log[-2:] == ["Hero is victorious!", "Foe is now emotionally unstable."]

    (report,) = reports
    assert report.outcome is Outcome.WIN
    assert report.final_player_hp == 90
    assert report.rewards_granted == ["something_blue"]
    assert report.source_ref == "bridesmaid_npc"
    assert ended[0]["report"] is report


def test_loss_grants_nothing(battle, rigged_roller, combatant_factory):
    reports = []
    battle.on_battle_end(reports.append)

    battle.start(battle.request_encounter(combatant_factory("Hero", hp=10), "angry_bridesmaid"))
    rigged_roller.queue(101)
    battle.choose_move(0)
    battle.advance()

    (report,) = reports
    assert report.outcome is Outcome.LOSE
    assert report.final_player_hp == 0
    assert report.rewards_granted == []


def test_finished_fight_ignores_input(battle, hero):
    battle.start(battle.request_encounter(hero, "angry_bridesmaid"))
    battle.choose_move(0)
    battle.advance()
    battle.choose_move(0)

    assert battle.choose_move(0) is None
    assert battle.advance() is None


def test_end_battle(battle, hero):
    battle.start(battle.request_encounter(hero, "priest"))
    battle.end_battle()

    assert not battle.is_active
    assert battle.state is None
    battle.start(battle.request_encounter(hero, "priest"))
