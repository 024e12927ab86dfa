import pytest

from bestmen_engine.core import DiceRoller, EventBus, GameConfig


class RiggedDice(DiceRoller):
    """
    DiceRoller that plays back scripted results.

    Percent rolls and choices come from separate queues. Once a queue
    runs dry it falls back to the fallback value (a roll of 1 always
    succeeds, index 0 is the first option).
    """

    def __init__(self, rolls=(), choices=(), fallback_roll=1):
        super().__init__(seed=0)
        self.rolls = list(rolls)
        self.choices = list(choices)
        self.fallback_roll = fallback_roll
        self.rolled = []

    def queue(self, *rolls):
        self.rolls.extend(rolls)
        return self

    def roll_percent(self):
        value = self.rolls.pop(0) if self.rolls else self.fallback_roll
        self.rolled.append(value)
        return value

    def choose_index(self, count):
        if count <= 0:
            raise ValueError("cannot choose from an empty sequence")
        if self.choices:
            return self.choices.pop(0) % count
        return 0


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    return EventBus()


@pytest.fixture
def config():
    return GameConfig(seed=1234)


@pytest.fixture
def rigged_roller():
    """Scripted dice; queue rolls with rigged_roller.queue(...)."""
    return RiggedDice()


@pytest.fixture(scope="session")
def catalog():
    """Bundled game content."""
    from bestmen.catalog import Catalog
    return Catalog.load()


def make_move(name="Poke", power=10, accuracy=100, effect=None, move_type="physical"):
    from bestmen.catalog import parse_effect
    from bestmen.components import Move, MoveType
    return Move(
        name=name,
        power=power,
        accuracy=accuracy,
        move_type=MoveType(move_type),
        effect=parse_effect(effect),
    )


def make_combatant(name="Tester", hp=None, max_hp=100, moves=None, **kwargs):
    from bestmen.components import Combatant
    if moves is None:
        moves = [make_move("Poke", 10), make_move("Shove", 20)]
    return Combatant(
        id=name.lower().replace(" ", "_"),
        display_name=name,
        max_hp=max_hp,
        hp=max_hp if hp is None else hp,
        moves=moves,
        **kwargs,
    )


@pytest.fixture
def combatant_factory():
    return make_combatant


@pytest.fixture
def move_factory():
    return make_move
