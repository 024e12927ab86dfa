"""
Dice rolling.

Every random decision in a fight goes through a DiceRoller so that
tests can swap in predetermined rolls.
"""

from __future__ import annotations

import logging
import random
from typing import Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class DiceRoller:
    """
    Percentile and selection rolls backed by a private random.Random.

    Example:
        >>> dice = DiceRoller(seed=7)
        >>> 1 <= dice.roll_percent() <= 100
        True
    """

    def __init__(self, seed: int | None = None):
        self._seed = seed
        self._rng = random.Random(seed)
        logger.debug("DiceRoller initialized (seed=%s)", seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def roll_percent(self) -> int:
        """Uniform integer in [1, 100]."""
        return self._rng.randint(1, 100)

    def succeeds(self, chance: int) -> bool:
        """Roll against a percent chance; a roll at or under it succeeds."""
        return self.roll_percent() <= chance

    def choose_index(self, count: int) -> int:
        """Uniform index in [0, count)."""
        if count <= 0:
            raise ValueError("cannot choose from an empty sequence")
        return self._rng.randrange(count)

    def choose(self, options: Sequence[T]) -> T:
        """Uniform pick from a non-empty sequence."""
        return options[self.choose_index(len(options))]
