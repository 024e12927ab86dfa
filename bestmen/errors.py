"""
Error taxonomy for the battle and dialogue core.

Configuration problems fail fast while content is loaded or an
encounter is built. Selection mistakes from the presentation layer are
logged and ignored, so they have no exception type here.
"""

from bestmen_engine.resources import DataValidationError


class BestMenError(Exception):
    """Base class for errors raised by the game core."""


class CatalogError(BestMenError):
    """Malformed or missing static content (moves, effects, foes, dialogue)."""


class EncounterError(BestMenError):
    """An encounter cannot be constructed from the given inputs."""


__all__ = [
    "BestMenError",
    "CatalogError",
    "EncounterError",
    "DataValidationError",
]
