"""
Catalog - typed static content passed explicitly into the engines.

Content is loaded through the schema-validated Database and converted
into CombatantProfiles and DialogueTrees. Effect records keep the
camelCase field names used by the content files and are turned into
ordered lists of tagged effect parts here.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from pydantic import ValidationError

from bestmen_engine.resources import Database, DataValidationError
from bestmen.components import (
    AtkBoost,
    AtkDebuff,
    Bleed,
    Confuse,
    DefBoost,
    DefDebuff,
    DialogueTree,
    Effect,
    Heal,
    Move,
    MoveType,
    Skip,
    Sleep,
    Stun,
    Surrender,
)
from bestmen.battle.actor import CombatantProfile
from bestmen.dialog.parser import parse_dialogue
from bestmen.errors import CatalogError

logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = Path(__file__).parent / "data"

DURATION_FIELD = "durationTurns"


def _int_value(field: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise CatalogError(f"effect field {field!r} must be an integer, got {value!r}")
    return value


def _chance(cls: type) -> Callable[[str, Any, Optional[int]], Any]:
    def build(field: str, value: Any, duration: Optional[int]) -> Any:
        return cls(chance=_int_value(field, value), duration=duration)
    return build


def _flag_or_duration(cls: type) -> Callable[[str, Any, Optional[int]], Any]:
    def build(field: str, value: Any, duration: Optional[int]) -> Any:
        if value is True:
            return cls(duration=duration)
        if value is False:
            return None
        return cls(duration=_int_value(field, value))
    return build


def _modifier(cls: type) -> Callable[[str, Any, Optional[int]], Any]:
    def build(field: str, value: Any, duration: Optional[int]) -> Any:
        return cls(percent=_int_value(field, value), duration=duration)
    return build


# Declaration order is application and narration order.
_EFFECT_FIELDS: dict[str, Callable[[str, Any, Optional[int]], Any]] = {
    "heal": lambda field, value, duration: Heal(amount=_int_value(field, value)),
    "chanceConfuse": _chance(Confuse),
    "chanceSkip": lambda field, value, duration: Skip(chance=_int_value(field, value)),
    "chanceMissNext": lambda field, value, duration: Skip(chance=_int_value(field, value)),
    "sleep": _flag_or_duration(Sleep),
    "stun": _flag_or_duration(Stun),
    "chanceStun": _chance(Stun),
    "bleed": _flag_or_duration(Bleed),
    "atkBoost": _modifier(AtkBoost),
    "defBoost": _modifier(DefBoost),
    "atkDebuff": _modifier(AtkDebuff),
    "slowAttackPct": _modifier(AtkDebuff),
    "defDebuff": _modifier(DefDebuff),
    "reduceDefPct": _modifier(DefDebuff),
    "surrender": lambda field, value, duration: Surrender() if value else None,
}


def parse_effect(record: Optional[Mapping[str, Any]]) -> Optional[Effect]:
    """
    Convert an effect record into an Effect.

    Raises:
        CatalogError: Unknown field, wrong type or out-of-range value
    """
    if record is None:
        return None
    if not isinstance(record, Mapping):
        raise CatalogError(f"effect must be an object, got {record!r}")

    unknown = sorted(set(record) - set(_EFFECT_FIELDS) - {DURATION_FIELD})
    if unknown:
        raise CatalogError(f"unknown effect field(s): {', '.join(unknown)}")

    duration = record.get(DURATION_FIELD)
    if duration is not None and _int_value(DURATION_FIELD, duration) < 1:
        raise CatalogError(f"{DURATION_FIELD} must be at least 1, got {duration}")

    try:
        parts = [
            part
            for field, build in _EFFECT_FIELDS.items()
            if field in record
            for part in [build(field, record[field], duration)]
            if part is not None
        ]
        if not parts:
            raise CatalogError(f"effect {dict(record)!r} has no sub-effects")
        return Effect(parts=parts)
    except ValidationError as e:
        raise CatalogError(f"invalid effect {dict(record)!r}: {e}") from e


def parse_move(record: Mapping[str, Any]) -> Move:
    try:
        return Move(
            name=record["name"],
            power=record.get("power", 0),
            accuracy=record.get("accuracy", 100),
            move_type=MoveType(record.get("type", MoveType.PHYSICAL.value)),
            effect=parse_effect(record.get("effect")),
        )
    except (KeyError, ValueError) as e:
        raise CatalogError(f"invalid move {record.get('name', '?')!r}: {e}") from e


def parse_profile(record: Mapping[str, Any]) -> CombatantProfile:
    try:
        return CombatantProfile(
            id=record["id"],
            display_name=record["displayName"],
            max_hp=record["hp"],
            description=record.get("desc", ""),
            rewards=list(record.get("rewards", [])),
            moves=[parse_move(move) for move in record["moves"]],
        )
    except (KeyError, ValidationError) as e:
        raise CatalogError(f"invalid combatant {record.get('id', '?')!r}: {e}") from e


class Catalog:
    """
    Immutable lookup of characters, foes and dialogue trees.

    Missing ids raise CatalogError, so a broken reference surfaces
    when an encounter is built rather than in the middle of a turn.
    """

    def __init__(
        self,
        characters: Optional[Mapping[str, CombatantProfile]] = None,
        foes: Optional[Mapping[str, CombatantProfile]] = None,
        dialogues: Optional[Mapping[str, DialogueTree]] = None,
    ):
        self._characters = dict(characters or {})
        self._foes = dict(foes or {})
        self._dialogues = dict(dialogues or {})

    @classmethod
    def load(cls, data_path: Optional[Path | str] = None) -> Catalog:
        """Load content from a data directory (bundled content by default)."""
        database = Database(data_path or DEFAULT_DATA_PATH)
        try:
            database.load_all()
        except DataValidationError as e:
            raise CatalogError(str(e)) from e
        return cls.from_database(database)

    @classmethod
    def from_database(cls, database: Database) -> Catalog:
        catalog = cls(
            characters={key: parse_profile(rec) for key, rec in database.characters.items()},
            foes={key: parse_profile(rec) for key, rec in database.foes.items()},
            dialogues={key: parse_dialogue(rec) for key, rec in database.dialogues.items()},
        )
        logger.info(
            "Catalog ready: %d characters, %d foes, %d dialogues",
            len(catalog._characters),
            len(catalog._foes),
            len(catalog._dialogues),
        )
        return catalog

    def character(self, character_id: str) -> CombatantProfile:
        try:
            return self._characters[character_id]
        except KeyError:
            raise CatalogError(f"unknown character {character_id!r}") from None

    def foe(self, foe_id: str) -> CombatantProfile:
        try:
            return self._foes[foe_id]
        except KeyError:
            raise CatalogError(f"no foe profile {foe_id!r} in catalog") from None

    def dialogue(self, dialogue_id: str) -> DialogueTree:
        try:
            return self._dialogues[dialogue_id]
        except KeyError:
            raise CatalogError(f"unknown dialogue {dialogue_id!r}") from None

    def has_foe(self, foe_id: str) -> bool:
        return foe_id in self._foes

    @property
    def characters(self) -> Mapping[str, CombatantProfile]:
        return MappingProxyType(self._characters)

    @property
    def foes(self) -> Mapping[str, CombatantProfile]:
        return MappingProxyType(self._foes)

    @property
    def dialogues(self) -> Mapping[str, DialogueTree]:
        return MappingProxyType(self._dialogues)
