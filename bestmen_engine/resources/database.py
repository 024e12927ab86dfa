"""
Game Database.

Loads and validates static game data (characters, foes, dialogues).

Layout under the data path:

    schemas/<schema>.schema.json
    database/<category>/*.json

Each JSON file holds either one record or a list of records, and every
record must carry an "id". Records are validated against the category
schema with jsonschema. Broken content is a configuration error, so
anything that fails to load raises instead of being skipped.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema

logger = logging.getLogger(__name__)


class DataValidationError(Exception):
    """Static data is missing, unreadable or does not match its schema."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class Database:
    """
    Central storage for static game data.
    """

    CATEGORIES: dict[str, str] = {
        "characters": "combatant.schema.json",
        "foes": "combatant.schema.json",
        "dialogues": "dialogue.schema.json",
    }

    def __init__(self, data_path: Path | str):
        self._data_path = Path(data_path)
        self._schemas: dict[str, Any] = {}

        self.characters: dict[str, dict[str, Any]] = {}
        self.foes: dict[str, dict[str, Any]] = {}
        self.dialogues: dict[str, dict[str, Any]] = {}

    @property
    def data_path(self) -> Path:
        return self._data_path

    def load_all(self) -> None:
        """Load every category from disk."""
        self._load_schemas()

        for category, schema_name in self.CATEGORIES.items():
            setattr(self, category, self._load_category(category, schema_name))

        logger.info(
            "Loaded %d characters, %d foes, %d dialogues from %s",
            len(self.characters),
            len(self.foes),
            len(self.dialogues),
            self._data_path,
        )

    def _load_schemas(self) -> None:
        schema_dir = self._data_path / "schemas"
        if not schema_dir.is_dir():
            raise DataValidationError("schema directory not found", schema_dir)

        for schema_file in sorted(schema_dir.glob("*.schema.json")):
            self._schemas[schema_file.name] = self._read_json(schema_file)

    def _load_category(self, folder: str, schema_name: str) -> dict[str, dict[str, Any]]:
        category_dir = self._data_path / "database" / folder
        store: dict[str, dict[str, Any]] = {}

        if not category_dir.is_dir():
            logger.warning("Data directory not found: %s", category_dir)
            return store

        schema = self._schemas.get(schema_name)
        if schema is None:
            raise DataValidationError(f"no schema {schema_name} for category '{folder}'")

        for file_path in sorted(category_dir.glob("*.json")):
            data = self._read_json(file_path)
            records = data if isinstance(data, list) else [data]
            for record in records:
                try:
                    jsonschema.validate(instance=record, schema=schema)
                except jsonschema.ValidationError as e:
                    raise DataValidationError(e.message, file_path) from e
                if record["id"] in store:
                    raise DataValidationError(
                        f"duplicate {folder} id '{record['id']}'", file_path
                    )
                store[record["id"]] = record

        return store

    @staticmethod
    def _read_json(path: Path) -> Any:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DataValidationError(str(e), path) from e

    def get_character(self, character_id: str) -> dict[str, Any] | None:
        return self.characters.get(character_id)

    def get_foe(self, foe_id: str) -> dict[str, Any] | None:
        return self.foes.get(foe_id)
