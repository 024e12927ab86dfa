import json

import pytest
from bestmen_engine.resources import Database, DataValidationError
from bestmen.catalog import DEFAULT_DATA_PATH


@pytest.fixture
def data_dir(tmp_path):
    """Minimal data tree using the bundled schemas."""
    schemas = tmp_path / "schemas"
    schemas.mkdir()
    for schema_file in (DEFAULT_DATA_PATH / "schemas").glob("*.schema.json"):
        (schemas / schema_file.name).write_text(schema_file.read_text(encoding="utf-8"), encoding="utf-8")
    (tmp_path / "database" / "foes").mkdir(parents=True)
    return tmp_path


def write_foe(data_dir, name, record):
    path = data_dir / "database" / "foes" / name
    path.write_text(json.dumps(record), encoding="utf-8")
    return path


FOE = {
    "id": "usher",
    "displayName": "Usher",
    "hp": 40,
    "moves": [{"name": "Shush", "power": 5}, {"name": "Point", "power": 0, "effect": {"chanceSkip": 50}}],
}


def test_load_bundled_content():
    db = Database(DEFAULT_DATA_PATH)
    db.load_all()

    assert set(db.characters) == {"travioli", "badger", "enfant", "boet"}
    assert {"angry_bridesmaid", "priest", "drunk_uncle", "bridezilla"} <= set(db.foes)
    assert set(db.dialogues) == {"priest", "drunk_uncle", "angry_bridesmaid"}
    assert db.get_foe("bridezilla")["hp"] == 200
    assert db.get_character("nobody") is None


def test_load_single_and_list_files(data_dir):
    write_foe(data_dir, "one.json", FOE)
    write_foe(data_dir, "many.json", [dict(FOE, id="usher_2"), dict(FOE, id="usher_3")])

    db = Database(data_dir)
    db.load_all()

    assert set(db.foes) == {"usher", "usher_2", "usher_3"}
    # Missing categories are tolerated.
    assert db.characters == {}


def test_schema_violation_raises(data_dir):
    path = write_foe(data_dir, "bad.json", dict(FOE, hp=0))

    with pytest.raises(DataValidationError) as exc:
        Database(data_dir).load_all()
    assert exc.value.path == path


def test_too_few_moves_raises(data_dir):
    write_foe(data_dir, "bad.json", dict(FOE, moves=FOE["moves"][:1]))
    with pytest.raises(DataValidationError):
        Database(data_dir).load_all()


def test_duplicate_id_raises(data_dir):
    write_foe(data_dir, "a.json", FOE)
    write_foe(data_dir, "b.json", FOE)
    with pytest.raises(DataValidationError, match="duplicate"):
        Database(data_dir).load_all()


def test_broken_json_raises(data_dir):
    (data_dir / "database" / "foes" / "broken.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(DataValidationError):
        Database(data_dir).load_all()


def test_missing_schema_dir_raises(tmp_path):
    with pytest.raises(DataValidationError, match="schema directory"):
        Database(tmp_path).load_all()
