import json
from pathlib import Path

import pytest

from mythlings.data.errors import DataLoadError, DataReferenceError, DataValidationError
from mythlings.data.repositories import AbilitiesRepository, FloorsRepository, MythlingsRepository


def test_abilities_repo_loads_catalog(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_abilities(definitions_dir)
    repo = AbilitiesRepository(base_path=definitions_dir)

    abilities = repo.all()

    assert [ability.id for ability in abilities] == ["fireball", "healing_rain"]
    fireball = repo.get("fireball")
    assert (fireball.name, fireball.damage, fireball.cooldown) == ("Fireball", 25, 2)
    assert repo.get("healing_rain").description == ""
    assert "fireball" in repo
    assert "inferno" not in repo


def test_abilities_repo_get_missing_raises(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_abilities(definitions_dir)
    repo = AbilitiesRepository(base_path=definitions_dir)

    with pytest.raises(KeyError):
        repo.get("missing_ability")


def test_missing_file_raises_load_error(tmp_path: Path) -> None:
    repo = AbilitiesRepository(base_path=_make_definitions_dir(tmp_path))

    with pytest.raises(DataLoadError) as excinfo:
        repo.all()
    assert excinfo.value.source == "abilities.json"


def test_invalid_json_raises_load_error(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    (definitions_dir / "abilities.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(DataLoadError):
        AbilitiesRepository(base_path=definitions_dir).all()


def test_top_level_must_be_object(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    (definitions_dir / "abilities.json").write_text("[]", encoding="utf-8")

    with pytest.raises(DataValidationError):
        AbilitiesRepository(base_path=definitions_dir).all()


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Bad", "damage": -1, "cooldown": 0, "icon": ""},
        {"name": "Bad", "damage": 5, "cooldown": True, "icon": ""},
        {"name": "", "damage": 5, "cooldown": 0, "icon": ""},
        {"name": "Bad", "damage": 5, "icon": ""},
    ],
)
def test_ability_validation_rejects_bad_fields(tmp_path: Path, payload: dict) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "abilities.json", {"bad": payload})

    with pytest.raises(DataValidationError):
        AbilitiesRepository(base_path=definitions_dir).all()


def test_mythlings_repo_resolves_abilities(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_abilities(definitions_dir)
    _write_mythlings(definitions_dir)
    repo = MythlingsRepository(base_path=definitions_dir)

    ignis = repo.get("ignis")

    assert ignis.affinity == "fire"
    assert ignis.rarity == "rare"
    assert [ability.id for ability in ignis.abilities] == ["fireball"]
    assert repo.find_by_affinity("fire").id == "ignis"
    assert repo.find_by_affinity("earth") is None


def test_mythlings_repo_rejects_unknown_ability(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_abilities(definitions_dir)
    _write_json(
        definitions_dir / "mythlings.json",
        {"ignis": _mythling("Ignis", "fire", ["fireball", "meteor"])},
    )

    with pytest.raises(DataReferenceError):
        MythlingsRepository(base_path=definitions_dir).all()


def test_mythlings_repo_rejects_unknown_type(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_abilities(definitions_dir)
    _write_json(definitions_dir / "mythlings.json", {"zephyr": _mythling("Zephyr", "air", ["fireball"])})

    with pytest.raises(DataValidationError):
        MythlingsRepository(base_path=definitions_dir).all()


def test_floors_repo_loads_monsters_and_rewards(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_abilities(definitions_dir)
    _write_mythlings(definitions_dir)
    _write_json(
        definitions_dir / "floors.json",
        {
            "2": {
                "difficulty": 2,
                "monsters": [{"mythling_id": "aqua", "quantity": 2, "position": 1}],
                "rewards": [{"reward_type": "gems", "quantity": 3}],
            },
            "1": {
                "difficulty": 1,
                "monsters": [{"mythling_id": "ignis"}],
            },
        },
    )
    repo = FloorsRepository(base_path=definitions_dir)

    floors = repo.all()

    assert [floor.floor_number for floor in floors] == [1, 2]
    first = repo.get_floor(1)
    assert first.monsters[0].quantity == 1
    assert first.monsters[0].position == 0
    assert first.rewards == ()
    second = repo.get_floor(2)
    assert second.monsters[0].mythling.name == "Aqua"
    assert second.rewards[0].reward_type == "gems"
    assert second.rewards[0].reward_id is None
    with pytest.raises(KeyError):
        repo.get_floor(3)


def test_floors_repo_rejects_unknown_mythling(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_abilities(definitions_dir)
    _write_mythlings(definitions_dir)
    _write_json(
        definitions_dir / "floors.json",
        {"1": {"difficulty": 1, "monsters": [{"mythling_id": "ghost"}]}},
    )

    with pytest.raises(DataReferenceError):
        FloorsRepository(base_path=definitions_dir).all()


@pytest.mark.parametrize(
    "floors",
    [
        {"first": {"difficulty": 1, "monsters": []}},
        {"0": {"difficulty": 1, "monsters": []}},
        {"1": {"difficulty": 0, "monsters": []}},
        {"1": {"difficulty": 1, "monsters": [], "rewards": [{"reward_type": "xp", "quantity": 1}]}},
        {"1": {"difficulty": 1}},
    ],
)
def test_floors_repo_validates_shape(tmp_path: Path, floors: dict) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_abilities(definitions_dir)
    _write_mythlings(definitions_dir)
    _write_json(definitions_dir / "floors.json", floors)

    with pytest.raises(DataValidationError):
        FloorsRepository(base_path=definitions_dir).all()


def _mythling(name: str, affinity: str, ability_ids: list) -> dict:
    return {
        "name": name,
        "type": affinity,
        "icon": "",
        "base_power": 100,
        "base_health": 90,
        "rarity": "rare",
        "ability_ids": ability_ids,
    }


def _write_abilities(definitions_dir: Path) -> None:
    _write_json(
        definitions_dir / "abilities.json",
        {
            "fireball": {"name": "Fireball", "damage": 25, "cooldown": 2, "icon": "🔥"},
            "healing_rain": {"name": "Healing Rain", "damage": 0, "cooldown": 4, "icon": "🌧️"},
        },
    )


def _write_mythlings(definitions_dir: Path) -> None:
    _write_json(
        definitions_dir / "mythlings.json",
        {
            "ignis": _mythling("Ignis", "fire", ["fireball"]),
            "aqua": _mythling("Aqua", "water", ["healing_rain"]),
        },
    )


def _write_json(path: Path, data: dict) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _make_definitions_dir(tmp_path: Path) -> Path:
    definitions_dir = tmp_path / "definitions"
    definitions_dir.mkdir()
    return definitions_dir
