from __future__ import annotations

from mythlings.data.errors import DataLoadError
from mythlings.domain.affinities import get_affinity_defaults
from mythlings.services.factories import (
    DEFAULT_OPPONENT_ICON,
    build_opponent_team,
    build_player_team,
    create_player_combatant,
    generate_opponent_team,
    opponent_team_from_encounter,
)
from mythlings.services.providers import (
    AffinityDefinition,
    Encounter,
    EncounterOpponent,
    StaticCatalogProvider,
)
from tests.helpers.battle_builders import ScriptedRandom, make_ability


class _BrokenCatalog:
    def get_affinity_definition(self, affinity: str):
        raise DataLoadError("catalog offline")


class _MissingCatalog:
    def get_affinity_definition(self, affinity: str):
        raise KeyError(affinity)


class _UnreachableCatalog:
    def get_affinity_definition(self, affinity: str):
        raise ConnectionError("content service unreachable")


def _randint_calls(rng: ScriptedRandom) -> list:
    return [call for call in rng.calls if call[0] == "randint"]


def test_player_team_without_catalog_uses_affinity_defaults() -> None:
    rng = ScriptedRandom(ints=[3, 7])

    team = build_player_team(["fire", "water"], None, rng)

    fire, water = team.combatants
    assert (fire.id, water.id) == ("player-0", "player-1")
    assert (fire.name, water.name) == ("Fire", "Water")
    assert (fire.power, water.power) == (18, 22)
    assert fire.max_health == fire.current_health == 100
    assert fire.abilities == get_affinity_defaults("fire").abilities
    assert water.icon == "💧"
    assert all(member.side == "player" for member in team)
    assert team.total_power == 40


def test_catalog_definition_is_used_without_random_draws() -> None:
    catalog = StaticCatalogProvider(
        {
            "earth": AffinityDefinition(
                name="Terra",
                power=110,
                health=95,
                icon="🌍",
                abilities=(make_ability("rock_throw", damage=20, cooldown=1),),
            )
        }
    )
    rng = ScriptedRandom()

    team = build_player_team(["earth"], catalog, rng)

    terra = team.combatants[0]
    assert (terra.name, terra.power, terra.max_health) == ("Terra", 110, 95)
    assert [ability.id for ability in terra.abilities] == ["rock_throw"]
    assert _randint_calls(rng) == []


def test_incomplete_definition_falls_back_field_by_field() -> None:
    definition = AffinityDefinition(name="  ", power=0, health=0, icon="", abilities=())
    rng = ScriptedRandom(ints=[9])

    combatant = create_player_combatant(2, "water", definition, rng)

    defaults = get_affinity_defaults("water")
    assert combatant.id == "player-2"
    assert combatant.name == "Water"
    assert combatant.icon == defaults.icon
    assert combatant.power == 24
    assert combatant.max_health == 100
    assert combatant.abilities == defaults.abilities


def test_unknown_affinity_becomes_fire() -> None:
    team = build_player_team(["plasma"], None, ScriptedRandom())

    member = team.combatants[0]
    assert member.affinity == "fire"
    assert member.name == "Fire"


def test_catalog_failures_fall_back_to_defaults() -> None:
    for catalog in (_BrokenCatalog(), _MissingCatalog(), _UnreachableCatalog()):
        team = build_player_team(["earth"], catalog, ScriptedRandom(ints=[0]))
        member = team.combatants[0]
        assert member.name == "Earth"
        assert member.power == 15


def test_empty_selection_builds_empty_team() -> None:
    team = build_player_team([], None, ScriptedRandom())

    assert len(team) == 0
    assert team.total_power == 0


def test_generated_opponents_follow_difficulty_formulas() -> None:
    rng = ScriptedRandom(choices=[1, 2], ints=[4, 0])

    team = generate_opponent_team(1, rng)

    first, second = team.combatants
    assert (first.affinity, second.affinity) == ("water", "earth")
    assert (first.name, second.name) == ("Enemy Water", "Enemy Earth")
    assert (first.power, second.power) == (19, 15)
    assert first.max_health == second.max_health == 120
    assert (first.id, second.id) == ("opponent-0", "opponent-1")
    assert second.abilities == get_affinity_defaults("earth").abilities
    assert all(member.side == "opponent" for member in team)


def test_generated_team_size_grows_and_caps() -> None:
    assert len(generate_opponent_team(0, ScriptedRandom())) == 2
    assert len(generate_opponent_team(2, ScriptedRandom())) == 3
    assert len(generate_opponent_team(4, ScriptedRandom())) == 4
    assert len(generate_opponent_team(30, ScriptedRandom())) == 4


def test_generated_opponents_clamp_difficulty_to_one() -> None:
    team = generate_opponent_team(-3, ScriptedRandom())

    assert all(member.max_health == 120 for member in team)
    assert all(member.power == 15 for member in team)


def test_encounter_roster_orders_by_position_and_expands_quantity() -> None:
    golem = EncounterOpponent(
        name="Golem",
        affinity="earth",
        icon="🗿",
        base_power=50,
        base_health=70,
        abilities=(make_ability("pebble_toss", damage=8),),
        quantity=2,
        position=0,
    )
    imp = EncounterOpponent(
        name="Imp",
        affinity="fire",
        icon="",
        base_power=40,
        base_health=60,
        abilities=(make_ability("ember_bite", damage=12),),
        position=1,
    )
    encounter = Encounter(level_number=2, difficulty=2, opponents=(imp, golem))

    team = opponent_team_from_encounter(encounter, ScriptedRandom())

    assert [member.name for member in team] == ["Golem", "Golem", "Imp"]
    assert [member.id for member in team] == ["opponent-0", "opponent-1", "opponent-2"]
    assert [member.max_health for member in team] == [84, 84, 72]
    assert [member.power for member in team] == [60, 60, 48]
    assert team.combatants[2].icon == DEFAULT_OPPONENT_ICON
    assert team.total_power == 168


def test_encounter_slot_without_kit_uses_catalog_then_defaults() -> None:
    bare = EncounterOpponent(name="Blob", affinity="water", icon="", base_power=10, base_health=30, abilities=())
    encounter = Encounter(level_number=1, difficulty=1, opponents=(bare,))
    catalog = StaticCatalogProvider(
        {"water": AffinityDefinition("Aqua", 115, 90, "💧", (make_ability("water_jet", damage=20, cooldown=2),))}
    )

    from_catalog = opponent_team_from_encounter(encounter, ScriptedRandom(), catalog)
    from_defaults = opponent_team_from_encounter(encounter, ScriptedRandom())

    assert [ability.id for ability in from_catalog.combatants[0].abilities] == ["water_jet"]
    assert from_defaults.combatants[0].abilities == get_affinity_defaults("water").abilities


def test_empty_encounter_generates_procedural_roster() -> None:
    encounter = Encounter(level_number=5, difficulty=3, opponents=())

    team = opponent_team_from_encounter(encounter, ScriptedRandom())

    assert len(team) == 3
    assert all(member.max_health == 160 for member in team)


def test_build_opponent_team_dispatches_on_encounter_type() -> None:
    encounter = Encounter(
        level_number=1,
        difficulty=1,
        opponents=(EncounterOpponent("Imp", "fire", "👺", 40, 60, (make_ability("bite"),)),),
    )

    assert [member.name for member in build_opponent_team(encounter, ScriptedRandom())] == ["Imp"]
    assert len(build_opponent_team(1, ScriptedRandom())) == 2


def test_encounter_kit_lookup_survives_unreachable_catalog() -> None:
    bare = EncounterOpponent(name="Blob", affinity="earth", icon="", base_power=10, base_health=30, abilities=())
    encounter = Encounter(level_number=1, difficulty=1, opponents=(bare,))

    team = opponent_team_from_encounter(encounter, ScriptedRandom(), _UnreachableCatalog())

    assert team.combatants[0].abilities == get_affinity_defaults("earth").abilities
