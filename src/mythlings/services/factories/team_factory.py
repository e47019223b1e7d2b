"""Factories that turn catalog content into battle-ready teams.

Team construction never fails: missing catalog entries, blank fields and empty
ability kits are all replaced by the affinity defaults.
"""
from __future__ import annotations

import logging
from typing import List, Sequence

from mythlings.core.rng import RandomSource
from mythlings.core.types import Affinity
from mythlings.domain.affinities import (
    AFFINITIES,
    DEFAULT_AFFINITY,
    get_affinity_defaults,
    is_affinity,
)
from mythlings.domain.battle_models import Combatant, Team
from mythlings.domain.roster_scaling import (
    PLAYER_FALLBACK_HEALTH,
    normalize_difficulty,
    procedural_health,
    procedural_team_size,
    roll_player_fallback_power,
    roll_procedural_power,
    scale_encounter_stats,
)
from mythlings.services.providers import AffinityDefinition, CatalogProvider, Encounter

logger = logging.getLogger(__name__)

DEFAULT_OPPONENT_ICON = "👾"


def _resolve_affinity(value: str) -> Affinity:
    if is_affinity(value):
        return value  # type: ignore[return-value]
    logger.warning("Unknown affinity '%s'; falling back to '%s'.", value, DEFAULT_AFFINITY)
    return DEFAULT_AFFINITY


def _lookup_definition(catalog: CatalogProvider | None, affinity: Affinity) -> AffinityDefinition | None:
    if catalog is None:
        return None
    try:
        definition = catalog.get_affinity_definition(affinity)
    except Exception as exc:
        # Any provider failure, remote or local, counts as not-found.
        logger.warning("Catalog lookup for '%s' failed: %s", affinity, exc)
        return None
    if definition is None:
        logger.warning("No catalog entry for affinity '%s'; using defaults.", affinity)
    return definition


def create_player_combatant(
    index: int,
    affinity: Affinity,
    definition: AffinityDefinition | None,
    rng: RandomSource,
) -> Combatant:
    """Build one player mythling, filling every missing field from the defaults."""
    defaults = get_affinity_defaults(affinity)
    if definition is not None and definition.power > 0:
        power = definition.power
    else:
        power = roll_player_fallback_power(rng)
    max_health = definition.health if definition is not None and definition.health > 0 else PLAYER_FALLBACK_HEALTH
    name = definition.name if definition is not None and definition.name.strip() else defaults.name
    icon = definition.icon if definition is not None and definition.icon else defaults.icon
    abilities = definition.abilities if definition is not None and definition.abilities else defaults.abilities
    return Combatant(
        id=f"player-{index}",
        name=name,
        affinity=affinity,
        icon=icon,
        power=power,
        max_health=max_health,
        current_health=max_health,
        abilities=tuple(abilities),
        side="player",
    )


def build_player_team(
    selected_affinities: Sequence[str],
    catalog: CatalogProvider | None,
    rng: RandomSource,
) -> Team:
    """Create the player's team, one combatant per selected affinity, in order."""
    members: List[Combatant] = []
    for index, raw_affinity in enumerate(selected_affinities):
        affinity = _resolve_affinity(raw_affinity)
        definition = _lookup_definition(catalog, affinity)
        members.append(create_player_combatant(index, affinity, definition, rng))
    return Team.from_combatants(members)


def generate_opponent_team(difficulty: int, rng: RandomSource) -> Team:
    """Procedurally generate 2-4 opponents whose stats scale with difficulty."""
    level = normalize_difficulty(difficulty)
    members: List[Combatant] = []
    for index in range(procedural_team_size(level)):
        affinity = rng.choice(AFFINITIES)
        defaults = get_affinity_defaults(affinity)
        power = roll_procedural_power(level, rng)
        max_health = procedural_health(level)
        members.append(
            Combatant(
                id=f"opponent-{index}",
                name=f"Enemy {defaults.name}",
                affinity=affinity,
                icon=defaults.icon,
                power=power,
                max_health=max_health,
                current_health=max_health,
                abilities=defaults.abilities,
                side="opponent",
            )
        )
    return Team.from_combatants(members)


def opponent_team_from_encounter(
    encounter: Encounter,
    rng: RandomSource,
    catalog: CatalogProvider | None = None,
) -> Team:
    """Materialize a fixed encounter roster with the floor's difficulty multiplier.

    Slots are ordered by position and expanded by quantity. An empty roster
    falls back to procedural generation at the encounter's difficulty.
    """
    if not encounter.opponents:
        logger.warning(
            "Encounter %s has no opponents; generating a roster at difficulty %s.",
            encounter.level_number,
            encounter.difficulty,
        )
        return generate_opponent_team(encounter.difficulty, rng)

    members: List[Combatant] = []
    for slot in sorted(encounter.opponents, key=lambda opponent: opponent.position):
        affinity = _resolve_affinity(slot.affinity)
        abilities = slot.abilities
        if not abilities:
            definition = _lookup_definition(catalog, affinity)
            if definition is not None and definition.abilities:
                abilities = definition.abilities
            else:
                abilities = get_affinity_defaults(affinity).abilities
        power, max_health = scale_encounter_stats(
            slot.base_power, slot.base_health, difficulty=encounter.difficulty
        )
        for _ in range(max(1, slot.quantity)):
            members.append(
                Combatant(
                    id=f"opponent-{len(members)}",
                    name=slot.name or f"Enemy {get_affinity_defaults(affinity).name}",
                    affinity=affinity,
                    icon=slot.icon or DEFAULT_OPPONENT_ICON,
                    power=power,
                    max_health=max_health,
                    current_health=max_health,
                    abilities=tuple(abilities),
                    side="opponent",
                )
            )
    return Team.from_combatants(members)


def build_opponent_team(
    encounter: int | Encounter,
    rng: RandomSource,
    catalog: CatalogProvider | None = None,
) -> Team:
    """Build the opponent team from a difficulty level or an encounter definition."""
    if isinstance(encounter, Encounter):
        return opponent_team_from_encounter(encounter, rng, catalog)
    return generate_opponent_team(encounter, rng)
