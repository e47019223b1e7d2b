"""Content providers consumed by the battle engine.

The engine only needs two questions answered: "what does a mythling of this
affinity look like?" and "who guards floor N?". Both are modelled as small
protocols so the JSON repositories, an in-memory fixture or a remote content
API can sit behind them interchangeably.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Protocol, Tuple

from mythlings.core.types import Affinity, RewardType
from mythlings.data.errors import DataError
from mythlings.data.repositories import FloorsRepository, MythlingsRepository
from mythlings.domain.battle_models import Ability
from mythlings.domain.defs import AbilityDef, FloorDef, MythlingDef

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AffinityDefinition:
    """Base stats and kit for the player's mythling of one affinity."""

    name: str
    power: int
    health: int
    icon: str
    abilities: Tuple[Ability, ...]


@dataclass(frozen=True, slots=True)
class EncounterOpponent:
    """One roster slot of an encounter, before difficulty scaling."""

    name: str
    affinity: Affinity
    icon: str
    base_power: int
    base_health: int
    abilities: Tuple[Ability, ...]
    quantity: int = 1
    position: int = 0


@dataclass(frozen=True, slots=True)
class Reward:
    reward_type: RewardType
    quantity: int
    reward_id: str | None = None


@dataclass(frozen=True, slots=True)
class Encounter:
    """Opponent roster for a floor."""

    level_number: int
    difficulty: int
    opponents: Tuple[EncounterOpponent, ...]
    rewards: Tuple[Reward, ...] = ()


class CatalogProvider(Protocol):
    def get_affinity_definition(self, affinity: str) -> AffinityDefinition | None:
        ...


class EncounterProvider(Protocol):
    def get_encounter(self, level_number: int) -> Encounter | None:
        ...


def ability_from_def(ability_def: AbilityDef) -> Ability:
    return Ability(
        id=ability_def.id,
        name=ability_def.name,
        damage=ability_def.damage,
        cooldown=ability_def.cooldown,
        icon=ability_def.icon,
        description=ability_def.description,
    )


def affinity_definition_from_mythling(mythling: MythlingDef) -> AffinityDefinition:
    return AffinityDefinition(
        name=mythling.name,
        power=mythling.base_power,
        health=mythling.base_health,
        icon=mythling.icon,
        abilities=tuple(ability_from_def(ability) for ability in mythling.abilities),
    )


def encounter_from_floor(floor: FloorDef) -> Encounter:
    opponents = tuple(
        EncounterOpponent(
            name=monster.mythling.name,
            affinity=monster.mythling.affinity,
            icon=monster.mythling.icon,
            base_power=monster.mythling.base_power,
            base_health=monster.mythling.base_health,
            abilities=tuple(ability_from_def(ability) for ability in monster.mythling.abilities),
            quantity=monster.quantity,
            position=monster.position,
        )
        for monster in floor.monsters
    )
    rewards = tuple(
        Reward(reward_type=reward.reward_type, quantity=reward.quantity, reward_id=reward.reward_id)
        for reward in floor.rewards
    )
    return Encounter(
        level_number=floor.floor_number,
        difficulty=floor.difficulty,
        opponents=opponents,
        rewards=rewards,
    )


class RepositoryCatalogProvider:
    """Answers affinity lookups from the bundled mythling definitions."""

    def __init__(self, mythlings_repo: MythlingsRepository | None = None) -> None:
        self._mythlings_repo = mythlings_repo or MythlingsRepository()

    def get_affinity_definition(self, affinity: str) -> AffinityDefinition | None:
        try:
            mythling = self._mythlings_repo.find_by_affinity(affinity)  # type: ignore[arg-type]
        except DataError as exc:
            logger.warning("Catalog unavailable for affinity '%s': %s", affinity, exc)
            return None
        if mythling is None:
            return None
        return affinity_definition_from_mythling(mythling)


class RepositoryEncounterProvider:
    """Answers floor lookups from the bundled floor definitions."""

    def __init__(self, floors_repo: FloorsRepository | None = None) -> None:
        self._floors_repo = floors_repo or FloorsRepository()

    def get_encounter(self, level_number: int) -> Encounter | None:
        try:
            floor = self._floors_repo.get_floor(level_number)
        except KeyError:
            return None
        except DataError as exc:
            logger.warning("Floor data unavailable for level %s: %s", level_number, exc)
            return None
        return encounter_from_floor(floor)


class StaticCatalogProvider:
    """In-memory catalog keyed by affinity."""

    def __init__(self, definitions: Mapping[str, AffinityDefinition] | None = None) -> None:
        self._definitions: Dict[str, AffinityDefinition] = dict(definitions or {})

    def get_affinity_definition(self, affinity: str) -> AffinityDefinition | None:
        return self._definitions.get(affinity)


class StaticEncounterProvider:
    """In-memory encounters keyed by level number."""

    def __init__(self, encounters: Iterable[Encounter] = ()) -> None:
        self._encounters: Dict[int, Encounter] = {encounter.level_number: encounter for encounter in encounters}

    def get_encounter(self, level_number: int) -> Encounter | None:
        return self._encounters.get(level_number)
