"""Repository for floor (encounter) definitions."""
from __future__ import annotations

from typing import Dict, List

from mythlings.data.errors import DataReferenceError
from mythlings.data.repositories.base import RepositoryBase
from mythlings.data.repositories.mythlings_repo import MythlingsRepository
from mythlings.domain.defs import FloorDef, FloorMonsterDef, FloorRewardDef

VALID_REWARD_TYPES = {"gold", "gems", "mythling", "equipment"}


class FloorsRepository(RepositoryBase[FloorDef]):
    """Loads floors keyed by floor number and validates their monster references."""

    def __init__(self, mythlings_repo: MythlingsRepository | None = None, base_path=None) -> None:
        super().__init__("floors.json", base_path)
        self._mythlings_repo = mythlings_repo or MythlingsRepository(base_path=base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, FloorDef]:
        definitions: Dict[str, FloorDef] = {}
        for raw_key, payload in raw.items():
            floor_number = self._parse_floor_number(raw_key)
            context = f"floor '{floor_number}'"
            data = self._require_mapping(payload, context)
            self._assert_required(data, {"difficulty", "monsters"}, context)

            monsters_raw = self._require_list(data["monsters"], f"{context} monsters")
            monsters = tuple(
                self._build_monster(entry, f"{context} monster #{index}")
                for index, entry in enumerate(monsters_raw)
            )
            rewards_raw = self._require_list(data.get("rewards", []), f"{context} rewards")
            rewards = tuple(
                self._build_reward(entry, f"{context} reward #{index}")
                for index, entry in enumerate(rewards_raw)
            )
            key = str(floor_number)
            if key in definitions:
                raise self._fail(f"Duplicate floor number '{floor_number}'.")
            definitions[key] = FloorDef(
                floor_number=floor_number,
                difficulty=self._require_int(data["difficulty"], f"{context} difficulty", minimum=1),
                monsters=monsters,
                rewards=rewards,
                description=self._optional_str(data.get("description"), f"{context} description"),
            )
        return definitions

    def _parse_floor_number(self, raw_key: object) -> int:
        key = self._require_str(raw_key, "floor number").strip()
        if not key.isdigit() or int(key) < 1:
            raise self._fail(f"floor number '{key}' must be a positive integer.")
        return int(key)

    def _build_monster(self, payload: object, context: str) -> FloorMonsterDef:
        data = self._require_mapping(payload, context)
        self._assert_required(data, {"mythling_id"}, context)
        mythling_id = self._require_str(data["mythling_id"], f"{context} mythling_id")
        try:
            mythling = self._mythlings_repo.get(mythling_id)
        except KeyError as exc:
            raise DataReferenceError(
                f"{context} references unknown mythling '{mythling_id}'.", source=self._filename
            ) from exc
        return FloorMonsterDef(
            mythling=mythling,
            quantity=self._require_int(data.get("quantity", 1), f"{context} quantity", minimum=1),
            position=self._require_int(data.get("position", 0), f"{context} position", minimum=0),
        )

    def _build_reward(self, payload: object, context: str) -> FloorRewardDef:
        data = self._require_mapping(payload, context)
        self._assert_required(data, {"reward_type", "quantity"}, context)
        return FloorRewardDef(
            reward_type=self._require_literal(data["reward_type"], VALID_REWARD_TYPES, f"{context} reward_type"),  # type: ignore[arg-type]
            quantity=self._require_int(data["quantity"], f"{context} quantity", minimum=1),
            reward_id=self._optional_str(data.get("reward_id"), f"{context} reward_id"),
        )

    def get_floor(self, floor_number: int) -> FloorDef:
        """Return a floor by number; raises KeyError when absent."""
        return self.get(str(floor_number))

    def all(self) -> List[FloorDef]:
        """Return all floors ordered by floor number."""
        definitions = self._ensure_loaded()
        return sorted(definitions.values(), key=lambda floor: floor.floor_number)
