"""Abilities repository."""
from __future__ import annotations

from typing import Dict

from mythlings.data.repositories.base import RepositoryBase
from mythlings.domain.defs import AbilityDef


class AbilitiesRepository(RepositoryBase[AbilityDef]):
    """Loads the shared ability catalog."""

    def __init__(self, base_path=None) -> None:
        super().__init__("abilities.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, AbilityDef]:
        abilities: Dict[str, AbilityDef] = {}
        for raw_id, payload in raw.items():
            ability_id = self._require_str(raw_id, "ability id").strip()
            data = self._require_mapping(payload, f"ability '{ability_id}'")
            self._assert_required(data, {"name", "damage", "cooldown", "icon"}, f"ability '{ability_id}'")
            abilities[ability_id] = AbilityDef(
                id=ability_id,
                name=self._require_str(data["name"], f"ability '{ability_id}' name"),
                damage=self._require_int(data["damage"], f"ability '{ability_id}' damage", minimum=0),
                cooldown=self._require_int(data["cooldown"], f"ability '{ability_id}' cooldown", minimum=0),
                icon=self._require_str(data["icon"], f"ability '{ability_id}' icon", allow_empty=True),
                description=self._optional_str(data.get("description"), f"ability '{ability_id}' description")
                or "",
            )
        return abilities
