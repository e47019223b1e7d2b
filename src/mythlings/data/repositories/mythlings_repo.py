"""Repository for mythling definitions."""
from __future__ import annotations

from typing import Dict

from mythlings.core.types import Affinity
from mythlings.data.errors import DataReferenceError
from mythlings.data.repositories.abilities_repo import AbilitiesRepository
from mythlings.data.repositories.base import RepositoryBase
from mythlings.domain.affinities import AFFINITIES
from mythlings.domain.defs import AbilityDef, MythlingDef

VALID_RARITIES = {"common", "rare", "epic", "legendary"}


class MythlingsRepository(RepositoryBase[MythlingDef]):
    """Loads mythlings and resolves their ability kits against the ability catalog."""

    def __init__(self, abilities_repo: AbilitiesRepository | None = None, base_path=None) -> None:
        super().__init__("mythlings.json", base_path)
        self._abilities_repo = abilities_repo or AbilitiesRepository(base_path=base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, MythlingDef]:
        definitions: Dict[str, MythlingDef] = {}
        for raw_id, payload in raw.items():
            mythling_id = self._require_str(raw_id, "mythling id").strip()
            context = f"mythling '{mythling_id}'"
            data = self._require_mapping(payload, context)
            self._assert_required(
                data,
                {"name", "type", "icon", "base_power", "base_health", "rarity", "ability_ids"},
                context,
            )
            ability_ids = self._require_list(data["ability_ids"], f"{context} ability_ids")
            definitions[mythling_id] = MythlingDef(
                id=mythling_id,
                name=self._require_str(data["name"], f"{context} name"),
                affinity=self._require_literal(data["type"], AFFINITIES, f"{context} type"),  # type: ignore[arg-type]
                icon=self._require_str(data["icon"], f"{context} icon", allow_empty=True),
                base_power=self._require_int(data["base_power"], f"{context} base_power", minimum=0),
                base_health=self._require_int(data["base_health"], f"{context} base_health", minimum=1),
                rarity=self._require_literal(data["rarity"], VALID_RARITIES, f"{context} rarity"),  # type: ignore[arg-type]
                abilities=tuple(self._resolve_ability(entry, context) for entry in ability_ids),
                description=self._optional_str(data.get("description"), f"{context} description") or "",
            )
        return definitions

    def _resolve_ability(self, ability_id: object, context: str) -> AbilityDef:
        ability_id = self._require_str(ability_id, f"{context} ability_ids entry")
        try:
            return self._abilities_repo.get(ability_id)
        except KeyError as exc:
            raise DataReferenceError(
                f"{context} references unknown ability '{ability_id}'.", source=self._filename
            ) from exc

    def find_by_affinity(self, affinity: Affinity) -> MythlingDef | None:
        """Return the first mythling (by id) of the given affinity, if any."""
        for mythling in self.all():
            if mythling.affinity == affinity:
                return mythling
        return None
