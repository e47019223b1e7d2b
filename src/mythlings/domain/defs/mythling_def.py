"""Mythling definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from mythlings.core.types import Affinity, Rarity

from .ability_def import AbilityDef


@dataclass(slots=True)
class MythlingDef:
    """Describes a collectible mythling and its resolved ability kit."""

    id: str
    name: str
    affinity: Affinity
    icon: str
    base_power: int
    base_health: int
    rarity: Rarity
    abilities: Tuple[AbilityDef, ...] = ()
    description: str = ""
