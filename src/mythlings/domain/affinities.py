"""Per-affinity cosmetic defaults and fallback ability kits."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from mythlings.core.types import Affinity
from mythlings.domain.battle_models import Ability

AFFINITIES: Tuple[Affinity, ...] = ("fire", "water", "earth")
DEFAULT_AFFINITY: Affinity = "fire"


@dataclass(frozen=True, slots=True)
class AffinityDefaults:
    """Fallback presentation and kit for an affinity missing from the catalog."""

    affinity: Affinity
    name: str
    icon: str
    abilities: Tuple[Ability, ...]


_DEFAULTS: Dict[Affinity, AffinityDefaults] = {
    "fire": AffinityDefaults(
        affinity="fire",
        name="Fire",
        icon="🔥",
        abilities=(
            Ability("fireball", "Fireball", damage=25, cooldown=2, icon="🔥",
                    description="Launch a powerful fireball at enemy"),
            Ability("flame_burst", "Flame Burst", damage=15, cooldown=1, icon="💥",
                    description="Quick burst of flames"),
            Ability("inferno", "Inferno", damage=40, cooldown=3, icon="🌋",
                    description="Devastating inferno attack"),
        ),
    ),
    "water": AffinityDefaults(
        affinity="water",
        name="Water",
        icon="💧",
        abilities=(
            Ability("water_jet", "Water Jet", damage=20, cooldown=2, icon="💧",
                    description="High-pressure water blast"),
            Ability("tidal_wave", "Tidal Wave", damage=30, cooldown=3, icon="🌊",
                    description="Massive wave of water"),
            Ability("healing_rain", "Healing Rain", damage=0, cooldown=4, icon="🌧️",
                    description="Restore health to ally"),
        ),
    ),
    "earth": AffinityDefaults(
        affinity="earth",
        name="Earth",
        icon="🌍",
        abilities=(
            Ability("rock_throw", "Rock Throw", damage=20, cooldown=1, icon="🪨",
                    description="Throw a rock at enemy"),
            Ability("earthquake", "Earthquake", damage=35, cooldown=3, icon="🌍",
                    description="Shake the ground"),
            Ability("stone_wall", "Stone Wall", damage=0, cooldown=4, icon="🧱",
                    description="Create a defensive barrier"),
        ),
    ),
}


def is_affinity(value: object) -> bool:
    return value in _DEFAULTS


def get_affinity_defaults(affinity: Affinity) -> AffinityDefaults:
    """Return the defaults for a known affinity."""
    try:
        return _DEFAULTS[affinity]
    except KeyError as exc:
        raise KeyError(affinity) from exc
