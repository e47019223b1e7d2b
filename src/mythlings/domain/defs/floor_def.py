"""Floor definition data structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from mythlings.core.types import RewardType

from .mythling_def import MythlingDef


@dataclass(slots=True)
class FloorMonsterDef:
    """A mythling placed on a floor, repeated `quantity` times."""

    mythling: MythlingDef
    quantity: int
    position: int


@dataclass(slots=True)
class FloorRewardDef:
    """A reward granted for clearing a floor."""

    reward_type: RewardType
    quantity: int
    reward_id: str | None = None


@dataclass(slots=True)
class FloorDef:
    """Describes a tower floor: its difficulty, opponents and rewards."""

    floor_number: int
    difficulty: int
    monsters: Tuple[FloorMonsterDef, ...]
    rewards: Tuple[FloorRewardDef, ...] = ()
    description: str | None = None
