"""Domain definition exports."""

from .ability_def import AbilityDef
from .floor_def import FloorDef, FloorMonsterDef, FloorRewardDef
from .mythling_def import MythlingDef

__all__ = [
    "AbilityDef",
    "FloorDef",
    "FloorMonsterDef",
    "FloorRewardDef",
    "MythlingDef",
]
