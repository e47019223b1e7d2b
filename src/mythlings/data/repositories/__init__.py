"""Repository exports."""

from .abilities_repo import AbilitiesRepository
from .floors_repo import FloorsRepository
from .mythlings_repo import MythlingsRepository

__all__ = [
    "AbilitiesRepository",
    "FloorsRepository",
    "MythlingsRepository",
]
