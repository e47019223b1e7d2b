"""Service layer exports."""

from .battle_service import (
    AbilityView,
    BattleService,
    BattleView,
    CombatantView,
    Rejection,
    check_invariants,
    summarize_battle,
)
from .controllers import AbilityOption, BattleAction, BattleController
from .errors import BattleInvariantError
from .providers import (
    AffinityDefinition,
    CatalogProvider,
    Encounter,
    EncounterOpponent,
    EncounterProvider,
    RepositoryCatalogProvider,
    RepositoryEncounterProvider,
    Reward,
    StaticCatalogProvider,
    StaticEncounterProvider,
)
from .results import BattleResult, build_battle_result
from .scheduler import ImmediateScheduler, SleepScheduler, TurnScheduler

__all__ = [
    "AbilityOption",
    "AbilityView",
    "AffinityDefinition",
    "BattleAction",
    "BattleController",
    "BattleInvariantError",
    "BattleResult",
    "BattleService",
    "BattleView",
    "CatalogProvider",
    "CombatantView",
    "Encounter",
    "EncounterOpponent",
    "EncounterProvider",
    "ImmediateScheduler",
    "Rejection",
    "RepositoryCatalogProvider",
    "RepositoryEncounterProvider",
    "Reward",
    "SleepScheduler",
    "StaticCatalogProvider",
    "StaticEncounterProvider",
    "TurnScheduler",
    "build_battle_result",
    "check_invariants",
    "summarize_battle",
]
