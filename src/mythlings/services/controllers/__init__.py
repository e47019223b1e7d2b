"""Controller exports."""

from .battle_controller import AbilityOption, BattleAction, BattleController

__all__ = ["AbilityOption", "BattleAction", "BattleController"]
