"""Battle outcome records handed to the profile store."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from mythlings.core.types import Side
from mythlings.domain.battle_models import BattleState, BattleSummary
from mythlings.services.battle_service import summarize_battle
from mythlings.services.errors import BattleInvariantError
from mythlings.services.providers import Encounter, Reward


@dataclass(frozen=True, slots=True)
class BattleResult:
    """Outcome of a finished battle."""

    winner: Side
    floor_number: int | None
    turns: int
    rewards: Tuple[Reward, ...]
    summary: BattleSummary

    @property
    def player_won(self) -> bool:
        return self.winner == "player"

    def to_record(self) -> Dict[str, object]:
        """Flatten into plain values for whatever store persists the profile."""
        return {
            "winner": self.winner,
            "floor_number": self.floor_number,
            "turns": self.turns,
            "rewards": [
                {"reward_type": reward.reward_type, "reward_id": reward.reward_id, "quantity": reward.quantity}
                for reward in self.rewards
            ],
        }


def build_battle_result(state: BattleState, encounter: Encounter | None = None) -> BattleResult:
    """Create the result for a finished battle; rewards are only granted on a player win."""
    if not state.is_over or state.winner is None:
        raise BattleInvariantError("Cannot build a result for a battle that is still running.")
    rewards: Tuple[Reward, ...] = ()
    if encounter is not None and state.winner == "player":
        rewards = encounter.rewards
    return BattleResult(
        winner=state.winner,
        floor_number=encounter.level_number if encounter is not None else None,
        turns=state.turn_count,
        rewards=rewards,
        summary=summarize_battle(state),
    )
