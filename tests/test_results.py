from __future__ import annotations

import pytest

from mythlings.services import BattleInvariantError, Encounter, Reward, build_battle_result
from tests.helpers.battle_builders import make_combatant, make_state


def _encounter() -> Encounter:
    return Encounter(
        level_number=4,
        difficulty=4,
        opponents=(),
        rewards=(Reward("gold", 200), Reward("mythling", 1, reward_id="wild_magma_drake")),
    )


def _finished(winner: str):
    player_health, opponent_health = (40, 0) if winner == "player" else (0, 40)
    return make_state(
        [make_combatant("player-0", health=player_health, max_health=100)],
        [make_combatant("opponent-0", health=opponent_health, max_health=100)],
        is_over=True,
        winner=winner,
        turn_count=9,
    )


def test_player_win_grants_encounter_rewards() -> None:
    result = build_battle_result(_finished("player"), _encounter())

    assert result.player_won is True
    assert result.floor_number == 4
    assert result.turns == 9
    assert [reward.reward_type for reward in result.rewards] == ["gold", "mythling"]
    assert result.to_record() == {
        "winner": "player",
        "floor_number": 4,
        "turns": 9,
        "rewards": [
            {"reward_type": "gold", "reward_id": None, "quantity": 200},
            {"reward_type": "mythling", "reward_id": "wild_magma_drake", "quantity": 1},
        ],
    }


def test_player_loss_grants_nothing() -> None:
    result = build_battle_result(_finished("opponent"), _encounter())

    assert result.player_won is False
    assert result.rewards == ()
    assert result.summary.winner == "opponent"


def test_procedural_battle_has_no_floor() -> None:
    result = build_battle_result(_finished("player"))

    assert result.floor_number is None
    assert result.rewards == ()


def test_running_battle_has_no_result() -> None:
    state = make_state([make_combatant("player-0")], [make_combatant("opponent-0")])

    with pytest.raises(BattleInvariantError):
        build_battle_result(state)
