"""UI-agnostic battle controller that separates state progression from rendering."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from mythlings.core.rng import RandomSource
from mythlings.domain.battle_models import Ability, BattleState, Combatant
from mythlings.services.battle_service import BattleService, BattleView, Rejection, next_living_index
from mythlings.services.errors import BattleInvariantError

DEFAULT_MAX_TURNS = 500


@dataclass(frozen=True, slots=True)
class BattleAction:
    """A complete player decision: who acts, with what, against whom."""

    combatant_id: str
    ability_id: str
    target_id: str


@dataclass(frozen=True, slots=True)
class AbilityOption:
    ability: Ability
    remaining: int

    @property
    def is_ready(self) -> bool:
        return self.remaining == 0


class BattleController:
    """
    UI-agnostic controller for battle state progression.

    Wraps BattleService and exposes only structured state and actions. It does
    NOT render, format or prompt; a presentation layer feeds it decisions and
    draws whatever state comes back.
    """

    def __init__(self, battle_service: BattleService) -> None:
        self._service = battle_service

    def get_battle_view(self, state: BattleState) -> BattleView:
        """Return structured view of current battle state for rendering."""
        return self._service.get_battle_view(state)

    def is_player_turn(self, state: BattleState) -> bool:
        return not state.is_over and state.turn == "player"

    def is_opponent_turn(self, state: BattleState) -> bool:
        return not state.is_over and state.turn == "opponent"

    def active_player(self, state: BattleState) -> Combatant | None:
        """Return the highlighted player mythling, skipping ahead if it was defeated."""
        active = state.active_player
        if active is None or active.is_alive:
            return active
        index = next_living_index(state.player_team, state.active_player_index)
        candidate = state.player_team.combatants[index]
        return candidate if candidate.is_alive else None

    def get_available_abilities(self, state: BattleState, combatant_id: str) -> List[AbilityOption]:
        """List a combatant's kit with the turns left before each ability is ready."""
        cooldowns = self._service.get_cooldowns(state, combatant_id)
        combatant = state.find_combatant(combatant_id)
        assert combatant is not None
        return [AbilityOption(ability=ability, remaining=cooldowns[ability.id]) for ability in combatant.abilities]

    def apply_player_action(self, state: BattleState, action: BattleAction) -> BattleState | Rejection:
        """Select and aim an ability in one step."""
        selected = self._service.select_ability(state, action.combatant_id, action.ability_id)
        if isinstance(selected, Rejection):
            return selected
        return self._service.select_target(selected, action.target_id)

    def run_opponent_turn(self, state: BattleState) -> BattleState:
        return self._service.run_opponent_turn(state)

    def choose_auto_action(self, state: BattleState, rng: RandomSource) -> BattleAction | None:
        """Pick a random ready ability and living target for the player side.

        Starts from the active mythling and walks the team in order until one
        has a ready ability. Returns None if no player action is possible.
        """
        if not self.is_player_turn(state):
            return None
        targets = state.opponent_team.living()
        if not targets:
            return None
        members = state.player_team.combatants
        for offset in range(len(members)):
            combatant = members[(state.active_player_index + offset) % len(members)]
            if combatant.is_defeated:
                continue
            ready = [option.ability for option in self.get_available_abilities(state, combatant.id) if option.is_ready]
            if not ready:
                continue
            ability = rng.choice(ready)
            target = rng.choice(targets)
            return BattleAction(combatant_id=combatant.id, ability_id=ability.id, target_id=target.id)
        return None

    def run_auto_player_turn(self, state: BattleState, rng: RandomSource) -> BattleState:
        """Play one player turn automatically; returns `state` if nothing can be done."""
        action = self.choose_auto_action(state, rng)
        if action is None:
            return state
        result = self.apply_player_action(state, action)
        if isinstance(result, Rejection):
            raise BattleInvariantError(f"Automatic action {action} was rejected: {result.reason}")
        return result

    def simulate(self, state: BattleState, rng: RandomSource, *, max_turns: int = DEFAULT_MAX_TURNS) -> BattleState:
        """Play the battle headlessly until it ends, stalls, or `max_turns` resolutions pass."""
        current = state
        while not current.is_over and current.turn_count < max_turns:
            if self.is_opponent_turn(current):
                current = self._service.run_opponent_turn(current)
                continue
            advanced = self.run_auto_player_turn(current, rng)
            if advanced is current:
                break
            current = advanced
        return current
