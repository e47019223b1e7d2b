"""Battle service implementing the turn-based resolution state machine."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Literal, Mapping, Sequence, Tuple

from mythlings.core.config import EngineConfig
from mythlings.core.rng import RNG, RandomSource
from mythlings.core.types import CooldownKey, Side
from mythlings.domain.battle_models import (
    Ability,
    BattleState,
    BattleSummary,
    Combatant,
    CombatantStats,
    PendingAbility,
    Team,
    opposing_side,
)
from mythlings.domain.roster_scaling import normalize_difficulty
from mythlings.services.errors import BattleInvariantError
from mythlings.services.factories import build_opponent_team, build_player_team
from mythlings.services.providers import CatalogProvider, Encounter, EncounterProvider
from mythlings.services.scheduler import ImmediateScheduler, TurnScheduler

logger = logging.getLogger(__name__)

SHARED_COOLDOWN_OWNER = "*"

RejectionReason = Literal[
    "battle_over",
    "not_player_turn",
    "unknown_combatant",
    "wrong_side",
    "combatant_defeated",
    "unknown_ability",
    "on_cooldown",
    "no_pending_ability",
    "invalid_target",
    "target_defeated",
]


@dataclass(frozen=True, slots=True)
class Rejection:
    """An invalid player action. The battle state it was applied to is unchanged."""

    reason: RejectionReason
    message: str
    remaining_cooldown: int | None = None


@dataclass(frozen=True, slots=True)
class AbilityView:
    ability_id: str
    name: str
    icon: str
    damage: int
    cooldown: int
    remaining: int

    @property
    def is_ready(self) -> bool:
        return self.remaining == 0


@dataclass(frozen=True, slots=True)
class CombatantView:
    combatant_id: str
    name: str
    affinity: str
    icon: str
    side: Side
    power: int
    current_health: int
    max_health: int
    is_alive: bool
    is_active: bool
    abilities: Tuple[AbilityView, ...]

    @property
    def health_display(self) -> str:
        return f"{self.current_health}/{self.max_health}"


@dataclass(frozen=True, slots=True)
class BattleView:
    """Presentation view for the current battle state."""

    turn: Side
    players: Tuple[CombatantView, ...]
    opponents: Tuple[CombatantView, ...]
    player_total_power: int
    opponent_total_power: int
    log_tail: Tuple[str, ...]
    is_over: bool
    winner: Side | None
    active_player_id: str | None
    active_opponent_id: str | None
    pending_ability_id: str | None


def next_living_index(team: Team, current_index: int) -> int:
    """Return the index of the next living member after `current_index`, wrapping.

    Defeated members are skipped; the scan is bounded by the team size so a
    fully defeated team leaves the pointer on the last index tried.
    """
    size = len(team)
    if size == 0:
        return current_index
    index = (current_index + 1) % size
    attempts = 0
    while team.combatants[index].is_defeated and attempts < size:
        index = (index + 1) % size
        attempts += 1
    return index


def decrement_cooldowns(
    cooldowns: Mapping[CooldownKey, int], *, skip: CooldownKey | None = None
) -> Dict[CooldownKey, int]:
    """Tick every tracked cooldown down by one turn, flooring at zero."""
    return {key: value if key == skip else max(0, value - 1) for key, value in cooldowns.items()}


def check_invariants(state: BattleState) -> None:
    """Raise BattleInvariantError if `state` is not a legal battle snapshot."""
    for combatant in (*state.player_team.combatants, *state.opponent_team.combatants):
        if not 0 <= combatant.current_health <= combatant.max_health:
            raise BattleInvariantError(
                f"{combatant.id} health {combatant.current_health} outside [0, {combatant.max_health}]."
            )
    players_alive = bool(state.player_team.living())
    opponents_alive = bool(state.opponent_team.living())
    if state.is_over:
        if state.winner is None:
            raise BattleInvariantError("Finished battle has no winner.")
        if not state.team_for(state.winner).living() or state.team_for(opposing_side(state.winner)).living():
            raise BattleInvariantError(f"Winner '{state.winner}' does not match the surviving team.")
    else:
        if state.winner is not None:
            raise BattleInvariantError("Winner set while the battle is still running.")
        if not (players_alive and opponents_alive):
            raise BattleInvariantError("A team is fully defeated but the battle is not over.")
    for key, remaining in state.cooldowns.items():
        if remaining < 0:
            raise BattleInvariantError(f"Cooldown {key} is negative ({remaining}).")


def summarize_battle(state: BattleState) -> BattleSummary:
    """Collect the per-combatant statistics shown on the end-of-battle screen."""

    def _rows(team: Team) -> Tuple[CombatantStats, ...]:
        return tuple(
            CombatantStats(
                combatant_id=member.id,
                name=member.name,
                side=member.side,
                is_alive=member.is_alive,
                damage_dealt=member.damage_dealt,
                damage_received=member.damage_received,
                healing_done=member.healing_done,
            )
            for member in team
        )

    player_stats = _rows(state.player_team)
    opponent_stats = _rows(state.opponent_team)
    top_id: str | None = None
    top_damage = 0
    for row in (*player_stats, *opponent_stats):
        if row.damage_dealt > top_damage:
            top_id, top_damage = row.combatant_id, row.damage_dealt
    return BattleSummary(
        winner=state.winner,
        turns=state.turn_count,
        player_stats=player_stats,
        opponent_stats=opponent_stats,
        top_damage_dealer_id=top_id,
    )


class BattleService:
    """Turn-based battle orchestrator.

    The player drives their side through `select_ability` and `select_target`;
    the opponent side is resolved automatically by `run_opponent_turn`. Every
    operation takes a `BattleState` and returns a new one (or a `Rejection`),
    so callers can keep any earlier snapshot for replay or undo.
    """

    def __init__(
        self,
        catalog: CatalogProvider | None = None,
        encounters: EncounterProvider | None = None,
        *,
        rng: RandomSource | None = None,
        config: EngineConfig | None = None,
        scheduler: TurnScheduler | None = None,
    ) -> None:
        self._catalog = catalog
        self._encounters = encounters
        self._rng = rng if rng is not None else RNG()
        self._config = config or EngineConfig()
        self._scheduler = scheduler or ImmediateScheduler()

    @property
    def config(self) -> EngineConfig:
        return self._config

    # -----------------------
    # Battle Lifecycle
    # -----------------------
    def create_battle(self, player_affinities: Sequence[str], encounter: int | Encounter) -> BattleState:
        """Build both teams and return the opening state. The player acts first."""
        player_team = build_player_team(player_affinities, self._catalog, self._rng)
        opponent_team = build_opponent_team(encounter, self._rng, self._catalog)
        state = BattleState(player_team=player_team, opponent_team=opponent_team)
        if not player_team.living():
            # Nothing to field: the opponent wins by default.
            state = replace(state, is_over=True, winner="opponent")
        check_invariants(state)
        logger.info(
            "Battle created: %d player mythling(s) (power %d) vs %d opponent(s) (power %d).",
            len(player_team),
            player_team.total_power,
            len(opponent_team),
            opponent_team.total_power,
        )
        return state

    def resolve_encounter(self, level_number: int) -> Encounter | None:
        """Look up the encounter for a floor, or None when it is not defined."""
        if self._encounters is None:
            return None
        try:
            return self._encounters.get_encounter(level_number)
        except Exception as exc:
            logger.warning("Encounter lookup for floor %s failed: %s", level_number, exc)
            return None

    def start_floor(self, player_affinities: Sequence[str], level_number: int) -> BattleState:
        """Start a battle on a floor, generating opponents if the floor is unknown."""
        encounter = self.resolve_encounter(level_number)
        if encounter is None:
            difficulty = normalize_difficulty(level_number)
            logger.warning("No encounter for floor %s; generating difficulty %s.", level_number, difficulty)
            return self.create_battle(player_affinities, difficulty)
        return self.create_battle(player_affinities, encounter)

    # -----------------------
    # Player Actions
    # -----------------------
    def select_ability(self, state: BattleState, combatant_id: str, ability_id: str) -> BattleState | Rejection:
        """Mark an ability as pending for one of the player's living mythlings."""
        if state.is_over:
            return self._reject("battle_over", "The battle is already over.")
        if state.turn != "player":
            return self._reject("not_player_turn", "Wait for the opponent to finish their turn.")

        combatant = state.player_team.get(combatant_id)
        if combatant is None:
            if state.opponent_team.get(combatant_id) is not None:
                return self._reject("wrong_side", f"'{combatant_id}' is not on your team.")
            return self._reject("unknown_combatant", f"No combatant '{combatant_id}' in this battle.")
        if combatant.is_defeated:
            return self._reject("combatant_defeated", f"{combatant.name} has been defeated.")

        ability = combatant.get_ability(ability_id)
        if ability is None:
            return self._reject("unknown_ability", f"{combatant.name} does not know '{ability_id}'.")

        remaining = self.cooldown_remaining(state, combatant.id, ability.id)
        if remaining > 0:
            return self._reject(
                "on_cooldown",
                f"{ability.name} is on cooldown for {remaining} more turn(s)",
                remaining_cooldown=remaining,
            )

        return replace(
            state,
            pending_ability=PendingAbility(combatant_id=combatant.id, ability_id=ability.id),
            pending_target=None,
        )

    def select_target(self, state: BattleState, target_id: str) -> BattleState | Rejection:
        """Aim the pending ability at a living opponent and resolve the turn."""
        if state.is_over:
            return self._reject("battle_over", "The battle is already over.")
        if state.turn != "player":
            return self._reject("not_player_turn", "Wait for the opponent to finish their turn.")
        pending = state.pending_ability
        if pending is None:
            return self._reject("no_pending_ability", "Select an ability first.")

        target = state.opponent_team.get(target_id)
        if target is None:
            return self._reject("invalid_target", f"'{target_id}' is not an opposing mythling.")
        if target.is_defeated:
            return self._reject("target_defeated", f"{target.name} has already been defeated.")

        attacker = state.player_team.get(pending.combatant_id)
        ability = attacker.get_ability(pending.ability_id) if attacker is not None else None
        if attacker is None or ability is None or attacker.is_defeated:
            raise BattleInvariantError(f"Pending ability {pending} no longer refers to a usable ability.")

        resolved = self._resolve(replace(state, pending_target=target.id), attacker, ability, target)
        if self._config.auto_opponent_turn and not resolved.is_over and resolved.turn == "opponent":
            self._scheduler.pause(self._config.opponent_turn_delay)
            resolved = self.run_opponent_turn(resolved)
        return resolved

    # -----------------------
    # Opponent AI
    # -----------------------
    def run_opponent_turn(self, state: BattleState) -> BattleState:
        """Resolve one opponent action chosen at random.

        Draw order is fixed (attacker, target, ability) so a scripted random
        source reproduces the same battle exactly. Returns `state` untouched
        when it is not the opponent's turn.
        """
        if state.is_over or state.turn != "opponent":
            return state
        attackers = state.opponent_team.living()
        targets = state.player_team.living()
        if not attackers or not targets:
            raise BattleInvariantError("Opponent turn started with a fully defeated team.")

        attacker = self._rng.choice(attackers)
        target = self._rng.choice(targets)
        ability = self._choose_opponent_ability(state, attacker)

        resolved = self._resolve(state, attacker, ability, target)
        resolved = replace(resolved, active_opponent_index=state.opponent_team.index_of(attacker.id))
        if not resolved.is_over:
            resolved = replace(
                resolved,
                active_player_index=next_living_index(resolved.player_team, state.active_player_index),
            )
        return resolved

    def _choose_opponent_ability(self, state: BattleState, attacker: Combatant) -> Ability:
        kit = attacker.abilities
        if self._config.opponent_respects_cooldowns:
            ready = tuple(
                ability for ability in kit if self.cooldown_remaining(state, attacker.id, ability.id) == 0
            )
            if ready:
                kit = ready
        return self._rng.choice(kit)

    # -----------------------
    # Read-only projections
    # -----------------------
    def cooldown_remaining(self, state: BattleState, combatant_id: str, ability_id: str) -> int:
        return state.cooldowns.get(self._cooldown_key(combatant_id, ability_id), 0)

    def get_cooldowns(self, state: BattleState, combatant_id: str) -> Dict[str, int]:
        """Return remaining cooldown per ability id for one combatant."""
        combatant = state.find_combatant(combatant_id)
        if combatant is None:
            raise KeyError(combatant_id)
        return {
            ability.id: self.cooldown_remaining(state, combatant.id, ability.id) for ability in combatant.abilities
        }

    def get_battle_view(self, state: BattleState) -> BattleView:
        """Return structured information for rendering."""
        active_player = state.active_player
        active_opponent = state.active_opponent
        active_ids = {
            member.id for member in (active_player, active_opponent) if member is not None
        }
        tail_size = self._config.log_tail_size
        return BattleView(
            turn=state.turn,
            players=tuple(self._to_view(state, member, active_ids) for member in state.player_team),
            opponents=tuple(self._to_view(state, member, active_ids) for member in state.opponent_team),
            player_total_power=state.player_team.total_power,
            opponent_total_power=state.opponent_team.total_power,
            log_tail=state.log[-tail_size:],
            is_over=state.is_over,
            winner=state.winner,
            active_player_id=active_player.id if active_player is not None else None,
            active_opponent_id=active_opponent.id if active_opponent is not None else None,
            pending_ability_id=state.pending_ability.ability_id if state.pending_ability else None,
        )

    def summarize(self, state: BattleState) -> BattleSummary:
        return summarize_battle(state)

    # -----------------------
    # Helpers
    # -----------------------
    def _cooldown_key(self, combatant_id: str, ability_id: str) -> CooldownKey:
        if self._config.cooldown_scope == "ability":
            return (SHARED_COOLDOWN_OWNER, ability_id)
        return (combatant_id, ability_id)

    def _resolve(self, state: BattleState, attacker: Combatant, ability: Ability, target: Combatant) -> BattleState:
        if state.is_over:
            raise BattleInvariantError("Cannot resolve an action in a battle that is already over.")
        attacking_side = attacker.side
        defending_side = target.side
        if attacking_side != state.turn or defending_side == attacking_side:
            raise BattleInvariantError(
                f"{attacker.id} ({attacking_side}) cannot act on {target.id} during the {state.turn} turn."
            )

        damage = ability.damage
        updated_attacker = replace(attacker, damage_dealt=attacker.damage_dealt + damage)
        updated_target = replace(
            target,
            current_health=max(0, target.current_health - damage),
            damage_received=target.damage_received + damage,
        )
        # Utility abilities (damage 0) have no healing effect; healing_done stays untouched.

        attacking_team = state.team_for(attacking_side).replace_combatant(updated_attacker)
        defending_team = state.team_for(defending_side).replace_combatant(updated_target)
        used_key = self._cooldown_key(attacker.id, ability.id)
        cooldowns = dict(state.cooldowns)
        cooldowns[used_key] = ability.cooldown
        log = state.log + (
            f"{attacker.name} used {ability.name}!",
            f"Dealt {damage} damage to {target.name}!",
        )
        logger.debug("%s used %s on %s for %d damage.", attacker.id, ability.id, target.id, damage)

        next_state = replace(
            state.with_team(attacking_side, attacking_team).with_team(defending_side, defending_team),
            cooldowns=cooldowns,
            log=log,
            pending_ability=None,
            pending_target=None,
            turn_count=state.turn_count + 1,
        )

        if not defending_team.living():
            next_state = replace(next_state, is_over=True, winner=attacking_side)
            logger.info("Battle over after %d turn(s): %s wins.", next_state.turn_count, attacking_side)
        else:
            # The ability just used starts ticking on the next resolution.
            next_state = replace(
                next_state,
                cooldowns=decrement_cooldowns(cooldowns, skip=used_key),
                turn=defending_side,
            )

        check_invariants(next_state)
        return next_state

    def _reject(
        self, reason: RejectionReason, message: str, *, remaining_cooldown: int | None = None
    ) -> Rejection:
        logger.debug("Action rejected (%s): %s", reason, message)
        return Rejection(reason=reason, message=message, remaining_cooldown=remaining_cooldown)

    def _to_view(self, state: BattleState, combatant: Combatant, active_ids: set[str]) -> CombatantView:
        return CombatantView(
            combatant_id=combatant.id,
            name=combatant.name,
            affinity=combatant.affinity,
            icon=combatant.icon,
            side=combatant.side,
            power=combatant.power,
            current_health=combatant.current_health,
            max_health=combatant.max_health,
            is_alive=combatant.is_alive,
            is_active=combatant.id in active_ids,
            abilities=tuple(
                AbilityView(
                    ability_id=ability.id,
                    name=ability.name,
                    icon=ability.icon,
                    damage=ability.damage,
                    cooldown=ability.cooldown,
                    remaining=self.cooldown_remaining(state, combatant.id, ability.id),
                )
                for ability in combatant.abilities
            ),
        )
