"""Battle domain models.

Every model here is frozen: transitions build new values with
`dataclasses.replace` and never mutate a snapshot another caller may hold.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterator, Mapping, Tuple

from mythlings.core.types import Affinity, CooldownKey, Side

BATTLE_STARTED_MESSAGE = "Battle started!"


@dataclass(frozen=True, slots=True)
class Ability:
    """An action a combatant can perform."""

    id: str
    name: str
    damage: int
    cooldown: int
    icon: str = ""
    description: str = ""

    @property
    def is_utility(self) -> bool:
        # Healing and barrier abilities carry no damage and have no effect yet.
        return self.damage == 0


@dataclass(frozen=True, slots=True)
class Combatant:
    """Represents an individual participant in battle."""

    id: str
    name: str
    affinity: Affinity
    icon: str
    power: int
    max_health: int
    current_health: int
    abilities: Tuple[Ability, ...]
    side: Side
    damage_dealt: int = 0
    damage_received: int = 0
    healing_done: int = 0

    @property
    def is_alive(self) -> bool:
        return self.current_health > 0

    @property
    def is_defeated(self) -> bool:
        return not self.is_alive

    def get_ability(self, ability_id: str) -> Ability | None:
        for ability in self.abilities:
            if ability.id == ability_id:
                return ability
        return None


@dataclass(frozen=True, slots=True)
class Team:
    """An ordered roster for one side of a battle."""

    combatants: Tuple[Combatant, ...]
    total_power: int

    @classmethod
    def from_combatants(cls, combatants: Tuple[Combatant, ...] | list[Combatant]) -> "Team":
        members = tuple(combatants)
        return cls(combatants=members, total_power=sum(member.power for member in members))

    def __iter__(self) -> Iterator[Combatant]:
        return iter(self.combatants)

    def __len__(self) -> int:
        return len(self.combatants)

    def living(self) -> Tuple[Combatant, ...]:
        return tuple(member for member in self.combatants if member.is_alive)

    def get(self, combatant_id: str) -> Combatant | None:
        for member in self.combatants:
            if member.id == combatant_id:
                return member
        return None

    def index_of(self, combatant_id: str) -> int:
        for index, member in enumerate(self.combatants):
            if member.id == combatant_id:
                return index
        raise KeyError(combatant_id)

    def replace_combatant(self, combatant: Combatant) -> "Team":
        """Return a new team with the member sharing `combatant.id` swapped out.

        `total_power` is carried over untouched; it records starting strength.
        """
        index = self.index_of(combatant.id)
        members = self.combatants[:index] + (combatant,) + self.combatants[index + 1 :]
        return replace(self, combatants=members)


@dataclass(frozen=True, slots=True)
class PendingAbility:
    """Ability chosen by the player but not yet aimed."""

    combatant_id: str
    ability_id: str


def opposing_side(side: Side) -> Side:
    return "opponent" if side == "player" else "player"


@dataclass(frozen=True, slots=True)
class BattleState:
    """Single source of truth for an in-progress battle."""

    player_team: Team
    opponent_team: Team
    turn: Side = "player"
    pending_ability: PendingAbility | None = None
    pending_target: str | None = None
    log: Tuple[str, ...] = (BATTLE_STARTED_MESSAGE,)
    is_over: bool = False
    winner: Side | None = None
    cooldowns: Mapping[CooldownKey, int] = field(default_factory=dict)
    active_player_index: int = 0
    active_opponent_index: int = 0
    turn_count: int = 0

    def team_for(self, side: Side) -> Team:
        return self.player_team if side == "player" else self.opponent_team

    def with_team(self, side: Side, team: Team) -> "BattleState":
        if side == "player":
            return replace(self, player_team=team)
        return replace(self, opponent_team=team)

    def find_combatant(self, combatant_id: str) -> Combatant | None:
        return self.player_team.get(combatant_id) or self.opponent_team.get(combatant_id)

    @property
    def active_player(self) -> Combatant | None:
        members = self.player_team.combatants
        if 0 <= self.active_player_index < len(members):
            return members[self.active_player_index]
        return None

    @property
    def active_opponent(self) -> Combatant | None:
        members = self.opponent_team.combatants
        if 0 <= self.active_opponent_index < len(members):
            return members[self.active_opponent_index]
        return None


@dataclass(frozen=True, slots=True)
class CombatantStats:
    """End-of-battle statistics row for one combatant."""

    combatant_id: str
    name: str
    side: Side
    is_alive: bool
    damage_dealt: int
    damage_received: int
    healing_done: int


@dataclass(frozen=True, slots=True)
class BattleSummary:
    """Per-combatant totals for the end-of-battle screen."""

    winner: Side | None
    turns: int
    player_stats: Tuple[CombatantStats, ...]
    opponent_stats: Tuple[CombatantStats, ...]
    top_damage_dealer_id: str | None

    @property
    def player_damage_dealt(self) -> int:
        return sum(row.damage_dealt for row in self.player_stats)

    @property
    def opponent_damage_dealt(self) -> int:
        return sum(row.damage_dealt for row in self.opponent_stats)
