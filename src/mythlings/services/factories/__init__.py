"""Factory helpers for battle teams."""

from .team_factory import (
    DEFAULT_OPPONENT_ICON,
    build_opponent_team,
    build_player_team,
    create_player_combatant,
    generate_opponent_team,
    opponent_team_from_encounter,
)

__all__ = [
    "DEFAULT_OPPONENT_ICON",
    "build_opponent_team",
    "build_player_team",
    "create_player_combatant",
    "generate_opponent_team",
    "opponent_team_from_encounter",
]
