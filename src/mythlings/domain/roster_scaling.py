"""Deterministic roster stat helpers."""
from __future__ import annotations

import math

from mythlings.core.rng import RandomSource

# Player mythlings missing from the catalog roll a small power spread on a fixed health pool.
PLAYER_FALLBACK_POWER_BASE = 15
PLAYER_FALLBACK_POWER_SPREAD = 9
PLAYER_FALLBACK_HEALTH = 100

# Procedural opponents scale linearly with difficulty.
OPPONENT_MIN_TEAM_SIZE = 2
OPPONENT_MAX_TEAM_SIZE = 4
OPPONENT_POWER_BASE = 10
OPPONENT_POWER_PER_DIFFICULTY = 5
OPPONENT_POWER_SPREAD = 9
OPPONENT_HEALTH_BASE = 100
OPPONENT_HEALTH_PER_DIFFICULTY = 20

# Floor rosters gain 20% base power/health per difficulty step above 1.
ENCOUNTER_MULTIPLIER_STEP = 0.2


def normalize_difficulty(difficulty: int) -> int:
    return max(1, difficulty)


def roll_player_fallback_power(rng: RandomSource) -> int:
    return PLAYER_FALLBACK_POWER_BASE + rng.randint(0, PLAYER_FALLBACK_POWER_SPREAD)


def procedural_team_size(difficulty: int) -> int:
    level = normalize_difficulty(difficulty)
    return min(OPPONENT_MAX_TEAM_SIZE, OPPONENT_MIN_TEAM_SIZE + level // 2)


def roll_procedural_power(difficulty: int, rng: RandomSource) -> int:
    level = normalize_difficulty(difficulty)
    return OPPONENT_POWER_BASE + OPPONENT_POWER_PER_DIFFICULTY * level + rng.randint(0, OPPONENT_POWER_SPREAD)


def procedural_health(difficulty: int) -> int:
    level = normalize_difficulty(difficulty)
    return OPPONENT_HEALTH_BASE + OPPONENT_HEALTH_PER_DIFFICULTY * level


def encounter_multiplier(difficulty: int) -> float:
    level = normalize_difficulty(difficulty)
    return 1 + (level - 1) * ENCOUNTER_MULTIPLIER_STEP


def scale_encounter_stats(base_power: int, base_health: int, *, difficulty: int) -> tuple[int, int]:
    """Return (power, max_health) for a floor opponent at the given difficulty."""
    multiplier = encounter_multiplier(difficulty)
    power = max(0, math.floor(base_power * multiplier))
    max_health = max(1, math.floor(base_health * multiplier))
    return power, max_health
