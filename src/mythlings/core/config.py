"""Engine configuration helpers with JSON persistence."""
from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path

from mythlings.core.types import CooldownScope

CONFIG_ENV_VAR = "MYTHLINGS_CONFIG"

_DEFAULT_OPPONENT_TURN_DELAY = 1.5
_DEFAULT_COOLDOWN_SCOPE: CooldownScope = "combatant"
_DEFAULT_LOG_LEVEL = "INFO"
_DEFAULT_LOG_TAIL_SIZE = 6
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Tunable engine behavior. Defaults reproduce the shipped game rules."""

    opponent_turn_delay: float = _DEFAULT_OPPONENT_TURN_DELAY
    cooldown_scope: CooldownScope = _DEFAULT_COOLDOWN_SCOPE
    opponent_respects_cooldowns: bool = False
    # When False the caller drives the opponent turn via BattleService.run_opponent_turn.
    auto_opponent_turn: bool = True
    log_level: str = _DEFAULT_LOG_LEVEL
    log_tail_size: int = _DEFAULT_LOG_TAIL_SIZE


def get_user_config_dir() -> Path:
    """Return the per-user config directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "Mythlings"
        return Path.home() / "Mythlings"
    return Path.home() / ".config" / "mythlings"


def get_default_config_path() -> Path:
    """Return the config path, honoring the MYTHLINGS_CONFIG override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return get_user_config_dir() / "engine.json"


def _normalize_delay(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return _DEFAULT_OPPONENT_TURN_DELAY
    return max(0.0, float(value))


def _normalize_scope(value: object) -> CooldownScope:
    return "ability" if value == "ability" else _DEFAULT_COOLDOWN_SCOPE


def _normalize_log_level(value: object) -> str:
    if isinstance(value, str) and value.upper() in _LOG_LEVELS:
        return value.upper()
    return _DEFAULT_LOG_LEVEL


def _normalize_tail_size(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return _DEFAULT_LOG_TAIL_SIZE
    return value


def normalize_config(raw: dict) -> EngineConfig:
    """Build a config from a raw mapping, replacing invalid values with defaults."""
    return EngineConfig(
        opponent_turn_delay=_normalize_delay(raw.get("opponent_turn_delay", _DEFAULT_OPPONENT_TURN_DELAY)),
        cooldown_scope=_normalize_scope(raw.get("cooldown_scope")),
        opponent_respects_cooldowns=raw.get("opponent_respects_cooldowns") is True,
        auto_opponent_turn=raw.get("auto_opponent_turn") is not False,
        log_level=_normalize_log_level(raw.get("log_level")),
        log_tail_size=_normalize_tail_size(raw.get("log_tail_size", _DEFAULT_LOG_TAIL_SIZE)),
    )


def load_config(path: Path | None = None) -> EngineConfig:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return EngineConfig()
    if not isinstance(raw, dict):
        return EngineConfig()
    return normalize_config(raw)


def save_config(config: EngineConfig, path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = asdict(normalize_config(asdict(config)))
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
