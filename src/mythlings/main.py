"""Entry-point for hosting the battle engine with the bundled content."""
from __future__ import annotations

from pathlib import Path
from typing import TextIO

from mythlings.core.config import load_config
from mythlings.core.log import configure_logging
from mythlings.core.rng import RNG
from mythlings.services import (
    BattleService,
    RepositoryCatalogProvider,
    RepositoryEncounterProvider,
    SleepScheduler,
)


def create_battle_service(
    config_path: Path | None = None,
    *,
    seed: int | None = None,
    log_stream: TextIO | None = None,
) -> BattleService:
    """Load the engine config, apply its log level and wire the bundled catalog.

    The opponent reply waits `opponent_turn_delay` seconds on the calling thread.
    """
    config = load_config(config_path)
    configure_logging(config.log_level, log_stream)
    return BattleService(
        RepositoryCatalogProvider(),
        RepositoryEncounterProvider(),
        rng=RNG(seed),
        config=config,
        scheduler=SleepScheduler(),
    )
