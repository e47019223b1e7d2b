"""Core utilities shared by every layer."""

from .config import EngineConfig, load_config, save_config
from .log import configure_logging
from .rng import RNG, RandomSource

__all__ = [
    "EngineConfig",
    "RNG",
    "RandomSource",
    "configure_logging",
    "load_config",
    "save_config",
]
