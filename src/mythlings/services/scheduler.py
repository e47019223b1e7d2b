"""Pacing hooks for the delay between the player's action and the opponent's reply."""
from __future__ import annotations

import time
from typing import Callable, Protocol


class TurnScheduler(Protocol):
    def pause(self, seconds: float) -> None:
        ...


class ImmediateScheduler:
    """Headless scheduler: the opponent replies without waiting."""

    def pause(self, seconds: float) -> None:
        return None


class SleepScheduler:
    """Blocks the calling thread for the configured delay."""

    def __init__(self, sleep: Callable[[float], None] = time.sleep) -> None:
        self._sleep = sleep

    def pause(self, seconds: float) -> None:
        if seconds > 0:
            self._sleep(seconds)
