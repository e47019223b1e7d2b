"""Ability definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class AbilityDef:
    """Describes an ability as stored in the content catalog."""

    id: str
    name: str
    damage: int
    cooldown: int
    icon: str
    description: str = ""
