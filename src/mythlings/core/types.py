"""Shared type aliases for the core and domain layers."""
from typing import Literal, Tuple

Side = Literal["player", "opponent"]
Affinity = Literal["fire", "water", "earth"]
Rarity = Literal["common", "rare", "epic", "legendary"]
RewardType = Literal["gold", "gems", "mythling", "equipment"]
CooldownScope = Literal["combatant", "ability"]

# (combatant_id, ability_id); combatant_id is "*" when cooldowns are shared per ability.
CooldownKey = Tuple[str, str]

__all__ = ["Affinity", "CooldownKey", "CooldownScope", "Rarity", "RewardType", "Side"]
