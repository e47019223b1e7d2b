"""Turn-based battle engine for the Mythlings collectible battler."""

__version__ = "0.1.0"
