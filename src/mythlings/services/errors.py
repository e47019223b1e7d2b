"""Service-layer exceptions."""


class BattleInvariantError(Exception):
    """Raised when a battle transition would break an engine invariant.

    This signals a programming error (for example resolving an action in a
    finished battle); it is never used for ordinary invalid player input.
    """
