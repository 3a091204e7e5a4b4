"""
Maxi Yatzy - Engine Errors

Both errors derive from ValueError: they signal a caller asking for something
the current game state does not allow, not a transient failure.
"""


class InvalidOperationError(ValueError):
    """An action that is illegal in the current turn or game state."""


class ScoreAlreadySetError(InvalidOperationError):
    """A score card slot was written a second time."""
