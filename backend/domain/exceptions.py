"""
Exceptions shared by the domain model and the decision engine.
"""


class InvalidGameStateError(ValueError):
    """The incoming turn description cannot be turned into a valid GameState."""


class EngineInvariantError(RuntimeError):
    """A (simulated) game state broke an assumption the engine relies on,
    e.g. the controlled snake disappeared from the board."""
