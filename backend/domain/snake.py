"""
Snake entity for the decision engine.
"""

from dataclasses import dataclass
from typing import AbstractSet, Tuple

from .constants import MAX_HEALTH, Move
from .exceptions import InvalidGameStateError
from .geometry import Point


@dataclass(frozen=True)
class Snake:
    """
    Represents a snake on the board.

    Attributes:
        id: identifier, unique within a game
        health: 0-100; 0 means the snake has been eliminated
        body: tuple of Points from head (index 0) to tail (last index)
        name: display name, informational only
    """

    id: str
    health: int
    body: Tuple[Point, ...]
    name: str = ""

    def __post_init__(self):
        if not self.body:
            raise InvalidGameStateError(f"Snake '{self.id}' has an empty body")
        if not 0 <= self.health <= MAX_HEALTH:
            raise InvalidGameStateError(
                f"Snake '{self.id}' has health {self.health}, expected 0-{MAX_HEALTH}"
            )

    @property
    def head(self) -> Point:
        """Return the head position (first element)."""
        return self.body[0]

    @property
    def tail(self) -> Point:
        return self.body[-1]

    @property
    def length(self) -> int:
        return len(self.body)

    @property
    def alive(self) -> bool:
        return self.health > 0

    @property
    def is_growing(self) -> bool:
        """
        True when the tail will NOT vacate on the next step.

        The ruleset grows a snake by stacking a copy of its tail segment on the
        turn it eats, so a stacked tail means the snake is already longer than
        it was at the start of the previous turn and the tail cell stays put.
        """
        return len(self.body) >= 2 and self.body[-1] == self.body[-2]

    def hazard_segments(self, for_self: bool) -> Tuple[Point, ...]:
        """
        Segments that are fatal to move into.

        For the moving snake itself the tail is excluded unless it is growing.
        Other snakes' tails are always hazards.
        """
        if for_self and not self.is_growing:
            return self.body[:-1]
        return self.body

    def advance(self, move: Move, food: AbstractSet[Point]) -> "Snake":
        """Return the snake after one step in `move` direction."""
        new_head = self.head.moved(move)
        body = (new_head,) + self.body[:-1]
        if new_head in food:
            return Snake(self.id, MAX_HEALTH, body + (body[-1],), self.name)
        return Snake(self.id, max(self.health - 1, 0), body, self.name)
