"""
Game constants for the Battlesnake decision engine.
"""

from enum import Enum
from typing import Dict, Tuple


class Move(str, Enum):
    """One of the four cardinal moves. The value is the wire name."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Tuple[int, int]:
        return MOVE_DELTAS[self]


# (0, 0) is the bottom-left corner, so "up" increases y
MOVE_DELTAS: Dict[Move, Tuple[int, int]] = {
    Move.UP: (0, 1),
    Move.DOWN: (0, -1),
    Move.LEFT: (-1, 0),
    Move.RIGHT: (1, 0),
}

# Fixed order used for enumeration and tie-breaking
MOVE_PRIORITY: Tuple[Move, ...] = (Move.UP, Move.DOWN, Move.LEFT, Move.RIGHT)
VALID_MOVES = {move.value for move in Move}
DEFAULT_MOVE = Move.UP

# Ruleset settings
MAX_HEALTH = 100
DEFAULT_TIMEOUT_MS = 500
