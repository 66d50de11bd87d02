"""
Coordinate arithmetic for the board grid.
"""

from typing import List, NamedTuple, Tuple

from .constants import MOVE_DELTAS, MOVE_PRIORITY, Move


class Point(NamedTuple):
    """An (x, y) cell. Immutable, hashable, equal by coordinate."""

    x: int
    y: int

    def moved(self, move: Move) -> "Point":
        dx, dy = MOVE_DELTAS[move]
        return Point(self.x + dx, self.y + dy)

    def neighbors(self) -> List["Point"]:
        """Orthogonal neighbours in MOVE_PRIORITY order (may be off-board)."""
        return [self.moved(move) for move in MOVE_PRIORITY]

    def manhattan(self, other: "Point") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


def in_bounds(point: Point, width: int, height: int) -> bool:
    return 0 <= point.x < width and 0 <= point.y < height


def board_center(width: int, height: int) -> Tuple[float, float]:
    return (width - 1) / 2.0, (height - 1) / 2.0


def distance_to_center(point: Point, width: int, height: int) -> float:
    cx, cy = board_center(width, height)
    return abs(point.x - cx) + abs(point.y - cy)
