"""
Collision and safety evaluation for candidate head positions.

Everything here is a pure function of its inputs.
"""

from dataclasses import dataclass
from typing import List, Optional, Set

from domain.constants import MOVE_PRIORITY, Move
from domain.game_state import GameState
from domain.geometry import Point
from domain.snake import Snake

REASON_BOUNDS = "bounds"
REASON_SELF = "self"
REASON_ENEMY = "enemy"
REASON_HEAD_TO_HEAD = "head_to_head"


@dataclass(frozen=True)
class SafetyVerdict:
    safe: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.safe


SAFE = SafetyVerdict(True)


def is_safe(position: Point, state: GameState, mover: Optional[Snake] = None) -> SafetyVerdict:
    """
    Classify `position` as the next head of `mover` (default: the controlled snake).

    Checks, in order: board bounds, the mover's own body (tail excluded unless
    it is growing), every other snake's full body, and head-to-head contests
    against equal-or-longer live snakes.
    """
    if mover is None:
        mover = state.you

    if not state.board.in_bounds(position):
        return SafetyVerdict(False, REASON_BOUNDS)

    if position in mover.hazard_segments(for_self=True):
        return SafetyVerdict(False, REASON_SELF)

    for snake in state.board.snakes:
        if snake.id == mover.id:
            continue
        if position in snake.body:
            return SafetyVerdict(False, REASON_ENEMY)

    for snake in state.board.snakes:
        if snake.id == mover.id or not snake.alive:
            continue
        if snake.head.manhattan(position) == 1 and snake.length >= mover.length:
            return SafetyVerdict(False, REASON_HEAD_TO_HEAD)

    return SAFE


def blocked_cells(state: GameState, mover: Optional[Snake] = None) -> Set[Point]:
    """Cells the mover cannot enter next step: every body segment except its own vacating tail."""
    if mover is None:
        mover = state.you
    blocked: Set[Point] = set()
    for snake in state.board.snakes:
        blocked.update(snake.hazard_segments(for_self=snake.id == mover.id))
    return blocked


def safe_moves(state: GameState, mover: Optional[Snake] = None) -> List[Move]:
    if mover is None:
        mover = state.you
    return [
        move for move in MOVE_PRIORITY
        if is_safe(mover.head.moved(move), state, mover)
    ]


def escape_routes(position: Point, state: GameState, mover: Optional[Snake] = None) -> int:
    """Number of orthogonal neighbours of `position` that are themselves safe (0-4)."""
    if mover is None:
        mover = state.you
    return sum(1 for n in position.neighbors() if is_safe(n, state, mover))


def is_basically_safe(position: Point, state: GameState) -> bool:
    """Minimal emergency check: on the board and not on any snake segment."""
    if not state.board.in_bounds(position):
        return False
    return not any(position in snake.body for snake in state.board.snakes)
