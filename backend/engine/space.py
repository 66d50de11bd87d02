"""
Reachable-space analysis: flood fill from a candidate head position.
"""

from collections import deque
from dataclasses import dataclass
from typing import AbstractSet, Optional

from domain.game_state import GameState
from domain.geometry import Point, in_bounds
from domain.snake import Snake

from .safety import blocked_cells
from .space_cache import ReachableSpaceCache, SpaceCacheKey, shared_cache

# Area below length * DEAD_END_FACTOR is "not enough room to keep living"
DEAD_END_FACTOR = 2


@dataclass(frozen=True)
class SpaceReport:
    area: int
    dead_end: bool


def flood_fill(start: Point, width: int, height: int, blocked: AbstractSet[Point]) -> int:
    """Count cells reachable from start (inclusive). 0 if start itself is blocked."""
    if start in blocked or not in_bounds(start, width, height):
        return 0
    visited = {start}
    queue = deque([start])
    while queue:
        cx, cy = queue.popleft()
        for nx, ny in ((cx, cy + 1), (cx, cy - 1), (cx - 1, cy), (cx + 1, cy)):
            if 0 <= nx < width and 0 <= ny < height:
                nxt = Point(nx, ny)
                if nxt not in blocked and nxt not in visited:
                    visited.add(nxt)
                    queue.append(nxt)
    return len(visited)


def reachable_area(
    position: Point,
    state: GameState,
    mover: Optional[Snake] = None,
    cache: Optional[ReachableSpaceCache] = None,
    use_cache: bool = True,
) -> SpaceReport:
    """
    Flood fill over unoccupied cells from `position`.

    When `position` is the mover's own head (scoring a simulated state where
    the move already happened) the head cell is the start of the fill rather
    than an obstacle.

    Args:
        position: cell to start from
        state: board snapshot
        mover: snake whose perspective is used (default: the controlled snake);
            its own tail counts as free unless it is growing
        cache: memo to use (default: the process-wide shared cache)
        use_cache: set False to bypass memoization entirely

    Returns:
        SpaceReport with the reachable cell count and the dead-end flag.
    """
    if mover is None:
        mover = state.you

    key = None
    if use_cache:
        if cache is None:
            cache = shared_cache()
        key = SpaceCacheKey(state.game_id, state.turn, mover.id, position, state.occupancy)
        entry = cache.get(key)
        if entry is not None:
            return SpaceReport(entry.area, entry.dead_end)

    blocked = blocked_cells(state, mover)
    if position == mover.head:
        blocked.discard(position)
    area = flood_fill(position, state.board.width, state.board.height, blocked)
    report = SpaceReport(area=area, dead_end=area < mover.length * DEAD_END_FACTOR)

    if key is not None:
        cache.put(key, report.area, report.dead_end)
    return report
