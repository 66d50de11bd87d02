"""
Shortest-path search over the board grid (A* with a Manhattan heuristic).

Used by the scorer to confirm that food is actually reachable and to
measure how far away it is. Step cost is uniform.
"""

import heapq
import itertools
from typing import AbstractSet, Dict, List, Optional

from domain.game_state import GameState
from domain.geometry import Point, in_bounds
from domain.snake import Snake

from .safety import blocked_cells


def a_star(
    start: Point,
    goal: Point,
    width: int,
    height: int,
    blocked: AbstractSet[Point],
) -> Optional[List[Point]]:
    """
    Find a shortest path from start to goal avoiding blocked cells.

    The start cell itself is never treated as blocked. Frontier ties on f are
    broken by the lower x + y, then by insertion order, so results are
    deterministic. Every cell is expanded at most once, so the search ends
    after at most width * height expansions even on a sealed-off board.

    Returns:
        The cells to walk through, excluding start and including goal
        ([] when start == goal), or None when the goal cannot be reached.
    """
    if start == goal:
        return []
    if goal in blocked or not in_bounds(goal, width, height):
        return None

    counter = itertools.count()
    open_heap = [(start.manhattan(goal), start.x + start.y, next(counter), start)]
    g_score: Dict[Point, int] = {start: 0}
    came_from: Dict[Point, Point] = {}
    closed = set()

    while open_heap:
        _, _, _, current = heapq.heappop(open_heap)
        if current in closed:
            continue
        if current == goal:
            return _reconstruct(came_from, start, goal)
        closed.add(current)

        for neighbor in current.neighbors():
            if neighbor in closed or neighbor in blocked:
                continue
            if not in_bounds(neighbor, width, height):
                continue
            tentative = g_score[current] + 1
            if tentative < g_score.get(neighbor, width * height + 1):
                g_score[neighbor] = tentative
                came_from[neighbor] = current
                f = tentative + neighbor.manhattan(goal)
                heapq.heappush(open_heap, (f, neighbor.x + neighbor.y, next(counter), neighbor))

    return None


def _reconstruct(came_from: Dict[Point, Point], start: Point, goal: Point) -> List[Point]:
    path = [goal]
    current = goal
    while came_from[current] != start:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path


def shortest_path(
    start: Point,
    goal: Point,
    state: GameState,
    mover: Optional[Snake] = None,
) -> Optional[List[Point]]:
    """Shortest path on `state`'s board, avoiding every snake body (mover's vacating tail excepted)."""
    blocked = blocked_cells(state, mover)
    return a_star(start, goal, state.board.width, state.board.height, blocked)


def path_length(
    start: Point,
    goal: Point,
    state: GameState,
    mover: Optional[Snake] = None,
) -> Optional[int]:
    path = shortest_path(start, goal, state, mover)
    return None if path is None else len(path)
