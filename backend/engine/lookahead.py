"""
Depth-bounded adversarial lookahead (minimax with alpha-beta pruning).

Plies alternate between the controlled snake (maximizing) and the most
threatening opponent (minimizing). A round is resolved with the ruleset's
collision rules once both have moved. Each ply works on a new immutable
GameState, so sibling branches never share mutable state.

Search runs by iterative deepening under a Deadline; when the deadline
expires the last fully searched depth is kept.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set

from domain.constants import MOVE_PRIORITY, Move
from domain.game_state import GameState
from domain.snake import Snake

from . import weights
from .food import FoodUrgency, assess_food_urgency
from .safety import blocked_cells, safe_moves
from .scoring import HeuristicScorer

logger = logging.getLogger(__name__)


class SearchTimeout(Exception):
    """Raised inside the search when the deadline has passed."""


class Deadline:
    """Wall-clock budget for one decision. `budget_ms=None` never expires."""

    def __init__(self, budget_ms: Optional[float], clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.budget_ms = budget_ms
        self._expires_at = None if budget_ms is None else clock() + budget_ms / 1000.0

    def expired(self) -> bool:
        return self._expires_at is not None and self._clock() >= self._expires_at

    def check(self) -> None:
        if self.expired():
            raise SearchTimeout()

    @property
    def remaining_ms(self) -> float:
        if self._expires_at is None:
            return math.inf
        return max(0.0, (self._expires_at - self._clock()) * 1000.0)


@dataclass
class SearchResult:
    values: Dict[Move, float] = field(default_factory=dict)
    depth: int = 0
    nodes: int = 0
    timed_out: bool = False


def most_threatening_opponent(state: GameState) -> Optional[Snake]:
    """Nearest live opponent by head distance; ties go to the longer snake, then the id."""
    you = state.you
    opponents = state.opponents
    if not opponents:
        return None
    return min(
        opponents,
        key=lambda s: (s.head.manhattan(you.head), -s.length, s.id),
    )


def opponent_moves(state: GameState, opponent: Snake, contested_heads: Iterable = ()) -> List[Move]:
    """
    Moves the opponent could make without running into a wall or a body.

    Cells listed in `contested_heads` (heads that moved this round) stay
    available: entering one is a head-to-head settled by length.
    """
    blocked = blocked_cells(state, opponent) - set(contested_heads)
    return [
        move for move in MOVE_PRIORITY
        if state.board.in_bounds(opponent.head.moved(move))
        and opponent.head.moved(move) not in blocked
    ]


def resolve_collisions(state: GameState, moved_ids: Sequence[str]) -> GameState:
    """
    Eliminate snakes that died this round: walls, starvation, bodies, and
    head-to-head against an equal-or-longer snake. Snakes that did not move
    this round are static obstacles, head included.
    """
    board = state.board
    moved = set(moved_ids)
    dead: Set[str] = set()

    for sid in moved_ids:
        snake = board.snake(sid)
        if snake is None:
            continue
        head = snake.head
        if not board.in_bounds(head) or snake.health <= 0:
            dead.add(sid)
            continue
        for other in board.snakes:
            if other.id == sid:
                if head in other.body[1:]:
                    dead.add(sid)
            elif other.id in moved:
                if head in other.body[1:]:
                    dead.add(sid)
                elif other.head == head and other.length >= snake.length:
                    dead.add(sid)
            elif head in other.body:
                dead.add(sid)

    return state.eliminate(dead)


@dataclass
class _SearchContext:
    """Per-call search state. Kept off the searcher so one instance can serve concurrent games."""

    opponent_id: Optional[str]
    urgency: FoodUrgency
    deadline: Deadline
    nodes: int = 0


class AdversarialSearch:
    """Minimax over the controlled snake and its most threatening opponent."""

    def __init__(self, scorer: Optional[HeuristicScorer] = None, max_depth: int = weights.DEFAULT_SEARCH_DEPTH):
        self.scorer = scorer or HeuristicScorer()
        self.max_depth = max_depth

    def search(
        self,
        state: GameState,
        moves: Sequence[Move],
        deadline: Optional[Deadline] = None,
        urgency: Optional[FoodUrgency] = None,
    ) -> SearchResult:
        """
        Value every root move by iterative deepening.

        Args:
            state: root snapshot (not mutated)
            moves: root moves already known to be safe, in priority order
            deadline: optional budget; on expiry the last completed depth wins
            urgency: food urgency for this turn (computed if omitted)

        Returns:
            SearchResult. Values of non-best moves may be upper bounds
            because of pruning; the best move's value is exact.
        """
        if urgency is None:
            urgency = assess_food_urgency(state)
        opponent = most_threatening_opponent(state)
        ctx = _SearchContext(
            opponent_id=opponent.id if opponent else None,
            urgency=urgency,
            deadline=deadline or Deadline(None),
        )
        result = SearchResult()

        for depth in range(1, self.max_depth + 1):
            try:
                values = self._search_root(state, moves, depth, ctx)
            except SearchTimeout:
                result.timed_out = True
                logger.debug(
                    "Search timed out at depth %s after %s nodes (game %s turn %s)",
                    depth, ctx.nodes, state.game_id, state.turn,
                )
                break
            result.values = values
            result.depth = depth

        result.nodes = ctx.nodes
        return result

    def _search_root(self, state: GameState, moves: Sequence[Move], depth: int, ctx: _SearchContext) -> Dict[Move, float]:
        values: Dict[Move, float] = {}
        alpha = -math.inf
        for move in moves:
            child = state.move_snake(state.you_id, move)
            value = self._minimax(child, depth - 1, alpha, math.inf, False, ctx)
            values[move] = value
            alpha = max(alpha, value)
        return values

    def _loss(self, depth: int) -> float:
        return weights.LOSS_SCORE - depth * weights.LOSS_DEPTH_PENALTY

    def _minimax(
        self,
        state: GameState,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        ctx: _SearchContext,
    ) -> float:
        ctx.deadline.check()
        ctx.nodes += 1

        if not state.has_you:
            return self._loss(depth)
        if depth == 0:
            return self.scorer.evaluate(state, ctx.urgency)

        if maximizing:
            moves = safe_moves(state)
            if not moves:
                return self._loss(depth)
            value = -math.inf
            for move in moves:
                child = state.move_snake(state.you_id, move)
                value = max(value, self._minimax(child, depth - 1, alpha, beta, False, ctx))
                alpha = max(alpha, value)
                if alpha >= beta:
                    break
            return value

        # Opponent ply: the controlled snake has moved, the round is still open
        opponent = state.board.snake(ctx.opponent_id) if ctx.opponent_id else None
        if opponent is None or not opponent.alive:
            child = self._finish_round(state, [state.you_id])
            return self._minimax(child, depth - 1, alpha, beta, True, ctx)

        # A boxed-in opponent still has to move; the collision check removes it
        moves = opponent_moves(state, opponent, contested_heads=[state.you.head]) or [MOVE_PRIORITY[0]]
        value = math.inf
        for move in moves:
            child = self._finish_round(state.move_snake(opponent.id, move), [state.you_id, opponent.id])
            value = min(value, self._minimax(child, depth - 1, alpha, beta, True, ctx))
            beta = min(beta, value)
            if alpha >= beta:
                break
        return value

    @staticmethod
    def _finish_round(state: GameState, moved_ids: List[str]) -> GameState:
        return resolve_collisions(state, moved_ids).next_turn()
