"""
Heuristic scorer: one scalar per candidate head position, higher is better.

The score is a sum of independent weighted terms (see ScoreBreakdown). Each
term is a plain function so it can be tested on its own; the weights live
in engine.weights.
"""

import math
from dataclasses import dataclass, fields
from typing import AbstractSet, Optional

from domain.game_state import GameState
from domain.geometry import Point, distance_to_center
from domain.snake import Snake

from . import weights
from .food import FoodUrgency, assess_food_urgency, nearest_reachable_food
from .safety import blocked_cells, escape_routes, is_safe
from .space import SpaceReport, reachable_area
from .space_cache import ReachableSpaceCache

UNSAFE_SCORE = -math.inf


@dataclass
class ScoreBreakdown:
    escape: float = 0.0
    space: float = 0.0
    food: float = 0.0
    trap: float = 0.0
    deception: float = 0.0
    aggression: float = 0.0
    center: float = 0.0

    @property
    def total(self) -> float:
        return sum(getattr(self, f.name) for f in fields(self))

    def as_dict(self) -> dict:
        data = {f.name: round(getattr(self, f.name), 2) for f in fields(self)}
        data["total"] = round(self.total, 2)
        return data


# ---------------------------------------------------------------------------
# Terms
# ---------------------------------------------------------------------------

def escape_term(routes: int) -> float:
    if routes == 0:
        return -weights.NO_ESCAPE_PENALTY
    return routes * weights.ESCAPE_ROUTE_WEIGHT


def space_term(report: SpaceReport, length: int) -> float:
    capped = min(report.area, length * weights.SPACE_CAP_FACTOR)
    score = capped * weights.SPACE_WEIGHT
    if report.area < length:
        score -= weights.SPACE_TRAPPED_PENALTY
    elif report.dead_end:
        score -= weights.DEAD_END_PENALTY
    else:
        score += weights.SPACE_COMFORT_BONUS
    return score


def food_term(
    position: Point,
    state: GameState,
    urgency: FoodUrgency,
    blocked: AbstractSet[Point],
) -> float:
    if urgency is FoodUrgency.NONE:
        return 0.0
    target = nearest_reachable_food(position, state, blocked)
    if target is None:
        return 0.0
    closeness = max(0, state.board.width + state.board.height - target.distance)
    score = urgency.weight * closeness
    if target.contested:
        score *= weights.CONTESTED_FOOD_FACTOR
    return score


def opponent_safe_moves(opponent: Snake, state: GameState, extra_blocked: Optional[Point] = None) -> int:
    """Safe moves left to `opponent`, optionally with `extra_blocked` taken away from it."""
    return sum(
        1 for n in opponent.head.neighbors()
        if n != extra_blocked and is_safe(n, state, opponent)
    )


def trap_term(position: Point, state: GameState) -> float:
    """Bonus per nearby opponent that holding `position` cuts down to at most one safe move."""
    score = 0.0
    for opponent in state.opponents:
        # Only opponents whose next cells we can actually touch
        if opponent.head.manhattan(position) > 2:
            continue
        # Only count cells that actually take a move away
        before = opponent_safe_moves(opponent, state)
        after = opponent_safe_moves(opponent, state, extra_blocked=position)
        if after <= 1 and after < before:
            score += weights.TRAP_BONUS
    return score


def deception_term(position: Point, state: GameState, you: Snake, report: SpaceReport) -> float:
    """
    Bonus for positions a naive opponent would read as risky (hugging our own
    body or a wall) that our own space check says are fine, plus a bait bonus
    for covering a cell a shorter opponent could step into next turn.
    """
    score = 0.0
    if report.area >= you.length:
        own = set(you.body[1:])
        hugged = sum(1 for n in position.neighbors() if n in own)
        on_edge = (
            position.x in (0, state.board.width - 1)
            or position.y in (0, state.board.height - 1)
        )
        if hugged >= weights.HUG_SEGMENTS or on_edge:
            score += weights.APPARENT_TRAP_BONUS

    for opponent in state.opponents:
        if opponent.length >= you.length:
            continue
        contested = [
            n for n in position.neighbors()
            if n.manhattan(opponent.head) == 1 and state.board.in_bounds(n)
        ]
        if contested:
            score += weights.BAIT_BONUS
    return score


def aggression_term(position: Point, state: GameState, you: Snake) -> float:
    score = 0.0
    for opponent in state.opponents:
        closeness = max(0, weights.AGGRESSION_RADIUS - position.manhattan(opponent.head))
        if opponent.length < you.length:
            if you.health > weights.AGGRESSION_MIN_HEALTH:
                score += closeness * weights.AGGRESSION_WEIGHT
        elif opponent.length > you.length:
            score -= closeness * weights.AVOIDANCE_WEIGHT
    return score


def center_term(position: Point, state: GameState) -> float:
    distance = distance_to_center(position, state.board.width, state.board.height)
    return weights.CENTER_WEIGHT / (1.0 + distance)


# ---------------------------------------------------------------------------
# Scorer
# ---------------------------------------------------------------------------

class HeuristicScorer:
    """
    Scores candidate positions for the controlled snake.

    `score(position, state)` judges a candidate next head against the pre-move
    state; `evaluate(state)` judges a simulated state in which the controlled
    snake's head already sits on the position being judged.
    """

    def __init__(self, cache: Optional[ReachableSpaceCache] = None, use_cache: bool = True):
        self.cache = cache
        self.use_cache = use_cache

    def score(
        self,
        position: Point,
        state: GameState,
        urgency: Optional[FoodUrgency] = None,
    ) -> float:
        if not is_safe(position, state):
            return UNSAFE_SCORE
        return self.breakdown(position, state, urgency).total

    def evaluate(self, state: GameState, urgency: Optional[FoodUrgency] = None) -> float:
        you = state.you
        score = self.breakdown(you.head, state, urgency).total
        eliminated = [sid for sid in state.eliminated if sid != state.you_id]
        return score + len(eliminated) * weights.ELIMINATION_BONUS

    def breakdown(
        self,
        position: Point,
        state: GameState,
        urgency: Optional[FoodUrgency] = None,
    ) -> ScoreBreakdown:
        """Compute every term for `position`. Safety is the caller's concern."""
        you = state.you
        if urgency is None:
            urgency = assess_food_urgency(state)

        report = reachable_area(position, state, you, cache=self.cache, use_cache=self.use_cache)
        blocked = blocked_cells(state, you)

        return ScoreBreakdown(
            escape=escape_term(escape_routes(position, state, you)),
            space=space_term(report, you.length),
            food=food_term(position, state, urgency, blocked),
            trap=trap_term(position, state),
            deception=deception_term(position, state, you, report),
            aggression=aggression_term(position, state, you),
            center=center_term(position, state),
        )
