"""
Food urgency and food target selection.

The urgency is computed once per turn and handed to the scorer instead of
re-deriving health thresholds in every term.
"""

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Optional

from domain.game_state import GameState
from domain.geometry import Point

from . import weights
from .pathfinding import a_star


class FoodUrgency(str, Enum):
    NONE = "none"
    BALANCED = "balanced"
    URGENT = "urgent"
    CRITICAL = "critical"

    @property
    def weight(self) -> float:
        return weights.FOOD_WEIGHTS[self.value]


@dataclass(frozen=True)
class FoodTarget:
    food: Point
    distance: int
    contested: bool


def larger_snake_nearby(state: GameState, radius: int = weights.FOOD_SAFETY_RADIUS) -> bool:
    you = state.you
    return any(
        snake.length > you.length and snake.head.manhattan(you.head) < radius
        for snake in state.opponents
    )


def assess_food_urgency(state: GameState) -> FoodUrgency:
    """
    Decide how hard the controlled snake should look for food this turn.

    Seeking requires low health, or middling health while still short, and
    no strictly longer snake within the safety radius.
    """
    you = state.you
    if not state.board.food or larger_snake_nearby(state):
        return FoodUrgency.NONE
    if you.health < weights.CRITICAL_HEALTH:
        return FoodUrgency.CRITICAL
    if you.health < weights.LOW_HEALTH:
        return FoodUrgency.URGENT
    if you.health < weights.MID_HEALTH and you.length < weights.PREFERRED_LENGTH:
        return FoodUrgency.BALANCED
    return FoodUrgency.NONE


def nearest_reachable_food(
    position: Point,
    state: GameState,
    blocked: AbstractSet[Point],
) -> Optional[FoodTarget]:
    """
    Closest food by verified path length from `position`.

    Food is path-checked in Manhattan order until no remaining food can beat
    the best path found (a path is never shorter than the Manhattan
    distance); food with no path is skipped. A target is `contested` when an
    equal-or-longer opponent is strictly closer to it.
    """
    if not state.board.food:
        return None

    by_distance = sorted(state.board.food, key=lambda f: (position.manhattan(f), f.x, f.y))
    best: Optional[FoodTarget] = None
    for food in by_distance:
        if best is not None and position.manhattan(food) >= best.distance:
            break
        path = a_star(position, food, state.board.width, state.board.height, blocked)
        if path is None:
            continue
        distance = len(path)
        if best is None or distance < best.distance:
            best = FoodTarget(food=food, distance=distance, contested=False)

    if best is None:
        return None

    you = state.you
    contested = any(
        snake.length >= you.length and snake.head.manhattan(best.food) < best.distance
        for snake in state.opponents
    )
    return FoodTarget(food=best.food, distance=best.distance, contested=contested)
