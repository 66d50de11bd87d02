"""
Small builders for boards and turn payloads used across the test modules.
"""

import os
import sys
from typing import Iterable, Optional, Sequence, Tuple

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.game_state import Board, GameState
from domain.geometry import Point
from domain.snake import Snake


def make_snake(snake_id: str, body: Sequence[Tuple[int, int]], health: int = 100) -> Snake:
    return Snake(id=snake_id, health=health, body=tuple(Point(x, y) for x, y in body), name=snake_id)


def make_state(
    you_body: Sequence[Tuple[int, int]],
    others: Iterable[Snake] = (),
    food: Iterable[Tuple[int, int]] = (),
    width: int = 11,
    height: int = 11,
    turn: int = 1,
    health: int = 100,
    game_id: str = "game-1",
    timeout_ms: int = 500,
    you: Optional[Snake] = None,
) -> GameState:
    you = you or make_snake("you", you_body, health=health)
    board = Board(
        width=width,
        height=height,
        food=frozenset(Point(x, y) for x, y in food),
        snakes=(you,) + tuple(others),
    )
    return GameState(game_id=game_id, turn=turn, board=board, you_id=you.id, timeout_ms=timeout_ms)


def scenario_state(**overrides) -> GameState:
    """11x11, self [(5,5),(5,4),(5,3)], longer enemy [(7,5)..(7,2)], food (9,9)."""
    enemy = make_snake("enemy", [(7, 5), (7, 4), (7, 3), (7, 2)])
    params = dict(you_body=[(5, 5), (5, 4), (5, 3)], others=[enemy], food=[(9, 9)])
    params.update(overrides)
    return make_state(**params)


def enclosed_state() -> GameState:
    """Self in the bottom-left corner with its neck above and an enemy to the right."""
    enemy = make_snake("enemy", [(1, 0), (1, 1), (1, 2), (1, 3)])
    return make_state([(0, 0), (0, 1), (0, 2)], others=[enemy], food=[(6, 6)], health=30, turn=40)


def point_payload(points: Sequence[Tuple[int, int]]):
    return [{"x": x, "y": y} for x, y in points]


def snake_payload(snake_id: str, body: Sequence[Tuple[int, int]], health: int = 100) -> dict:
    points = point_payload(body)
    return {
        "id": snake_id,
        "name": snake_id,
        "health": health,
        "body": points,
        "head": points[0],
        "length": len(points),
    }


def move_payload(
    you_body: Sequence[Tuple[int, int]] = ((5, 5), (5, 4), (5, 3)),
    others: Sequence[dict] = (),
    food: Sequence[Tuple[int, int]] = ((9, 9),),
    game_id: str = "game-1",
    turn: int = 1,
    width: int = 11,
    height: int = 11,
) -> dict:
    you = snake_payload("you", you_body)
    return {
        "game": {"id": game_id, "ruleset": {"name": "standard"}, "timeout": 500},
        "turn": turn,
        "board": {
            "width": width,
            "height": height,
            "food": point_payload(food),
            "hazards": [],
            "snakes": [you, *others],
        },
        "you": you,
    }
