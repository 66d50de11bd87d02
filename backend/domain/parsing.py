"""
Conversion of Battlesnake API turn payloads into GameState values.

Anything that cannot be parsed raises InvalidGameStateError so the
transport can reject the request before the engine sees it.
"""

from typing import Any, Dict, List

from .constants import DEFAULT_TIMEOUT_MS
from .exceptions import InvalidGameStateError
from .game_state import Board, GameState
from .geometry import Point
from .snake import Snake


def _require(mapping: Any, key: str, context: str) -> Any:
    if not isinstance(mapping, dict):
        raise InvalidGameStateError(f"{context} must be an object")
    if key not in mapping or mapping[key] is None:
        raise InvalidGameStateError(f"Missing '{key}' in {context}")
    return mapping[key]


def _as_int(value: Any, context: str) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidGameStateError(f"{context} must be an integer, got {value!r}")
    return value


def parse_point(raw: Any, context: str = "point") -> Point:
    return Point(
        _as_int(_require(raw, "x", context), f"{context}.x"),
        _as_int(_require(raw, "y", context), f"{context}.y"),
    )


def parse_snake(raw: Dict[str, Any]) -> Snake:
    snake_id = str(_require(raw, "id", "snake"))
    context = f"snake '{snake_id}'"

    body_raw = _require(raw, "body", context)
    if not isinstance(body_raw, list) or not body_raw:
        raise InvalidGameStateError(f"{context} must have a non-empty body")
    body = tuple(parse_point(seg, f"{context} body") for seg in body_raw)

    # The API repeats the head separately; it must agree with the body
    if raw.get("head") is not None and parse_point(raw["head"], f"{context} head") != body[0]:
        raise InvalidGameStateError(f"{context} head does not match body[0]")

    health = _as_int(_require(raw, "health", context), f"{context} health")
    return Snake(id=snake_id, health=health, body=body, name=str(raw.get("name") or ""))


def parse_game_state(payload: Dict[str, Any]) -> GameState:
    """
    Build a GameState from a /move request body.

    Args:
        payload: decoded JSON with 'game', 'turn', 'board' and 'you'

    Returns:
        GameState in which `you` is the board's own copy of the controlled snake.

    Raises:
        InvalidGameStateError: on any missing or malformed field.
    """
    if not isinstance(payload, dict):
        raise InvalidGameStateError("Request body must be a JSON object")

    game = _require(payload, "game", "payload")
    game_id = str(_require(game, "id", "game"))
    timeout_ms = game.get("timeout", DEFAULT_TIMEOUT_MS)
    timeout_ms = _as_int(timeout_ms, "game.timeout")

    turn = _as_int(_require(payload, "turn", "payload"), "turn")
    board_raw = _require(payload, "board", "payload")
    width = _as_int(_require(board_raw, "width", "board"), "board.width")
    height = _as_int(_require(board_raw, "height", "board"), "board.height")

    food_raw = board_raw.get("food") or []
    if not isinstance(food_raw, list):
        raise InvalidGameStateError("board.food must be a list")
    food = frozenset(parse_point(f, "food") for f in food_raw)

    snakes_raw = board_raw.get("snakes") or []
    if not isinstance(snakes_raw, list):
        raise InvalidGameStateError("board.snakes must be a list")
    snakes: List[Snake] = [parse_snake(s) for s in snakes_raw]

    you = parse_snake(_require(payload, "you", "payload"))
    on_board = next((s for s in snakes if s.id == you.id), None)
    if on_board is None:
        snakes.insert(0, you)
    elif on_board != you:
        raise InvalidGameStateError(
            f"'you' snake '{you.id}' disagrees with its entry in board.snakes"
        )

    board = Board(width=width, height=height, food=food, snakes=tuple(snakes))
    return GameState(
        game_id=game_id,
        turn=turn,
        board=board,
        you_id=you.id,
        timeout_ms=timeout_ms,
    )
