"""
Board and GameState entities - an immutable snapshot of one turn.

Simulation never mutates a snapshot: every "advance" returns a new value
sharing the unchanged parts, so sibling lookahead branches cannot alias
each other's state.
"""

from dataclasses import dataclass, replace
from typing import FrozenSet, Iterable, List, Optional, Tuple

from .constants import DEFAULT_TIMEOUT_MS, Move
from .exceptions import EngineInvariantError, InvalidGameStateError
from .geometry import Point, in_bounds
from .snake import Snake


@dataclass(frozen=True)
class Board:
    """
    Attributes:
        width, height: board dimensions (positive)
        food: set of food positions
        snakes: every snake in the game, including the controlled one
    """

    width: int
    height: int
    food: FrozenSet[Point]
    snakes: Tuple[Snake, ...]

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidGameStateError(
                f"Board dimensions must be positive, got {self.width}x{self.height}"
            )
        ids = [snake.id for snake in self.snakes]
        if len(ids) != len(set(ids)):
            raise InvalidGameStateError(f"Duplicate snake ids on board: {ids}")

    def in_bounds(self, point: Point) -> bool:
        return in_bounds(point, self.width, self.height)

    def snake(self, snake_id: str) -> Optional[Snake]:
        for snake in self.snakes:
            if snake.id == snake_id:
                return snake
        return None


@dataclass(frozen=True)
class GameState:
    """
    A snapshot of the game at a specific turn, seen from the controlled snake.

    Attributes:
        game_id: identifier of the game this turn belongs to
        turn: turn number, increasing within a game
        board: the board, holding every snake
        you_id: id of the controlled snake; `you` is always looked up on the board
        timeout_ms: per-turn response deadline announced by the game
        eliminated: ids of snakes removed during simulation
    """

    game_id: str
    turn: int
    board: Board
    you_id: str
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    eliminated: Tuple[str, ...] = ()

    @property
    def you(self) -> Snake:
        snake = self.board.snake(self.you_id)
        if snake is None:
            raise EngineInvariantError(
                f"Controlled snake '{self.you_id}' is missing from game {self.game_id}"
            )
        return snake

    @property
    def has_you(self) -> bool:
        return self.board.snake(self.you_id) is not None

    @property
    def opponents(self) -> List[Snake]:
        """Live snakes other than the controlled one."""
        return [s for s in self.board.snakes if s.id != self.you_id and s.alive]

    @property
    def occupancy(self) -> Tuple[Tuple[Point, ...], ...]:
        """Every body on the board, in board order. Identifies the layout."""
        return tuple(snake.body for snake in self.board.snakes)

    def move_snake(self, snake_id: str, move: Move) -> "GameState":
        """Return a new state where one snake has advanced (and maybe eaten)."""
        snake = self.board.snake(snake_id)
        if snake is None:
            raise EngineInvariantError(f"Cannot move unknown snake '{snake_id}'")

        moved = snake.advance(move, self.board.food)
        food = self.board.food
        if moved.head in food:
            food = food - {moved.head}

        snakes = tuple(moved if s.id == snake_id else s for s in self.board.snakes)
        return replace(self, board=replace(self.board, food=food, snakes=snakes))

    def eliminate(self, snake_ids: Iterable[str]) -> "GameState":
        doomed = set(snake_ids)
        if not doomed:
            return self
        snakes = tuple(s for s in self.board.snakes if s.id not in doomed)
        return replace(
            self,
            board=replace(self.board, snakes=snakes),
            eliminated=self.eliminated + tuple(sorted(doomed)),
        )

    def next_turn(self) -> "GameState":
        return replace(self, turn=self.turn + 1)

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        Y = controlled snake head, y = its body
        0,1,2... = other snake heads (board order), o = their bodies
        (0,0) at bottom left and x-axis labels at bottom
        """
        board = [['.' for _ in range(self.board.width)] for _ in range(self.board.height)]

        for fx, fy in self.board.food:
            board[fy][fx] = 'F'

        for i, snake in enumerate(self.board.snakes):
            is_you = snake.id == self.you_id
            # Draw tail first so the head wins when segments overlap
            for pos_idx in range(len(snake.body) - 1, -1, -1):
                x, y = snake.body[pos_idx]
                if not in_bounds(Point(x, y), self.board.width, self.board.height):
                    continue
                if pos_idx == 0:
                    board[y][x] = 'Y' if is_you else str(i % 10)
                else:
                    board[y][x] = 'y' if is_you else 'o'

        result = []
        # Print rows in reverse order (bottom to top)
        for y in range(self.board.height - 1, -1, -1):
            result.append(f"{y:2d} {' '.join(board[y])}")

        result.append("   " + " ".join(str(i % 10) for i in range(self.board.width)))

        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState game={self.game_id} turn={self.turn}, "
            f"board={self.board.width}x{self.board.height}, "
            f"snakes={len(self.board.snakes)}, food={len(self.board.food)}>"
        )
