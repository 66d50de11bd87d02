"""
Domain entities for the Battlesnake decision engine.

This module contains the value types that describe one turn of a game.
They are immutable and independent of transport concerns (HTTP, logging).
"""

from .constants import Move, MOVE_PRIORITY, VALID_MOVES, DEFAULT_MOVE, MAX_HEALTH
from .exceptions import InvalidGameStateError, EngineInvariantError
from .geometry import Point, in_bounds
from .snake import Snake
from .game_state import Board, GameState
from .parsing import parse_game_state

__all__ = [
    'Move', 'MOVE_PRIORITY', 'VALID_MOVES', 'DEFAULT_MOVE', 'MAX_HEALTH',
    'InvalidGameStateError', 'EngineInvariantError',
    'Point', 'in_bounds',
    'Snake',
    'Board',
    'GameState',
    'parse_game_state',
]
