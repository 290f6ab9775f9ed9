"""
Domain entities for the Retro Snake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (database, HTTP, LLM calls, etc.).
"""

from .constants import (
    Coordinate, Direction, GameStatus,
    UP, DOWN, LEFT, RIGHT, VALID_MOVES,
)
from .grid import Grid
from .snake import Snake, advance, is_reversal, resolve_direction, initial_snake
from .food import FoodSpawner
from .collision import CollisionKind, check_collision
from .controls import direction_for_key, parse_direction
from .game_state import GameState

__all__ = [
    'Coordinate', 'Direction', 'GameStatus',
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES',
    'Grid',
    'Snake', 'advance', 'is_reversal', 'resolve_direction', 'initial_snake',
    'FoodSpawner',
    'CollisionKind', 'check_collision',
    'direction_for_key', 'parse_direction',
    'GameState',
]
