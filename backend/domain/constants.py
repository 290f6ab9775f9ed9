"""
Game constants for Retro Snake.
"""

from enum import Enum
from typing import Dict, NamedTuple, Tuple


class Coordinate(NamedTuple):
    """A grid cell. (0, 0) is the top-left corner."""
    x: int
    y: int


class Direction(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def opposite(self) -> "Direction":
        return OPPOSITES[self]

    @property
    def vector(self) -> Tuple[int, int]:
        return VECTORS[self]


class GameStatus(str, Enum):
    IDLE = "IDLE"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    GAME_OVER = "GAME_OVER"


# Movement directions
UP = Direction.UP
DOWN = Direction.DOWN
LEFT = Direction.LEFT
RIGHT = Direction.RIGHT
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

OPPOSITES: Dict[Direction, Direction] = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Screen coordinates: y grows downwards
VECTORS: Dict[Direction, Tuple[int, int]] = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

# Game settings
GRID_SIZE = 20
INITIAL_DIRECTION = UP
BASE_SPEED_MS = 150
MIN_SPEED_MS = 50
SCORE_STEP = 50
SPEED_DECREMENT_MS = 5
FOOD_SCORE = 10
LEADERBOARD_SIZE = 5

DEFAULT_MESSAGE = "Game Over!"
OFFLINE_MESSAGE = "Game Over! (AI offline)"
