"""
Base player interface for automated play.
"""

import random
from typing import List, Optional

from domain.collision import check_collision
from domain.constants import Direction, VALID_MOVES, VECTORS
from domain.game_state import GameState
from domain.snake import is_reversal


class Player:
    """
    Base class/interface for player logic.

    A player looks at a GameState snapshot and returns the direction it
    wants the snake to take next. Its answer goes through the same
    pending-direction slot as keyboard input.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> Direction:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of: UP, DOWN, LEFT, RIGHT
        """
        raise NotImplementedError

    @staticmethod
    def safe_moves(game_state: GameState) -> List[Direction]:
        """
        Directions that neither reverse the snake nor hit a wall or its body.

        The whole body counts, tail included, since the game treats the tail
        cell as occupied on the tick it moves away.
        """
        head_x, head_y = game_state.head
        moves: List[Direction] = []
        for move in sorted(VALID_MOVES, key=lambda d: d.value):
            if is_reversal(game_state.direction, move):
                continue
            dx, dy = VECTORS[move]
            new_head = (head_x + dx, head_y + dy)
            collision = check_collision(new_head, game_state.snake_positions, game_state.grid_size)
            if collision is not None and collision.is_fatal:
                continue
            moves.append(move)
        return moves
