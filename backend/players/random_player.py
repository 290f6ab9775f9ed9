"""
Random player implementation - picks random safe moves.
"""

from domain.constants import Direction
from domain.game_state import GameState
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a valid direction that avoids walls and self-collisions.
    """

    def get_move(self, game_state: GameState) -> Direction:
        valid_moves = self.safe_moves(game_state)

        # If no valid moves, keep going straight (we'll die anyway)
        if not valid_moves:
            return game_state.direction

        return self.rng.choice(valid_moves)
