"""
Greedy player implementation - heads for the food along safe cells.
"""

from domain.constants import Direction, VECTORS
from domain.game_state import GameState
from .base import Player


class GreedyPlayer(Player):
    """
    Picks the safe move that brings the head closest to the food
    (Manhattan distance). Prefers keeping the current direction on ties.
    """

    def get_move(self, game_state: GameState) -> Direction:
        valid_moves = self.safe_moves(game_state)
        if not valid_moves:
            return game_state.direction

        head_x, head_y = game_state.head
        food_x, food_y = game_state.food

        def score(move: Direction):
            dx, dy = VECTORS[move]
            distance = abs(head_x + dx - food_x) + abs(head_y + dy - food_y)
            return (distance, move != game_state.direction)

        return min(valid_moves, key=score)
