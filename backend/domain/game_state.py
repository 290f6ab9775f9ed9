"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import Any, Dict, List, Optional, Tuple

from .constants import Direction, GameStatus


class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        snake_positions: list of (x, y) from head to tail
        food: (x, y) of the current food
        grid_size: board dimension (the board is square)
        status: GameStatus at the time of the snapshot
        score: current score
        direction: direction applied on the last tick
        message: commentary shown after a game over ("" until it arrives)
        commentary_pending: True while the commentary request is in flight
        tick_period_ms: current delay between ticks
        episode: play session counter, bumped on every start
    """

    def __init__(
        self,
        snake_positions: List[Tuple[int, int]],
        food: Tuple[int, int],
        grid_size: int,
        status: GameStatus,
        score: int,
        direction: Direction,
        message: str = "",
        commentary_pending: bool = False,
        tick_period_ms: Optional[int] = None,
        episode: int = 0
    ):
        self.snake_positions = snake_positions
        self.food = food
        self.grid_size = grid_size
        self.status = status
        self.score = score
        self.direction = direction
        self.message = message
        self.commentary_pending = commentary_pending
        self.tick_period_ms = tick_period_ms
        self.episode = episode

    @property
    def head(self) -> Tuple[int, int]:
        return self.snake_positions[0]

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        * = food
        o = snake body
        H = snake head
        (0,0) is at the top left, matching the screen layout.
        """
        board = [['.' for _ in range(self.grid_size)] for _ in range(self.grid_size)]

        fx, fy = self.food
        if 0 <= fx < self.grid_size and 0 <= fy < self.grid_size:
            board[fy][fx] = '*'

        for pos_idx, (x, y) in enumerate(self.snake_positions):
            if not (0 <= x < self.grid_size and 0 <= y < self.grid_size):
                continue
            board[y][x] = 'H' if pos_idx == 0 else 'o'

        result = []
        for y in range(self.grid_size):
            result.append(f"{y:2d} {' '.join(board[y])}")

        # x-axis labels use the last digit so wide boards stay aligned
        result.append("   " + " ".join(str(i % 10) for i in range(self.grid_size)))

        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form consumed by the browser renderer."""
        return {
            "snake": [{"x": x, "y": y} for x, y in self.snake_positions],
            "food": {"x": self.food[0], "y": self.food[1]},
            "grid_size": self.grid_size,
            "status": self.status.value,
            "score": self.score,
            "direction": self.direction.value,
            "message": self.message,
            "commentary_pending": self.commentary_pending,
            "tick_period_ms": self.tick_period_ms,
            "episode": self.episode,
        }

    def __repr__(self):
        return (
            f"<GameState status={self.status.value}, score={self.score}, "
            f"head={self.head}, food={self.food}>"
        )
