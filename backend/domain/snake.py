"""
Snake entity for the game engine.

A Snake is an immutable value: movement returns a new Snake so the
controller can keep the pre-tick snake around when a move turns out
to be fatal.
"""

from typing import FrozenSet, Iterable, Iterator, Optional, Tuple

from .constants import Coordinate, Direction, INITIAL_DIRECTION


def is_reversal(current: Direction, requested: Direction) -> bool:
    """True if ``requested`` would turn the snake back onto itself."""
    return Direction(requested) == Direction(current).opposite


def resolve_direction(last_applied: Direction, requested: Optional[Direction]) -> Direction:
    """
    Pick the direction to apply this tick.

    A missing request or a 180 degree turn keeps the last applied direction.
    """
    if requested is None or is_reversal(last_applied, requested):
        return Direction(last_applied)
    return Direction(requested)


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: tuple of Coordinate from head at index 0 to tail at the end
        direction: the direction applied on the most recent tick
    """

    def __init__(self, positions: Iterable[Tuple[int, int]], direction: Direction = INITIAL_DIRECTION):
        self.positions: Tuple[Coordinate, ...] = tuple(Coordinate(*p) for p in positions)
        if not self.positions:
            raise ValueError("Snake needs at least one segment.")
        self.direction = Direction(direction)

    @property
    def head(self) -> Coordinate:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Coordinate:
        return self.positions[-1]

    def occupied(self) -> FrozenSet[Coordinate]:
        return frozenset(self.positions)

    def next_head(self, direction: Direction) -> Coordinate:
        dx, dy = Direction(direction).vector
        return Coordinate(self.head.x + dx, self.head.y + dy)

    def advance(self, direction: Direction, ate_food: bool) -> "Snake":
        """
        Move one cell and return the resulting snake.

        Growing keeps the tail, otherwise the tail cell is dropped.
        A reversing direction is ignored in favour of the current one.
        """
        applied = resolve_direction(self.direction, direction)
        new_head = self.next_head(applied)
        body = self.positions if ate_food else self.positions[:-1]
        return Snake((new_head,) + body, applied)

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self.positions)

    def __contains__(self, cell) -> bool:
        return tuple(cell) in self.positions

    def __eq__(self, other):
        if not isinstance(other, Snake):
            return NotImplemented
        return self.positions == other.positions and self.direction == other.direction

    def __hash__(self):
        return hash((self.positions, self.direction))

    def __repr__(self):
        return f"<Snake head={tuple(self.head)} length={len(self)} direction={self.direction.value}>"


def advance(snake: Snake, direction: Direction, ate_food: bool) -> Snake:
    return snake.advance(direction, ate_food)


def initial_snake(grid_size: int) -> Snake:
    """Three vertical segments centred on the board, heading up."""
    mid = grid_size // 2
    return Snake([(mid, mid), (mid, mid + 1), (mid, mid + 2)], INITIAL_DIRECTION)
