"""
Collision detection for a candidate head position.
"""

from enum import Enum
from typing import Iterable, Optional, Tuple


class CollisionKind(str, Enum):
    WALL = "wall"
    SELF = "self"
    FOOD = "food"

    @property
    def is_fatal(self) -> bool:
        return self is not CollisionKind.FOOD


def check_collision(
    new_head: Tuple[int, int],
    snake_body: Iterable[Tuple[int, int]],
    grid_size: int,
    food: Optional[Tuple[int, int]] = None,
) -> Optional[CollisionKind]:
    """
    Classify what the snake runs into when its head moves to ``new_head``.

    Checks run in order wall, self, food. ``snake_body`` is the body before
    the move, tail included, so stepping into the cell the tail is about to
    leave still counts as hitting yourself.

    Returns:
        The first matching CollisionKind, or None for an empty cell.
    """
    x, y = new_head
    if x < 0 or x >= grid_size or y < 0 or y >= grid_size:
        return CollisionKind.WALL

    head = tuple(new_head)
    if any(tuple(segment) == head for segment in snake_body):
        return CollisionKind.SELF

    if food is not None and tuple(food) == head:
        return CollisionKind.FOOD

    return None
