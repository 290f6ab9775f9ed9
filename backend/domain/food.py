"""
Food spawner - picks a free cell for the next piece of food.
"""

import logging
import random
from typing import AbstractSet, Optional

from .constants import Coordinate
from .grid import Grid

logger = logging.getLogger(__name__)

FALLBACK_CELL = Coordinate(0, 0)


class FoodSpawner:
    """
    Samples random cells until one is free.

    After ``max_attempts`` misses the origin is returned without checking it
    against the snake. The game normally ends long before the board fills
    up, so this only matters on a nearly full board.
    """

    def __init__(self, grid: Grid, rng: Optional[random.Random] = None, max_attempts: Optional[int] = None):
        self.grid = grid
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts if max_attempts is not None else grid.area * 2

    def spawn(self, occupied: AbstractSet[Coordinate]) -> Coordinate:
        for _ in range(self.max_attempts):
            cell = self.grid.random_cell(self.rng)
            if cell not in occupied:
                return cell

        logger.warning(
            f"No free cell found after {self.max_attempts} attempts "
            f"({len(occupied)}/{self.grid.area} occupied), placing food at {tuple(FALLBACK_CELL)}"
        )
        return FALLBACK_CELL
