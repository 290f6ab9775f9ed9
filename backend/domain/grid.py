"""
Grid model - board bounds and coordinate validity.
"""

import random
from typing import Iterator, Optional, Tuple

from .constants import Coordinate


class Grid:
    """
    A square board of ``size`` x ``size`` cells.

    Attributes:
        size: number of cells along each axis
    """

    def __init__(self, size: int):
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise ValueError(f"Grid size must be a positive integer, got {size!r}")
        self.size = size

    @property
    def area(self) -> int:
        return self.size * self.size

    def contains(self, cell: Tuple[int, int]) -> bool:
        """Return True if the cell lies on the board."""
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def cells(self) -> Iterator[Coordinate]:
        """Yield every cell in row-major order."""
        for y in range(self.size):
            for x in range(self.size):
                yield Coordinate(x, y)

    def random_cell(self, rng: Optional[random.Random] = None) -> Coordinate:
        rng = rng or random
        return Coordinate(rng.randint(0, self.size - 1), rng.randint(0, self.size - 1))

    def __repr__(self):
        return f"<Grid size={self.size}>"
