"""Conway's Game of Life on a bounded grid."""

from __future__ import annotations

import random
from enum import Enum
from typing import Iterable


class CellState(Enum):
    """State of one cell."""

    ALIVE = "alive"
    DEAD = "dead"


def next_state(cell: CellState, neighbours: int) -> CellState:
    """The cell's state in the next generation given its live neighbour count."""
    if cell is CellState.ALIVE:
        # Underpopulation below two, overpopulation above three.
        return CellState.ALIVE if neighbours in (2, 3) else CellState.DEAD
    # Reproduction with exactly three live neighbours.
    return CellState.ALIVE if neighbours == 3 else CellState.DEAD


class Life:
    """A ``width`` x ``height`` grid; cells beyond the edges count as dead."""

    def __init__(
        self,
        width: int,
        height: int,
        cells: Iterable[Iterable[CellState]] | None = None,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError("grid dimensions must be positive")
        self.width = width
        self.height = height
        if cells is None:
            self.cells = [[CellState.DEAD] * width for _ in range(height)]
        else:
            self.cells = [list(row) for row in cells]
            if len(self.cells) != height or any(len(row) != width for row in self.cells):
                raise ValueError("cells do not match the grid dimensions")

    def randomize(self, rng: random.Random) -> None:
        """Bring each cell to life with a chance of one in five."""
        for row in self.cells:
            for x in range(self.width):
                if rng.randrange(5) == 0:
                    row[x] = CellState.ALIVE

    def live_neighbours(self, x: int, y: int) -> int:
        """Number of live cells among the up to eight around ``(x, y)``."""
        return sum(
            1
            for ny in range(max(0, y - 1), min(self.height, y + 2))
            for nx in range(max(0, x - 1), min(self.width, x + 2))
            if (nx, ny) != (x, y) and self.cells[ny][nx] is CellState.ALIVE
        )

    def step(self) -> None:
        """Advance the whole grid by one generation."""
        self.cells = [
            [next_state(cell, self.live_neighbours(x, y)) for x, cell in enumerate(row)]
            for y, row in enumerate(self.cells)
        ]