"""Hexagonal board stored as an offset grid.

Rows are laid out "odd-r": every odd row is shifted half a cell to the right,
so each cell touches two cells in the row above, two in its own row and two
in the row below. Storage is still a plain (height, width) array.
"""

import numpy as np
from typing import List, Optional, Tuple
import logging

from ..core.cell import Cell
from ..core.grid import CellGrid, Grid

logger = logging.getLogger(__name__)

EVEN_ROW_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1),
)
ODD_ROW_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (0, 1), (1, 1),
)


class HexagonalBoard:
    """Board of hexagonal cells with up to six neighbours each."""

    def __init__(self, width: int, height: int, initial_state: Optional[np.ndarray] = None):
        self.cells = CellGrid(width, height, initial_state)
        logger.debug(f"Created hexagonal board {width}x{height}")

    def get_cell(self, x: int, y: int) -> Cell:
        return self.cells.get(x, y)

    def set_cell(self, x: int, y: int, cell: Cell) -> None:
        self.cells.set(x, y, cell)

    def neighbor_coords(self, x: int, y: int) -> List[Tuple[int, int]]:
        offsets = ODD_ROW_OFFSETS if y % 2 else EVEN_ROW_OFFSETS
        return [(x + dx, y + dy) for dx, dy in offsets
                if self.cells.in_bounds(x + dx, y + dy)]

    def get_neighbors(self, x: int, y: int) -> List[Cell]:
        state = self.cells.state
        return [Cell(int(state[ny, nx])) for nx, ny in self.neighbor_coords(x, y)]

    def is_out_of_bounds(self, x: int, y: int) -> bool:
        return not self.cells.in_bounds(x, y)

    def get_grid(self) -> Grid:
        return self.cells.to_array()

    def set_grid(self, grid: Grid) -> None:
        self.cells.replace(grid)

    def get_width(self) -> int:
        return self.cells.width

    def get_height(self) -> int:
        return self.cells.height

    def __str__(self) -> str:
        # Indent odd rows to show the offset layout
        rows = str(self.cells).split('\n')
        return '\n'.join((' ' + row) if y % 2 else row for y, row in enumerate(rows))

    def __repr__(self) -> str:
        return f"HexagonalBoard({self.cells.width}x{self.cells.height})"
