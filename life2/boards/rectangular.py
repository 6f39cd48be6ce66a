"""Classic rectangular board with the Moore neighbourhood."""

import numpy as np
from typing import List, Optional, Tuple
import logging

from ..core.cell import Cell
from ..core.grid import CellGrid, Grid

logger = logging.getLogger(__name__)

# (dx, dy) of the eight surrounding cells, row by row
MOORE_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)


class RectangularBoard:
    """Rectangular board where each cell touches its eight neighbours.

    With wrap=False positions past the edges simply have no neighbours there.
    With wrap=True the board is a torus and opposite edges are adjacent.
    """

    def __init__(self, width: int, height: int, wrap: bool = False,
                 initial_state: Optional[np.ndarray] = None):
        """Create a board.

        Args:
            width: Board width in cells
            height: Board height in cells
            wrap: Use toroidal boundaries
            initial_state: Optional (height, width) array of Cell values

        Raises:
            InvalidDimensionError: If width or height is not positive
        """
        self.cells = CellGrid(width, height, initial_state)
        self.wrap = wrap
        logger.debug(f"Created {'toroidal' if wrap else 'bounded'} rectangular board {width}x{height}")

    def get_cell(self, x: int, y: int) -> Cell:
        return self.cells.get(x, y)

    def set_cell(self, x: int, y: int, cell: Cell) -> None:
        self.cells.set(x, y, cell)

    def neighbor_coords(self, x: int, y: int) -> List[Tuple[int, int]]:
        """Coordinates adjacent to (x, y)."""
        width, height = self.cells.width, self.cells.height
        coords = []
        for dx, dy in MOORE_OFFSETS:
            nx, ny = x + dx, y + dy
            if self.wrap:
                coords.append((nx % width, ny % height))
            elif 0 <= nx < width and 0 <= ny < height:
                coords.append((nx, ny))
        return coords

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
        return str(self.cells)

    def __repr__(self) -> str:
        return f"RectangularBoard({self.cells.width}x{self.cells.height}, wrap={self.wrap})"
