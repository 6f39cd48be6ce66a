"""Irregularly shaped board carved out of a rectangle by an occupancy mask.

Positions where the mask is False are outside the board: they are out of
bounds, are never anyone's neighbour, and are stored as BARRIER so that a
grid snapshot shows the shape.
"""

import numpy as np
from typing import List, Optional, Tuple
import logging

from ..core.cell import Cell
from ..core.errors import InvalidDimensionError
from ..core.grid import CellGrid, Grid
from .rectangular import MOORE_OFFSETS

logger = logging.getLogger(__name__)


class MaskedBoard:
    """Moore-neighbourhood board restricted to the True cells of a mask."""

    def __init__(self, mask: np.ndarray, initial_state: Optional[np.ndarray] = None):
        """Create a board from a boolean mask.

        Args:
            mask: (height, width) boolean array, True where cells exist
            initial_state: Optional (height, width) array of Cell values;
                positions outside the mask are overwritten with BARRIER

        Raises:
            InvalidDimensionError: If the mask is empty in either direction
            ValueError: If the mask is not two-dimensional or initial_state
                does not match it
        """
        mask = np.asarray(mask, dtype=bool)
        if mask.ndim != 2:
            raise ValueError(f"Mask must be 2D, got {mask.ndim}D")
        height, width = mask.shape
        if width < 1 or height < 1:
            raise InvalidDimensionError(width, height)

        self.mask = mask.copy()
        self.cells = CellGrid(width, height, initial_state)
        self._apply_mask()
        logger.debug(f"Created masked board {width}x{height} with {int(self.mask.sum())} occupiable cells")

    @classmethod
    def circle(cls, diameter: int, initial_state: Optional[np.ndarray] = None) -> 'MaskedBoard':
        """Board shaped as a disc inscribed in a diameter x diameter box."""
        if diameter < 1:
            raise InvalidDimensionError(diameter, diameter)
        radius = diameter / 2
        ys, xs = np.ogrid[:diameter, :diameter]
        mask = (xs + 0.5 - radius) ** 2 + (ys + 0.5 - radius) ** 2 <= radius ** 2
        return cls(mask, initial_state)

    def _apply_mask(self) -> None:
        self.cells.state[~self.mask] = Cell.BARRIER

    def get_cell(self, x: int, y: int) -> Cell:
        return self.cells.get(x, y)

    def set_cell(self, x: int, y: int, cell: Cell) -> None:
        if self.is_out_of_bounds(x, y):
            raise IndexError(f"Coordinates ({x}, {y}) are outside the board shape")
        self.cells.set(x, y, cell)

    def neighbor_coords(self, x: int, y: int) -> List[Tuple[int, int]]:
        return [(x + dx, y + dy) for dx, dy in MOORE_OFFSETS
                if not self.is_out_of_bounds(x + dx, y + dy)]

    def get_neighbors(self, x: int, y: int) -> List[Cell]:
        state = self.cells.state
        return [Cell(int(state[ny, nx])) for nx, ny in self.neighbor_coords(x, y)]

    def is_out_of_bounds(self, x: int, y: int) -> bool:
        return not (self.cells.in_bounds(x, y) and self.mask[y, x])

    def get_grid(self) -> Grid:
        return self.cells.to_array()

    def set_grid(self, grid: Grid) -> None:
        self.cells.replace(grid)
        self._apply_mask()

    def get_width(self) -> int:
        return self.cells.width

    def get_height(self) -> int:
        return self.cells.height

    def __str__(self) -> str:
        return str(self.cells)

    def __repr__(self) -> str:
        return (f"MaskedBoard({self.cells.width}x{self.cells.height}, "
                f"occupiable={int(self.mask.sum())})")
