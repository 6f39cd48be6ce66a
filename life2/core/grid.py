"""Cell storage shared by the concrete boards.

A grid is a 2D numpy int8 array of Cell ordinals with shape (height, width),
indexed as grid[y, x]. CellGrid wraps that array with bounds-checked access
and a few utilities. It knows nothing about topology: neighbours and
occupiable shape are the board's business.
"""

import numpy as np
from typing import Dict, Optional, Sequence
import logging

from .cell import Cell, TEAMS
from .errors import InvalidDimensionError

logger = logging.getLogger(__name__)

# Alias used in signatures for bulk snapshots
Grid = np.ndarray

GRID_DTYPE = np.int8

CELL_CHARS: Dict[Cell, str] = {
    Cell.EMPTY: '.',
    Cell.TEAM_A: 'a',
    Cell.TEAM_B: 'b',
    Cell.BARRIER: '#',
}

_MIN_CELL = min(Cell)
_MAX_CELL = max(Cell)


def validate_grid(grid: np.ndarray, width: int, height: int) -> np.ndarray:
    """Check a candidate grid array and return it as an int8 copy.

    Args:
        grid: Array-like of Cell values with shape (height, width)
        width: Expected width
        height: Expected height

    Returns:
        A fresh int8 array safe to store

    Raises:
        ValueError: If the shape does not match or a value is not a Cell
    """
    array = np.asarray(grid)
    if array.shape != (height, width):
        raise ValueError(f"Grid shape {array.shape} doesn't match board size {(height, width)}")
    if not np.issubdtype(array.dtype, np.integer):
        raise ValueError(f"Grid must hold integer cell values, got dtype {array.dtype}")
    if array.size and (array.min() < _MIN_CELL or array.max() > _MAX_CELL):
        raise ValueError("Grid contains values that are not valid cells")
    return array.astype(GRID_DTYPE, copy=True)


class CellGrid:
    """Rectangular storage of Cell values.

    Attributes:
        width: Grid width in cells
        height: Grid height in cells
        state: 2D numpy int8 array of Cell ordinals
    """

    def __init__(self, width: int, height: int, initial_state: Optional[np.ndarray] = None):
        """Initialize grid with given dimensions.

        Args:
            width: Grid width (cells)
            height: Grid height (cells)
            initial_state: Optional initial grid state array

        Raises:
            InvalidDimensionError: If width or height is not positive
            ValueError: If initial_state has the wrong shape or values
        """
        if width < 1 or height < 1:
            raise InvalidDimensionError(width, height)

        self.width = width
        self.height = height

        if initial_state is not None:
            self.state = validate_grid(initial_state, width, height)
        else:
            self.state = np.full((height, width), Cell.EMPTY, dtype=GRID_DTYPE)

    @classmethod
    def from_pattern(cls, pattern: np.ndarray, pad: int = 0, fill: Cell = Cell.EMPTY) -> 'CellGrid':
        """Create grid from a pattern array, surrounded by padding.

        Args:
            pattern: 2D array of Cell values
            pad: Padding cells around pattern
            fill: Cell used for the padding

        Returns:
            CellGrid: New grid containing the pattern
        """
        pattern = np.asarray(pattern)
        height, width = pattern.shape
        grid = cls(width + 2 * pad, height + 2 * pad)
        grid.state.fill(fill)
        grid.state[pad:pad + height, pad:pad + width] = validate_grid(pattern, width, height)
        return grid

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Cell:
        """Get cell at coordinates.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds for {self.width}x{self.height} grid")
        return Cell(int(self.state[y, x]))

    def set(self, x: int, y: int, cell: Cell) -> None:
        """Set cell at coordinates.

        Raises:
            IndexError: If coordinates are out of bounds
            ValueError: If cell is not a Cell value
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds for {self.width}x{self.height} grid")
        self.state[y, x] = Cell(cell)

    def replace(self, grid: np.ndarray) -> None:
        """Replace the whole state with a validated copy of grid."""
        self.state = validate_grid(grid, self.width, self.height)

    def to_array(self) -> np.ndarray:
        """Get a snapshot copy of the state."""
        return self.state.copy()

    def copy(self) -> 'CellGrid':
        """Create a deep copy of the grid."""
        return CellGrid(self.width, self.height, self.state)

    def clear(self) -> None:
        """Reset every non-barrier cell to EMPTY."""
        self.state[self.state != Cell.BARRIER] = Cell.EMPTY

    def randomize(self, density: float = 0.3, rng: Optional[np.random.Generator] = None) -> None:
        """Fill non-barrier cells randomly with both teams.

        Each cell is occupied with probability density, and occupied cells
        are split evenly between TEAM_A and TEAM_B.

        Args:
            density: Fraction of cells to occupy (clamped to 0.0..1.0)
            rng: Random generator, for reproducible boards
        """
        rng = rng if rng is not None else np.random.default_rng()
        density = max(0.0, min(1.0, density))

        occupied = rng.random((self.height, self.width)) < density
        teams = np.where(rng.random((self.height, self.width)) < 0.5, Cell.TEAM_A, Cell.TEAM_B)
        fresh = np.where(occupied, teams, Cell.EMPTY).astype(GRID_DTYPE)

        barriers = self.state == Cell.BARRIER
        self.state = np.where(barriers, self.state, fresh).astype(GRID_DTYPE)

    def load_pattern(self, pattern: np.ndarray, x: int, y: int) -> None:
        """Copy a pattern into the grid with its top-left corner at (x, y).

        Raises:
            IndexError: If the pattern does not fit inside the grid
        """
        pattern = np.asarray(pattern)
        pattern_height, pattern_width = pattern.shape
        if not (self.in_bounds(x, y) and self.in_bounds(x + pattern_width - 1, y + pattern_height - 1)):
            raise IndexError(f"Pattern {pattern_width}x{pattern_height} at ({x}, {y}) doesn't fit")
        block = validate_grid(pattern, pattern_width, pattern_height)
        self.state[y:y + pattern_height, x:x + pattern_width] = block

    def count(self, cell: Cell) -> int:
        """Count cells holding the given state."""
        return int(np.count_nonzero(self.state == cell))

    def population(self) -> Dict[Cell, int]:
        """Live cell count per team."""
        return {team: self.count(team) for team in TEAMS}

    def render(self, chars: Optional[Dict[Cell, str]] = None) -> str:
        """Render the grid one text row per grid row."""
        chars = chars or CELL_CHARS
        lookup: Sequence[str] = [chars[cell] for cell in Cell]
        return '\n'.join(''.join(lookup[value] for value in row) for row in self.state)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CellGrid):
            return False
        return (self.width == other.width and
                self.height == other.height and
                np.array_equal(self.state, other.state))

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        population = self.population()
        return (f"CellGrid({self.width}x{self.height}, "
                f"team_a={population[Cell.TEAM_A]}, team_b={population[Cell.TEAM_B]})")
