"""Board capability contract.

A board stores cells in some 2D shape and defines which cells are adjacent.
It applies no rules: that is the World's job. Concrete boards live in
life2.boards; the World depends only on this protocol.
"""

from typing import Protocol, Sequence, runtime_checkable

from .cell import Cell
from .grid import Grid


@runtime_checkable
class Board(Protocol):
    """Storage plus topology for a grid of cells.

    get_width() and get_height() describe a bounding box. Not every position
    inside it has to be occupiable: irregular shapes report the excluded
    positions through is_out_of_bounds().
    """

    def get_cell(self, x: int, y: int) -> Cell:
        """Get the state of the cell at (x, y)."""
        ...

    def set_cell(self, x: int, y: int, cell: Cell) -> None:
        """Set the state of the cell at (x, y)."""
        ...

    def get_neighbors(self, x: int, y: int) -> Sequence[Cell]:
        """Cells adjacent to (x, y) under this board's topology.

        Order and exact membership are topology-defined and must not be
        relied upon beyond "the adjacent cells".
        """
        ...

    def is_out_of_bounds(self, x: int, y: int) -> bool:
        """Whether (x, y) is outside the occupiable area."""
        ...

    def get_grid(self) -> Grid:
        """Snapshot of the whole board as a (height, width) array."""
        ...

    def set_grid(self, grid: Grid) -> None:
        """Replace the whole board with grid in one operation."""
        ...

    def get_width(self) -> int:
        ...

    def get_height(self) -> int:
        ...
