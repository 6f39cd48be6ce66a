"""Cell states for the two-team automaton.

Cells carry no behaviour of their own. Everything that happens to them is
decided by the World from the rules it has been given.
"""

from enum import IntEnum
from typing import Tuple


class Cell(IntEnum):
    """The four states a board position can hold."""

    EMPTY = 0
    TEAM_A = 1
    TEAM_B = 2
    BARRIER = 3  # Set by board configuration only, never by a rule


TEAMS: Tuple[Cell, Cell] = (Cell.TEAM_A, Cell.TEAM_B)

# States a rule is allowed to propose
RULE_OUTPUTS = frozenset({Cell.EMPTY, Cell.TEAM_A, Cell.TEAM_B})


def is_team(cell: Cell) -> bool:
    """Check whether a cell is occupied by one of the two teams."""
    return cell in TEAMS


def other_team(cell: Cell) -> Cell:
    """Return the opposing team of a team cell.

    Raises:
        ValueError: If the cell is not a team cell
    """
    if cell == Cell.TEAM_A:
        return Cell.TEAM_B
    if cell == Cell.TEAM_B:
        return Cell.TEAM_A
    raise ValueError(f"{cell.name} has no opposing team")
