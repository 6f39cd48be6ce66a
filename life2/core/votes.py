"""Reduction of several rule proposals into one next state.

Each active rule may propose a state for a cell. The proposals are tallied
and the most frequent one wins. Ties are broken by data, not by code order:

1. If the current state is among the tied leaders, it is kept.
2. Otherwise the first leader in TIE_BREAK_PRECEDENCE wins.

No proposals at all means the cell keeps its state.
"""

from collections import Counter
from enum import Enum
from typing import NamedTuple, Optional, Sequence, Tuple

from .cell import Cell, is_team

# Lowest ordinal first
TIE_BREAK_PRECEDENCE: Tuple[Cell, ...] = (Cell.EMPTY, Cell.TEAM_A, Cell.TEAM_B)


class Outcome(Enum):
    """What happens to a cell during one generation."""

    KEEP = "keep"
    BECOME_EMPTY = "become_empty"
    BECOME_TEAM = "become_team"


class Decision(NamedTuple):
    """Resolved next state of a cell.

    team is set only for BECOME_TEAM outcomes.
    """
    outcome: Outcome
    cell: Cell
    team: Optional[Cell] = None


def resolve_votes(current: Cell, candidates: Sequence[Cell]) -> Cell:
    """Reduce rule proposals to a single next state.

    Args:
        current: State of the cell before the generation
        candidates: Non-None rule proposals, in rule registration order

    Returns:
        The winning state
    """
    if not candidates:
        return current

    tally = Counter(candidates)
    top = max(tally.values())
    leaders = {cell for cell, votes in tally.items() if votes == top}

    if current in leaders:
        return current
    for cell in TIE_BREAK_PRECEDENCE:
        if cell in leaders:
            return cell
    # Only reachable if a proposal escaped rule validation
    raise ValueError(f"No precedence defined for proposals {sorted(leaders)}")


def classify(current: Cell, new: Cell) -> Decision:
    """Describe the move from current to new as an Outcome."""
    if new == current:
        return Decision(Outcome.KEEP, new)
    if new == Cell.EMPTY:
        return Decision(Outcome.BECOME_EMPTY, new)
    if is_team(new):
        return Decision(Outcome.BECOME_TEAM, new, new)
    raise ValueError(f"Transition to {new.name} is not allowed")


def decide(current: Cell, candidates: Sequence[Cell]) -> Decision:
    """Resolve proposals and classify the result in one go."""
    return classify(current, resolve_votes(current, candidates))
