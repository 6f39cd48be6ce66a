"""Rules: named, validated transition functions.

A rule looks at one cell and its neighbours and either proposes a new state
or abstains by returning None. The World collects the proposals of every
active rule and reduces them to the cell's next state.

The neighbour sequence comes from the board. Its order and membership depend
on the board's topology, so expressions should only count or filter it.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from .cell import Cell, RULE_OUTPUTS
from .errors import InvalidRuleOutputError

# (cell, neighbors) -> proposed state or None
RuleFunction = Callable[[Cell, Sequence[Cell]], Optional[Cell]]


@dataclass(frozen=True)
class Rule:
    """A named transition function.

    Attributes:
        name: Unique key of the rule inside a RulesManager
        details: Human-readable description, no effect on behaviour
        expression: Pure function called by execute()
    """
    name: str
    details: str
    expression: RuleFunction = field(repr=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Rule name must be a non-empty string")
        if not callable(self.expression):
            raise TypeError(f"Rule '{self.name}' expression must be callable")

    def execute(self, cell: Cell, neighbors: Sequence[Cell]) -> Optional[Cell]:
        """Apply the rule to a cell and its neighbours.

        Barriers are never judged: the expression is not called and the rule
        abstains.

        Args:
            cell: Current state of the cell
            neighbors: Neighbouring cells as reported by the board

        Returns:
            The proposed next state, or None if the rule does not apply

        Raises:
            InvalidRuleOutputError: If the expression returns anything other
                than EMPTY, TEAM_A, TEAM_B or None
        """
        if cell == Cell.BARRIER:
            return None

        state = self.expression(cell, neighbors)
        if state is None:
            return None
        if not isinstance(state, Cell) or state not in RULE_OUTPUTS:
            raise InvalidRuleOutputError(self.name, state)
        return state
