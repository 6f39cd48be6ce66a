"""
Built-in Two-Team Rules

Team-aware counterparts of Conway's survival and birth rules. A team cell
only counts neighbours of its own team; barriers and the other team do not
keep it alive. Each rule abstains (returns None) when it does not apply, so
rules can be combined freely in a RulesManager.
"""

from typing import Callable, Dict, Optional, Sequence, List

from ..core.cell import Cell, is_team, other_team
from ..core.errors import UnknownRuleError
from ..core.rule import Rule


# Standard thresholds
LONELINESS_THRESHOLD: int = 2      # Team cells with fewer same-team neighbours die
OVERPOPULATION_THRESHOLD: int = 3  # Team cells with more same-team neighbours die
BIRTH_THRESHOLD: int = 3           # Empty cells with at least this many of one team are born


def count_team(neighbors: Sequence[Cell], team: Cell) -> int:
    """Count neighbours belonging to team."""
    return sum(1 for neighbor in neighbors if neighbor == team)


class TeamRuleParams:
    """Thresholds used by the built-in rules.

    Defaults to the classic Conway numbers.
    """

    def __init__(self,
                 loneliness: int = LONELINESS_THRESHOLD,
                 overpopulation: int = OVERPOPULATION_THRESHOLD,
                 birth: int = BIRTH_THRESHOLD):
        """Initialize rule parameters.

        Args:
            loneliness: Minimum same-team neighbours to avoid dying (default 2)
            overpopulation: Maximum same-team neighbours to avoid dying (default 3)
            birth: Same-team neighbours needed to occupy an empty cell (default 3)

        Raises:
            ValueError: If a threshold is negative
        """
        if min(loneliness, overpopulation, birth) < 0:
            raise ValueError("Rule thresholds must be non-negative")
        self.loneliness = loneliness
        self.overpopulation = overpopulation
        self.birth = birth

    @classmethod
    def standard(cls) -> 'TeamRuleParams':
        return cls()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TeamRuleParams):
            return NotImplemented
        return (self.loneliness, self.overpopulation, self.birth) == \
            (other.loneliness, other.overpopulation, other.birth)

    def __repr__(self) -> str:
        return (f"TeamRuleParams(loneliness={self.loneliness}, "
                f"overpopulation={self.overpopulation}, birth={self.birth})")


def loneliness_rule(params: Optional[TeamRuleParams] = None) -> Rule:
    threshold = (params or TeamRuleParams.standard()).loneliness

    def expression(cell: Cell, neighbors: Sequence[Cell]) -> Optional[Cell]:
        if not is_team(cell):
            return None
        if count_team(neighbors, cell) < threshold:
            return Cell.EMPTY
        return None

    return Rule('Loneliness',
                f'A cell with less than {threshold} neighbors of the same team dies of loneliness.',
                expression)


def overpopulation_rule(params: Optional[TeamRuleParams] = None) -> Rule:
    threshold = (params or TeamRuleParams.standard()).overpopulation

    def expression(cell: Cell, neighbors: Sequence[Cell]) -> Optional[Cell]:
        if not is_team(cell):
            return None
        if count_team(neighbors, cell) > threshold:
            return Cell.EMPTY
        return None

    return Rule('Overpopulation',
                f'A cell with more than {threshold} neighbors of the same team dies of overpopulation.',
                expression)


def team_change_rule(params: Optional[TeamRuleParams] = None) -> Rule:
    """A team cell outnumbered by the other team converts to it."""

    def expression(cell: Cell, neighbors: Sequence[Cell]) -> Optional[Cell]:
        if not is_team(cell):
            return None
        rival = other_team(cell)
        if count_team(neighbors, cell) < count_team(neighbors, rival):
            return rival
        return None

    return Rule('Team Change',
                'A cell with less neighbors of the same team than the other team becomes the other team.',
                expression)


def birth_rule(params: Optional[TeamRuleParams] = None) -> Rule:
    """An empty cell is claimed by a team with enough neighbours, TEAM_A first."""
    threshold = (params or TeamRuleParams.standard()).birth

    def expression(cell: Cell, neighbors: Sequence[Cell]) -> Optional[Cell]:
        if cell != Cell.EMPTY:
            return None
        if count_team(neighbors, Cell.TEAM_A) >= threshold:
            return Cell.TEAM_A
        if count_team(neighbors, Cell.TEAM_B) >= threshold:
            return Cell.TEAM_B
        return None

    return Rule('Birth',
                f'A dead cell with {threshold} or more neighbors of the same team becomes that team.',
                expression)


RuleFactory = Callable[[Optional[TeamRuleParams]], Rule]

# Order matches default_rules()
RULE_FACTORIES: Dict[str, RuleFactory] = {
    'loneliness': loneliness_rule,
    'team_change': team_change_rule,
    'overpopulation': overpopulation_rule,
    'birth': birth_rule,
}


def build_rule(kind: str, params: Optional[TeamRuleParams] = None) -> Rule:
    """Build a catalog rule from its kind name.

    Raises:
        UnknownRuleError: If kind is not in RULE_FACTORIES
    """
    try:
        factory = RULE_FACTORIES[kind]
    except KeyError:
        raise UnknownRuleError(kind) from None
    return factory(params)


def default_rules(params: Optional[TeamRuleParams] = None) -> List[Rule]:
    """Every catalog rule, in catalog order."""
    return [factory(params) for factory in RULE_FACTORIES.values()]
