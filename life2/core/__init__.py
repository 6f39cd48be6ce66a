"""Engine core: cells, rules, the rule registry, the board contract and the World."""

from .cell import Cell, TEAMS, is_team, other_team
from .errors import (
    Life2Error, DuplicateRuleError, UnknownRuleError,
    InvalidRuleOutputError, InvalidDimensionError,
)
from .grid import CellGrid, Grid
from .rule import Rule, RuleFunction
from .rules_manager import RulesManager
from .board import Board
from .votes import Outcome, Decision, TIE_BREAK_PRECEDENCE, resolve_votes, decide
from .world import World, Stats

__all__ = [
    'Cell', 'TEAMS', 'is_team', 'other_team',
    'Life2Error', 'DuplicateRuleError', 'UnknownRuleError',
    'InvalidRuleOutputError', 'InvalidDimensionError',
    'CellGrid', 'Grid',
    'Rule', 'RuleFunction',
    'RulesManager',
    'Board',
    'Outcome', 'Decision', 'TIE_BREAK_PRECEDENCE', 'resolve_votes', 'decide',
    'World', 'Stats',
]
