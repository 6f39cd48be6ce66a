"""
life2: Two-Team Cellular Automaton Engine

Conway-style simulation with two competing teams, immutable barriers and
pluggable board topologies. Behaviour comes from a runtime-editable set of
named rules whose proposals are reduced by majority vote each generation.
"""

from .core import (
    Cell, Rule, RulesManager, Board, World, Stats, CellGrid,
    Life2Error, DuplicateRuleError, UnknownRuleError,
    InvalidRuleOutputError, InvalidDimensionError,
)
from .boards import RectangularBoard, HexagonalBoard, MaskedBoard
from .rules import TeamRuleParams, build_rule, default_rules

__version__ = "0.1.0"

__all__ = [
    'Cell', 'Rule', 'RulesManager', 'Board', 'World', 'Stats', 'CellGrid',
    'Life2Error', 'DuplicateRuleError', 'UnknownRuleError',
    'InvalidRuleOutputError', 'InvalidDimensionError',
    'RectangularBoard', 'HexagonalBoard', 'MaskedBoard',
    'TeamRuleParams', 'build_rule', 'default_rules',
]
