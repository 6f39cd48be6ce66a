"""Generation engine for the two-team automaton.

The World owns a board and a rule registry and advances the board one
generation per next_state() call. Updates are synchronous: every cell's next
state is computed from a frozen snapshot of the board, written into a private
buffer, and the buffer is committed with a single set_grid() once the whole
pass has succeeded. A rule returning an invalid state aborts the pass and
leaves both the board and the statistics untouched.

Statistics accumulate over the World's lifetime until reset_stats() is
called.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Iterable, List, Optional
import logging

from .board import Board
from .cell import Cell, TEAMS
from .errors import InvalidRuleOutputError
from .rule import Rule
from .rules_manager import RulesManager
from .votes import Outcome, decide

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stats:
    """Birth and death counters per team."""
    birth_a: int = 0
    death_a: int = 0
    birth_b: int = 0
    death_b: int = 0

    def __add__(self, other: 'Stats') -> 'Stats':
        return Stats(self.birth_a + other.birth_a,
                     self.death_a + other.death_a,
                     self.birth_b + other.birth_b,
                     self.death_b + other.death_b)

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


class World:
    """Applies a rule set to a board, one generation at a time.

    Attributes:
        evaluate_empty: Whether EMPTY cells are evaluated. Off by default, in
            which case empty cells never change and birth rules are inert.
        generation: Number of generations successfully committed
    """

    def __init__(self, board: Board, rules: Optional[Iterable[Rule]] = None,
                 evaluate_empty: bool = False):
        """Initialize the world.

        Args:
            board: Board to evolve, used by reference
            rules: Initial rules, registered in order
            evaluate_empty: Also evaluate EMPTY cells so births can happen

        Raises:
            TypeError: If board does not implement the Board protocol
            DuplicateRuleError: If two initial rules share a name
        """
        if not isinstance(board, Board):
            raise TypeError(f"{type(board).__name__} does not implement the Board protocol")

        self._board = board
        self._rules = rules if isinstance(rules, RulesManager) else RulesManager(rules)
        self.evaluate_empty = evaluate_empty
        self.generation = 0
        self._stats = Stats()

    @property
    def board(self) -> Board:
        return self._board

    @property
    def rules(self) -> RulesManager:
        return self._rules

    def next_state(self) -> Stats:
        """Advance the board by one generation.

        Returns:
            Births and deaths produced by this generation alone

        Raises:
            InvalidRuleOutputError: If any rule proposes an invalid state.
                Nothing is committed in that case.
        """
        board = self._board
        rules = self._rules.get_all()
        width = board.get_width()
        height = board.get_height()

        current = board.get_grid()
        buffer = current.copy()
        births = {team: 0 for team in TEAMS}
        deaths = {team: 0 for team in TEAMS}

        try:
            for y in range(height):
                for x in range(width):
                    if board.is_out_of_bounds(x, y):
                        continue

                    cell = Cell(int(current[y, x]))
                    if cell == Cell.BARRIER:
                        continue
                    if cell == Cell.EMPTY and not self.evaluate_empty:
                        continue

                    neighbors = board.get_neighbors(x, y)
                    candidates: List[Cell] = []
                    for rule in rules:
                        state = rule.execute(cell, neighbors)
                        if state is not None:
                            candidates.append(state)

                    decision = decide(cell, candidates)
                    if decision.outcome is Outcome.BECOME_EMPTY and cell in TEAMS:
                        deaths[cell] += 1
                    elif decision.outcome is Outcome.BECOME_TEAM:
                        births[decision.team] += 1

                    buffer[y, x] = decision.cell
        except InvalidRuleOutputError as exc:
            logger.warning(f"Generation {self.generation + 1} aborted: {exc}")
            raise

        board.set_grid(buffer)

        delta = Stats(birth_a=births[Cell.TEAM_A], death_a=deaths[Cell.TEAM_A],
                      birth_b=births[Cell.TEAM_B], death_b=deaths[Cell.TEAM_B])
        self._stats = self._stats + delta
        self.generation += 1

        logger.debug(f"Generation {self.generation}: {delta}")
        return delta

    def step(self, generations: int = 1) -> Stats:
        """Advance several generations back to back.

        Returns:
            Accumulated statistics after the last generation
        """
        if generations < 0:
            raise ValueError("generations must be >= 0")
        for _ in range(generations):
            self.next_state()
        return self.get_stats()

    def get_stats(self) -> Stats:
        """Births and deaths accumulated since creation or the last reset."""
        return self._stats

    def reset_stats(self) -> None:
        self._stats = Stats()

    def population(self) -> Dict[Cell, int]:
        """Number of occupiable cells held by each team."""
        board = self._board
        grid = board.get_grid()
        counts = {team: 0 for team in TEAMS}
        for y in range(board.get_height()):
            for x in range(board.get_width()):
                if board.is_out_of_bounds(x, y):
                    continue
                value = int(grid[y, x])
                if value == Cell.TEAM_A or value == Cell.TEAM_B:
                    counts[Cell(value)] += 1
        return counts

    def __repr__(self) -> str:
        return (f"World({self._board.get_width()}x{self._board.get_height()}, "
                f"rules={self._rules.names()}, generation={self.generation})")
