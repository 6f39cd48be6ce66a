"""Tests for the World generation engine.

Covers synchronous update semantics, barrier and domain invariants, the
atomic abort on invalid rule output, statistics and the handling of empty
cells.
"""

import pytest
import numpy as np
from life2.boards import RectangularBoard, HexagonalBoard, MaskedBoard
from life2.core.cell import Cell
from life2.core.grid import CellGrid
from life2.core.errors import InvalidRuleOutputError, DuplicateRuleError
from life2.core.rule import Rule
from life2.core.rules_manager import RulesManager
from life2.core.world import World, Stats
from life2.rules.team_rules import (
    loneliness_rule, overpopulation_rule, team_change_rule, birth_rule, default_rules,
)

E, A, B, X = Cell.EMPTY, Cell.TEAM_A, Cell.TEAM_B, Cell.BARRIER


def always(name, state):
    return Rule(name, f'Always proposes {state!r}.', lambda cell, neighbors: state)


def random_state(width, height, density=0.45, seed=0):
    """Seeded two-team grid array."""
    cells = CellGrid(width, height)
    cells.randomize(density, np.random.default_rng(seed))
    return cells.to_array()


def random_board(width=12, height=12, seed=0, barriers=10):
    """Rectangular board with random teams and a few barriers."""
    rng = np.random.default_rng(seed)
    board = RectangularBoard(width, height, initial_state=random_state(width, height, seed=seed))
    for _ in range(barriers):
        board.set_cell(int(rng.integers(width)), int(rng.integers(height)), X)
    return board


class FencedBoard:
    """Rectangular board that declares some positions out of bounds.

    get_cell() still reports whatever is stored there, so the World has to
    rely on is_out_of_bounds() to skip them.
    """

    def __init__(self, width, height, fenced):
        self.inner = RectangularBoard(width, height)
        self.fenced = set(fenced)

    def get_cell(self, x, y):
        return self.inner.get_cell(x, y)

    def set_cell(self, x, y, cell):
        self.inner.set_cell(x, y, cell)

    def get_neighbors(self, x, y):
        return self.inner.get_neighbors(x, y)

    def is_out_of_bounds(self, x, y):
        return (x, y) in self.fenced or self.inner.is_out_of_bounds(x, y)

    def get_grid(self):
        return self.inner.get_grid()

    def set_grid(self, grid):
        self.inner.set_grid(grid)

    def get_width(self):
        return self.inner.get_width()

    def get_height(self):
        return self.inner.get_height()


class TestWorldConstruction:
    """Test World setup."""

    def test_defaults(self):
        board = RectangularBoard(3, 3)
        world = World(board)
        assert world.board is board
        assert len(world.rules) == 0
        assert world.generation == 0
        assert world.evaluate_empty is False
        assert world.get_stats() == Stats()

    def test_initial_rules_registered_in_order(self):
        world = World(RectangularBoard(3, 3), default_rules())
        assert world.rules.names() == ['Loneliness', 'Team Change', 'Overpopulation', 'Birth']

    def test_accepts_rules_manager(self):
        manager = RulesManager([loneliness_rule()])
        world = World(RectangularBoard(3, 3), manager)
        assert world.rules is manager

    def test_duplicate_initial_rules(self):
        with pytest.raises(DuplicateRuleError):
            World(RectangularBoard(3, 3), [loneliness_rule(), loneliness_rule()])

    def test_rejects_non_board(self):
        with pytest.raises(TypeError, match="Board protocol"):
            World(object())

    def test_custom_board_accepted(self):
        world = World(FencedBoard(3, 3, []))
        assert world.next_state() == Stats()


class TestScenarios:
    """Reference scenarios for the two-team rules."""

    def test_lonely_cell_dies(self):
        """A single TEAM_A cell with no same-team neighbours becomes EMPTY."""
        board = RectangularBoard(3, 3)
        board.set_cell(1, 1, A)
        world = World(board, [loneliness_rule()])

        world.next_state()

        assert board.get_cell(1, 1) == E
        assert world.get_stats() == Stats(death_a=1)

    def test_block_corners_survive_center_dies(self):
        """3x3 block: corners (3 neighbours) survive, center (8) dies."""
        state = np.zeros((5, 5), dtype=np.int8)
        state[1:4, 1:4] = A
        board = RectangularBoard(5, 5, initial_state=state)
        world = World(board, [loneliness_rule(), overpopulation_rule()])

        world.next_state()

        for x, y in [(1, 1), (3, 1), (1, 3), (3, 3)]:
            assert board.get_cell(x, y) == A
        assert board.get_cell(2, 2) == E
        # Edge cells have 5 same-team neighbours and die of overpopulation
        for x, y in [(2, 1), (1, 2), (3, 2), (2, 3)]:
            assert board.get_cell(x, y) == E
        assert world.get_stats() == Stats(death_a=5)

    def test_invalid_output_aborts_without_commit(self):
        """A bad rule raises and leaves the board as it was."""
        board = random_board(seed=4)
        world = World(board, [loneliness_rule(), always('Broken', 42)])
        before = board.get_grid()

        with pytest.raises(InvalidRuleOutputError, match="'Broken'"):
            world.next_state()

        np.testing.assert_array_equal(board.get_grid(), before)
        assert world.generation == 0
        assert world.get_stats() == Stats()

    def test_barrier_output_aborts(self):
        board = RectangularBoard(3, 3)
        board.set_cell(0, 0, A)
        world = World(board, [always('Walls', X)])

        with pytest.raises(InvalidRuleOutputError):
            world.next_state()
        assert board.get_cell(0, 0) == A

    def test_recovery_after_removing_faulty_rule(self):
        board = RectangularBoard(3, 3)
        board.set_cell(1, 1, A)
        world = World(board, [loneliness_rule(), always('Broken', 'x')])

        with pytest.raises(InvalidRuleOutputError):
            world.next_state()
        world.rules.remove('Broken')
        world.next_state()

        assert board.get_cell(1, 1) == E
        assert world.generation == 1


class TestSynchronousUpdate:
    """Every cell is computed from the pre-generation snapshot."""

    def test_line_middle_survives(self):
        """Middle of a 3-cell line keeps both neighbours even though they die."""
        board = RectangularBoard(5, 3)
        for x in (1, 2, 3):
            board.set_cell(x, 1, A)
        world = World(board, [loneliness_rule()])

        world.next_state()

        assert [board.get_cell(x, 1) for x in range(5)] == [E, E, A, E, E]

    def test_single_commit(self):
        """The board receives exactly one set_grid() per generation."""
        board = random_board(seed=2)
        calls = []
        original = board.set_grid

        def recording_set_grid(grid):
            calls.append(grid.copy())
            original(grid)

        board.set_grid = recording_set_grid
        World(board, default_rules()).next_state()
        assert len(calls) == 1

    def test_conversion_uses_old_neighbours(self):
        """Cells converted this generation still count as their old team."""
        board = RectangularBoard(3, 1, initial_state=np.array([[B, A, B]]))
        world = World(board, [team_change_rule()])

        world.next_state()

        # Centre sees two Bs and flips. Each end sees only the old centre A
        # and flips too, even though the centre is now B.
        assert [board.get_cell(x, 0) for x in range(3)] == [A, B, A]
        assert world.get_stats() == Stats(birth_a=2, birth_b=1)


class TestInvariants:
    """Properties that hold for every generation."""

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_barriers_never_change(self, seed):
        board = random_board(seed=seed, barriers=20)
        barriers = board.get_grid() == X
        world = World(board, default_rules() + [always('Greedy', A)], evaluate_empty=True)

        for _ in range(10):
            world.next_state()
            grid = board.get_grid()
            np.testing.assert_array_equal(grid == X, barriers)

    @pytest.mark.parametrize("make_board", [
        lambda: random_board(seed=5),
        lambda: RectangularBoard(8, 8, wrap=True, initial_state=random_state(8, 8, 0.5, 11)),
        lambda: HexagonalBoard(8, 8, initial_state=random_state(8, 8, 0.5, 11)),
        lambda: MaskedBoard.circle(9, initial_state=random_state(9, 9, 0.5, 11)),
    ])
    def test_values_stay_in_domain(self, make_board):
        board = make_board()
        world = World(board, default_rules(), evaluate_empty=True)

        for _ in range(8):
            world.next_state()
            grid = board.get_grid()
            assert grid.min() >= E and grid.max() <= X

    def test_out_of_bounds_positions_untouched(self):
        """Fenced positions are skipped even though get_cell() reports a team."""
        board = FencedBoard(3, 3, fenced=[(0, 0), (2, 2)])
        board.set_cell(0, 0, A)
        board.set_cell(2, 2, B)
        board.set_cell(1, 1, A)
        world = World(board, [always('Wipe', E)])

        world.next_state()

        assert board.get_cell(0, 0) == A
        assert board.get_cell(2, 2) == B
        assert board.get_cell(1, 1) == E
        assert world.get_stats() == Stats(death_a=1)

    def test_masked_shape_preserved(self):
        board = MaskedBoard.circle(7, initial_state=random_state(7, 7, 0.6, 3))
        outside = board.get_grid() == X
        world = World(board, default_rules(), evaluate_empty=True)

        world.step(5)

        np.testing.assert_array_equal(board.get_grid() == X, outside)

    def test_deterministic_replay(self):
        """Two worlds with the same start and rules evolve identically."""
        first = random_board(seed=9)
        second = RectangularBoard(12, 12, initial_state=first.get_grid())
        world_1 = World(first, default_rules(), evaluate_empty=True)
        world_2 = World(second, default_rules(), evaluate_empty=True)

        for _ in range(15):
            assert world_1.next_state() == world_2.next_state()
            np.testing.assert_array_equal(first.get_grid(), second.get_grid())
        assert world_1.get_stats() == world_2.get_stats()


class TestEmptyCells:
    """EMPTY cells are skipped unless evaluate_empty is set."""

    def make_board(self):
        board = RectangularBoard(3, 3)
        for x in range(3):
            board.set_cell(x, 0, A)
        return board

    def test_skipped_by_default(self):
        """Birth rules never fire when empty cells are not evaluated."""
        board = self.make_board()
        world = World(board, [birth_rule()])

        world.next_state()

        assert board.get_cell(1, 1) == E
        assert world.get_stats() == Stats()

    def test_empty_cells_never_asked(self):
        seen = []

        def expression(cell, neighbors):
            seen.append(cell)
            return None

        board = self.make_board()
        World(board, [Rule('Spy', 'Records cells.', expression)]).next_state()
        assert seen == [A, A, A]

    def test_births_when_enabled(self):
        board = self.make_board()
        world = World(board, [birth_rule()], evaluate_empty=True)

        world.next_state()

        assert board.get_cell(1, 1) == A
        assert board.get_cell(0, 1) == E
        assert board.get_cell(2, 1) == E
        assert world.get_stats() == Stats(birth_a=1)


class TestVoting:
    """Conflicting rule proposals are reduced by majority."""

    def test_majority_across_rules(self):
        board = RectangularBoard(1, 1)
        board.set_cell(0, 0, A)
        world = World(board, [always('r1', B), always('r2', E), always('r3', B)])

        world.next_state()

        assert board.get_cell(0, 0) == B
        assert world.get_stats() == Stats(birth_b=1)

    def test_tie_prefers_current(self):
        board = RectangularBoard(1, 1)
        board.set_cell(0, 0, A)
        World(board, [always('die', E), always('live', A)]).next_state()
        assert board.get_cell(0, 0) == A

    def test_tie_without_current_prefers_empty(self):
        board = RectangularBoard(1, 1)
        board.set_cell(0, 0, A)
        world = World(board, [always('flip', B), always('die', E)])
        world.next_state()
        assert board.get_cell(0, 0) == E
        assert world.get_stats() == Stats(death_a=1)

    def test_abstentions_do_not_vote(self):
        board = RectangularBoard(1, 1)
        board.set_cell(0, 0, B)
        World(board, [always('quiet', None), always('die', E), always('quiet2', None)]).next_state()
        assert board.get_cell(0, 0) == E


class TestStatistics:
    """Statistics accumulate until reset."""

    def test_accumulate(self):
        board = RectangularBoard(2, 1)
        world = World(board, [team_change_rule(), always('die', E)])

        board.set_cell(0, 0, A)
        first = world.next_state()
        board.set_cell(1, 0, B)
        second = world.next_state()

        assert first == Stats(death_a=1)
        assert second == Stats(death_b=1)
        assert world.get_stats() == Stats(death_a=1, death_b=1)
        assert world.generation == 2

    def test_reset(self):
        board = RectangularBoard(3, 3)
        board.set_cell(1, 1, A)
        world = World(board, [loneliness_rule()])
        world.next_state()

        world.reset_stats()

        assert world.get_stats() == Stats()
        assert world.generation == 1

    def test_team_switch_counts_birth_only(self):
        board = RectangularBoard(1, 1)
        board.set_cell(0, 0, A)
        world = World(board, [always('flip', B)])
        world.next_state()
        assert world.get_stats() == Stats(birth_b=1)

    def test_stats_dict(self):
        assert Stats(1, 2, 3, 4).as_dict() == {
            'birth_a': 1, 'death_a': 2, 'birth_b': 3, 'death_b': 4}

    def test_step(self):
        board = random_board(seed=6)
        world = World(board, default_rules())
        stats = world.step(4)
        assert world.generation == 4
        assert stats == world.get_stats()

    def test_step_negative(self):
        with pytest.raises(ValueError):
            World(RectangularBoard(2, 2)).step(-1)

    def test_population(self):
        board = RectangularBoard(3, 2, initial_state=np.array([[A, A, B], [X, E, B]]))
        assert World(board).population() == {A: 2, B: 2}

    def test_population_ignores_out_of_bounds(self):
        board = FencedBoard(2, 1, fenced=[(0, 0)])
        board.set_cell(0, 0, A)
        board.set_cell(1, 0, A)
        assert World(board).population() == {A: 1, B: 0}


class TestRuntimeRegistry:
    """Rules added or removed between generations take effect next call."""

    def test_add_between_generations(self):
        board = RectangularBoard(3, 3)
        board.set_cell(1, 1, A)
        world = World(board)

        world.next_state()
        assert board.get_cell(1, 1) == A

        world.rules.add(loneliness_rule())
        world.next_state()
        assert board.get_cell(1, 1) == E

    def test_remove_between_generations(self):
        board = RectangularBoard(3, 3)
        board.set_cell(1, 1, A)
        world = World(board, [loneliness_rule()])

        world.rules.remove('Loneliness')
        world.next_state()

        assert board.get_cell(1, 1) == A
