"""Headless runner: evolve a random two-team board and report statistics.

Generations are computed back to back. Pacing and display belong to
whatever drives the engine, not to this command.
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

import numpy as np

from .boards import HexagonalBoard, RectangularBoard
from .core.cell import Cell
from .core.grid import CellGrid
from .core.world import World
from .rules.team_rules import RULE_FACTORIES, TeamRuleParams, build_rule

logger = logging.getLogger(__name__)

BOARD_KINDS = ('rectangular', 'hexagonal')


def _rule_kinds(value: str) -> List[str]:
    kinds = [kind.strip() for kind in value.split(',') if kind.strip()]
    unknown = [kind for kind in kinds if kind not in RULE_FACTORIES]
    if unknown:
        raise argparse.ArgumentTypeError(
            f"unknown rule kind(s): {', '.join(unknown)} (choose from {', '.join(RULE_FACTORIES)})")
    repeated = sorted({kind for kind in kinds if kinds.count(kind) > 1})
    if repeated:
        raise argparse.ArgumentTypeError(f"duplicate rule kind(s): {', '.join(repeated)}")
    return kinds


def _random_state(width: int, height: int, density: float, seed: Optional[int]) -> np.ndarray:
    cells = CellGrid(width, height)
    cells.randomize(density, np.random.default_rng(seed))
    return cells.to_array()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='life2-run', description=__doc__.splitlines()[0])
    parser.add_argument('--board', choices=BOARD_KINDS, default='rectangular')
    parser.add_argument('--width', type=int, default=40)
    parser.add_argument('--height', type=int, default=40)
    parser.add_argument('--wrap', action='store_true', help='toroidal rectangular board')
    parser.add_argument('--density', type=float, default=0.3, help='initial occupied fraction')
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--generations', type=int, default=50)
    parser.add_argument('--rules', type=_rule_kinds, default=list(RULE_FACTORIES),
                        help='comma-separated rule kinds, in evaluation order')
    parser.add_argument('--loneliness', type=int, default=None)
    parser.add_argument('--overpopulation', type=int, default=None)
    parser.add_argument('--birth', type=int, default=None)
    parser.add_argument('--evaluate-empty', action='store_true',
                        help='evaluate empty cells so birth rules can fire')
    parser.add_argument('--show', action='store_true', help='print the final board')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser


def _make_params(args: argparse.Namespace) -> TeamRuleParams:
    params = TeamRuleParams.standard()
    overrides = {
        'loneliness': args.loneliness,
        'overpopulation': args.overpopulation,
        'birth': args.birth,
    }
    return TeamRuleParams(**{name: getattr(params, name) if value is None else value
                             for name, value in overrides.items()})


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s - %(levelname)s - %(message)s')

    if args.generations < 0:
        parser.error('--generations must be >= 0')
    if not 0.0 <= args.density <= 1.0:
        parser.error('--density must be between 0 and 1')
    try:
        params = _make_params(args)
        state = _random_state(args.width, args.height, args.density, args.seed)
        if args.board == 'hexagonal':
            board = HexagonalBoard(args.width, args.height, initial_state=state)
        else:
            board = RectangularBoard(args.width, args.height, wrap=args.wrap, initial_state=state)
        world = World(board, [build_rule(kind, params) for kind in args.rules],
                      evaluate_empty=args.evaluate_empty)
    except ValueError as exc:
        parser.error(str(exc))
    logger.info(f"Running {args.generations} generations on {world!r}")

    for _ in range(args.generations):
        delta = world.next_state()
        logger.info(f"Generation {world.generation}: {delta}")

    population = world.population()
    stats = world.get_stats()
    print(f"generations: {world.generation}")
    print(f"population: team_a={population[Cell.TEAM_A]} team_b={population[Cell.TEAM_B]}")
    print(f"births: team_a={stats.birth_a} team_b={stats.birth_b}")
    print(f"deaths: team_a={stats.death_a} team_b={stats.death_b}")
    if args.show:
        print(board)
    return 0


if __name__ == '__main__':
    sys.exit(main())
