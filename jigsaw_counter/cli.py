#!/usr/bin/env python
"""Command line interface.

Example usage:
  # Average solution count over 1000 random 5x5 puzzles with 10 shapes
  jigsaw-counter average

  # Smaller puzzles, fewer shapes, stop counting at 50 solutions per puzzle
  jigsaw-counter average -l 4 -h 3 -m 4 -p 200 -s 50

  # Print one puzzle and its first solution
  jigsaw-counter show -l 3 -h 3 --seed 7
"""

import argparse
import logging
import random
from typing import List, Optional

from .config import Settings, get_settings
from .generator import generate_puzzle
from .render import render_puzzle
from .scramble import scramble
from .solver import solve
from .stats import run_batch

logger = logging.getLogger(__name__)

COMMANDS = ["average", "show", "twosolutions"]


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser. ``-h`` is the grid height, help is ``--help`` only."""
    parser = argparse.ArgumentParser(
        prog="jigsaw-counter",
        description="Generate random edge-matched jigsaw puzzles and count their solutions",
        add_help=False,
    )
    parser.add_argument(
        "commands",
        nargs="+",
        choices=COMMANDS,
        metavar="COMMAND",
        help=f"Commands to run in order: {', '.join(COMMANDS)}",
    )
    parser.add_argument("--help", action="help", help="Show this help message and exit")

    grid_group = parser.add_argument_group("Puzzle options")
    grid_group.add_argument("-l", "--length", type=_positive_int, help="Number of columns (default: 5)")
    grid_group.add_argument("-h", "--height", type=_positive_int, help="Number of rows (default: 5)")
    grid_group.add_argument(
        "-m",
        "--max-shapes",
        type=_positive_int,
        help="Number of distinct connector shapes (default: 10)",
    )

    run_group = parser.add_argument_group("Run options")
    run_group.add_argument(
        "-p",
        "--total-puzzles",
        type=_positive_int,
        help="Number of puzzles for 'average' (default: 1000)",
    )
    run_group.add_argument(
        "-s",
        "--max-solutions",
        type=_positive_int,
        help="Stop counting a puzzle's solutions at this many (default: no limit)",
    )
    run_group.add_argument("--seed", type=int, help="Random seed for reproducible runs")
    run_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    run_group.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    return parser


def _pick(value: Optional[int], default: Optional[int]) -> Optional[int]:
    return default if value is None else value


def _show(length: int, height: int, max_shapes: int, max_solutions: Optional[int], rng: random.Random) -> None:
    puzzle = generate_puzzle(length, height, max_shapes, rng=rng)
    print(f"Generated {length}x{height} puzzle:")
    print(render_puzzle(puzzle))

    scramble(puzzle, rng=rng)
    solutions = solve(puzzle.length, puzzle.height, puzzle.pieces, max_solutions)
    print(f"\nSolutions found: {len(solutions)}")
    if solutions:
        print("First solution:")
        print(render_puzzle(solutions[0]))


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    """Process command-line arguments and run the requested commands."""
    if settings is None:
        settings = get_settings()

    parser = build_parser()
    args = parser.parse_args(argv)

    length = _pick(args.length, settings.LENGTH)
    height = _pick(args.height, settings.HEIGHT)
    max_shapes = _pick(args.max_shapes, settings.MAX_SHAPES)
    total_puzzles = _pick(args.total_puzzles, settings.TOTAL_PUZZLES)
    max_solutions = _pick(args.max_solutions, settings.MAX_SOLUTIONS)
    seed = _pick(args.seed, settings.SEED)

    if (length == 1) != (height == 1):
        parser.error(f"argument -l/--length, -h/--height: strip puzzles are not supported ({length}x{height})")

    logging.basicConfig(
        level=args.log_level or settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    rng = random.Random(seed)
    for command in args.commands:
        if command == "average":
            report = run_batch(
                length,
                height,
                max_shapes,
                total_puzzles,
                max_solutions=max_solutions,
                rng=rng,
                show_progress=settings.SHOW_PROGRESS and not args.no_progress,
            )
            print(report.summary())
        elif command == "show":
            _show(length, height, max_shapes, max_solutions, rng)
        else:
            logger.warning("'%s' is not implemented yet, skipping", command)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
