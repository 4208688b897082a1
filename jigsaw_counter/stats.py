"""Batch runs: generate, scramble and solve many puzzles and summarise the solution counts."""

import logging
import random
from typing import List, Optional

import numpy as np
from pydantic import BaseModel, Field
from tqdm import tqdm  # type: ignore[import-untyped]

from .generator import generate_puzzle
from .scramble import scramble
from .solver import solve

logger = logging.getLogger(__name__)


class BatchReport(BaseModel):
    """Solution counts for a batch of random puzzles."""

    length: int
    height: int
    max_shapes: int
    max_solutions: Optional[int] = None
    solution_counts: List[int] = Field(default_factory=list)

    @property
    def puzzles(self) -> int:
        return len(self.solution_counts)

    @property
    def average(self) -> float:
        if not self.solution_counts:
            return 0.0
        return float(np.mean(self.solution_counts))

    @property
    def maximum(self) -> int:
        if not self.solution_counts:
            return 0
        return int(np.max(self.solution_counts))

    @property
    def unique_share(self) -> float:
        """Fraction of puzzles that have exactly one solution."""
        if not self.solution_counts:
            return 0.0
        return float(np.mean(np.array(self.solution_counts) == 1))

    def summary(self) -> str:
        return (
            f"Average solutions with at most {self.max_shapes} unique shapes "
            f"across {self.puzzles} puzzles: {self.average}"
        )


def count_solutions(
    length: int,
    height: int,
    max_shapes: int,
    max_solutions: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> int:
    """Generate one puzzle, scramble it and return how many solutions the solver finds."""
    if rng is None:
        rng = random.Random()
    puzzle = scramble(generate_puzzle(length, height, max_shapes, rng=rng), rng=rng)
    return len(solve(puzzle.length, puzzle.height, puzzle.pieces, max_solutions))


def run_batch(
    length: int,
    height: int,
    max_shapes: int,
    total_puzzles: int,
    max_solutions: Optional[int] = None,
    rng: Optional[random.Random] = None,
    show_progress: bool = False,
) -> BatchReport:
    """Solve ``total_puzzles`` random puzzles and collect their solution counts.

    Args:
        length: Number of columns.
        height: Number of rows.
        max_shapes: Number of distinct connector shape ids.
        total_puzzles: Number of puzzles to generate.
        max_solutions: Solution cap per puzzle (None for no cap).
        rng: Random source shared by every puzzle in the batch.
        show_progress: Display a tqdm progress bar.

    Returns:
        BatchReport with one count per puzzle, in generation order.
    """
    if rng is None:
        rng = random.Random()

    logger.info(
        "Running %d puzzles of %dx%d with %d shapes (cap %s)",
        total_puzzles,
        length,
        height,
        max_shapes,
        max_solutions,
    )

    counts = [
        count_solutions(length, height, max_shapes, max_solutions, rng=rng)
        for _ in tqdm(range(total_puzzles), desc="Progress", unit="puzzle", disable=not show_progress)
    ]

    report = BatchReport(
        length=length,
        height=height,
        max_shapes=max_shapes,
        max_solutions=max_solutions,
        solution_counts=counts,
    )
    logger.info("Batch done, average %.3f solutions, maximum %d", report.average, report.maximum)
    return report
