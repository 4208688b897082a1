"""Scrambling removes every hint of where a piece belongs before it is handed to the solver."""

import random
from typing import Optional

from .models import Puzzle


def scramble(puzzle: Puzzle, rng: Optional[random.Random] = None) -> Puzzle:
    """Shuffle the pieces of a puzzle in place and give each one 0-3 random quarter turns.

    The dimensions are left alone. The result generally no longer satisfies the
    adjacency invariant; it is a bag of pieces for :func:`~jigsaw_counter.solver.solve`.

    Args:
        puzzle: Puzzle to scramble. Modified in place.
        rng: Random source. A fresh unseeded generator is used if None.

    Returns:
        The same puzzle, for chaining.
    """
    if rng is None:
        rng = random.Random()

    rng.shuffle(puzzle.pieces)
    for index, piece in enumerate(puzzle.pieces):
        for _ in range(rng.randrange(4)):
            piece = piece.rotate()
        puzzle.pieces[index] = piece
    return puzzle
