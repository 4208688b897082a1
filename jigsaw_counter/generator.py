"""Random puzzle generation.

Every interior side is drawn once and shared between the two pieces that meet
there: one piece gets the drawn connector and its neighbour gets the inverse.
Sides on the outside of the grid are borders.
"""

import logging
import random
from typing import Dict, List, Literal, Optional

from .models import BORDER, Edge, Piece, Puzzle

logger = logging.getLogger(__name__)

Side = Literal["top", "right", "bottom", "left"]


def _random_connector(rng: random.Random, max_shape_id: int) -> Edge:
    """Draw a connector with a uniform shape id in ``[0, max_shape_id)`` and a uniform kind."""
    shape_id = rng.randrange(max_shape_id)
    if rng.choice([True, False]):
        return Edge.innie(shape_id)
    return Edge.outie(shape_id)


def generate_puzzle(
    length: int,
    height: int,
    max_shape_id: int,
    rng: Optional[random.Random] = None,
) -> Puzzle:
    """Generate a consistent puzzle.

    Args:
        length: Number of columns.
        height: Number of rows.
        max_shape_id: Number of distinct connector shape ids to draw from.
        rng: Random source. A fresh unseeded generator is used if None.

    Returns:
        A Puzzle whose pieces are in their solved positions and orientations.

    Raises:
        ValueError: If a dimension or ``max_shape_id`` is below 1, or the grid is a
            single row or column of more than one piece.
    """
    if length < 1 or height < 1:
        raise ValueError(f"Puzzle dimensions must be positive, got {length}x{height}")
    if max_shape_id < 1:
        raise ValueError(f"max_shape_id must be positive, got {max_shape_id}")
    if (length == 1) != (height == 1):
        raise ValueError(f"Strip puzzles are not supported, got {length}x{height}")

    if rng is None:
        rng = random.Random()

    # One partially filled side map per cell, row-major
    cells: List[Dict[Side, Edge]] = [{} for _ in range(length * height)]

    for index, sides in enumerate(cells):
        row, col = divmod(index, length)
        if row == 0:
            sides["top"] = BORDER
        if row == height - 1:
            sides["bottom"] = BORDER
        if col == 0:
            sides["left"] = BORDER
        if col == length - 1:
            sides["right"] = BORDER

    for index, sides in enumerate(cells):
        if "right" not in sides:
            edge = _random_connector(rng, max_shape_id)
            sides["right"] = edge
            cells[index + 1]["left"] = edge.inverse()
        if "bottom" not in sides:
            edge = _random_connector(rng, max_shape_id)
            sides["bottom"] = edge
            cells[index + length]["top"] = edge.inverse()

    pieces = [Piece(sides["top"], sides["right"], sides["bottom"], sides["left"]) for sides in cells]

    logger.debug("Generated %dx%d puzzle with shape ids below %d", length, height, max_shape_id)
    return Puzzle(length=length, height=height, pieces=pieces)
