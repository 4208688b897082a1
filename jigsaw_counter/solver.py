"""Backtracking solver that enumerates the ways a bag of pieces reassembles into a grid.

Slots are filled in row-major order. Each slot only accepts orientations whose
left side fits the piece to its left, whose top side fits the piece above, and
whose border sides face exactly the outside of the grid. The search runs on an
explicit stack of candidate lists, one list per depth, so large grids never hit
the recursion limit.

The first slot always holds the same corner piece in the only orientation that
puts its borders top and left. This fixes the rotation of the whole grid, so an
arrangement and its rotated copies are reported once.
"""

import logging
from typing import Iterator, List, Optional, Sequence, Set, Tuple

from .exceptions import MalformedPuzzleError
from .models import BORDER, Piece, PositionClass, Puzzle
from .pool import PiecePool

logger = logging.getLogger(__name__)


def slot_position_class(index: int, length: int, height: int) -> PositionClass:
    """Return the position class a piece must have to sit in slot ``index``."""
    row, col = divmod(index, length)
    on_row_border = row == 0 or row == height - 1
    on_col_border = col == 0 or col == length - 1
    if on_row_border and on_col_border:
        return "corner"
    if on_row_border or on_col_border:
        return "edge"
    return "inner"


def _turn_clockwise(piece: Piece) -> Piece:
    return piece.rotate().rotate().rotate()


def _quarter_turn(pieces: Sequence[Piece], length: int, height: int) -> List[Piece]:
    """Turn a ``length`` x ``height`` grid a quarter clockwise into a ``height`` x ``length`` grid."""
    turned = []
    for row in range(length):
        for col in range(height):
            turned.append(_turn_clockwise(pieces[(height - 1 - col) * length + row]))
    return turned


def _half_turn(pieces: Sequence[Piece]) -> List[Piece]:
    return [piece.rotate().rotate() for piece in reversed(pieces)]


class PuzzleSolver:
    """Enumerate the complete arrangements of a bag of pieces.

    Args:
        length: Number of columns.
        height: Number of rows.
        pieces: The pieces to place, in any order and orientation.

    Raises:
        MalformedPuzzleError: If the dimensions are not positive, the piece count does
            not match them, or no corner piece fits the top-left slot.
    """

    def __init__(self, length: int, height: int, pieces: Sequence[Piece]):
        if length < 1 or height < 1:
            raise MalformedPuzzleError(f"Puzzle dimensions must be positive, got {length}x{height}")
        if len(pieces) != length * height:
            raise MalformedPuzzleError(
                f"A {length}x{height} puzzle needs {length * height} pieces, got {len(pieces)}"
            )

        self.length = length
        self.height = height
        self.pieces = list(pieces)
        self.start = self._find_start()
        self.steps = 0

    def _find_start(self) -> Piece:
        """Pick the first corner piece of the input that fits the top-left slot, in that orientation.

        Its top and left sides are borders, and its right and bottom sides are borders
        only when the grid is a single cell.
        """
        right_is_border = self.length == 1
        bottom_is_border = self.height == 1
        for piece in PiecePool(self.pieces).candidates("corner", BORDER):
            for orientation in piece.rotations():
                if (
                    orientation.top.is_border
                    and orientation.left.is_border
                    and orientation.right.is_border == right_is_border
                    and orientation.bottom.is_border == bottom_is_border
                ):
                    return orientation
        raise MalformedPuzzleError(
            f"No corner piece fits the top-left slot of a {self.length}x{self.height} grid"
        )

    def _candidates(self, pool: PiecePool, placed: List[Piece], length: int, height: int) -> List[Piece]:
        """Return every distinct orientation of an available piece that fits the next open slot."""
        index = len(placed)
        row, col = divmod(index, length)

        # The first column wraps onto the border of the previous row's last piece.
        left = placed[index - 1].right.inverse()
        top = BORDER if row == 0 else placed[index - length].bottom.inverse()
        right_is_border = col == length - 1
        bottom_is_border = row == height - 1

        found: List[Piece] = []
        for piece in pool.candidates(slot_position_class(index, length, height), left):
            for orientation in piece.rotations():
                if (
                    orientation.left == left
                    and orientation.top == top
                    and orientation.right.is_border == right_is_border
                    and orientation.bottom.is_border == bottom_is_border
                    and orientation not in found
                ):
                    found.append(orientation)
        return found

    def _search(self, length: int, height: int) -> Iterator[List[Piece]]:
        """Yield complete row-major arrangements for a ``length`` x ``height`` grid.

        The generator does no work between yields, so a caller that stops pulling
        stops the search.
        """
        pool = PiecePool(self.pieces)
        total = length * height
        stack: List[List[Piece]] = [[self.start]]
        placed: List[Piece] = []

        while stack:
            self.steps += 1

            if len(placed) == total:
                yield list(placed)
                stack.pop()
                pool.add(placed.pop())
                continue

            frame = stack[-1]
            if frame:
                piece = frame.pop()
                pool.remove(piece)
                placed.append(piece)
                stack.append(self._candidates(pool, placed, length, height) if len(placed) < total else [])
            else:
                stack.pop()
                if placed:
                    pool.add(placed.pop())

    def _arrangements(self) -> Iterator[List[Piece]]:
        yield from self._search(self.length, self.height)
        if self.length != self.height:
            # The start corner may sit top-right or bottom-left, where its top-left
            # orientation only fits the transposed grid.
            for pieces in self._search(self.height, self.length):
                yield _quarter_turn(pieces, self.height, self.length)

    def _symmetric_copies(self, pieces: List[Piece]) -> List[Tuple[Piece, ...]]:
        copies = [tuple(pieces), tuple(_half_turn(pieces))]
        if self.length == self.height:
            turned = _quarter_turn(pieces, self.length, self.height)
            copies += [tuple(turned), tuple(_half_turn(turned))]
        return copies

    def iter_solutions(self) -> Iterator[Puzzle]:
        """Yield each distinct solution once, in discovery order.

        Arrangements that only differ by turning the whole grid, which can happen
        when the bag holds identical pieces, are yielded once.
        """
        seen: Set[Tuple[Piece, ...]] = set()
        for pieces in self._arrangements():
            key = tuple(pieces)
            if key in seen:
                continue
            seen.update(self._symmetric_copies(pieces))
            yield Puzzle(length=self.length, height=self.height, pieces=pieces)

    def solutions(self, max_solutions: Optional[int] = None) -> List[Puzzle]:
        """Collect up to ``max_solutions`` solutions (all of them if None).

        Raises:
            ValueError: If ``max_solutions`` is below 1.
        """
        if max_solutions is not None and max_solutions < 1:
            raise ValueError(f"max_solutions must be positive, got {max_solutions}")

        self.steps = 0

        logger.debug(
            "Solving %dx%d puzzle (%d pieces, cap %s) from start piece %s",
            self.length,
            self.height,
            len(self.pieces),
            max_solutions,
            self.start.label(),
        )

        found: List[Puzzle] = []
        search = self.iter_solutions()
        while max_solutions is None or len(found) < max_solutions:
            solution = next(search, None)
            if solution is None:
                break
            found.append(solution)
        search.close()

        logger.debug(
            "Found %d solution(s) in %d steps%s",
            len(found),
            self.steps,
            " (cap reached)" if max_solutions is not None and len(found) >= max_solutions else "",
        )
        return found


def solve(
    length: int,
    height: int,
    pieces: Sequence[Piece],
    max_solutions: Optional[int] = None,
) -> List[Puzzle]:
    """Find up to ``max_solutions`` ways to assemble ``pieces`` into a ``length`` x ``height`` grid.

    Args:
        length: Number of columns.
        height: Number of rows.
        pieces: The pieces, in any order and orientation.
        max_solutions: Maximum number of solutions to return. None means no limit.

    Returns:
        Independent Puzzle copies, each consistent, in the order they were found.
        An empty list means the search finished without a complete arrangement.

    Raises:
        MalformedPuzzleError: If the pieces cannot describe a grid of this size.
        ValueError: If ``max_solutions`` is below 1.
    """
    return PuzzleSolver(length, height, pieces).solutions(max_solutions)
