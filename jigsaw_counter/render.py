"""Plain text rendering of a puzzle grid."""

from typing import List

from .models import Piece, Puzzle

CELL_SEPARATOR = " | "


def _cell_lines(piece: Piece, width: int) -> List[str]:
    blank = " " * width
    return [
        blank + piece.top.label().center(width) + blank,
        piece.left.label().ljust(width) + blank + piece.right.label().rjust(width),
        blank + piece.bottom.label().center(width) + blank,
    ]


def render_puzzle(puzzle: Puzzle) -> str:
    """Render each piece as a 3-line block with its four edge labels.

    Borders show as ``E``, connectors as ``I<id>`` or ``O<id>``. The puzzle is not modified.

    Example for a 1x1 puzzle::

         E
        E E
         E
    """
    if not puzzle.pieces:
        return ""

    width = max(len(edge.label()) for piece in puzzle.pieces for edge in piece.edges)
    blocks: List[str] = []
    for row in puzzle.rows():
        cells = [_cell_lines(piece, width) for piece in row]
        lines = [CELL_SEPARATOR.join(cell[i] for cell in cells) for i in range(3)]
        blocks.append("\n".join(lines))

    rule = "-" * len(blocks[0].split("\n")[0])
    return f"\n{rule}\n".join(blocks)
