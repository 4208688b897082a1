"""Data models for edge-matched jigsaw puzzles.

A puzzle is a grid of square pieces. Every piece side carries an edge value:
a flat border, or an innie/outie connector with a shape identifier. Two sides
fit when both are borders or when an innie meets an outie of the same shape.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Literal, Optional, Tuple

from .exceptions import InvalidPieceError

EdgeKind = Literal["border", "innie", "outie"]
PositionClass = Literal["corner", "edge", "inner"]

# Border side count -> position class. Four borders is the single cell of a 1x1 grid.
_CLASS_BY_BORDER_COUNT = {
    0: "inner",
    1: "edge",
    2: "corner",
    4: "corner",
}

_KIND_RANK = {"border": 0, "innie": 1, "outie": 2}


@dataclass(frozen=True)
class Edge:
    """One side of a puzzle piece.

    Attributes:
        kind: "border" for the outside of the puzzle, "innie" or "outie" for connectors.
        shape_id: Connector shape identifier (None for borders).
    """

    kind: EdgeKind
    shape_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind not in _KIND_RANK:
            raise ValueError(f"Unknown edge kind: {self.kind!r}")
        if self.kind == "border" and self.shape_id is not None:
            raise ValueError("Border edges carry no shape id")
        if self.kind != "border" and self.shape_id is None:
            raise ValueError(f"{self.kind} edges need a shape id")

    @classmethod
    def border(cls) -> "Edge":
        return BORDER

    @classmethod
    def innie(cls, shape_id: int) -> "Edge":
        return cls("innie", shape_id)

    @classmethod
    def outie(cls, shape_id: int) -> "Edge":
        return cls("outie", shape_id)

    @classmethod
    def from_label(cls, label: str) -> "Edge":
        """Parse a label produced by :meth:`label` ("E", "I<id>" or "O<id>")."""
        text = label.strip()
        if text == "E":
            return BORDER
        if len(text) > 1 and text[0] in "IO" and text[1:].isdigit():
            return cls("innie" if text[0] == "I" else "outie", int(text[1:]))
        raise ValueError(f"Invalid edge label: {label!r}")

    @property
    def is_border(self) -> bool:
        return self.kind == "border"

    def inverse(self) -> "Edge":
        """Return the edge that fits against this one (innie <-> outie, border stays border)."""
        if self.kind == "innie":
            return Edge("outie", self.shape_id)
        if self.kind == "outie":
            return Edge("innie", self.shape_id)
        return self

    def fits(self, other: "Edge") -> bool:
        """Check whether two sides can be placed against each other."""
        return other == self.inverse()

    def label(self) -> str:
        """Short text label used when rendering ("E", "I3", "O3")."""
        if self.is_border:
            return "E"
        return f"{self.kind[0].upper()}{self.shape_id}"

    def sort_key(self) -> Tuple[int, int]:
        # Only used to pick a stable canonical rotation; shapes have no real order.
        return (_KIND_RANK[self.kind], -1 if self.shape_id is None else self.shape_id)


BORDER = Edge("border")


@dataclass(frozen=True)
class Piece:
    """A square puzzle piece with four sides in clockwise order.

    The position class is derived from the number of border sides when the piece
    is built. It does not depend on which side holds which edge, so every rotation
    of a piece shares it.
    """

    top: Edge
    right: Edge
    bottom: Edge
    left: Edge
    position_class: PositionClass = field(init=False)

    def __post_init__(self) -> None:
        borders = sum(1 for edge in self.edges if edge.is_border)
        position_class = _CLASS_BY_BORDER_COUNT.get(borders)
        if position_class is None:
            raise InvalidPieceError(f"A piece cannot have {borders} border sides: {self.label()}")
        object.__setattr__(self, "position_class", position_class)

    @classmethod
    def from_labels(cls, labels: str) -> "Piece":
        """Build a piece from four whitespace separated labels in top, right, bottom, left order.

        Example: ``Piece.from_labels("E O1 O2 E")`` is a top-left corner.
        """
        parts = labels.split()
        if len(parts) != 4:
            raise ValueError(f"Expected four edge labels, got {len(parts)}: {labels!r}")
        top, right, bottom, left = (Edge.from_label(part) for part in parts)
        return cls(top, right, bottom, left)

    @property
    def edges(self) -> Tuple[Edge, Edge, Edge, Edge]:
        return (self.top, self.right, self.bottom, self.left)

    def rotate(self) -> "Piece":
        """Rotate a quarter turn counter-clockwise: the right side becomes the top."""
        return Piece(self.right, self.bottom, self.left, self.top)

    def rotations(self) -> Iterator["Piece"]:
        """Yield the piece as-is followed by its three other orientations."""
        piece = self
        for _ in range(4):
            yield piece
            piece = piece.rotate()

    def canonical(self) -> "Piece":
        """Return a fixed representative of this piece's rotation class."""
        return min(self.rotations(), key=lambda p: tuple(edge.sort_key() for edge in p.edges))

    def label(self) -> str:
        return " ".join(edge.label() for edge in self.edges)


@dataclass
class Puzzle:
    """A ``length`` x ``height`` grid of pieces stored in row-major order.

    Attributes:
        length: Number of columns.
        height: Number of rows.
        pieces: Pieces in row-major order; index ``i`` is row ``i // length``, column ``i % length``.
    """

    length: int
    height: int
    pieces: List[Piece] = field(default_factory=list)

    @property
    def size(self) -> int:
        return self.length * self.height

    def piece_at(self, row: int, col: int) -> Piece:
        return self.pieces[row * self.length + col]

    def rows(self) -> Iterator[List[Piece]]:
        for start in range(0, len(self.pieces), self.length):
            yield self.pieces[start : start + self.length]

    def copy(self) -> "Puzzle":
        # Pieces are immutable, a new list is enough to detach the copy.
        return Puzzle(self.length, self.height, list(self.pieces))

    def is_consistent(self) -> bool:
        """Check that every side either meets its neighbour or faces the outside as a border."""
        if len(self.pieces) != self.size:
            return False

        for index, piece in enumerate(self.pieces):
            row, col = divmod(index, self.length)

            if (row == 0) != piece.top.is_border:
                return False
            if (row == self.height - 1) != piece.bottom.is_border:
                return False
            if (col == 0) != piece.left.is_border:
                return False
            if (col == self.length - 1) != piece.right.is_border:
                return False

            if col > 0 and piece.left != self.pieces[index - 1].right.inverse():
                return False
            if row > 0 and piece.top != self.pieces[index - self.length].bottom.inverse():
                return False

        return True
