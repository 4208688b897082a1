"""Index of unplaced pieces by position class and edge value."""

from collections import Counter
from typing import Dict, Iterable, List

from .models import Edge, Piece, PositionClass


class PiecePool:
    """Pieces still available to the solver, grouped as ``class -> edge -> pieces``.

    A piece is stored under every distinct edge value it carries, keyed by the
    canonical form of its rotation class so that the same physical piece is one
    entry however it was turned. Identical pieces share an entry with a count.
    """

    def __init__(self, pieces: Iterable[Piece] = ()) -> None:
        self._buckets: Dict[PositionClass, Dict[Edge, Counter]] = {}
        self._size = 0
        for piece in pieces:
            self.add(piece)

    def add(self, piece: Piece) -> None:
        """Make a piece available again, in any orientation."""
        key = piece.canonical()
        by_edge = self._buckets.setdefault(key.position_class, {})
        for edge in dict.fromkeys(key.edges):
            by_edge.setdefault(edge, Counter())[key] += 1
        self._size += 1

    def remove(self, piece: Piece) -> None:
        """Take a piece out of every bucket it was added to.

        Raises:
            KeyError: If the piece is not in the pool.
        """
        key = piece.canonical()
        by_edge = self._buckets.get(key.position_class, {})
        edges = list(dict.fromkeys(key.edges))
        for edge in edges:
            if by_edge.get(edge, Counter())[key] < 1:
                raise KeyError(f"Piece not in pool: {piece.label()}")

        for edge in edges:
            bucket = by_edge[edge]
            bucket[key] -= 1
            if bucket[key] == 0:
                del bucket[key]
            if not bucket:
                del by_edge[edge]
        self._size -= 1

    def candidates(self, position_class: PositionClass, edge: Edge) -> List[Piece]:
        """Return the distinct pieces of a class that carry ``edge`` on some side.

        Pieces are returned in canonical orientation, in the order they entered the bucket.
        """
        bucket = self._buckets.get(position_class, {}).get(edge)
        if not bucket:
            return []
        return list(bucket)

    def count(self, piece: Piece) -> int:
        """Return how many copies of a piece (in any orientation) are available."""
        key = piece.canonical()
        bucket = self._buckets.get(key.position_class, {}).get(key.top)
        if not bucket:
            return 0
        return bucket[key]

    def __len__(self) -> int:
        return self._size
