"""Exceptions raised by the puzzle model and solver."""


class PuzzleError(Exception):
    """Base class for all puzzle errors."""


class InvalidPieceError(PuzzleError, ValueError):
    """A piece was built with a border count that no grid cell can have.

    This points at a bug in whatever produced the piece, it is not meant to be recovered from.
    """


class MalformedPuzzleError(PuzzleError, ValueError):
    """The solver was handed pieces that cannot describe the requested grid.

    Distinct from an empty result, which means the search ran to completion without a match.
    """
