"""Jigsaw counter - generate edge-matched jigsaw puzzles and enumerate their solutions.

This package provides the piece and puzzle models, a random puzzle generator,
a scrambler, and a backtracking solver that counts how many ways the same
pieces can be reassembled.
"""

from .exceptions import InvalidPieceError, MalformedPuzzleError, PuzzleError
from .generator import generate_puzzle
from .models import BORDER, Edge, EdgeKind, Piece, PositionClass, Puzzle
from .pool import PiecePool
from .render import render_puzzle
from .scramble import scramble
from .solver import PuzzleSolver, slot_position_class, solve

__all__ = [
    # Models
    "BORDER",
    "Edge",
    "EdgeKind",
    "Piece",
    "PositionClass",
    "Puzzle",
    # Errors
    "PuzzleError",
    "InvalidPieceError",
    "MalformedPuzzleError",
    # Generation
    "generate_puzzle",
    "scramble",
    # Solving
    "PiecePool",
    "PuzzleSolver",
    "slot_position_class",
    "solve",
    # Output
    "render_puzzle",
]
