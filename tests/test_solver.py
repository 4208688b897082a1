"""Tests for the backtracking solver."""

import random
import sys
from collections import Counter
from typing import List

import pytest

from jigsaw_counter import (
    MalformedPuzzleError,
    Piece,
    Puzzle,
    PuzzleSolver,
    generate_puzzle,
    scramble,
    slot_position_class,
    solve,
)


def unique_2x2() -> List[Piece]:
    """A 2x2 puzzle in solved order where every connector id appears once."""
    return [
        Piece.from_labels("E O1 O2 E"),
        Piece.from_labels("E E O3 I1"),
        Piece.from_labels("I2 O4 E E"),
        Piece.from_labels("I3 E E I4"),
    ]


def rotation_multiset(pieces: List[Piece]) -> Counter:
    return Counter(piece.canonical() for piece in pieces)


def scrambled(length: int, height: int, max_shape_id: int, seed: int) -> Puzzle:
    rng = random.Random(seed)
    return scramble(generate_puzzle(length, height, max_shape_id, rng=rng), rng=rng)


class TestSlotPositionClass:
    """Tests for the position class of grid slots."""

    def test_4x3_grid(self) -> None:
        classes = [slot_position_class(i, 4, 3) for i in range(12)]
        assert classes == [
            "corner", "edge", "edge", "corner",
            "edge", "inner", "inner", "edge",
            "corner", "edge", "edge", "corner",
        ]  # fmt: skip

    def test_single_cell_is_corner(self) -> None:
        assert slot_position_class(0, 1, 1) == "corner"


class TestSolve:
    """Tests for solve on hand-built and generated puzzles."""

    def test_single_piece(self) -> None:
        piece = Piece.from_labels("E E E E")
        solutions = solve(1, 1, [piece], max_solutions=100)

        assert len(solutions) == 1
        assert solutions[0].pieces == [piece]
        assert solutions[0].is_consistent()

    def test_unique_2x2_is_found_exactly_once(self) -> None:
        pieces = unique_2x2()
        solutions = solve(2, 2, pieces, max_solutions=1000)

        assert len(solutions) == 1
        assert solutions[0].pieces == pieces

    def test_unique_2x2_from_scrambled_pieces(self) -> None:
        """Input order and orientation do not matter, the start corner fixes the grid rotation."""
        pieces = [piece.rotate() for piece in reversed(unique_2x2())]
        solutions = solve(2, 2, pieces)

        assert len(solutions) == 1
        assert solutions[0].is_consistent()
        assert solutions[0].pieces[0] == pieces[0].rotate()
        assert rotation_multiset(solutions[0].pieces) == rotation_multiset(pieces)

    def test_unsolvable_returns_empty(self) -> None:
        pieces = unique_2x2()
        pieces[3] = Piece.from_labels("I3 E E I5")
        assert solve(2, 2, pieces) == []

    def test_identical_pieces_are_interchangeable(self) -> None:
        """Four copies of one corner build a symmetric 2x2 that is counted once."""
        corner = Piece.from_labels("E O1 I1 E")
        pieces = [corner, corner.rotate(), corner.rotate().rotate(), corner]

        solutions = solve(2, 2, pieces)

        assert len(solutions) == 1
        assert solutions[0].is_consistent()
        assert rotation_multiset(solutions[0].pieces) == Counter({corner.canonical(): 4})

    @pytest.mark.parametrize("seed", range(25))
    def test_round_trip_3x3(self, seed: int) -> None:
        """A scrambled generated puzzle always has at least one solution."""
        puzzle = scrambled(3, 3, 20, seed)
        solutions = solve(puzzle.length, puzzle.height, puzzle.pieces, max_solutions=1)

        assert len(solutions) == 1
        assert solutions[0].is_consistent()

    @pytest.mark.parametrize("length,height", [(3, 2), (2, 3), (4, 3), (3, 5)])
    @pytest.mark.parametrize("seed", range(8))
    def test_round_trip_rectangular(self, length: int, height: int, seed: int) -> None:
        """The start corner may only fit a transposed grid, the solution is still found."""
        puzzle = scrambled(length, height, 20, seed)
        solutions = solve(length, height, puzzle.pieces, max_solutions=1)

        assert len(solutions) == 1
        assert solutions[0].length == length
        assert solutions[0].height == height
        assert solutions[0].is_consistent()

    @pytest.mark.parametrize("seed", [1, 2, 3, 4])
    def test_solutions_are_sound(self, seed: int) -> None:
        """Every solution is consistent and uses exactly the input pieces."""
        puzzle = scrambled(3, 3, 2, seed)
        solutions = solve(3, 3, puzzle.pieces)

        assert solutions
        for solution in solutions:
            assert solution.is_consistent()
            assert rotation_multiset(solution.pieces) == rotation_multiset(puzzle.pieces)
        assert len({tuple(solution.pieces) for solution in solutions}) == len(solutions)

    @pytest.mark.parametrize("seed", [5, 6])
    def test_cap_is_respected(self, seed: int) -> None:
        """A cap of k returns min(k, total) solutions, in the same order as an uncapped run."""
        puzzle = scrambled(4, 3, 1, seed)
        everything = solve(4, 3, puzzle.pieces)
        assert everything

        for cap in (1, 2, 3, len(everything), len(everything) + 5):
            capped = solve(4, 3, puzzle.pieces, max_solutions=cap)
            assert len(capped) == min(cap, len(everything))
            assert capped == everything[: len(capped)]

    def test_cap_stops_the_search(self) -> None:
        """A capped run stops at the step that produced its last solution."""
        first = PuzzleSolver(2, 2, unique_2x2())
        next(first.iter_solutions())
        steps_to_first = first.steps

        capped = PuzzleSolver(2, 2, unique_2x2())
        capped.solutions(max_solutions=1)
        full = PuzzleSolver(2, 2, unique_2x2())
        full.solutions()

        assert capped.steps == steps_to_first
        assert full.steps > steps_to_first

    def test_steps_restart_on_each_run(self) -> None:
        solver = PuzzleSolver(3, 3, scrambled(3, 3, 2, 3).pieces)
        solver.solutions()
        steps = solver.steps
        solver.solutions()
        assert solver.steps == steps

    def test_deterministic(self) -> None:
        puzzle = scrambled(4, 4, 2, 21)
        assert solve(4, 4, puzzle.pieces) == solve(4, 4, puzzle.pieces)

    def test_solutions_do_not_alias_input(self) -> None:
        pieces = unique_2x2()
        original = list(pieces)
        solution = solve(2, 2, pieces)[0]

        assert solution.pieces is not pieces
        solution.pieces.reverse()
        assert pieces == original
        assert solve(2, 2, pieces)[0].pieces == original

    def test_large_grid_does_not_recurse(self) -> None:
        """The search depth exceeds the recursion limit without trouble."""
        side = 35
        assert side * side > sys.getrecursionlimit()
        puzzle = scrambled(side, side, 1000, 8)

        solutions = solve(side, side, puzzle.pieces, max_solutions=1)

        assert len(solutions) == 1
        assert solutions[0].is_consistent()


class TestMalformedInput:
    """Tests for inputs the solver refuses."""

    def test_wrong_piece_count(self) -> None:
        with pytest.raises(MalformedPuzzleError, match="needs 4 pieces"):
            solve(2, 2, unique_2x2()[:3])

    def test_no_corner_piece(self) -> None:
        with pytest.raises(MalformedPuzzleError, match="corner"):
            solve(1, 1, [Piece.from_labels("I1 O1 I2 O2")])

    @pytest.mark.parametrize(
        "length, height, labels",
        [
            (1, 1, ["E O1 O2 E"]),
            (2, 2, ["E E E E"] * 4),
        ],
    )
    def test_corner_must_fit_top_left_slot(self, length: int, height: int, labels: List[str]) -> None:
        """A corner whose right and bottom sides disagree with the grid edges cannot start the search."""
        with pytest.raises(MalformedPuzzleError, match="top-left slot"):
            solve(length, height, [Piece.from_labels(label) for label in labels])

    def test_bad_dimensions(self) -> None:
        with pytest.raises(MalformedPuzzleError, match="positive"):
            solve(0, 2, [])

    @pytest.mark.parametrize("cap", [0, -3])
    def test_bad_cap(self, cap: int) -> None:
        with pytest.raises(ValueError, match="max_solutions"):
            solve(2, 2, unique_2x2(), max_solutions=cap)
