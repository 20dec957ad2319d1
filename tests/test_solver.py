"""Integration-style tests for the top-level solve interface."""

import pytest

from solver import solve_formula, solve_puzzle
from src.puzzles.sudoku import Sudoku
from src.sat.model import Problem
from src.sat.solver_core import IterativeSolver

SOLVED_4X4 = [
    [1, 2, 3, 4],
    [3, 4, 1, 2],
    [2, 1, 4, 3],
    [4, 3, 2, 1],
]


def test_solve_formula_accepts_problems_and_nested_ints():
    expected = [[1, -2], [1, 2, 3], [-1, 2, 3]]
    assert [a.values() for a in solve_formula([[1, 2], [-2, 3]])] == expected
    assert [a.values() for a in solve_formula(Problem.of([1, 2], [-2, 3]), IterativeSolver())] == expected
    assert list(solve_formula([[1], [-1]])) == []


def test_solve_formula_rejects_other_input():
    with pytest.raises(TypeError):
        solve_formula("1 2 0")


def test_solve_puzzle_accepts_every_grid_form():
    puzzle = [row[:] for row in SOLVED_4X4]
    puzzle[0][0] = puzzle[3][3] = 0
    text = "".join(str(d) for row in puzzle for d in row)

    for form in (puzzle, Sudoku(puzzle), text, {"id": "p1", "puzzle": text}):
        assert solve_puzzle(form) == [SOLVED_4X4]


def test_solve_puzzle_limit():
    puzzle = [row[:] for row in SOLVED_4X4]
    for r, c in [(0, 0), (0, 1), (1, 0), (1, 1)]:
        puzzle[r][c] = 0
    # Top-left box can only be completed as [1 2 / 3 4].
    assert solve_puzzle(puzzle, limit=1) == [SOLVED_4X4]
    assert solve_puzzle(puzzle, limit=0) == []


def test_solve_puzzle_rejects_other_input():
    with pytest.raises(TypeError):
        solve_puzzle(42)
    with pytest.raises(TypeError):
        solve_puzzle({"grid": "1234"})
