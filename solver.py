"""Top-level SAT solve interface.

Expose `solve_formula(formula)` for CNF problems given as a `Problem` or as
nested integer lists, and `solve_puzzle(puzzle)` for sudoku grids in any of
the forms accepted by `src.puzzles`.
"""

from itertools import islice
from typing import Any, Iterator, List, Optional

from src.puzzles.sudoku import Grid, Sudoku
from src.sat import solver_core
from src.sat.model import Assignment, Problem
from src.sat.solver_core import Solver


def solve_formula(formula: Any, solver: Optional[Solver] = None) -> Iterator[Assignment]:
    """
    Lazily enumerate assignments of a CNF formula.
    Accepts:
      - Problem instances (used directly)
      - Sequences of integer sequences, e.g. [[1, -2], [2, 3]]
    """
    if isinstance(formula, Problem):
        problem = formula
    elif isinstance(formula, (list, tuple)):
        problem = Problem.of(*formula)
    else:
        raise TypeError("solve_formula expects a Problem or a list of integer clauses")

    return solver_core.solve(problem, solver)


def solve_puzzle(puzzle: Any, solver: Optional[Solver] = None, limit: Optional[int] = None) -> List[Grid]:
    """
    Solve a sudoku and return up to `limit` solved grids (all of them when None).
    Accepts:
      - Sudoku instances (used directly)
      - Grids as lists of rows, with 0 for empty cells
      - Grid strings such as "003020600900305001..."
      - Loader records, i.e. dictionaries with a "puzzle" entry
    """
    if isinstance(puzzle, dict):
        if "puzzle" not in puzzle:
            raise TypeError("Puzzle dictionaries need a 'puzzle' entry")
        puzzle = puzzle["puzzle"]

    if isinstance(puzzle, Sudoku):
        sudoku = puzzle
    elif isinstance(puzzle, str):
        sudoku = Sudoku.from_string(puzzle)
    elif isinstance(puzzle, (list, tuple)):
        sudoku = Sudoku(puzzle)
    else:
        raise TypeError("solve_puzzle expects a Sudoku, a grid, a grid string or a puzzle dictionary")

    return list(islice(sudoku.solutions(solver), limit))


__all__ = ["solve_formula", "solve_puzzle"]
