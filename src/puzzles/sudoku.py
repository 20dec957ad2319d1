"""Sudoku encoder: turns an N x N grid (N a perfect square) into CNF and back."""

import math
from typing import Iterator, List, Optional, Sequence

from src.sat.clauses import exactly_one
from src.sat.model import Assignment, Clause, Literal, Problem
from src.sat.solver_core import IterativeSolver, Solver, solve

Grid = List[List[int]]

DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


class Sudoku:
    """
    One boolean variable per (row, column, digit): true when the cell holds
    the digit. Empty cells are 0 in the input grid.
    """

    def __init__(self, grid: Sequence[Sequence[int]]):
        self.size = len(grid)
        self.box = math.isqrt(self.size)
        if self.size == 0 or self.box * self.box != self.size:
            raise ValueError(f"Grid size must be a non-zero perfect square, got {self.size}")
        for row_index, row in enumerate(grid):
            if len(row) != self.size:
                raise ValueError(f"Row {row_index} has {len(row)} cells, expected {self.size}")
            for digit in row:
                if not 0 <= digit <= self.size:
                    raise ValueError(f"Digit {digit} in row {row_index} is out of range 0..{self.size}")

        self.grid: Grid = [list(row) for row in grid]
        self.problem = Problem(tuple(self._clauses()))

    @classmethod
    def from_string(cls, text: str) -> "Sudoku":
        return cls(grid_from_string(text))

    def variable(self, row: int, col: int, digit: int) -> int:
        return row * self.size * self.size + col * self.size + digit

    def _exactly_one(self, cells) -> List[Clause]:
        return exactly_one([Literal(self.variable(r, c, d)) for r, c, d in cells])

    def _clauses(self) -> List[Clause]:
        n, box = self.size, self.box
        digits = range(1, n + 1)
        clauses: List[Clause] = []

        # 1. No row contains dupe
        for row in range(n):
            for digit in digits:
                clauses.extend(self._exactly_one((row, col, digit) for col in range(n)))

        # 2. No column contains dupe
        for col in range(n):
            for digit in digits:
                clauses.extend(self._exactly_one((row, col, digit) for row in range(n)))

        # 3. No box contains dupe
        for start_row in range(0, n, box):
            for start_col in range(0, n, box):
                for digit in digits:
                    clauses.extend(self._exactly_one(
                        (start_row + i, start_col + j, digit)
                        for i in range(box)
                        for j in range(box)
                    ))

        # 4. Each cell holds exactly one digit
        for row in range(n):
            for col in range(n):
                clauses.extend(self._exactly_one((row, col, digit) for digit in digits))

        # 5. Initial values
        for row in range(n):
            for col in range(n):
                digit = self.grid[row][col]
                if digit > 0:
                    clauses.append(Clause((Literal(self.variable(row, col, digit)),)))

        # Row/box and column/box pairs repeat; keep the first of each.
        return list(dict.fromkeys(clauses))

    def grid_from(self, assignment: Assignment) -> Grid:
        n = self.size
        grid = [[0] * n for _ in range(n)]
        for literal in assignment:
            if not literal.is_positive:
                continue
            index = literal.value - 1
            grid[index // (n * n)][(index // n) % n] = index % n + 1
        return grid

    def solutions(self, solver: Optional[Solver] = None) -> Iterator[Grid]:
        # Decisions go one level deep per variable, so the stack-based search is the default.
        return (self.grid_from(a) for a in solve(self.problem, solver or IterativeSolver()))

    def __str__(self) -> str:
        return format_grid(self.grid)


def format_grid(grid: Sequence[Sequence[int]]) -> str:
    return "\n".join(" ".join(str(d) for d in row) for row in grid)


def grid_from_string(text: str) -> Grid:
    """Read one character per cell, row by row. `.` and `0` are blanks; whitespace is ignored."""
    cells = [c for c in text.strip() if not c.isspace()]
    size = math.isqrt(len(cells))
    if size * size != len(cells):
        raise ValueError(f"Puzzle string has {len(cells)} cells, not a square number")
    bad = [c for c in cells if c != "." and c.lower() not in DIGITS]
    if bad:
        raise ValueError(f"Invalid cell characters: {''.join(bad)!r}")
    digits = [0 if c == "." else DIGITS.index(c.lower()) for c in cells]
    return [digits[r * size:(r + 1) * size] for r in range(size)]


def grid_to_string(grid: Sequence[Sequence[int]]) -> str:
    """Inverse of `grid_from_string`: one character per cell, 0 for blanks."""
    return "".join(DIGITS[d] for row in grid for d in row)
