"""Edge-matching tile puzzle (Eternity II style) encoded as CNF.

Every square piece has a color on each of its four borders and may be placed
in any of four rotations. A board is solved when each position holds one
piece and touching borders of neighboring pieces share a color.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence

from src.sat.clauses import at_most_one, equivalence, exactly_one, implication
from src.sat.model import Assignment, Clause, Problem
from src.sat.solver_core import IterativeSolver, Solver, solve


class Border(Enum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


class Rotation(Enum):
    PLUS_0 = 0
    PLUS_90 = 1
    PLUS_180 = 2
    PLUS_270 = 3


@dataclass(frozen=True)
class Piece:
    id: int
    north: int
    east: int
    south: int
    west: int

    def color_to(self, border: Border) -> int:
        return (self.north, self.east, self.south, self.west)[border.value]

    def rotate(self, rotation: Rotation) -> "Piece":
        """Rotate clockwise by the given quarter turns."""
        colors = [self.north, self.east, self.south, self.west]
        turns = rotation.value
        rotated = colors[-turns:] + colors[:-turns] if turns else colors
        return Piece(self.id, *rotated)

    def rotation_to(self, piece: "Piece") -> Rotation:
        if piece.id != self.id:
            raise ValueError(f"Different piece ids: {self.id} != {piece.id}")
        for rotation in Rotation:
            if self.rotate(rotation) == piece:
                return rotation
        raise ValueError(f"{piece} is not a rotation of {self}")


Board = List[List[Optional[Piece]]]


class Eternity2:
    def __init__(self, pieces: Sequence[Piece], initial_board: Sequence[Sequence[Optional[Piece]]]):
        self.rows = len(initial_board)
        self.cols = len(initial_board[0]) if self.rows else 0
        if any(len(row) != self.cols for row in initial_board):
            raise ValueError("Initial board rows must all have the same length")
        if self.rows * self.cols != len(pieces):
            raise ValueError(
                f"Inconsistent number of pieces: {len(pieces)} != {self.rows} * {self.cols}"
            )

        self.pieces: List[Piece] = list(pieces)
        self._index_by_id: Dict[int, int] = {p.id: i for i, p in enumerate(self.pieces)}
        if len(self._index_by_id) != len(self.pieces):
            raise ValueError("Piece ids must be unique")

        colors = sorted({p.color_to(b) for p in self.pieces for b in Border})
        self.colors: Dict[int, int] = {color: i for i, color in enumerate(colors)}
        self.initial_board = [list(row) for row in initial_board]
        self.problem = Problem(tuple(self._clauses()))

    @property
    def piece_variable_count(self) -> int:
        return self.rows * self.cols * len(self.pieces) * len(Rotation)

    def piece_variable(self, row: int, col: int, piece_index: int, rotation: Rotation) -> int:
        self._check_position(row, col)
        if not 0 <= piece_index < len(self.pieces):
            raise ValueError(f"Piece index out of bounds: {piece_index}")
        position = row * self.cols + col
        return (position * len(self.pieces) + piece_index) * len(Rotation) + rotation.value + 1

    def border_variable(self, row: int, col: int, border: Border, color: int) -> int:
        self._check_position(row, col)
        if color not in self.colors:
            raise ValueError(f"Unknown color: {color}")
        position = row * self.cols + col
        return (
            self.piece_variable_count + 1
            + (position * len(Border) + border.value) * len(self.colors)
            + self.colors[color]
        )

    def _check_position(self, row: int, col: int) -> None:
        if not 0 <= row < self.rows:
            raise ValueError(f"Row index out of bounds: {row}")
        if not 0 <= col < self.cols:
            raise ValueError(f"Column index out of bounds: {col}")

    def _positions(self):
        return [(r, c) for r in range(self.rows) for c in range(self.cols)]

    def _clauses(self) -> List[Clause]:
        clauses: List[Clause] = []
        piece_indexes = range(len(self.pieces))

        # 0. Pieces already on the board
        for row, col in self._positions():
            fixed = self.initial_board[row][col]
            if fixed is None:
                continue
            if fixed.id not in self._index_by_id:
                raise ValueError(f"Unknown piece id on initial board: {fixed.id}")
            index = self._index_by_id[fixed.id]
            rotation = self.pieces[index].rotation_to(fixed)
            clauses.append(Clause.of(self.piece_variable(row, col, index, rotation)))

        # 1. Exactly one piece, with exactly one rotation, in each position
        for row, col in self._positions():
            clauses.extend(exactly_one([
                self.piece_variable(row, col, i, rotation)
                for i in piece_indexes
                for rotation in Rotation
            ]))

        # 2. Exactly one position per piece
        for i in piece_indexes:
            clauses.extend(exactly_one([
                self.piece_variable(row, col, i, rotation)
                for row, col in self._positions()
                for rotation in Rotation
            ]))

        # 3. A placed piece fixes the colors of its position's borders
        for row, col in self._positions():
            for i in piece_indexes:
                for rotation in Rotation:
                    placed = self.piece_variable(row, col, i, rotation)
                    piece = self.pieces[i].rotate(rotation)
                    for border in Border:
                        color_var = self.border_variable(row, col, border, piece.color_to(border))
                        clauses.append(implication(placed, color_var))

        # 4. A border shows at most one color
        for row, col in self._positions():
            for border in Border:
                clauses.extend(at_most_one([
                    self.border_variable(row, col, border, color) for color in self.colors
                ]))

        # 5. Touching borders share their color
        for row, col in self._positions():
            for color in self.colors:
                if col + 1 < self.cols:
                    clauses.extend(equivalence(
                        self.border_variable(row, col, Border.EAST, color),
                        self.border_variable(row, col + 1, Border.WEST, color),
                    ))
                if row + 1 < self.rows:
                    clauses.extend(equivalence(
                        self.border_variable(row, col, Border.SOUTH, color),
                        self.border_variable(row + 1, col, Border.NORTH, color),
                    ))

        return clauses

    def board_from(self, assignment: Assignment) -> Board:
        board: Board = [[None] * self.cols for _ in range(self.rows)]
        per_position = len(self.pieces) * len(Rotation)
        for literal in assignment:
            value = literal.value
            if value < 0 or value > self.piece_variable_count:
                continue
            position, rest = divmod(value - 1, per_position)
            piece_index, rotation_index = divmod(rest, len(Rotation))
            row, col = divmod(position, self.cols)
            board[row][col] = self.pieces[piece_index].rotate(Rotation(rotation_index))
        return board

    def solutions(self, solver: Optional[Solver] = None) -> Iterator[Board]:
        return (self.board_from(a) for a in solve(self.problem, solver or IterativeSolver()))


def is_valid_board(board: Board) -> bool:
    """True when the board is full and every pair of touching borders matches."""
    for row_index, row in enumerate(board):
        for col_index, piece in enumerate(row):
            if piece is None:
                return False
            if col_index + 1 < len(row):
                right = row[col_index + 1]
                if right is None or piece.east != right.west:
                    return False
            if row_index + 1 < len(board):
                below = board[row_index + 1][col_index]
                if below is None or piece.south != below.north:
                    return False
    return True
