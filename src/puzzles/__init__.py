"""Puzzle encoders that build CNF problems for the SAT core, plus puzzle file loading."""

from .sudoku import Sudoku, format_grid, grid_from_string, grid_to_string
from .eternity2 import Eternity2, Piece, Rotation, Border, is_valid_board
from .loader import load_puzzles

__all__ = [
    "Sudoku",
    "format_grid",
    "grid_from_string",
    "grid_to_string",
    "Eternity2",
    "Piece",
    "Rotation",
    "Border",
    "is_valid_board",
    "load_puzzles",
]
