"""CNF data model, clause builders, and backtracking SAT search."""

from .model import Literal, Clause, Problem, Assignment, InvalidLiteralError, completed
from .solver_core import (
    propagate,
    solve,
    solve_any,
    get_solver,
    RecursiveSolver,
    IterativeSolver,
)
from .clauses import at_least_one, at_most_one, exactly_one, implication, equivalence

__all__ = [
    "Literal",
    "Clause",
    "Problem",
    "Assignment",
    "InvalidLiteralError",
    "completed",
    "propagate",
    "solve",
    "solve_any",
    "get_solver",
    "RecursiveSolver",
    "IterativeSolver",
    "at_least_one",
    "at_most_one",
    "exactly_one",
    "implication",
    "equivalence",
]
