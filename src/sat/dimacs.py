"""DIMACS CNF reading and writing.

Clause lines are whitespace-separated signed integers terminated by `0`;
a clause may span several lines. `c` lines are comments and `%` ends the
formula (as in the SATLIB benchmark files).
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from .model import Clause, Literal, Problem

logger = logging.getLogger(__name__)


class DimacsError(ValueError):
    """Raised for malformed DIMACS input."""


@dataclass
class DimacsFormula:
    num_vars: int
    num_clauses: int
    problem: Problem
    filename: str = ""


def parse_dimacs(text: str, filename: str = "") -> DimacsFormula:
    num_vars = None
    num_clauses = None
    clauses: List[Clause] = []
    current: List[Literal] = []

    for line_number, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.strip()
        if not line or line.startswith("c"):
            continue
        if line.startswith("%"):
            break
        if line.startswith("p"):
            if num_vars is not None:
                raise DimacsError(f"Line {line_number}: duplicate problem line")
            parts = line.split()
            if len(parts) != 4 or parts[1] != "cnf":
                raise DimacsError(f"Line {line_number}: expected 'p cnf <vars> <clauses>', got {line!r}")
            try:
                num_vars, num_clauses = int(parts[2]), int(parts[3])
            except ValueError:
                raise DimacsError(f"Line {line_number}: non-integer counts in {line!r}") from None
            continue
        if num_vars is None:
            raise DimacsError(f"Line {line_number}: clause before problem line")

        for token in line.split():
            try:
                value = int(token)
            except ValueError:
                raise DimacsError(f"Line {line_number}: invalid literal {token!r}") from None
            if value == 0:
                clauses.append(Clause(tuple(current)))
                current = []
            else:
                current.append(Literal(value))

    if num_vars is None:
        raise DimacsError("Missing 'p cnf' problem line")

    if current:
        # Unterminated final clause.
        clauses.append(Clause(tuple(current)))

    if len(clauses) != num_clauses:
        raise DimacsError(f"Header declares {num_clauses} clauses, found {len(clauses)}")

    problem = Problem(tuple(clauses))
    highest = max(problem.variables(), default=0)
    if highest > num_vars:
        logger.warning(f"{filename or '<dimacs>'}: variable {highest} exceeds declared count {num_vars}")

    return DimacsFormula(num_vars=num_vars, num_clauses=num_clauses, problem=problem, filename=filename)


def load_dimacs(path: Union[str, Path]) -> DimacsFormula:
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        return parse_dimacs(f.read(), filename=str(path))


def to_dimacs(problem: Problem) -> str:
    num_vars = max(problem.variables(), default=0)
    lines = [f"p cnf {num_vars} {len(problem)}"]
    for clause in problem:
        lines.append(" ".join(str(v) for v in clause.values() + [0]))
    return "\n".join(lines) + "\n"
