"""Backtracking SAT search with literal propagation and shortest-clause-first branching."""

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, Iterator, List, Optional, Protocol, Tuple, Type

from .model import Assignment, Clause, Literal, Problem
from src.utils.trace import Tracer, get_tracer

Propagate = Callable[[Literal, Problem], Problem]
Frame = Tuple[Problem, Assignment]


def propagate(literal: Literal, problem: Problem) -> Problem:
    """
    Simplify `problem` assuming `literal` is true.
    Clauses containing the literal are dropped and its negation is removed from
    the others. Returns `Problem.UNSATISFIABLE` as soon as a clause runs empty;
    otherwise the remaining clauses come back shortest first.
    """
    negated = literal.negated()
    remaining: List[Clause] = []
    for clause in problem.clauses:
        if clause.contains(literal):
            continue
        reduced = clause.without(negated)
        if reduced.is_empty():
            # No need to keep propagating this literal.
            return Problem.UNSATISFIABLE
        remaining.append(reduced)
    remaining.sort(key=Clause.size)
    return Problem(tuple(remaining))


class Solver(Protocol):
    def solve(self, problem: Problem) -> Iterator[Assignment]:
        ...


class RecursiveSolver:
    """Depth-first enumeration of every satisfying assignment, true branch first."""

    def __init__(self, propagate: Propagate = propagate, tracer: Optional[Tracer] = None):
        self.propagate = propagate
        self.tracer = tracer

    def solve(self, problem: Problem) -> Iterator[Assignment]:
        return self._solve(problem, 0, self.tracer or get_tracer())

    def _solve(self, problem: Problem, depth: int, tracer: Tracer) -> Iterator[Assignment]:
        if problem.is_empty():
            tracer.log_solution_found(assignment_size=depth)
            yield Assignment.EMPTY
            return

        if problem.head().is_empty():
            tracer.log_backtrack(depth)
            return

        literal = problem.head().head()
        for branch in (literal, literal.negated()):
            # Sub-problems are only built once the branch is reached.
            propagated = self.propagate(branch, problem)
            tracer.log_decide(branch.value, depth + 1, len(propagated))
            if propagated.is_unsatisfiable():
                tracer.log_conflict(branch.value, depth + 1)
            for assignment in self._solve(propagated, depth + 1, tracer):
                yield assignment.prepended_with(branch)


class IterativeSolver:
    """
    Same enumeration as RecursiveSolver, driven by an explicit stack so deep
    search trees do not hit the interpreter's recursion limit.
    """

    def __init__(
        self,
        propagate: Propagate = propagate,
        tracer: Optional[Tracer] = None,
        cancel: Optional[threading.Event] = None,
    ):
        self.propagate = propagate
        self.tracer = tracer
        self.cancel = cancel

    def solve(self, problem: Problem) -> Iterator[Assignment]:
        tracer = self.tracer or get_tracer()
        stack: List[Frame] = [(problem, Assignment.EMPTY)]
        while stack:
            if self.cancel is not None and self.cancel.is_set():
                return
            clauses, assignment = stack.pop()
            depth = len(assignment)

            if clauses.is_empty():
                tracer.log_solution_found(assignment_size=depth)
                yield assignment
                continue

            if clauses.head().is_empty():
                tracer.log_backtrack(depth)
                continue

            literal = clauses.head().head()
            negated = literal.negated()
            propagated = self.propagate(literal, clauses)
            negated_propagated = self.propagate(negated, clauses)
            for branch, sub in ((literal, propagated), (negated, negated_propagated)):
                tracer.log_decide(branch.value, depth + 1, len(sub))
                if sub.is_unsatisfiable():
                    tracer.log_conflict(branch.value, depth + 1)

            # LIFO: push the false branch first so the true branch is explored first.
            stack.append((negated_propagated, assignment.appended_with(negated)))
            stack.append((propagated, assignment.appended_with(literal)))


SOLVERS: Dict[str, Type] = {
    "recursive": RecursiveSolver,
    "iterative": IterativeSolver,
}

DEFAULT_SOLVER: Solver = RecursiveSolver()


def get_solver(name: str, propagate: Propagate = propagate, tracer: Optional[Tracer] = None) -> Solver:
    try:
        solver_cls = SOLVERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown solver {name!r}; expected one of {', '.join(sorted(SOLVERS))}"
        ) from None
    return solver_cls(propagate=propagate, tracer=tracer)


def solve(problem: Problem, solver: Optional[Solver] = None) -> Iterator[Assignment]:
    """Lazily enumerate all assignments satisfying `problem`. Empty if unsatisfiable."""
    return (solver or DEFAULT_SOLVER).solve(problem)


def solve_any(
    problem: Problem,
    propagate: Propagate = propagate,
    max_workers: int = 2,
    tracer: Optional[Tracer] = None,
) -> Optional[Assignment]:
    """
    Return one satisfying assignment, or None if there is none.

    Both top-level branches are searched in parallel and the first one to
    finish with a result wins; the sibling is cancelled. Which assignment
    comes back is therefore not fixed.
    """
    if problem.is_empty():
        return Assignment.EMPTY
    if problem.head().is_empty():
        return None

    literal = problem.head().head()
    cancel = threading.Event()
    solver = IterativeSolver(propagate=propagate, tracer=tracer, cancel=cancel)

    def _first(branch: Literal) -> Optional[Assignment]:
        for assignment in solver.solve(propagate(branch, problem)):
            return Assignment((branch,) + assignment.literals)
        return None

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(_first, branch) for branch in (literal, literal.negated())]
        for future in as_completed(futures):
            result = future.result()
            if result is not None:
                cancel.set()
                return result
    return None
