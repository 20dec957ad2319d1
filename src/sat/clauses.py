"""Clause builders used by encoders while they assemble a Problem."""

from typing import Iterable, List

from .model import Clause, Literal, LiteralLike


def _literals(literals: Iterable[LiteralLike]) -> List[Literal]:
    return [Literal.coerce(lit) for lit in literals]


def at_least_one(literals: Iterable[LiteralLike]) -> Clause:
    return Clause(tuple(_literals(literals)))


def at_most_one(literals: Iterable[LiteralLike]) -> List[Clause]:
    """Pairwise encoding: (-a or -b) for every pair, so n literals give n*(n-1)/2 clauses."""
    lits = _literals(literals)
    clauses = []
    for i, a in enumerate(lits):
        for b in lits[i + 1:]:
            clauses.append(Clause((a.negated(), b.negated())))
    return clauses


def exactly_one(literals: Iterable[LiteralLike]) -> List[Clause]:
    lits = _literals(literals)
    clauses = at_most_one(lits)
    clauses.append(at_least_one(lits))
    return clauses


def implication(left: LiteralLike, right: LiteralLike) -> Clause:
    """left => right, i.e. (-left or right)."""
    return Clause((Literal.coerce(left).negated(), Literal.coerce(right)))


def equivalence(left: LiteralLike, right: LiteralLike) -> List[Clause]:
    return [implication(left, right), implication(right, left)]
