"""SAT core data structures: literals, clauses, problems and assignments."""

import numbers
from dataclasses import dataclass
from typing import ClassVar, Iterable, List, Set, Tuple, Union

LiteralLike = Union["Literal", int]


class InvalidLiteralError(ValueError):
    """Raised when a literal is built from 0, which names no variable."""


@dataclass(frozen=True)
class Literal:
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, numbers.Integral):
            raise InvalidLiteralError(f"Literal value must be an integer, got {self.value!r}")
        # Integer types from numpy or pandas become plain ints.
        object.__setattr__(self, "value", int(self.value))
        if self.value == 0:
            raise InvalidLiteralError("Literal value must not be 0")

    @classmethod
    def coerce(cls, literal: LiteralLike) -> "Literal":
        return literal if isinstance(literal, Literal) else cls(literal)

    @property
    def variable(self) -> int:
        return abs(self.value)

    @property
    def is_positive(self) -> bool:
        return self.value > 0

    def negated(self) -> "Literal":
        return Literal(-self.value)

    def __neg__(self) -> "Literal":
        return self.negated()

    def __repr__(self) -> str:
        return f"Literal({self.value})"


@dataclass(frozen=True)
class Clause:
    """
    A disjunction ("or") of literals. Order is kept as given; the empty clause
    can never be satisfied.
    """

    literals: Tuple[Literal, ...] = ()

    EMPTY: ClassVar["Clause"]

    @classmethod
    def of(cls, *literals: LiteralLike) -> "Clause":
        return cls(tuple(Literal.coerce(lit) for lit in literals))

    def contains(self, literal: Literal) -> bool:
        return literal in self.literals

    def is_empty(self) -> bool:
        return not self.literals

    def size(self) -> int:
        return len(self.literals)

    def head(self) -> Literal:
        return self.literals[0]

    def without(self, literal: Literal) -> "Clause":
        if literal not in self.literals:
            return self
        return Clause(tuple(lit for lit in self.literals if lit != literal))

    def values(self) -> List[int]:
        return [lit.value for lit in self.literals]

    def __len__(self) -> int:
        return len(self.literals)

    def __iter__(self):
        return iter(self.literals)


Clause.EMPTY = Clause()


@dataclass(frozen=True)
class Problem:
    """
    A conjunction ("and") of clauses. The empty problem is trivially satisfied;
    `Problem.UNSATISFIABLE` (a single empty clause) marks a contradiction.
    """

    clauses: Tuple[Clause, ...] = ()

    UNSATISFIABLE: ClassVar["Problem"]

    @classmethod
    def of(cls, *clauses: Union[Clause, Iterable[LiteralLike]]) -> "Problem":
        return cls(
            tuple(c if isinstance(c, Clause) else Clause.of(*c) for c in clauses)
        )

    def is_empty(self) -> bool:
        return not self.clauses

    def head(self) -> Clause:
        return self.clauses[0]

    def is_unsatisfiable(self) -> bool:
        return bool(self.clauses) and self.clauses[0].is_empty()

    def variables(self) -> Set[int]:
        return {lit.variable for clause in self.clauses for lit in clause}

    def values(self) -> List[List[int]]:
        return [clause.values() for clause in self.clauses]

    def is_satisfied_by(self, assignment: "Assignment") -> bool:
        """Check that every clause has at least one literal held by the assignment.

        Variables the assignment leaves out may take either polarity, so a
        clause mentioning one of them counts as satisfiable.
        """
        decided = {lit.variable for lit in assignment}
        chosen = set(assignment.literals)
        for clause in self.clauses:
            if any(lit in chosen for lit in clause):
                continue
            if any(lit.variable not in decided for lit in clause):
                continue
            return False
        return True

    def __len__(self) -> int:
        return len(self.clauses)

    def __iter__(self):
        return iter(self.clauses)


Problem.UNSATISFIABLE = Problem((Clause.EMPTY,))


@dataclass(frozen=True)
class Assignment:
    """Literals that satisfy a problem, earliest decision first."""

    literals: Tuple[Literal, ...] = ()

    EMPTY: ClassVar["Assignment"]

    @classmethod
    def of(cls, *literals: LiteralLike) -> "Assignment":
        return cls(tuple(Literal.coerce(lit) for lit in literals))

    def prepended_with(self, literal: Literal) -> "Assignment":
        return Assignment((literal,) + self.literals)

    def appended_with(self, literal: Literal) -> "Assignment":
        return Assignment(self.literals + (literal,))

    def contains(self, literal: Literal) -> bool:
        return literal in self.literals

    def values(self) -> List[int]:
        return [lit.value for lit in self.literals]

    def __len__(self) -> int:
        return len(self.literals)

    def __iter__(self):
        return iter(self.literals)


Assignment.EMPTY = Assignment()


def completed(assignment: Assignment, problem: Problem, default: bool = False) -> Assignment:
    """
    Extend an assignment with every variable of `problem` it leaves out.
    Missing variables get the `default` polarity and are appended in ascending
    variable order after the decided literals.
    """
    decided = {lit.variable for lit in assignment}
    missing = sorted(problem.variables() - decided)
    extra = tuple(Literal(var if default else -var) for var in missing)
    return Assignment(assignment.literals + extra)
