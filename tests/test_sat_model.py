"""Unit tests for the CNF data model."""

import pytest

from src.sat.model import Assignment, Clause, InvalidLiteralError, Literal, Problem, completed


def test_literal_zero_is_rejected():
    with pytest.raises(InvalidLiteralError):
        Literal(0)
    with pytest.raises(ValueError):
        Clause.of(1, 0, 2)


def test_literal_accepts_any_integer_type_but_not_bool():
    np = pytest.importorskip("numpy")
    literal = Literal(np.int64(-3))
    assert literal == Literal(-3)
    assert type(literal.value) is int
    assert Clause.of(np.int32(1), 2).values() == [1, 2]
    with pytest.raises(InvalidLiteralError):
        Literal(True)
    with pytest.raises(InvalidLiteralError):
        Literal(1.0)


def test_literal_negation_is_an_involution():
    lit = Literal(7)
    assert lit.negated() == Literal(-7)
    assert -(-lit) == lit
    assert lit.variable == 7 and (-lit).variable == 7
    assert lit.is_positive and not (-lit).is_positive


def test_clause_without_keeps_order_and_identity_when_absent():
    clause = Clause.of(1, -2, 3, -2, 4)
    assert clause.without(Literal(-2)).values() == [1, 3, 4]
    assert clause.without(Literal(9)) is clause
    assert clause.values() == [1, -2, 3, -2, 4]


def test_empty_values():
    assert Clause.EMPTY.is_empty()
    assert Problem().is_empty()
    assert Problem.UNSATISFIABLE.clauses == (Clause.EMPTY,)
    assert Problem.UNSATISFIABLE.is_unsatisfiable()
    assert not Problem.of([1]).is_unsatisfiable()


def test_problem_of_builds_clauses_from_ints():
    problem = Problem.of([1, 2], Clause.of(-2, 3))
    assert problem.values() == [[1, 2], [-2, 3]]
    assert problem.head() == Clause.of(1, 2)
    assert problem.variables() == {1, 2, 3}


def test_assignment_prepend_returns_new_value():
    base = Assignment.of(2, 3)
    extended = base.prepended_with(Literal(-1))
    assert extended.values() == [-1, 2, 3]
    assert base.values() == [2, 3]
    assert base.appended_with(Literal(4)).values() == [2, 3, 4]


def test_is_satisfied_by_treats_missing_variables_as_free():
    problem = Problem.of([1, 2], [-2, 3])
    assert problem.is_satisfied_by(Assignment.of(1, -2))
    assert problem.is_satisfied_by(Assignment.of(1))
    assert not problem.is_satisfied_by(Assignment.of(-1, -2))
    assert not problem.is_satisfied_by(Assignment.of(1, 2, -3))


def test_completed_fills_in_missing_variables():
    problem = Problem.of([1, 2], [-2, 3], [4])
    assignment = Assignment.of(4, 1, -2)
    assert completed(assignment, problem).values() == [4, 1, -2, -3]
    assert completed(assignment, problem, default=True).values() == [4, 1, -2, 3]
    assert assignment.values() == [4, 1, -2]
