# Tests for search.py - boolean case splitting

import pytest
from fractions import Fraction

from linsat.config import SolverConfig
from linsat.formula import and_, boolean, eq, ge, gt, iff, le, lt, not_, or_
from linsat.result import CheckResult
from linsat.search import BooleanSearch
from linsat.sorts import Sort
from linsat.term import Variable


@pytest.fixture
def xyw():
    return Variable.fresh('x'), Variable.fresh('y'), Variable.fresh('w', Sort.BOOL)


class TestConjunctions:
    """No choice points."""

    def test_no_formulas(self):
        outcome = BooleanSearch().run([])
        assert outcome.result is CheckResult.SATISFIABLE
        assert outcome.statistics.branches == 0

    def test_nested_and(self, xyw):
        x, _, _ = xyw
        outcome = BooleanSearch().run([and_(le(2 * x, 10), le(4 * x, 20))])
        assert outcome.assignment == {x: Fraction(5)}

    def test_infeasible_and(self, xyw):
        x, _, _ = xyw
        outcome = BooleanSearch().run([and_(le(x, 3), ge(x, 5))])
        assert outcome.result is CheckResult.UNSATISFIABLE
        assert outcome.assignment == {}


class TestDisjunction:
    """Or is tried left branch first."""

    def test_left_branch_accepted(self, xyw):
        x, _, _ = xyw
        outcome = BooleanSearch().run([le(x, 5), or_(le(x, 1), le(x, 2))])
        assert outcome.assignment == {x: Fraction(1)}
        assert outcome.statistics.branches == 1

    def test_pruning_does_not_canonicalise(self, xyw):
        x, _, _ = xyw
        outcome = BooleanSearch().run([le(x, 5), or_(le(x, 1), le(x, 2))])
        assert outcome.statistics.simplex_calls == 2
        assert outcome.statistics.pivots == 1

    def test_right_branch_after_failure(self, xyw):
        x, _, _ = xyw
        outcome = BooleanSearch().run([le(x, 5), or_(ge(x, 10), le(x, 3))])
        assert outcome.result is CheckResult.SATISFIABLE
        assert outcome.assignment == {x: Fraction(3)}
        assert outcome.statistics.branches == 2
        assert outcome.statistics.simplex_calls == 3

    def test_both_branches_fail(self, xyw):
        x, _, _ = xyw
        outcome = BooleanSearch().run([le(x, 5), ge(x, 0), or_(ge(x, 10), le(x, -1))])
        assert outcome.result is CheckResult.UNSATISFIABLE

    def test_later_formula_forces_backtrack(self, xyw):
        x, y, _ = xyw
        outcome = BooleanSearch().run([or_(le(x, 1), ge(x, 3)), or_(le(y, 0), ge(y, 5)), ge(x, 2)])
        assert outcome.result is CheckResult.SATISFIABLE
        assert outcome.assignment[x] >= 3
        assert outcome.assignment[y] <= 0

    def test_infeasible_prefix_is_pruned(self, xyw):
        x, y, _ = xyw
        outcome = BooleanSearch().run([le(x, 1), ge(x, 2), or_(le(y, 0), ge(y, 5))])
        assert outcome.result is CheckResult.UNSATISFIABLE
        assert outcome.statistics.branches == 0

    def test_negated_equality(self, xyw):
        x, _, _ = xyw
        below = BooleanSearch().run([le(x, 3), not_(eq(x, 3))])
        assert below.assignment == {x: Fraction(2)}
        above = BooleanSearch().run([ge(x, 3), not_(eq(x, 3))])
        assert above.assignment == {x: Fraction(4)}


class TestBooleans:
    """Boolean references and reification."""

    def test_reference_is_assigned(self, xyw):
        _, _, w = xyw
        outcome = BooleanSearch().run([boolean(w)])
        assert outcome.booleans == {w: True}

    def test_contrary_references_conflict(self, xyw):
        _, _, w = xyw
        outcome = BooleanSearch().run([boolean(w), not_(boolean(w))])
        assert outcome.result is CheckResult.UNSATISFIABLE

    def test_biconditional_true_branch(self, xyw):
        x, y, w = xyw
        outcome = BooleanSearch().run([le(x, 5), le(y, 2), iff(w, lt(x, y)), or_(boolean(w), gt(x, y))])
        assert outcome.booleans == {w: True}
        assert outcome.assignment == {x: Fraction(1), y: Fraction(2)}

    def test_biconditional_false_branch(self, xyw):
        x, y, w = xyw
        outcome = BooleanSearch().run([iff(w, lt(x, y)), ge(x, y)])
        assert outcome.booleans == {w: False}
        assert outcome.assignment == {x: Fraction(0), y: Fraction(0)}
        assert outcome.statistics.branches == 2

    def test_biconditional_pinned_by_reference(self, xyw):
        x, y, w = xyw
        outcome = BooleanSearch().run([not_(boolean(w)), iff(w, lt(x, y))])
        assert outcome.booleans == {w: False}
        assert outcome.assignment[x] >= outcome.assignment[y]

    def test_state_does_not_leak_between_runs(self, xyw):
        x, _, w = xyw
        search = BooleanSearch()
        assert search.run([boolean(w), le(x, 1), ge(x, 2)]).result is CheckResult.UNSATISFIABLE
        outcome = search.run([not_(boolean(w)), le(x, 1)])
        assert outcome.result is CheckResult.SATISFIABLE
        assert outcome.booleans == {w: False}


class TestBudgets:
    """Exhausted budgets report UNKNOWN."""

    def test_branch_budget(self, xyw):
        x, _, _ = xyw
        search = BooleanSearch(SolverConfig(max_branches=1))
        outcome = search.run([le(x, 5), or_(ge(x, 10), le(x, 3))])
        assert outcome.result is CheckResult.UNKNOWN

    def test_branch_budget_sufficient(self, xyw):
        x, _, _ = xyw
        search = BooleanSearch(SolverConfig(max_branches=2))
        outcome = search.run([le(x, 5), or_(ge(x, 10), le(x, 3))])
        assert outcome.result is CheckResult.SATISFIABLE

    def test_pivot_budget(self, xyw):
        x, _, _ = xyw
        outcome = BooleanSearch(SolverConfig(max_pivots=0)).run([ge(x, 2)])
        assert outcome.result is CheckResult.UNKNOWN

    def test_definite_answer_beats_undecided_branch(self, xyw):
        x, _, _ = xyw
        outcome = BooleanSearch(SolverConfig(max_pivots=0)).run([or_(ge(x, 2), le(x, 1))])
        assert outcome.result is CheckResult.SATISFIABLE
        assert outcome.assignment == {x: Fraction(0)}
