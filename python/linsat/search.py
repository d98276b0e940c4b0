# LinSat - Boolean Case-Split Search
# Copyright (c) 2024 LinSat Contributors. All rights reserved.

"""
Depth-first case splitting over the boolean structure of the assertions.

Formulas are resolved left to right. Literals go onto a trail of predicates,
And nodes are flattened in place, and boolean references fix the truth value
of their variable for the rest of the branch. Or and Biconditional nodes are
choice points: each alternative is tried inside its own trail scope, the
left one first, and the first leaf whose predicates the Simplex core accepts
is the witness.

    Or(a, b)                ->  a  |  b
    Biconditional(w, f)     ->  w && f  |  !w && !f

Before a choice point is expanded, the predicates collected so far are
checked and the whole subtree is pruned if they are already infeasible.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Optional, Sequence

from .config import SolverConfig
from .formula import And, Biconditional, BooleanReference, Formula, Literal, Or, negate
from .result import CheckResult, SearchStatistics
from .simplex import SimplexResult, check_feasibility
from .stack import ConstraintStack
from .term import Variable

logger = logging.getLogger(__name__)

# Witness of one leaf: rational values and boolean values.
Leaf = tuple[dict[Variable, Fraction], dict[Variable, bool]]


class _BranchBudgetExhausted(Exception):
    """Internal: unwinds the search when max_branches is reached."""


@dataclass
class SearchOutcome:
    """Result of one search over a conjunction of formulas."""
    result: CheckResult
    assignment: dict[Variable, Fraction] = field(default_factory=dict)
    booleans: dict[Variable, bool] = field(default_factory=dict)
    statistics: SearchStatistics = field(default_factory=SearchStatistics)


class BooleanSearch:
    """Backtracking search driving the Simplex core."""

    def __init__(self, config: Optional[SolverConfig] = None):
        self.config = config or SolverConfig()
        self._trail = ConstraintStack()
        self.statistics = SearchStatistics()
        self._undecided = False

    def run(self, formulas: Sequence[Formula]) -> SearchOutcome:
        """
        Search for a witness of the conjunction of formulas.

        Returns:
            SearchOutcome; UNKNOWN only when a configured budget ran out
            before any witness was found.
        """
        self._trail.clear()
        self.statistics = SearchStatistics()
        self._undecided = False

        try:
            found = self._search(list(formulas), {})
        except _BranchBudgetExhausted:
            logger.debug("branch budget of %s exhausted", self.config.max_branches)
            return SearchOutcome(CheckResult.UNKNOWN, statistics=self.statistics)

        if found is not None:
            assignment, booleans = found
            return SearchOutcome(CheckResult.SATISFIABLE, assignment, booleans, self.statistics)
        result = CheckResult.UNKNOWN if self._undecided else CheckResult.UNSATISFIABLE
        return SearchOutcome(result, statistics=self.statistics)

    def _search(self, pending: list[Formula], booleans: dict[Variable, bool]) -> Optional[Leaf]:
        while pending:
            f = pending.pop(0)
            if isinstance(f, Literal):
                self._trail.add(f.predicate)
            elif isinstance(f, And):
                pending[:0] = [f.left, f.right]
            elif isinstance(f, BooleanReference):
                current = booleans.get(f.variable)
                if current is None:
                    booleans = {**booleans, f.variable: f.positive}
                elif current != f.positive:
                    logger.debug("conflict on %s", f.variable.name)
                    return None
            elif isinstance(f, Or):
                return self._branch([f.left, f.right], pending, booleans)
            elif isinstance(f, Biconditional):
                alternatives = [
                    And(f.reference, f.formula),
                    And(negate(f.reference), negate(f.formula)),
                ]
                return self._branch(alternatives, pending, booleans)
            else:
                raise TypeError(f"Expected a formula, got {type(f).__name__}")

        leaf = self._simplex()
        if leaf.feasible:
            return leaf.assignment, booleans
        return None

    def _branch(
        self,
        alternatives: list[Formula],
        rest: list[Formula],
        booleans: dict[Variable, bool],
    ) -> Optional[Leaf]:
        if self._simplex(canonical=False).feasible is False:
            logger.debug("pruned choice point at trail length %d", len(self._trail))
            return None

        for alternative in alternatives:
            self.statistics.branches += 1
            budget = self.config.max_branches
            if budget is not None and self.statistics.branches > budget:
                raise _BranchBudgetExhausted()
            logger.debug("branch %d: trying %s", self.statistics.branches, alternative)
            with self._trail.scope():
                found = self._search([alternative] + rest, booleans)
            if found is not None:
                return found
        return None

    def _simplex(self, canonical: bool = True) -> SimplexResult:
        self.statistics.simplex_calls += 1
        result = check_feasibility(self._trail.items(), self.config, canonical)
        self.statistics.pivots += result.pivots
        if result.feasible is None:
            self._undecided = True
        return result
