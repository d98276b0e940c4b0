# LinSat - Simplex Core
# Copyright (c) 2024 LinSat Contributors. All rights reserved.

"""
Feasibility of a conjunction of linear predicates.

Each predicate ``t + c rel 0`` gets a slack variable ``s = t`` whose bound is
``s rel -c``; the solver variables themselves are unbounded. Strict bounds are stored
as DeltaRational bounds (``s < 3`` is ``s <= 3 - delta``), so the whole
algorithm runs on non-strict bounds.

The tableau keeps every basic variable as a row over the nonbasic ones:

    rows[basic] = {nonbasic: coefficient, ...}

Variable indices are the Bland order: the referenced solver variables by
creation order first, then the slacks in predicate order. Both pivot
choices always take the lowest eligible index, which guarantees
termination.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Optional, Sequence

from .config import SolverConfig
from .rational import DeltaRational
from .term import Predicate, Relation, Variable

logger = logging.getLogger(__name__)


@dataclass
class SimplexResult:
    """
    Attributes:
        feasible: True, False, or None when the pivot budget ran out.
        assignment: Exact value of every variable the predicates mention
                    (only when feasible).
        pivots: Number of pivots performed.
    """
    feasible: Optional[bool]
    assignment: dict[Variable, Fraction] = field(default_factory=dict)
    pivots: int = 0


class Tableau:
    """Bounded-variable simplex tableau over DeltaRational values."""

    def __init__(self, predicates: Sequence[Predicate]):
        self.variables: list[Variable] = sorted(
            {v for p in predicates for v in p.variables()}, key=lambda v: v.id
        )
        index = {v: i for i, v in enumerate(self.variables)}
        n = len(self.variables)

        self.size = n + len(predicates)
        self.lower: list[Optional[DeltaRational]] = [None] * self.size
        self.upper: list[Optional[DeltaRational]] = [None] * self.size
        self.values: list[DeltaRational] = [DeltaRational() for _ in range(self.size)]
        self.rows: dict[int, dict[int, Fraction]] = {}
        self.pivots = 0

        for k, p in enumerate(predicates):
            slack = n + k
            self.rows[slack] = {index[v]: c for v, c in p.term.coefficients}
            self._set_bounds(slack, p)

    def _set_bounds(self, slack: int, p: Predicate) -> None:
        bound = -p.term.constant
        rel = p.relation
        if rel is Relation.LE:
            self.upper[slack] = DeltaRational(bound)
        elif rel is Relation.LT:
            self.upper[slack] = DeltaRational(bound, -1)
        elif rel is Relation.GE:
            self.lower[slack] = DeltaRational(bound)
        elif rel is Relation.GT:
            self.lower[slack] = DeltaRational(bound, 1)
        else:
            self.lower[slack] = DeltaRational(bound)
            self.upper[slack] = DeltaRational(bound)

    # Bound queries

    def _below_lower(self, i: int) -> bool:
        lo = self.lower[i]
        return lo is not None and self.values[i] < lo

    def _above_upper(self, i: int) -> bool:
        up = self.upper[i]
        return up is not None and self.values[i] > up

    def _can_increase(self, j: int) -> bool:
        up = self.upper[j]
        return up is None or self.values[j] < up

    def _can_decrease(self, j: int) -> bool:
        lo = self.lower[j]
        return lo is None or self.values[j] > lo

    def within_bounds(self) -> bool:
        """True when every variable's value lies within its bounds."""
        return not any(self._below_lower(i) or self._above_upper(i) for i in range(self.size))

    # Tableau updates

    def _update(self, j: int, value: DeltaRational) -> None:
        """Move nonbasic j to value, keeping every row satisfied."""
        change = value - self.values[j]
        for i, row in self.rows.items():
            a = row.get(j)
            if a is not None:
                self.values[i] = self.values[i] + change * a
        self.values[j] = value

    def _pivot_and_update(self, i: int, j: int, value: DeltaRational) -> None:
        """Move basic i to value by changing nonbasic j, then swap them."""
        theta = (value - self.values[i]) / self.rows[i][j]
        self.values[i] = value
        self.values[j] = self.values[j] + theta
        for k, row in self.rows.items():
            if k != i:
                c = row.get(j)
                if c is not None:
                    self.values[k] = self.values[k] + theta * c
        self._pivot(i, j)

    def _pivot(self, i: int, j: int) -> None:
        row = self.rows.pop(i)
        inverse = 1 / row.pop(j)
        new_row = {i: inverse}
        for k, c in row.items():
            new_row[k] = -c * inverse

        for other in self.rows.values():
            c = other.pop(j, None)
            if c is None:
                continue
            for k, d in new_row.items():
                total = other.get(k, 0) + c * d
                if total == 0:
                    other.pop(k, None)
                else:
                    other[k] = total

        self.rows[j] = new_row
        self.pivots += 1
        logger.debug("pivot %d: x%d leaves, x%d enters", self.pivots, i, j)

    # Feasibility

    def check(self, max_pivots: Optional[int] = None) -> Optional[bool]:
        """
        Repair bound violations until none is left.

        Returns:
            True if feasible, False if infeasible, None if max_pivots ran out.
        """
        while True:
            i = min((b for b in self.rows if self._below_lower(b) or self._above_upper(b)), default=None)
            if i is None:
                return True
            if max_pivots is not None and self.pivots >= max_pivots:
                logger.debug("pivot budget of %d exhausted", max_pivots)
                return None

            row = self.rows[i]
            if self._below_lower(i):
                target = self.lower[i]
                j = min(
                    (k for k, a in row.items()
                     if (a > 0 and self._can_increase(k)) or (a < 0 and self._can_decrease(k))),
                    default=None,
                )
            else:
                target = self.upper[i]
                j = min(
                    (k for k, a in row.items()
                     if (a < 0 and self._can_increase(k)) or (a > 0 and self._can_decrease(k))),
                    default=None,
                )
            if j is None:
                logger.debug("row of x%d cannot be repaired: infeasible", i)
                return False
            self._pivot_and_update(i, j, target)

    # Witness selection

    def _objective(self) -> dict[int, Fraction]:
        """Sum of the solver variables, expressed over the nonbasic variables."""
        costs: dict[int, Fraction] = {}
        for v in range(len(self.variables)):
            row = self.rows.get(v)
            if row is None:
                costs[v] = costs.get(v, 0) + 1
            else:
                for k, a in row.items():
                    costs[k] = costs.get(k, 0) + a
        return {k: c for k, c in costs.items() if c != 0}

    def _ratio_test(self, j: int, direction: int):
        """Tightest (step, index, bound) when moving j in direction, or None if unbounded."""
        best = None
        if direction > 0 and self.upper[j] is not None:
            best = (self.upper[j] - self.values[j], j, self.upper[j])
        elif direction < 0 and self.lower[j] is not None:
            best = (self.values[j] - self.lower[j], j, self.lower[j])

        for i in sorted(self.rows):
            a = self.rows[i].get(j)
            if a is None:
                continue
            rate = a * direction
            if rate > 0 and self.upper[i] is not None:
                candidate = ((self.upper[i] - self.values[i]) / rate, i, self.upper[i])
            elif rate < 0 and self.lower[i] is not None:
                candidate = ((self.values[i] - self.lower[i]) / -rate, i, self.lower[i])
            else:
                continue
            if best is None or candidate[:2] < best[:2]:
                best = candidate
        return best

    def maximize_sum(self, max_pivots: Optional[int] = None) -> None:
        """
        Push a feasible assignment towards the maximum of the variable sum.

        Stops at an optimal vertex, at the first unbounded improving
        direction, or when max_pivots is reached. Feasibility is preserved
        throughout.
        """
        while True:
            costs = self._objective()
            entering = None
            for j in sorted(costs):
                c = costs[j]
                if (c > 0 and self._can_increase(j)) or (c < 0 and self._can_decrease(j)):
                    entering, direction = j, (1 if c > 0 else -1)
                    break
            if entering is None:
                return

            step = self._ratio_test(entering, direction)
            if step is None:
                logger.debug("objective unbounded along x%d", entering)
                return
            _, leaving, target = step
            if leaving == entering:
                self._update(entering, target)
                continue
            if max_pivots is not None and self.pivots >= max_pivots:
                return
            self._pivot_and_update(leaving, entering, target)

    # Model

    def delta(self) -> Fraction:
        """Largest delta <= 1 for which every DeltaRational bound still holds."""
        delta = Fraction(1)
        for i in range(self.size):
            v = self.values[i]
            lo = self.lower[i]
            if lo is not None and lo.c < v.c and lo.k > v.k:
                delta = min(delta, (v.c - lo.c) / (lo.k - v.k))
            up = self.upper[i]
            if up is not None and v.c < up.c and v.k > up.k:
                delta = min(delta, (up.c - v.c) / (v.k - up.k))
        return delta

    def assignment(self) -> dict[Variable, Fraction]:
        delta = self.delta()
        return {v: self.values[i].resolve(delta) for i, v in enumerate(self.variables)}


def check_feasibility(
    predicates: Sequence[Predicate],
    config: Optional[SolverConfig] = None,
    canonical: bool = True,
) -> SimplexResult:
    """
    Decide whether a conjunction of predicates has a rational solution.

    Args:
        predicates: The conjunction; order fixes the slack indices.
        config: Budgets and witness selection.
        canonical: False skips witness canonicalisation even when the
                   config enables it, for callers that only need the verdict.

    Returns:
        SimplexResult with the exact witness when feasible.
    """
    config = config or SolverConfig()
    tableau = Tableau(predicates)
    feasible = tableau.check(config.max_pivots)
    if not feasible:
        return SimplexResult(feasible, {}, tableau.pivots)

    if canonical and config.canonical_witness:
        tableau.maximize_sum(config.max_pivots)
    return SimplexResult(True, tableau.assignment(), tableau.pivots)
