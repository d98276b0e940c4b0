# LinSat - Solver
# Copyright (c) 2024 LinSat Contributors. All rights reserved.

"""
High-level Solver API for LinSat.

This module provides the main user-facing interface: declare variables,
assert formulas in nested scopes, and check satisfiability.

Example:
    >>> solver = Solver()
    >>> x = solver.new_variable('x')
    >>> solver.add_assertion(le(2 * x, 10))
    >>> result, model = solver.check([x])
    >>> result, model
    (<CheckResult.SATISFIABLE: 'sat'>, ['5'])
"""

from __future__ import annotations
import logging
from contextlib import contextmanager
from fractions import Fraction
from typing import Iterable, Iterator, Optional, Sequence, Union

from .config import SolverConfig
from .exceptions import DomainError
from .formula import FORMULA_TYPES, Formula, Literal, variables as formula_variables
from .result import CheckOutcome, CheckResult, format_value
from .search import BooleanSearch
from .sorts import Sort, parse_sort
from .stack import ConstraintStack
from .term import Predicate, Variable

logger = logging.getLogger(__name__)


class Solver:
    """
    Incremental satisfiability checker for linear rational arithmetic.

    Assertions accumulate in the current scope and are only evaluated by
    check(). pop() discards the innermost scope and everything asserted in
    it.

    Example:
        with solver.scope():
            solver.add_assertion(ge(x, 7))
            solver.check()      # evaluated with x >= 7
        solver.check()          # x >= 7 is gone again
    """

    def __init__(self, config: Optional[SolverConfig] = None):
        """
        Initialize the solver.

        Args:
            config: Budgets and witness selection. Defaults to
                    SolverConfig.default().
        """
        self.config = config or SolverConfig.default()
        self._stack = ConstraintStack()
        self._variables: set[Variable] = set()

    def new_variable(self, name: str, sort: Union[Sort, str] = Sort.REAL) -> Variable:
        """
        Declare a fresh variable.

        Args:
            name: Display name. Names may repeat; every call yields a
                  distinct variable.
            sort: Sort.REAL, Sort.INT (treated as REAL) or Sort.BOOL, or
                  the sort's string value.

        Raises:
            SortError: If the sort is not supported.
        """
        v = Variable.fresh(name, parse_sort(sort))
        self._variables.add(v)
        return v

    def declare_variable(self, v: Variable) -> Variable:
        """Adopt a variable created by another solver so it can be used here."""
        if not isinstance(v, Variable):
            raise TypeError(f"Expected a Variable, got {type(v).__name__}")
        self._variables.add(v)
        return v

    def add_assertion(self, formula: Union[Formula, Predicate]) -> None:
        """
        Assert a formula in the current scope.

        Raises:
            TypeError: If formula is not a formula or predicate.
            DomainError: If formula uses variables this solver does not know.
        """
        if isinstance(formula, Predicate):
            formula = Literal(formula)
        if not isinstance(formula, FORMULA_TYPES):
            raise TypeError(f"Expected a formula, got {type(formula).__name__}")
        self._validate_variables(formula_variables(formula))
        self._stack.add(formula)

    def push(self) -> None:
        """Open a nested scope."""
        self._stack.push()

    def pop(self) -> None:
        """
        Close the innermost scope, dropping its assertions.

        Raises:
            StackUnderflowError: If no scope is open beyond the base scope.
        """
        dropped = self._stack.pop()
        logger.debug("popped scope with %d assertion(s)", len(dropped))

    def reset(self) -> None:
        """Drop every scope and assertion. Declared variables stay valid."""
        self._stack.clear()

    @contextmanager
    def scope(self) -> Iterator[Solver]:
        """push() on entry and pop() on exit."""
        self.push()
        try:
            yield self
        finally:
            self.pop()

    @property
    def num_scopes(self) -> int:
        """Number of scopes open beyond the base scope."""
        return self._stack.depth

    def assertions(self) -> list[Formula]:
        """Every live assertion, outermost scope first."""
        return self._stack.items()

    def check(self, requested: Sequence[Variable] = ()) -> CheckOutcome:
        """
        Decide satisfiability of the live assertions.

        Args:
            requested: Variables whose values should be reported, in order.

        Returns:
            CheckOutcome; unpacks as ``(result, model)`` where model holds
            one text value per requested variable when satisfiable.

        Raises:
            DomainError: If a requested variable is unknown to this solver.
        """
        requested = list(requested)
        self._validate_variables(requested)

        outcome = BooleanSearch(self.config).run(self._stack.items())
        logger.debug(
            "check: %s after %d branch(es), %d pivot(s)",
            outcome.result.value, outcome.statistics.branches, outcome.statistics.pivots,
        )
        if outcome.result is not CheckResult.SATISFIABLE:
            return CheckOutcome(outcome.result, statistics=outcome.statistics)

        values: dict[Variable, Union[Fraction, bool]] = {}
        for v in requested:
            if v.sort is Sort.BOOL:
                values[v] = outcome.booleans.get(v, False)
            else:
                values[v] = outcome.assignment.get(v, Fraction(0))
        model = [format_value(values[v]) for v in requested]
        return CheckOutcome(CheckResult.SATISFIABLE, model, values, outcome.statistics, requested)

    def _validate_variables(self, used: Iterable[Variable]) -> None:
        unknown = [v for v in used if v not in self._variables]
        if unknown:
            names = ', '.join(f"'{v.name}'" for v in unknown)
            raise DomainError(f"Variable {names} not declared by this solver", variables=unknown)


def solve(
    formulas: Iterable[Union[Formula, Predicate]],
    requested: Sequence[Variable] = (),
    config: Optional[SolverConfig] = None,
) -> CheckOutcome:
    """
    Check a batch of formulas without managing a Solver.

    Every variable the formulas or the request mention is declared on a
    throwaway solver first.

    Example:
        >>> outcome = solve([le(x, 3), ge(x, 5)])
        >>> outcome.result
        <CheckResult.UNSATISFIABLE: 'unsat'>
    """
    solver = Solver(config)
    formulas = [Literal(f) if isinstance(f, Predicate) else f for f in formulas]
    for f in formulas:
        if isinstance(f, FORMULA_TYPES):
            for v in formula_variables(f):
                solver.declare_variable(v)
    for v in requested:
        solver.declare_variable(v)
    for f in formulas:
        solver.add_assertion(f)
    return solver.check(requested)
