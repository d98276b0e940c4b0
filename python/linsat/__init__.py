# LinSat
# Copyright (c) 2024 LinSat Contributors. All rights reserved.

"""
LinSat - Incremental satisfiability for linear rational arithmetic.

LinSat decides boolean combinations of linear constraints over exact
rationals and returns a witness assignment when they are satisfiable.
Assertions live in nested scopes that can be pushed and popped.

Example:
    >>> import linsat as ls
    >>> solver = ls.Solver()
    >>> x = solver.new_variable('x')
    >>> y = solver.new_variable('y')
    >>> solver.add_assertion(ls.eq(x, y + 10))
    >>> solver.add_assertion(ls.le(x, 20))
    >>> result, model = solver.check([x, y])
    >>> model
    ['20', '10']

Key Features:
    - Exact rational arithmetic (no floating point anywhere)
    - Strict inequalities via infinitesimal bounds
    - Disjunction and boolean reification by case splitting
    - push()/pop() scopes with exact state restoration
"""

__version__ = "0.1.0"

# Rational utilities
from .rational import to_fraction, format_rational, DeltaRational

# Sorts
from .sorts import Sort, parse_sort

# Terms and predicates
from .term import Variable, Term, Relation, Predicate

# Formulas and builders
from .formula import (
    Formula,
    Literal,
    BooleanReference,
    And,
    Or,
    Biconditional,
    le,
    lt,
    ge,
    gt,
    eq,
    boolean,
    and_,
    or_,
    not_,
    iff,
    negate,
    evaluate,
)

# Configuration
from .config import SolverConfig

# Result types
from .result import CheckResult, CheckOutcome, SearchStatistics

# Engine components (for advanced users)
from .simplex import Tableau, SimplexResult, check_feasibility
from .stack import ConstraintStack
from .search import BooleanSearch, SearchOutcome

# Solver
from .solver import Solver, solve

# Exceptions
from .exceptions import (
    LinSatError,
    StackUnderflowError,
    DivisionByZeroError,
    MalformedPredicateError,
    NonlinearTermError,
    SortError,
    DomainError,
)

__all__ = [
    # Version
    "__version__",
    # Rational utilities
    "to_fraction",
    "format_rational",
    "DeltaRational",
    # Sorts
    "Sort",
    "parse_sort",
    # Terms
    "Variable",
    "Term",
    "Relation",
    "Predicate",
    # Formulas
    "Formula",
    "Literal",
    "BooleanReference",
    "And",
    "Or",
    "Biconditional",
    "le",
    "lt",
    "ge",
    "gt",
    "eq",
    "boolean",
    "and_",
    "or_",
    "not_",
    "iff",
    "negate",
    "evaluate",
    # Configuration
    "SolverConfig",
    # Results
    "CheckResult",
    "CheckOutcome",
    "SearchStatistics",
    # Engine
    "Tableau",
    "SimplexResult",
    "check_feasibility",
    "ConstraintStack",
    "BooleanSearch",
    "SearchOutcome",
    # Solver
    "Solver",
    "solve",
    # Exceptions
    "LinSatError",
    "StackUnderflowError",
    "DivisionByZeroError",
    "MalformedPredicateError",
    "NonlinearTermError",
    "SortError",
    "DomainError",
]
