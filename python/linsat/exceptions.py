# LinSat - Exceptions
# Copyright (c) 2024 LinSat Contributors. All rights reserved.

"""Exception hierarchy for LinSat."""

from __future__ import annotations
from typing import Optional, Any


class LinSatError(Exception):
    """Base class for all LinSat exceptions."""
    pass


class StackUnderflowError(LinSatError):
    """Raised when pop() is called with no scope open beyond the base scope."""

    def __init__(self, message: str = "Cannot pop the base assertion scope"):
        super().__init__(message)


class DivisionByZeroError(LinSatError, ZeroDivisionError):
    """Raised when a rational or a term is divided by zero."""

    def __init__(self, message: str = "Division by zero", dividend: Optional[Any] = None):
        super().__init__(message)
        self.dividend = dividend


class MalformedPredicateError(LinSatError):
    """Raised when a predicate is built from a term without variables."""

    def __init__(self, message: str, term: Optional[Any] = None):
        super().__init__(message)
        self.term = term


class NonlinearTermError(LinSatError):
    """Raised when two terms that both carry variables are multiplied."""

    def __init__(self, left: Any, right: Any):
        super().__init__(
            f"Product of {left} and {right} is not linear.\n"
            "  Suggestion: only multiply terms by rational constants."
        )
        self.left = left
        self.right = right


class SortError(LinSatError):
    """Raised when a sort is unsupported or a variable is used at the wrong sort."""

    def __init__(self, message: str, sort: Optional[Any] = None):
        super().__init__(message)
        self.sort = sort


class DomainError(LinSatError):
    """Raised when a formula or request references a variable unknown to the solver."""

    def __init__(self, message: str, variables: Optional[list] = None):
        super().__init__(message)
        self.variables = variables or []
