# LinSat - Result Types
# Copyright (c) 2024 LinSat Contributors. All rights reserved.

"""Result types returned by Solver.check()."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from typing import Union, Iterator, Any

from .rational import format_rational
from .term import Variable


class CheckResult(Enum):
    """Outcome of a satisfiability check."""
    SATISFIABLE = "sat"
    UNSATISFIABLE = "unsat"
    UNKNOWN = "unknown"   # resource budget exhausted


@dataclass
class SearchStatistics:
    """Work done by one check()."""
    simplex_calls: int = 0
    pivots: int = 0
    branches: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            'simplexCalls': self.simplex_calls,
            'pivots': self.pivots,
            'branches': self.branches,
        }


@dataclass
class CheckOutcome:
    """
    Result of Solver.check().

    Iterating yields ``(result, model)``, so the outcome can be unpacked:

        >>> result, model = solver.check([x, y])

    Attributes:
        result: SATISFIABLE, UNSATISFIABLE or UNKNOWN.
        model: Text values aligned with the requested variables; empty
               unless the result is SATISFIABLE.
        values: The same values as Fractions (or bools for BOOL variables),
                keyed by variable in requested order.
        statistics: Work counters for this check.
        variables: The requested variables, aligned with model.
    """
    result: CheckResult
    model: list[str] = field(default_factory=list)
    values: dict[Variable, Union[Fraction, bool]] = field(default_factory=dict)
    statistics: SearchStatistics = field(default_factory=SearchStatistics)
    variables: list[Variable] = field(default_factory=list)

    @property
    def is_sat(self) -> bool:
        return self.result is CheckResult.SATISFIABLE

    def __iter__(self) -> Iterator[Any]:
        return iter((self.result, self.model))

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            'result': self.result.value,
            'model': [
                {'name': v.name, 'value': text}
                for v, text in zip(self.variables, self.model)
            ],
            'statistics': self.statistics.to_dict(),
        }

    def __repr__(self) -> str:
        if not self.is_sat:
            return f"CheckOutcome({self.result.value})"
        assignment = ', '.join(f"{v.name}={format_value(val)}" for v, val in self.values.items())
        return f"CheckOutcome(sat, {{{assignment}}})"


def format_value(value: Union[Fraction, bool]) -> str:
    """Text for a model value: "p/q", an integer, or "true"/"false"."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return format_rational(value)
