# LinSat - Linear Terms and Predicates
# Copyright (c) 2024 LinSat Contributors. All rights reserved.

"""
Linear terms over solver variables.

A Term is a sum of rational multiples of variables plus a rational constant.
Terms are immutable and support +, -, and scaling by constants with natural
Python syntax. Comparisons are not overloaded; use the builders in
``linsat.formula`` (``le``, ``lt``, ``ge``, ``gt``, ``eq``) to produce
predicates.

Example:
    >>> solver = Solver()
    >>> x = solver.new_variable('x')
    >>> y = solver.new_variable('y')
    >>> t = 2 * x - y + 10
    >>> t.coefficient(y)
    Fraction(-1, 1)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Union, Mapping, FrozenSet
import itertools

from .exceptions import (
    DivisionByZeroError,
    MalformedPredicateError,
    NonlinearTermError,
    SortError,
)
from .rational import to_fraction, format_rational, divide
from .sorts import Sort


# Type for evaluation environment
EvalEnv = Mapping['Variable', Union[int, Fraction, bool]]

# Type alias for things that can be converted to terms
TermLike = Union['Term', 'Variable', int, float, Fraction]

# Creation order across all solvers; doubles as the Bland index rank.
_variable_ids = itertools.count()


@dataclass(frozen=True)
class Variable:
    """
    A solver variable.

    Identity is the ``id``: two variables created with the same name are
    distinct. Variables are created through ``Solver.new_variable``.
    """
    id: int
    name: str
    sort: Sort = Sort.REAL

    @classmethod
    def fresh(cls, name: str, sort: Sort = Sort.REAL) -> Variable:
        if not isinstance(name, str):
            raise TypeError(f"Variable name must be a string, got {type(name).__name__}")
        if not name:
            raise ValueError("Variable name cannot be empty")
        return cls(next(_variable_ids), name, sort)

    def __neg__(self) -> Term:
        return -_to_term(self)

    def __add__(self, other: TermLike) -> Term:
        return _to_term(self) + other

    def __radd__(self, other: TermLike) -> Term:
        return _to_term(other) + self

    def __sub__(self, other: TermLike) -> Term:
        return _to_term(self) - other

    def __rsub__(self, other: TermLike) -> Term:
        return _to_term(other) - self

    def __mul__(self, other: TermLike) -> Term:
        return _to_term(self) * other

    def __rmul__(self, other: TermLike) -> Term:
        return _to_term(other) * self

    def __truediv__(self, other: TermLike) -> Term:
        return _to_term(self) / other

    def __repr__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Term:
    """
    Linear term: sum of coefficient * variable, plus a constant.

    Coefficients are kept sorted by variable id and zero coefficients are
    never stored. Build with ``Term.build`` or by arithmetic on variables.
    """
    coefficients: tuple[tuple[Variable, Fraction], ...] = ()
    constant: Fraction = Fraction(0)

    @classmethod
    def build(
        cls,
        coefficients: Mapping[Variable, Union[int, float, Fraction]],
        constant: Union[int, float, Fraction] = 0,
    ) -> Term:
        items = []
        for v, c in coefficients.items():
            c = to_fraction(c)
            if c != 0:
                items.append((v, c))
        items.sort(key=lambda item: item[0].id)
        return cls(tuple(items), to_fraction(constant))

    def as_dict(self) -> dict[Variable, Fraction]:
        return dict(self.coefficients)

    def variables(self) -> FrozenSet[Variable]:
        return frozenset(v for v, _ in self.coefficients)

    def coefficient(self, v: Variable) -> Fraction:
        for var, c in self.coefficients:
            if var == v:
                return c
        return Fraction(0)

    def is_constant(self) -> bool:
        return not self.coefficients

    def scale(self, factor: Fraction) -> Term:
        return Term.build({v: c * factor for v, c in self.coefficients}, self.constant * factor)

    def evaluate(self, env: EvalEnv) -> Fraction:
        """
        Evaluate the term exactly.

        Raises:
            ValueError: If a variable of the term is not in env.
        """
        total = self.constant
        for v, c in self.coefficients:
            if v not in env:
                raise ValueError(f"Variable '{v.name}' not in environment")
            total += c * to_fraction(env[v])
        return total

    def __neg__(self) -> Term:
        return self.scale(Fraction(-1))

    def __add__(self, other: TermLike) -> Term:
        other = _to_term(other)
        merged = self.as_dict()
        for v, c in other.coefficients:
            merged[v] = merged.get(v, Fraction(0)) + c
        return Term.build(merged, self.constant + other.constant)

    def __radd__(self, other: TermLike) -> Term:
        return _to_term(other) + self

    def __sub__(self, other: TermLike) -> Term:
        return self + (-_to_term(other))

    def __rsub__(self, other: TermLike) -> Term:
        return _to_term(other) + (-self)

    def __mul__(self, other: TermLike) -> Term:
        other = _to_term(other)
        if self.is_constant():
            return other.scale(self.constant)
        if other.is_constant():
            return self.scale(other.constant)
        raise NonlinearTermError(self, other)

    def __rmul__(self, other: TermLike) -> Term:
        return _to_term(other) * self

    def __truediv__(self, other: TermLike) -> Term:
        other = _to_term(other)
        if not other.is_constant():
            raise NonlinearTermError(self, other)
        if other.constant == 0:
            raise DivisionByZeroError(f"Cannot divide {self} by zero", dividend=self)
        return self.scale(divide(Fraction(1), other.constant))

    def __rtruediv__(self, other: TermLike) -> Term:
        return _to_term(other) / self

    def __repr__(self) -> str:
        parts = []
        for v, c in self.coefficients:
            sign = '-' if c < 0 else '+'
            mag = abs(c)
            body = v.name if mag == 1 else f"{format_rational(mag)}*{v.name}"
            parts.append((sign, body))
        if self.constant != 0 or not parts:
            sign = '-' if self.constant < 0 else '+'
            parts.append((sign, format_rational(abs(self.constant))))
        first_sign, first = parts[0]
        text = first if first_sign == '+' else f"-{first}"
        for sign, body in parts[1:]:
            text += f" {sign} {body}"
        return text


def _to_term(x: TermLike) -> Term:
    """Convert a value to a Term."""
    if isinstance(x, Term):
        return x
    if isinstance(x, Variable):
        if not x.sort.is_arithmetic:
            raise SortError(
                f"Variable '{x.name}' has sort {x.sort.value} and cannot appear in arithmetic",
                sort=x.sort,
            )
        return Term(((x, Fraction(1)),), Fraction(0))
    if isinstance(x, (int, float, Fraction)) and not isinstance(x, bool):
        return Term((), to_fraction(x))
    raise TypeError(f"Cannot convert {type(x).__name__} to Term")


class Relation(Enum):
    """Comparison of a term against zero."""
    LE = "<="
    LT = "<"
    GE = ">="
    GT = ">"
    EQ = "="

    def holds(self, value: Fraction) -> bool:
        if self is Relation.LE:
            return value <= 0
        if self is Relation.LT:
            return value < 0
        if self is Relation.GE:
            return value >= 0
        if self is Relation.GT:
            return value > 0
        return value == 0

    @property
    def is_strict(self) -> bool:
        return self in (Relation.LT, Relation.GT)


@dataclass(frozen=True)
class Predicate:
    """
    ``term relation 0``, the single-sided form every comparison is normalized to.

    Raises:
        MalformedPredicateError: If the term has no variables.
    """
    term: Term
    relation: Relation

    def __post_init__(self):
        if self.term.is_constant():
            raise MalformedPredicateError(
                f"Predicate '{self.term} {self.relation.value} 0' does not mention any variable",
                term=self.term,
            )

    @classmethod
    def compare(cls, lhs: TermLike, relation: Relation, rhs: TermLike) -> Predicate:
        """Normalize ``lhs relation rhs`` to ``lhs - rhs relation 0``."""
        return cls(_to_term(lhs) - _to_term(rhs), relation)

    def variables(self) -> FrozenSet[Variable]:
        return self.term.variables()

    def holds(self, env: EvalEnv) -> bool:
        return self.relation.holds(self.term.evaluate(env))

    def __repr__(self) -> str:
        return f"{self.term} {self.relation.value} 0"
