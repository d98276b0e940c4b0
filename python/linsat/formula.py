# LinSat - Formulas
# Copyright (c) 2024 LinSat Contributors. All rights reserved.

"""
Boolean structure over linear predicates.

A formula is one of five immutable node kinds:

    Literal(predicate)              a single linear comparison
    BooleanReference(variable)      a BOOL variable used as a truth value
    And(left, right)
    Or(left, right)
    Biconditional(reference, f)     reference <-> f  (reification)

Formulas are built purely with the constructors below and carry no solver
state. The search in ``linsat.search`` matches on the node kind directly.

Example:
    >>> x, y = solver.new_variable('x'), solver.new_variable('y')
    >>> w = solver.new_variable('w', Sort.BOOL)
    >>> f = and_(iff(w, lt(x, y)), or_(boolean(w), gt(x, y)))
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union, FrozenSet

from .exceptions import SortError
from .term import EvalEnv, Predicate, Relation, TermLike, Variable


@dataclass(frozen=True)
class Literal:
    """A single predicate."""
    predicate: Predicate

    def __repr__(self) -> str:
        return f"({self.predicate})"


@dataclass(frozen=True)
class BooleanReference:
    """A BOOL variable, or its negation when ``positive`` is False."""
    variable: Variable
    positive: bool = True

    def __post_init__(self):
        if self.variable.sort.is_arithmetic:
            raise SortError(
                f"Variable '{self.variable.name}' has sort {self.variable.sort.value}; "
                "only bool variables can be used as truth values",
                sort=self.variable.sort,
            )

    def __repr__(self) -> str:
        return self.variable.name if self.positive else f"!{self.variable.name}"


@dataclass(frozen=True)
class And:
    """Conjunction: left and right."""
    left: Formula
    right: Formula

    def __repr__(self) -> str:
        return f"({self.left} && {self.right})"


@dataclass(frozen=True)
class Or:
    """Disjunction: left or right."""
    left: Formula
    right: Formula

    def __repr__(self) -> str:
        return f"({self.left} || {self.right})"


@dataclass(frozen=True)
class Biconditional:
    """Reification: reference holds exactly when formula holds."""
    reference: BooleanReference
    formula: Formula

    def __repr__(self) -> str:
        return f"({self.reference} <-> {self.formula})"


Formula = Union[Literal, BooleanReference, And, Or, Biconditional]

FORMULA_TYPES = (Literal, BooleanReference, And, Or, Biconditional)


# Comparison builders

def le(lhs: TermLike, rhs: TermLike) -> Literal:
    """lhs <= rhs."""
    return Literal(Predicate.compare(lhs, Relation.LE, rhs))


def lt(lhs: TermLike, rhs: TermLike) -> Literal:
    """lhs < rhs."""
    return Literal(Predicate.compare(lhs, Relation.LT, rhs))


def ge(lhs: TermLike, rhs: TermLike) -> Literal:
    """lhs >= rhs."""
    return Literal(Predicate.compare(lhs, Relation.GE, rhs))


def gt(lhs: TermLike, rhs: TermLike) -> Literal:
    """lhs > rhs."""
    return Literal(Predicate.compare(lhs, Relation.GT, rhs))


def eq(lhs: TermLike, rhs: TermLike) -> Literal:
    """lhs = rhs."""
    return Literal(Predicate.compare(lhs, Relation.EQ, rhs))


# Logical builders

def boolean(v: Variable) -> BooleanReference:
    """Use a BOOL variable as a formula."""
    return BooleanReference(v)


def and_(*formulas: Formula) -> Formula:
    """Left-nested conjunction of one or more formulas."""
    return _fold(And, formulas, 'and_')


def or_(*formulas: Formula) -> Formula:
    """Left-nested disjunction of one or more formulas."""
    return _fold(Or, formulas, 'or_')


def not_(f: Formula) -> Formula:
    """Logical negation (see negate)."""
    return negate(f)


def iff(reference: Union[Variable, BooleanReference], f: Formula) -> Biconditional:
    """Bind a BOOL variable to the truth value of f."""
    if isinstance(reference, Variable):
        reference = BooleanReference(reference)
    return Biconditional(reference, _check_formula(f))


def _fold(node, formulas, name):
    if not formulas:
        raise ValueError(f"{name}() needs at least one formula")
    result = _check_formula(formulas[0])
    for f in formulas[1:]:
        result = node(result, _check_formula(f))
    return result


def _check_formula(f) -> Formula:
    if isinstance(f, Predicate):
        return Literal(f)
    if isinstance(f, Variable):
        return BooleanReference(f)
    if not isinstance(f, FORMULA_TYPES):
        raise TypeError(f"Expected a formula, got {type(f).__name__}")
    return f


_NEGATED_RELATION = {
    Relation.LE: Relation.GT,
    Relation.GT: Relation.LE,
    Relation.LT: Relation.GE,
    Relation.GE: Relation.LT,
}


# Tree walks use an explicit stack: and_() over many formulas nests one
# level per argument, deeper than the interpreter's recursion limit.

def _children(f: Formula) -> tuple:
    if isinstance(f, (And, Or)):
        return (f.left, f.right)
    if isinstance(f, Biconditional):
        return (f.reference, f.formula)
    if isinstance(f, (Literal, BooleanReference)):
        return ()
    raise TypeError(f"Expected a formula, got {type(f).__name__}")


def _negate_leaf(f: Formula) -> Formula:
    if isinstance(f, BooleanReference):
        return BooleanReference(f.variable, not f.positive)
    p = f.predicate
    if p.relation is Relation.EQ:
        return Or(Literal(Predicate(p.term, Relation.LT)), Literal(Predicate(p.term, Relation.GT)))
    return Literal(Predicate(p.term, _NEGATED_RELATION[p.relation]))


def negate(f: Formula) -> Formula:
    """
    Logical negation, pushed down to the literals.

    ``<=`` and ``>`` swap, ``<`` and ``>=`` swap, and ``t = 0`` becomes
    ``t < 0 || t > 0``. And/Or follow De Morgan, and
    ``!(b <-> f)`` is ``b <-> !f``.
    """
    done: list[Formula] = []
    stack = [(f, False)]
    while stack:
        node, expanded = stack.pop()
        if not _children(node):
            done.append(_negate_leaf(node))
        elif isinstance(node, Biconditional):
            if expanded:
                done.append(Biconditional(node.reference, done.pop()))
            else:
                stack += [(node, True), (node.formula, False)]
        elif expanded:
            right = done.pop()
            left = done.pop()
            done.append(Or(left, right) if isinstance(node, And) else And(left, right))
        else:
            stack += [(node, True), (node.right, False), (node.left, False)]
    return done.pop()


def evaluate(f: Formula, env: EvalEnv) -> bool:
    """
    Evaluate a formula exactly.

    Args:
        f: Formula to evaluate.
        env: Values for every variable of f; rationals for arithmetic
             variables, bools for BOOL variables.

    Raises:
        ValueError: If a variable of f is not in env.
    """
    done: list[bool] = []
    stack = [(f, False)]
    while stack:
        node, expanded = stack.pop()
        if isinstance(node, Literal):
            done.append(node.predicate.holds(env))
        elif isinstance(node, BooleanReference):
            if node.variable not in env:
                raise ValueError(f"Variable '{node.variable.name}' not in environment")
            done.append(bool(env[node.variable]) == node.positive)
        elif expanded:
            right = done.pop()
            left = done.pop()
            if isinstance(node, And):
                done.append(left and right)
            elif isinstance(node, Or):
                done.append(left or right)
            else:
                done.append(left == right)
        else:
            first, second = _children(node)
            stack += [(node, True), (second, False), (first, False)]
    return done.pop()


def variables(f: Formula) -> FrozenSet[Variable]:
    """All variables a formula references."""
    found: set[Variable] = set()
    stack = [f]
    while stack:
        node = stack.pop()
        if isinstance(node, Literal):
            found |= node.predicate.variables()
        elif isinstance(node, BooleanReference):
            found.add(node.variable)
        else:
            stack.extend(_children(node))
    return frozenset(found)
