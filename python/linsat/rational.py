# LinSat - Rational Number Utilities
# Copyright (c) 2024 LinSat Contributors. All rights reserved.

"""
Exact rational numbers for LinSat.

All arithmetic in the solver is carried out on ``fractions.Fraction``, whose
numerator and denominator are unbounded Python integers, so repeated pivoting
can never overflow.

This module adds three things on top of ``Fraction``:

    >>> from linsat.rational import to_fraction, format_rational
    >>> to_fraction(0.1)
    Fraction(1, 10)
    >>> to_fraction("-3/6")
    Fraction(-1, 2)
    >>> format_rational(Fraction(5, 8))
    '5/8'

and ``DeltaRational``, the ``c + k*delta`` values used to model strict bounds.
"""

from __future__ import annotations
from fractions import Fraction
from functools import total_ordering
from typing import Union

from .exceptions import DivisionByZeroError


# Type for things that can be converted to Fraction
Numeric = Union[int, float, Fraction, str]


def to_fraction(x: Numeric, max_denom: int = 10**12) -> Fraction:
    """
    Convert a numeric value to Fraction with human-friendly results.

    Args:
        x: A number (int, float, Fraction) or a string "p/q" or "p".
        max_denom: Maximum denominator for fallback limit_denominator.

    Returns:
        A Fraction representing the number.

    Raises:
        TypeError: If x is a bool or not numeric.
        DivisionByZeroError: If a string has a zero denominator.

    Examples:
        >>> to_fraction(0.25)
        Fraction(1, 4)
        >>> to_fraction("10/16")
        Fraction(5, 8)
    """
    if isinstance(x, bool):
        raise TypeError("Cannot convert bool to a rational number")
    if isinstance(x, Fraction):
        return x
    elif isinstance(x, int):
        return Fraction(x)
    elif isinstance(x, float):
        return _float_to_nice_fraction(x, max_denom)
    elif isinstance(x, str):
        return _parse_fraction(x)
    raise TypeError(f"Cannot convert {type(x).__name__} to a rational number")


def _parse_fraction(s: str) -> Fraction:
    """Parse "p/q" or "p" exactly."""
    text = s.strip()
    if '/' in text:
        num, _, den = text.partition('/')
        if int(den) == 0:
            raise DivisionByZeroError(f"Zero denominator in '{s}'", dividend=s)
        return Fraction(int(num), int(den))
    return Fraction(text)


def _float_to_nice_fraction(x: float, max_denom: int = 10**12) -> Fraction:
    """
    Convert a float to a human-friendly Fraction.

    Strategy:
    1. Check if it's an exact integer
    2. Parse the shortest decimal representation (0.1 -> "1/10")
    3. Fall back to limit_denominator
    """
    if x == int(x):
        return Fraction(int(x))

    s = repr(x)
    if 'e' in s or 'E' in s:
        return Fraction(x).limit_denominator(max_denom)

    result = Fraction(s)
    if result.denominator <= max_denom:
        return result
    return Fraction(x).limit_denominator(max_denom)


def format_rational(q: Fraction) -> str:
    """Render q as "p/q", or as the integer when the denominator is 1."""
    if q.denominator == 1:
        return str(q.numerator)
    return f"{q.numerator}/{q.denominator}"


def divide(a: Fraction, b: Fraction) -> Fraction:
    """Exact division raising DivisionByZeroError instead of ZeroDivisionError."""
    if b == 0:
        raise DivisionByZeroError(f"Cannot divide {format_rational(a)} by zero", dividend=a)
    return a / b


@total_ordering
class DeltaRational:
    """
    A value ``c + k*delta`` where delta is a positive infinitesimal.

    Strict bounds are stored as non-strict bounds on these values:
    ``x < 3`` becomes ``x <= 3 - delta``, i.e. ``DeltaRational(3, -1)``.
    Comparison is lexicographic on ``(c, k)``.
    """

    __slots__ = ('c', 'k')

    def __init__(self, c: Numeric = 0, k: Numeric = 0):
        self.c = to_fraction(c)
        self.k = to_fraction(k)

    def __add__(self, other: DeltaRational) -> DeltaRational:
        return DeltaRational(self.c + other.c, self.k + other.k)

    def __sub__(self, other: DeltaRational) -> DeltaRational:
        return DeltaRational(self.c - other.c, self.k - other.k)

    def __neg__(self) -> DeltaRational:
        return DeltaRational(-self.c, -self.k)

    def __mul__(self, scalar: Fraction) -> DeltaRational:
        return DeltaRational(self.c * scalar, self.k * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: Fraction) -> DeltaRational:
        return DeltaRational(divide(self.c, scalar), self.k / scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DeltaRational):
            return NotImplemented
        return self.c == other.c and self.k == other.k

    def __lt__(self, other: DeltaRational) -> bool:
        return (self.c, self.k) < (other.c, other.k)

    def __hash__(self) -> int:
        return hash((self.c, self.k))

    def is_zero(self) -> bool:
        return self.c == 0 and self.k == 0

    def resolve(self, delta: Fraction) -> Fraction:
        """Instantiate the infinitesimal with a concrete positive rational."""
        return self.c + self.k * delta

    def __repr__(self) -> str:
        if self.k == 0:
            return f"DeltaRational({format_rational(self.c)})"
        return f"DeltaRational({format_rational(self.c)}, {format_rational(self.k)})"
