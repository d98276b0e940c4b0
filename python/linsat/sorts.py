# LinSat - Sorts
# Copyright (c) 2024 LinSat Contributors. All rights reserved.

"""Value domains a solver variable can be declared with."""

from __future__ import annotations
from enum import Enum
from typing import Union

from .exceptions import SortError


class Sort(Enum):
    """
    Declared domain of a variable.

    Attributes:
        REAL: Ordered field of rationals.
        INT: Accepted for compatibility; treated exactly like REAL
             (there is no integrality reasoning).
        BOOL: Truth value, usable only through BooleanReference.
    """
    REAL = "real"
    INT = "int"
    BOOL = "bool"

    @property
    def is_arithmetic(self) -> bool:
        return self is not Sort.BOOL


def parse_sort(value: Union[Sort, str]) -> Sort:
    """
    Normalize a sort given as a Sort or its string value.

    Raises:
        SortError: If the value does not name a supported sort.
    """
    if isinstance(value, Sort):
        return value
    if isinstance(value, str):
        try:
            return Sort(value.strip().lower())
        except ValueError:
            pass
    supported = ', '.join(s.value for s in Sort)
    raise SortError(f"Unsupported sort: {value!r}. Supported sorts: {supported}", sort=value)
