# LinSat - Assertion Scopes
# Copyright (c) 2024 LinSat Contributors. All rights reserved.

"""
Nested assertion scopes.

The stack always holds one permanent base scope. push() opens a new scope,
pop() discards the innermost one together with everything added to it.
Nothing is cached across scopes: whoever needs the live contents reads
items(), so popping restores exactly the state before the matching push().
"""

from __future__ import annotations
from contextlib import contextmanager
from typing import Any, Iterator

from .exceptions import StackUnderflowError


class ConstraintStack:
    """
    Ordered list of scopes, innermost last.

    Example:
        >>> stack = ConstraintStack()
        >>> stack.add('a')
        >>> with stack.scope():
        ...     stack.add('b')
        ...     stack.items()
        ['a', 'b']
        >>> stack.items()
        ['a']
    """

    def __init__(self):
        self._scopes: list[list[Any]] = [[]]

    def push(self) -> None:
        """Open a new, empty scope."""
        self._scopes.append([])

    def pop(self) -> list[Any]:
        """
        Close the innermost scope.

        Returns:
            The items that were added in the closed scope.

        Raises:
            StackUnderflowError: If only the base scope is left.
        """
        if len(self._scopes) == 1:
            raise StackUnderflowError()
        return self._scopes.pop()

    def add(self, item: Any) -> None:
        """Append to the innermost scope."""
        self._scopes[-1].append(item)

    def items(self) -> list[Any]:
        """Every live item, in the order it was added."""
        return [item for scope in self._scopes for item in scope]

    def clear(self) -> None:
        """Drop every scope and item, leaving an empty base scope."""
        self._scopes = [[]]

    @property
    def depth(self) -> int:
        """Number of scopes open beyond the base scope."""
        return len(self._scopes) - 1

    def __len__(self) -> int:
        return sum(len(scope) for scope in self._scopes)

    @contextmanager
    def scope(self) -> Iterator[ConstraintStack]:
        """push() on entry and pop() on exit, also when the body raises."""
        self.push()
        try:
            yield self
        finally:
            self.pop()
