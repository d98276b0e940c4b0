# LinSat - Configuration
# Copyright (c) 2024 LinSat Contributors. All rights reserved.

"""Configuration settings for LinSat."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass
class SolverConfig:
    """
    Configuration for satisfiability checks.

    Attributes:
        max_pivots: Pivot budget per Simplex run. None means unlimited;
                    an exhausted budget makes check() report UNKNOWN.
        max_branches: Budget on choice-point alternatives explored per
                      check(). None means unlimited.
        canonical_witness: Move each satisfying assignment to the vertex
                           that maximizes the sum of the variables, so
                           witnesses are stable and predictable.
    """
    max_pivots: Optional[int] = None
    max_branches: Optional[int] = None
    canonical_witness: bool = True

    def __post_init__(self):
        for name in ('max_pivots', 'max_branches'):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    @classmethod
    def default(cls) -> SolverConfig:
        """Unlimited budgets, canonical witnesses."""
        return cls()

    @classmethod
    def bounded(cls, max_pivots: int = 10_000, max_branches: int = 1_000) -> SolverConfig:
        """Resource-limited configuration; check() may answer UNKNOWN."""
        return cls(max_pivots=max_pivots, max_branches=max_branches)

    def to_dict(self) -> dict:
        return {
            'maxPivots': self.max_pivots,
            'maxBranches': self.max_branches,
            'canonicalWitness': self.canonical_witness,
        }
