# LinSat - Configuration Tests
# Copyright (c) 2024 LinSat Contributors. All rights reserved.

"""
Tests for SolverConfig defaults, presets and validation.
"""

import pytest

from linsat.config import SolverConfig


class TestSolverConfig:
    """Tests for SolverConfig."""

    def test_default_values(self):
        """Test default configuration values."""
        cfg = SolverConfig()
        assert cfg.max_pivots is None
        assert cfg.max_branches is None
        assert cfg.canonical_witness is True

    def test_default_preset(self):
        """Test that the default preset matches the constructor."""
        assert SolverConfig.default() == SolverConfig()

    def test_bounded_preset(self):
        """Test the resource-limited preset."""
        cfg = SolverConfig.bounded()
        assert cfg.max_pivots == 10_000
        assert cfg.max_branches == 1_000

    def test_bounded_custom(self):
        """Test overriding the budgets of the bounded preset."""
        cfg = SolverConfig.bounded(max_pivots=5, max_branches=2)
        assert cfg.max_pivots == 5
        assert cfg.max_branches == 2

    def test_zero_budget_allowed(self):
        """Test that a zero budget is valid."""
        cfg = SolverConfig(max_pivots=0, max_branches=0)
        assert cfg.max_pivots == 0

    @pytest.mark.parametrize("field", ["max_pivots", "max_branches"])
    def test_negative_budget_rejected(self, field):
        """Test that negative budgets raise ValueError."""
        with pytest.raises(ValueError, match=field):
            SolverConfig(**{field: -1})

    def test_to_dict(self):
        """Test conversion to dictionary."""
        cfg = SolverConfig(max_pivots=7, canonical_witness=False)
        assert cfg.to_dict() == {
            'maxPivots': 7,
            'maxBranches': None,
            'canonicalWitness': False,
        }
