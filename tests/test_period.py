"""Tests for dtmcflow/structure/period.py."""

import numpy as np
import pytest

from dtmcflow.core.exceptions import ShapeError
from dtmcflow.structure.period import period


def _cycle(n):
    """Deterministic n-cycle 0 -> 1 -> ... -> n-1 -> 0."""
    return np.roll(np.eye(n), 1, axis=1)


class TestPeriod:
    """Tests for the period of irreducible chains."""

    def test_flip_chain(self):
        """The two-state flip chain has period 2."""
        assert period([[0.0, 1.0], [1.0, 0.0]]) == 2

    def test_three_cycle(self):
        """A deterministic 3-cycle has period 3."""
        assert period(_cycle(3)) == 3

    def test_aperiodic(self):
        """A chain with self-loops everywhere is aperiodic."""
        assert period([[0.5, 0.5], [0.5, 0.5]]) == 1

    def test_self_loop_makes_aperiodic(self):
        """One self-loop on a cycle makes the whole chain aperiodic."""
        P = _cycle(4)
        P[0] = [0.5, 0.5, 0.0, 0.0]
        assert period(P) == 1

    def test_bipartite_chord_keeps_period_two(self):
        """A chord of odd offset on a 4-cycle keeps the chain bipartite."""
        # 0 -> 1 -> 2 -> 3 -> 0 plus the chord 0 -> 3
        P = np.array([
            [0.0, 0.5, 0.0, 0.5],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
            [1.0, 0.0, 0.0, 0.0],
        ])
        assert period(P, root=0) == 2
        assert period(P, root=2) == 2

    def test_coprime_cycles(self):
        """Cycles of lengths 4 and 3 through one state give period 1."""
        # A 4-cycle 0-1-2-3 and a 3-cycle 0-1-4 share the edge 0 -> 1
        P = np.zeros((5, 5))
        P[0, 1] = 1.0
        P[1, 2] = 0.5
        P[1, 4] = 0.5
        P[2, 3] = 1.0
        P[3, 0] = 1.0
        P[4, 0] = 1.0
        assert period(P) == 1

    @pytest.mark.parametrize("n", [2, 5, 6])
    def test_independent_of_root(self, n):
        """Every choice of root gives the same period."""
        P = _cycle(n)
        assert {period(P, root=r) for r in range(n)} == {n}

    def test_column_orientation(self):
        """Column-stochastic input gives the same period."""
        P = _cycle(5)
        assert period(P.T, byrow=False) == period(P) == 5

    def test_reducible_returns_zero_with_warning(self):
        """A reducible chain warns and returns 0."""
        with pytest.warns(RuntimeWarning, match="not irreducible"):
            assert period([[1.0, 0.0], [0.5, 0.5]]) == 0

    def test_bad_root_raises(self):
        """A root outside the chain raises ShapeError."""
        with pytest.raises(ShapeError, match="out of range"):
            period(_cycle(3), root=3)
