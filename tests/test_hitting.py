"""Tests for dtmcflow/solvers/hitting.py."""

import warnings
from unittest import mock

import numpy as np
import pytest

from dtmcflow.core.context import AnalysisContext
from dtmcflow.core.exceptions import DomainError, NumericalError
from dtmcflow.solvers import hitting
from dtmcflow.solvers.hitting import hitting_probabilities
from dtmcflow.structure.classes import classify


GAMBLER = np.array([
    [0.2, 0.3, 0.0, 0.5, 0.0],
    [0.0, 0.5, 0.5, 0.0, 0.0],
    [0.0, 0.7, 0.3, 0.0, 0.0],
    [0.4, 0.0, 0.0, 0.0, 0.6],
    [0.0, 0.0, 0.0, 0.0, 1.0],
])

# State 1 is transient and drains into the absorbing state 2; state 0 is
# absorbing and unreachable from 1
SPLIT = np.array([
    [1.0, 0.0, 0.0],
    [0.0, 0.5, 0.5],
    [0.0, 0.0, 1.0],
])


def _simulate_hits(P, start, target, runs, steps, seed):
    """Monte Carlo estimate of the probability of visiting *target*."""
    rng = np.random.default_rng(seed)
    n = P.shape[0]
    hits = 0
    for _ in range(runs):
        state = start
        for _ in range(steps):
            state = rng.choice(n, p=P[state])
            if state == target:
                hits += 1
                break
    return hits / runs


def _warning_solve(*args, **kwargs):
    """Stand-in for scipy.linalg.solve that reports ill-conditioning."""
    warnings.warn("ill-conditioned", hitting.linalg.LinAlgWarning)
    return np.zeros(5)


class TestHittingProbabilities:
    """Tests for the values of the hitting probability matrix."""

    def test_absorbing_chain(self):
        """Two-state chain with one absorbing state."""
        h = hitting_probabilities([[1.0, 0.0], [0.5, 0.5]])
        np.testing.assert_array_almost_equal(h, [[1.0, 0.0], [1.0, 0.5]])

    def test_irreducible_chain_all_ones(self):
        """Every state of an irreducible chain is eventually visited."""
        h = hitting_probabilities([[0.8, 0.2], [0.4, 0.6]])
        np.testing.assert_array_almost_equal(h, np.ones((2, 2)))

    def test_closed_classes_never_escape(self):
        """From a closed class, states outside it have probability 0."""
        h = hitting_probabilities(GAMBLER)
        result = classify(GAMBLER)
        for members in result.recurrent_classes():
            outside = [k for k in range(5) if k not in members]
            for i in members:
                np.testing.assert_array_almost_equal(h[i, outside], 0.0)
                np.testing.assert_array_almost_equal(h[i, members], 1.0)

    def test_transient_start_unreachable_target_is_zero(self):
        """A transient state never hits a state it cannot reach."""
        h = hitting_probabilities(SPLIT)
        assert h[1, 0] == pytest.approx(0.0)
        assert h[1, 2] == pytest.approx(1.0)
        assert h[1, 1] == pytest.approx(0.5)

    def test_gambler_absorption(self):
        """Absorption split of the transient states between the closed classes."""
        h = hitting_probabilities(GAMBLER)
        # From 0: absorb in {1, 2} with prob a, in {4} with 1 - a where
        # a = 0.3 + 0.2 a + 0.5 * 0.4 a  =>  a = 0.5
        assert h[0, 1] == pytest.approx(0.5)
        assert h[0, 4] == pytest.approx(0.5)
        assert h[3, 1] == pytest.approx(0.2)
        assert h[3, 4] == pytest.approx(0.8)
        assert h[4, 0] == pytest.approx(0.0)

    def test_transient_diagonal_is_return_probability(self):
        """The diagonal of a transient state is its return probability."""
        h = hitting_probabilities(GAMBLER)
        # Return to 0: stay (0.2) or go to 3 and come back (0.5 * 0.4)
        assert h[0, 0] == pytest.approx(0.4)
        assert h[0, 0] < 1.0

    def test_singleton_closed_class_diagonal_is_one(self):
        """An absorbing state returns to itself with probability 1."""
        h = hitting_probabilities(GAMBLER)
        assert h[4, 4] == pytest.approx(1.0)

    def test_agrees_with_simulation(self):
        """Solved probabilities match a seeded Monte Carlo estimate."""
        h = hitting_probabilities(GAMBLER)
        estimate = _simulate_hits(GAMBLER, 0, 2, runs=2000, steps=200, seed=3)
        assert abs(estimate - h[0, 2]) < 0.05

    def test_column_orientation(self):
        """Column-stochastic input gives the transposed result."""
        by_row = hitting_probabilities(GAMBLER)
        by_col = hitting_probabilities(GAMBLER.T, byrow=False)
        np.testing.assert_array_almost_equal(by_col, by_row.T)

    def test_rejects_non_stochastic(self):
        """Rows not summing to 1 raise DomainError."""
        with pytest.raises(DomainError):
            hitting_probabilities([[0.5, 0.6], [0.5, 0.5]])


class TestNumericalFailures:
    """Tests for solver failures surfacing as NumericalError."""

    def test_singular_system_raises(self):
        """A singular system names the target column it failed on."""
        with mock.patch.object(
            hitting.linalg, "solve", side_effect=np.linalg.LinAlgError("singular")
        ):
            with pytest.raises(NumericalError, match="target 0"):
                hitting_probabilities(GAMBLER)

    def test_ill_conditioned_warning_raises(self):
        """An ill-conditioning warning is promoted to an error by default."""
        with mock.patch.object(hitting.linalg, "solve", side_effect=_warning_solve):
            with pytest.raises(NumericalError):
                hitting_probabilities(GAMBLER)

    def test_ill_conditioned_tolerated_when_configured(self):
        """With fail_on_ill_conditioned off the warning passes through."""
        with mock.patch.object(hitting.linalg, "solve", side_effect=_warning_solve):
            with AnalysisContext(fail_on_ill_conditioned=False):
                with pytest.warns(hitting.linalg.LinAlgWarning):
                    h = hitting_probabilities(GAMBLER)
        assert h.shape == (5, 5)
