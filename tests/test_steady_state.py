"""Tests for dtmcflow/solvers/steady_state.py."""

from unittest import mock

import numpy as np
import pytest

from dtmcflow.core.context import AnalysisContext
from dtmcflow.core.exceptions import DomainError, NumericalError
from dtmcflow.solvers import steady_state
from dtmcflow.solvers.steady_state import class_eigenvectors, steady_states
from dtmcflow.structure.classes import classify


WEATHER = np.array([[0.8, 0.2], [0.4, 0.6]])


def _random_chain(n, seed):
    """Dense random row-stochastic matrix."""
    rng = np.random.default_rng(seed)
    values = rng.random((n, n))
    return values / values.sum(axis=1, keepdims=True)


class TestSteadyStates:
    """Tests for the stationary distributions of a chain."""

    def test_flip_chain(self):
        """The flip chain is stationary under the uniform distribution."""
        pi = steady_states([[0.0, 1.0], [1.0, 0.0]])
        np.testing.assert_array_almost_equal(pi, [[0.5, 0.5]])

    def test_weather_chain(self):
        """Stationary distribution of the weather model."""
        pi = steady_states(WEATHER)
        np.testing.assert_array_almost_equal(pi, [[2 / 3, 1 / 3]], decimal=10)

    def test_symmetric_chain_uses_uniform(self):
        """A doubly stochastic chain has the uniform distribution."""
        P = np.array([
            [0.5, 0.25, 0.25],
            [0.25, 0.5, 0.25],
            [0.25, 0.25, 0.5],
        ])
        np.testing.assert_array_almost_equal(steady_states(P), [[1 / 3] * 3])

    @pytest.mark.parametrize("seed", range(5))
    def test_invariance(self, seed):
        """Each returned row satisfies pi P = pi."""
        P = _random_chain(6, seed)
        pi = steady_states(P)
        assert pi.shape == (1, 6)
        np.testing.assert_array_almost_equal(pi[0] @ P, pi[0])
        assert pi.sum() == pytest.approx(1.0)
        assert np.all(pi >= 0)

    def test_one_row_per_recurrent_class_sorted(self):
        """One row per recurrent class, ordered by first state."""
        P = np.array([
            [1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0],
            [0.3, 0.3, 0.4],
        ])
        pi = steady_states(P)
        np.testing.assert_array_almost_equal(pi, [[0.0, 1.0, 0.0], [1.0, 0.0, 0.0]])

    def test_support_is_recurrent_class(self):
        """Each row is supported on exactly one recurrent class."""
        P = np.array([
            [0.2, 0.3, 0.0, 0.5, 0.0],
            [0.0, 0.5, 0.5, 0.0, 0.0],
            [0.0, 0.7, 0.3, 0.0, 0.0],
            [0.4, 0.0, 0.0, 0.0, 0.6],
            [0.0, 0.0, 0.0, 0.0, 1.0],
        ])
        pi = steady_states(P)
        assert pi.shape == (2, 5)
        # Lexicographic order puts the absorbing state's row first
        np.testing.assert_array_almost_equal(pi[0], [0.0, 0.0, 0.0, 0.0, 1.0])
        np.testing.assert_array_almost_equal(pi[1], [0.0, 7 / 12, 5 / 12, 0.0, 0.0])
        for row in pi:
            np.testing.assert_array_almost_equal(row @ P, row)
            assert row.sum() == pytest.approx(1.0)

    def test_column_orientation(self):
        """Column-stochastic input gives the same distribution."""
        pi = steady_states(WEATHER.T, byrow=False)
        assert pi.shape == (2, 1)
        np.testing.assert_array_almost_equal(pi[:, 0], [2 / 3, 1 / 3])

    def test_rejects_non_stochastic(self):
        """Rows not summing to 1 raise DomainError."""
        with pytest.raises(DomainError, match="sum to 1"):
            steady_states([[0.5, 0.3], [0.4, 0.6]])


class TestClassEigenvectors:
    """Tests for unit-eigenvalue selection."""

    def test_periodic_class_single_unit_eigenvalue(self):
        """A periodic class keeps only its eigenvalue at exactly 1."""
        cycle = np.roll(np.eye(3), 1, axis=1)
        vectors = class_eigenvectors(cycle)
        np.testing.assert_array_almost_equal(vectors, [[1 / 3] * 3])

    def test_reducible_input_has_two_unit_eigenvalues(self):
        """Two absorbing states give two unit eigenvectors."""
        assert class_eigenvectors(np.eye(2)).shape[0] == 2

    def test_tolerance_controls_selection(self):
        """A looser eigen tolerance admits eigenvalues near 1."""
        # Eigenvalues 1 and 0.99: a loose tolerance accepts both
        P = np.array([[0.995, 0.005], [0.005, 0.995]])
        assert class_eigenvectors(P).shape[0] == 1
        loose = AnalysisContext(eigen_tolerance=0.05)
        assert class_eigenvectors(P, loose).shape[0] == 2

    def test_wrong_multiplicity_raises(self):
        """Too few unit eigenvectors raise NumericalError."""
        with mock.patch.object(
            steady_state, "class_eigenvectors", return_value=np.empty((0, 2))
        ):
            with pytest.raises(NumericalError, match="unit eigenvalues"):
                steady_states(WEATHER)

    def test_negative_mass_raises(self):
        """A distribution with negative entries raises NumericalError."""
        with mock.patch.object(
            steady_state, "class_eigenvectors", return_value=np.array([[1.2, -0.2]])
        ):
            with pytest.raises(NumericalError, match="negative"):
                steady_states(WEATHER)


class TestZeroSumFallback:
    """Tests for eigenvectors whose entries sum to zero."""

    def _zero_sum_eig(self, target):
        """Stand-in for scipy.linalg.eig returning a zero-sum unit eigenvector."""
        return np.array([1.0, 0.5]), np.array([[1.0, 0.0], [-1.0, 1.0]])

    def test_fallback_divides_by_one(self):
        """With the fallback on, the vector is kept unnormalised."""
        with mock.patch.object(steady_state.linalg, "eig", side_effect=self._zero_sum_eig):
            vectors = class_eigenvectors(WEATHER)
        np.testing.assert_array_equal(vectors, [[1.0, -1.0]])

    def test_fallback_disabled_raises(self):
        """With the fallback off, NumericalError is raised."""
        ctx = AnalysisContext(zero_sum_fallback=False)
        with mock.patch.object(steady_state.linalg, "eig", side_effect=self._zero_sum_eig):
            with pytest.raises(NumericalError, match="sums to zero"):
                class_eigenvectors(WEATHER, ctx)

    def test_context_block_applies(self):
        """The active with-block context switches the fallback off."""
        with mock.patch.object(steady_state.linalg, "eig", side_effect=self._zero_sum_eig):
            with AnalysisContext(zero_sum_fallback=False):
                with pytest.raises(NumericalError):
                    class_eigenvectors(WEATHER)


class TestAgreesWithClassifier:
    """Tests that steady states line up with the class structure."""

    def test_row_count_matches_recurrent_classes(self):
        """There is one distribution per recurrent class."""
        P = np.array([
            [1.0, 0.0, 0.0, 0.0],
            [0.0, 0.5, 0.5, 0.0],
            [0.0, 0.5, 0.5, 0.0],
            [0.25, 0.25, 0.25, 0.25],
        ])
        pi = steady_states(P)
        assert pi.shape[0] == len(classify(P).recurrent_classes())
