"""Discrete-time Markov chain value object.

:class:`MarkovChain` bundles a transition matrix, its state labels and its
orientation.  The analysis routines in :mod:`dtmcflow.structure`,
:mod:`dtmcflow.solvers`, :mod:`dtmcflow.temporal` and
:mod:`dtmcflow.inference` work on bare index-based matrices; the methods
here call them and attach state labels to the results.
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence

import numpy as np

from dtmcflow.core.context import current_context
from dtmcflow.core.exceptions import DomainError, LabelError, ShapeError
from dtmcflow.core.types import Classification, LabeledMatrix
from dtmcflow.core.validation import check_nonnegative, check_unique_labels
from dtmcflow.inference.conjugate import prior_distribution
from dtmcflow.solvers.hitting import hitting_probabilities
from dtmcflow.solvers.steady_state import steady_states
from dtmcflow.structure.canonical import canonic_form
from dtmcflow.structure.classes import classify
from dtmcflow.structure.period import period
from dtmcflow.temporal.passage import (
    expected_rewards,
    expected_rewards_before_hitting,
    first_passage,
    first_passage_multiple,
)
from dtmcflow.viz.chain_plot import plot_chain


class MarkovChain:
    """Discrete-time Markov chain.

    Parameters
    ----------
    states : list
        List of state labels.
    transition_matrix : array-like
        Stochastic transition matrix.  With ``byrow=True`` entry ``[i][j]``
        is the probability of moving from state *i* to state *j*; with
        ``byrow=False`` it is the probability of moving from *j* to *i*.
    byrow : bool
        Orientation of *transition_matrix*.
    name : str, optional
        Free-form name of the chain.
    """

    def __init__(self, states, transition_matrix, byrow=True, name=None):
        self.states = list(states)
        self.transition_matrix = np.array(transition_matrix, dtype=float)
        self.byrow = bool(byrow)
        self.name = name
        n = len(self.states)
        if self.transition_matrix.shape != (n, n):
            raise ShapeError(
                f"Transition matrix shape {self.transition_matrix.shape} "
                f"does not match number of states ({n})."
            )
        check_unique_labels(self.states)
        check_nonnegative(self.transition_matrix)
        sums = self.transition_matrix.sum(axis=1 if self.byrow else 0)
        if not np.allclose(sums, 1.0, rtol=0.0, atol=current_context().row_sum_tolerance):
            axis = "row" if self.byrow else "column"
            raise DomainError(f"Each {axis} of the transition matrix must sum to 1.")

    def __repr__(self):
        return (
            f"MarkovChain(states={self.states!r}, byrow={self.byrow}"
            + (f", name={self.name!r})" if self.name else ")")
        )

    # ------------------------------------------------------------------ #
    #  Helpers
    # ------------------------------------------------------------------ #

    @property
    def num_states(self) -> int:
        return len(self.states)

    @property
    def row_matrix(self) -> np.ndarray:
        """Transition matrix with rows as source states."""
        return self.transition_matrix if self.byrow else self.transition_matrix.T

    def _index(self, state) -> int:
        try:
            return self.states.index(state)
        except ValueError:
            raise LabelError(f"Unknown state {state!r}") from None

    def _labels(self, indices: Iterable[int]) -> List[Hashable]:
        return [self.states[i] for i in indices]

    def classification(self) -> Classification:
        return classify(self.transition_matrix, self.byrow)

    # ------------------------------------------------------------------ #
    #  Structure
    # ------------------------------------------------------------------ #

    def communicating_classes(self) -> List[List[Hashable]]:
        return [self._labels(c) for c in self.classification().communicating_classes()]

    def recurrent_classes(self) -> List[List[Hashable]]:
        return [self._labels(c) for c in self.classification().recurrent_classes()]

    def transient_classes(self) -> List[List[Hashable]]:
        return [self._labels(c) for c in self.classification().transient_classes()]

    def recurrent_states(self) -> List[Hashable]:
        return self._labels(self.classification().recurrent_states())

    def transient_states(self) -> List[Hashable]:
        return self._labels(self.classification().transient_states())

    def summary(self) -> Dict[str, List[List[Hashable]]]:
        return {
            key: [self._labels(c) for c in classes]
            for key, classes in self.classification().summary().items()
        }

    def is_irreducible(self) -> bool:
        return self.classification().is_irreducible

    def canonic_form(self) -> "MarkovChain":
        """Return a new chain with recurrent classes first."""
        matrix, states = canonic_form(self.transition_matrix, self.states, self.byrow)
        return MarkovChain(states, matrix, byrow=self.byrow, name=self.name)

    def period(self) -> int:
        return period(self.transition_matrix, self.byrow)

    # ------------------------------------------------------------------ #
    #  Probabilities
    # ------------------------------------------------------------------ #

    def steady_states(self) -> np.ndarray:
        """Stationary distributions, one per recurrent class.

        Returns
        -------
        numpy.ndarray
            Shape ``(k, n)`` for row-oriented chains, ``(n, k)`` otherwise;
            the state axis follows :attr:`states`.
        """
        return steady_states(self.transition_matrix, self.byrow)

    def hitting_probabilities(self) -> np.ndarray:
        return hitting_probabilities(self.transition_matrix, self.byrow)

    def first_passage(self, state, n: int) -> np.ndarray:
        """First-passage distribution from *state* over *n* steps.

        Returns
        -------
        numpy.ndarray
            Shape ``(n, num_states)``; columns follow :attr:`states`.
        """
        return first_passage(self.row_matrix, self._index(state), n)

    def first_passage_multiple(self, state, targets: Sequence, n: int) -> np.ndarray:
        return first_passage_multiple(
            self.row_matrix,
            self._index(state),
            [self._index(t) for t in targets],
            n,
        )

    def expected_rewards(self, n: int, rewards) -> np.ndarray:
        return expected_rewards(self.row_matrix, n, rewards)

    def expected_rewards_before_hitting(
        self,
        state,
        rewards,
        n: int,
        avoid: Optional[Sequence] = None,
    ) -> float:
        blocked = None if avoid is None else [self._index(a) for a in avoid]
        return expected_rewards_before_hitting(
            self.row_matrix, self._index(state), rewards, n, avoid=blocked
        )

    # ------------------------------------------------------------------ #
    #  Bayesian view and rendering
    # ------------------------------------------------------------------ #

    def to_labeled(self) -> LabeledMatrix:
        """Row-oriented transition matrix with state labels on both axes."""
        return LabeledMatrix(self.row_matrix, self.states)

    def prior_distribution(self, hyperparam: Optional[LabeledMatrix] = None) -> Dict[Hashable, float]:
        return prior_distribution(self.to_labeled(), hyperparam)

    def plot(self, output: str = "chain.png", **kwargs: Any):
        """Render the chain with :func:`dtmcflow.viz.chain_plot.plot_chain`."""
        return plot_chain(self, output=output, **kwargs)
