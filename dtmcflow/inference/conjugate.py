"""Bayesian inference for transition matrices under Dirichlet priors.

Each row of a transition matrix is modelled as a draw from a Dirichlet
distribution whose concentration parameters form one row of a
*hyperparameter matrix*.  Because the Dirichlet is conjugate to the
multinomial likelihood of observed transitions, the posterior and the
predictive probability of new data have closed forms.

Provides:

* :func:`prior_distribution` – Dirichlet log-density of each row of a
  transition matrix.
* :func:`predictive_distribution` – log-probability of a new sequence
  given a prior sequence, averaged over the posterior.
* :func:`transition_counts` / :func:`posterior_hyperparameters` – the
  count matrix of a sequence and the conjugate update ``alpha + counts``.

Matrices are passed as :class:`~dtmcflow.core.types.LabeledMatrix`; their
labels may come in any order and are aligned by sorting.

References
----------
Strelioff, Crutchfield and Hubler, "Inferring Markov chains: Bayesian
estimation, model comparison, entropy rate, and out-of-class modeling",
Physical Review E 76 (2007).
"""

from __future__ import annotations

import logging
from typing import Dict, Hashable, List, Optional, Sequence

import numpy as np
from scipy.special import gammaln, xlogy

from dtmcflow.core.context import current_context
from dtmcflow.core.exceptions import DomainError, LabelError, ShapeError
from dtmcflow.core.types import LabeledMatrix
from dtmcflow.core.validation import (
    check_probability_entries,
    check_same_label_sets,
    check_unique_labels,
)

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------ #
#  Validation helpers
# ------------------------------------------------------------------ #

def _check_labels(matrix: LabeledMatrix) -> None:
    check_unique_labels(matrix.rows)
    check_unique_labels(matrix.cols)
    check_same_label_sets(matrix.rows, matrix.cols)


def _check_hyperparam(hyperparam: LabeledMatrix) -> None:
    if not hyperparam.is_square:
        raise ShapeError("Dimensions of the hyperparameter matrix are inconsistent")
    _check_labels(hyperparam)
    if np.any(hyperparam.values < 1.0):
        raise DomainError(
            "The hyperparameter elements must all be greater than or equal to 1"
        )


def _uniform_hyperparam(states: Sequence[Hashable]) -> LabeledMatrix:
    n = len(states)
    return LabeledMatrix(np.ones((n, n)), list(states))


# ------------------------------------------------------------------ #
#  Prior
# ------------------------------------------------------------------ #

def prior_distribution(
    transitions: LabeledMatrix,
    hyperparam: Optional[LabeledMatrix] = None,
) -> Dict[Hashable, float]:
    """Log prior probability of each row of a transition matrix.

    Row *i* is scored with the Dirichlet log-density

    ``sum_j (a_ij - 1) ln p_ij - ln G(a_ij)  +  ln G(sum_j a_ij)``.

    Parameters
    ----------
    transitions : LabeledMatrix
        Row-stochastic transition matrix with state labels.
    hyperparam : LabeledMatrix, optional
        Dirichlet parameters, every entry >= 1, over the same states.
        Defaults to all ones (the uniform prior).

    Returns
    -------
    dict
        State label -> log-probability, in sorted label order.

    Raises
    ------
    ShapeError, DomainError, LabelError
        On any inconsistency between the two matrices.
    """
    if not transitions.is_square:
        raise ShapeError("Transition matrix dimensions are inconsistent")

    tol = current_context().prior_row_sum_tolerance
    check_probability_entries(transitions.values)
    row_sums = transitions.values.sum(axis=1)
    if np.any(np.abs(row_sums - 1.0) >= tol):
        raise DomainError("The rows of the transition matrix must each sum to 1")
    _check_labels(transitions)

    if hyperparam is None:
        hyperparam = _uniform_hyperparam(sorted(transitions.rows))

    if not hyperparam.is_square:
        raise ShapeError("Dimensions of the hyperparameter matrix are inconsistent")
    if hyperparam.shape != transitions.shape:
        raise ShapeError(
            "Hyperparameter and the transition matrices differ in dimensions"
        )
    _check_hyperparam(hyperparam)
    check_same_label_sets(
        hyperparam.rows,
        transitions.rows,
        "Hyperparameter and the transition matrices states differ",
    )

    trans = transitions.sorted()
    alpha = hyperparam.sorted().values
    p = trans.values

    log_probs = (
        (xlogy(alpha - 1.0, p) - gammaln(alpha)).sum(axis=1)
        + gammaln(alpha.sum(axis=1))
    )
    return {state: float(lp) for state, lp in zip(trans.rows, log_probs)}


# ------------------------------------------------------------------ #
#  Counts and posterior
# ------------------------------------------------------------------ #

def transition_counts(
    sequence: Sequence[Hashable],
    states: Sequence[Hashable],
) -> np.ndarray:
    """Count transitions between consecutive symbols of *sequence*.

    Entry ``(i, j)`` is the number of times ``states[i]`` is immediately
    followed by ``states[j]``.
    """
    index = {state: k for k, state in enumerate(states)}
    missing = set(sequence) - set(index)
    if missing:
        raise LabelError(f"Sequence contains unknown states: {sorted(missing)}")
    counts = np.zeros((len(states), len(states)))
    for a, b in zip(sequence[:-1], sequence[1:]):
        counts[index[a], index[b]] += 1
    return counts


def _state_universe(
    sequences: Sequence[Sequence[Hashable]],
    hyperparam: Optional[LabeledMatrix],
) -> List[Hashable]:
    """Collect every state before sizing any matrix.

    Observed states come first; states that only the hyperparameter matrix
    mentions are added afterwards.  Every observed state must be covered by
    the hyperparameters.
    """
    observed = set()
    for seq in sequences:
        observed.update(seq)
    if hyperparam is None:
        return sorted(observed)

    if hyperparam.shape[0] < len(observed):
        raise LabelError("Hyperparameters for all state transitions must be provided")
    _check_hyperparam(hyperparam)
    if not observed <= set(hyperparam.cols):
        raise LabelError("Hyperparameters for all state transitions must be provided")
    return sorted(hyperparam.cols)


def posterior_hyperparameters(
    sequence: Sequence[Hashable],
    hyperparam: Optional[LabeledMatrix] = None,
) -> LabeledMatrix:
    """Conjugate update of the Dirichlet parameters by observed transitions.

    Returns
    -------
    LabeledMatrix
        ``hyperparam + counts`` over the sorted state universe.
    """
    sequence = list(sequence)
    states = _state_universe([sequence], hyperparam)
    if hyperparam is None:
        hyperparam = _uniform_hyperparam(states)
    alpha = hyperparam.sorted().values
    return LabeledMatrix(alpha + transition_counts(sequence, states), states)


# ------------------------------------------------------------------ #
#  Predictive
# ------------------------------------------------------------------ #

def predictive_distribution(
    prior_sequence: Sequence[Hashable],
    new_sequence: Sequence[Hashable],
    hyperparam: Optional[LabeledMatrix] = None,
) -> float:
    """Log-probability of *new_sequence* given *prior_sequence*.

    The likelihood of the new transitions is averaged over the Dirichlet
    posterior obtained from the prior transitions.  Under conjugacy this
    reduces, for each state row *i*, to

    ``sum_j [ln G(c_ij + d_ij + a_ij) - ln G(c_ij + a_ij)]
    + ln G(C_i + A_i) - ln G(C_i + D_i + A_i)``

    where *c* and *d* count prior and new transitions, *a* holds the
    hyperparameters and capitals denote row sums.

    Parameters
    ----------
    prior_sequence : sequence
        Observed states used for inference.
    new_sequence : sequence
        Observed states whose predictive probability is computed.
    hyperparam : LabeledMatrix, optional
        Dirichlet parameters (entries >= 1) covering every observed state;
        may mention additional states.  Defaults to all ones.

    Returns
    -------
    float
        Natural log of the predictive probability.
    """
    prior_sequence = list(prior_sequence)
    new_sequence = list(new_sequence)
    states = _state_universe([prior_sequence, new_sequence], hyperparam)
    if hyperparam is None:
        hyperparam = _uniform_hyperparam(states)

    alpha = hyperparam.sorted().values
    old = transition_counts(prior_sequence, states)
    new = transition_counts(new_sequence, states)

    per_entry = gammaln(old + new + alpha) - gammaln(old + alpha)
    old_rows, new_rows, alpha_rows = old.sum(axis=1), new.sum(axis=1), alpha.sum(axis=1)
    per_row = gammaln(old_rows + alpha_rows) - gammaln(old_rows + new_rows + alpha_rows)

    result = float(per_entry.sum() + per_row.sum())
    logger.debug("Predictive log-probability %.6g over %d states", result, len(states))
    return result
