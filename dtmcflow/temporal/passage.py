"""First-passage distributions and expected rewards over a finite horizon.

All functions take a square matrix whose rows are source states and use
0-based state indices.  None of them requires the matrix to be exactly
stochastic, so sub-stochastic matrices (a chain with some states removed)
are accepted as well.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import numpy as np

from dtmcflow.core.validation import (
    as_matrix,
    as_vector,
    check_horizon,
    check_state_index,
)

logger = logging.getLogger(__name__)


def _first_passage_steps(P: np.ndarray, start: int, n: int):
    """Yield, for m = 1..n, the row of first-passage probabilities at step m."""
    not_diagonal = 1.0 - np.eye(P.shape[0])
    G = P.copy()
    for m in range(n):
        if m > 0:
            # Paths that already reached the target are dropped before stepping
            G = P @ (G * not_diagonal)
        yield G[start]


def first_passage(matrix, start: int, n: int) -> np.ndarray:
    """First-passage time distribution from *start* to every state.

    Parameters
    ----------
    matrix : array-like
        Square transition matrix, rows are source states.
    start : int
        Index of the initial state.
    n : int
        Number of steps.

    Returns
    -------
    numpy.ndarray
        Array of shape ``(n, N)``.  Entry ``(m - 1, j)`` is the probability
        that the chain started at *start* visits *j* for the first time at
        step *m*.
    """
    P = as_matrix(matrix)
    start = check_state_index(start, P.shape[0], "start")
    n = check_horizon(n)

    result = np.zeros((n, P.shape[0]))
    for m, row in enumerate(_first_passage_steps(P, start, n)):
        result[m] = row
    return result


def first_passage_multiple(
    matrix,
    start: int,
    targets: Iterable[int],
    n: int,
) -> np.ndarray:
    """First-passage probabilities from *start* summed over *targets*.

    Returns
    -------
    numpy.ndarray
        Length-*n* vector; entry ``m - 1`` is the sum over the target
        states of the probability of first visiting each at step *m*.
    """
    P = as_matrix(matrix)
    start = check_state_index(start, P.shape[0], "start")
    targets = [check_state_index(t, P.shape[0], "target") for t in targets]
    n = check_horizon(n)

    result = np.zeros(n)
    for m, row in enumerate(_first_passage_steps(P, start, n)):
        result[m] = row[targets].sum()
    return result


def expected_rewards(matrix, n: int, rewards) -> np.ndarray:
    """Expected cumulative reward over *n* steps from every state.

    Iterates the dynamic-programming recurrence ``v <- r + P v`` *n* times
    from ``v = r``, so the result equals ``sum_{t=0}^{n} P^t r``.
    """
    P = as_matrix(matrix)
    n = check_horizon(n)
    r = as_vector(rewards, P.shape[0], "rewards")

    v = r.copy()
    for _ in range(n):
        v = r + P @ v
    return v


def expected_rewards_before_hitting(
    matrix,
    start: int,
    rewards,
    n: int,
    avoid: Optional[Iterable[int]] = None,
) -> float:
    """Expected reward collected during the first *n* steps from *start*.

    Computes ``sum_{t=0}^{n-1} (e_start P^t) . r`` by pushing a one-hot
    row vector through successive powers of *P*.

    Parameters
    ----------
    matrix : array-like
        Square matrix, rows are source states.
    start : int
        Index of the initial state.
    rewards : array-like
        Per-state reward.
    n : int
        Number of steps.
    avoid : iterable of int, optional
        Target states.  Their rows and columns are zeroed so that any
        probability mass reaching them stops collecting reward; a start
        state inside *avoid* collects nothing.

    Returns
    -------
    float
    """
    P = as_matrix(matrix)
    size = P.shape[0]
    start = check_state_index(start, size, "start")
    r = as_vector(rewards, size, "rewards")
    n = check_horizon(n)

    if avoid is not None:
        blocked = [check_state_index(a, size, "avoided state") for a in avoid]
        if start in blocked:
            return 0.0
        P[blocked, :] = 0.0
        P[:, blocked] = 0.0

    dist = np.zeros(size)
    dist[start] = 1.0
    total = 0.0
    for _ in range(n):
        total += float(dist @ r)
        dist = dist @ P
    logger.debug("Accumulated reward %.6g over %d steps from state %d", total, n, start)
    return total
