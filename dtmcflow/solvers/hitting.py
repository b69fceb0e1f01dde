"""Hitting (absorption) probabilities between every pair of states."""

from __future__ import annotations

import logging
import warnings

import numpy as np
from scipy import linalg

from dtmcflow.core.context import current_context
from dtmcflow.core.exceptions import NumericalError
from dtmcflow.core.validation import (
    as_matrix,
    check_row_stochastic,
    from_row_stochastic,
    to_row_stochastic,
)
from dtmcflow.structure.classes import classify

logger = logging.getLogger(__name__)


def hitting_probabilities(matrix, byrow: bool = True) -> np.ndarray:
    """Probability of ever visiting each state from each state.

    For every target *j* the first-step equations

    ``h(i) = P(i, j) + sum_{k != j} P(i, k) h(k)``

    are solved as one linear system.  States in a closed class cannot
    leave it, so their rows are replaced by ``h(i) = 1`` when *j* belongs
    to the same class and ``h(i) = 0`` otherwise.

    Parameters
    ----------
    matrix : array-like
        Stochastic matrix.
    byrow : bool
        Orientation of *matrix*; the result has the same orientation.

    Returns
    -------
    numpy.ndarray
        Array of shape ``(n, n)``; entry ``(i, j)`` is the probability of
        ever reaching *j* from *i* (``byrow=True`` layout).

    Raises
    ------
    NumericalError
        If a system is singular or, with ``fail_on_ill_conditioned`` set,
        ill-conditioned.
    """
    ctx = current_context()
    P = to_row_stochastic(as_matrix(matrix), byrow)
    check_row_stochastic(P, ctx.row_sum_tolerance)

    n = P.shape[0]
    classification = classify(P)
    closed = classification.closed
    communicating = classification.communicating
    identity = np.eye(n)
    hitting = np.empty((n, n))

    for j in range(n):
        coeffs = P.copy()
        coeffs[:, j] = 0.0
        coeffs -= identity
        rhs = -P[:, j].copy()

        coeffs[closed] = identity[closed]
        rhs[closed] = communicating[closed, j].astype(float)

        try:
            with warnings.catch_warnings():
                if ctx.fail_on_ill_conditioned:
                    warnings.simplefilter("error", linalg.LinAlgWarning)
                hitting[:, j] = linalg.solve(coeffs, rhs)
        except (linalg.LinAlgError, linalg.LinAlgWarning) as exc:
            raise NumericalError(
                f"Could not solve the hitting probability system for target {j}"
            ) from exc

    logger.debug("Solved %d hitting probability systems", n)
    return from_row_stochastic(hitting, byrow)
