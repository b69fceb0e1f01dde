"""Stationary distributions, one per recurrent class.

The stationary distribution of a closed class is the left eigenvector of
its induced sub-chain for eigenvalue 1, normalized to unit mass.  The
eigen-decomposition uses :func:`scipy.linalg.eigh` when the sub-matrix is
symmetric (real spectrum, better conditioned) and :func:`scipy.linalg.eig`
otherwise; LAPACK balances the general problem before solving it.

Tolerances come from the active
:class:`~dtmcflow.core.context.AnalysisContext`.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from scipy import linalg

from dtmcflow.core.context import AnalysisContext, current_context
from dtmcflow.core.exceptions import NumericalError
from dtmcflow.core.validation import (
    as_matrix,
    check_row_stochastic,
    from_row_stochastic,
    to_row_stochastic,
)
from dtmcflow.structure.classes import classify

logger = logging.getLogger(__name__)


def _is_unit_eigenvalue(values: np.ndarray, tol: float) -> np.ndarray:
    """Mask of eigenvalues equal to 1 + 0i within *tol* on both parts."""
    values = np.asarray(values, dtype=complex)
    return (np.abs(values.real - 1.0) <= tol) & (np.abs(values.imag) <= tol)


def class_eigenvectors(
    sub_matrix,
    context: Optional[AnalysisContext] = None,
) -> np.ndarray:
    """Normalized left eigenvectors of *sub_matrix* for eigenvalue 1.

    Parameters
    ----------
    sub_matrix : array-like
        Row-stochastic matrix of a closed class.
    context : AnalysisContext, optional
        Numerical settings; defaults to the active context.

    Returns
    -------
    numpy.ndarray
        One row per eigenvalue found equal to 1.  Each row is the real part
        of the eigenvector divided by its sum.
    """
    ctx = context if context is not None else current_context()
    # Left eigenvectors of P are right eigenvectors of P^T
    target = as_matrix(sub_matrix).T

    try:
        if linalg.issymmetric(target):
            eigvals, eigvecs = linalg.eigh(target)
        else:
            eigvals, eigvecs = linalg.eig(target)
    except (linalg.LinAlgError, ValueError) as exc:
        raise NumericalError(
            "Failure computing eigen values / vectors for a recurrent class"
        ) from exc

    selected = np.flatnonzero(_is_unit_eigenvalue(eigvals, ctx.eigen_tolerance))
    vectors = np.real(eigvecs[:, selected]).T

    result = np.empty_like(vectors)
    for k, vec in enumerate(vectors):
        total = vec.sum()
        if total == 0:
            if not ctx.zero_sum_fallback:
                raise NumericalError("Eigenvector for eigenvalue 1 sums to zero")
            logger.warning("Eigenvector for eigenvalue 1 sums to zero; leaving it unscaled")
            total = 1.0
        result[k] = vec / total

    logger.debug(
        "Found %d unit eigenvalue(s) for a class of size %d",
        len(selected), target.shape[0],
    )
    return result


def _lexicographic_sort(rows: np.ndarray) -> np.ndarray:
    if rows.size == 0:
        return rows
    # np.lexsort uses its last key as the primary one
    order = np.lexsort(rows[:, ::-1].T)
    return rows[order]


def steady_states(matrix, byrow: bool = True) -> np.ndarray:
    """Stationary distribution of every recurrent class.

    Parameters
    ----------
    matrix : array-like
        Stochastic matrix.
    byrow : bool
        Whether *matrix* is stochastic by rows (True) or by columns.

    Returns
    -------
    numpy.ndarray
        For ``byrow=True`` an array of shape ``(k, n)`` with one
        distribution per recurrent class, rows sorted lexicographically.
        Each row is supported exactly on its class.  For ``byrow=False``
        the transpose, shape ``(n, k)``.

    Raises
    ------
    NumericalError
        If a class does not yield exactly one unit eigenvalue or its
        distribution has negative mass.
    """
    ctx = current_context()
    P = to_row_stochastic(as_matrix(matrix), byrow)
    check_row_stochastic(P, ctx.row_sum_tolerance)

    classes = classify(P).recurrent_classes()
    n = P.shape[0]
    steady = np.zeros((len(classes), n))

    for row, members in enumerate(classes):
        sub = P[np.ix_(members, members)]
        vectors = class_eigenvectors(sub, ctx)
        if vectors.shape[0] != 1:
            raise NumericalError(
                "Could not compute steady states with recurrent classes method: "
                f"found {vectors.shape[0]} unit eigenvalues for class {members}"
            )
        if np.any(vectors[0] < 0):
            raise NumericalError(
                "Could not compute steady states correctly: negative value found"
            )
        steady[row, members] = vectors[0]

    logger.debug("Computed %d steady state(s) for %d states", len(classes), n)
    return from_row_stochastic(_lexicographic_sort(steady), byrow)
