"""Input checks shared by the dtmcflow entry points.

Each check raises the matching :mod:`dtmcflow.core.exceptions` subclass and
returns a fresh array where it converts its input, so callers never mutate
what they were given.
"""

from __future__ import annotations

from typing import Hashable, Iterable, Sequence

import numpy as np

from dtmcflow.core.exceptions import DomainError, LabelError, ShapeError


def as_matrix(matrix) -> np.ndarray:
    """Return a float copy of *matrix*, checking that it is square and non-empty."""
    arr = np.array(matrix, dtype=float)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise ShapeError(f"Transition matrix must be square, got shape {arr.shape}")
    if arr.shape[0] == 0:
        raise ShapeError("Transition matrix must have at least one state")
    return arr


def as_vector(values, n: int, name: str = "vector") -> np.ndarray:
    """Return a float copy of *values*, checking that it has length *n*."""
    arr = np.array(values, dtype=float).reshape(-1)
    if arr.shape[0] != n:
        raise ShapeError(f"{name} has length {arr.shape[0]}, expected {n}")
    return arr


def check_nonnegative(matrix: np.ndarray) -> None:
    if np.any(matrix < 0):
        raise DomainError("Transition probabilities must be non-negative.")


def check_row_stochastic(matrix: np.ndarray, tol: float) -> None:
    """Check that *matrix* is non-negative and each row sums to 1 within *tol*."""
    check_nonnegative(matrix)
    row_sums = matrix.sum(axis=1)
    if not np.allclose(row_sums, 1.0, rtol=0.0, atol=tol):
        raise DomainError("Each row of the transition matrix must sum to 1.")


def check_probability_entries(matrix: np.ndarray) -> None:
    if np.any(matrix < 0.0) or np.any(matrix > 1.0):
        raise DomainError(
            "The entries in the transition matrix must each belong to the interval [0, 1]"
        )


def check_state_index(index: int, n: int, name: str = "state index") -> int:
    index = int(index)
    if not 0 <= index < n:
        raise ShapeError(f"{name} {index} out of range for {n} states")
    return index


def check_horizon(n: int) -> int:
    if int(n) != n:
        raise DomainError(f"Horizon must be an integer, got {n!r}")
    n = int(n)
    if n < 0:
        raise DomainError(f"Horizon must be >= 0, got {n}")
    return n


def check_unique_labels(labels: Sequence[Hashable]) -> None:
    if len(set(labels)) != len(labels):
        raise LabelError("The states must all be unique")


def check_same_label_sets(
    first: Iterable[Hashable],
    second: Iterable[Hashable],
    message: str = "The set of row names must be the same as the set of column names",
) -> None:
    if set(first) != set(second):
        raise LabelError(message)


def to_row_stochastic(matrix: np.ndarray, byrow: bool) -> np.ndarray:
    """Return *matrix* oriented so that rows are source states."""
    return matrix if byrow else matrix.T.copy()


def from_row_stochastic(result: np.ndarray, byrow: bool) -> np.ndarray:
    """Undo :func:`to_row_stochastic` on a result matrix."""
    return result if byrow else result.T.copy()
