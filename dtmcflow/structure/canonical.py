"""Canonical form of a chain: recurrent classes first, transient states last."""

from __future__ import annotations

from typing import Hashable, List, Sequence, Tuple

import numpy as np

from dtmcflow.core.exceptions import ShapeError
from dtmcflow.core.types import Classification
from dtmcflow.core.validation import (
    as_matrix,
    check_unique_labels,
    from_row_stochastic,
    to_row_stochastic,
)
from dtmcflow.structure.classes import classify


def canonical_permutation(classification: Classification) -> List[int]:
    """Order the states so that recurrent classes come first.

    Recurrent classes appear in the order produced by the classifier and
    keep their internal order; every other state follows in original order.
    """
    order: List[int] = []
    for members in classification.recurrent_classes():
        order.extend(members)
    used = set(order)
    order.extend(i for i in range(classification.num_states) if i not in used)
    return order


def canonic_form(
    matrix,
    states: Sequence[Hashable],
    byrow: bool = True,
) -> Tuple[np.ndarray, List[Hashable]]:
    """Reorder a chain into canonical form.

    Parameters
    ----------
    matrix : array-like
        Square transition matrix.
    states : sequence
        State labels, one per row.
    byrow : bool
        Orientation of *matrix*; the result has the same orientation.

    Returns
    -------
    tuple
        ``(matrix, states)`` with rows, columns and labels permuted.
    """
    P = as_matrix(matrix)
    states = list(states)
    if len(states) != P.shape[0]:
        raise ShapeError(
            f"Got {len(states)} state labels for a matrix with {P.shape[0]} states"
        )
    check_unique_labels(states)

    P = to_row_stochastic(P, byrow)
    order = canonical_permutation(classify(P))
    reordered = P[np.ix_(order, order)]
    return from_row_stochastic(reordered, byrow), [states[i] for i in order]
