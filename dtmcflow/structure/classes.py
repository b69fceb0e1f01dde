"""Communicating, recurrent and transient classes of a chain."""

from __future__ import annotations

import logging
from typing import Dict, List

import numpy as np

from dtmcflow.core.types import Classification
from dtmcflow.core.validation import as_matrix, to_row_stochastic
from dtmcflow.structure.reachability import reachability_matrix

logger = logging.getLogger(__name__)


def classify(matrix, byrow: bool = True) -> Classification:
    """Partition the states into communicating classes and flag closed ones.

    States *i* and *j* communicate iff each reaches the other.  The class
    of *i* is closed iff its size equals the number of states reachable
    from *i*, i.e. nothing outside the class can be reached.

    Parameters
    ----------
    matrix : array-like
        Square transition matrix.
    byrow : bool
        Whether rows (True) or columns (False) are source states.

    Returns
    -------
    Classification
    """
    P = to_row_stochastic(as_matrix(matrix), byrow)
    reach = reachability_matrix(P)
    communicating = reach & reach.T
    class_size = communicating.sum(axis=1)
    num_reachable = reach.sum(axis=1)
    closed = class_size == num_reachable

    result = Classification(communicating=communicating, closed=closed)
    logger.debug(
        "Classified %d states: %d recurrent, %d transient",
        P.shape[0], int(closed.sum()), int((~closed).sum()),
    )
    return result


def communicating_classes(matrix, byrow: bool = True) -> List[List[int]]:
    """Communicating classes as lists of state indices."""
    return classify(matrix, byrow).communicating_classes()


def recurrent_classes(matrix, byrow: bool = True) -> List[List[int]]:
    """Closed communicating classes as lists of state indices."""
    return classify(matrix, byrow).recurrent_classes()


def transient_classes(matrix, byrow: bool = True) -> List[List[int]]:
    """Open communicating classes as lists of state indices."""
    return classify(matrix, byrow).transient_classes()


def recurrent_states(matrix, byrow: bool = True) -> List[int]:
    return classify(matrix, byrow).recurrent_states()


def transient_states(matrix, byrow: bool = True) -> List[int]:
    return classify(matrix, byrow).transient_states()


def summary(matrix, byrow: bool = True) -> Dict[str, List[List[int]]]:
    """Closed, recurrent and transient classes of the chain."""
    return classify(matrix, byrow).summary()


def class_membership(classification: Classification) -> np.ndarray:
    """Map each state to the position of its class in ``communicating_classes()``."""
    membership = np.empty(classification.num_states, dtype=int)
    for label, members in enumerate(classification.communicating_classes()):
        membership[members] = label
    return membership
