"""Period of an irreducible chain."""

from __future__ import annotations

import logging
import warnings
from collections import deque
from math import gcd

import numpy as np

from dtmcflow.core.validation import as_matrix, check_state_index, to_row_stochastic
from dtmcflow.structure.reachability import adjacency_lists, is_irreducible

logger = logging.getLogger(__name__)


def period(matrix, byrow: bool = True, root: int = 0) -> int:
    """Compute the period of an irreducible chain.

    States are labelled breadth-first from *root*: each newly discovered
    state gets its parent's level plus one.  Every edge ``i -> j`` towards
    an already labelled state contributes ``level(i) + 1 - level(j)`` to a
    running gcd, which is the period once the frontier is exhausted.

    Parameters
    ----------
    matrix : array-like
        Square transition matrix.
    byrow : bool
        Orientation of *matrix*.  Reversing every edge keeps cycle lengths,
        so the orientation does not change the answer.
    root : int
        State the labelling starts from.  Any root gives the same period.

    Returns
    -------
    int
        The period (1 for aperiodic chains), or 0 when the chain is not
        irreducible and the period is undefined.
    """
    P = to_row_stochastic(as_matrix(matrix), byrow)
    root = check_state_index(root, P.shape[0], "root")

    if not is_irreducible(P):
        logger.warning("Period requested for a chain that is not irreducible")
        warnings.warn("The matrix is not irreducible", RuntimeWarning, stacklevel=2)
        return 0

    adjacency = adjacency_lists(P)
    level = np.zeros(P.shape[0], dtype=int)
    level[root] = 1
    discovered = {root}
    frontier = deque([root])
    d = 0

    while frontier and d != 1:
        i = frontier.popleft()
        for j in adjacency[i]:
            if j in discovered:
                d = gcd(d, int(level[i] + 1 - level[j]))
            else:
                discovered.add(j)
                level[j] = level[i] + 1
                frontier.append(j)

    logger.debug("Period %d found from root %d", d, root)
    return d
