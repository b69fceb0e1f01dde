"""Reachability of states in the transition graph of a chain.

Provides:

* :func:`adjacency_lists` – successor lists, *j* follows *i* iff
  ``P[i, j] > 0``.
* :func:`reachability_matrix` – the reflexive-transitive closure, built
  by a depth-first traversal from every state.
* :func:`reachability_by_powers` – the same closure from powers of
  ``I + sign(P)``; slower, kept as an independent cross-check.
* :func:`transition_graph` / :func:`is_irreducible` – a
  :class:`networkx.DiGraph` view of the chain and its strong connectivity.

Only exact positivity of the entries is tested, so none of these
functions depends on a numerical tolerance.
"""

from __future__ import annotations

import logging
from typing import Hashable, List, Optional, Sequence

import networkx as nx
import numpy as np

from dtmcflow.core.validation import as_matrix

logger = logging.getLogger(__name__)


def adjacency_lists(matrix) -> List[List[int]]:
    """Return, for each state, the states it moves to with positive probability."""
    P = as_matrix(matrix)
    return [np.flatnonzero(row > 0).tolist() for row in P]


def reachability_matrix(matrix) -> np.ndarray:
    """Compute which states can be reached from which.

    Parameters
    ----------
    matrix : array-like
        Square matrix, rows are source states.

    Returns
    -------
    numpy.ndarray
        Boolean array of shape ``(n, n)``; entry ``(i, j)`` is True iff
        *j* is reachable from *i*.  The diagonal is always True.
    """
    adjacency = adjacency_lists(matrix)
    n = len(adjacency)
    reach = np.zeros((n, n), dtype=bool)

    # One traversal per state: O(n^3) in the worst case
    for i in range(n):
        pending = [i]
        while pending:
            j = pending.pop()
            if reach[i, j]:
                continue
            reach[i, j] = True
            for k in adjacency[j]:
                if not reach[i, k]:
                    pending.append(k)

    logger.debug("Reachability closure computed for %d states", n)
    return reach


def reachability_by_powers(matrix) -> np.ndarray:
    """Reachability as ``sign((I + sign(P)) ** (n - 1))``.

    Returns a float matrix of zeros and ones that agrees with
    :func:`reachability_matrix`.
    """
    P = as_matrix(matrix)
    n = P.shape[0]
    step = np.eye(n) + np.sign(P)
    result = np.eye(n)
    for _ in range(n - 1):
        # Re-applying sign keeps the entries bounded
        result = np.sign(step @ result)
    return np.sign(result)


def transition_graph(
    matrix,
    states: Optional[Sequence[Hashable]] = None,
) -> nx.DiGraph:
    """Build a :class:`networkx.DiGraph` with one edge per positive entry.

    Nodes are state indices, or the given *states* labels.  Each edge
    carries its transition probability as the ``weight`` attribute.
    """
    P = as_matrix(matrix)
    n = P.shape[0]
    labels = list(range(n)) if states is None else list(states)
    graph = nx.DiGraph()
    graph.add_nodes_from(labels)
    for i, j in zip(*np.nonzero(P > 0)):
        graph.add_edge(labels[i], labels[j], weight=float(P[i, j]))
    return graph


def is_irreducible(matrix) -> bool:
    """True iff every state reaches every other state."""
    return nx.is_strongly_connected(transition_graph(matrix))
