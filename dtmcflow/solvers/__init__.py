"""Linear-algebra solvers: stationary distributions and hitting probabilities."""

from dtmcflow.solvers.hitting import hitting_probabilities
from dtmcflow.solvers.steady_state import class_eigenvectors, steady_states

__all__ = [
    "class_eigenvectors",
    "hitting_probabilities",
    "steady_states",
]
