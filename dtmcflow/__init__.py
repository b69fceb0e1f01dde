"""dtmcflow: structural and probabilistic analysis of discrete-time Markov chains.

This package provides tools for classifying the states of a finite chain
(communicating, recurrent and transient classes, canonical form, period),
computing its stationary distributions, hitting and first-passage
probabilities and expected rewards, and scoring transition data under
Dirichlet conjugate priors.
"""

try:
    from dtmcflow._version import version as __version__
except ImportError:
    __version__ = "0.1.0"

from .chain import MarkovChain
from .core.context import AnalysisContext
from .core.exceptions import ChainError, DomainError, LabelError, NumericalError, ShapeError
from .core.types import Classification, LabeledMatrix
from .inference.conjugate import (
    posterior_hyperparameters,
    predictive_distribution,
    prior_distribution,
)
from .solvers.hitting import hitting_probabilities
from .solvers.steady_state import steady_states
from .structure.canonical import canonic_form
from .structure.classes import classify
from .structure.period import period
from .structure.reachability import reachability_matrix
from .temporal.passage import (
    expected_rewards,
    expected_rewards_before_hitting,
    first_passage,
    first_passage_multiple,
)

__all__ = [
    "MarkovChain",
    "AnalysisContext",
    "ChainError",
    "DomainError",
    "LabelError",
    "NumericalError",
    "ShapeError",
    "Classification",
    "LabeledMatrix",
    "canonic_form",
    "classify",
    "expected_rewards",
    "expected_rewards_before_hitting",
    "first_passage",
    "first_passage_multiple",
    "hitting_probabilities",
    "period",
    "posterior_hyperparameters",
    "predictive_distribution",
    "prior_distribution",
    "reachability_matrix",
    "steady_states",
]
