"""Structural analysis of Markov chains: reachability, classes, period."""

from dtmcflow.structure.canonical import canonic_form, canonical_permutation
from dtmcflow.structure.classes import (
    classify,
    communicating_classes,
    recurrent_classes,
    recurrent_states,
    summary,
    transient_classes,
    transient_states,
)
from dtmcflow.structure.period import period
from dtmcflow.structure.reachability import (
    adjacency_lists,
    is_irreducible,
    reachability_by_powers,
    reachability_matrix,
    transition_graph,
)

__all__ = [
    "adjacency_lists",
    "canonic_form",
    "canonical_permutation",
    "classify",
    "communicating_classes",
    "is_irreducible",
    "period",
    "reachability_by_powers",
    "reachability_matrix",
    "recurrent_classes",
    "recurrent_states",
    "summary",
    "transient_classes",
    "transient_states",
    "transition_graph",
]
