"""Conjugate Bayesian inference for dtmcflow."""

from dtmcflow.inference.conjugate import (
    posterior_hyperparameters,
    predictive_distribution,
    prior_distribution,
    transition_counts,
)

__all__ = [
    "posterior_hyperparameters",
    "predictive_distribution",
    "prior_distribution",
    "transition_counts",
]
