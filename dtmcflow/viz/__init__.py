"""Visualization helpers for dtmcflow."""

from dtmcflow.viz.chain_plot import plot_chain
from dtmcflow.viz.passage_plot import plot_first_passage, plot_steady_states

__all__ = ["plot_chain", "plot_first_passage", "plot_steady_states"]
