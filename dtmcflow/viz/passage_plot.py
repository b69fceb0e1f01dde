"""matplotlib plots for first-passage and stationary distributions.

Provides ``plot_first_passage`` (one line per target state over the time
horizon) and ``plot_steady_states`` (grouped bars, one group per state,
one bar per recurrent class).
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

# ---------------------------------------------------------------------------
# Colorblind-safe palette (Wong 2011, widely recommended for accessibility)
# ---------------------------------------------------------------------------
COLORBLIND_SAFE_PALETTE: List[str] = [
    "#0072B2",  # blue
    "#E69F00",  # orange
    "#009E73",  # green
    "#CC79A7",  # pink
    "#56B4E9",  # sky blue
    "#D55E00",  # vermilion
    "#F0E442",  # yellow
    "#000000",  # black
]


def _get_color(index: int) -> str:
    """Return a color from the colorblind-safe palette (wraps around)."""
    return COLORBLIND_SAFE_PALETTE[index % len(COLORBLIND_SAFE_PALETTE)]


def _axes(ax, figsize):
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
        return fig, ax, True
    return ax.figure, ax, False


def _finish(fig, ax, created_fig, title, save_path):
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    if title:
        ax.set_title(title)
    fig.tight_layout()
    if save_path is not None:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    if created_fig:
        return fig
    return ax


def plot_first_passage(
    distribution: np.ndarray,
    labels: Optional[Sequence[str]] = None,
    *,
    targets: Optional[Sequence[int]] = None,
    title: Optional[str] = None,
    ax: Optional[Any] = None,
    figsize: Tuple[float, float] = (8, 5),
    save_path: Optional[str] = None,
) -> Any:
    """Plot first-passage probabilities against the step number.

    Parameters
    ----------
    distribution : numpy.ndarray
        Output of :func:`~dtmcflow.temporal.passage.first_passage`, shape
        ``(n, N)``, or a 1-D vector from
        :func:`~dtmcflow.temporal.passage.first_passage_multiple`.
    labels : sequence of str, optional
        One label per column (state).
    targets : sequence of int, optional
        Columns to draw.  Defaults to every column.
    ax : matplotlib.axes.Axes, optional
        Axes to draw on.  A new figure is created if omitted.
    save_path : str, optional
        If given, the figure is saved there.

    Returns
    -------
    matplotlib.figure.Figure or matplotlib.axes.Axes
        The new figure, or *ax* when one was passed in.
    """
    data = np.asarray(distribution, dtype=float)
    if data.ndim == 1:
        data = data[:, None]
    if data.ndim != 2:
        raise ValueError(f"Expected a 1-D or 2-D array, got {data.ndim} dimensions")
    columns = list(range(data.shape[1])) if targets is None else list(targets)
    if labels is None:
        labels = [str(j) for j in range(data.shape[1])]
    elif len(labels) != data.shape[1]:
        raise ValueError("Number of labels must match number of columns")

    fig, ax, created_fig = _axes(ax, figsize)
    steps = np.arange(1, data.shape[0] + 1)
    for idx, j in enumerate(columns):
        ax.plot(steps, data[:, j], marker="o", markersize=3,
                color=_get_color(idx), label=labels[j], linewidth=1.5)

    ax.set_xlabel("Step")
    ax.set_ylabel("First-passage probability")
    ax.legend(frameon=False)
    return _finish(fig, ax, created_fig, title, save_path)


def plot_steady_states(
    steady: np.ndarray,
    states: Sequence[str],
    *,
    title: Optional[str] = None,
    ax: Optional[Any] = None,
    figsize: Tuple[float, float] = (8, 5),
    save_path: Optional[str] = None,
) -> Any:
    """Bar chart of stationary distributions, one bar series per class.

    Parameters
    ----------
    steady : numpy.ndarray
        Row-oriented output of
        :func:`~dtmcflow.solvers.steady_state.steady_states`, shape
        ``(k, n)``.
    states : sequence of str
        State labels, one per column.
    """
    data = np.atleast_2d(np.asarray(steady, dtype=float))
    if data.shape[1] != len(states):
        raise ValueError("Number of states must match number of columns")

    fig, ax, created_fig = _axes(ax, figsize)
    k = data.shape[0]
    width = 0.8 / max(k, 1)
    x = np.arange(len(states))
    for idx in range(k):
        ax.bar(x + (idx - (k - 1) / 2) * width, data[idx], width=width,
               color=_get_color(idx), label=f"Class {idx + 1}")

    ax.set_xticks(x)
    ax.set_xticklabels([str(s) for s in states])
    ax.set_ylabel("Stationary probability")
    ax.set_ylim(0.0, 1.0)
    if k > 1:
        ax.legend(frameon=False)
    return _finish(fig, ax, created_fig, title, save_path)
