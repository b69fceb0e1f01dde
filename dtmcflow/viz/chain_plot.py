"""Graphviz rendering of a Markov chain.

Provides :func:`plot_chain`, which draws the transition graph of a
:class:`~dtmcflow.chain.MarkovChain` with its class structure visible.

Node types
----------
* **recurrent** – filled ellipse, one colour per recurrent class, each
  class grouped in a dashed cluster.
* **transient** – dashed ellipse without fill.

Edge labels can optionally display transition probabilities.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Dict, List

import graphviz

if TYPE_CHECKING:
    from dtmcflow.chain import MarkovChain

# Colorblind-safe palette (Wong 2011), light enough to read labels on
CLASS_PALETTE: List[str] = [
    "#56B4E9",
    "#E69F00",
    "#009E73",
    "#F0E442",
    "#CC79A7",
    "#0072B2",
    "#D55E00",
]


def _node_id(state) -> str:
    """Return a sanitised Graphviz node identifier."""
    return str(state).replace(" ", "_").replace("-", "_")


def _class_color(index: int) -> str:
    return CLASS_PALETTE[index % len(CLASS_PALETTE)]


def _add_legend(dot: graphviz.Digraph) -> None:
    """Append a legend sub-graph explaining node types."""
    with dot.subgraph(name="cluster_legend") as legend:
        legend.attr(label="Legend", style="dashed", fontsize="10")
        legend.node(
            "_legend_recurrent",
            "Recurrent",
            style="filled",
            fillcolor=_class_color(0),
        )
        legend.node("_legend_transient", "Transient", style="dashed")
        legend.edge("_legend_recurrent", "_legend_transient", style="invis")


def plot_chain(
    chain: "MarkovChain",
    output: str = "chain.png",
    show_probabilities: bool = True,
    show_legend: bool = True,
) -> graphviz.Digraph:
    """Render a Markov chain as a Graphviz digraph.

    Parameters
    ----------
    chain : MarkovChain
        The chain to draw.
    output : str, default ``"chain.png"``
        File path for the rendered output.  The extension determines the
        format: ``.png``, ``.svg``, or ``.dot`` / ``.gv``.  DOT output is
        written directly and does not need the Graphviz binaries.
    show_probabilities : bool, default ``True``
        When ``True``, edge labels show the transition probability.
    show_legend : bool, default ``True``
        When ``True``, a legend cluster explains node styles.

    Returns
    -------
    graphviz.Digraph
        The Graphviz Digraph object (also saved to *output*).
    """
    _, ext = os.path.splitext(output)
    ext = ext.lstrip(".").lower()
    is_dot_format = ext in ("dot", "gv")
    render_format = ext if ext in ("png", "svg") else "png"

    dot = graphviz.Digraph(name=chain.name or "chain", format=render_format, engine="dot")
    dot.attr(rankdir="LR")
    dot.attr("graph", nodesep="0.5", ranksep="0.75")

    classification = chain.classification()
    states = chain.states

    # --- Nodes ---
    for k, members in enumerate(classification.recurrent_classes()):
        with dot.subgraph(name=f"cluster_recurrent_{k}") as cluster:
            cluster.attr(label=f"Recurrent class {k + 1}", style="dashed")
            for i in members:
                cluster.node(
                    _node_id(states[i]),
                    label=str(states[i]),
                    style="filled",
                    fillcolor=_class_color(k),
                )

    for i in classification.transient_states():
        dot.node(_node_id(states[i]), label=str(states[i]), style="dashed")

    # --- Edges ---
    P = chain.row_matrix
    for i, src in enumerate(states):
        for j, dst in enumerate(states):
            if P[i, j] <= 0:
                continue
            edge_attrs: Dict[str, str] = {}
            if show_probabilities:
                edge_attrs["label"] = f" {P[i, j]:.2f} "
            dot.edge(_node_id(src), _node_id(dst), **edge_attrs)

    if show_legend:
        _add_legend(dot)

    # --- Render / save ---
    if is_dot_format:
        with open(output, "w") as fh:
            fh.write(dot.source)
    else:
        # graphviz appends the format extension itself
        base = output
        if output.endswith(f".{render_format}"):
            base = output[: -len(render_format) - 1]
        dot.render(filename=base, cleanup=True)

    return dot
