"""Core value types for dtmcflow."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Sequence

import numpy as np

from dtmcflow.core.exceptions import ShapeError


# ---------------------------------------------------------------------------
# Class structure of a chain
# ---------------------------------------------------------------------------

@dataclass
class Classification:
    """Communicating-class structure of a row-stochastic matrix.

    Attributes:
        communicating: ``(n, n)`` boolean array; entry ``(i, j)`` is True iff
            states *i* and *j* reach each other.
        closed: Length-``n`` boolean array; entry ``i`` is True iff the
            class of state *i* is closed (recurrent).
    """

    communicating: np.ndarray
    closed: np.ndarray

    def __post_init__(self) -> None:
        self.communicating = np.asarray(self.communicating, dtype=bool)
        self.closed = np.asarray(self.closed, dtype=bool)
        n = self.closed.shape[0]
        if self.communicating.shape != (n, n):
            raise ShapeError(
                f"Communication matrix shape {self.communicating.shape} "
                f"does not match number of states ({n})"
            )

    @property
    def num_states(self) -> int:
        return self.closed.shape[0]

    @property
    def is_irreducible(self) -> bool:
        return len(self.communicating_classes()) == 1

    def _collect(self, wanted: Optional[bool] = None) -> List[List[int]]:
        # The first unassigned index seeds each class, so every class is
        # emitted once, ordered by its lowest member.
        assigned = np.zeros(self.num_states, dtype=bool)
        classes: List[List[int]] = []
        for i in range(self.num_states):
            if assigned[i]:
                continue
            members = np.flatnonzero(self.communicating[i])
            assigned[members] = True
            if wanted is None or bool(self.closed[i]) == wanted:
                classes.append(members.tolist())
        return classes

    def communicating_classes(self) -> List[List[int]]:
        """Partition of the states into communicating classes."""
        return self._collect()

    def recurrent_classes(self) -> List[List[int]]:
        """Closed communicating classes."""
        return self._collect(True)

    def transient_classes(self) -> List[List[int]]:
        """Communicating classes that are not closed."""
        return self._collect(False)

    def recurrent_states(self) -> List[int]:
        return np.flatnonzero(self.closed).tolist()

    def transient_states(self) -> List[int]:
        return np.flatnonzero(~self.closed).tolist()

    def summary(self) -> Dict[str, List[List[int]]]:
        """Closed, recurrent and transient classes in one mapping.

        Closed and recurrent classes coincide for finite chains; both keys
        are kept so the summary reads the same as the textbook definition.
        """
        recurrent = self.recurrent_classes()
        return {
            "closedClasses": recurrent,
            "recurrentClasses": recurrent,
            "transientClasses": self.transient_classes(),
        }


# ---------------------------------------------------------------------------
# Labelled matrices
# ---------------------------------------------------------------------------

@dataclass
class LabeledMatrix:
    """A 2-D array whose rows and columns carry state labels.

    The Bayesian routines accept matrices whose labels may be in any order;
    :meth:`sorted` aligns them to a canonical order before any arithmetic.
    """

    values: np.ndarray
    rows: Sequence[Hashable]
    cols: Optional[Sequence[Hashable]] = field(default=None)

    def __post_init__(self) -> None:
        self.values = np.array(self.values, dtype=float)
        self.rows = list(self.rows)
        self.cols = list(self.rows if self.cols is None else self.cols)
        if self.values.ndim != 2:
            raise ShapeError(
                f"Expected a 2-D matrix, got {self.values.ndim} dimension(s)"
            )
        expected = (len(self.rows), len(self.cols))
        if self.values.shape != expected:
            raise ShapeError(
                f"Matrix shape {self.values.shape} does not match "
                f"label counts {expected}"
            )

    @property
    def shape(self):
        return self.values.shape

    @property
    def is_square(self) -> bool:
        return self.values.shape[0] == self.values.shape[1]

    def sorted(self) -> "LabeledMatrix":
        """Return a copy with both label axes in sorted order."""
        row_order = sorted(range(len(self.rows)), key=lambda i: self.rows[i])
        col_order = sorted(range(len(self.cols)), key=lambda j: self.cols[j])
        return LabeledMatrix(
            self.values[np.ix_(row_order, col_order)],
            [self.rows[i] for i in row_order],
            [self.cols[j] for j in col_order],
        )
