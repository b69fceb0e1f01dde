"""Numerical configuration scope for dtmcflow analyses."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, fields, replace as _replace
from typing import Optional, Tuple

# Stack of entered contexts, innermost last.  Each thread and each asyncio
# task sees its own stack.
_ACTIVE_STACK: ContextVar[Tuple["AnalysisContext", ...]] = ContextVar(
    "dtmcflow_active_contexts", default=()
)


@dataclass(frozen=True)
class AnalysisContext:
    """Context manager holding the numerical settings of an analysis.

    Entering the context makes it the active configuration for every
    dtmcflow call made inside the ``with`` block; leaving it restores the
    previously active one.  Outside any block the module defaults apply.

    Example:
        >>> with AnalysisContext(eigen_tolerance=1e-9):
        ...     pi = steady_states(P)

    Attributes:
        eigen_tolerance: Absolute tolerance applied to both the real and
            the imaginary part when deciding whether an eigenvalue equals 1.
        zero_sum_fallback: If True, an eigenvector whose components sum to
            exactly zero is divided by 1 instead of its sum.  If False such
            a vector raises :class:`~dtmcflow.core.exceptions.NumericalError`.
        row_sum_tolerance: Absolute tolerance for row-stochasticity checks.
        prior_row_sum_tolerance: Tolerance used when validating the matrix
            passed to :func:`~dtmcflow.inference.conjugate.prior_distribution`.
        fail_on_ill_conditioned: If True, an ill-conditioning warning from
            the linear solver is promoted to a ``NumericalError``.
    """

    eigen_tolerance: float = 1e-7
    zero_sum_fallback: bool = True
    row_sum_tolerance: float = 1e-8
    prior_row_sum_tolerance: float = 1e-10
    fail_on_ill_conditioned: bool = True

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name.endswith("tolerance") and value < 0:
                raise ValueError(f"{f.name} must be >= 0, got {value}")

    def __enter__(self) -> "AnalysisContext":
        """Enter the context.

        Returns:
            This context, now the active one.
        """
        _ACTIVE_STACK.set(_ACTIVE_STACK.get() + (self,))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Restore the parent context.

        Returns:
            False to propagate any exceptions.
        """
        _ACTIVE_STACK.set(_ACTIVE_STACK.get()[:-1])
        return False

    def replace(self, **overrides) -> "AnalysisContext":
        """Return a copy of this context with some fields overridden."""
        return _replace(self, **overrides)

    @classmethod
    def get_active_context(cls) -> Optional["AnalysisContext"]:
        """Get the currently active context, or None outside any block."""
        stack = _ACTIVE_STACK.get()
        return stack[-1] if stack else None

    @classmethod
    def is_active(cls) -> bool:
        """Check if a context is currently active."""
        return bool(_ACTIVE_STACK.get())


DEFAULT_CONTEXT = AnalysisContext()


def current_context() -> AnalysisContext:
    """Return the active :class:`AnalysisContext`, or the defaults."""
    active = AnalysisContext.get_active_context()
    return active if active is not None else DEFAULT_CONTEXT
