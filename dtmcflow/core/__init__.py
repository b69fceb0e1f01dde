"""Core module for dtmcflow.

This module contains the value types, error hierarchy, numerical
configuration and input checks shared by every analysis.
"""

from .context import AnalysisContext, current_context
from .exceptions import ChainError, DomainError, LabelError, NumericalError, ShapeError
from .types import Classification, LabeledMatrix

__all__ = [
    "AnalysisContext",
    "current_context",
    "ChainError",
    "DomainError",
    "LabelError",
    "NumericalError",
    "ShapeError",
    "Classification",
    "LabeledMatrix",
]
