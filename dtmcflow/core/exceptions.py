"""Error types raised by dtmcflow.

Every error derives from :class:`ChainError`, itself a ``ValueError``, so
callers that only care about "bad input" can catch ``ValueError``.  The
subclasses let callers tell apart the four failure kinds:

* :class:`ShapeError` – non-square or mismatched dimensions.
* :class:`DomainError` – values outside their admissible range.
* :class:`LabelError` – inconsistent or missing state labels.
* :class:`NumericalError` – a linear solve or eigen-decomposition that
  could not produce a trustworthy result.
"""


class ChainError(ValueError):
    """Base class for all dtmcflow errors."""


class ShapeError(ChainError):
    """A matrix or vector does not have the required shape."""


class DomainError(ChainError):
    """A value lies outside its admissible domain."""


class LabelError(ChainError):
    """State labels are duplicated, inconsistent or missing."""


class NumericalError(ChainError):
    """A numerical routine failed or produced an invalid result."""
