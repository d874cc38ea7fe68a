"""
hilbertplot.errors
==================

Exception types shared by the curve, spectral and mapping layers.

All failures are raised synchronously by the operation that detects them.
Nothing is retried and no partial grid/spectrum is returned.

The concrete errors also derive from the closest built-in exception so that
callers can catch them generically:

    DomainError           -> ValueError
    InvalidLengthError    -> ValueError
    SequenceOverflowError -> OverflowError
"""


class HilbertPlotError(Exception):
    """Base class for every error raised by hilbertplot."""


class DomainError(HilbertPlotError, ValueError):
    """Curve order, index or coordinate outside the valid domain."""


class InvalidLengthError(HilbertPlotError, ValueError):
    """Sequence length not accepted by the spectral transform."""


class SequenceOverflowError(HilbertPlotError, OverflowError):
    """Sequence longer than the curve capacity under the 'reject' policy."""
