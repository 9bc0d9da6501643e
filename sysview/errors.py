"""Errors raised when a caller breaks the view's sequencing contract."""


class SequencingError(AssertionError):
    """A precondition of the trace view was violated.

    Raised for calls made out of order (trace data before a meta-model)
    and for references the view cannot resolve. These indicate a caller
    bug; the current operation is aborted and nothing is retried.
    """
