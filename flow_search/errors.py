from __future__ import annotations


class InvalidOperation(RuntimeError):
    """The grid was used in a way its current state does not allow."""


class InvalidPuzzle(ValueError):
    """A puzzle description (or the claims on a grid) is malformed."""


class SolveTimeoutError(TimeoutError):
    """A solver ran past its `timeout_ms` deadline."""
