"""Exception hierarchy for euler_sequences.

Each error also derives from the closest built-in exception so callers that
only know about ``ValueError`` or ``IndexError`` still catch them.
"""

from __future__ import annotations


class SequenceError(Exception):
    """Base class for all errors raised by this package."""


class InvalidArgumentError(SequenceError, ValueError):
    """A local precondition was violated (negative index, bad range, ...)."""


class AlreadyInitializedError(SequenceError, RuntimeError):
    """A cache was initialized more than once."""


class UnsupportedOperationError(SequenceError, TypeError):
    """Mutation was attempted on an immutable view."""


class NoSuchElementError(SequenceError, IndexError):
    """An iterator was moved past one of its boundaries."""


class InternalConsistencyError(SequenceError, RuntimeError):
    """An algorithmic invariant did not hold."""


def require_non_negative(value: int, name: str = "index") -> int:
    """Validate that an integer argument is >= 0.

    Args:
        value: Value to check.
        name: Argument name used in the error message.

    Returns:
        The value, unchanged.

    Raises:
        InvalidArgumentError: If value is negative.
    """
    if value < 0:
        raise InvalidArgumentError(f"{name} must be >= 0, got {value}")
    return value
