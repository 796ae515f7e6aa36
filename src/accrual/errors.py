"""Exception hierarchy for day count, calendar and index date calculations.

Every failure is local and synchronous. Invalid arguments and missing
schedule context are ``ValueError`` subclasses; failed name lookups are
``LookupError`` subclasses so callers can tell the two apart.
"""

from __future__ import annotations


class AccrualError(Exception):
    """Base exception for accrual calculations."""


class InvalidArgumentError(AccrualError, ValueError):
    """Raised when an argument is absent, malformed or out of order."""


class MissingContextError(InvalidArgumentError):
    """Raised when a convention needs a schedule context field that is absent."""


class UnsupportedCombinationError(InvalidArgumentError):
    """Raised when a convention cannot be applied to the supplied schedule context."""


class NotFoundError(AccrualError, LookupError):
    """Raised when a named convention, calendar or index is not registered."""

    def __init__(self, kind: str, name: object, available=None):
        message = f"Unknown {kind}: {name!r}"
        if available:
            message += f". Available: {sorted(available)}"
        super().__init__(message)
        self.kind = kind
        self.name = name


__all__ = [
    "AccrualError",
    "InvalidArgumentError",
    "MissingContextError",
    "NotFoundError",
    "UnsupportedCombinationError",
]
