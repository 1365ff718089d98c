"""
Exception hierarchy for reflist.

Fatal conditions (store I/O failures, cancellation) derive from ReflistError
and abort a listing. Missing metadata is never an exception.
"""

from __future__ import annotations


class ReflistError(Exception):
    """Base exception for reflist."""

    pass


class InvalidReferenceError(ReflistError, ValueError):
    """Raised when a string is not a well-formed kind/name/arch/branch reference."""

    def __init__(self, ref: str, reason: str):
        self.ref = ref
        self.reason = reason
        super().__init__(f"Invalid reference '{ref}': {reason}")


class StoreError(ReflistError):
    """
    Installation store query failed.

    Attributes:
        operation: Store operation that failed (e.g. "list runtime refs")
        path: Filesystem path involved, if any
    """
    def __init__(self, operation: str, path: str | None = None, cause: Exception | None = None):
        self.operation = operation
        self.path = path
        self.cause = cause
        message = f"Failed to {operation}"
        if path:
            message += f" in {path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class ListingCancelled(ReflistError):
    """Raised when a store query observes a cancelled token."""

    def __init__(self, operation: str = "list installed refs"):
        self.operation = operation
        super().__init__(f"Cancelled while trying to {operation}")
