"""
Common utilities shared across reflist modules.
"""

from __future__ import annotations

import os
import sys
import threading

from .errors import ListingCancelled


class Cancellable:
    """
    Best-effort cancellation token passed through to store queries.

    Another thread (or a signal handler) calls cancel(); the listing checks
    the token before each store query and aborts with ListingCancelled.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, operation: str) -> None:
        """Raise ListingCancelled naming operation if cancel() was called."""
        if self._event.is_set():
            raise ListingCancelled(operation)


def check_cancelled(cancellable: Cancellable | None, operation: str) -> None:
    """Raise ListingCancelled if an optional token was cancelled."""
    if cancellable is not None:
        cancellable.raise_if_cancelled(operation)


def vlog(msg: str, verbose: bool = False) -> None:
    """
    Log a verbose trace message.

    Args:
        msg: Message to log
        verbose: Whether verbose mode is enabled
    """
    if verbose or os.environ.get("REFLIST_DEBUG", "0") == "1":
        try:
            from .logging_config import get_logger
            get_logger().info(msg)
        except Exception:
            # Fallback to stderr if logging fails
            try:
                print(f"[reflist] {msg}", file=sys.stderr)
            except Exception:
                pass
