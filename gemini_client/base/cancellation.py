"""Cooperative cancellation primitives.

A ``CancellationToken`` is owned by each stream session. Stopping a session
cancels its token; the background producer polls the token between synthetic
chunks and stops delivering once it is set. Cancellation never interrupts the
single underlying HTTP request already in flight.
"""

from __future__ import annotations

from threading import Lock
from typing import Optional


class CancelledError(RuntimeError):
    """Raised when an operation observes a cancellation request."""


class CancellationToken:
    """Thread-safe, idempotent cancellation flag with an optional reason."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._cancelled = False
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._cancelled

    @property
    def reason(self) -> Optional[str]:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation. Later calls keep the first reason."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            self._reason = reason

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if the token is cancelled."""
        if self._cancelled:
            raise CancelledError(self._reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken", "CancelledError"]
