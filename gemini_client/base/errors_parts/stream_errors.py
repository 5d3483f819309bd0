"""Poll outcomes raised by stream session queries.

Neither type is a terminal failure: ``StreamInProgress`` means "poll again
later" and ``StreamNotFound`` flags a query against an id that was never
started or has already been stopped.
"""
from __future__ import annotations

from typing import Any


class StreamInProgress(Exception):
    """Raised by a status query while the session has not reached a terminal state."""

    def __init__(self, status: Any) -> None:
        super().__init__(f"stream in progress: {getattr(status, 'value', status)}")
        self.status = status


class StreamNotFound(LookupError):
    """Raised when a session id is unknown to the supervisor."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"stream not found: {session_id}")
        self.session_id = session_id


__all__ = ["StreamInProgress", "StreamNotFound"]
