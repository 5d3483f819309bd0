"""Owner of all in-flight stream sessions.

The session table is guarded by a lock held only for lookups, inserts and
removals; event application happens under each session's own lock, so a slow
callback only delays its own session. Events addressed to ids that were never
started or have been stopped are dropped and logged at debug level.
"""
from __future__ import annotations

import functools
import logging
import threading
from typing import Callable, Dict, List, Optional

from ...config.defaults import STREAM_CHUNK_DELAY_SECONDS, STREAM_CHUNK_SIZE
from ..errors import StreamNotFound
from ..interfaces import SupportsGenerate
from ..logging import get_logger, log_event
from ..models import GeminiResponse
from .events import StreamEvent, StreamRequest
from .session import ChunkCallback, StreamSession, StreamStatus
from .simulated import run_simulated_stream

Producer = Callable[..., None]


class StreamSupervisor:
    """Start, track, query and stop stream sessions.

    Parameters
    ----------
    client:
        Collaborator performing the underlying generation call.
    producer:
        Callable run on the worker thread; receives ``client``, ``request``,
        an ``emit`` callable, the session's cancellation token and keyword
        options. Defaults to :func:`run_simulated_stream`.
    chunk_size / chunk_delay:
        Forwarded to the producer.
    """

    def __init__(
        self,
        client: SupportsGenerate,
        *,
        producer: Producer = run_simulated_stream,
        chunk_size: int = STREAM_CHUNK_SIZE,
        chunk_delay: float = STREAM_CHUNK_DELAY_SECONDS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._client = client
        self._producer = producer
        self._chunk_size = chunk_size
        self._chunk_delay = chunk_delay
        self._logger = logger or get_logger("streaming.supervisor")
        self._sessions: Dict[str, StreamSession] = {}
        self._lock = threading.Lock()

    def start(self, request: StreamRequest, callback: ChunkCallback) -> str:
        """Register a new session and launch its producer on a daemon thread."""
        session = StreamSession(request, callback, logger=self._logger)
        with self._lock:
            self._sessions[session.id] = session
        log_event(self._logger, "stream.start", session.ctx, chunk_size=self._chunk_size)
        worker = threading.Thread(
            target=self._producer,
            args=(self._client, request, functools.partial(self.dispatch, session.id), session.cancellation),
            kwargs={
                "chunk_size": self._chunk_size,
                "chunk_delay": self._chunk_delay,
                "logger": self._logger,
                "ctx": session.ctx,
            },
            name=f"gemini-stream-{session.id[:8]}",
            daemon=True,
        )
        worker.start()
        return session.id

    def _get(self, session_id: str) -> Optional[StreamSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def dispatch(self, session_id: str, event: StreamEvent) -> bool:
        """Apply ``event`` to its session; returns whether it was applied."""
        session = self._get(session_id)
        if session is None:
            log_event(
                self._logger,
                "stream.dropped",
                level=logging.DEBUG,
                stream_id=session_id,
                reason="unknown_session",
                event_kind=type(event).__name__,
            )
            return False
        return session.apply(event)

    def query(self, session_id: str) -> GeminiResponse:
        """Poll a session.

        Returns the final response once completed.

        Raises:
            StreamNotFound: unknown or stopped ``session_id``.
            StreamInProgress: the session has not finished yet.
            GeminiError: the session ended with this failure.
        """
        session = self._get(session_id)
        if session is None:
            raise StreamNotFound(session_id)
        return session.result()

    def status(self, session_id: str) -> StreamStatus:
        """Return the current status of a session."""
        session = self._get(session_id)
        if session is None:
            raise StreamNotFound(session_id)
        return session.status

    def session(self, session_id: str) -> StreamSession:
        """Return the live session object (for inspection)."""
        session = self._get(session_id)
        if session is None:
            raise StreamNotFound(session_id)
        return session

    def stop(self, session_id: str, reason: str = "stopped") -> bool:
        """Remove a session and cancel its producer.

        Safe for unknown ids; returns whether a session was removed.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.cancellation.cancel(reason)
        log_event(
            self._logger,
            "stream.stopped",
            session.ctx,
            level=logging.DEBUG,
            reason=reason,
            status=session.status.value,
        )
        return True

    def active_sessions(self) -> List[str]:
        """Return the ids of every registered session."""
        with self._lock:
            return list(self._sessions)


__all__ = ["Producer", "StreamSupervisor"]
