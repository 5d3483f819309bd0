"""Per-stream state machine.

States move ``STARTING -> STREAMING -> COMPLETED | ERROR``; a session may also
jump straight from ``STARTING`` to a terminal state. Terminal states absorb
every later event. A re-entrant delivery lock applies events for one session
one at a time in arrival order, callback included; a short-held state lock
guards status, response and error, so queries never wait on a slow callback.
Other sessions proceed independently.
"""
from __future__ import annotations

import logging
import threading
import time
import uuid
from enum import Enum
from typing import Callable, Optional

from ..cancellation import CancellationToken
from ..errors import GeminiError, StreamInProgress
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from ..models import GeminiResponse
from .accumulator import StreamAccumulator, accumulate_chunk, new_accumulator
from .events import ChunkEvent, CompleteEvent, ErrorEvent, StreamEvent, StreamRequest
from .streaming_metrics import StreamMetrics

ChunkCallback = Callable[[GeminiResponse], None]


class StreamStatus(str, Enum):
    """Lifecycle state of a stream session."""

    STARTING = "starting"
    STREAMING = "streaming"
    COMPLETED = "completed"
    ERROR = "error"

    @property
    def terminal(self) -> bool:
        return self in (StreamStatus.COMPLETED, StreamStatus.ERROR)


class StreamSession:
    """State of one in-flight stream.

    Attributes:
        id: Unique hex identifier, never reused.
        request: The request the producer is serving.
        callback: Invoked with every chunk, on the producer's thread.
        accumulator: Fold of every chunk received so far.
        status: Current :class:`StreamStatus`.
        response: Final response, set only once ``COMPLETED``.
        error: Stored failure, set only once ``ERROR``.
        metrics: Emission counters and timings.
        cancellation: Token cancelled when the session is stopped.
    """

    def __init__(
        self,
        request: StreamRequest,
        callback: ChunkCallback,
        *,
        session_id: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.id = session_id or uuid.uuid4().hex
        self.request = request
        self.callback = callback
        self.accumulator: StreamAccumulator = new_accumulator()
        self.status = StreamStatus.STARTING
        self.response: Optional[GeminiResponse] = None
        self.error: Optional[GeminiError] = None
        self.metrics = StreamMetrics()
        self.cancellation = CancellationToken()
        self.ctx = LogContext(model=request.model, operation="stream", stream_id=self.id)
        self._logger = logger or get_logger("streaming.session")
        self._delivery = threading.RLock()
        self._state = threading.Lock()
        self._t0 = time.perf_counter()

    def _elapsed_ms(self) -> float:
        return (time.perf_counter() - self._t0) * 1000.0

    def _dropped(self, kind: str) -> bool:
        log_event(
            self._logger,
            "stream.dropped",
            self.ctx,
            level=logging.DEBUG,
            reason="terminal",
            status=self.status.value,
            event_kind=kind,
        )
        return False

    # Event handlers ------------------------------------------------------
    def on_chunk(self, chunk: GeminiResponse) -> bool:
        """Deliver ``chunk`` to the callback and fold it into the accumulator.

        Returns ``False`` when the session is already terminal. Exceptions
        raised by the callback propagate to the producer, which turns them into
        a terminal error. The callback runs without the state lock held, so
        :meth:`result` never waits on it.
        """
        with self._delivery:
            with self._state:
                if self.status.terminal:
                    return self._dropped("chunk")
            self.callback(chunk)
            with self._state:
                self.accumulator = accumulate_chunk(self.accumulator, chunk)
                self.status = StreamStatus.STREAMING
                self.metrics.emitted += 1
                if self.metrics.time_to_first_chunk_ms is None:
                    self.metrics.time_to_first_chunk_ms = self._elapsed_ms()
                emitted = self.metrics.emitted
            normalized_log_event(
                self._logger,
                "stream.chunk",
                self.ctx,
                phase="stream",
                emitted=emitted,
                level=logging.DEBUG,
                size=len(chunk.text or ""),
            )
            return True

    def on_complete(self, response: GeminiResponse) -> bool:
        """Mark the session completed with the final ``response``."""
        with self._delivery:
            with self._state:
                if self.status.terminal:
                    return self._dropped("complete")
                self.response = response
                self.status = StreamStatus.COMPLETED
                self.metrics.total_duration_ms = self._elapsed_ms()
                metrics = self.metrics.to_dict()
            normalized_log_event(
                self._logger,
                "stream.end",
                self.ctx,
                phase="finalize",
                emitted=metrics["emitted_count"],
                tokens=response.usage,
                **metrics,
            )
            return True

    def on_error(self, error: GeminiError) -> bool:
        """Mark the session failed with ``error``."""
        with self._delivery:
            with self._state:
                if self.status.terminal:
                    return self._dropped("error")
                self.error = error
                self.status = StreamStatus.ERROR
                self.metrics.total_duration_ms = self._elapsed_ms()
                metrics = self.metrics.to_dict()
            normalized_log_event(
                self._logger,
                "stream.error",
                self.ctx,
                phase="finalize",
                emitted=metrics["emitted_count"],
                error_code=error.kind.value,
                level=logging.WARNING,
                status_code=error.code,
                error=error.message,
                **metrics,
            )
            return True

    def apply(self, event: StreamEvent) -> bool:
        """Route ``event`` to the matching handler."""
        if isinstance(event, ChunkEvent):
            return self.on_chunk(event.response)
        if isinstance(event, CompleteEvent):
            return self.on_complete(event.response)
        if isinstance(event, ErrorEvent):
            return self.on_error(event.error)
        raise TypeError(f"unsupported stream event: {event!r}")

    # Query ---------------------------------------------------------------
    def result(self) -> GeminiResponse:
        """Return the final response, raise the stored error, or report progress.

        Raises:
            GeminiError: the stored failure when the session ended in ``ERROR``.
            StreamInProgress: when the session has not reached a terminal state.
        """
        with self._state:
            if self.status is StreamStatus.COMPLETED and self.response is not None:
                return self.response
            if self.status is StreamStatus.ERROR and self.error is not None:
                raise self.error
            raise StreamInProgress(self.status)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"StreamSession(id={self.id!r}, status={self.status.value!r}, emitted={self.metrics.emitted})"


__all__ = ["ChunkCallback", "StreamSession", "StreamStatus"]
