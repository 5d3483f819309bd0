"""Polling completion contract for streamed generation.

``StreamController.stream_content`` starts a supervised session, then sleeps
one poll interval at a time and queries the supervisor until the session
completes, fails or the wall-clock budget runs out. Every exit path stops the
session, so a timed-out producer delivers nothing further.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from ...config import default_model
from ...features.content import content_from_text, prepare_params
from ...features.tools import add_tools_to_params
from ..errors import StreamInProgress, timeout_failure
from ..interfaces import SupportsGenerate
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import GeminiResponse
from ..timeouts import get_timeout_config
from .events import StreamRequest
from .session import ChunkCallback
from .supervisor import StreamSupervisor


class StreamController:
    """Blocking facade over :class:`StreamSupervisor`.

    Parameters
    ----------
    client:
        Generation collaborator; defaults to the process-wide client.
    supervisor:
        Existing supervisor to reuse; one is built around ``client`` otherwise.
    timeout_ms / poll_interval:
        Defaults for every call; fall back to :func:`get_timeout_config`.
    sleep / clock:
        Injectable for tests.
    """

    def __init__(
        self,
        client: Optional[SupportsGenerate] = None,
        *,
        supervisor: Optional[StreamSupervisor] = None,
        timeout_ms: Optional[int] = None,
        poll_interval: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        **supervisor_options: Any,
    ) -> None:
        if supervisor is None:
            if client is None:
                from ...client import default_client  # local import to avoid cycles

                client = default_client()
            supervisor = StreamSupervisor(client, **supervisor_options)
        self.supervisor = supervisor
        cfg = get_timeout_config()
        self._timeout_ms = timeout_ms if timeout_ms is not None else cfg.stream_timeout_ms
        self._poll_interval = poll_interval if poll_interval is not None else cfg.poll_interval_seconds
        self._sleep = sleep
        self._clock = clock
        self._logger = get_logger("streaming.controller")

    @staticmethod
    def build_request(
        prompt: Union[str, Sequence[str]],
        *,
        model: Optional[str] = None,
        tools: Optional[List[Dict[str, Any]]] = None,
        **options: Any,
    ) -> StreamRequest:
        """Translate a prompt and keyword options into a :class:`StreamRequest`."""
        params = prepare_params(**options)
        if tools:
            params = add_tools_to_params(params, tools)
        return StreamRequest(
            model=model or default_model(),
            contents=[content_from_text(prompt)],
            params=params,
        )

    def stream_content(
        self,
        prompt: Union[str, Sequence[str]],
        callback: ChunkCallback,
        *,
        timeout_ms: Optional[int] = None,
        poll_interval: Optional[float] = None,
        **options: Any,
    ) -> GeminiResponse:
        """Stream a generation, calling ``callback`` with every chunk.

        Returns the final response of the underlying generation call.

        Raises:
            GeminiError: the failure reported by the session, unchanged, or a
                ``TIMEOUT`` error with code 408 when ``timeout_ms`` elapses first.
            pydantic.ValidationError: invalid generation options.
        """
        request = self.build_request(prompt, **options)
        budget_ms = self._timeout_ms if timeout_ms is None else timeout_ms
        interval = self._poll_interval if poll_interval is None else poll_interval

        session_id = self.supervisor.start(request, callback)
        deadline = self._clock() + budget_ms / 1000.0
        try:
            while True:
                self._sleep(interval)
                # An expired budget wins over whatever the session reached meanwhile.
                if self._clock() >= deadline:
                    normalized_log_event(
                        self._logger,
                        "stream.timeout",
                        LogContext(model=request.model, operation="stream", stream_id=session_id),
                        phase="poll",
                        error_code="timeout",
                        level=logging.WARNING,
                        timeout_ms=budget_ms,
                    )
                    raise timeout_failure()
                try:
                    return self.supervisor.query(session_id)
                except StreamInProgress:
                    continue
        finally:
            self.supervisor.stop(session_id)


__all__ = ["StreamController"]
