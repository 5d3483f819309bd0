"""Simulated streaming producer.

The Gemini ``generateContent`` endpoint is called once (non-streaming) and the
resulting text is replayed as fixed-size chunks with a short delay between
them. This module is the single seam to replace with a real
``streamGenerateContent`` producer: anything that emits chunk events followed by
exactly one terminal event through ``emit`` fits.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from ...config.defaults import STREAM_CHUNK_DELAY_SECONDS, STREAM_CHUNK_SIZE
from ..cancellation import CancellationToken, CancelledError
from ..errors import GeminiError, internal_failure
from ..interfaces import SupportsGenerate
from ..logging import LogContext, get_logger, log_event
from ..models import GeminiResponse
from .events import ChunkEvent, CompleteEvent, ErrorEvent, StreamEvent, StreamRequest

Emit = Callable[[StreamEvent], object]


def chunk_text(text: Optional[str], size: int = STREAM_CHUNK_SIZE) -> List[str]:
    """Split ``text`` into code-point slices of at most ``size`` characters.

    Empty or missing text yields no chunks. The last slice may be shorter.
    """
    if size < 1:
        raise ValueError("chunk size must be positive")
    if not text:
        return []
    return [text[i : i + size] for i in range(0, len(text), size)]


def chunk_response(text: str) -> GeminiResponse:
    """Build the partial response delivered for one chunk of text."""
    return GeminiResponse(text=text, parts=[{"text": text}], raw={"chunk": True})


def run_simulated_stream(
    client: SupportsGenerate,
    request: StreamRequest,
    emit: Emit,
    token: CancellationToken,
    *,
    chunk_size: int = STREAM_CHUNK_SIZE,
    chunk_delay: float = STREAM_CHUNK_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
    logger: Optional[logging.Logger] = None,
    ctx: Optional[LogContext] = None,
) -> None:
    """Produce one stream worth of events for ``request``.

    Emits a :class:`ChunkEvent` per slice of the response text (each followed
    by ``chunk_delay`` seconds of sleep), then a :class:`CompleteEvent` carrying
    the original response. A :class:`GeminiError` from ``client`` becomes an
    :class:`ErrorEvent` unchanged; any other exception (including one raised by
    the session callback) becomes an ``INTERNAL`` error. Once ``token`` is
    cancelled nothing further is emitted.
    """
    log = logger or get_logger("streaming.simulated")
    try:
        response = client.generate(request.model, request.contents, request.params)
        for piece in chunk_text(response.text, chunk_size):
            token.raise_if_cancelled()
            emit(ChunkEvent(chunk_response(piece)))
            sleep(chunk_delay)
        token.raise_if_cancelled()
        emit(CompleteEvent(response))
    except CancelledError:
        log_event(log, "stream.cancelled", ctx, level=logging.DEBUG, reason=token.reason)
    except GeminiError as err:
        if not token.cancelled:
            emit(ErrorEvent(err))
    except Exception as exc:  # noqa: BLE001 - producer must always terminate the session
        log.exception("stream producer failed")
        if not token.cancelled:
            emit(ErrorEvent(internal_failure(exc)))


__all__ = ["chunk_response", "chunk_text", "run_simulated_stream"]
