"""Streaming package public surface.

Exports the pure accumulator, the event types, the per-stream session, the
supervisor owning all sessions, the simulated producer and the polling
controller.
"""

from .accumulator import (
    StreamAccumulator,
    accumulate_chunk,
    build_response_from_accumulator,
    new_accumulator,
)
from .events import ChunkEvent, CompleteEvent, ErrorEvent, StreamEvent, StreamRequest
from .session import ChunkCallback, StreamSession, StreamStatus
from .simulated import chunk_response, chunk_text, run_simulated_stream
from .stream_controller import StreamController
from .streaming_metrics import StreamMetrics
from .supervisor import StreamSupervisor

__all__ = [
    "ChunkCallback",
    "ChunkEvent",
    "CompleteEvent",
    "ErrorEvent",
    "StreamAccumulator",
    "StreamController",
    "StreamEvent",
    "StreamMetrics",
    "StreamRequest",
    "StreamSession",
    "StreamStatus",
    "StreamSupervisor",
    "accumulate_chunk",
    "build_response_from_accumulator",
    "chunk_response",
    "chunk_text",
    "new_accumulator",
    "run_simulated_stream",
]
