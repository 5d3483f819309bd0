"""Pure accumulation of streamed chunks into a final response.

``accumulate_chunk`` never mutates its input: it returns a new
:class:`StreamAccumulator`, so a session can swap its accumulator under its
own lock and callers can keep older snapshots.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..models import GeminiResponse


@dataclass(frozen=True)
class StreamAccumulator:
    """Running totals for one stream.

    Attributes:
        text: Concatenation of every folded chunk's text.
        parts: Concatenation of every folded chunk's parts.
        raw_chunks: One raw payload per folded chunk, in arrival order.
    """

    text: str = ""
    parts: List[Dict[str, Any]] = field(default_factory=list)
    raw_chunks: List[Any] = field(default_factory=list)


def new_accumulator() -> StreamAccumulator:
    """Return an empty accumulator."""
    return StreamAccumulator()


def accumulate_chunk(acc: StreamAccumulator, chunk: GeminiResponse) -> StreamAccumulator:
    """Fold ``chunk`` into ``acc`` and return the new accumulator."""
    return StreamAccumulator(
        text=acc.text + (chunk.text or ""),
        parts=[*acc.parts, *(chunk.parts or [])],
        raw_chunks=[*acc.raw_chunks, chunk.raw],
    )


def build_response_from_accumulator(acc: StreamAccumulator) -> GeminiResponse:
    """Build a complete response from an accumulator.

    The raw payload is a synthetic single-candidate envelope finished with
    ``STOP`` so it can be inspected like a real API response.
    """
    parts = list(acc.parts)
    return GeminiResponse(
        text=acc.text,
        parts=parts,
        raw={"candidates": [{"content": {"parts": parts}, "finishReason": "STOP", "index": 0}]},
        candidate_index=0,
        finish_reason="STOP",
    )


__all__ = [
    "StreamAccumulator",
    "accumulate_chunk",
    "build_response_from_accumulator",
    "new_accumulator",
]
