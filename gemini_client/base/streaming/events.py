"""Events delivered by a stream producer to its supervisor.

A producer emits zero or more :class:`ChunkEvent` objects followed by exactly
one terminal event (:class:`CompleteEvent` or :class:`ErrorEvent`).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from ..errors import GeminiError
from ..models import GeminiResponse


@dataclass(frozen=True)
class StreamRequest:
    """Everything a producer needs to issue the underlying generation call."""

    model: str
    contents: List[Dict[str, Any]]
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ChunkEvent:
    """One partial response."""

    response: GeminiResponse


@dataclass(frozen=True)
class CompleteEvent:
    """Successful end of stream carrying the final response."""

    response: GeminiResponse


@dataclass(frozen=True)
class ErrorEvent:
    """Failed end of stream."""

    error: GeminiError


StreamEvent = Union[ChunkEvent, CompleteEvent, ErrorEvent]

__all__ = ["ChunkEvent", "CompleteEvent", "ErrorEvent", "StreamEvent", "StreamRequest"]
