"""Structured logging context object for the Gemini client.

This module defines :class:`LogContext`, a dataclass used to carry common
fields for logging events (model, request id, stream session id and extra
metadata). It replaces any ambient per-call state: callers thread a context
explicitly through the operations that log.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field, replace
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for Gemini logging events."""

    model: Optional[str] = None
    operation: Optional[str] = None
    request_id: Optional[str] = None
    stream_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}

    def with_stream(self, stream_id: str) -> "LogContext":
        """Return a copy bound to a stream session id."""
        return replace(self, stream_id=stream_id, extra=dict(self.extra))


__all__ = ["LogContext"]
