"""Streaming metrics data structures.

Kept in the streaming package so session bookkeeping stays small.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Collected metrics for a single stream session.

    ``emitted`` counts chunks handed to the callback. Durations are measured
    from session creation with ``time.perf_counter``.
    """

    emitted: int = 0
    time_to_first_chunk_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the finalize log fields; ``emitted`` is reported as ``emitted_count``."""
        return {
            "emitted_count": self.emitted,
            "time_to_first_chunk_ms": self.time_to_first_chunk_ms,
            "total_duration_ms": self.total_duration_ms,
        }


__all__ = ["StreamMetrics"]
