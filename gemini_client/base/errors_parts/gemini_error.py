"""
Structured Gemini error exception type.

Every failure surfaced by the client (transport problems, non-success HTTP
statuses, client-side stream timeouts) is represented by a single
`GeminiError` carrying a normalized :class:`ErrorCode`, an HTTP-like numeric
code and the opaque details returned by the upstream service.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .error_code import ErrorCode


@dataclass(eq=False)
class GeminiError(Exception):
    """Represents a structured Gemini error.

    Attributes:
        kind: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        code: HTTP-like status. ``0`` for transport failures, the upstream
            status for non-success responses, ``408`` for stream timeouts.
        details: Opaque diagnostics (raw error body or underlying exception).
    """

    kind: ErrorCode
    message: str
    code: int = 0
    details: Any = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining kind, code, and message."""
        return f"{self.kind.value} ({self.code}): {self.message}"


__all__ = ["GeminiError"]
