"""
Normalized Gemini error codes (taxonomy).

Defines the `ErrorCode` enumeration attached to every :class:`GeminiError`.
Values are lowercase snake_case and are considered a stable public contract
for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    TRANSPORT = "transport"
    UPSTREAM = "upstream"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"


__all__ = ["ErrorCode"]
