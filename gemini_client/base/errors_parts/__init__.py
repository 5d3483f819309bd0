"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `gemini_client.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .gemini_error import GeminiError
from .stream_errors import StreamInProgress, StreamNotFound
from .classification import (
    classify_status,
    internal_failure,
    timeout_failure,
    transport_failure,
    upstream_failure,
)

__all__ = [
    "ErrorCode",
    "GeminiError",
    "StreamInProgress",
    "StreamNotFound",
    "classify_status",
    "internal_failure",
    "timeout_failure",
    "transport_failure",
    "upstream_failure",
]
