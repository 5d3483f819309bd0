"""Unified Gemini error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``gemini_client.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.gemini_error import GeminiError
from .errors_parts.stream_errors import StreamInProgress, StreamNotFound
from .errors_parts.classification import (
    STREAM_TIMEOUT_CODE,
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
    "STREAM_TIMEOUT_CODE",
    "classify_status",
    "internal_failure",
    "timeout_failure",
    "transport_failure",
    "upstream_failure",
]
