"""
Error classification helpers and constructors for :class:`GeminiError`.

Maps upstream HTTP statuses to normalized :class:`ErrorCode` values and builds
the three failure shapes the client produces: transport failures, upstream
(non-success status) failures and client-side timeouts.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping

from .error_code import ErrorCode
from .gemini_error import GeminiError


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.UNAVAILABLE,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

STREAM_TIMEOUT_CODE = 408


def classify_status(status: int) -> ErrorCode:
    """Classify an HTTP status into a normalized :class:`ErrorCode`.

    Unknown statuses fall back to ``UPSTREAM``.
    """
    return _HTTP_STATUS_MAP.get(status, ErrorCode.UPSTREAM)


def _upstream_message(body: Any) -> str:
    if isinstance(body, Mapping):
        err = body.get("error")
        if isinstance(err, Mapping):
            msg = err.get("message")
            if isinstance(msg, str) and msg:
                return msg
    return "Unknown error"


def upstream_failure(status: int, body: Any) -> GeminiError:
    """Build the error for a non-success HTTP response.

    The message is read from ``body["error"]["message"]`` when present and the
    untouched body is kept as ``details``.
    """
    return GeminiError(
        kind=classify_status(status),
        message=_upstream_message(body),
        code=status,
        details=body,
    )


def transport_failure(message: str = "Request failed", details: Any = None) -> GeminiError:
    """Build the error for a request that never produced an HTTP response."""
    return GeminiError(kind=ErrorCode.TRANSPORT, message=message, code=0, details=details)


def timeout_failure(message: str = "Streaming timed out") -> GeminiError:
    """Build the controller-side stream timeout error (code 408, no details)."""
    return GeminiError(kind=ErrorCode.TIMEOUT, message=message, code=STREAM_TIMEOUT_CODE, details=None)


def internal_failure(exc: BaseException) -> GeminiError:
    """Wrap an unexpected exception raised inside a stream worker."""
    return GeminiError(
        kind=ErrorCode.INTERNAL,
        message=f"{exc.__class__.__name__}: {exc}",
        code=0,
        details=exc,
    )


__all__ = [
    "classify_status",
    "upstream_failure",
    "transport_failure",
    "timeout_failure",
    "internal_failure",
    "STREAM_TIMEOUT_CODE",
    "_HTTP_STATUS_MAP",
]
