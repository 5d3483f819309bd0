"""Auxiliary logging helpers (formatters, context, redaction) used by base.logging."""

from .json_formatter import JsonFormatter, ISO
from .logging_context import LogContext
from .redaction import (
    mask_api_key,
    sanitize_body,
    sanitize_query,
    sanitize_url,
)

__all__ = [
    "JsonFormatter",
    "ISO",
    "LogContext",
    "mask_api_key",
    "sanitize_body",
    "sanitize_query",
    "sanitize_url",
]
