"""Unified timeout values for the Gemini client.

Centralizes the HTTP request timeout and the streaming controller's wall-clock
budget and poll cadence so no module hard-codes its own numbers.

Supported environment variables (all optional, positive numbers only):
    GEMINI_TIMEOUT_HTTP_SECONDS
    GEMINI_STREAM_TIMEOUT_MS
    GEMINI_STREAM_POLL_SECONDS

The configuration is cached per process and recomputed only when one of these
variables changes, which keeps access side-effect free for deterministic tests.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from ..config.defaults import (
    HTTP_TIMEOUT_SECONDS,
    STREAM_POLL_INTERVAL_SECONDS,
    STREAM_TIMEOUT_MS,
)

_ENV_VARS = (
    "GEMINI_TIMEOUT_HTTP_SECONDS",
    "GEMINI_STREAM_TIMEOUT_MS",
    "GEMINI_STREAM_POLL_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values.

    Attributes:
        http_timeout_seconds: Timeout for one non-streaming HTTP request.
        stream_timeout_ms: Default controller budget for a whole stream.
        poll_interval_seconds: Sleep between controller status polls.
    """

    http_timeout_seconds: float = HTTP_TIMEOUT_SECONDS
    stream_timeout_ms: int = STREAM_TIMEOUT_MS
    poll_interval_seconds: float = STREAM_POLL_INTERVAL_SECONDS


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float, else ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_VARS)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float("GEMINI_TIMEOUT_HTTP_SECONDS", HTTP_TIMEOUT_SECONDS),
        stream_timeout_ms=int(_parse_env_float("GEMINI_STREAM_TIMEOUT_MS", STREAM_TIMEOUT_MS)),
        poll_interval_seconds=_parse_env_float("GEMINI_STREAM_POLL_SECONDS", STREAM_POLL_INTERVAL_SECONDS),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
