"""gemini_client.config.defaults
=============================

Central place for small, stable default values used across the
``gemini_client`` package. These defaults can be overridden via environment
variables, an external configuration file or runtime setters, but provide
sensible fallbacks for local development and tests.

This module intentionally avoids importing from other package modules to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- API ----
GEMINI_DEFAULT_MODEL = "gemini-2.0-flash"
GEMINI_DEFAULT_EMBEDDING_MODEL = "embedding-001"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1"

# ---- HTTP ----
# Receive timeout for a single non-streaming request.
HTTP_TIMEOUT_SECONDS = 30.0

# ---- Simulated streaming ----
# Code points per synthetic chunk.
STREAM_CHUNK_SIZE = 20
# Pause between synthetic chunk deliveries.
STREAM_CHUNK_DELAY_SECONDS = 0.05
# Controller poll cadence while waiting for a terminal state.
STREAM_POLL_INTERVAL_SECONDS = 0.1
# Controller wall-clock budget for one stream.
STREAM_TIMEOUT_MS = 30_000

# ---- Token estimation ----
TOKENS_PER_WORD = 1.3
TOKEN_LIMIT_BUFFER = 50
IMAGE_TOKENS = 260
AUDIO_TOKENS_PER_SECOND = 32
VIDEO_TOKENS_PER_SECOND = 40


__all__ = [
    "GEMINI_DEFAULT_MODEL",
    "GEMINI_DEFAULT_EMBEDDING_MODEL",
    "GEMINI_DEFAULT_BASE_URL",
    "HTTP_TIMEOUT_SECONDS",
    "STREAM_CHUNK_SIZE",
    "STREAM_CHUNK_DELAY_SECONDS",
    "STREAM_POLL_INTERVAL_SECONDS",
    "STREAM_TIMEOUT_MS",
    "TOKENS_PER_WORD",
    "TOKEN_LIMIT_BUFFER",
    "IMAGE_TOKENS",
    "AUDIO_TOKENS_PER_SECOND",
    "VIDEO_TOKENS_PER_SECOND",
]
