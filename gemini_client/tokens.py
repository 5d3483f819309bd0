"""Token counting (API-backed) and offline token estimates."""
from __future__ import annotations

import math
import re
from typing import Optional

from .config import default_model
from .config.defaults import (
    AUDIO_TOKENS_PER_SECOND,
    IMAGE_TOKENS,
    TOKEN_LIMIT_BUFFER,
    TOKENS_PER_WORD,
    VIDEO_TOKENS_PER_SECOND,
)

_WHITESPACE_RE = re.compile(r"\s+")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def count_tokens(text: str, model: Optional[str] = None, *, client=None) -> Optional[int]:
    """Ask the API how many tokens ``text`` uses with ``model``.

    Raises:
        GeminiError: the request failed.
    """
    if client is None:
        from .client import default_client  # local import to avoid cycles

        client = default_client()
    response = client.count_tokens(model or default_model(), {"contents": [{"parts": [{"text": text}]}]})
    raw = response.raw if isinstance(response.raw, dict) else {}
    return raw.get("totalTokens")


def estimate_tokens(text: str) -> int:
    """Rough token estimate: whitespace-separated words times 1.3, rounded half up."""
    words = len(_WHITESPACE_RE.split(text))
    return _round_half_up(words * TOKENS_PER_WORD)


def within_limit(text: str, limit: int, buffer: int = TOKEN_LIMIT_BUFFER) -> bool:
    """Whether the estimate for ``text`` fits in ``limit`` minus ``buffer``."""
    return estimate_tokens(text) <= limit - buffer


def estimate_media_tokens(media_type: str, duration_seconds: Optional[float] = None) -> int:
    """Estimate tokens for an ``"image"``, or for ``"audio"``/``"video"`` of a given duration.

    Raises:
        ValueError: unknown media type, or missing duration for audio/video.
    """
    if media_type == "image":
        return IMAGE_TOKENS
    rates = {"audio": AUDIO_TOKENS_PER_SECOND, "video": VIDEO_TOKENS_PER_SECOND}
    if media_type not in rates:
        raise ValueError(f"unknown media type: {media_type!r}")
    if duration_seconds is None:
        raise ValueError(f"{media_type} estimates need duration_seconds")
    return _round_half_up(duration_seconds * rates[media_type])


__all__ = ["count_tokens", "estimate_media_tokens", "estimate_tokens", "within_limit"]
