"""Secret redaction helpers for request/response logging.

The Gemini API authenticates with an API key passed as the ``key`` query
parameter, so URLs, query mappings and (occasionally) JSON bodies may carry
the secret. Everything the HTTP client logs goes through these helpers first.

Masking keeps the first five characters of a key and replaces the rest with
``*****``; short or non-string values are fully masked.
"""
from __future__ import annotations

import json
import re
from typing import Any, Mapping

MASK = "*****"
_VISIBLE_PREFIX = 5

_SENSITIVE_KEYS = frozenset(("key", "api_key"))
_QUERY_KEY_RE = re.compile(r"([?&]key=)([^&#]+)")
_BARE_KEY_RE = re.compile(r"AIzaSy[A-Za-z0-9_-]{33}")
_JSON_KEY_RE = re.compile(r'"(key|api_key)"\s*:\s*"([^"]+)"')


def mask_api_key(value: Any) -> str:
    """Mask an API key, keeping only its first five characters."""
    if not isinstance(value, str) or len(value) <= _VISIBLE_PREFIX:
        return MASK
    return f"{value[:_VISIBLE_PREFIX]}{MASK}"


def _mask_match(match: re.Match) -> str:
    return mask_api_key(match.group(0))


def sanitize_text(text: str) -> str:
    """Mask bare Google API keys appearing anywhere in ``text``."""
    return _BARE_KEY_RE.sub(_mask_match, text)


def sanitize_url(url: Any) -> Any:
    """Mask ``key=`` query values and bare keys in a URL string."""
    if not isinstance(url, str):
        return url
    url = _QUERY_KEY_RE.sub(lambda m: f"{m.group(1)}{mask_api_key(m.group(2))}", url)
    return sanitize_text(url)


def sanitize_query(params: Any) -> Any:
    """Mask the ``key`` entry of a query parameter mapping."""
    if not isinstance(params, Mapping):
        return params
    return {k: (mask_api_key(v) if k in _SENSITIVE_KEYS else v) for k, v in params.items()}


def sanitize_mapping(data: Mapping[str, Any]) -> dict:
    """Recursively mask ``key``/``api_key`` entries in nested mappings and lists."""
    out = {}
    for k, v in data.items():
        if k in _SENSITIVE_KEYS and isinstance(v, str):
            out[k] = mask_api_key(v)
        elif isinstance(v, Mapping):
            out[k] = sanitize_mapping(v)
        elif isinstance(v, list):
            out[k] = [sanitize_mapping(item) if isinstance(item, Mapping) else item for item in v]
        else:
            out[k] = v
    return out


def sanitize_body(body: Any) -> Any:
    """Return a log-safe copy of a request or response body.

    Mappings are sanitized recursively. Strings holding a JSON object are
    decoded, sanitized and re-encoded; any string additionally has bare keys
    and ``"key": "..."`` pairs masked. Other values are returned unchanged.
    """
    if isinstance(body, Mapping):
        return sanitize_mapping(body)
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if not isinstance(body, str):
        return body
    try:
        decoded = json.loads(body)
    except ValueError:
        decoded = None
    if isinstance(decoded, dict):
        body = json.dumps(sanitize_mapping(decoded), ensure_ascii=False)
    body = sanitize_text(body)
    return _JSON_KEY_RE.sub(lambda m: f'"{m.group(1)}":"{mask_api_key(m.group(2))}"', body)


__all__ = [
    "MASK",
    "mask_api_key",
    "sanitize_text",
    "sanitize_url",
    "sanitize_query",
    "sanitize_mapping",
    "sanitize_body",
]
