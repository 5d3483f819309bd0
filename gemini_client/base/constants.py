"""Base shared constants for the Gemini client.

Central location to avoid scattering magic strings across modules.

# pragma: allowlist secret
"""
from __future__ import annotations

# Missing credential sentinel
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string, not a real secret

# Query parameter carrying the API key on every request
API_KEY_QUERY_PARAM = "key"

# Client-side endpoint verbs appended as ``/models/{model}:{verb}``
GENERATE_CONTENT = "generateContent"
EMBED_CONTENT = "embedContent"
COUNT_TOKENS = "countTokens"

__all__ = [
    "API_KEY_QUERY_PARAM",
    "COUNT_TOKENS",
    "EMBED_CONTENT",
    "GENERATE_CONTENT",
    "MISSING_API_KEY_ERROR",
]
