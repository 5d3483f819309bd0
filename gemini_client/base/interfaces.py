"""Capability protocols shared between the client and the streaming layer."""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, runtime_checkable

from .models import GeminiResponse


@runtime_checkable
class SupportsGenerate(Protocol):
    """Anything able to perform one non-streaming generation request.

    Implementations return a parsed :class:`GeminiResponse` and raise
    :class:`~gemini_client.base.errors.GeminiError` on failure.
    """

    def generate(
        self, model: str, contents: List[Dict[str, Any]], params: Dict[str, Any]
    ) -> GeminiResponse:  # pragma: no cover - interface
        """Generate a response for ``contents`` with request ``params``."""
        ...


__all__ = ["SupportsGenerate"]
