"""Shared fakes for streaming tests."""
from __future__ import annotations

import json
import logging
import threading
from typing import Any, Dict, List, Optional, Tuple

from ...base.errors import GeminiError, upstream_failure
from ...base.models import GeminiResponse


def text_response(text: Optional[str]) -> GeminiResponse:
    parts = [] if text is None else [{"text": text}]
    return GeminiResponse.parse(
        {"candidates": [{"content": {"parts": parts}, "finishReason": "STOP", "index": 0}]}
    )


def upstream_error(status: int, message: str) -> GeminiError:
    return upstream_failure(status, {"error": {"code": status, "message": message}})


class FakeClient:
    """Generation collaborator returning a canned response or raising a canned error.

    When ``gate`` is given, ``generate`` blocks until it is set (or 5 s pass).
    """

    def __init__(
        self,
        text: Optional[str] = None,
        *,
        error: Optional[BaseException] = None,
        gate: Optional[threading.Event] = None,
    ) -> None:
        self.response = text_response(text)
        self.error = error
        self.gate = gate
        self.calls: List[Tuple[str, List[Dict[str, Any]], Dict[str, Any]]] = []

    def generate(self, model, contents, params) -> GeminiResponse:
        self.calls.append((model, contents, params))
        if self.gate is not None:
            self.gate.wait(5)
        if self.error is not None:
            raise self.error
        return self.response


class Recorder:
    """Thread-safe chunk callback recording every delivered chunk."""

    def __init__(self) -> None:
        self.chunks: List[GeminiResponse] = []
        self._lock = threading.Lock()

    def __call__(self, chunk: GeminiResponse) -> None:
        with self._lock:
            self.chunks.append(chunk)

    @property
    def texts(self) -> List[Optional[str]]:
        return [c.text for c in self.chunks]


def event_names(records: List[logging.LogRecord]) -> List[str]:
    """Extract ``event`` names from captured JSON log lines."""
    names = []
    for r in records:
        try:
            payload = json.loads(r.getMessage())
        except ValueError:
            continue
        if isinstance(payload, dict) and "event" in payload:
            names.append(payload["event"])
    return names


def wait_for(predicate, timeout: float = 2.0, interval: float = 0.005) -> bool:
    """Poll ``predicate`` until it is truthy or ``timeout`` seconds pass."""
    import time

    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return bool(predicate())


__all__ = ["FakeClient", "Recorder", "event_names", "text_response", "upstream_error", "wait_for"]
