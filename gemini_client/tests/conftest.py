"""Pytest configuration for the Gemini client test suite.

Every test runs offline: credentials come from ``monkeypatch`` and HTTP goes
through ``httpx.MockTransport``. Process-wide state (runtime config, the
default client, pooled HTTP clients) is reset around each test.
"""

from __future__ import annotations

from typing import Callable, Iterator, Optional, Tuple

import httpx
import pytest

from gemini_client.base.http import close_all_clients
from gemini_client.client import GeminiClient, reset_default_client
from gemini_client.config import reset_runtime_config
from gemini_client.tests.helpers import TEST_KEY, RecordingTransport

_ENV_VARS = (
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "GEMINI_MODEL",
    "GEMINI_EMBEDDING_MODEL",
    "GEMINI_BASE_URL",
    "GEMINI_CONFIG_FILE",
    "GEMINI_LOG_LEVEL",
    "GEMINI_TIMEOUT_HTTP_SECONDS",
    "GEMINI_STREAM_TIMEOUT_MS",
    "GEMINI_STREAM_POLL_SECONDS",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Clear env-driven configuration and runtime overrides for each test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # A developer's real .env must never leak into tests.
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_runtime_config()
    reset_default_client()
    yield
    reset_runtime_config()
    reset_default_client()
    close_all_clients()


@pytest.fixture()
def make_client() -> Callable[..., Tuple[GeminiClient, RecordingTransport]]:
    """Factory returning ``(client, transport)`` wired to a mock responder."""

    def _make(
        responder: Callable[[httpx.Request], httpx.Response],
        api_key: Optional[str] = TEST_KEY,
    ) -> Tuple[GeminiClient, RecordingTransport]:
        transport = RecordingTransport(responder)
        http = httpx.Client(transport=httpx.MockTransport(transport))
        return GeminiClient(api_key=api_key, http_client=http), transport

    return _make
