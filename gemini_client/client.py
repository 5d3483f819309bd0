"""HTTP client for the Gemini ``generativelanguage`` API.

Issues JSON POSTs against ``{base_url}/models/{model}:{verb}`` with the API key
as the ``key`` query parameter, parses successful bodies into
:class:`GeminiResponse` and turns everything else into :class:`GeminiError`.
No retries are attempted.

Only sanitized URLs and bodies are ever logged.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

import httpx

from .base.constants import (
    API_KEY_QUERY_PARAM,
    COUNT_TOKENS,
    EMBED_CONTENT,
    GENERATE_CONTENT,
    MISSING_API_KEY_ERROR,
)
from .base.errors import ErrorCode, GeminiError, transport_failure, upstream_failure
from .base.http import get_httpx_client
from .base.log_support import sanitize_body, sanitize_url
from .base.logging import LogContext, get_logger, log_event, normalized_log_event
from .base.models import GeminiResponse
from .config import api_key as configured_api_key
from .config import get_config


def _decode_body(response: httpx.Response) -> Any:
    """Return the JSON body, or the raw text when it is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text


class GeminiClient:
    """Synchronous Gemini API client.

    Implements :class:`~gemini_client.base.interfaces.SupportsGenerate`.

    Args:
        api_key: Explicit key; when omitted the configured cascade is consulted
            on every request (see :func:`gemini_client.config.api_key`).
        base_url: API root; defaults to the configured ``base_url``.
        http_client: Optional ``httpx.Client`` (tests pass one backed by
            ``httpx.MockTransport``); defaults to the shared pool.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._api_key = api_key
        self.base_url = str(get_config({"base_url": base_url})["base_url"]).rstrip("/")
        self._http_client = http_client
        self._logger = logger or get_logger("client")

    @property
    def api_key(self) -> Optional[str]:
        """Key used for the next request."""
        return self._api_key or configured_api_key()

    def _http(self) -> httpx.Client:
        return self._http_client or get_httpx_client(self.base_url, "gemini")

    def _post(self, verb: str, model: str, params: Dict[str, Any]) -> GeminiResponse:
        """POST ``params`` to ``/models/{model}:{verb}`` and parse the result."""
        ctx = LogContext(model=model, operation=verb, request_id=uuid.uuid4().hex[:12])
        key = self.api_key
        if not key:
            log_event(self._logger, "client.error", ctx, level=logging.WARNING, error=MISSING_API_KEY_ERROR)
            raise GeminiError(ErrorCode.AUTH, "Gemini API key is not configured", code=0)

        url = f"{self.base_url}/models/{model}:{verb}"
        log_event(
            self._logger,
            "client.request",
            ctx,
            level=logging.DEBUG,
            url=sanitize_url(f"{url}?{API_KEY_QUERY_PARAM}={key}"),
            body=sanitize_body(params),
        )
        try:
            response = self._http().post(url, params={API_KEY_QUERY_PARAM: key}, json=params)
        except httpx.HTTPError as exc:
            normalized_log_event(
                self._logger,
                "client.error",
                ctx,
                phase="request",
                error_code=ErrorCode.TRANSPORT.value,
                level=logging.WARNING,
                error=sanitize_body(str(exc)),
            )
            raise transport_failure(f"Request failed: {exc.__class__.__name__}", details=exc) from exc

        body = _decode_body(response)
        if response.status_code == 200:
            parsed = GeminiResponse.parse(body)
            normalized_log_event(
                self._logger,
                "client.response",
                ctx,
                phase="response",
                tokens=parsed.usage,
                status=response.status_code,
                finish_reason=parsed.finish_reason,
            )
            return parsed

        err = upstream_failure(response.status_code, body)
        normalized_log_event(
            self._logger,
            "client.error",
            ctx,
            phase="response",
            error_code=err.kind.value,
            level=logging.WARNING,
            status=response.status_code,
            error=err.message,
            body=sanitize_body(body),
        )
        raise err

    def generate_content(self, model: str, params: Dict[str, Any]) -> GeminiResponse:
        """Call ``generateContent``; ``params`` must already hold ``contents``."""
        return self._post(GENERATE_CONTENT, model, params)

    def embed_content(self, model: str, params: Dict[str, Any]) -> GeminiResponse:
        """Call ``embedContent``; the vector is under ``raw["embedding"]["values"]``."""
        return self._post(EMBED_CONTENT, model, params)

    def count_tokens(self, model: str, params: Dict[str, Any]) -> GeminiResponse:
        """Call ``countTokens``; the count is under ``raw["totalTokens"]``."""
        return self._post(COUNT_TOKENS, model, params)

    def generate(
        self, model: str, contents: List[Dict[str, Any]], params: Dict[str, Any]
    ) -> GeminiResponse:
        """Generate content for ``contents`` merged into ``params``."""
        return self.generate_content(model, {**params, "contents": contents})


_DEFAULT_CLIENT: Optional[GeminiClient] = None


def default_client() -> GeminiClient:
    """Return the process-wide client built from configuration."""
    global _DEFAULT_CLIENT  # noqa: PLW0603 - documented module singleton
    if _DEFAULT_CLIENT is None:
        _DEFAULT_CLIENT = GeminiClient()
    return _DEFAULT_CLIENT


def reset_default_client() -> None:
    """Forget the process-wide client (tests; after changing ``base_url``)."""
    global _DEFAULT_CLIENT  # noqa: PLW0603 - documented module singleton
    _DEFAULT_CLIENT = None


__all__ = ["GeminiClient", "default_client", "reset_default_client"]
