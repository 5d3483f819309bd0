"""Gemini API client library.

Convenience functions below cover the common cases; the building blocks live
in :mod:`gemini_client.client`, :mod:`gemini_client.features` and
:mod:`gemini_client.base.streaming`.

Example::

    import gemini_client

    response = gemini_client.generate_content("Explain photosynthesis", temperature=0.2)
    print(response.text)

    final = gemini_client.stream_content("Write a haiku", lambda chunk: print(chunk.text, end=""))
"""
from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .base.dto import FunctionCallDTO
from .base.errors import ErrorCode, GeminiError
from .base.interfaces import SupportsGenerate
from .base.models import GeminiResponse
from .base.streaming import ChunkCallback, StreamController
from .client import GeminiClient, default_client
from .config import default_model
from .features import embeddings as _embeddings
from .features import images as _images
from .features import tools as _tools
from .features.content import content_from_text, generate, prepare_params
from .tokens import count_tokens

__version__ = "0.1.0"

_CONTROLLER: Optional[StreamController] = None
_CONTROLLER_LOCK = threading.Lock()


def _build_params(tools: Optional[List[Dict[str, Any]]], options: Dict[str, Any]) -> Dict[str, Any]:
    params = prepare_params(**options)
    if tools:
        params = _tools.add_tools_to_params(params, tools)
    return params


def generate_content(
    prompt: Union[str, Sequence[str]],
    *,
    model: Optional[str] = None,
    tools: Optional[List[Dict[str, Any]]] = None,
    client: Optional[SupportsGenerate] = None,
    **options: Any,
) -> GeminiResponse:
    """Generate a response for ``prompt``.

    ``options`` are generation options (``temperature``, ``top_p``, ``top_k``,
    ``max_tokens``, ``structured_output``, ``system_instruction``,
    ``safety_settings``); ``tools`` are declarations from :func:`create_tool`.

    Raises:
        GeminiError: the request failed.
    """
    params = _build_params(tools, options)
    return generate(model or default_model(), [content_from_text(prompt)], params, client=client)


def generate_with_images(
    text: str,
    image_paths: Sequence[Union[str, Path]],
    *,
    model: Optional[str] = None,
    client: Optional[SupportsGenerate] = None,
    **options: Any,
) -> GeminiResponse:
    """Generate a response for ``text`` together with local image files."""
    parts = [_images.image_part_from_file(p) for p in image_paths]
    content = _images.create_multimodal_content(text, parts)
    return generate(model or default_model(), [content], prepare_params(**options), client=client)


def create_tool(
    name: str,
    description: str,
    parameters: Dict[str, Any],
    required_parameters: Optional[Sequence[str]] = None,
) -> Dict[str, Any]:
    """Declare a function the model may call (see :func:`features.tools.define_tool`)."""
    return _tools.define_tool(name, description, parameters, required_parameters)


def extract_function_calls(response: GeminiResponse) -> List[FunctionCallDTO]:
    """Return the function calls requested in ``response``."""
    return _tools.extract_function_calls(response)


def _default_controller() -> StreamController:
    global _CONTROLLER  # noqa: PLW0603 - documented module singleton
    with _CONTROLLER_LOCK:
        if _CONTROLLER is None:
            _CONTROLLER = StreamController(default_client())
        return _CONTROLLER


def stream_content(
    prompt: Union[str, Sequence[str]],
    callback: ChunkCallback,
    *,
    client: Optional[SupportsGenerate] = None,
    **options: Any,
) -> GeminiResponse:
    """Stream a generation, calling ``callback`` with each chunk; returns the final response.

    Accepts the generation options of :func:`generate_content` plus ``model``,
    ``tools``, ``timeout_ms`` and ``poll_interval``.

    Raises:
        GeminiError: the generation failed, or the stream timed out (code 408).
    """
    controller = StreamController(client) if client is not None else _default_controller()
    return controller.stream_content(prompt, callback, **options)


def embed_text(
    text: str,
    *,
    model: Optional[str] = None,
    task_type: Union[_embeddings.TaskType, str, None] = None,
    client=None,
) -> Optional[List[float]]:
    """Return the embedding vector of ``text``."""
    return _embeddings.embed_text(text, model, task_type, client=client)


def text_similarity(text1: str, text2: str, **options: Any) -> float:
    """Cosine similarity between the embeddings of two texts."""
    first = embed_text(text1, **options)
    second = embed_text(text2, **options)
    return _embeddings.cosine_similarity(first or [], second or [])


def batch_embed_text(
    texts: Sequence[str],
    *,
    model: Optional[str] = None,
    task_type: Union[_embeddings.TaskType, str, None] = None,
    client=None,
) -> List[Optional[List[float]]]:
    """Embed every text in order; the first failure is raised."""
    return _embeddings.batch_embed(texts, model, task_type, client=client)


__all__ = [
    "ErrorCode",
    "FunctionCallDTO",
    "GeminiClient",
    "GeminiError",
    "GeminiResponse",
    "StreamController",
    "__version__",
    "batch_embed_text",
    "count_tokens",
    "create_tool",
    "embed_text",
    "extract_function_calls",
    "generate_content",
    "generate_with_images",
    "stream_content",
    "text_similarity",
]
