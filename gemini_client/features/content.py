"""Content and request-parameter builders for text generation."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Union

from ..base.dto import GenerationOptions
from ..base.interfaces import SupportsGenerate
from ..base.models import GeminiResponse

TextInput = Union[str, Sequence[str]]

# Option name -> generationConfig key
_GENERATION_CONFIG_KEYS = (
    ("temperature", "temperature"),
    ("top_p", "topP"),
    ("top_k", "topK"),
    ("max_tokens", "maxOutputTokens"),
    ("structured_output", "structuredOutputSchema"),
)


def content_from_text(text: TextInput) -> Dict[str, Any]:
    """Return a content object with one text part per input string."""
    if isinstance(text, str):
        return {"parts": [{"text": text}]}
    return {"parts": [{"text": t} for t in text]}


def prepare_params(**options: Any) -> Dict[str, Any]:
    """Translate keyword options into request parameters.

    Accepted options are the fields of :class:`GenerationOptions`; ``None``
    values are ignored. ``generationConfig`` is only present when at least one
    of its keys is set.

    Raises:
        pydantic.ValidationError: unknown option or out-of-range value.
    """
    opts = GenerationOptions(**{k: v for k, v in options.items() if v is not None})
    params: Dict[str, Any] = {}

    generation_config = {
        wire: getattr(opts, name)
        for name, wire in _GENERATION_CONFIG_KEYS
        if getattr(opts, name) is not None
    }
    if generation_config:
        params["generationConfig"] = generation_config
    if opts.system_instruction is not None:
        params["systemInstruction"] = content_from_text(opts.system_instruction)
    if opts.safety_settings is not None:
        params["safetySettings"] = opts.safety_settings
    return params


def generate(
    model: str,
    contents: List[Dict[str, Any]],
    params: Optional[Dict[str, Any]] = None,
    client: Optional[SupportsGenerate] = None,
) -> GeminiResponse:
    """Generate content with ``model``; uses the default client when none is given."""
    if client is None:
        from ..client import default_client  # local import to avoid cycles

        client = default_client()
    return client.generate(model, contents, params or {})


__all__ = ["TextInput", "content_from_text", "generate", "prepare_params"]
