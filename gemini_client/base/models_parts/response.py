"""
GeminiResponse DTO representing one parsed API result (or one stream chunk).

Parts are kept in their wire shape (``{"text": ...}``, ``{"functionCall": ...}``,
``{"inlineData": ...}``) so that synthetic envelopes built from accumulated
chunks can be parsed by the very same code as real API payloads.
``structured`` is always derived from the parts and is never passed in.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence

ContentPartType = Literal["text", "function_call", "other"]

# Function-call names whose arguments are surfaced as structured output.
STRUCTURED_FUNCTION_NAMES = frozenset(("json_object", "structured_output"))

_FENCED_JSON_RE = re.compile(r"```(?:json)?\s*(\{[\s\S]*?\})\s*```", re.MULTILINE)


def part_type(part: Any) -> ContentPartType:
    """Classify a wire-shaped content fragment."""
    if isinstance(part, Mapping):
        if "text" in part:
            return "text"
        if "functionCall" in part:
            return "function_call"
    return "other"


def extract_text(parts: Sequence[Any]) -> Optional[str]:
    """Join the text fragments of ``parts`` with newlines; ``None`` when there are none."""
    texts = [str(p.get("text") or "") for p in parts if part_type(p) == "text"]
    joined = "\n".join(texts)
    return joined or None


def _decode_json_from_text(text: Optional[str]) -> Any:
    if not text:
        return None
    match = _FENCED_JSON_RE.search(text)
    candidate = match.group(1) if match else text
    try:
        return json.loads(candidate)
    except ValueError:
        return None


def extract_structured_output(parts: Sequence[Any]) -> Any:
    """Derive structured output from a response's parts.

    The first function-call fragment decides: when it is named ``json_object``
    or ``structured_output`` its ``args`` are returned, otherwise ``None``.
    Without a function call, JSON is decoded from a fenced block in the text or
    from the whole text.
    """
    call_part = next((p for p in parts if part_type(p) == "function_call"), None)
    if call_part is None:
        return _decode_json_from_text(extract_text(parts))
    call = call_part.get("functionCall") or {}
    if call.get("name", "") in STRUCTURED_FUNCTION_NAMES:
        return call.get("args", {})
    return None


@dataclass(frozen=True)
class GeminiResponse:
    """Immutable parsed result of one API call or one stream chunk.

    Attributes:
        text: Concatenated textual content, ``None`` when no part carries text.
        parts: Ordered wire-shaped content fragments.
        raw: The untouched response payload (diagnostics / pass-through).
        usage: Token usage metadata (``usageMetadata``), passed through as-is.
        candidate_index: Index of the candidate this response was read from.
        finish_reason: Candidate finish reason (e.g. ``"STOP"``).
        safety_ratings: Candidate safety ratings, passed through as-is.
        structured: Derived structured output (see :func:`extract_structured_output`).
    """

    text: Optional[str] = None
    parts: List[Dict[str, Any]] = field(default_factory=list)
    raw: Any = None
    usage: Optional[Dict[str, Any]] = None
    candidate_index: int = 0
    finish_reason: Optional[str] = None
    safety_ratings: Optional[List[Dict[str, Any]]] = None
    structured: Any = field(init=False, default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "structured", extract_structured_output(self.parts or []))

    @classmethod
    def parse(cls, payload: Any) -> "GeminiResponse":
        """Parse a raw API envelope, reading the first candidate."""
        body: Mapping[str, Any] = payload if isinstance(payload, Mapping) else {}
        candidates = body.get("candidates") or []
        candidate = candidates[0] if candidates and isinstance(candidates[0], Mapping) else {}
        content = candidate.get("content") or {}
        parts = list(content.get("parts") or [])
        return cls(
            text=extract_text(parts),
            parts=parts,
            raw=payload,
            usage=body.get("usageMetadata"),
            candidate_index=candidate.get("index", 0),
            finish_reason=candidate.get("finishReason"),
            safety_ratings=candidate.get("safetyRatings"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary excluding the raw payload."""
        return {
            "text": self.text,
            "parts": list(self.parts),
            "structured": self.structured,
            "usage": self.usage,
            "candidate_index": self.candidate_index,
            "finish_reason": self.finish_reason,
            "safety_ratings": self.safety_ratings,
        }


__all__ = [
    "ContentPartType",
    "GeminiResponse",
    "STRUCTURED_FUNCTION_NAMES",
    "extract_structured_output",
    "extract_text",
    "part_type",
]
