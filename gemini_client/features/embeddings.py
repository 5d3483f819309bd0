"""Text embeddings and vector similarity."""
from __future__ import annotations

import math
from enum import Enum
from typing import List, Optional, Sequence, Union

from ..config import get_config

Vector = List[float]


class TaskType(str, Enum):
    """Intended downstream use of an embedding (``taskType`` on the wire)."""

    RETRIEVAL_QUERY = "RETRIEVAL_QUERY"
    RETRIEVAL_DOCUMENT = "RETRIEVAL_DOCUMENT"
    SEMANTIC_SIMILARITY = "SEMANTIC_SIMILARITY"
    CLASSIFICATION = "CLASSIFICATION"
    CLUSTERING = "CLUSTERING"

    @classmethod
    def coerce(cls, value: Union["TaskType", str, None]) -> Optional["TaskType"]:
        """Accept an enum member or a case-insensitive name such as ``"clustering"``."""
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls[str(value).upper()]
        except KeyError:
            return None


def _client(client):
    if client is None:
        from ..client import default_client  # local import to avoid cycles

        return default_client()
    return client


def embed_text(
    text: str,
    model: Optional[str] = None,
    task_type: Union[TaskType, str, None] = None,
    *,
    client=None,
) -> Optional[Vector]:
    """Return the embedding vector of ``text``.

    Unknown task types are omitted from the request.

    Raises:
        GeminiError: the request failed.
    """
    model = model or get_config()["embedding_model"]
    params = {"content": {"parts": [{"text": text}]}}
    task = TaskType.coerce(task_type)
    if task is not None:
        params["taskType"] = task.value
    response = _client(client).embed_content(model, params)
    raw = response.raw if isinstance(response.raw, dict) else {}
    return (raw.get("embedding") or {}).get("values")


def batch_embed(
    texts: Sequence[str],
    model: Optional[str] = None,
    task_type: Union[TaskType, str, None] = None,
    *,
    client=None,
) -> List[Optional[Vector]]:
    """Embed every text in order; the first failure is raised."""
    return [embed_text(t, model, task_type, client=client) for t in texts]


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two equal-length vectors; ``0.0`` if either has zero magnitude."""
    if len(a) != len(b):
        raise ValueError(f"vector length mismatch: {len(a)} != {len(b)}")
    dot = sum(x * y for x, y in zip(a, b))
    mag_a = math.sqrt(sum(x * x for x in a))
    mag_b = math.sqrt(sum(y * y for y in b))
    if mag_a <= 0.0 or mag_b <= 0.0:
        return 0.0
    return dot / (mag_a * mag_b)


__all__ = ["TaskType", "Vector", "batch_embed", "cosine_similarity", "embed_text"]
