"""Static registry of known Gemini models and their capabilities."""
from __future__ import annotations

from typing import Dict, List, Optional

from .base.models import ModelInfo

_MODELS: Dict[str, ModelInfo] = {
    "gemini-2.0-flash": ModelInfo(
        id="gemini-2.0-flash",
        description="Fast multimodal model for text generation.",
        supports=frozenset({"text", "images", "chat", "structured_output", "function_calling"}),
    ),
    "embedding-001": ModelInfo(
        id="embedding-001",
        description="Text embedding model for generating vector representations.",
        supports=frozenset({"embeddings"}),
    ),
}


def list_models() -> List[str]:
    """Return every registered model id."""
    return list(_MODELS)


def model_info(model: str) -> Optional[ModelInfo]:
    """Return the registry entry for ``model``, or ``None``."""
    return _MODELS.get(model)


def supports(model: str, feature: str) -> bool:
    """Whether ``model`` is registered and supports ``feature``."""
    info = _MODELS.get(model)
    return info is not None and feature in info.supports


def is_valid(model: str) -> bool:
    return model in _MODELS


def with_feature(feature: str) -> List[str]:
    """Return the ids of all models supporting ``feature``."""
    return [model_id for model_id, info in _MODELS.items() if feature in info.supports]


__all__ = ["is_valid", "list_models", "model_info", "supports", "with_feature"]
