"""
Domain models (DTOs) public surface.

Re-exports the one-class-per-file implementations under
``gemini_client.base.models_parts``.
"""

from .models_parts.model_info import ModelInfo
from .models_parts.response import (
    ContentPartType,
    GeminiResponse,
    STRUCTURED_FUNCTION_NAMES,
    extract_structured_output,
    extract_text,
    part_type,
)

__all__ = [
    "ContentPartType",
    "GeminiResponse",
    "ModelInfo",
    "STRUCTURED_FUNCTION_NAMES",
    "extract_structured_output",
    "extract_text",
    "part_type",
]
