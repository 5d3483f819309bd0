"""Validated generation options accepted by content preparation.

Purpose
-------
Give the keyword options accepted by ``generate_content``/``stream_content``
a typed, validated shape before they are translated into the wire
``generationConfig`` / ``systemInstruction`` / ``safetySettings`` fields.

Failure modes
-------------
Unknown option names and out-of-range values raise
``pydantic.ValidationError`` at call time, before any request is issued.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class GenerationOptions(BaseModel):
    """Sampling and prompt options for one generation request.

    Attributes
    ----------
    temperature:
        Randomness of sampling.
    top_p:
        Nucleus sampling mass.
    top_k:
        Number of highest-probability tokens considered.
    max_tokens:
        Maximum number of output tokens (``maxOutputTokens``).
    structured_output:
        JSON schema for structured output (``structuredOutputSchema``).
    system_instruction:
        System instruction text (or list of texts).
    safety_settings:
        Wire-shaped safety settings (see :mod:`gemini_client.safety`).
    """

    model_config = ConfigDict(extra="forbid")

    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    top_k: Optional[int] = Field(default=None, ge=1)
    max_tokens: Optional[int] = Field(default=None, ge=1)
    structured_output: Optional[Dict[str, Any]] = None
    system_instruction: Optional[Union[str, List[str]]] = None
    safety_settings: Optional[List[Dict[str, Any]]] = None


__all__ = ["GenerationOptions"]
