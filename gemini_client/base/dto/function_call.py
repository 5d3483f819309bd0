"""DTO describing a function call requested by the model.

Captures the function name and a JSON-like arguments mapping as found in a
``{"functionCall": {"name": ..., "args": {...}}}`` response part.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class FunctionCallDTO(BaseModel):
    """Represents a function-style structured output from a model.

    Parameters
    ----------
    name:
        The function/tool name suggested by the model. ``None`` when the
        part omitted it.
    arguments:
        JSON-like arguments payload. Defaults to an empty mapping.
    """

    name: Optional[str] = None
    arguments: Dict[str, Any] = Field(default_factory=dict)


__all__ = ["FunctionCallDTO"]
