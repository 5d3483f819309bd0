"""
ModelInfo DTO for the static model capability registry.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet


@dataclass(frozen=True)
class ModelInfo:
    """A single model registry entry.

    Attributes:
        id: Model identifier as used in request paths.
        description: Human-friendly description.
        supports: Feature flags (e.g. ``"text"``, ``"function_calling"``).
    """

    id: str
    description: str
    supports: FrozenSet[str] = field(default_factory=frozenset)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        return {"id": self.id, "description": self.description, "supports": sorted(self.supports)}


__all__ = ["ModelInfo"]
