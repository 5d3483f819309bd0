"""Safety settings builders and safety-rating interpretation."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Union


class HarmCategory(str, Enum):
    """Harm categories a safety threshold can be set for."""

    HARASSMENT = "HARM_CATEGORY_HARASSMENT"
    HATE_SPEECH = "HARM_CATEGORY_HATE_SPEECH"
    SEXUALLY_EXPLICIT = "HARM_CATEGORY_SEXUALLY_EXPLICIT"
    DANGEROUS_CONTENT = "HARM_CATEGORY_DANGEROUS_CONTENT"


class HarmBlockThreshold(str, Enum):
    """Blocking thresholds: ``NONE`` blocks nothing, ``HIGH`` only high-probability content."""

    NONE = "BLOCK_NONE"
    LOW = "BLOCK_LOW_AND_ABOVE"
    MEDIUM = "BLOCK_MEDIUM_AND_ABOVE"
    HIGH = "BLOCK_ONLY_HIGH"


def _coerce(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls[str(value).upper()]
    except KeyError:
        raise ValueError(f"unknown {enum_cls.__name__}: {value!r}") from None


def create_safety_setting(
    category: Union[HarmCategory, str], threshold: Union[HarmBlockThreshold, str]
) -> Dict[str, str]:
    """Build one ``safetySettings`` entry.

    Both arguments accept enum members or their lower-case names
    (``"harassment"``, ``"high"``).

    Raises:
        ValueError: unknown category or threshold.
    """
    return {
        "category": _coerce(HarmCategory, category).value,
        "threshold": _coerce(HarmBlockThreshold, threshold).value,
    }


def default_safety_settings(
    threshold: Union[HarmBlockThreshold, str] = HarmBlockThreshold.MEDIUM,
) -> List[Dict[str, str]]:
    """One setting per harm category, all at ``threshold``."""
    return [create_safety_setting(category, threshold) for category in HarmCategory]


_CATEGORY_NAMES = {c.value: c.name.lower() for c in HarmCategory}
_PROBABILITIES = {"NEGLIGIBLE": "negligible", "LOW": "low", "MEDIUM": "medium", "HIGH": "high"}


def interpret_safety_ratings(safety_ratings: Any) -> List[Dict[str, Any]]:
    """Translate raw ratings into ``{"category", "probability", "raw"}`` entries.

    Unrecognised categories or probabilities map to ``"unknown"``; anything
    other than a list yields ``[]``.
    """
    if not isinstance(safety_ratings, list):
        return []
    interpreted = []
    for rating in safety_ratings:
        rating = rating if isinstance(rating, dict) else {}
        interpreted.append(
            {
                "category": _CATEGORY_NAMES.get(rating.get("category", ""), "unknown"),
                "probability": _PROBABILITIES.get(rating.get("probability", ""), "unknown"),
                "raw": rating,
            }
        )
    return interpreted


__all__ = [
    "HarmBlockThreshold",
    "HarmCategory",
    "create_safety_setting",
    "default_safety_settings",
    "interpret_safety_ratings",
]
