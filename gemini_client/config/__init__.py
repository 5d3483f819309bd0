"""Unified configuration layer for the Gemini client.

Merge order for :func:`get_config` (later wins):

1. Built-in defaults (:mod:`gemini_client.config.defaults`)
2. Optional external config file (JSON or YAML) pointed to by ``GEMINI_CONFIG_FILE``
3. Environment variables ``GEMINI_MODEL``, ``GEMINI_BASE_URL``
4. Runtime overrides set via :func:`set_default_model` / :func:`set_api_key`
5. Explicit ``overrides`` argument

External config file example::

    model: gemini-2.0-flash
    base_url: https://generativelanguage.googleapis.com/v1
    embedding_model: embedding-001

The API key follows its own cascade (see :mod:`gemini_client.config.env`) and
is never read from the config file.
"""
from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    GEMINI_DEFAULT_BASE_URL,
    GEMINI_DEFAULT_EMBEDDING_MODEL,
    GEMINI_DEFAULT_MODEL,
)
from .env import resolve_api_key

CONFIG_FILE_ENV = "GEMINI_CONFIG_FILE"

DEFAULTS: Dict[str, Any] = {
    "model": GEMINI_DEFAULT_MODEL,
    "embedding_model": GEMINI_DEFAULT_EMBEDDING_MODEL,
    "base_url": GEMINI_DEFAULT_BASE_URL,
}

ENV_FIELD_MAP = {
    "model": "GEMINI_MODEL",
    "embedding_model": "GEMINI_EMBEDDING_MODEL",
    "base_url": "GEMINI_BASE_URL",
}

_RUNTIME: Dict[str, Any] = {}
_RUNTIME_LOCK = threading.Lock()
_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the optional external config file.

    YAML is a superset of JSON, so a single ``yaml.safe_load`` handles both.
    Unreadable or non-mapping documents yield an empty config.
    """
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv(CONFIG_FILE_ENV)
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Any = {}
    if path and Path(path).is_file():
        try:
            data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        except yaml.YAMLError:
            data = {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    _FILE_CACHE_PATH = path
    return _FILE_CACHE


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, var in ENV_FIELD_MAP.items():
        val = os.getenv(var)
        if val:
            out[field] = val
    return out


def get_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged client configuration (see module docstring for order)."""
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= {k: v for k, v in _load_external_config().items() if k in DEFAULTS}
    cfg |= _env_overrides()
    with _RUNTIME_LOCK:
        cfg |= {k: v for k, v in _RUNTIME.items() if k in DEFAULTS}
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def default_model() -> str:
    """Return the model used when a call does not name one."""
    return get_config()["model"]


def set_default_model(model: str) -> None:
    """Override the default model for the rest of the process."""
    if not isinstance(model, str) or not model.strip():
        raise ValueError("model must be a non-empty string")
    with _RUNTIME_LOCK:
        _RUNTIME["model"] = model


def api_key() -> Optional[str]:
    """Return the API key: runtime override first, then env / ``.env`` cascade."""
    with _RUNTIME_LOCK:
        key = _RUNTIME.get("api_key")
    if key:
        return key
    value, _source = resolve_api_key()
    return value


def set_api_key(key: Optional[str]) -> None:
    """Set the runtime API key override. ``None`` is accepted and ignored."""
    if key is None:
        return
    with _RUNTIME_LOCK:
        _RUNTIME["api_key"] = key


def reset_runtime_config() -> None:
    """Clear runtime overrides and the external file cache (used by tests)."""
    global _FILE_CACHE, _FILE_CACHE_PATH
    with _RUNTIME_LOCK:
        _RUNTIME.clear()
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None


__all__ = [
    "DEFAULTS",
    "get_config",
    "default_model",
    "set_default_model",
    "api_key",
    "set_api_key",
    "reset_runtime_config",
]
