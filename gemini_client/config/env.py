"""gemini_client.config.env
=========================

Environment variable mapping and helpers for the Gemini API key.

Resolution order for the key (first non-empty wins):

1. ``GEMINI_API_KEY`` environment variable
2. ``GOOGLE_API_KEY`` environment variable
3. ``GEMINI_API_KEY`` in the ``.env`` file (path overridable via ``DOTENV_FILE``)
4. ``GOOGLE_API_KEY`` in the ``.env`` file

A runtime override set through :func:`gemini_client.config.set_api_key` takes
precedence over all of these; that layer lives in the package ``__init__``.

Helpers never raise on missing files or unset variables; callers decide how to
proceed when no key is found.
"""

from __future__ import annotations

import os
import re
from typing import Iterable, Optional, Tuple

# Canonical name first.
API_KEY_ENV_VARS: Tuple[str, ...] = ("GEMINI_API_KEY", "GOOGLE_API_KEY")

DOTENV_PATH_ENV = "DOTENV_FILE"
DEFAULT_DOTENV_PATH = ".env"


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'your_', or starts with
    'test_'. The check is case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or v.startswith(("test_", "your_"))


def dotenv_path() -> str:
    """Return the path of the ``.env`` file consulted for credentials."""
    return os.getenv(DOTENV_PATH_ENV, DEFAULT_DOTENV_PATH)


def read_dotenv_var(name: str, path: Optional[str] = None) -> Optional[str]:
    """Read ``name`` from a ``.env`` file without exporting it.

    Lines look like ``NAME=value``; comments and surrounding quotes are
    ignored. Returns ``None`` when the file or the variable is missing.
    """
    path = path or dotenv_path()
    if not os.path.isfile(path):
        return None
    pattern = re.compile(rf"^\s*(?:export\s+)?{re.escape(name)}\s*=\s*(.+?)\s*$")
    with open(path, "r", encoding="utf-8") as fh:
        for line in fh:
            if line.lstrip().startswith("#"):
                continue
            m = pattern.match(line)
            if m:
                value = m.group(1).strip().strip('"').strip("'")
                return value or None
    return None


def iter_api_key_sources() -> Iterable[Tuple[str, Optional[str]]]:
    """Yield ``(source, value)`` pairs in resolution priority order."""
    for name in API_KEY_ENV_VARS:
        yield f"env:{name}", os.environ.get(name)
    for name in API_KEY_ENV_VARS:
        yield f"dotenv:{name}", read_dotenv_var(name)


def resolve_api_key() -> Tuple[Optional[str], Optional[str]]:
    """Resolve the API key from the environment or ``.env`` file.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, source)`` for the first non-empty value, ``(None, None)``
        when nothing is set.
    """
    for source, value in iter_api_key_sources():
        if value and value.strip():
            return value.strip(), source
    return None, None


__all__ = [
    "API_KEY_ENV_VARS",
    "is_placeholder",
    "dotenv_path",
    "read_dotenv_var",
    "iter_api_key_sources",
    "resolve_api_key",
]
