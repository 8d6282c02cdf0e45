"""Redacted summaries of store values for DEBUG traces.

Store values are arbitrary application state (form fields, login state,
cached API responses).  A value is hidden when the store key it lives under
looks like a secret, and nested mapping entries are hidden the same way.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

REDACTED = "<redacted>"

# Matched as substrings of the normalised name, so "userPassword",
# "api_token" and "X-Authorization" are all caught.
_SECRET_MARKERS: tuple[str, ...] = (
    "password",
    "passwd",
    "secret",
    "token",
    "apikey",
    "authorization",
    "credential",
)

_MAX_DEPTH = 20


def is_secret_name(name: Any) -> bool:
    """Return True if a store key or nested field name looks sensitive."""
    if not isinstance(name, str):
        return False
    normalized = name.lower().replace("_", "").replace("-", "")
    return any(marker in normalized for marker in _SECRET_MARKERS)


def redact_for_log(value: Any, *, key: Any = None, max_string: int = 512) -> Any:
    """Return a log-safe rendering of *value* stored under *key*."""
    if is_secret_name(key):
        return REDACTED
    return _summarize(value, max_string, 0)


def _summarize(value: Any, max_string: int, depth: int) -> Any:
    if depth > _MAX_DEPTH:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return value if len(value) <= max_string else f"{value[:max_string]}…<truncated>"
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, BaseModel):
        return _summarize(value.model_dump(), max_string, depth)
    if isinstance(value, Mapping):
        return {
            str(name): REDACTED if is_secret_name(name) else _summarize(item, max_string, depth + 1)
            for name, item in value.items()
        }
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_summarize(item, max_string, depth + 1) for item in value]
    # Callables and other objects are shown by type only.
    return f"<{type(value).__name__}>"
