"""Helpers for safe debug logging.

pysecureid handles raw key material and bearer-style tokens. This module
redacts sensitive fields before anything is emitted to DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "key",
        "keys",
        "secret",
        "password",
        "token",
        # Sealed payloads
        "d",
        "ciphertext",
    }
)

_TOKEN_PREFIX_CHARS = 6


def redact_token(token: Any) -> str:
    """Short, non-replayable description of a token for logs."""
    if not isinstance(token, str):
        return f"<{type(token).__name__}>"
    if len(token) <= _TOKEN_PREFIX_CHARS:
        return f"<token:{len(token)}c>"
    return f"{token[:_TOKEN_PREFIX_CHARS]}…<token:{len(token)}c>"


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key.lower() in _SENSITIVE_VALUE_KEYS:
                redacted[key] = "<redacted>"
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    return repr(value)
