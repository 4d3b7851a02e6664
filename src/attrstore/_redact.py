"""Render attribute values for DEBUG logs.

Values stored under secret-looking names are masked, nested mappings get
the same treatment per key, and long strings are cut short.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

_SENSITIVE_NAME_PARTS: tuple[str, ...] = (
    "password",
    "passwd",
    "secret",
    "token",
    "apikey",
    "api_key",
    "authorization",
    "cookie",
    "credential",
)

_MASK = "<redacted>"


def is_sensitive_name(name: Any) -> bool:
    """Return ``True`` when *name* looks like it carries a secret."""
    key = str(name).lower()
    return any(part in key for part in _SENSITIVE_NAME_PARTS)


def redact_for_log(value: Any, *, max_string: int = 256, _depth: int = 0) -> Any:
    """Return *value* with secret keys masked and long strings shortened.

    Mappings, lists and tuples are walked; anything else is returned as is
    and left to ``%s`` formatting.
    """
    if _depth > 20:
        return "<max-depth>"
    if isinstance(value, str):
        return value if len(value) <= max_string else f"{value[:max_string]}…<truncated>"
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, Mapping):
        return {
            str(k): _MASK if is_sensitive_name(k) else redact_for_log(v, max_string=max_string, _depth=_depth + 1)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]
    return value


def redact_attribute(name: str, value: Any) -> Any:
    """Redact a single attribute value, masking it entirely for secret names."""
    if is_sensitive_name(name):
        return _MASK
    return redact_for_log(value)


def names_for_log(names: Iterable[str], *, limit: int = 20) -> str:
    """Comma-join attribute names, eliding the tail past *limit*."""
    ordered = list(names)
    if len(ordered) <= limit:
        return ",".join(ordered)
    return ",".join(ordered[:limit]) + f",…(+{len(ordered) - limit})"
