"""Helpers for safe debug logging.

Event payloads and state snapshots are arbitrary host data: they can be
large and may carry values the host does not want in its logs.  This module
turns them into bounded, redacted copies before they reach a DEBUG line.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_MAX_DEPTH = 20
_MAX_ITEMS = 50


def redact_for_log(
    value: Any,
    *,
    redact_keys: frozenset[str] = frozenset(),
    max_string: int = 512,
    _depth: int = 0,
) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for index, (k, v) in enumerate(value.items()):
            if index >= _MAX_ITEMS:
                redacted["…"] = f"<{len(value) - _MAX_ITEMS} more>"
                break
            key = str(k)
            if key.lower() in redact_keys:
                redacted[key] = "<redacted>"
            else:
                redacted[key] = redact_for_log(v, redact_keys=redact_keys, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        items = [
            redact_for_log(v, redact_keys=redact_keys, max_string=max_string, _depth=_depth + 1)
            for v in list(value)[:_MAX_ITEMS]
        ]
        if len(value) > _MAX_ITEMS:
            items.append(f"<{len(value) - _MAX_ITEMS} more>")
        return items

    # Fallback: represent unknown objects without dumping internals.
    return repr(value)
