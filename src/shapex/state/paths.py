"""State-change listener names.

A listener name such as ``"$.nested.value"`` is the sentinel, then the
separator, then the key path into the state tree.  List indices are written
as decimal strings (``"$.items.0"``).
"""

from __future__ import annotations

from collections.abc import Sequence


def state_listener(path: str | Sequence[str], *, prefix: str = "$", separator: str = ".") -> str:
    """Build the listener name for *path*.

    *path* is either a separator-joined string (``"nested.value"``) or a
    sequence of keys (``["nested", "value"]``).
    """
    keys = path.split(separator) if isinstance(path, str) else [str(key) for key in path]
    if not keys or any(key == "" for key in keys):
        raise ValueError(f"invalid state path: {path!r}")
    return separator.join([prefix, *keys])


def is_state_listener(name: str, *, prefix: str = "$", separator: str = ".") -> bool:
    """Return ``True`` when *name* addresses a state path rather than an event."""
    root = f"{prefix}{separator}"
    return name.startswith(root) and len(name) > len(root)


def parse_state_listener(name: str, *, prefix: str = "$", separator: str = ".") -> list[str] | None:
    """Return the key path of a state-change listener, or ``None`` for plain events."""
    if not is_state_listener(name, prefix=prefix, separator=separator):
        return None
    return name[len(prefix) + len(separator) :].split(separator)
