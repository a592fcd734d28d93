"""Path differ.

Computes which locations of a state tree changed between two snapshots.
The walk is driven by the OLD snapshot: every key of the old tree is visited
and classified, keys that only exist in the new tree are never visited on
their own.  An added key therefore shows up only as a change of its parent
(whose serialized value differs), never under its own path.

Equality is serialization based and order sensitive: ``{"a": 1, "b": 2}``
and ``{"b": 2, "a": 1}`` differ, as do two lists holding the same items in
a different order.

Two containers are always descended into, whatever their shape: when a
mapping is replaced by a list, every old key is looked up in the list, so
each one is reported as deleted.

Every visited level serializes its subtrees again, so a replacement costs
O(nodes x depth).  Unchanged subtrees that are the same object in both
snapshots are skipped without serializing; replacing state by copying only
the changed branch keeps the walk short.

State trees must be acyclic.  Both snapshots are serialized before the walk
starts, so a circular reference raises :class:`ShapeXStateError` instead of
recursing forever.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic_core import PydanticSerializationError, to_json

from shapex.exceptions import ShapeXStateError
from shapex.state.changes import Change, ChangeKind

_MISSING: Any = object()


def _kind(value: Any) -> str:
    """Runtime kind used to detect type changes.

    Containers and ``None`` share the ``"object"`` kind; a dict replaced by
    ``None`` is therefore a value change, not a type change.
    """
    # bool is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if value is None or isinstance(value, (Mapping, list, tuple)):
        return "object"
    return type(value).__name__


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_container(value: Any) -> bool:
    return isinstance(value, Mapping) or _is_sequence(value)


def _entries(value: Any) -> Iterator[tuple[Any, Any]]:
    if isinstance(value, Mapping):
        yield from value.items()
    elif _is_sequence(value):
        yield from enumerate(value)


def _lookup(container: Any, key: Any) -> Any:
    if isinstance(container, Mapping):
        return container[key] if key in container else _MISSING
    if _is_sequence(container) and isinstance(key, int):
        return container[key] if key < len(container) else _MISSING
    return _MISSING


def _serialize(value: Any, path: str) -> bytes:
    try:
        return to_json(value, serialize_unknown=True)
    except (PydanticSerializationError, ValueError, RecursionError) as exc:
        raise ShapeXStateError(
            f"state at {path or '<root>'} cannot be serialized (circular reference?): {exc}",
            path=path,
        ) from exc


def _walk(
    old: Any,
    new: Any,
    path: str,
    separator: str,
    changes: dict[str, Change],
) -> None:
    for key, old_value in _entries(old):
        child = f"{path}{separator}{key}"
        new_value = _lookup(new, key)

        if new_value is _MISSING:
            changes.setdefault(child, Change(path=child, kind=ChangeKind.DELETED, old=old_value))
            continue
        if old_value is new_value:
            continue

        if _kind(old_value) != _kind(new_value):
            changes.setdefault(
                child,
                Change(path=child, kind=ChangeKind.TYPE_CHANGED, old=old_value, new=new_value),
            )
        elif _is_container(old_value) and _is_container(new_value):
            _walk(old_value, new_value, child, separator, changes)

        if _serialize(old_value, child) != _serialize(new_value, child):
            changes.setdefault(
                child,
                Change(path=child, kind=ChangeKind.VALUE_CHANGED, old=old_value, new=new_value),
            )


def diff_changes(old: Any, new: Any, *, prefix: str = "$", separator: str = ".") -> list[Change]:
    """Return every changed location between *old* and *new*, first-seen order.

    A changed child is reported before its parent.  A non-container *old*
    root yields no changes.
    """
    if _serialize(old, "") == _serialize(new, ""):
        return []
    changes: dict[str, Change] = {}
    _walk(old, new, prefix, separator, changes)
    return list(changes.values())


def diff(old: Any, new: Any, *, prefix: str = "$", separator: str = ".") -> list[str]:
    """Return the listener names of every changed location between *old* and *new*."""
    return [change.path for change in diff_changes(old, new, prefix=prefix, separator=separator)]
