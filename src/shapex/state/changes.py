"""Change records produced by the path differ."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChangeKind(StrEnum):
    DELETED = "deleted"
    TYPE_CHANGED = "type_changed"
    VALUE_CHANGED = "value_changed"


class Change(BaseModel):
    """One location that differs between two state snapshots."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    path: str = Field(..., description="State-change listener name, e.g. '$.nested.value'")
    kind: ChangeKind
    old: Any = Field(default=None, description="Value in the old snapshot")
    new: Any = Field(default=None, description="Value in the new snapshot (None when deleted)")
