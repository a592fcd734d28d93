"""Subscriber response models.

A subscriber callback tells the engine what to do next by returning a
:class:`SubscriptionResponse` (or a plain mapping with the same keys):

* ``state``: the replacement state.  Presence is tracked explicitly, so a
  response that omits ``state`` leaves the current state untouched while
  ``state=None`` replaces it with ``None``.
* ``dispatch``: one :class:`Dispatch` request or a list of them, run in
  order after the state replacement.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Dispatch(BaseModel):
    """A follow-up event requested by a subscriber.

    The payload is given as ``with`` in mappings (``{"to": "saved", "with": 5}``)
    or as ``with_`` in Python code.  Without a payload the event is
    dispatched with no arguments.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True, arbitrary_types_allowed=True)

    to: str = Field(..., description="Listener name to dispatch")
    with_: Any = Field(default=None, alias="with", description="Single payload passed to the subscribers")

    @field_validator("to")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value:
            raise ValueError("to must be non-empty")
        return value

    @property
    def args(self) -> tuple[Any, ...]:
        """Trailing arguments for the nested dispatch."""
        if "with_" in self.model_fields_set:
            return (self.with_,)
        return ()


class SubscriptionResponse(BaseModel):
    """What a subscriber callback asks the engine to do."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    state: Any = None
    dispatch: tuple[Dispatch, ...] = ()

    @field_validator("dispatch", mode="before")
    @classmethod
    def _listify_dispatch(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, (Dispatch, Mapping)):
            return (value,)
        return value

    @property
    def has_state(self) -> bool:
        """Whether the response carries a replacement state."""
        return "state" in self.model_fields_set
