"""The ShapeX container handed to the host application."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from shapex.config import ShapeXConfig
from shapex.engine import DispatchEngine
from shapex.registry import EventCallback, SubscriptionRegistry

StateT = TypeVar("StateT")


class ShapeX(Generic[StateT]):
    """Event registry plus state, wired to one dispatch engine.

    Usage::

        app = ShapeX({"counter": 1})
        app.subscribe("$.counter", lambda state: print(state["counter"]))
        app.subscribe("increment", lambda state: {"state": {**state, "counter": state["counter"] + 1}})
        app.dispatch("increment")

    Instances are independent of each other and must only be used from
    one thread.
    """

    def __init__(self, initial_state: StateT, *, config: ShapeXConfig | None = None) -> None:
        self._config = config or ShapeXConfig()
        self._registry = SubscriptionRegistry()
        self._engine = DispatchEngine(self._registry, initial_state, config=self._config)

    @property
    def config(self) -> ShapeXConfig:
        return self._config

    def subscribe(self, listener: str, callback: EventCallback) -> int:
        """Subscribe to an event or a state path; returns an opaque id."""
        return self._registry.subscribe(listener, callback)

    def subscribe_once(self, listener: str, callback: EventCallback) -> int:
        """Subscribe for a single invocation."""
        return self._registry.subscribe_once(listener, callback)

    def unsubscribe(self, listener: str) -> None:
        """Remove all subscriptions under *listener*."""
        self._registry.unsubscribe(listener)

    def subscription_count(self, listener: str | None = None) -> int:
        return self._registry.subscription_count(listener)

    def subscriptions(self) -> list[str]:
        return self._registry.subscriptions()

    def dispatch(self, listener: str, *args: Any) -> None:
        self._engine.dispatch(listener, *args)

    def state(self) -> StateT:
        """Current state.  Do not mutate it; replace it through a dispatch."""
        return self._engine.state

    def __repr__(self) -> str:
        return f"ShapeX(listeners={self._registry.subscription_count(None)})"


def create(initial_state: StateT, *, config: ShapeXConfig | None = None) -> ShapeX[StateT]:
    """Create a container holding *initial_state*."""
    return ShapeX(initial_state, config=config)
