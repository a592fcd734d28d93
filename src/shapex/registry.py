"""Subscription registry.

Maps listener names to their subscriptions in subscribe order.  Ids come
from one counter shared by every name and are never reused.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

EventCallback = Callable[..., Any]


@dataclass(slots=True, eq=False)
class Subscription:
    """A callback registered under one listener name.

    ``consumed`` is set on a one-shot subscription right before its only
    invocation; the registry drops consumed entries once the dispatch pass
    that ran them ends.
    """

    listener: str
    callback: EventCallback
    id: int
    once: bool = False
    consumed: bool = False


class SubscriptionRegistry:
    """Ordered listener-name -> subscriptions bookkeeping."""

    def __init__(self) -> None:
        self._subscriptions: dict[str, list[Subscription]] = {}
        self._ids = itertools.count(1)

    def _add(self, listener: str, callback: EventCallback, *, once: bool) -> int:
        subscription_id = next(self._ids)
        self._subscriptions.setdefault(listener, []).append(
            Subscription(listener=listener, callback=callback, id=subscription_id, once=once)
        )
        return subscription_id

    def subscribe(self, listener: str, callback: EventCallback) -> int:
        return self._add(listener, callback, once=False)

    def subscribe_once(self, listener: str, callback: EventCallback) -> int:
        return self._add(listener, callback, once=True)

    def unsubscribe(self, listener: str) -> None:
        """Remove every subscription under *listener*."""
        self._subscriptions.pop(listener, None)

    def subscription_count(self, listener: str | None) -> int:
        """Number of subscriptions for *listener*, or of listener names when ``None``."""
        if listener is None:
            return len(self._subscriptions)
        return len(self._subscriptions.get(listener, ()))

    def subscriptions(self) -> list[str]:
        return list(self._subscriptions)

    def snapshot(self, listener: str) -> list[Subscription]:
        """Copy of the current list; later additions do not show up in it."""
        return list(self._subscriptions.get(listener, ()))

    def discard_consumed(self, listener: str) -> None:
        """Drop consumed one-shot entries from the live list of *listener*.

        Works on the live list so subscriptions added while a dispatch was
        running survive.  A name unsubscribed in the meantime stays gone.
        """
        live = self._subscriptions.get(listener)
        if live is None:
            return
        remaining = [subscription for subscription in live if not subscription.consumed]
        if remaining:
            self._subscriptions[listener] = remaining
        else:
            del self._subscriptions[listener]
