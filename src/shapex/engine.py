"""Dispatch engine.

Runs the subscribers of a listener name, applies the state they return,
re-dispatches every changed state path and every follow-up request.  All
nested dispatches run on the current call stack: a cascade triggered by one
subscriber completes before the next subscriber of the same pass runs.

The engine is single-thread-affine and does no cycle detection.  An event
graph that keeps re-triggering itself ends in ``RecursionError``.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from shapex._redact import redact_for_log
from shapex.config import ShapeXConfig
from shapex.exceptions import ShapeXResponseError
from shapex.models import SubscriptionResponse
from shapex.registry import SubscriptionRegistry
from shapex.state.diff import diff

_logger = logging.getLogger(__name__)


class DispatchEngine:
    """Owns the current state and drives dispatch passes over a registry."""

    def __init__(
        self,
        registry: SubscriptionRegistry,
        initial_state: Any,
        *,
        config: ShapeXConfig,
    ) -> None:
        self._registry = registry
        self._state = initial_state
        self._config = config
        self._detached: set[asyncio.Future[Any]] = set()

    @property
    def state(self) -> Any:
        return self._state

    def dispatch(self, listener: str, *args: Any) -> None:
        """Run every subscriber of *listener* with ``(state, *args)``."""
        subscriptions = self._registry.snapshot(listener)
        if not subscriptions:
            _logger.debug("No subscriptions for %s", listener)
            return

        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(
                "Dispatching %s to %d subscription(s) args=%s",
                listener,
                len(subscriptions),
                self._for_log(args),
            )
        try:
            for subscription in subscriptions:
                # A re-entrant pass over the same name may already have run it.
                if subscription.consumed:
                    continue
                if subscription.once:
                    subscription.consumed = True

                result = subscription.callback(self._state, *args)
                response = self._coerce_response(listener, result)
                if response is None:
                    continue

                if response.has_state:
                    self._replace_state(response.state)

                for request in response.dispatch:
                    _logger.debug("%s requested dispatch of %s", listener, request.to)
                    self.dispatch(request.to, *request.args)
        finally:
            self._registry.discard_consumed(listener)

    def _replace_state(self, new_state: Any) -> None:
        changes = diff(
            self._state,
            new_state,
            prefix=self._config.state_prefix,
            separator=self._config.path_separator,
        )
        self._state = new_state
        if self._config.log_state and _logger.isEnabledFor(logging.DEBUG):
            _logger.debug("State replaced state=%s changes=%s", self._for_log(new_state), changes)
        else:
            _logger.debug("State replaced changes=%s", changes)

        for path in changes:
            self.dispatch(path)

    def _coerce_response(self, listener: str, result: Any) -> SubscriptionResponse | None:
        if result is None or isinstance(result, SubscriptionResponse):
            return result
        if inspect.isawaitable(result):
            self._detach(listener, result)
            return None
        if isinstance(result, Mapping):
            try:
                return SubscriptionResponse.model_validate(dict(result))
            except ValidationError as exc:
                raise ShapeXResponseError(
                    f"Invalid response from subscriber of {listener!r}: {exc}",
                    listener=listener,
                ) from exc
        raise ShapeXResponseError(
            f"Subscriber of {listener!r} returned unsupported {type(result).__name__}",
            listener=listener,
        )

    def _detach(self, listener: str, awaitable: Any) -> None:
        """Hand an awaitable result to the running loop without waiting for it.

        Its eventual value is ignored; asynchronous subscribers update state
        by calling ``dispatch`` themselves when their work completes.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            _logger.warning("Subscriber of %s returned an awaitable outside a running event loop; dropped", listener)
            return

        future = asyncio.ensure_future(awaitable, loop=loop)
        self._detached.add(future)
        future.add_done_callback(self._on_detached_done)
        _logger.debug("Subscriber of %s detached as an asyncio task", listener)

    def _on_detached_done(self, future: asyncio.Future[Any]) -> None:
        self._detached.discard(future)
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            _logger.warning("Detached subscriber task failed", exc_info=exc)
        elif future.result() is not None:
            _logger.debug("Ignoring result of detached subscriber task")

    def _for_log(self, value: Any) -> Any:
        return redact_for_log(
            value,
            redact_keys=self._config.redact_keys,
            max_string=self._config.max_log_string,
        )
