"""Action channel forwarding screen events to one coordinator handler."""

from __future__ import annotations

import logging
import threading

from coordinator_kit.api.actions import ActionHandler, Subscription, UiExecutor
from coordinator_kit.runtime.executors import UiThreadExecutor

_LOG = logging.getLogger("coordinator_kit.actions")


class RuntimeActionChannel[TAction]:
    """Single-handler channel with UI-context delivery and debug taps."""

    def __init__(self, executor: UiExecutor | None = None) -> None:
        self._executor = executor if executor is not None else UiThreadExecutor()
        self._lock = threading.Lock()
        self._next_id = 1
        self._handler: tuple[Subscription, ActionHandler[TAction]] | None = None
        self._taps: dict[int, ActionHandler[TAction]] = {}

    @property
    def executor(self) -> UiExecutor:
        return self._executor

    @property
    def is_bound(self) -> bool:
        return self._handler is not None

    @property
    def subscription(self) -> Subscription | None:
        """Return the live handler subscription, if any."""
        bound = self._handler
        return bound[0] if bound is not None else None

    def send(self, action: TAction) -> None:
        """Publish one action to taps and schedule handler delivery.

        Never raises: tap and handler failures are logged and the channel keeps
        delivering subsequent actions.
        """
        with self._lock:
            bound = self._handler
            taps = tuple(self._taps.values())
        for tap in taps:
            try:
                tap(action)
            except Exception:  # pylint: disable=broad-exception-caught
                _LOG.exception("action_tap_failed action=%r", action)
        if bound is None:
            _LOG.debug("action_dropped reason=unbound action=%r", action)
            return
        subscription = bound[0]
        self._executor.submit(lambda: self._deliver(subscription, action))

    def bind(self, handler: ActionHandler[TAction]) -> Subscription:
        """Attach handler once; repeated binds keep the first subscription."""
        with self._lock:
            if self._handler is not None:
                return self._handler[0]
            subscription = self._allocate()
            self._handler = (subscription, handler)
        return subscription

    def unbind(self) -> None:
        """Release the handler. Deliveries still queued are dropped."""
        with self._lock:
            self._handler = None

    def add_tap(self, observer: ActionHandler[TAction]) -> Subscription:
        """Attach a non-consuming observer."""
        with self._lock:
            subscription = self._allocate()
            self._taps[subscription.id] = observer
        return subscription

    def remove_tap(self, subscription: Subscription) -> None:
        """Remove an observer if present."""
        with self._lock:
            self._taps.pop(subscription.id, None)

    def _deliver(self, subscription: Subscription, action: TAction) -> None:
        bound = self._handler
        if bound is None or bound[0] != subscription:
            _LOG.debug("action_dropped reason=released action=%r", action)
            return
        try:
            bound[1](action)
        except Exception:  # pylint: disable=broad-exception-caught
            _LOG.exception("action_handler_failed action=%r", action)

    def _allocate(self) -> Subscription:
        sub_id = self._next_id
        self._next_id += 1
        return Subscription(sub_id)


ActionChannel = RuntimeActionChannel
