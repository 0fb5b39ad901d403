"""
EventBus — in-process publish/subscribe for host lifecycle signals.

Listeners are plain callables invoked synchronously, in registration order,
from ``trigger()``.  A listener that raises stops delivery and the error
propagates to the publisher.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

from notegate.core.events.signals import LifecycleSignal

logger = structlog.get_logger()

Listener = Callable[[Any], None]


class Subscription:
    """Handle returned by ``EventBus.on``.  ``off()`` is idempotent."""

    def __init__(self, bus: EventBus, signal: LifecycleSignal, listener: Listener) -> None:
        self._bus = bus
        self.signal = signal
        self.listener = listener
        self.active = True

    def off(self) -> None:
        if self.active:
            self._bus._remove(self)
            self.active = False


class EventBus:
    def __init__(self) -> None:
        self._subscriptions: dict[LifecycleSignal, list[Subscription]] = {}

    def on(self, signal: LifecycleSignal, listener: Listener) -> Subscription:
        sub = Subscription(self, signal, listener)
        self._subscriptions.setdefault(signal, []).append(sub)
        logger.debug("event_listener_added", signal=str(signal))
        return sub

    def trigger(self, signal: LifecycleSignal, payload: Any = None) -> int:
        """Deliver *payload* to every listener of *signal*.  Returns the listener count."""
        subs = list(self._subscriptions.get(signal, ()))
        logger.debug("event_triggered", signal=str(signal), listeners=len(subs))
        for sub in subs:
            sub.listener(payload)
        return len(subs)

    def listener_count(self, signal: LifecycleSignal) -> int:
        return len(self._subscriptions.get(signal, ()))

    def _remove(self, sub: Subscription) -> None:
        subs = self._subscriptions.get(sub.signal, [])
        if sub in subs:
            subs.remove(sub)
