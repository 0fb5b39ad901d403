"""Lifecycle event bus and cache invalidation binding."""

from notegate.core.events.bus import EventBus, Subscription
from notegate.core.events.invalidation import bind_cache_invalidation
from notegate.core.events.signals import LifecycleSignal, UserProfileRefreshed

__all__ = [
    "EventBus",
    "LifecycleSignal",
    "Subscription",
    "UserProfileRefreshed",
    "bind_cache_invalidation",
]
