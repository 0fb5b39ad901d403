"""
Cache invalidation binding.

Maps host lifecycle signals onto EnablementCache evictions:

  SESSION_LOGOUT          → clear both capability tables
  COURSES_LIST_REFRESHED  → clear the VIEW_NOTES table
  USER_PROFILE_REFRESHED  → drop the ADD_NOTE entry for the payload's course

No other signal touches the cache.
"""

from __future__ import annotations

from typing import Any

import structlog

from notegate.core.capability.cache import EnablementCache
from notegate.core.capability.models import Capability
from notegate.core.events.bus import EventBus, Subscription
from notegate.core.events.signals import LifecycleSignal, UserProfileRefreshed

logger = structlog.get_logger()


def bind_cache_invalidation(bus: EventBus, cache: EnablementCache) -> list[Subscription]:
    """Subscribe *cache* to the lifecycle signals that make its entries stale."""

    def _on_logout(_payload: Any) -> None:
        logger.info("notes_caches_cleared", reason=str(LifecycleSignal.SESSION_LOGOUT))
        cache.invalidate(Capability.ADD_NOTE)
        cache.invalidate(Capability.VIEW_NOTES)

    def _on_courses_refreshed(_payload: Any) -> None:
        cache.invalidate(Capability.VIEW_NOTES)

    def _on_profile_refreshed(payload: UserProfileRefreshed | None) -> None:
        # A refresh without a course drops every add-note decision.
        scope_key = payload.scope_key if payload is not None else None
        cache.invalidate(Capability.ADD_NOTE, scope_key)

    return [
        bus.on(LifecycleSignal.SESSION_LOGOUT, _on_logout),
        bus.on(LifecycleSignal.COURSES_LIST_REFRESHED, _on_courses_refreshed),
        bus.on(LifecycleSignal.USER_PROFILE_REFRESHED, _on_profile_refreshed),
    ]
