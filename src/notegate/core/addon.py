"""
NotesAddon — composition root for the notes capability layer.

Owns the single EnablementCache shared by both capability handlers and the
event bus subscriptions that keep it fresh.  Build one at host startup and
pass it to whatever needs notes capability decisions::

    addon = NotesAddon(oracle=..., session=..., transport=...,
                       synchronizer=..., navigator=..., bus=bus)
    addon.init()
    enabled = await addon.add_note.is_enabled_for_user(user, course_id)

Subscriptions are never removed: they live as long as the process.
"""

from __future__ import annotations

import structlog

from notegate.core.capability.cache import EnablementCache
from notegate.core.capability.ports import (
    CapabilityOracle,
    Navigator,
    NotesSynchronizer,
    NoteTransport,
    SessionContext,
)
from notegate.core.events.bus import EventBus, Subscription
from notegate.core.events.invalidation import bind_cache_invalidation
from notegate.core.handlers.add_note import AddNoteHandler
from notegate.core.handlers.courses_nav import CoursesNavHandler
from notegate.core.handlers.sync import NotesSyncHandler

logger = structlog.get_logger()


class NotesAddon:
    def __init__(
        self,
        *,
        oracle: CapabilityOracle,
        session: SessionContext,
        transport: NoteTransport,
        synchronizer: NotesSynchronizer,
        navigator: Navigator,
        bus: EventBus,
    ) -> None:
        self.bus = bus
        self.cache = EnablementCache(oracle)
        self.add_note = AddNoteHandler(self.cache, oracle, session, transport)
        self.courses_nav = CoursesNavHandler(self.cache, oracle, navigator)
        self.sync = NotesSyncHandler(synchronizer)
        self._subscriptions: list[Subscription] = []

    @property
    def initialised(self) -> bool:
        return bool(self._subscriptions)

    def init(self) -> None:
        """Bind cache invalidation to the bus.  Only the first call has an effect."""
        if self.initialised:
            logger.debug("notes_addon_already_initialised")
            return
        self._subscriptions = bind_cache_invalidation(self.bus, self.cache)
        logger.info("notes_addon_initialised", subscriptions=len(self._subscriptions))
