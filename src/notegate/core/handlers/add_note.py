"""AddNoteHandler — gate for the "add a note about this user" action."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from notegate.core.capability.cache import EnablementCache
from notegate.core.capability.models import Capability, ScopeKey, User
from notegate.core.capability.ports import CapabilityOracle, NoteTransport, SessionContext
from notegate.core.handlers.base import CapabilityHandler
from notegate.core.handlers.controllers import AddNoteControllerFactory

logger = structlog.get_logger()


class AddNoteHandler(CapabilityHandler):
    name = "notes_add_note"
    capability = Capability.ADD_NOTE

    def __init__(
        self,
        cache: EnablementCache,
        oracle: CapabilityOracle,
        session: SessionContext,
        transport: NoteTransport,
    ) -> None:
        self._cache = cache
        self._oracle = oracle
        self._session = session
        self._transport = transport

    async def is_enabled(self) -> bool:
        return await self._oracle.is_enabled_globally(self.capability)

    async def is_enabled_for_user(
        self,
        user: User,
        scope_key: ScopeKey | None,
        nav_options: Mapping[str, Any] | None = None,
        adm_options: Mapping[str, Any] | None = None,
    ) -> bool:
        """
        Return True if the current user may add a note about *user* in the course.

        An active course is required and users cannot add notes about
        themselves; both cases are False without asking the oracle.
        """
        if not scope_key:
            return False
        if user.id == self._session.current_user_id():
            logger.debug("add_note_self_denied", user_id=user.id, scope_key=scope_key)
            return False
        return await self._cache.get(self.capability, scope_key)

    def get_controller_factory(self, user: User, scope_key: ScopeKey) -> AddNoteControllerFactory:
        return AddNoteControllerFactory(transport=self._transport, user=user, scope_key=scope_key)
