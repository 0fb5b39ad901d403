"""NotesSyncHandler — periodic upload of notes stored offline."""

from __future__ import annotations

import structlog

from notegate.core.capability.ports import NotesSynchronizer
from notegate.core.constants import NOTES_SYNC_INTERVAL_MS, NOTES_SYNC_TASK_NAME
from notegate.core.handlers.base import PeriodicTaskHandler

logger = structlog.get_logger()


class NotesSyncHandler(PeriodicTaskHandler):
    name = NOTES_SYNC_TASK_NAME

    def __init__(self, synchronizer: NotesSynchronizer) -> None:
        self._synchronizer = synchronizer

    async def execute(self, site_id: str | None = None) -> None:
        logger.debug("notes_sync_started", site_id=site_id or "all")
        await self._synchronizer.sync_all_notes(site_id)
        logger.debug("notes_sync_finished", site_id=site_id or "all")

    def get_interval_ms(self) -> int:
        return NOTES_SYNC_INTERVAL_MS

    def is_sync(self) -> bool:
        return True

    def uses_network(self) -> bool:
        return True
