"""
Controller factories for the notes handlers.

A factory captures the arguments a handler was asked about (user, course)
and builds a fresh controller value object each time the host UI binds one.
Controllers hold only UI-facing state; the modal, keyboard and loading
indicators belong to the host.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog

from notegate.core.capability.models import NotePublishState, ScopeKey, SubmitResult, User
from notegate.core.capability.ports import Navigator, NoteTransport
from notegate.core.constants import (
    ADD_NOTE_CSS_CLASS,
    ADD_NOTE_TITLE,
    NOTE_CREATED_MESSAGE,
    NOTES_TYPES_STATE,
    STORED_OFFLINE_MESSAGE,
    VIEW_NOTES_CSS_CLASS,
    VIEW_NOTES_ICON,
    VIEW_NOTES_TITLE,
)
from notegate.core.exceptions import NoteSubmissionError

logger = structlog.get_logger()


# ---------------------------------------------------------------------------
# Add note
# ---------------------------------------------------------------------------


@dataclass
class NoteDraft:
    publish_state: NotePublishState = NotePublishState.PERSONAL
    text: str = ""


@dataclass
class AddNoteController:
    """State behind the "add a note" button and its modal."""

    transport: NoteTransport
    user: User
    scope_key: ScopeKey
    title: str = ADD_NOTE_TITLE
    css_class: str = ADD_NOTE_CSS_CLASS
    note: NoteDraft = field(default_factory=NoteDraft)
    processing: bool = False
    is_open: bool = False
    message: str = ""

    def open(self) -> None:
        """Start a fresh draft and show the modal."""
        self.note = NoteDraft()
        self.processing = False
        self.message = ""
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    async def submit(self) -> SubmitResult:
        """
        Send the current draft.

        On success the modal closes and ``message`` tells whether the note
        was delivered or stored offline.  On failure ``processing`` is reset
        so the user can retry, and NoteSubmissionError is raised.
        """
        if not self.note.text.strip():
            raise NoteSubmissionError("Note text must not be empty")

        self.processing = True
        try:
            result = await self.transport.submit_note(
                self.user.id,
                self.scope_key,
                self.note.publish_state,
                self.note.text,
            )
        except NoteSubmissionError:
            self.processing = False
            raise
        except Exception as exc:
            self.processing = False
            logger.warning(
                "note_submit_failed",
                user_id=self.user.id,
                scope_key=self.scope_key,
                error=str(exc),
            )
            raise NoteSubmissionError(f"Could not add note: {exc}") from exc

        self.message = NOTE_CREATED_MESSAGE if result.delivered else STORED_OFFLINE_MESSAGE
        logger.info(
            "note_submitted",
            user_id=self.user.id,
            scope_key=self.scope_key,
            queued_offline=result.queued_offline,
        )
        self.close()
        return result


@dataclass(frozen=True)
class AddNoteControllerFactory:
    transport: NoteTransport
    user: User
    scope_key: ScopeKey

    def create(self) -> AddNoteController:
        return AddNoteController(
            transport=self.transport,
            user=self.user,
            scope_key=self.scope_key,
        )


# ---------------------------------------------------------------------------
# Courses nav
# ---------------------------------------------------------------------------


@dataclass
class CoursesNavController:
    """Navigation entry that opens the notes list for a course."""

    navigator: Navigator
    scope_key: ScopeKey
    icon: str = VIEW_NOTES_ICON
    title: str = VIEW_NOTES_TITLE
    css_class: str = VIEW_NOTES_CSS_CLASS

    def action(self, course: Any) -> None:
        self.navigator.go(NOTES_TYPES_STATE, {"course": course})


@dataclass(frozen=True)
class CoursesNavControllerFactory:
    navigator: Navigator
    scope_key: ScopeKey

    def create(self) -> CoursesNavController:
        return CoursesNavController(navigator=self.navigator, scope_key=self.scope_key)
