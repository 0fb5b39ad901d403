"""
Capability domain models.

A Capability is a named feature gate of the notes add-on. Decisions about a
capability are scoped to a course, identified by its ScopeKey.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

ScopeKey = int  # course id; 0 / None means "no active course"


class Capability(StrEnum):
    ADD_NOTE = "add_note"
    VIEW_NOTES = "view_notes"


class CourseAccessMethod(StrEnum):
    DEFAULT = "default"
    GUEST = "guest"


class NotePublishState(StrEnum):
    PERSONAL = "personal"
    COURSE = "course"
    SITE = "site"


@dataclass(frozen=True)
class User:
    """The user a note would be written about."""

    id: int
    fullname: str = ""


@dataclass(frozen=True)
class AccessData:
    """How the current user is accessing a course."""

    type: CourseAccessMethod = CourseAccessMethod.DEFAULT

    @property
    def is_guest(self) -> bool:
        return self.type == CourseAccessMethod.GUEST


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of a successful note submission."""

    delivered: bool  # False → stored offline, delivered by the next sync

    @property
    def queued_offline(self) -> bool:
        return not self.delivered
