"""Capability models, collaborator ports and the enablement cache."""

from notegate.core.capability.cache import EnablementCache
from notegate.core.capability.models import (
    AccessData,
    Capability,
    CourseAccessMethod,
    NotePublishState,
    ScopeKey,
    SubmitResult,
    User,
)

__all__ = [
    "AccessData",
    "Capability",
    "CourseAccessMethod",
    "EnablementCache",
    "NotePublishState",
    "ScopeKey",
    "SubmitResult",
    "User",
]
