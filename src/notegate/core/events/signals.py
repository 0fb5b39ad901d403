"""Lifecycle signals published by the host application."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from notegate.core.capability.models import ScopeKey


class LifecycleSignal(StrEnum):
    SESSION_LOGOUT = "session_logout"
    COURSES_LIST_REFRESHED = "courses_list_refreshed"
    USER_PROFILE_REFRESHED = "user_profile_refreshed"


@dataclass(frozen=True)
class UserProfileRefreshed:
    """Payload of USER_PROFILE_REFRESHED."""

    scope_key: ScopeKey | None
    user_id: int | None = None
