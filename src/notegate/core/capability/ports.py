"""
Collaborator ports.

The host application provides these. notegate never talks to the network,
the session store or the router directly.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from notegate.core.capability.models import (
    Capability,
    NotePublishState,
    ScopeKey,
    SubmitResult,
)


class CapabilityOracle(Protocol):
    """Authoritative (and possibly slow) source of enablement answers."""

    async def is_enabled_globally(self, capability: Capability) -> bool: ...

    async def is_enabled_for_scope(self, capability: Capability, scope_key: ScopeKey) -> bool: ...


class SessionContext(Protocol):
    def current_user_id(self) -> int | None: ...


class NoteTransport(Protocol):
    async def submit_note(
        self,
        user_id: int,
        scope_key: ScopeKey,
        publish_state: NotePublishState,
        text: str,
    ) -> SubmitResult: ...


class NotesSynchronizer(Protocol):
    async def sync_all_notes(self, site_id: str | None = None) -> None: ...


class Navigator(Protocol):
    def go(self, state: str, params: Mapping[str, Any]) -> None: ...
