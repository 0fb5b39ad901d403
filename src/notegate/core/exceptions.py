"""notegate exception hierarchy."""

from __future__ import annotations

from typing import Any


class NotegateError(Exception):
    """Base exception for all notegate errors."""


class ConfigError(NotegateError):
    """Raised when the configuration is invalid or cannot be read."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file does not exist."""


class CapabilityLookupError(NotegateError):
    """Raised when the capability oracle fails to answer an enablement query.

    Lookup failures are transient: they are never cached, so the next
    query for the same capability and scope asks the oracle again.
    """

    def __init__(self, capability: str, scope_key: Any, message: str = "") -> None:
        self.capability = capability
        self.scope_key = scope_key
        super().__init__(
            message or f"Enablement lookup failed for {capability!r} in scope {scope_key!r}"
        )


class NoteSubmissionError(NotegateError):
    """Raised when a note cannot be submitted (transport or validation failure)."""
