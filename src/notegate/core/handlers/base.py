"""
Handler interfaces consumed by the host application.

CapabilityHandler  — feature gate shown by the host UI shell
PeriodicTaskHandler — recurring job run by the host scheduler

Handlers are built once at startup and live for the process lifetime.
They hold no mutable state of their own.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class CapabilityHandler(ABC):
    """A feature gate with a global enablement check."""

    name: str = ""

    @abstractmethod
    async def is_enabled(self) -> bool:
        """Return True if the feature is enabled on the site at all."""


class PeriodicTaskHandler(ABC):
    """A recurring job description for the host scheduler."""

    name: str = ""

    @abstractmethod
    async def execute(self, site_id: str | None = None) -> None:
        """Run the job for *site_id*, or for every site if None.

        Raises on unrecoverable failure; retrying is the scheduler's call.
        """

    @abstractmethod
    def get_interval_ms(self) -> int:
        """Minimum spacing between consecutive runs, in milliseconds."""

    @abstractmethod
    def is_sync(self) -> bool: ...

    @abstractmethod
    def uses_network(self) -> bool: ...
