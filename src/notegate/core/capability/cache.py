"""
EnablementCache — per-capability memoisation in front of the CapabilityOracle.

One table per Capability, keyed by ScopeKey.  Each entry holds the lookup
task for that key, stored *before* the oracle answers, so every caller that
asks while the lookup is in flight awaits the same task.  At most one oracle
request is outstanding per (capability, scope_key).

Invariants:
  - A falsy scope key is always disabled and never reaches the oracle.
  - Successful answers stay cached until invalidated.  There is no TTL.
  - Failed lookups are never cached: the entry is dropped so the next
    query asks the oracle again.
  - Entries are versioned.  A lookup whose entry was invalidated while it
    was in flight still answers the callers already waiting on it, but it
    never writes its result back into the table.

All methods must be called from the event loop thread.
"""

from __future__ import annotations

import asyncio
import functools
import itertools
from dataclasses import dataclass

import structlog

from notegate.core.capability.models import Capability, ScopeKey
from notegate.core.capability.ports import CapabilityOracle
from notegate.core.exceptions import CapabilityLookupError

logger = structlog.get_logger()


@dataclass(frozen=True)
class _CacheEntry:
    version: int
    task: asyncio.Task[bool]

    @property
    def resolved(self) -> bool:
        return self.task.done() and not self.task.cancelled() and self.task.exception() is None


class EnablementCache:
    """Coalescing enablement cache with explicit invalidation."""

    def __init__(self, oracle: CapabilityOracle) -> None:
        self._oracle = oracle
        self._tables: dict[Capability, dict[ScopeKey, _CacheEntry]] = {
            capability: {} for capability in Capability
        }
        self._versions = itertools.count(1)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    async def get(self, capability: Capability, scope_key: ScopeKey | None) -> bool:
        """Return whether *capability* is enabled in *scope_key*.

        Raises CapabilityLookupError if the oracle fails.
        """
        if not scope_key:
            return False

        entry = self._tables[capability].get(scope_key)
        if entry is None:
            entry = self._start_lookup(capability, scope_key)
        else:
            logger.debug(
                "enablement_cache_hit",
                capability=str(capability),
                scope_key=scope_key,
                pending=not entry.task.done(),
            )
        # Shielded: a cancelled caller must not cancel a lookup others share.
        return await asyncio.shield(entry.task)

    def _start_lookup(self, capability: Capability, scope_key: ScopeKey) -> _CacheEntry:
        logger.debug("enablement_cache_miss", capability=str(capability), scope_key=scope_key)
        task = asyncio.get_running_loop().create_task(
            self._lookup(capability, scope_key),
            name=f"enablement_{capability}_{scope_key}",
        )
        entry = _CacheEntry(version=next(self._versions), task=task)
        self._tables[capability][scope_key] = entry
        task.add_done_callback(functools.partial(self._settle, capability, scope_key, entry.version))
        return entry

    async def _lookup(self, capability: Capability, scope_key: ScopeKey) -> bool:
        try:
            enabled = await self._oracle.is_enabled_for_scope(capability, scope_key)
        except CapabilityLookupError:
            raise
        except Exception as exc:
            raise CapabilityLookupError(
                str(capability),
                scope_key,
                f"Oracle failed for {capability!s} in scope {scope_key!r}: {exc}",
            ) from exc
        return bool(enabled)

    def _settle(
        self,
        capability: Capability,
        scope_key: ScopeKey,
        version: int,
        task: asyncio.Task[bool],
    ) -> None:
        table = self._tables[capability]
        current = table.get(scope_key)
        owns_entry = current is not None and current.version == version

        failed = task.cancelled() or task.exception() is not None
        if failed:
            if owns_entry:
                del table[scope_key]
            if not task.cancelled():
                logger.warning(
                    "enablement_lookup_failed",
                    capability=str(capability),
                    scope_key=scope_key,
                    error=str(task.exception()),
                )
            return

        if not owns_entry:
            logger.debug(
                "enablement_lookup_discarded",
                capability=str(capability),
                scope_key=scope_key,
                version=version,
            )
            return

        logger.debug(
            "enablement_cache_store",
            capability=str(capability),
            scope_key=scope_key,
            enabled=task.result(),
        )

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------

    def invalidate(self, capability: Capability, scope_key: ScopeKey | None = None) -> None:
        """Drop the entry for *scope_key*, or the whole table if no key is given.

        Never waits for in-flight lookups.
        """
        table = self._tables[capability]
        if scope_key:
            removed = table.pop(scope_key, None) is not None
            logger.debug(
                "enablement_cache_invalidated",
                capability=str(capability),
                scope_key=scope_key,
                removed=removed,
            )
        else:
            count = len(table)
            table.clear()
            logger.debug("enablement_cache_cleared", capability=str(capability), entries=count)

    def clear(self) -> None:
        """Drop every entry of every capability."""
        for capability in self._tables:
            self.invalidate(capability)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def contains(self, capability: Capability, scope_key: ScopeKey) -> bool:
        """True if *scope_key* has an entry (resolved or in flight)."""
        return scope_key in self._tables[capability]

    def cached_keys(self, capability: Capability) -> frozenset[ScopeKey]:
        return frozenset(self._tables[capability])

    def peek(self, capability: Capability, scope_key: ScopeKey) -> bool | None:
        """Return the resolved decision for *scope_key*, or None if unknown or pending."""
        entry = self._tables[capability].get(scope_key)
        if entry is None or not entry.resolved:
            return None
        return entry.task.result()
