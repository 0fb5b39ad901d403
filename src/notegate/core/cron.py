"""
PeriodicTaskRunner — in-process scheduler for PeriodicTaskHandlers.

The runner wakes up every ``tick_seconds`` and executes each registered
handler whose interval has elapsed since its last run.  Handlers that use
the network are skipped while the host reports being offline and run on
the first tick after it comes back.

Failures are logged and the handler is retried once its interval has
elapsed again.  Handlers never see retries of their own.

Lifecycle::

    runner = PeriodicTaskRunner(tick_seconds=1.0)
    runner.register(NotesSyncHandler(synchronizer))
    await runner.run_forever(online_check=host.is_online)   # until stop()
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable

import structlog

from notegate.core.config import SchedulerConfig
from notegate.core.constants import DEFAULT_SCHEDULER_TICK_SECONDS
from notegate.core.handlers.base import PeriodicTaskHandler

logger = structlog.get_logger()


class PeriodicTaskRunner:
    def __init__(
        self,
        tick_seconds: float = DEFAULT_SCHEDULER_TICK_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        enabled: bool = True,
    ) -> None:
        self._tick_seconds = tick_seconds
        self._clock = clock
        self.enabled = enabled
        self._handlers: dict[str, PeriodicTaskHandler] = {}
        self._last_run: dict[str, float] = {}
        self._stop_event = asyncio.Event()

    @classmethod
    def from_config(
        cls,
        config: SchedulerConfig,
        clock: Callable[[], float] = time.monotonic,
    ) -> PeriodicTaskRunner:
        return cls(tick_seconds=config.tick_seconds, clock=clock, enabled=config.enabled)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, handler: PeriodicTaskHandler) -> None:
        if handler.name in self._handlers:
            raise ValueError(f"Periodic task {handler.name!r} already registered")
        self._handlers[handler.name] = handler
        logger.info(
            "periodic_task_registered",
            task=handler.name,
            interval_ms=handler.get_interval_ms(),
            uses_network=handler.uses_network(),
        )

    def handlers(self) -> list[PeriodicTaskHandler]:
        return list(self._handlers.values())

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def is_due(self, handler: PeriodicTaskHandler, now: float | None = None) -> bool:
        last = self._last_run.get(handler.name)
        if last is None:
            return True
        now = self._clock() if now is None else now
        return (now - last) * 1000 >= handler.get_interval_ms()

    async def run_due(self, now: float | None = None, online: bool = True) -> list[str]:
        """Execute every due handler once.  Returns the names that ran."""
        now = self._clock() if now is None else now
        ran: list[str] = []
        for handler in list(self._handlers.values()):
            if not self.is_due(handler, now):
                continue
            if handler.uses_network() and not online:
                logger.debug("periodic_task_skipped_offline", task=handler.name)
                continue
            self._last_run[handler.name] = now
            await self._execute(handler)
            ran.append(handler.name)
        return ran

    async def force_execute(self, name: str, site_id: str | None = None) -> None:
        """Run one handler immediately, regardless of its interval.

        Unlike scheduled runs, failures propagate to the caller.
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise ValueError(f"Periodic task {name!r} not registered")
        # A failed forced run leaves the regular schedule untouched.
        await handler.execute(site_id)
        self._last_run[name] = self._clock()

    async def _execute(self, handler: PeriodicTaskHandler) -> None:
        started = self._clock()
        try:
            await handler.execute()
        except Exception:
            logger.exception("periodic_task_failed", task=handler.name)
            return
        logger.debug(
            "periodic_task_done",
            task=handler.name,
            elapsed_ms=int((self._clock() - started) * 1000),
        )

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    async def run_forever(self, online_check: Callable[[], bool] | None = None) -> None:
        """Tick until ``stop()`` is called.

        Returns at once when the runner is disabled.  A ``stop()`` issued before
        the loop first runs is honoured; the stop flag is reset on exit so the
        runner can be started again.
        """
        if not self.enabled:
            logger.info("periodic_runner_disabled", tasks=len(self._handlers))
            return
        logger.info("periodic_runner_started", tasks=len(self._handlers))
        while not self._stop_event.is_set():
            online = online_check() if online_check is not None else True
            await self.run_due(online=online)
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._tick_seconds)
            except TimeoutError:
                pass
        self._stop_event.clear()
        logger.info("periodic_runner_stopped")

    def stop(self) -> None:
        self._stop_event.set()
