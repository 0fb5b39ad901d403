"""
Process startup for the notes add-on.

``build_runtime()`` is the one place configuration is applied: it sets up
logging from ``[logging]``, builds and initialises the NotesAddon, and
creates a PeriodicTaskRunner from ``[scheduler]`` with the notes sync task
registered::

    runtime = load_runtime(oracle=..., session=..., transport=...,
                           synchronizer=..., navigator=...)
    await runtime.runner.run_forever(online_check=host.is_online)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from notegate.core.addon import NotesAddon
from notegate.core.capability.ports import (
    CapabilityOracle,
    Navigator,
    NotesSynchronizer,
    NoteTransport,
    SessionContext,
)
from notegate.core.config import NotegateConfig, load_config
from notegate.core.cron import PeriodicTaskRunner
from notegate.core.events.bus import EventBus
from notegate.core.logging import configure_from_config


@dataclass(frozen=True)
class NotesRuntime:
    config: NotegateConfig
    addon: NotesAddon
    runner: PeriodicTaskRunner


def build_runtime(
    config: NotegateConfig,
    *,
    oracle: CapabilityOracle,
    session: SessionContext,
    transport: NoteTransport,
    synchronizer: NotesSynchronizer,
    navigator: Navigator,
    bus: EventBus | None = None,
) -> NotesRuntime:
    configure_from_config(config.logging)

    addon = NotesAddon(
        oracle=oracle,
        session=session,
        transport=transport,
        synchronizer=synchronizer,
        navigator=navigator,
        bus=bus if bus is not None else EventBus(),
    )
    addon.init()

    runner = PeriodicTaskRunner.from_config(config.scheduler)
    runner.register(addon.sync)
    return NotesRuntime(config=config, addon=addon, runner=runner)


def load_runtime(
    path: Path | str | None = None,
    *,
    oracle: CapabilityOracle,
    session: SessionContext,
    transport: NoteTransport,
    synchronizer: NotesSynchronizer,
    navigator: Navigator,
    bus: EventBus | None = None,
) -> NotesRuntime:
    """Load the TOML config (see ``load_config``) and build the runtime from it."""
    return build_runtime(
        load_config(path),
        oracle=oracle,
        session=session,
        transport=transport,
        synchronizer=synchronizer,
        navigator=navigator,
        bus=bus,
    )
