"""
Structured logging configuration for notegate.

Uses structlog so that capability decisions, cache traffic and scheduler
runs produce key-value log entries that carry their context (capability,
scope_key, task) without formatting it into message strings.

Setup:
    The host calls ``configure_logging()`` (or ``configure_from_config()``
    with the ``[logging]`` section) once at startup.  Every module then uses::

        import structlog
        logger = structlog.get_logger()

        logger.debug("enablement_cache_miss", capability="add_note", scope_key=42)
        # → {"event": "enablement_cache_miss", "capability": "add_note",
        #    "scope_key": 42, "timestamp": "2026-...", "level": "debug"}
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import Any

import structlog

from notegate.core.config import LoggingConfig

# Libraries whose debug output drowns scheduler and cache events.
_QUIET_LOGGERS = ("asyncio",)


def _plain_enums(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Render StrEnum values (Capability, LifecycleSignal) as their plain value."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
    return event_dict


def _processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _plain_enums,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(json_output: bool) -> structlog.types.Processor:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _has_structlog_handler(root: logging.Logger) -> bool:
    return any(
        isinstance(getattr(h, "formatter", None), structlog.stdlib.ProcessorFormatter)
        for h in root.handlers
    )


def configure_logging(
    *,
    level: str = "INFO",
    json_output: bool = False,
) -> None:
    """
    Configure structlog + stdlib logging for the process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
        json_output: JSON lines if True, coloured console output otherwise.

    Safe to call more than once: the root handler is only installed once,
    while level and renderer follow the latest call.
    """
    shared = _processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Host modules using logging.getLogger() go through the same pipeline.
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(json_output),
        ],
        foreign_pre_chain=shared,
    )

    root = logging.getLogger()
    if _has_structlog_handler(root):
        for handler in root.handlers:
            if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
                handler.setFormatter(formatter)
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_from_config(config: LoggingConfig) -> None:
    """Apply the ``[logging]`` section of NotegateConfig."""
    configure_logging(level=config.level, json_output=config.json_output)
