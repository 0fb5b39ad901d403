"""
Tests for structured logging configuration.

Validates:
  1. configure_logging() is idempotent (safe to call twice)
  2. JSON output mode produces valid JSON
  3. stdlib loggers also route through the structlog pipeline
  4. Core modules log through structlog
"""

from __future__ import annotations

import json
import logging

import structlog

from notegate.core.config import LoggingConfig
from notegate.core.logging import configure_from_config, configure_logging


class TestConfigureLogging:
    """configure_logging() sets up structlog + stdlib correctly."""

    def setup_method(self) -> None:
        logging.getLogger().handlers.clear()
        structlog.reset_defaults()

    def test_idempotent_double_call(self) -> None:
        configure_logging(level="DEBUG")
        handler_count_1 = len(logging.getLogger().handlers)

        configure_logging(level="DEBUG")
        handler_count_2 = len(logging.getLogger().handlers)

        assert handler_count_1 == handler_count_2
        assert handler_count_1 >= 1

    def test_sets_root_log_level(self) -> None:
        configure_logging(level="WARNING")
        assert logging.getLogger().level == logging.WARNING

        configure_logging(level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self) -> None:
        configure_logging(level="CHATTY")
        assert logging.getLogger().level == logging.INFO

    def test_quiets_asyncio_logger(self) -> None:
        configure_logging(level="DEBUG")
        assert logging.getLogger("asyncio").level == logging.WARNING

    def test_json_output_mode_configures_without_error(self) -> None:
        configure_logging(level="DEBUG", json_output=True)
        log = structlog.get_logger("test.json")
        log.info("test_event", capability="add_note", scope_key=42)

    def test_json_renderer_produces_valid_json(self) -> None:
        renderer = structlog.processors.JSONRenderer()
        result = renderer(
            None,
            "info",
            {"event": "enablement_cache_miss", "capability": "add_note", "scope_key": 5},
        )
        parsed = json.loads(result)
        assert parsed["event"] == "enablement_cache_miss"
        assert parsed["scope_key"] == 5

    def test_stdlib_loggers_still_work(self) -> None:
        configure_logging(level="DEBUG")
        logging.getLogger("notegate.test.stdlib").info("stdlib message: %s", "test")

    def test_configure_from_config_applies_level_and_json(self) -> None:
        configure_from_config(LoggingConfig(level="warning", format="json"))

        root = logging.getLogger()
        assert root.level == logging.WARNING
        formatters = [h.formatter for h in root.handlers]
        assert any(
            isinstance(f, structlog.stdlib.ProcessorFormatter)
            and any(isinstance(p, structlog.processors.JSONRenderer) for p in f.processors)
            for f in formatters
        )

    def test_reconfigure_switches_renderer_without_new_handler(self) -> None:
        configure_logging(level="INFO")
        configure_logging(level="INFO", json_output=True)

        ours = [
            h
            for h in logging.getLogger().handlers
            if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
        ]
        assert len(ours) == 1
        assert any(
            isinstance(p, structlog.processors.JSONRenderer) for p in ours[0].formatter.processors
        )


class TestStructlogIntegration:
    """Core modules log through structlog.get_logger()."""

    def test_cache_uses_structlog(self) -> None:
        import notegate.core.capability.cache as cache_mod

        assert hasattr(cache_mod.logger, "bind")

    def test_runner_uses_structlog(self) -> None:
        import notegate.core.cron as cron_mod

        assert hasattr(cron_mod.logger, "bind")


class TestEnumRendering:
    def test_enum_values_are_rendered_plain(self) -> None:
        from notegate.core.capability.models import Capability
        from notegate.core.logging import _plain_enums

        event = _plain_enums(None, "debug", {"event": "hit", "capability": Capability.ADD_NOTE})

        assert event["capability"] == "add_note"
        assert type(event["capability"]) is str
