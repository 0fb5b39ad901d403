"""notegate configuration: Pydantic model and TOML loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from notegate.core.constants import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    DEFAULT_SCHEDULER_TICK_SECONDS,
    _default_config_dir,
)
from notegate.core.exceptions import ConfigError, ConfigNotFoundError

# ---------------------------------------------------------------------------
# Sub-models
# ---------------------------------------------------------------------------


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "text"  # "text" | "json"

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {sorted(allowed)}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v.lower() not in ("text", "json"):
            raise ValueError("Log format must be 'text' or 'json'")
        return v.lower()

    @property
    def json_output(self) -> bool:
        return self.format == "json"


class SchedulerConfig(BaseModel):
    """In-process periodic task runner settings.

    The notes sync interval itself is fixed; this only controls how often
    the runner wakes up to look for due tasks.
    """

    enabled: bool = True
    tick_seconds: float = DEFAULT_SCHEDULER_TICK_SECONDS

    @field_validator("tick_seconds")
    @classmethod
    def validate_tick(cls, v: float) -> float:
        if not (0.0 < v <= 60.0):
            raise ValueError("tick_seconds must be greater than 0 and at most 60")
        return v


# ---------------------------------------------------------------------------
# Root config
# ---------------------------------------------------------------------------


class NotegateConfig(BaseModel):
    """Root notegate configuration model."""

    model_config = {"extra": "forbid"}

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)


# ---------------------------------------------------------------------------
# Load
# ---------------------------------------------------------------------------


def _config_file_path() -> Path:
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        return Path(env_path)
    return _default_config_dir() / CONFIG_FILENAME


def load_config(path: Path | str | None = None) -> NotegateConfig:
    """
    Load NotegateConfig from a TOML file, overlaid with environment variables.

    Priority (highest to lowest):
      1. Environment variables (NOTEGATE_LOG_LEVEL, NOTEGATE_LOG_FORMAT)
      2. Config file ($NOTEGATE_CONFIG or platform config dir / config.toml)
    """
    import tomllib

    cfg_path = Path(path) if path is not None else _config_file_path()

    if not cfg_path.exists():
        raise ConfigNotFoundError(f"Config file not found: {cfg_path}")

    try:
        with open(cfg_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {cfg_path}: {exc}") from exc

    _apply_env_overrides(data)

    try:
        return NotegateConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid config at {cfg_path}: {exc}") from exc


def _apply_env_overrides(data: dict[str, Any]) -> None:
    """Overlay NOTEGATE_* environment variables onto parsed TOML."""
    if level := os.environ.get("NOTEGATE_LOG_LEVEL", ""):
        data.setdefault("logging", {})["level"] = level
    if fmt := os.environ.get("NOTEGATE_LOG_FORMAT", ""):
        data.setdefault("logging", {})["format"] = fmt
