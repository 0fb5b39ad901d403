"""notegate constants: scheduling, navigation targets, and filesystem layout."""

from __future__ import annotations

import os
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Periodic synchronisation
# ---------------------------------------------------------------------------

NOTES_SYNC_INTERVAL_MS = 600_000  # 10 minutes between notes sync runs
NOTES_SYNC_TASK_NAME = "notes_sync"

DEFAULT_SCHEDULER_TICK_SECONDS = 1.0

# ---------------------------------------------------------------------------
# UI bindings
# ---------------------------------------------------------------------------

NOTES_TYPES_STATE = "site.notes-types"  # navigation target for the notes list

ADD_NOTE_TITLE = "mma.notes.addnewnote"
ADD_NOTE_CSS_CLASS = "mma-notes-add-handler"
VIEW_NOTES_TITLE = "mma.notes.notes"
VIEW_NOTES_CSS_CLASS = "mma-notes-view-handler"
VIEW_NOTES_ICON = "ion-ios-list"

NOTE_CREATED_MESSAGE = "mma.notes.eventnotecreated"
STORED_OFFLINE_MESSAGE = "mm.core.datastoredoffline"

# Key in the course navigation options that carries a precomputed notes flag.
NAV_OPTION_NOTES = "notes"

# ---------------------------------------------------------------------------
# Filesystem layout
# ---------------------------------------------------------------------------

CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "NOTEGATE_CONFIG"


def _default_config_dir() -> Path:
    """
    Return the platform-appropriate notegate config directory.

    macOS : ~/Library/Application Support/notegate
    Linux : ~/.config/notegate
    Other : ~/.notegate
    """
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "notegate"
    if sys.platform.startswith("linux"):
        xdg = Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))
        return xdg / "notegate"
    return Path.home() / ".notegate"
