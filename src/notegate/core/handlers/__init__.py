"""Notes handlers exposed to the host UI shell and scheduler."""

from notegate.core.handlers.add_note import AddNoteHandler
from notegate.core.handlers.base import CapabilityHandler, PeriodicTaskHandler
from notegate.core.handlers.controllers import (
    AddNoteController,
    AddNoteControllerFactory,
    CoursesNavController,
    CoursesNavControllerFactory,
)
from notegate.core.handlers.courses_nav import CoursesNavHandler
from notegate.core.handlers.sync import NotesSyncHandler

__all__ = [
    "AddNoteController",
    "AddNoteControllerFactory",
    "AddNoteHandler",
    "CapabilityHandler",
    "CoursesNavController",
    "CoursesNavControllerFactory",
    "CoursesNavHandler",
    "NotesSyncHandler",
    "PeriodicTaskHandler",
]
