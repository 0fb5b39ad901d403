"""
notegate — capability gating for the course notes add-on.

notegate decides whether the notes features ("add a note", "view notes for a
course") are currently permitted for a user and course, caches those decisions
in front of a slow remote authority, drops cached decisions when lifecycle
events make them stale, and describes the periodic notes synchronisation task
to the host scheduler.

Package layout (src/notegate/):
  core/capability/  — capability models, collaborator ports, enablement cache
  core/events/      — lifecycle event bus and cache invalidation binding
  core/handlers/    — add-note, courses-nav and sync handlers, controllers
  core/cron.py      — in-process periodic task runner
  core/addon.py     — NotesAddon composition root
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
