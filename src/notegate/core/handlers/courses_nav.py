"""CoursesNavHandler — gate for the "notes" entry in a course's navigation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from notegate.core.capability.cache import EnablementCache
from notegate.core.capability.models import AccessData, Capability, ScopeKey
from notegate.core.capability.ports import CapabilityOracle, Navigator
from notegate.core.constants import NAV_OPTION_NOTES
from notegate.core.handlers.base import CapabilityHandler
from notegate.core.handlers.controllers import CoursesNavControllerFactory


class CoursesNavHandler(CapabilityHandler):
    name = "notes_courses_nav"
    capability = Capability.VIEW_NOTES

    def __init__(
        self,
        cache: EnablementCache,
        oracle: CapabilityOracle,
        navigator: Navigator,
    ) -> None:
        self._cache = cache
        self._oracle = oracle
        self._navigator = navigator

    async def is_enabled(self) -> bool:
        return await self._oracle.is_enabled_globally(self.capability)

    async def is_enabled_for_course(
        self,
        scope_key: ScopeKey | None,
        access_data: AccessData | None = None,
        nav_options: Mapping[str, Any] | None = None,
        adm_options: Mapping[str, Any] | None = None,
    ) -> bool:
        """
        Return True if the notes entry should be shown for the course.

        Evaluation order (first match wins):
          1. Guest access → False
          2. Precomputed ``nav_options["notes"]`` (when not None) → returned as is
          3. Enablement cache / oracle
        """
        if access_data is not None and access_data.is_guest:
            return False
        if nav_options is not None and nav_options.get(NAV_OPTION_NOTES) is not None:
            return nav_options[NAV_OPTION_NOTES]
        return await self._cache.get(self.capability, scope_key)

    def get_controller_factory(self, scope_key: ScopeKey) -> CoursesNavControllerFactory:
        return CoursesNavControllerFactory(navigator=self._navigator, scope_key=scope_key)
