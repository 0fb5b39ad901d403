"""Unit tests for AddNoteHandler."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from notegate.core.capability.cache import EnablementCache
from notegate.core.capability.models import Capability, User
from notegate.core.exceptions import CapabilityLookupError
from notegate.core.handlers.add_note import AddNoteHandler
from notegate.core.handlers.controllers import AddNoteControllerFactory

SESSION_USER_ID = 1


def _oracle(scoped: bool = True, globally: bool = True) -> AsyncMock:
    oracle = AsyncMock()
    oracle.is_enabled_for_scope.return_value = scoped
    oracle.is_enabled_globally.return_value = globally
    return oracle


def _handler(oracle: AsyncMock) -> AddNoteHandler:
    session = MagicMock()
    session.current_user_id.return_value = SESSION_USER_ID
    return AddNoteHandler(EnablementCache(oracle), oracle, session, AsyncMock())


class TestIsEnabled:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("flag", [True, False])
    async def test_delegates_to_global_flag(self, flag: bool) -> None:
        oracle = _oracle(globally=flag)
        handler = _handler(oracle)

        assert await handler.is_enabled() is flag
        oracle.is_enabled_globally.assert_awaited_once_with(Capability.ADD_NOTE)
        oracle.is_enabled_for_scope.assert_not_called()


class TestIsEnabledForUser:
    @pytest.mark.asyncio
    async def test_no_course_is_disabled(self) -> None:
        oracle = _oracle()
        handler = _handler(oracle)

        assert await handler.is_enabled_for_user(User(id=2), None) is False
        oracle.is_enabled_for_scope.assert_not_called()

    @pytest.mark.asyncio
    async def test_self_note_is_disabled(self) -> None:
        oracle = _oracle()
        handler = _handler(oracle)

        assert await handler.is_enabled_for_user(User(id=SESSION_USER_ID), 5) is False
        oracle.is_enabled_for_scope.assert_not_called()

    @pytest.mark.asyncio
    async def test_other_user_consults_oracle_once(self) -> None:
        oracle = _oracle(scoped=True)
        handler = _handler(oracle)
        other = User(id=2, fullname="Other Student")

        assert await handler.is_enabled_for_user(other, 5) is True
        assert await handler.is_enabled_for_user(other, 5) is True

        oracle.is_enabled_for_scope.assert_awaited_once_with(Capability.ADD_NOTE, 5)

    @pytest.mark.asyncio
    async def test_cache_is_shared_across_users_in_same_course(self) -> None:
        oracle = _oracle(scoped=False)
        handler = _handler(oracle)

        assert await handler.is_enabled_for_user(User(id=2), 5) is False
        assert await handler.is_enabled_for_user(User(id=3), 5) is False
        assert oracle.is_enabled_for_scope.await_count == 1

    @pytest.mark.asyncio
    async def test_options_do_not_affect_decision(self) -> None:
        oracle = _oracle(scoped=True)
        handler = _handler(oracle)

        result = await handler.is_enabled_for_user(
            User(id=2), 5, nav_options={"notes": False}, adm_options={"notes": False}
        )
        assert result is True

    @pytest.mark.asyncio
    async def test_lookup_failure_propagates(self) -> None:
        oracle = _oracle()
        oracle.is_enabled_for_scope.side_effect = ConnectionError("offline")
        handler = _handler(oracle)

        with pytest.raises(CapabilityLookupError):
            await handler.is_enabled_for_user(User(id=2), 5)


class TestControllerFactory:
    def test_factory_captures_arguments(self) -> None:
        handler = _handler(_oracle())
        user = User(id=2)

        factory = handler.get_controller_factory(user, 5)

        assert isinstance(factory, AddNoteControllerFactory)
        assert factory.user == user
        assert factory.scope_key == 5
