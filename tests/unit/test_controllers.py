"""Unit tests for the add-note and courses-nav controllers."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from notegate.core.capability.models import NotePublishState, SubmitResult, User
from notegate.core.constants import (
    NOTE_CREATED_MESSAGE,
    NOTES_TYPES_STATE,
    STORED_OFFLINE_MESSAGE,
)
from notegate.core.exceptions import NoteSubmissionError
from notegate.core.handlers.controllers import (
    AddNoteController,
    AddNoteControllerFactory,
    CoursesNavControllerFactory,
)

OTHER = User(id=2, fullname="Other Student")


def _controller(result: SubmitResult | None = None) -> tuple[AddNoteController, AsyncMock]:
    transport = AsyncMock()
    transport.submit_note.return_value = result or SubmitResult(delivered=True)
    controller = AddNoteControllerFactory(transport=transport, user=OTHER, scope_key=5).create()
    controller.open()
    controller.note.text = "Missed two labs"
    return controller, transport


class TestAddNoteFactory:
    def test_each_create_is_fresh(self) -> None:
        factory = AddNoteControllerFactory(transport=AsyncMock(), user=OTHER, scope_key=5)

        a = factory.create()
        b = factory.create()

        assert a is not b
        assert a.user == b.user == OTHER
        assert a.scope_key == 5

    def test_open_resets_draft(self) -> None:
        controller, _ = _controller()
        controller.note.publish_state = NotePublishState.SITE
        controller.processing = True

        controller.open()

        assert controller.is_open is True
        assert controller.processing is False
        assert controller.note.publish_state == NotePublishState.PERSONAL
        assert controller.note.text == ""


class TestAddNoteSubmit:
    @pytest.mark.asyncio
    async def test_delivered_note(self) -> None:
        controller, transport = _controller(SubmitResult(delivered=True))

        result = await controller.submit()

        assert result.queued_offline is False
        assert controller.message == NOTE_CREATED_MESSAGE
        assert controller.is_open is False
        transport.submit_note.assert_awaited_once_with(
            2, 5, NotePublishState.PERSONAL, "Missed two labs"
        )

    @pytest.mark.asyncio
    async def test_queued_offline_is_success(self) -> None:
        controller, _ = _controller(SubmitResult(delivered=False))

        result = await controller.submit()

        assert result.queued_offline is True
        assert controller.message == STORED_OFFLINE_MESSAGE
        assert controller.is_open is False

    @pytest.mark.asyncio
    async def test_transport_failure_unfreezes_retry(self) -> None:
        controller, transport = _controller()
        transport.submit_note.side_effect = ConnectionError("site unreachable")

        with pytest.raises(NoteSubmissionError) as exc_info:
            await controller.submit()

        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert controller.processing is False
        assert controller.is_open is True
        assert controller.message == ""

    @pytest.mark.asyncio
    async def test_submission_error_passes_through(self) -> None:
        controller, transport = _controller()
        error = NoteSubmissionError("Invalid publish state")
        transport.submit_note.side_effect = error

        with pytest.raises(NoteSubmissionError) as exc_info:
            await controller.submit()

        assert exc_info.value is error
        assert controller.processing is False

    @pytest.mark.asyncio
    async def test_retry_after_failure(self) -> None:
        controller, transport = _controller()
        transport.submit_note.side_effect = [
            ConnectionError("flaky"),
            SubmitResult(delivered=True),
        ]

        with pytest.raises(NoteSubmissionError):
            await controller.submit()
        result = await controller.submit()

        assert result.delivered is True
        assert transport.submit_note.await_count == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   \n"])
    async def test_empty_text_is_rejected_before_transport(self, text: str) -> None:
        controller, transport = _controller()
        controller.note.text = text

        with pytest.raises(NoteSubmissionError):
            await controller.submit()

        transport.submit_note.assert_not_called()
        assert controller.processing is False


class TestCoursesNavController:
    def test_action_navigates_to_notes_types(self) -> None:
        navigator = MagicMock()
        controller = CoursesNavControllerFactory(navigator=navigator, scope_key=5).create()
        course = {"id": 5, "fullname": "Physics"}

        controller.action(course)

        navigator.go.assert_called_once_with(NOTES_TYPES_STATE, {"course": course})

    def test_labels(self) -> None:
        controller = CoursesNavControllerFactory(navigator=MagicMock(), scope_key=5).create()
        assert controller.icon == "ion-ios-list"
        assert controller.css_class == "mma-notes-view-handler"
