"""Unit tests for AssistantClient."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import orjson
import pytest
import respx

from recipe_rebel.assistant import (
    AssistantClient,
    AssistantError,
    AssistantErrorKind,
    ChatMessage,
)
from recipe_rebel.schemas.enums import ChatRole


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


pytestmark = pytest.mark.unit

ASSISTANT_URL = "http://localhost:54321/functions/v1/ai-dietician"


@pytest.fixture
async def assistant_client() -> AsyncGenerator[AssistantClient]:
    """Create an initialized assistant client."""
    client = AssistantClient()
    await client.initialize()
    yield client
    await client.shutdown()


@pytest.fixture
def transcript() -> list[ChatMessage]:
    """A short conversation ending with a user turn."""
    return [
        ChatMessage(role=ChatRole.USER, content="Is oatmeal healthy?"),
        ChatMessage(role=ChatRole.ASSISTANT, content="Yes, it is rich in fibre."),
        ChatMessage(role=ChatRole.USER, content="What about with sugar?"),
    ]


class TestChat:
    """Tests for chat."""

    @respx.mock
    async def test_returns_reply_and_sends_whole_transcript(
        self,
        assistant_client: AssistantClient,
        transcript: list[ChatMessage],
    ) -> None:
        """Should post every message in order and return the reply text."""
        route = respx.post(ASSISTANT_URL).mock(
            return_value=httpx.Response(200, json={"response": "In moderation."})
        )

        reply = await assistant_client.chat(transcript)

        assert reply == "In moderation."
        body = orjson.loads(route.calls.last.request.content)
        assert body == {
            "messages": [
                {"role": "user", "content": "Is oatmeal healthy?"},
                {"role": "assistant", "content": "Yes, it is rich in fibre."},
                {"role": "user", "content": "What about with sugar?"},
            ]
        }

    @pytest.mark.parametrize(
        ("status_code", "kind"),
        [
            (429, AssistantErrorKind.RATE_LIMITED),
            (402, AssistantErrorKind.QUOTA_EXCEEDED),
            (500, AssistantErrorKind.UNKNOWN),
            (400, AssistantErrorKind.UNKNOWN),
        ],
    )
    @respx.mock
    async def test_classifies_error_status(
        self,
        assistant_client: AssistantClient,
        transcript: list[ChatMessage],
        status_code: int,
        kind: AssistantErrorKind,
    ) -> None:
        """Should map the upstream status to an error kind."""
        respx.post(ASSISTANT_URL).mock(
            return_value=httpx.Response(status_code, json={"error": "nope"})
        )

        with pytest.raises(AssistantError) as exc_info:
            await assistant_client.chat(transcript)

        assert exc_info.value.kind is kind
        assert exc_info.value.status_code == status_code
        assert exc_info.value.detail == "nope"

    @respx.mock
    async def test_error_field_in_success_body(
        self,
        assistant_client: AssistantClient,
        transcript: list[ChatMessage],
    ) -> None:
        """Should treat an ``error`` field as a failure."""
        respx.post(ASSISTANT_URL).mock(
            return_value=httpx.Response(200, json={"error": "model offline"})
        )

        with pytest.raises(AssistantError) as exc_info:
            await assistant_client.chat(transcript)

        assert exc_info.value.kind is AssistantErrorKind.UNKNOWN
        assert exc_info.value.detail == "model offline"

    @respx.mock
    async def test_empty_reply(
        self,
        assistant_client: AssistantClient,
        transcript: list[ChatMessage],
    ) -> None:
        """Should treat an empty reply as a failure."""
        respx.post(ASSISTANT_URL).mock(
            return_value=httpx.Response(200, json={"response": ""})
        )

        with pytest.raises(AssistantError) as exc_info:
            await assistant_client.chat(transcript)

        assert exc_info.value.kind is AssistantErrorKind.UNKNOWN

    @respx.mock
    async def test_unreadable_body(
        self,
        assistant_client: AssistantClient,
        transcript: list[ChatMessage],
    ) -> None:
        """Should treat a non-JSON body as a failure."""
        respx.post(ASSISTANT_URL).mock(return_value=httpx.Response(200, text="<html>"))

        with pytest.raises(AssistantError) as exc_info:
            await assistant_client.chat(transcript)

        assert exc_info.value.kind is AssistantErrorKind.UNKNOWN

    @respx.mock
    async def test_connection_error_is_not_retried(
        self,
        assistant_client: AssistantClient,
        transcript: list[ChatMessage],
    ) -> None:
        """Should fail after a single attempt."""
        route = respx.post(ASSISTANT_URL).mock(
            side_effect=httpx.ConnectError("refused")
        )

        with pytest.raises(AssistantError) as exc_info:
            await assistant_client.chat(transcript)

        assert exc_info.value.kind is AssistantErrorKind.UNKNOWN
        assert route.call_count == 1


class TestAssistantError:
    """Tests for AssistantError user messages."""

    @pytest.mark.parametrize(
        ("kind", "fragment"),
        [
            (AssistantErrorKind.RATE_LIMITED, "Too many requests"),
            (AssistantErrorKind.QUOTA_EXCEEDED, "credits"),
            (AssistantErrorKind.UNKNOWN, "Failed to get a response"),
        ],
    )
    def test_user_message(self, kind: AssistantErrorKind, fragment: str) -> None:
        """Should expose a short message per kind."""
        assert fragment in AssistantError(kind).user_message

    def test_from_status_without_status(self) -> None:
        """Should classify a missing status as unknown."""
        assert AssistantErrorKind.from_status(None) is AssistantErrorKind.UNKNOWN
