"""AI assistant chat schemas."""

from __future__ import annotations

from pydantic import Field, model_validator

from recipe_rebel.core.config import get_settings
from recipe_rebel.schemas.base import APIRequest, APIResponse
from recipe_rebel.schemas.enums import ChatRole


class ChatMessageIn(APIRequest):
    """One message of the client's visible transcript."""

    role: ChatRole
    content: str = Field(..., min_length=1)


class ChatRequest(APIRequest):
    """The whole visible transcript, oldest first, ending with the user's turn."""

    messages: list[ChatMessageIn] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _check_transcript(self) -> ChatRequest:
        limits = get_settings().assistant
        if len(self.messages) > limits.max_messages:
            msg = f"Conversation is limited to {limits.max_messages} messages"
            raise ValueError(msg)
        if any(len(m.content) > limits.max_message_chars for m in self.messages):
            msg = f"Messages are limited to {limits.max_message_chars} characters"
            raise ValueError(msg)
        if self.messages[-1].role != ChatRole.USER:
            msg = "The last message must come from the user"
            raise ValueError(msg)
        return self


class ChatResponse(APIResponse):
    """The assistant's reply, to be appended to the transcript."""

    response: str = Field(..., description="Assistant reply in markdown")
