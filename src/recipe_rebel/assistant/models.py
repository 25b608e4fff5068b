"""AI dietician request/response models."""

from __future__ import annotations

from pydantic import Field

from recipe_rebel.schemas.base import DownstreamRequest, DownstreamResponse
from recipe_rebel.schemas.enums import ChatRole


class ChatMessage(DownstreamRequest):
    """One message of the visible transcript."""

    role: ChatRole
    content: str = Field(..., min_length=1)


class AssistantRequest(DownstreamRequest):
    """Body sent to the AI dietician function: the whole transcript so far."""

    messages: list[ChatMessage]


class AssistantReply(DownstreamResponse):
    """Body returned by the AI dietician function."""

    response: str | None = None
    error: str | None = None
