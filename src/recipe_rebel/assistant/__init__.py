"""Bridge to the remote AI dietician."""

from recipe_rebel.assistant.client import AssistantClient
from recipe_rebel.assistant.exceptions import AssistantError, AssistantErrorKind
from recipe_rebel.assistant.models import AssistantReply, AssistantRequest, ChatMessage


__all__ = [
    "AssistantClient",
    "AssistantError",
    "AssistantErrorKind",
    "AssistantReply",
    "AssistantRequest",
    "ChatMessage",
]
