"""AI assistant chat endpoint.

Provides:
- POST /assistant/chat to forward the visible transcript to the AI dietician

Upstream failures are classified (rate limited, quota exceeded, unknown) and
answered with 429, 402 and 502 respectively; nothing is retried.
"""

# Annotations stay evaluated here: SlowAPI wraps the endpoint and FastAPI
# resolves string annotations against the wrapper's module.
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from recipe_rebel.api.dependencies import get_assistant_client
from recipe_rebel.assistant import (
    AssistantClient,
    AssistantError,
    AssistantErrorKind,
    ChatMessage,
)
from recipe_rebel.auth.dependencies import AuthenticatedUser
from recipe_rebel.cache.rate_limit import rate_limit_assistant
from recipe_rebel.observability.logging import get_logger
from recipe_rebel.schemas import ChatRequest, ChatResponse


logger = get_logger(__name__)

router = APIRouter(prefix="/assistant", tags=["Assistant"])

_STATUS_BY_KIND = {
    AssistantErrorKind.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    AssistantErrorKind.QUOTA_EXCEEDED: status.HTTP_402_PAYMENT_REQUIRED,
    AssistantErrorKind.UNKNOWN: status.HTTP_502_BAD_GATEWAY,
}


@router.post(
    "/chat",
    response_model=ChatResponse,
    summary="Chat with the AI dietician",
    description=(
        "Sends the whole visible transcript (oldest first, ending with the "
        "user's message) and returns the assistant's reply."
    ),
    responses={
        401: {"description": "Authentication required"},
        402: {
            "description": "AI credits exhausted",
            "content": {
                "application/json": {
                    "example": {
                        "error": "QUOTA_EXCEEDED",
                        "message": "AI credits exhausted. Please try again later.",
                    }
                }
            },
        },
        429: {
            "description": "Rate limited by this service or by the assistant",
            "content": {
                "application/json": {
                    "example": {
                        "error": "RATE_LIMITED",
                        "message": "Too many requests. Please try again in a moment.",
                    }
                }
            },
        },
        502: {"description": "The assistant failed to reply"},
        503: {"description": "Assistant not configured"},
    },
)
@rate_limit_assistant()
async def chat(
    request: Request,
    response: Response,
    body: ChatRequest,
    user: AuthenticatedUser,
    client: Annotated[AssistantClient, Depends(get_assistant_client)],
) -> ChatResponse:
    """Forward the transcript and relay the reply."""
    messages = [ChatMessage(role=m.role, content=m.content) for m in body.messages]
    try:
        reply = await client.chat(messages)
    except AssistantError as e:
        logger.warning(
            "Assistant chat failed",
            kind=e.kind.value,
            upstream_status=e.status_code,
            user_id=str(user.id),
        )
        raise HTTPException(
            status_code=_STATUS_BY_KIND[e.kind],
            detail={"error": e.kind.name, "message": e.user_message},
        ) from None
    return ChatResponse(response=reply)
