"""HTTP client for the remote AI dietician function.

Each user turn forwards the full transcript and returns the generated
reply. Failures are never retried; they are raised as ``AssistantError``
carrying a structured kind.
"""

from __future__ import annotations

import httpx
import orjson
from pydantic import ValidationError

from recipe_rebel.assistant.exceptions import AssistantError, AssistantErrorKind
from recipe_rebel.assistant.models import AssistantReply, AssistantRequest, ChatMessage
from recipe_rebel.core.config import get_settings
from recipe_rebel.observability.logging import get_logger


logger = get_logger(__name__)


class AssistantClient:
    """Async client for the AI dietician.

    Example:
        ```python
        client = AssistantClient()
        await client.initialize()

        reply = await client.chat([ChatMessage(role="user", content="Is oatmeal healthy?")])

        await client.shutdown()
        ```
    """

    def __init__(self) -> None:
        """Initialize the client."""
        self._settings = get_settings()
        self._http_client: httpx.AsyncClient | None = None

    @property
    def url(self) -> str:
        """Endpoint of the AI dietician function."""
        return self._settings.assistant.url

    async def initialize(self) -> None:
        """Initialize HTTP client."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        api_key = self._settings.ASSISTANT_API_KEY
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
            headers["apikey"] = api_key
        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._settings.assistant.timeout),
            headers=headers,
        )
        logger.info("AssistantClient initialized", url=self.url)

    async def shutdown(self) -> None:
        """Release resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("AssistantClient shutdown")

    async def chat(self, messages: list[ChatMessage]) -> str:
        """Send the transcript and return the assistant's reply.

        Args:
            messages: The full visible transcript, oldest first, ending with
                the user's latest message.

        Returns:
            The reply text to append to the transcript.

        Raises:
            AssistantError: ``RATE_LIMITED`` on 429, ``QUOTA_EXCEEDED`` on
                402, ``UNKNOWN`` for anything else.
        """
        if not self._http_client:
            msg = "Client not initialized. Call initialize() first."
            raise RuntimeError(msg)

        payload = orjson.dumps(AssistantRequest(messages=messages).model_dump(mode="json"))

        logger.debug("Sending transcript to assistant", message_count=len(messages))

        try:
            response = await self._http_client.post(self.url, content=payload)
        except httpx.TimeoutException as e:
            logger.warning("Assistant request timed out")
            raise AssistantError(
                AssistantErrorKind.UNKNOWN, "Assistant request timed out"
            ) from e
        except httpx.RequestError as e:
            logger.warning("Failed to connect to assistant", error=str(e))
            raise AssistantError(
                AssistantErrorKind.UNKNOWN, f"Failed to connect to assistant: {e}"
            ) from e

        if not response.is_success:
            self._handle_error_response(response)

        try:
            reply = AssistantReply.model_validate(orjson.loads(response.content))
        except (orjson.JSONDecodeError, ValidationError) as e:
            logger.warning("Assistant returned an unreadable body")
            raise AssistantError(
                AssistantErrorKind.UNKNOWN,
                "Assistant returned an unreadable body",
                status_code=response.status_code,
            ) from e

        if reply.error or not reply.response:
            logger.warning("Assistant returned no reply", error=reply.error)
            raise AssistantError(
                AssistantErrorKind.UNKNOWN,
                reply.error or "Assistant returned an empty reply",
                status_code=response.status_code,
            )

        logger.info("Assistant replied", reply_chars=len(reply.response))
        return reply.response

    def _handle_error_response(self, response: httpx.Response) -> None:
        """Raise ``AssistantError`` classified by the response status."""
        status_code = response.status_code
        try:
            body = orjson.loads(response.content)
            detail = body.get("error") or body.get("message")
        except (orjson.JSONDecodeError, AttributeError):
            detail = response.text or None

        kind = AssistantErrorKind.from_status(status_code)
        logger.warning(
            "Assistant returned error",
            status_code=status_code,
            kind=kind.value,
            detail=detail,
        )
        raise AssistantError(
            kind,
            str(detail) if detail else None,
            status_code=status_code,
        )
