"""Object storage HTTP client for recipe images.

Talks to a Supabase-storage compatible API:

- upload: ``POST {url}/storage/v1/object/{bucket}/{key}``
- delete: ``DELETE {url}/storage/v1/object/{bucket}/{key}``
- public: ``{url}/storage/v1/object/public/{bucket}/{key}``

Objects are keyed ``{user_id}/{unix_millis}.{extension}``.
"""

from __future__ import annotations

import mimetypes
import time
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

import httpx
import orjson
from pydantic import BaseModel

from recipe_rebel.core.config import get_settings
from recipe_rebel.observability.logging import get_logger
from recipe_rebel.storage.exceptions import (
    InvalidImageError,
    StorageUnavailableError,
    StorageUploadError,
)


if TYPE_CHECKING:
    from uuid import UUID


logger = get_logger(__name__)

DEFAULT_EXTENSION = "bin"


class ImageUpload(BaseModel):
    """An image file received with a recipe form."""

    filename: str | None = None
    content_type: str | None = None
    data: bytes


class StoredImage(BaseModel):
    """Result of a successful upload."""

    key: str
    public_url: str


def image_extension(filename: str | None, content_type: str | None) -> str:
    """Pick the object extension from the file name, then the content type."""
    suffix = PurePosixPath(filename or "").suffix.lstrip(".").lower()
    if suffix:
        return suffix
    guessed = mimetypes.guess_extension(content_type or "")
    return guessed.lstrip(".") if guessed else DEFAULT_EXTENSION


def build_object_key(
    user_id: UUID | str,
    filename: str | None,
    content_type: str | None = None,
    *,
    now_ms: int | None = None,
) -> str:
    """Build the ``{user_id}/{unix_millis}.{extension}`` object key."""
    millis = now_ms if now_ms is not None else time.time_ns() // 1_000_000
    return f"{user_id}/{millis}.{image_extension(filename, content_type)}"


class ImageStorageClient:
    """HTTP client for the recipe image bucket.

    Example:
        ```python
        client = ImageStorageClient()
        await client.initialize()

        image = await client.upload_image(
            user_id=user_id,
            filename="pancakes.jpg",
            content_type="image/jpeg",
            data=payload,
        )

        await client.shutdown()
        ```
    """

    def __init__(self) -> None:
        """Initialize the client."""
        self._settings = get_settings()
        self._http_client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        """Storage API base URL without trailing slash."""
        return self._settings.storage.url.rstrip("/")

    @property
    def bucket(self) -> str:
        """Name of the image bucket."""
        return self._settings.storage.bucket

    async def initialize(self) -> None:
        """Initialize HTTP client."""
        service_key = self._settings.STORAGE_SERVICE_KEY
        headers = {"Accept": "application/json"}
        if service_key:
            headers["Authorization"] = f"Bearer {service_key}"
            headers["apikey"] = service_key
        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._settings.storage.timeout),
            headers=headers,
        )
        logger.info(
            "ImageStorageClient initialized",
            base_url=self.base_url,
            bucket=self.bucket,
        )

    async def shutdown(self) -> None:
        """Release resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("ImageStorageClient shutdown")

    def public_url(self, key: str) -> str:
        """Public URL of an object in the image bucket."""
        return f"{self._settings.storage_public_base_url}/{key}"

    def check_image(self, content_type: str | None, data: bytes) -> None:
        """Reject files that are not images or exceed the size limit.

        Raises:
            InvalidImageError: With a user-facing message.
        """
        if not content_type or not content_type.lower().startswith("image/"):
            msg = "Only image files can be uploaded"
            raise InvalidImageError(msg)
        if not data:
            msg = "Image file is empty"
            raise InvalidImageError(msg)
        max_bytes = self._settings.storage.max_image_bytes
        if len(data) > max_bytes:
            msg = f"Image must be smaller than {max_bytes // (1024 * 1024)} MB"
            raise InvalidImageError(msg)

    async def upload_image(
        self,
        *,
        user_id: UUID | str,
        filename: str | None,
        content_type: str | None,
        data: bytes,
    ) -> StoredImage:
        """Upload an image and return its key and public URL.

        Raises:
            InvalidImageError: If the file is not an acceptable image.
            StorageUnavailableError: If the storage API is unreachable.
            StorageUploadError: If the storage API rejects the upload.
        """
        if not self._http_client:
            msg = "Client not initialized. Call initialize() first."
            raise RuntimeError(msg)

        self.check_image(content_type, data)
        key = build_object_key(user_id, filename, content_type)
        url = f"{self.base_url}/storage/v1/object/{self.bucket}/{key}"

        logger.debug("Uploading recipe image", key=key, size=len(data))

        try:
            response = await self._http_client.post(
                url,
                content=data,
                headers={
                    "Content-Type": content_type or "application/octet-stream",
                    "Cache-Control": f"max-age={self._settings.storage.cache_control}",
                    "x-upsert": "false",
                },
            )
        except httpx.TimeoutException as e:
            logger.warning("Image upload timed out", key=key)
            msg = "Image upload timed out"
            raise StorageUnavailableError(msg) from e
        except httpx.RequestError as e:
            logger.warning("Failed to connect to storage", error=str(e))
            msg = f"Failed to connect to storage: {e}"
            raise StorageUnavailableError(msg) from e

        if response.is_success:
            logger.info("Recipe image uploaded", key=key)
            return StoredImage(key=key, public_url=self.public_url(key))

        self._handle_error_response(response)
        msg = f"Unexpected response: {response.status_code}"
        raise StorageUploadError(response.status_code, msg)

    async def delete_object(self, key: str) -> None:
        """Remove an object from the image bucket.

        Raises:
            StorageUnavailableError: If the storage API is unreachable.
            StorageUploadError: If the storage API refuses the deletion.
        """
        if not self._http_client:
            msg = "Client not initialized. Call initialize() first."
            raise RuntimeError(msg)

        url = f"{self.base_url}/storage/v1/object/{self.bucket}/{key}"
        try:
            response = await self._http_client.delete(url)
        except httpx.RequestError as e:
            msg = f"Failed to connect to storage: {e}"
            raise StorageUnavailableError(msg) from e

        if not response.is_success:
            self._handle_error_response(response)
        logger.info("Recipe image deleted", key=key)

    def _handle_error_response(self, response: httpx.Response) -> None:
        """Raise ``StorageUploadError`` with the storage API's message."""
        status_code = response.status_code
        try:
            body = orjson.loads(response.content)
            message = body.get("message") or body.get("error") or "Unknown error"
        except (orjson.JSONDecodeError, AttributeError):
            message = response.text or f"HTTP {status_code}"

        logger.warning(
            "Storage rejected image request",
            status_code=status_code,
            message=message,
        )
        raise StorageUploadError(status_code, str(message))
