"""Image storage exceptions.

These are caught by the service/endpoint layer and converted to HTTP
responses; an upload failure aborts the recipe write that needed it.
"""

from __future__ import annotations


class StorageError(Exception):
    """Base exception for image storage errors."""


class InvalidImageError(StorageError):
    """Raised when an uploaded file is not an acceptable image.

    Covers non-image content types, empty files and oversized files.
    """


class StorageUnavailableError(StorageError):
    """Raised when the storage API cannot be reached or times out."""


class StorageUploadError(StorageError):
    """Raised when the storage API rejects an upload."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(message)
