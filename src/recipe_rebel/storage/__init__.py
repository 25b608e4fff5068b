"""Recipe image object storage."""

from recipe_rebel.storage.client import (
    ImageStorageClient,
    ImageUpload,
    StoredImage,
    build_object_key,
    image_extension,
)
from recipe_rebel.storage.exceptions import (
    InvalidImageError,
    StorageError,
    StorageUnavailableError,
    StorageUploadError,
)


__all__ = [
    "ImageStorageClient",
    "ImageUpload",
    "InvalidImageError",
    "StorageError",
    "StorageUnavailableError",
    "StorageUploadError",
    "StoredImage",
    "build_object_key",
    "image_extension",
]
