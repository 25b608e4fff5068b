"""Recipe service: submission, editing, deletion and browsing.

Write paths validate the form before any I/O, upload the optional image
next, and only then touch the database. A failed upload therefore never
leaves a recipe behind, and a failed database write removes the uploaded
image again.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from recipe_rebel.core.config import get_settings
from recipe_rebel.database.repositories import (
    CommentRecord,
    CommentRepository,
    FavoriteRepository,
    RatingRepository,
    RecipeRecord,
    RecipeRepository,
)
from recipe_rebel.observability.logging import get_logger
from recipe_rebel.schemas.enums import RecipeStatus
from recipe_rebel.services.recipes.exceptions import (
    RecipeAccessDeniedError,
    RecipeNotFoundError,
)
from recipe_rebel.storage.exceptions import StorageError, StorageUnavailableError
from recipe_rebel.validation import validate_recipe_form


if TYPE_CHECKING:
    from collections.abc import Mapping
    from uuid import UUID

    from recipe_rebel.auth.dependencies import CurrentUser
    from recipe_rebel.schemas.enums import MealType
    from recipe_rebel.storage import ImageStorageClient, ImageUpload, StoredImage

logger = get_logger(__name__)


class RecipeDetail(BaseModel):
    """Everything the recipe page shows."""

    recipe: RecipeRecord
    comments: list[CommentRecord]
    user_rating: int | None = None
    is_favorite: bool = False


def is_visible_to(recipe: RecipeRecord, viewer: CurrentUser | None) -> bool:
    """Approved recipes are public; others only to their author and admins."""
    if recipe.status == RecipeStatus.APPROVED:
        return True
    return viewer is not None and viewer.can_manage(recipe.author_id)


class RecipeService:
    """Recipe lifecycle operations on behalf of a user."""

    def __init__(
        self,
        storage: ImageStorageClient | None = None,
        recipes: RecipeRepository | None = None,
        comments: CommentRepository | None = None,
        ratings: RatingRepository | None = None,
        favorites: FavoriteRepository | None = None,
        *,
        requeue_on_edit: bool | None = None,
    ) -> None:
        self._storage = storage
        self._recipes = recipes or RecipeRepository()
        self._comments = comments or CommentRepository()
        self._ratings = ratings or RatingRepository()
        self._favorites = favorites or FavoriteRepository()
        if requeue_on_edit is None:
            requeue_on_edit = get_settings().moderation.requeue_on_edit
        self._requeue_on_edit = requeue_on_edit

    async def _upload(
        self, user: CurrentUser, image: ImageUpload | None
    ) -> StoredImage | None:
        if image is None:
            return None
        if self._storage is None:
            msg = "Image storage is not available"
            raise StorageUnavailableError(msg)
        return await self._storage.upload_image(
            user_id=user.id,
            filename=image.filename,
            content_type=image.content_type,
            data=image.data,
        )

    async def _discard(self, stored: StoredImage | None) -> None:
        """Remove an uploaded image whose recipe write did not happen."""
        if stored is None or self._storage is None:
            return
        try:
            await self._storage.delete_object(stored.key)
        except StorageError as e:
            logger.warning(
                "Failed to remove orphaned recipe image", key=stored.key, error=str(e)
            )

    async def submit(
        self,
        user: CurrentUser,
        form_data: Mapping[str, Any],
        image: ImageUpload | None = None,
    ) -> RecipeRecord:
        """Create a recipe authored by ``user``; it always starts ``pending``.

        Raises:
            FormValidationError: If the form breaks a rule (nothing is uploaded).
            StorageError: If the image upload fails (nothing is stored).
        """
        form = validate_recipe_form(form_data)
        stored = await self._upload(user, image)
        image_url = stored.public_url if stored else None
        try:
            recipe = await self._recipes.create(user.id, form, image_url)
        except Exception:
            await self._discard(stored)
            raise
        logger.info(
            "Recipe submitted for review",
            recipe_id=str(recipe.id),
            has_image=image_url is not None,
        )
        return recipe

    async def _get_managed(self, user: CurrentUser, recipe_id: UUID) -> RecipeRecord:
        recipe = await self._recipes.get_by_id(recipe_id)
        if recipe is None or not is_visible_to(recipe, user):
            raise RecipeNotFoundError(recipe_id)
        if not user.can_manage(recipe.author_id):
            raise RecipeAccessDeniedError(recipe_id)
        return recipe

    async def update(
        self,
        user: CurrentUser,
        recipe_id: UUID,
        form_data: Mapping[str, Any],
        image: ImageUpload | None = None,
    ) -> RecipeRecord:
        """Edit a recipe as its author or an administrator.

        The moderation status is kept unless ``moderation.requeue_on_edit``
        is enabled, in which case an author's edit of an already reviewed
        recipe puts it back in the queue.

        Raises:
            FormValidationError: If the form breaks a rule.
            RecipeNotFoundError: If the recipe does not exist or is hidden.
            RecipeAccessDeniedError: If the user may not edit it.
            StorageError: If the replacement image upload fails.
        """
        form = validate_recipe_form(form_data)
        current = await self._get_managed(user, recipe_id)
        stored = await self._upload(user, image)
        image_url = stored.public_url if stored else None

        status: RecipeStatus | None = None
        if (
            self._requeue_on_edit
            and not user.is_admin
            and current.status != RecipeStatus.PENDING
        ):
            status = RecipeStatus.PENDING

        try:
            updated = await self._recipes.update(
                recipe_id, form, image_url=image_url, status=status
            )
        except Exception:
            await self._discard(stored)
            raise
        if updated is None:
            # Deleted between the ownership check and the update
            await self._discard(stored)
            raise RecipeNotFoundError(recipe_id)

        logger.info(
            "Recipe updated",
            recipe_id=str(recipe_id),
            by_admin=user.is_admin,
            requeued=status is not None,
        )
        return updated

    async def delete(self, user: CurrentUser, recipe_id: UUID) -> None:
        """Delete a recipe as its author or an administrator."""
        await self._get_managed(user, recipe_id)
        if not await self._recipes.delete(recipe_id):
            raise RecipeNotFoundError(recipe_id)
        logger.info("Recipe deleted", recipe_id=str(recipe_id), by_admin=user.is_admin)

    async def list_public(
        self,
        *,
        query: str | None = None,
        meal_type: MealType | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[RecipeRecord]:
        """Approved recipes, newest first, optionally searched and filtered."""
        search = query.strip() if query else None
        return await self._recipes.list_approved(
            query=search or None,
            meal_type=meal_type,
            limit=limit,
            offset=offset,
        )

    async def list_mine(self, user: CurrentUser) -> list[RecipeRecord]:
        """The user's own recipes in every status, newest first."""
        return await self._recipes.list_by_author(user.id)

    async def get_visible(
        self,
        recipe_id: UUID,
        viewer: CurrentUser | None,
    ) -> RecipeRecord:
        """Get a recipe the viewer is allowed to see.

        Raises:
            RecipeNotFoundError: If it does not exist or is hidden from the viewer.
        """
        recipe = await self._recipes.get_by_id(recipe_id)
        if recipe is None or not is_visible_to(recipe, viewer):
            raise RecipeNotFoundError(recipe_id)
        return recipe

    async def get_detail(
        self,
        recipe_id: UUID,
        viewer: CurrentUser | None,
    ) -> RecipeDetail:
        """Recipe with comments (newest first) and the viewer's rating and favorite flag."""
        recipe = await self.get_visible(recipe_id, viewer)
        comments = await self._comments.list_for_recipe(recipe_id)

        user_rating: int | None = None
        is_favorite = False
        if viewer is not None:
            user_rating = await self._ratings.get_user_rating(recipe_id, viewer.id)
            is_favorite = await self._favorites.exists(recipe_id, viewer.id)

        return RecipeDetail(
            recipe=recipe,
            comments=comments,
            user_rating=user_rating,
            is_favorite=is_favorite,
        )
