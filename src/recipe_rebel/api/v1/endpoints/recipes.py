"""Recipe endpoints.

Provides:
- GET /recipes for browsing approved recipes (search + meal type filter)
- GET /recipes/mine for the caller's own recipes in every status
- POST /recipes for submitting a recipe (multipart form, optional image)
- GET /recipes/{recipeId} for the recipe page
- PUT /recipes/{recipeId} for editing (author or admin)
- DELETE /recipes/{recipeId} for deleting (author or admin)
"""

from __future__ import annotations

from typing import Annotated, Any, NoReturn
from uuid import UUID

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Path,
    Query,
    UploadFile,
    status,
)
from starlette.responses import Response

from recipe_rebel.api.dependencies import get_recipe_service
from recipe_rebel.auth.dependencies import AuthenticatedUser, OptionalUser
from recipe_rebel.core.config import get_settings
from recipe_rebel.observability.logging import get_logger
from recipe_rebel.schemas import (
    MealType,
    RecipeDetailResponse,
    RecipeListResponse,
    RecipeResponse,
)
from recipe_rebel.services.recipes import (
    RecipeAccessDeniedError,
    RecipeNotFoundError,
    RecipeService,
)
from recipe_rebel.storage import (
    ImageUpload,
    InvalidImageError,
    StorageError,
)


logger = get_logger(__name__)

router = APIRouter(tags=["Recipes"])

_settings = get_settings()

RecipeId = Annotated[UUID, Path(alias="recipeId", description="Recipe identifier")]
Service = Annotated[RecipeService, Depends(get_recipe_service)]

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {"description": "Authentication required"},
    403: {
        "description": "Caller is neither the author nor an administrator",
        "content": {
            "application/json": {
                "example": {
                    "error": "FORBIDDEN",
                    "message": "Only the author or an administrator can change this recipe",
                }
            }
        },
    },
    404: {"description": "Recipe not found or not visible to the caller"},
    422: {
        "description": "Form validation error",
        "content": {
            "application/json": {
                "example": {
                    "error": "VALIDATION_ERROR",
                    "message": "Title must be at least 3 characters",
                }
            }
        },
    },
    502: {
        "description": "Image upload failed; nothing was stored",
        "content": {
            "application/json": {
                "example": {
                    "error": "IMAGE_UPLOAD_FAILED",
                    "message": "Failed to upload the recipe image",
                }
            }
        },
    },
}


def _entries_field(values: list[str] | None) -> list[str] | str | None:
    # A lone field is the newline separated textarea
    if values is not None and len(values) == 1:
        return values[0]
    return values


def recipe_form_fields(
    title: Annotated[str | None, Form()] = None,
    ingredients: Annotated[list[str] | None, Form()] = None,
    steps: Annotated[list[str] | None, Form()] = None,
    preparation_time: Annotated[str | None, Form(alias="preparationTime")] = None,
    meal_type: Annotated[str | None, Form(alias="mealType")] = None,
    calories: Annotated[str | None, Form()] = None,
    protein: Annotated[str | None, Form()] = None,
    carbs: Annotated[str | None, Form()] = None,
    fat: Annotated[str | None, Form()] = None,
) -> dict[str, Any]:
    """Collect the raw recipe form.

    Values are left untyped here so that the recipe validator reports the
    first broken rule with its own message. ``ingredients`` and ``steps``
    accept either repeated fields or one newline separated text each.
    """
    return {
        "title": title,
        "ingredients": _entries_field(ingredients),
        "steps": _entries_field(steps),
        "preparation_time": preparation_time,
        "meal_type": meal_type,
        "calories": calories,
        "protein": protein,
        "carbs": carbs,
        "fat": fat,
    }


RecipeFormFields = Annotated[dict[str, Any], Depends(recipe_form_fields)]


async def _read_image(image: UploadFile | None) -> ImageUpload | None:
    # Browsers send an empty, unnamed part when no file was chosen
    if image is None or not image.filename:
        return None
    data = await image.read()
    return ImageUpload(
        filename=image.filename,
        content_type=image.content_type,
        data=data,
    )


def _raise_recipe_error(e: Exception) -> NoReturn:
    """Translate service and storage errors into HTTP errors."""
    if isinstance(e, RecipeNotFoundError):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "NOT_FOUND", "message": str(e)},
        ) from None
    if isinstance(e, RecipeAccessDeniedError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "FORBIDDEN", "message": str(e)},
        ) from None
    if isinstance(e, InvalidImageError):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"error": "VALIDATION_ERROR", "message": str(e)},
        ) from None
    if isinstance(e, StorageError):
        logger.warning("Recipe image upload failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "error": "IMAGE_UPLOAD_FAILED",
                "message": "Failed to upload the recipe image",
            },
        ) from None
    raise e


@router.get(
    "/recipes",
    response_model=RecipeListResponse,
    summary="Browse approved recipes",
    description=(
        "Lists approved recipes, newest first. ``q`` matches the title or any "
        "ingredient (case-insensitive substring); ``mealType`` narrows the "
        "list to one meal category."
    ),
)
async def list_recipes(
    service: Service,
    q: Annotated[str | None, Query(max_length=200, description="Search text")] = None,
    meal_type: Annotated[MealType | None, Query(alias="mealType")] = None,
    limit: Annotated[
        int, Query(ge=1, le=_settings.api.max_page_size, description="Page size")
    ] = _settings.api.default_page_size,
    offset: Annotated[int, Query(ge=0, description="Rows to skip")] = 0,
) -> RecipeListResponse:
    """Browse the public catalogue."""
    recipes = await service.list_public(
        query=q,
        meal_type=meal_type,
        limit=limit,
        offset=offset,
    )
    return RecipeListResponse.from_records(recipes, limit=limit, offset=offset)


@router.get(
    "/recipes/mine",
    response_model=RecipeListResponse,
    summary="List my recipes",
    description="The caller's own recipes in every moderation status, newest first.",
    responses={401: {"description": "Authentication required"}},
)
async def list_my_recipes(
    user: AuthenticatedUser,
    service: Service,
) -> RecipeListResponse:
    """Dashboard listing of the caller's submissions."""
    return RecipeListResponse.from_records(await service.list_mine(user))


@router.post(
    "/recipes",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a recipe",
    description=(
        "Submits a recipe for moderation. The form is validated first; the "
        "optional image is uploaded next and the recipe is stored last, always "
        "with status ``pending``."
    ),
    responses=_ERROR_RESPONSES,
)
async def submit_recipe(
    user: AuthenticatedUser,
    service: Service,
    form: RecipeFormFields,
    image: Annotated[UploadFile | None, File(description="Recipe photo")] = None,
) -> RecipeResponse:
    """Create a pending recipe authored by the caller."""
    try:
        recipe = await service.submit(user, form, await _read_image(image))
    except StorageError as e:
        _raise_recipe_error(e)
    return RecipeResponse.from_record(recipe)


@router.get(
    "/recipes/{recipeId}",
    response_model=RecipeDetailResponse,
    summary="Get a recipe",
    description=(
        "Returns the recipe with its comments (newest first). Approved recipes "
        "are public; others are visible only to their author and to admins. "
        "Signed-in callers also get their own rating and favorite flag."
    ),
    responses={404: {"description": "Recipe not found or not visible"}},
)
async def get_recipe(
    recipe_id: RecipeId,
    viewer: OptionalUser,
    service: Service,
) -> RecipeDetailResponse:
    """Recipe page."""
    try:
        detail = await service.get_detail(recipe_id, viewer)
    except RecipeNotFoundError as e:
        _raise_recipe_error(e)
    return RecipeDetailResponse.from_detail(detail)


@router.put(
    "/recipes/{recipeId}",
    response_model=RecipeResponse,
    summary="Edit a recipe",
    description=(
        "Replaces the recipe fields (multipart form, same rules as submission). "
        "A new image replaces the old one; without one the old image is kept."
    ),
    responses=_ERROR_RESPONSES,
)
async def update_recipe(
    recipe_id: RecipeId,
    user: AuthenticatedUser,
    service: Service,
    form: RecipeFormFields,
    image: Annotated[UploadFile | None, File(description="Replacement photo")] = None,
) -> RecipeResponse:
    """Edit a recipe as its author or an administrator."""
    try:
        recipe = await service.update(user, recipe_id, form, await _read_image(image))
    except (RecipeNotFoundError, RecipeAccessDeniedError, StorageError) as e:
        _raise_recipe_error(e)
    return RecipeResponse.from_record(recipe)


@router.delete(
    "/recipes/{recipeId}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a recipe",
    description="Deletes the recipe with its ratings, comments and favorites.",
    responses={
        401: {"description": "Authentication required"},
        403: _ERROR_RESPONSES[403],
        404: {"description": "Recipe not found or not visible"},
    },
)
async def delete_recipe(
    recipe_id: RecipeId,
    user: AuthenticatedUser,
    service: Service,
) -> Response:
    """Delete a recipe as its author or an administrator."""
    try:
        await service.delete(user, recipe_id)
    except (RecipeNotFoundError, RecipeAccessDeniedError) as e:
        _raise_recipe_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
