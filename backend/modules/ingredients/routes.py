"""
Ingredient API endpoints.

Mounted under /api/ingredients. Reads are open to any member of the
restaurant; writes need the restaurant admin role or the
manage_ingredients permission.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile

from api.dependencies import get_ingredient_service
from api.middleware.auth import get_current_user, require_permission
from api.models.responses import envelope
from api.uploads import read_upload
from shared.models import AuthenticatedUser, Permission

from .interfaces import IIngredientService
from .models import CreateIngredientRequest, UpdateIngredientRequest

router = APIRouter()

can_manage_ingredients = require_permission(Permission.MANAGE_INGREDIENTS)


@router.post("", status_code=201)
async def create_ingredient(
    body: CreateIngredientRequest,
    request: Request,
    user: AuthenticatedUser = Depends(can_manage_ingredients),
    service: IIngredientService = Depends(get_ingredient_service),
) -> dict:
    ingredient = await service.create_ingredient(user, body)
    return envelope(request, "Ingredient created", {"ingredient": ingredient}, key="ingredients.created")


@router.get("")
async def list_ingredients(
    request: Request,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IIngredientService = Depends(get_ingredient_service),
) -> dict:
    ingredients = await service.list_ingredients(user)
    return envelope(
        request,
        "Ingredients retrieved",
        {"ingredients": ingredients, "count": len(ingredients)},
    )


@router.get("/{ingredient_id}")
async def get_ingredient(
    ingredient_id: str,
    request: Request,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IIngredientService = Depends(get_ingredient_service),
) -> dict:
    ingredient = await service.get_ingredient(user, ingredient_id)
    return envelope(request, "Ingredient retrieved", {"ingredient": ingredient})


@router.patch("/{ingredient_id}")
async def update_ingredient(
    ingredient_id: str,
    body: UpdateIngredientRequest,
    request: Request,
    user: AuthenticatedUser = Depends(can_manage_ingredients),
    service: IIngredientService = Depends(get_ingredient_service),
) -> dict:
    ingredient = await service.update_ingredient(user, ingredient_id, body)
    return envelope(request, "Ingredient updated", {"ingredient": ingredient}, key="ingredients.updated")


@router.delete("/{ingredient_id}")
async def delete_ingredient(
    ingredient_id: str,
    request: Request,
    user: AuthenticatedUser = Depends(can_manage_ingredients),
    service: IIngredientService = Depends(get_ingredient_service),
) -> dict:
    await service.delete_ingredient(user, ingredient_id)
    return envelope(request, "Ingredient deleted", key="ingredients.deleted")


@router.post("/{ingredient_id}/image")
async def upload_ingredient_image(
    ingredient_id: str,
    request: Request,
    image: Optional[UploadFile] = File(None),
    user: AuthenticatedUser = Depends(can_manage_ingredients),
    service: IIngredientService = Depends(get_ingredient_service),
) -> dict:
    """
    Upload or replace an ingredient image.

    Accepts JPEG, PNG, GIF or WebP up to 5 MB.
    """
    upload = await read_upload("image", image, request.app.state.settings.max_image_size_bytes)
    result = await service.upload_image(user, ingredient_id, upload, str(request.base_url))
    return envelope(request, "Image uploaded successfully", result, key="ingredients.image_uploaded")


@router.delete("/{ingredient_id}/image")
async def delete_ingredient_image(
    ingredient_id: str,
    request: Request,
    user: AuthenticatedUser = Depends(can_manage_ingredients),
    service: IIngredientService = Depends(get_ingredient_service),
) -> dict:
    await service.delete_image(user, ingredient_id)
    return envelope(request, "Image deleted successfully", key="ingredients.image_deleted")
