"""
Ingredient service implementation.
"""

import logging
from typing import Optional

from modules.restaurants.exceptions import RestaurantRequiredError
from providers.base import ImageStorage
from shared.config import Settings, get_settings
from shared.exceptions import ValidationError
from shared.models import AuthenticatedUser
from shared.uploads import IMAGE_TYPES, UploadedFile, upload_errors

from .exceptions import IngredientHasNoImageError, IngredientNotFoundError
from .interfaces import IIngredientService
from .models import (
    CreateIngredientRequest,
    Ingredient,
    IngredientImage,
    UpdateIngredientRequest,
)
from .repository import IngredientRepository

logger = logging.getLogger(__name__)

IMAGES_FOLDER = "ingredients"


def _restaurant_of(caller: AuthenticatedUser) -> str:
    if not caller.restaurant_id:
        raise RestaurantRequiredError()
    return caller.restaurant_id


class IngredientService(IIngredientService):
    def __init__(
        self,
        repository: IngredientRepository,
        storage: ImageStorage,
        settings: Optional[Settings] = None,
    ):
        self._ingredients = repository
        self._storage = storage
        self._settings = settings or get_settings()

    async def _discard_image(self, url: str) -> None:
        """Delete a stored image; failures are logged, never raised."""
        try:
            await self._storage.delete(url)
        except Exception as e:
            logger.warning(f"Failed to delete image {url}: {e}")

    async def create_ingredient(
        self,
        caller: AuthenticatedUser,
        request: CreateIngredientRequest,
    ) -> Ingredient:
        restaurant_id = _restaurant_of(caller)
        if not request.name or not request.name.strip():
            raise ValidationError(errors=["Name is required"], code="VALIDATION_FAILED")

        return self._ingredients.create({
            "restaurant_id": restaurant_id,
            "name": request.name.strip(),
            "unit": request.unit,
            "category": request.category,
            "created_by": caller.id,
        })

    async def list_ingredients(self, caller: AuthenticatedUser) -> list[Ingredient]:
        return self._ingredients.list_for_restaurant(_restaurant_of(caller))

    async def get_ingredient(self, caller: AuthenticatedUser, ingredient_id: str) -> Ingredient:
        ingredient = self._ingredients.get(_restaurant_of(caller), ingredient_id)
        if ingredient is None:
            raise IngredientNotFoundError(ingredient_id)
        return ingredient

    async def update_ingredient(
        self,
        caller: AuthenticatedUser,
        ingredient_id: str,
        request: UpdateIngredientRequest,
    ) -> Ingredient:
        changes = request.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in changes:
            changes["name"] = changes["name"].strip()
            if not changes["name"]:
                raise ValidationError(errors=["Name cannot be empty"], code="VALIDATION_FAILED")

        current = await self.get_ingredient(caller, ingredient_id)
        if not changes:
            return current

        updated = self._ingredients.update(current.restaurant_id, ingredient_id, changes)
        if updated is None:
            raise IngredientNotFoundError(ingredient_id)
        return updated

    async def delete_ingredient(self, caller: AuthenticatedUser, ingredient_id: str) -> None:
        ingredient = await self.get_ingredient(caller, ingredient_id)
        self._ingredients.delete(ingredient.restaurant_id, ingredient_id)
        if ingredient.image:
            await self._discard_image(ingredient.image)
        logger.info(f"Ingredient {ingredient_id} deleted by {caller.id}")

    async def upload_image(
        self,
        caller: AuthenticatedUser,
        ingredient_id: str,
        upload: Optional[UploadedFile],
        base_url: str,
    ) -> IngredientImage:
        if upload is None:
            raise ValidationError(errors=["Please upload an image file"], code="VALIDATION_FAILED")
        errors = upload_errors(
            upload, IMAGE_TYPES, self._settings.max_image_size_bytes, label="image"
        )
        if errors:
            raise ValidationError(errors=errors, code="VALIDATION_FAILED")

        ingredient = await self.get_ingredient(caller, ingredient_id)
        stored = await self._storage.upload(
            upload.content, upload.filename, upload.content_type, IMAGES_FOLDER
        )

        try:
            self._ingredients.update(ingredient.restaurant_id, ingredient_id, {"image": stored.url})
        except Exception:
            await self._discard_image(stored.url)
            raise
        if ingredient.image:
            await self._discard_image(ingredient.image)

        full_url = stored.url
        if stored.url.startswith("/"):
            full_url = f"{base_url.rstrip('/')}{stored.url}"
        return IngredientImage(image=stored.url, full_url=full_url)

    async def delete_image(self, caller: AuthenticatedUser, ingredient_id: str) -> Ingredient:
        ingredient = await self.get_ingredient(caller, ingredient_id)
        if not ingredient.image:
            raise IngredientHasNoImageError(ingredient_id)

        await self._discard_image(ingredient.image)
        updated = self._ingredients.update(ingredient.restaurant_id, ingredient_id, {"image": None})
        return updated or ingredient.model_copy(update={"image": None})
