"""
Ingredient module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from shared.uploads import UploadedFile

from .models import (
    CreateIngredientRequest,
    Ingredient,
    IngredientImage,
    UpdateIngredientRequest,
)


@runtime_checkable
class IIngredientService(Protocol):
    """Tenant-scoped ingredient catalog. Every call acts on the caller's restaurant."""

    async def create_ingredient(
        self,
        caller: AuthenticatedUser,
        request: CreateIngredientRequest,
    ) -> Ingredient:
        ...

    async def list_ingredients(self, caller: AuthenticatedUser) -> list[Ingredient]:
        ...

    async def get_ingredient(self, caller: AuthenticatedUser, ingredient_id: str) -> Ingredient:
        """
        Raises:
            IngredientNotFoundError: Missing, or owned by another restaurant
        """
        ...

    async def update_ingredient(
        self,
        caller: AuthenticatedUser,
        ingredient_id: str,
        request: UpdateIngredientRequest,
    ) -> Ingredient:
        ...

    async def delete_ingredient(self, caller: AuthenticatedUser, ingredient_id: str) -> None:
        ...

    async def upload_image(
        self,
        caller: AuthenticatedUser,
        ingredient_id: str,
        upload: Optional[UploadedFile],
        base_url: str,
    ) -> IngredientImage:
        """Store a new image, replacing (and deleting) the previous one."""
        ...

    async def delete_image(self, caller: AuthenticatedUser, ingredient_id: str) -> Ingredient:
        ...
