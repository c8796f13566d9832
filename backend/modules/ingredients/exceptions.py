"""
Ingredient module exceptions.
"""

from shared.exceptions import NotFoundError, ValidationError


class IngredientNotFoundError(NotFoundError):
    def __init__(self, ingredient_id: str):
        super().__init__(
            "Ingredient not found",
            code="INGREDIENT_NOT_FOUND",
            details={"ingredient_id": ingredient_id},
        )


class IngredientHasNoImageError(ValidationError):
    def __init__(self, ingredient_id: str):
        super().__init__(
            "Ingredient has no image",
            code="NO_IMAGE",
            details={"ingredient_id": ingredient_id},
        )
