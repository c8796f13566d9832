"""
Ingredients module.

Per-restaurant ingredient catalog with image upload.
"""

from .interfaces import IIngredientService
from .models import Ingredient, IngredientImage
from .exceptions import IngredientHasNoImageError, IngredientNotFoundError

__all__ = [
    "IIngredientService",
    "Ingredient",
    "IngredientImage",
    "IngredientHasNoImageError",
    "IngredientNotFoundError",
]
