"""
Ingredient module data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class Ingredient(BaseModel):
    """A row of the ingredients table."""

    model_config = {"extra": "ignore"}

    id: str
    restaurant_id: str
    name: str
    unit: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateIngredientRequest(BaseModel):
    name: Optional[str] = None
    unit: Optional[str] = None
    category: Optional[str] = None


class UpdateIngredientRequest(BaseModel):
    name: Optional[str] = None
    unit: Optional[str] = None
    category: Optional[str] = None


class IngredientImage(BaseModel):
    """Result of an image upload."""

    image: str
    full_url: str
