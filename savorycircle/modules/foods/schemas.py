from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal, Union
from datetime import datetime
from savorycircle.core.recipe_text import normalize_instructions, split_ingredients

MealType = Literal["breakfast", "lunch", "dinner", "snack"]
Visibility = Literal["public", "private"]


class FoodCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    ingredients: Union[List[str], str] = []
    recipe: Union[List[str], str, None] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    meal_types: List[MealType] = []
    visibility: Visibility = "private"
    image_url: Optional[str] = None


class FoodUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    ingredients: Union[List[str], str, None] = None
    recipe: Union[List[str], str, None] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    meal_types: Optional[List[MealType]] = None
    visibility: Optional[Visibility] = None
    image_url: Optional[str] = None


class FoodResponse(BaseModel):
    id: str
    user_id: str
    name: str
    ingredients: List[str] = []
    recipe: List[str] = []
    rating: Optional[int] = None
    meal_types: List[str] = []
    visibility: str = "private"
    image_url: Optional[str] = None
    created_at: datetime

    @field_validator("ingredients", mode="before")
    @classmethod
    def _split_ingredients(cls, value):
        return split_ingredients(value)

    @field_validator("recipe", mode="before")
    @classmethod
    def _normalize_recipe(cls, value):
        return normalize_instructions(value)

    @field_validator("meal_types", mode="before")
    @classmethod
    def _meal_types(cls, value):
        return value or []

    @field_validator("visibility", mode="before")
    @classmethod
    def _visibility(cls, value):
        return value or "private"

    class Config:
        from_attributes = True
