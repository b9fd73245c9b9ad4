from pydantic import BaseModel, Field
from typing import List, Optional, Union


class RecipeSuggestionRequest(BaseModel):
    favorite_foods: List[str] = []
    count: int = Field(default=1, ge=1, le=5)


class RecipeSuggestion(BaseModel):
    name: str
    ingredients: List[str] = []
    instructions: List[str] = []
    prepTime: Optional[str] = None
    cookTime: Optional[str] = None
    servings: Optional[Union[int, str]] = None


class MealSuggestionRequest(BaseModel):
    prompt: str = ""


class MealSuggestion(BaseModel):
    name: str
    description: str = ""
    ingredients: List[str] = []
    recipe: List[str] = []


class MealSuggestionResponse(BaseModel):
    suggestions: List[MealSuggestion]
    content: str
