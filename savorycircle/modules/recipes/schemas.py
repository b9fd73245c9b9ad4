from pydantic import BaseModel
from typing import List, Optional


class Nutrient(BaseModel):
    name: str
    amount: float
    unit: str


class Nutrition(BaseModel):
    nutrients: List[Nutrient]


class RecipeOfTheDayResponse(BaseModel):
    id: int
    title: str
    image: Optional[str] = None
    summary: str = ""
    readyInMinutes: Optional[int] = None
    servings: Optional[int] = None
    sourceUrl: Optional[str] = None
    ingredients: List[str] = []
    instructions: List[str] = []
    nutrition: Optional[Nutrition] = None

    class Config:
        extra = "allow"  # the full Spoonacular payload is passed through


class CronResponse(BaseModel):
    success: bool
