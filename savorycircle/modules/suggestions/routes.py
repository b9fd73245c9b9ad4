from fastapi import APIRouter, Depends
from savorycircle.modules.foods.service import FoodService
from savorycircle.modules.suggestions.schemas import (
    RecipeSuggestionRequest, RecipeSuggestion, MealSuggestionRequest, MealSuggestionResponse
)
from savorycircle.modules.suggestions.service import SuggestionService
from savorycircle.core.dependencies import get_current_user_id, get_user_supabase
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/suggestions", tags=["suggestions"])


def get_suggestion_service() -> SuggestionService:
    return SuggestionService()


@router.post("/recipes", response_model=List[RecipeSuggestion])
async def recipe_suggestions(
    request_data: RecipeSuggestionRequest,
    user_data: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_user_supabase),
    service: SuggestionService = Depends(get_suggestion_service)
):
    """Suggest recipes from the given foods, or from the caller's favorites when none are given"""
    favorite_foods = request_data.favorite_foods
    if not favorite_foods:
        favorite_foods = [food.name for food in FoodService(supabase).list_foods(user_data["id"])]
    return await service.recipe_suggestions(favorite_foods, request_data.count)


@router.post("/meals", response_model=MealSuggestionResponse)
async def meal_suggestions(
    request_data: MealSuggestionRequest,
    user_data: Dict = Depends(get_current_user_id),
    service: SuggestionService = Depends(get_suggestion_service)
):
    return await service.meal_suggestions(request_data.prompt)
